"""
Central configuration loaded from environment variables.
All settings have sensible defaults so the analyser works out of the box
with no manual configuration.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ------------------------------------------------------------------ #
    # Sampling
    # The stride sampler visits roughly this many pixels at most,
    # whatever the image resolution.
    # ------------------------------------------------------------------ #
    max_sample_count: int = Field(default=10_000, gt=0)

    # HSB strategy downscales to at most this many pixels per axis
    # before scanning every pixel.
    hsb_max_dimension: int = Field(default=100, gt=0)

    # ------------------------------------------------------------------ #
    # Classification
    # ------------------------------------------------------------------ #
    default_brightness: float = 0.5          # used when nothing can be sampled
    default_strategy: Literal["luma", "hsb"] = "luma"

    # ------------------------------------------------------------------ #
    # Logging
    # ------------------------------------------------------------------ #
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = True          # structured JSON logs in production

    @field_validator("default_brightness")
    @classmethod
    def brightness_in_unit_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("default_brightness must lie within [0, 1].")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached Settings singleton.
    The cache is reset between tests via `get_settings.cache_clear()`.
    """
    return Settings()
