"""
Brightness strategies: interchangeable ways of scoring a PixelBuffer.

  - luma: stride-sample ~10k pixels and average NTSC luma.
  - hsb:  downscale to at most 100x100 (OpenCV INTER_AREA), then scan every
          pixel and average the HSV value channel, i.e. max(R, G, B).

Both feed the same blur bands, but their scores are computed differently and
can disagree near band edges; never mix scores across strategies.

Strategies are held in a module-level registry keyed by name so callers can
select one from configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import cv2
import numpy as np

from backdrop.core.config import get_settings
from backdrop.core.errors import UnknownStrategyError
from backdrop.services.classifier import clamp_unit, mean_luminance
from backdrop.services.sampler import PixelSampler
from backdrop.utils.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


class BrightnessStrategy(Protocol):
    name: str

    def measure(self, buffer: PixelBuffer) -> tuple[float | None, int]:
        """Return (score, pixels read); score is None when nothing was read."""
        ...


@dataclass
class LumaStrategy:
    name: str = "luma"
    max_samples: int | None = None

    def measure(self, buffer: PixelBuffer) -> tuple[float | None, int]:
        sampler = PixelSampler(self.max_samples)
        return mean_luminance(sampler.sample(buffer))


@dataclass
class HsbStrategy:
    name: str = "hsb"
    max_dimension: int | None = None

    def measure(self, buffer: PixelBuffer) -> tuple[float | None, int]:
        # OpenCV needs packed pixels; the buffer view skips the alpha byte.
        rgb = np.ascontiguousarray(buffer.as_rgb_array())
        if rgb.size == 0:
            return None, 0

        limit = self.max_dimension or get_settings().hsb_max_dimension
        height, width = rgb.shape[:2]
        target = (min(width, limit), min(height, limit))
        small = rgb
        if target != (width, height):
            small = cv2.resize(rgb, target, interpolation=cv2.INTER_AREA)

        hsv = cv2.cvtColor(small, cv2.COLOR_RGB2HSV)
        value = hsv[:, :, 2].astype(np.float64) / 255.0
        return clamp_unit(float(value.mean())), int(value.size)


# --------------------------------------------------------------------------- #
# Registry
# --------------------------------------------------------------------------- #

@dataclass
class StrategyRegistry:
    """Named brightness strategies available to the analyser."""

    strategies: dict[str, BrightnessStrategy] = field(default_factory=dict)

    def register(self, strategy: BrightnessStrategy) -> None:
        if strategy.name in self.strategies:
            logger.debug("Replacing brightness strategy '%s'", strategy.name)
        self.strategies[strategy.name] = strategy

    def get(self, name: str) -> BrightnessStrategy:
        try:
            return self.strategies[name]
        except KeyError:
            raise UnknownStrategyError(name, list(self.strategies)) from None

    def names(self) -> list[str]:
        return sorted(self.strategies)


_registry = StrategyRegistry()
_registry.register(LumaStrategy())
_registry.register(HsbStrategy())


def get_registry() -> StrategyRegistry:
    return _registry


def get_strategy(name: str) -> BrightnessStrategy:
    return _registry.get(name)
