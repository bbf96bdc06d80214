"""
Brightness analyser: the entry point presentation code calls.

Responsibilities:
  1. Accept a PixelBuffer (or raw bytes + geometry).
  2. Run the selected brightness strategy.
  3. Map the score to a blur category.
  4. Degrade to the default score / `regular` on anything degenerate, so a
     bad buffer costs a wrong guess rather than a crashed UI.
"""

from __future__ import annotations

import logging
from typing import Any

from backdrop.core.config import get_settings
from backdrop.core.errors import InvalidBufferError
from backdrop.schemas.analysis import BlurCategory, BrightnessAnalysis
from backdrop.services.classifier import FALLBACK_CATEGORY, category_for_score
from backdrop.services.strategies import BrightnessStrategy, get_strategy
from backdrop.utils.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def analyse_brightness(
    buffer: PixelBuffer | None,
    strategy: str | None = None,
) -> BrightnessAnalysis:
    """
    Score `buffer` and pick its blur category.
    Never raises for empty or missing buffers; an unknown `strategy`
    name does raise UnknownStrategyError.
    """
    return _analyse(buffer, _resolve_strategy(strategy))


def analyse_pixels(
    data: Any,
    width: int,
    height: int,
    row_stride: int | None = None,
    strategy: str | None = None,
) -> BrightnessAnalysis:
    """Convenience wrapper over raw RGBA / RGBX bytes."""
    scorer = _resolve_strategy(strategy)

    try:
        buffer = PixelBuffer(width=width, height=height, data=data, row_stride=row_stride)
    except InvalidBufferError as exc:
        logger.warning("Invalid pixel buffer [%s]: %s", exc.code, exc.message)
        return _fallback(scorer.name)
    return _analyse(buffer, scorer)


def get_blur_category(
    buffer: PixelBuffer | None,
    strategy: str | None = None,
) -> BlurCategory:
    return analyse_brightness(buffer, strategy).category


def _resolve_strategy(strategy: str | None) -> BrightnessStrategy:
    if strategy is None:
        strategy = get_settings().default_strategy
    return get_strategy(strategy)


def _analyse(buffer: PixelBuffer | None, scorer: BrightnessStrategy) -> BrightnessAnalysis:
    name = scorer.name
    if buffer is None or buffer.is_empty:
        logger.warning("No pixels to analyse; using default brightness")
        return _fallback(name)

    score, sample_count = scorer.measure(buffer)
    if score is None:
        logger.warning(
            "No pixels sampled from %dx%d buffer; using default brightness",
            buffer.width,
            buffer.height,
        )
        return _fallback(name)

    result = BrightnessAnalysis(
        score=score,
        category=category_for_score(score),
        strategy=name,
        sample_count=sample_count,
    )
    logger.debug(
        "Brightness %.4f -> %s",
        result.score,
        result.category.value,
        extra={"strategy": name, "sample_count": sample_count},
    )
    return result


def _fallback(strategy: str) -> BrightnessAnalysis:
    return BrightnessAnalysis(
        score=get_settings().default_brightness,
        category=FALLBACK_CATEGORY,
        strategy=strategy,
        sample_count=0,
        used_fallback=True,
    )
