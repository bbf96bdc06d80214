"""
Brightness scoring and blur-category selection.

Per-sample luminance uses the NTSC luma weights

    Y = 0.299 R + 0.587 G + 0.114 B

and the brightness score is the arithmetic mean of Y over all samples.
The score is then mapped to a blur tier through half-open bands:

    [0.0, 0.3)  -> ultra_thin   (dark background)
    [0.3, 0.7)  -> regular
    [0.7, 1.0]  -> thin         (light background)

Anything outside [0, 1] falls back to `regular`.
"""

from __future__ import annotations

import math
from typing import Iterable, NamedTuple

from backdrop.core.config import get_settings
from backdrop.schemas.analysis import BlurCategory
from backdrop.services.sampler import SampledColor

LUMA_RED = 0.299
LUMA_GREEN = 0.587
LUMA_BLUE = 0.114

# (lower, upper, category), checked in order. Upper bound is exclusive
# except for the last band, which closes at 1.0.
BLUR_BANDS: tuple[tuple[float, float, BlurCategory], ...] = (
    (0.0, 0.3, BlurCategory.ultra_thin),
    (0.3, 0.7, BlurCategory.regular),
    (0.7, 1.0, BlurCategory.thin),
)
FALLBACK_CATEGORY = BlurCategory.regular


class BrightnessClassification(NamedTuple):
    score: float
    category: BlurCategory


def luminance(color: SampledColor) -> float:
    return LUMA_RED * color.red + LUMA_GREEN * color.green + LUMA_BLUE * color.blue


def clamp_unit(value: float) -> float:
    return min(1.0, max(0.0, value))


def mean_luminance(samples: Iterable[SampledColor]) -> tuple[float | None, int]:
    """
    Mean luma over `samples` and the number of samples consumed.
    Returns (None, 0) for an empty sequence.
    """
    values = [luminance(color) for color in samples]
    if not values:
        return None, 0
    # fsum is exactly rounded, so the mean does not depend on sample order.
    return clamp_unit(math.fsum(values) / len(values)), len(values)


def category_for_score(score: float) -> BlurCategory:
    last = len(BLUR_BANDS) - 1
    for i, (lower, upper, category) in enumerate(BLUR_BANDS):
        if lower <= score < upper or (i == last and score == upper):
            return category
    return FALLBACK_CATEGORY


class BrightnessClassifier:
    """Turns a sequence of sampled colours into (score, category)."""

    def __init__(self, default_score: float | None = None) -> None:
        if default_score is None:
            default_score = get_settings().default_brightness
        self.default_score = default_score

    def classify(self, samples: Iterable[SampledColor]) -> BrightnessClassification:
        score, _ = mean_luminance(samples)
        if score is None:
            return BrightnessClassification(self.default_score, FALLBACK_CATEGORY)
        return BrightnessClassification(score, category_for_score(score))


def classify(samples: Iterable[SampledColor]) -> BrightnessClassification:
    return BrightnessClassifier().classify(samples)
