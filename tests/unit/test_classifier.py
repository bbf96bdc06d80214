"""Unit tests for luma scoring and blur-band selection."""

from __future__ import annotations

import math
import random

import pytest

from backdrop.schemas.analysis import BlurCategory
from backdrop.services.classifier import (
    BrightnessClassifier,
    category_for_score,
    classify,
    luminance,
    mean_luminance,
)
from backdrop.services.sampler import SampledColor, sample
from tests.conftest import solid_buffer, split_buffer


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (0.0, BlurCategory.ultra_thin),
        (0.15, BlurCategory.ultra_thin),
        (0.2999, BlurCategory.ultra_thin),
        (0.3, BlurCategory.regular),
        (0.5, BlurCategory.regular),
        (0.6999, BlurCategory.regular),
        (0.7, BlurCategory.thin),
        (0.95, BlurCategory.thin),
        (1.0, BlurCategory.thin),
    ],
)
def test_bands_cover_unit_interval(score: float, expected: BlurCategory) -> None:
    assert category_for_score(score) is expected


@pytest.mark.parametrize("score", [-0.01, 1.0001, 42.0, float("inf"), float("nan")])
def test_out_of_range_scores_fall_back_to_regular(score: float) -> None:
    assert category_for_score(score) is BlurCategory.regular


def test_luma_weights() -> None:
    assert luminance(SampledColor(1.0, 0.0, 0.0)) == 0.299
    assert luminance(SampledColor(0.0, 1.0, 0.0)) == 0.587
    assert luminance(SampledColor(0.0, 0.0, 1.0)) == 0.114


def test_empty_samples_use_default() -> None:
    result = classify([])

    assert result.score == 0.5
    assert result.category is BlurCategory.regular
    assert not math.isnan(result.score)


def test_custom_default_score() -> None:
    result = BrightnessClassifier(default_score=0.25).classify(iter(()))
    assert result.score == 0.25
    assert result.category is BlurCategory.regular


def test_mean_luminance_counts_samples() -> None:
    colors = [SampledColor(0.0, 0.0, 0.0), SampledColor(1.0, 1.0, 1.0)]
    score, count = mean_luminance(colors)

    assert count == 2
    assert score == pytest.approx(0.5)


def test_mean_luminance_of_nothing() -> None:
    assert mean_luminance([]) == (None, 0)


class TestUniformBuffers:
    def test_black_is_ultra_thin(self) -> None:
        score, category = classify(sample(solid_buffer((0, 0, 0))))
        assert score == 0.0
        assert category is BlurCategory.ultra_thin

    def test_white_is_thin(self) -> None:
        score, category = classify(sample(solid_buffer((255, 255, 255))))
        assert score == pytest.approx(1.0)
        assert score <= 1.0
        assert category is BlurCategory.thin

    def test_mid_grey_is_regular(self) -> None:
        score, category = classify(sample(solid_buffer((128, 128, 128))))
        assert score == pytest.approx(0.502, abs=1e-3)
        assert category is BlurCategory.regular


def test_half_black_half_white_is_regular() -> None:
    score, category = classify(sample(split_buffer()))

    assert score == pytest.approx(0.5, abs=1e-6)
    assert category is BlurCategory.regular


def test_order_does_not_change_score() -> None:
    rng = random.Random(7)
    colors = [SampledColor(rng.random(), rng.random(), rng.random()) for _ in range(500)]
    shuffled = colors[:]
    rng.shuffle(shuffled)

    assert classify(colors) == classify(shuffled)


def test_repeated_classification_is_identical() -> None:
    buffer = solid_buffer((37, 180, 90), width=120, height=90)
    assert classify(sample(buffer)) == classify(sample(buffer))
