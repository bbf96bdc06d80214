"""
Shared pytest fixtures.

Strategy: buffers are synthesised in memory with numpy so tests are fast,
deterministic and never touch image files.
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from backdrop.core.config import get_settings
from backdrop.utils.pixel_buffer import PixelBuffer


# ------------------------------------------------------------------ #
# Buffer factories
# ------------------------------------------------------------------ #

def solid_buffer(rgb: tuple[int, int, int], width: int = 64, height: int = 64) -> PixelBuffer:
    """RGBA buffer filled with a single opaque colour."""
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[:, :, :3] = rgb
    arr[:, :, 3] = 255
    return PixelBuffer.from_array(arr)


def split_buffer(width: int = 64, height: int = 64) -> PixelBuffer:
    """Top half black, bottom half white."""
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[height // 2:, :, :] = 255
    return PixelBuffer.from_array(arr)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #

@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Clear the settings cache so env changes in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def black_buffer() -> PixelBuffer:
    return solid_buffer((0, 0, 0))


@pytest.fixture
def white_buffer() -> PixelBuffer:
    return solid_buffer((255, 255, 255))


@pytest.fixture
def grey_buffer() -> PixelBuffer:
    return solid_buffer((128, 128, 128))
