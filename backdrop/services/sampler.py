"""
Sparse pixel sampling over a PixelBuffer.

Instead of scanning every pixel, the sampler walks a square grid whose step
grows with the image size:

    stride = max(1, (width * height) // max_samples)

Rows and columns both advance by `stride`, so cost stays bounded by roughly
`max_samples` reads however large the image is. Every byte offset is checked
against the buffer length before reading; offsets past the end are skipped.
"""

from __future__ import annotations

from typing import Iterator, NamedTuple

from backdrop.core.config import get_settings
from backdrop.utils.pixel_buffer import BYTES_PER_PIXEL, PixelBuffer


class SampledColor(NamedTuple):
    red: float      # [0, 1]
    green: float    # [0, 1]
    blue: float     # [0, 1]


def sample_stride(width: int, height: int, max_samples: int = 10_000) -> int:
    return max(1, (width * height) // max_samples)


class PixelSampler:
    """Stride sampler yielding normalised RGB triples."""

    def __init__(self, max_samples: int | None = None) -> None:
        if max_samples is None:
            max_samples = get_settings().max_sample_count
        if max_samples <= 0:
            raise ValueError("max_samples must be positive.")
        self.max_samples = max_samples

    def sample(self, buffer: PixelBuffer | None) -> Iterator[SampledColor]:
        if buffer is None or buffer.is_empty:
            return

        data = buffer.data
        limit = buffer.byte_length
        row_stride = buffer.row_stride
        step = sample_stride(buffer.width, buffer.height, self.max_samples)

        for y in range(0, buffer.height, step):
            row_offset = y * row_stride
            for x in range(0, buffer.width, step):
                offset = row_offset + x * BYTES_PER_PIXEL
                if offset + 2 >= limit:
                    continue
                yield SampledColor(
                    data[offset] / 255.0,
                    data[offset + 1] / 255.0,
                    data[offset + 2] / 255.0,
                )


def sample(buffer: PixelBuffer | None) -> Iterator[SampledColor]:
    """Sample `buffer` with the configured sampling budget."""
    return PixelSampler().sample(buffer)
