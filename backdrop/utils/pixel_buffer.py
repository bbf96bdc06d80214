"""
Pixel buffer utilities.

A PixelBuffer is a read-only view over already-decoded RGBA / RGBX bytes
plus the geometry needed to address them. Decoding files is the caller's
business; the adapters here only accept pixels that are already in memory
(numpy arrays or Pillow images).
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.lib.stride_tricks import as_strided
from PIL import Image

from backdrop.core.errors import InvalidBufferError

BYTES_PER_PIXEL = 4


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class PixelBuffer:
    width: int
    height: int
    data: Any                       # bytes-like, borrowed from the caller
    row_stride: int | None = None   # bytes per row; defaults to width * 4

    def __post_init__(self) -> None:
        for field_name in ("width", "height", "row_stride"):
            value = getattr(self, field_name)
            if value is None and field_name == "row_stride":
                continue
            if not _is_int(value):
                raise InvalidBufferError(
                    f"Buffer {field_name} must be an integer, got {type(value).__name__}."
                )
        if self.width < 0 or self.height < 0:
            raise InvalidBufferError(
                f"Buffer dimensions must be non-negative, got {self.width}x{self.height}."
            )
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise InvalidBufferError(
                f"Pixel data must be bytes-like, got {type(self.data).__name__}."
            )

        view = memoryview(self.data)
        if view.format != "B" or view.ndim != 1:
            try:
                view = view.cast("B")
            except TypeError as exc:
                raise InvalidBufferError(f"Pixel data is not a flat byte buffer: {exc}")
        object.__setattr__(self, "data", view)

        min_stride = self.width * BYTES_PER_PIXEL
        if self.row_stride is None:
            object.__setattr__(self, "row_stride", min_stride)
        elif self.row_stride < min_stride:
            raise InvalidBufferError(
                f"Row stride {self.row_stride} is shorter than one row of "
                f"{self.width} pixels ({min_stride} bytes)."
            )

    # ------------------------------------------------------------------ #
    # Geometry
    # ------------------------------------------------------------------ #

    @property
    def bytes_per_pixel(self) -> int:
        return BYTES_PER_PIXEL

    @property
    def byte_length(self) -> int:
        return len(self.data)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.pixel_count == 0 or self.byte_length == 0

    @property
    def complete_rows(self) -> int:
        """Number of leading rows whose pixels all lie inside the data."""
        row_bytes = self.width * BYTES_PER_PIXEL
        if self.is_empty or self.byte_length < row_bytes:
            return 0
        return min(self.height, (self.byte_length - row_bytes) // self.row_stride + 1)

    def as_rgb_array(self) -> np.ndarray:
        """
        Zero-copy (rows, width, 3) uint8 view of the colour channels.
        Rows truncated by short data are left out.
        """
        rows = self.complete_rows
        if rows == 0:
            return np.empty((0, self.width, 3), dtype=np.uint8)
        flat = np.frombuffer(self.data, dtype=np.uint8)
        return as_strided(
            flat,
            shape=(rows, self.width, 3),
            strides=(self.row_stride, BYTES_PER_PIXEL, 1),
            writeable=False,
        )

    # ------------------------------------------------------------------ #
    # Adapters
    # ------------------------------------------------------------------ #

    @classmethod
    def from_array(cls, arr: np.ndarray) -> PixelBuffer:
        """
        Wrap an (H, W), (H, W, 3) or (H, W, 4) uint8 array in RGB(A) order.
        Greyscale and RGB arrays get an opaque alpha channel.
        """
        if arr.dtype != np.uint8:
            raise InvalidBufferError(f"Expected a uint8 array, got {arr.dtype}.")
        if arr.ndim == 2:
            arr = np.repeat(arr[:, :, None], 3, axis=2)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise InvalidBufferError(
                f"Expected an HxW, HxWx3 or HxWx4 array, got shape {arr.shape}."
            )
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)

        height, width = arr.shape[:2]
        rgba = np.ascontiguousarray(arr)
        return cls(width=width, height=height, data=memoryview(rgba).cast("B"))

    @classmethod
    def from_image(cls, image: Image.Image) -> PixelBuffer:
        """Wrap an already-decoded Pillow image, converting it to RGBA."""
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        width, height = rgba.size
        return cls(width=width, height=height, data=rgba.tobytes())
