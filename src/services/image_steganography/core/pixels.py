"""
RGBA pixel buffer shared by the embedder and the extractor
"""

from dataclasses import dataclass
from typing import Union

import numpy as np
from PIL import Image

from .errors import InvalidBufferError


CHANNELS_PER_PIXEL = 4  # R, G, B, A
COLOR_CHANNELS = 3  # alpha is never used


@dataclass
class PixelBuffer:
    """
    Flat RGBA byte buffer in row-major pixel order

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        data: uint8 array of width * height * 4 channel bytes
    """

    width: int
    height: int
    data: np.ndarray

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def validate(self) -> None:
        """
        Check the buffer layout before it is read or written

        Raises:
            InvalidBufferError: If dimensions are negative or the length is inconsistent
        """
        if self.width < 0 or self.height < 0:
            raise InvalidBufferError(f"Invalid dimensions: {self.width}x{self.height}")
        expected = self.width * self.height * CHANNELS_PER_PIXEL
        actual = int(self.data.size)
        if self.data.ndim != 1 or actual != expected:
            raise InvalidBufferError(
                f"Pixel buffer holds {actual} bytes, expected {expected} for {self.width}x{self.height} RGBA",
                expected=expected,
                actual=actual,
            )
        if self.data.dtype != np.uint8:
            raise InvalidBufferError(f"Pixel buffer must be uint8, got {self.data.dtype}")

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self.data.copy())

    def pixels(self) -> np.ndarray:
        """View of the buffer as (pixel_count, 4)"""
        return self.data.reshape(-1, CHANNELS_PER_PIXEL)

    @classmethod
    def from_bytes(cls, width: int, height: int, raw: Union[bytes, bytearray, memoryview]) -> "PixelBuffer":
        return cls(width, height, np.frombuffer(bytes(raw), dtype=np.uint8).copy())

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """
        Decode a Pillow image into an RGBA buffer

        Args:
            image: Any Pillow image; converted to RGBA when needed

        Returns:
            PixelBuffer owning its own copy of the pixel bytes
        """
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        width, height = rgba.size
        arr = np.array(rgba, dtype=np.uint8).reshape(-1)
        return cls(width, height, arr)

    def to_bytes(self) -> bytes:
        return self.data.tobytes()

    def to_image(self) -> Image.Image:
        self.validate()
        arr = self.data.reshape(self.height, self.width, CHANNELS_PER_PIXEL)
        return Image.fromarray(arr)
