"""
LSB embedding of a bit sequence into RGBA pixels
"""

import logging

import numpy as np

from .capacity import ensure_fits
from .pixels import COLOR_CHANNELS, PixelBuffer


logger = logging.getLogger(__name__)

# Channel visiting order within a pixel (R, G, B). Extraction uses the same order.
SCAN_CHANNEL_ORDER = (0, 1, 2)


def scan_positions(num_bits: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Map bit indices to (pixel index, channel index) pairs

    Pixels are visited in row-major order and, inside a pixel,
    channels in SCAN_CHANNEL_ORDER. Alpha is never visited.
    """
    index = np.arange(num_bits)
    pixel_index = index // COLOR_CHANNELS
    channel_index = np.asarray(SCAN_CHANNEL_ORDER)[index % COLOR_CHANNELS]
    return pixel_index, channel_index


def embed(pixels: PixelBuffer, bits: np.ndarray) -> PixelBuffer:
    """
    Write bits into the least significant bit of the color channels

    Args:
        pixels: Cover buffer; left untouched
        bits: Sequence of 0/1 values

    Returns:
        New buffer with the first len(bits) channel LSBs replaced. Every other
        byte, including all alpha bytes, keeps its original value.

    Raises:
        InvalidBufferError: If the buffer layout is inconsistent
        CapacityExceededError: If the bits do not fit, instead of truncating
    """
    pixels.validate()
    bits = np.asarray(bits, dtype=np.uint8)
    ensure_fits(bits, pixels.width, pixels.height)

    out = pixels.copy()
    if len(bits) == 0:
        return out

    view = out.pixels()
    pixel_index, channel_index = scan_positions(len(bits))
    view[pixel_index, channel_index] = (view[pixel_index, channel_index] & 0xFE) | (bits & 0x01)

    logger.debug(f"Embedded {len(bits)} bits into {pixels.width}x{pixels.height} buffer")
    return out
