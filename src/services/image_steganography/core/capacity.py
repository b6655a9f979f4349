"""
Embedding capacity of a cover image
"""

from typing import Sized

from .errors import CapacityExceededError
from .framing import MARKER_OVERHEAD_BYTES
from .pixels import COLOR_CHANNELS


def capacity(width: int, height: int) -> int:
    """Usable bits: one per red, green and blue channel of every pixel"""
    return width * height * COLOR_CHANNELS


def fits(bits: Sized, width: int, height: int) -> bool:
    return len(bits) <= capacity(width, height)


def ensure_fits(bits: Sized, width: int, height: int) -> None:
    """
    Gate applied before any pixel is modified

    Raises:
        CapacityExceededError: If the bit sequence is longer than the capacity
    """
    if not fits(bits, width, height):
        raise CapacityExceededError(len(bits), capacity(width, height))


def max_message_chars(width: int, height: int) -> int:
    """Longest single-byte-per-character message that still fits with its markers"""
    return max(0, capacity(width, height) // 8 - MARKER_OVERHEAD_BYTES)
