"""
LSB extraction and marker scanning
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from ..models.stego_models import DEFAULT_MAX_SCAN_PIXELS
from .embedding import SCAN_CHANNEL_ORDER
from .framing import END_MARKER, START_MARKER
from .pixels import COLOR_CHANNELS, PixelBuffer


logger = logging.getLogger(__name__)

# 8 pixels carry 24 bits, so every chunk ends on a byte boundary
CHUNK_PIXELS = 8 * 4096


class ScanState(str, Enum):
    SCANNING = "scanning"
    MATCHED = "matched"
    NOT_FOUND = "not_found"


class MarkerScanner:
    """
    Incremental marker detector fed one reassembled byte at a time

    Nothing is checked until a start marker's worth of bytes has been seen.
    After every byte the tail of the accumulated text is compared against the
    marker that is currently expected, which gives the same answer as running
    a full marker search over the accumulated text after each byte.
    """

    def __init__(self):
        self._chars: List[str] = []
        self._body_start: Optional[int] = None
        self.state = ScanState.SCANNING
        self.message: Optional[str] = None

    @property
    def bytes_consumed(self) -> int:
        return len(self._chars)

    def _tail_is(self, marker: str) -> bool:
        return "".join(self._chars[-len(marker):]) == marker

    def feed(self, byte: int) -> Optional[str]:
        if self.state != ScanState.SCANNING:
            raise RuntimeError(f"Scanner already finished in state {self.state.value}")

        self._chars.append(chr(byte))
        count = len(self._chars)
        if count < len(START_MARKER):
            return None

        if self._body_start is None:
            if self._tail_is(START_MARKER):
                self._body_start = count
            return None

        if count - len(END_MARKER) >= self._body_start and self._tail_is(END_MARKER):
            self.message = "".join(self._chars[self._body_start:count - len(END_MARKER)])
            self.state = ScanState.MATCHED
            return self.message
        return None

    def finish(self) -> None:
        if self.state == ScanState.SCANNING:
            self.state = ScanState.NOT_FOUND


def scan_limit(pixels: PixelBuffer, max_scan_pixels: Optional[int]) -> int:
    """Number of pixels extraction is allowed to read"""
    if max_scan_pixels is None:
        return pixels.pixel_count
    if max_scan_pixels < 1:
        raise ValueError(f"max_scan_pixels must be at least 1, got {max_scan_pixels}")
    return min(pixels.pixel_count, max_scan_pixels)


def read_lsb_bytes(view: np.ndarray, start: int, stop: int) -> bytes:
    """Collect R, G, B least significant bits of pixels[start:stop] into complete bytes"""
    bits = (view[start:stop][:, list(SCAN_CHANNEL_ORDER)] & 0x01).reshape(-1)
    usable = len(bits) - (len(bits) % 8)
    return np.packbits(bits[:usable]).tobytes()


def scan(pixels: PixelBuffer, max_scan_pixels: Optional[int] = DEFAULT_MAX_SCAN_PIXELS) -> Tuple[Optional[str], int]:
    """
    Scan a buffer for a hidden message

    Args:
        pixels: Buffer to read; never modified
        max_scan_pixels: Pixel ceiling, None to read the whole buffer

    Returns:
        Tuple of (message or None, number of pixels read)

    Raises:
        InvalidBufferError: If the buffer layout is inconsistent
    """
    pixels.validate()
    limit = scan_limit(pixels, max_scan_pixels)
    view = pixels.pixels()
    scanner = MarkerScanner()

    # Only the final chunk can end mid-byte; those trailing bits are dropped
    for start in range(0, limit, CHUNK_PIXELS):
        stop = min(start + CHUNK_PIXELS, limit)
        for byte in read_lsb_bytes(view, start, stop):
            message = scanner.feed(byte)
            if message is not None:
                scanned = -(-scanner.bytes_consumed * 8 // COLOR_CHANNELS)
                logger.debug(f"Marker pair found after {scanned} pixels")
                return message, scanned

    scanner.finish()
    logger.debug(f"No marker pair within {limit} pixels")
    return None, limit


def extract(pixels: PixelBuffer, max_scan_pixels: Optional[int] = DEFAULT_MAX_SCAN_PIXELS) -> Optional[str]:
    """
    Recover the message hidden by embed(), or None when there is none

    The result holds one character per recovered byte; see
    framing.decode_payload for turning it into UTF-8 text.
    """
    message, _ = scan(pixels, max_scan_pixels)
    return message
