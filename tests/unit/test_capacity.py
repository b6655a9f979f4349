"""
Unit tests for capacity analysis
"""

import numpy as np
import pytest

from src.services.image_steganography.core.capacity import capacity, ensure_fits, fits, max_message_chars
from src.services.image_steganography.core.embedding import embed
from src.services.image_steganography.core.errors import CapacityExceededError
from src.services.image_steganography.core.framing import frame


def test_capacity_is_three_bits_per_pixel():
    assert capacity(10, 10) == 300
    assert capacity(1, 1) == 3
    assert capacity(0, 50) == 0


def test_fits_at_boundary():
    assert fits(np.zeros(300, dtype=np.uint8), 10, 10)
    assert not fits(np.zeros(301, dtype=np.uint8), 10, 10)


def test_ensure_fits_reports_sizes():
    with pytest.raises(CapacityExceededError) as exc_info:
        ensure_fits(np.zeros(301, dtype=np.uint8), 10, 10)
    assert exc_info.value.required_bits == 301
    assert exc_info.value.available_bits == 300


def test_capacity_error_is_value_error():
    assert issubclass(CapacityExceededError, ValueError)


def test_ten_by_ten_holds_twenty_one_characters():
    assert max_message_chars(10, 10) == 21
    assert fits(frame("a" * 21), 10, 10)
    assert not fits(frame("a" * 22), 10, 10)


def test_max_message_chars_never_negative():
    assert max_message_chars(2, 2) == 0


def test_exactly_full_image_embeds(make_buffer):
    # 8x8 pixels carry 192 bits = 24 bytes = 16 marker bytes + 8 characters
    pixels = make_buffer(8, 8)
    bits = frame("x" * 8)
    assert len(bits) == capacity(8, 8)
    embed(pixels, bits)

    with pytest.raises(CapacityExceededError):
        embed(pixels, frame("x" * 9))
