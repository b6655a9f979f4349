"""
Unit tests for message framing and bit conversion
"""

import numpy as np
import pytest

from src.services.image_steganography.core.framing import (
    END_MARKER,
    MARKER_OVERHEAD_BYTES,
    START_MARKER,
    bits_to_text,
    decode_payload,
    frame,
    frame_bytes,
    frame_text,
    unframe,
)
from src.services.image_steganography.models.stego_models import TextEncoding


class TestFrame:
    """Framing a message into a bit sequence."""

    def test_frame_text_wraps_message(self):
        assert frame_text("hi") == "<<START>>hi<<END>>"

    def test_marker_overhead(self):
        assert MARKER_OVERHEAD_BYTES == 16

    def test_bits_are_msb_first(self):
        bits = frame("")
        # '<' is 0x3C
        assert bits[:8].tolist() == [0, 0, 1, 1, 1, 1, 0, 0]

    def test_bit_length_is_multiple_of_eight(self):
        for message in ["", "a", "hello world", "x" * 100]:
            bits = frame(message)
            assert len(bits) % 8 == 0
            assert len(bits) == (len(message) + MARKER_OVERHEAD_BYTES) * 8

    def test_legacy_keeps_low_eight_bits(self):
        # U+20AC (euro sign) keeps only 0xAC
        assert frame_bytes("€", TextEncoding.LEGACY) == b"<<START>>\xac<<END>>"

    def test_legacy_latin1_characters_are_single_bytes(self):
        assert frame_bytes("caf\xe9") == b"<<START>>caf\xe9<<END>>"

    def test_utf8_encodes_message_body(self):
        assert frame_bytes("€", TextEncoding.UTF8) == b"<<START>>\xe2\x82\xac<<END>>"

    def test_ascii_identical_in_both_encodings(self):
        message = "plain ascii 123"
        assert np.array_equal(frame(message, TextEncoding.LEGACY), frame(message, TextEncoding.UTF8))


class TestUnframe:
    """Locating the message between markers."""

    @pytest.mark.parametrize("message", ["", "a", "hello world", "multi\nline", "<<START", "END>>"])
    def test_unframe_inverts_frame_text(self, message):
        assert unframe(frame_text(message)) == message

    def test_missing_start_marker(self):
        assert unframe("hello<<END>>") is None

    def test_missing_end_marker(self):
        assert unframe("<<START>>hello") is None

    def test_partial_markers_do_not_match(self):
        assert unframe("<<START>hello<<END>") is None
        assert unframe("<START>>hello<END>>") is None

    def test_surrounding_noise_is_ignored(self):
        assert unframe("\x00\x17junk<<START>>secret<<END>>more junk") == "secret"

    def test_end_before_start_is_skipped(self):
        assert unframe("<<END>>noise<<START>>secret<<END>>") == "secret"

    def test_first_pair_wins(self):
        assert unframe("<<START>>one<<END>><<START>>two<<END>>") == "one"


class TestBitsToText:
    """Reassembling bits into characters."""

    def test_roundtrip_through_bits(self):
        bits = frame("abc")
        assert bits_to_text(bits) == "<<START>>abc<<END>>"

    def test_incomplete_trailing_byte_is_ignored(self):
        bits = np.concatenate([frame("ab"), np.array([1, 0, 1], dtype=np.uint8)])
        assert bits_to_text(bits) == "<<START>>ab<<END>>"

    def test_high_bytes_map_to_latin1_characters(self):
        bits = np.unpackbits(np.array([0xFF, 0x80], dtype=np.uint8))
        assert bits_to_text(bits) == "\xff\x80"


class TestDecodePayload:
    """Turning recovered byte-characters back into text."""

    def test_legacy_is_identity(self):
        assert decode_payload("caf\xe9", TextEncoding.LEGACY) == "caf\xe9"

    def test_utf8_reassembles_multibyte_characters(self):
        recovered = "€".encode("utf-8").decode("latin-1")
        assert decode_payload(recovered, TextEncoding.UTF8) == "€"

    def test_utf8_replaces_invalid_sequences(self):
        assert decode_payload("\xff", TextEncoding.UTF8) == "\ufffd"

    def test_markers_are_ascii(self):
        assert START_MARKER.isascii() and END_MARKER.isascii()
