"""
Message framing: sentinel markers and bit stream conversion
"""

from typing import Optional

import numpy as np

from ..models.stego_models import TextEncoding


START_MARKER = "<<START>>"
END_MARKER = "<<END>>"
MARKER_OVERHEAD_BYTES = len(START_MARKER) + len(END_MARKER)


def frame_text(message: str) -> str:
    """Wrap a message between the start and end markers"""
    return f"{START_MARKER}{message}{END_MARKER}"


def frame_bytes(message: str, encoding: TextEncoding = TextEncoding.LEGACY) -> bytes:
    """
    Convert a framed message to bytes

    Args:
        message: Raw message text
        encoding: LEGACY keeps only the low 8 bits of every code point,
            UTF8 encodes the message body as UTF-8

    Returns:
        Marker-delimited payload bytes
    """
    if encoding == TextEncoding.UTF8:
        return START_MARKER.encode("ascii") + message.encode("utf-8") + END_MARKER.encode("ascii")
    return bytes(ord(ch) % 256 for ch in frame_text(message))


def bytes_to_bits(data: bytes) -> np.ndarray:
    """Expand bytes MSB-first into an array of 0/1 values"""
    return np.unpackbits(np.frombuffer(data, dtype=np.uint8))


def frame(message: str, encoding: TextEncoding = TextEncoding.LEGACY) -> np.ndarray:
    """
    Build the bit sequence that gets embedded for a message

    Args:
        message: Raw message text
        encoding: Text encoding for the message body

    Returns:
        uint8 array of bits, length a multiple of 8
    """
    return bytes_to_bits(frame_bytes(message, encoding))


def bits_to_text(bits: np.ndarray) -> str:
    """
    Reassemble complete 8-bit groups into one character per byte

    An incomplete trailing group is ignored.
    """
    bits = np.asarray(bits, dtype=np.uint8)
    usable = len(bits) - (len(bits) % 8)
    return np.packbits(bits[:usable]).tobytes().decode("latin-1")


def unframe(text: str) -> Optional[str]:
    """
    Find the message between the first start marker and the next end marker

    Args:
        text: Decoded byte-characters

    Returns:
        The enclosed message, or None when the marker pair is absent
    """
    start = text.find(START_MARKER)
    if start < 0:
        return None
    body_start = start + len(START_MARKER)
    end = text.find(END_MARKER, body_start)
    if end < 0:
        return None
    return text[body_start:end]


def decode_payload(payload: str, encoding: TextEncoding = TextEncoding.LEGACY) -> str:
    """Turn recovered byte-characters back into message text"""
    if encoding == TextEncoding.UTF8:
        return payload.encode("latin-1").decode("utf-8", errors="replace")
    return payload
