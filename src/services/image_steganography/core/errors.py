"""
Exceptions raised by the steganographic codec
"""

from typing import Optional


class StegoError(ValueError):
    """Base class for codec errors. Subclasses ValueError so API layers treat them as bad input."""


class CapacityExceededError(StegoError):
    """The framed message needs more bits than the cover image offers"""

    def __init__(self, required_bits: int, available_bits: int):
        self.required_bits = required_bits
        self.available_bits = available_bits
        super().__init__(f"Not enough capacity for payload: {required_bits} > {available_bits} bits")


class InvalidBufferError(StegoError):
    """Pixel buffer length does not match width * height * 4"""

    def __init__(self, message: str, expected: Optional[int] = None, actual: Optional[int] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(message)
