"""
Validation utilities for steganography operations
"""

from typing import Optional


def validate_message(text: str) -> None:
    """
    Validate the message to hide

    Raises:
        ValueError: If the message is empty
    """
    if not text or not text.strip():
        raise ValueError("Message must not be empty")


def validate_limits(max_cover_pixels: Optional[int], image_pixel_count: int) -> None:
    """
    Validate configured limits against the cover image

    Args:
        max_cover_pixels: Max total pixels allowed, None for unlimited
        image_pixel_count: Total pixels in cover image

    Raises:
        ValueError: If any limit is exceeded
    """
    if max_cover_pixels and image_pixel_count > max_cover_pixels:
        raise ValueError(f"Cover image exceeds allowed pixel count: {image_pixel_count} > {max_cover_pixels}")
