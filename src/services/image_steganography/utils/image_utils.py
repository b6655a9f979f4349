"""
Image utility functions for steganography operations
"""

import logging
import httpx
from io import BytesIO
from typing import Optional
from PIL import Image

from ..models.stego_models import StegoOutputFormat


logger = logging.getLogger(__name__)

LOSSY_FORMATS = {"JPEG", "MPO"}


def load_image_from_input(file: Optional[bytes] = None, url: Optional[str] = None) -> Image.Image:
    """
    Load an image from either uploaded bytes or URL

    Args:
        file: Uploaded image bytes
        url: URL to fetch image from

    Returns:
        PIL Image object

    Raises:
        ValueError: If neither file nor url is provided, or the image cannot be fetched or decoded
    """
    if file is not None:
        return load_image_from_bytes(file)
    if url is not None:
        try:
            with httpx.Client(timeout=30, follow_redirects=True) as client:
                resp = client.get(url)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise ValueError(f"Could not fetch image from {url}: {exc}") from exc
        return load_image_from_bytes(resp.content)
    raise ValueError("Provide file or url")


def load_image_from_bytes(data: bytes) -> Image.Image:
    """
    Decode image bytes, forcing Pillow to read the pixels now

    Raises:
        ValueError: If the bytes are not a readable image
    """
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except Exception as exc:
        raise ValueError(f"Could not decode image: {exc}") from exc
    return image


def calculate_pixel_count(image: Image.Image) -> int:
    width, height = image.size
    return width * height


def is_lossy_source(image: Image.Image) -> bool:
    return (image.format or "").upper() in LOSSY_FORMATS


def encode_image(image: Image.Image, output_format: StegoOutputFormat = StegoOutputFormat.PNG) -> bytes:
    """
    Encode a stego image into a lossless container

    Args:
        image: Image carrying the payload
        output_format: Lossless target format

    Returns:
        Encoded file bytes
    """
    save_kwargs = {}
    if output_format == StegoOutputFormat.WEBP:
        save_kwargs = {"lossless": True, "exact": True}
    elif output_format == StegoOutputFormat.TIFF:
        save_kwargs = {"compression": "tiff_deflate"}
    with BytesIO() as buf:
        image.save(buf, format=output_format.value, **save_kwargs)
        return buf.getvalue()
