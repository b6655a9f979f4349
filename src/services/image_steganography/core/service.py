"""
Main service class for Image Steganography operations
"""

import logging
from typing import Optional, Tuple

from PIL import Image

from ..models.stego_models import (
    StegoCapacityResult,
    StegoHideResult,
    StegoRevealTextResult,
    StegoSettings,
    StegoTextHideRequest,
    StegoTextRevealRequest,
)
from .capacity import capacity, ensure_fits, max_message_chars
from .embedding import embed
from .extraction import scan
from .framing import MARKER_OVERHEAD_BYTES, decode_payload, frame
from .pixels import PixelBuffer
from ..utils.image_utils import calculate_pixel_count, is_lossy_source
from ..utils.validation import validate_limits, validate_message


logger = logging.getLogger(__name__)


class ImageStegoService:
    """
    Main service class for Image Steganography operations

    Hides text in the least significant bits of the red, green and blue
    channels behind <<START>>/<<END>> markers and finds it again by scanning
    for those markers. Pixels must survive unchanged between hide and
    reveal, so results have to be written to a lossless format.
    """

    def __init__(self, settings: Optional[StegoSettings] = None):
        self.settings = settings or StegoSettings()

    def capacity(self, image: Image.Image) -> StegoCapacityResult:
        """
        Calculate steganography capacity for an image

        Args:
            image: Input image

        Returns:
            StegoCapacityResult with capacity information
        """
        width, height = image.size
        total_bits = capacity(width, height)
        return StegoCapacityResult(
            width=width,
            height=height,
            pixel_count=width * height,
            capacity_bits=total_bits,
            capacity_bytes=total_bits // 8,
            marker_overhead_bytes=MARKER_OVERHEAD_BYTES,
            max_text_chars=max_message_chars(width, height),
        )

    def hide_text(
        self,
        cover: Image.Image,
        req: StegoTextHideRequest
    ) -> Tuple[Image.Image, StegoHideResult]:
        """
        Hide text in an image

        Args:
            cover: Cover image
            req: Text hiding request with options

        Returns:
            Tuple of (stego_image, result_metadata)

        Raises:
            ValueError: If the message is empty or limits are exceeded
            CapacityExceededError: If the framed message does not fit
        """
        options = req.options
        encoding = options.encoding or self.settings.text_encoding

        validate_message(req.text)
        validate_limits(self.settings.max_cover_pixels, calculate_pixel_count(cover))
        if is_lossy_source(cover):
            logger.warning("Cover image was decoded from a lossy format; the stego image must be saved losslessly")

        pixels = PixelBuffer.from_image(cover)
        bits = frame(req.text, encoding)
        ensure_fits(bits, pixels.width, pixels.height)

        stego_pixels = embed(pixels, bits)
        stego_img = stego_pixels.to_image()

        payload_bytes = len(bits) // 8
        result = StegoHideResult(
            output_format=options.output_format,
            used_capacity_bits=len(bits),
            capacity_bits=capacity(pixels.width, pixels.height),
            payload_size_bytes=payload_bytes,
            overhead_bytes=MARKER_OVERHEAD_BYTES,
            encoding=encoding,
        )
        logger.info(f"Hid {len(req.text)} characters in {pixels.width}x{pixels.height} image using {len(bits)} bits")
        return stego_img, result

    def reveal_text(
        self,
        stego_image: Image.Image,
        req: Optional[StegoTextRevealRequest] = None
    ) -> StegoRevealTextResult:
        """
        Reveal hidden text from a steganographic image

        Args:
            stego_image: Image that may carry a message
            req: Optional overrides for encoding and scan ceiling

        Returns:
            StegoRevealTextResult; found is False when no marker pair was seen
        """
        req = req or StegoTextRevealRequest()
        encoding = req.encoding or self.settings.text_encoding
        max_scan_pixels = req.max_scan_pixels or self.settings.max_scan_pixels

        pixels = PixelBuffer.from_image(stego_image)
        payload, scanned = scan(pixels, max_scan_pixels)

        if payload is None:
            logger.info(f"No hidden message found after scanning {scanned} pixels")
            return StegoRevealTextResult(found=False, text=None, encoding=encoding, scanned_pixels=scanned)

        return StegoRevealTextResult(
            found=True,
            text=decode_payload(payload, encoding),
            encoding=encoding,
            scanned_pixels=scanned,
        )
