from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Optional

from src.services.image_steganography.core.service import ImageStegoService
from src.services.image_steganography.models.stego_models import (
    StegoOptions,
    StegoOutputFormat,
    StegoTextHideRequest,
)
from src.services.image_steganography.utils.image_utils import encode_image, load_image_from_bytes

from ..models.media_models import ImageContainer, ImageTarget
from ..utils.media_utils import classify_media
from .result import MediaHideOutcome, MediaRevealOutcome
from .service import MediaMetadataService


logger = logging.getLogger(__name__)

# JPEG would destroy the LSBs, so JPEG covers come back as PNG
IMAGE_OUTPUT_FORMATS = {
    ImageContainer.PNG: StegoOutputFormat.PNG,
    ImageContainer.JPG: StegoOutputFormat.PNG,
    ImageContainer.JPEG: StegoOutputFormat.PNG,
    ImageContainer.WEBP: StegoOutputFormat.WEBP,
}


class MediaMessageService:
    """
    Routes a file to the LSB image codec or to metadata tagging based on
    its classified media target
    """

    def __init__(self, image_service: ImageStegoService, metadata_service: MediaMetadataService):
        self.image_service = image_service
        self.metadata_service = metadata_service

    def hide(self, filename: str, data: bytes, message: str) -> MediaHideOutcome:
        target = classify_media(filename)
        stem = PurePath(filename).stem or "media"

        if isinstance(target, ImageTarget):
            output_format = IMAGE_OUTPUT_FORMATS[target.container]
            if output_format.extension != target.container.value:
                logger.warning(f"Re-encoding {target.container.value} cover as {output_format.value} to keep pixels exact")
            req = StegoTextHideRequest(text=message, options=StegoOptions(output_format=output_format))
            stego_img, _ = self.image_service.hide_text(load_image_from_bytes(data), req)
            encoded = encode_image(stego_img, output_format)
            return MediaHideOutcome(
                kind=target.kind,
                filename=f"{stem}_encoded.{output_format.extension}",
                mime_type=f"image/{output_format.extension}",
                data=encoded,
                bytes_written=len(encoded),
            )

        tagged = self.metadata_service.hide_message(data, target, message)
        return MediaHideOutcome(
            kind=target.kind,
            filename=f"{stem}_encoded.{target.container.value}",
            mime_type=target.mime_type,
            data=tagged,
            bytes_written=len(tagged),
        )

    def reveal(self, filename: str, data: bytes) -> MediaRevealOutcome:
        target = classify_media(filename)

        text: Optional[str]
        if isinstance(target, ImageTarget):
            text = self.image_service.reveal_text(load_image_from_bytes(data)).text
        else:
            text = self.metadata_service.reveal_message(data, target)
        return MediaRevealOutcome(kind=target.kind, found=text is not None, text=text)
