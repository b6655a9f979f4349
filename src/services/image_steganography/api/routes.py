"""
API routes for the Image Steganography Service
"""

import logging
import os
import traceback
import uuid
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from ..models.stego_models import (
    StegoCapacityResult,
    StegoOptions,
    StegoOutputFormat,
    StegoTextHideRequest,
    StegoTextRevealRequest,
    TextEncoding,
)
from ..core.service import ImageStegoService
from ..utils.image_utils import encode_image, load_image_from_input
from .responses import StegoAPIResult
from src.utility.constants_manager import ConstantsManager


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stego", tags=["stego"])

settings = ConstantsManager().get_stego_settings()

# Ensure output directories exist
os.makedirs(settings.output_dir, exist_ok=True)

# Service instance
stego_service = ImageStegoService(settings)


def send_response(
    status_code: int,
    message: str,
    path: Optional[str] = None,
    details: Optional[dict] = None
) -> JSONResponse:
    """
    Helper function to send consistent API responses

    Args:
        status_code: HTTP status code
        message: Response message
        path: Optional file path
        details: Optional additional details

    Returns:
        JSONResponse with consistent format
    """
    return JSONResponse(
        status_code=status_code,
        content=StegoAPIResult(
            success=status_code < 400,
            message=message,
            path=path,
            details=details
        ).model_dump()
    )


def parse_encoding(encoding: Optional[str]) -> Optional[TextEncoding]:
    if not encoding:
        return None
    try:
        return TextEncoding(encoding.strip().lower())
    except ValueError:
        raise ValueError(f"Unsupported encoding '{encoding}', use one of: {', '.join(e.value for e in TextEncoding)}")


def parse_output_format(output_format: Optional[str]) -> StegoOutputFormat:
    if not output_format:
        return StegoOutputFormat.PNG
    try:
        return StegoOutputFormat(output_format.strip().upper())
    except ValueError:
        raise ValueError(f"Unsupported output format '{output_format}', use a lossless format: {', '.join(f.value for f in StegoOutputFormat)}")


async def read_image(file: Optional[UploadFile], url: Optional[str]):
    """Decode the uploaded file, or fetch the image from url when no file was sent"""
    data = await file.read() if file is not None else None
    return load_image_from_input(file=data, url=url)


def save_stego_image(image, output_format: StegoOutputFormat, output_dir: str = settings.output_dir) -> Path:
    """Write a stego image under the output directory with a unique name"""
    output_path = Path(output_dir) / f"stego_{uuid.uuid4().hex}.{output_format.extension}"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(encode_image(image, output_format))
    return output_path


@router.post("/capacity", response_model=StegoCapacityResult)
async def check_capacity(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
):
    """
    Check how much text an image can carry

    Args:
        file: The image file to check
        url: Alternatively, a URL to fetch the image from

    Returns:
        StegoCapacityResult with capacity information
    """
    try:
        img = await read_image(file, url)
        return stego_service.capacity(img)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating capacity: {str(e)}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/hide-text", response_model=StegoAPIResult)
async def hide_text(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
    text: str = Form(...),
    encoding: Optional[str] = Form(None),
    output_format: Optional[str] = Form(None),
):
    """
    Hide text in an image

    Args:
        file: Cover image
        url: Alternatively, a URL to fetch the cover from
        text: Text to hide
        encoding: Optional text encoding (legacy, utf-8)
        output_format: Optional lossless output format (PNG, BMP, TIFF, WEBP)

    Returns:
        StegoAPIResult with operation details
    """
    try:
        logger.info(f"Received hide-text request: filename={file.filename if file else url}, text_len={len(text)}")

        options = StegoOptions(
            encoding=parse_encoding(encoding),
            output_format=parse_output_format(output_format),
        )
        req = StegoTextHideRequest(text=text, options=options)

        img = await read_image(file, url)
        stego_img, result = stego_service.hide_text(img, req)
        output_path = save_stego_image(stego_img, result.output_format)

        return send_response(
            200,
            f"Text hidden successfully using {result.used_capacity_bits} of {result.capacity_bits} bits",
            str(output_path),
            {
                "filename": output_path.name,
                "used_capacity_bits": result.used_capacity_bits,
                "capacity_bits": result.capacity_bits,
                "payload_size_bytes": result.payload_size_bytes,
                "encoding": result.encoding.value,
                "output_format": result.output_format.value,
            }
        )
    except ValueError as e:
        logger.warning(f"ValueError in hide-text: {str(e)}")
        return send_response(400, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in hide-text: {str(e)}\n{traceback.format_exc()}")
        return send_response(500, str(e))


@router.post("/reveal-text", response_model=StegoAPIResult)
async def reveal_text(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
    encoding: Optional[str] = Form(None),
    max_scan_pixels: Optional[int] = Form(None),
):
    """
    Reveal hidden text from a steganographic image

    Args:
        file: The steganographic image
        url: Alternatively, a URL to fetch the image from
        encoding: Optional text encoding (legacy, utf-8)
        max_scan_pixels: Optional override of the pixel scan ceiling

    Returns:
        StegoAPIResult with revealed text, or found=False when nothing is hidden
    """
    try:
        logger.info(f"Received reveal-text request: filename={file.filename if file else url}")

        req = StegoTextRevealRequest(encoding=parse_encoding(encoding), max_scan_pixels=max_scan_pixels)
        img = await read_image(file, url)
        result = stego_service.reveal_text(img, req)

        message = "Text revealed successfully" if result.found else "No hidden message found"
        return send_response(
            200,
            message,
            None,
            {
                "found": result.found,
                "text": result.text,
                "encoding": result.encoding.value,
                "scanned_pixels": result.scanned_pixels,
            }
        )
    except ValueError as e:
        logger.warning(f"ValueError in reveal-text: {str(e)}")
        return send_response(400, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in reveal-text: {str(e)}\n{traceback.format_exc()}")
        return send_response(500, str(e))
