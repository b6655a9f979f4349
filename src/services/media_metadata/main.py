from __future__ import annotations

import logging
import traceback
import uuid
from pathlib import Path

from fastapi import APIRouter, File, Form, UploadFile

from src.services.image_steganography.api.routes import send_response, settings, stego_service
from .src.dispatch import MediaMessageService
from .src.ffmpeg_tool import MediaToolError
from .src.service import MediaMetadataService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/media", tags=["Media"])

# ffmpeg is resolved lazily on the first audio/video request
media_service = MediaMessageService(stego_service, MediaMetadataService())


@router.post("/hide")
async def hide_message(
    file: UploadFile = File(...),
    text: str = Form(...),
):
    """Hide text in an image, audio or video file, picked by file extension"""
    try:
        logger.info(f"Received media hide request: filename={file.filename}, text_len={len(text)}")
        outcome = media_service.hide(file.filename or "", await file.read(), text)

        output_path = Path(settings.output_dir) / f"{uuid.uuid4().hex[:8]}_{outcome.filename}"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(outcome.data)

        return send_response(
            200,
            f"Message hidden in {outcome.kind} file",
            str(output_path),
            {
                "kind": outcome.kind,
                "filename": output_path.name,
                "mime_type": outcome.mime_type,
                "bytes_written": outcome.bytes_written,
            }
        )
    except ValueError as e:
        logger.warning(f"ValueError in media hide: {str(e)}")
        return send_response(400, str(e))
    except MediaToolError as e:
        logger.error(f"ffmpeg failure in media hide: {str(e)}")
        return send_response(502, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in media hide: {str(e)}\n{traceback.format_exc()}")
        return send_response(500, str(e))


@router.post("/reveal")
async def reveal_message(file: UploadFile = File(...)):
    """Reveal text hidden by /media/hide"""
    try:
        logger.info(f"Received media reveal request: filename={file.filename}")
        outcome = media_service.reveal(file.filename or "", await file.read())
        return send_response(
            200,
            "Message revealed successfully" if outcome.found else "No hidden message found",
            None,
            {"kind": outcome.kind, "found": outcome.found, "text": outcome.text}
        )
    except ValueError as e:
        logger.warning(f"ValueError in media reveal: {str(e)}")
        return send_response(400, str(e))
    except MediaToolError as e:
        logger.error(f"ffmpeg failure in media reveal: {str(e)}")
        return send_response(502, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in media reveal: {str(e)}\n{traceback.format_exc()}")
        return send_response(500, str(e))
