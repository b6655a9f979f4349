from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.services.image_steganography import __version__
from src.services.image_steganography.api.routes import router as stego_router, settings
from src.services.media_metadata.main import router as media_router

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


app = FastAPI(title="Stealth Lab", version=__version__)

app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.mount("/files", StaticFiles(directory=settings.output_dir), name="stego")

app.include_router(stego_router)
app.include_router(media_router)


# --- Stats Tracking ---
class SystemStats:
    def __init__(self):
        self.encoded_count = 0
        self.decoded_count = 0
        self.total_bytes_processed = 0

stats = SystemStats()

ENCODE_PATHS = {"/stego/hide-text", "/media/hide"}
DECODE_PATHS = {"/stego/reveal-text", "/media/reveal"}


@app.middleware("http")
async def track_stats(request: Request, call_next):
    response = await call_next(request)
    path = request.url.path
    if response.status_code < 400 and (path in ENCODE_PATHS or path in DECODE_PATHS):
        if path in ENCODE_PATHS:
            stats.encoded_count += 1
        else:
            stats.decoded_count += 1
        stats.total_bytes_processed += int(request.headers.get("content-length", 0) or 0)
    return response


@app.get("/stats")
async def get_stats():
    return {
        "encoded_count": stats.encoded_count,
        "decoded_count": stats.decoded_count,
        "total_bytes_processed": stats.total_bytes_processed,
    }


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "max_scan_pixels": settings.max_scan_pixels,
        "text_encoding": settings.text_encoding.value,
    }
