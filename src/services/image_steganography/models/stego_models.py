from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_MAX_SCAN_PIXELS = 100_000


class TextEncoding(str, Enum):
    LEGACY = "legacy"  # one byte per character, code point mod 256
    UTF8 = "utf-8"


class StegoOutputFormat(str, Enum):
    PNG = "PNG"
    BMP = "BMP"
    TIFF = "TIFF"
    WEBP = "WEBP"  # saved with lossless=True

    @property
    def extension(self) -> str:
        return {"PNG": "png", "BMP": "bmp", "TIFF": "tiff", "WEBP": "webp"}[self.value]


class StegoSettings(BaseModel):
    max_scan_pixels: Optional[int] = Field(default=DEFAULT_MAX_SCAN_PIXELS, ge=1, description="Pixel ceiling for extraction, None for no ceiling")
    text_encoding: TextEncoding = Field(default=TextEncoding.UTF8, description="Encoding applied to the message body")
    max_cover_pixels: Optional[int] = Field(default=None, description="Max total pixels allowed for cover image")
    output_dir: str = "./stego"


class StegoOptions(BaseModel):
    encoding: Optional[TextEncoding] = Field(default=None, description="Overrides the configured text encoding")
    output_format: StegoOutputFormat = StegoOutputFormat.PNG


class StegoTextHideRequest(BaseModel):
    text: str
    options: StegoOptions = Field(default_factory=StegoOptions)


class StegoTextRevealRequest(BaseModel):
    encoding: Optional[TextEncoding] = None
    max_scan_pixels: Optional[int] = Field(default=None, ge=1, description="Overrides the configured scan ceiling")


class StegoCapacityResult(BaseModel):
    width: int
    height: int
    pixel_count: int
    capacity_bits: int
    capacity_bytes: int
    marker_overhead_bytes: int
    max_text_chars: int


class StegoHideResult(BaseModel):
    output_format: StegoOutputFormat = StegoOutputFormat.PNG
    used_capacity_bits: int
    capacity_bits: int
    payload_size_bytes: int
    overhead_bytes: int
    encoding: TextEncoding


class StegoRevealTextResult(BaseModel):
    found: bool
    text: Optional[str] = None
    encoding: TextEncoding
    scanned_pixels: int
