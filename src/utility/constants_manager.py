
from dotenv import load_dotenv, find_dotenv
import os
from typing import Optional

from src.services.image_steganography.models.stego_models import StegoSettings, TextEncoding

class ConstantsManager:
    _dotenv_loaded = False

    def __init__(self):
        if not ConstantsManager._dotenv_loaded:
            load_dotenv(dotenv_path=find_dotenv(usecwd=True), override=False)
            ConstantsManager._dotenv_loaded = True

    def get_variable(self, variableName, default: Optional[str] = None):
        variable = os.environ.get(variableName, "")
        if variable == "":
            if default is not None:
                return default
            raise Exception(f"Could not find {variableName} environment variable")
        return variable

    def get_optional_variable(self, variableName) -> Optional[str]:
        variable = os.environ.get(variableName, "").strip()
        return variable or None

    def get_max_scan_pixels(self) -> Optional[int]:
        raw = self.get_variable('STEGO_MAX_SCAN_PIXELS', "100000").strip().lower()
        if raw in ("0", "none", "unbounded"):
            return None
        value = int(raw)
        if value < 0:
            raise ValueError(f"STEGO_MAX_SCAN_PIXELS must be positive, got {value}")
        return value

    def get_text_encoding(self) -> TextEncoding:
        return TextEncoding(self.get_variable('STEGO_TEXT_ENCODING', TextEncoding.UTF8.value).strip().lower())

    def get_max_cover_pixels(self) -> Optional[int]:
        raw = self.get_optional_variable('STEGO_MAX_COVER_PIXELS')
        return int(raw) if raw else None

    def get_output_dir(self) -> str:
        return self.get_variable('STEGO_OUTPUT_DIR', "./stego")

    def get_ffmpeg_binary(self) -> Optional[str]:
        return self.get_optional_variable('FFMPEG_BINARY')

    def get_stego_settings(self) -> StegoSettings:
        return StegoSettings(
            max_scan_pixels=self.get_max_scan_pixels(),
            text_encoding=self.get_text_encoding(),
            max_cover_pixels=self.get_max_cover_pixels(),
            output_dir=self.get_output_dir(),
        )
