"""
Extension based classification of uploaded media
"""

from pathlib import PurePath
from typing import Dict, List

from pydantic import TypeAdapter

from ..models.media_models import AudioContainer, ImageContainer, MediaTarget, VideoContainer


SUPPORTED_EXTENSIONS: Dict[str, List[str]] = {
    "image": [f".{c.value}" for c in ImageContainer],
    "audio": [f".{c.value}" for c in AudioContainer],
    "video": [f".{c.value}" for c in VideoContainer],
}

_target_adapter = TypeAdapter(MediaTarget)


class UnsupportedMediaError(ValueError):
    """File extension is not one of the supported image, audio or video types"""

    def __init__(self, filename: str):
        self.filename = filename
        supported = ", ".join(ext for exts in SUPPORTED_EXTENSIONS.values() for ext in exts)
        super().__init__(f"Unsupported file format for '{filename}'. Please use: {supported}")


def classify_media(filename: str) -> MediaTarget:
    """
    Map a filename to its media target

    Args:
        filename: Name of the uploaded file; only the extension is used

    Returns:
        ImageTarget, AudioTarget or VideoTarget

    Raises:
        UnsupportedMediaError: If the extension is not supported
    """
    extension = PurePath(filename or "").suffix.lower()
    for kind, extensions in SUPPORTED_EXTENSIONS.items():
        if extension in extensions:
            return _target_adapter.validate_python({"kind": kind, "container": extension[1:]})
    raise UnsupportedMediaError(filename)
