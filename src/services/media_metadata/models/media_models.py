from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class ImageContainer(str, Enum):
    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"
    WEBP = "webp"


class AudioContainer(str, Enum):
    MP3 = "mp3"
    WAV = "wav"
    OGG = "ogg"
    M4A = "m4a"


class VideoContainer(str, Enum):
    MP4 = "mp4"
    WEBM = "webm"


class ImageTarget(BaseModel):
    kind: Literal["image"] = "image"
    container: ImageContainer


class AudioTarget(BaseModel):
    kind: Literal["audio"] = "audio"
    container: AudioContainer

    @property
    def mime_type(self) -> str:
        return {"mp3": "audio/mpeg", "wav": "audio/wav", "ogg": "audio/ogg", "m4a": "audio/mp4"}[self.container.value]


class VideoTarget(BaseModel):
    kind: Literal["video"] = "video"
    container: VideoContainer

    @property
    def mime_type(self) -> str:
        return f"video/{self.container.value}"


MediaTarget = Annotated[Union[ImageTarget, AudioTarget, VideoTarget], Field(discriminator="kind")]

