from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class MediaHideOutcome(BaseModel):
    kind: str
    filename: str
    mime_type: str
    data: bytes
    bytes_written: int


class MediaRevealOutcome(BaseModel):
    kind: str
    found: bool
    text: Optional[str] = None
