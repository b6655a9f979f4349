from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from ..models.media_models import AudioTarget, VideoTarget
from .ffmpeg_tool import FFmpegTool


logger = logging.getLogger(__name__)

MESSAGE_FIELDS = ("title", "comment")

_ESCAPABLE = {"=", ";", "#", "\\", "\n"}


def parse_ffmetadata(text: str) -> Dict[str, str]:
    """
    Parse the global section of an ffmetadata dump

    Backslash escapes are resolved and an escaped line break continues the
    value on the next line. Parsing stops at the first [STREAM] or
    [CHAPTER] section.
    """
    values: Dict[str, str] = {}
    entry = ""
    pending = False
    for line in text.splitlines():
        if not pending:
            if line.startswith(";") or line.startswith("#") or not line.strip():
                continue
            if line.startswith("["):
                break
        entry = entry + "\n" + line if pending else line

        # a line ending in an odd number of backslashes continues on the next line
        trailing = len(line) - len(line.rstrip("\\"))
        pending = trailing % 2 == 1
        if pending:
            entry = entry[:-1]
            continue

        key, value = _split_entry(entry)
        if key:
            values.setdefault(key.lower(), value)
        entry = ""
    return values


def _split_entry(entry: str) -> tuple[str, str]:
    key: Optional[str] = None
    current = []
    escaped = False
    for ch in entry:
        if escaped:
            current.append(ch if ch in _ESCAPABLE else "\\" + ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == "=" and key is None:
            key = "".join(current)
            current = []
        else:
            current.append(ch)
    if key is None:
        return "", ""
    return key, "".join(current)


class MediaMetadataService:
    """
    Writes and reads a message in the title and comment metadata fields of
    audio and video containers. Streams are copied, not re-encoded.
    """

    def __init__(self, tool: Optional[FFmpegTool] = None):
        self._tool = tool

    @property
    def tool(self) -> FFmpegTool:
        if self._tool is None:
            self._tool = FFmpegTool.get_instance()
        return self._tool

    def hide_message(self, data: bytes, target: Union[AudioTarget, VideoTarget], message: str) -> bytes:
        """
        Tag a media file with the message

        Args:
            data: Original file bytes
            target: Audio or video container of the file
            message: Text written to the title and comment fields

        Returns:
            Bytes of the tagged file, same container as the input

        Raises:
            ValueError: If the message is empty
            MediaToolError: If ffmpeg fails
        """
        if not message or not message.strip():
            raise ValueError("Message must not be empty")

        extension = target.container.value
        with tempfile.TemporaryDirectory(prefix="stealth_media_") as tmp:
            input_path = Path(tmp) / f"input.{extension}"
            output_path = Path(tmp) / f"output.{extension}"
            input_path.write_bytes(data)

            args = ["-i", str(input_path)]
            for field in MESSAGE_FIELDS:
                args += ["-metadata", f"{field}={message}"]
            args += ["-c", "copy", "-y", str(output_path)]
            self.tool.run(args)

            tagged = output_path.read_bytes()

        logger.info(f"Tagged {target.kind} ({extension}) with {len(message)} characters")
        return tagged

    def reveal_message(self, data: bytes, target: Union[AudioTarget, VideoTarget]) -> Optional[str]:
        """
        Read the message back from a tagged media file

        Returns:
            The title field, else the comment field, else None
        """
        extension = target.container.value
        with tempfile.TemporaryDirectory(prefix="stealth_media_") as tmp:
            input_path = Path(tmp) / f"input.{extension}"
            metadata_path = Path(tmp) / "metadata.txt"
            input_path.write_bytes(data)

            self.tool.run(["-i", str(input_path), "-f", "ffmetadata", "-y", str(metadata_path)])
            metadata = parse_ffmetadata(metadata_path.read_text(encoding="utf-8", errors="replace"))

        for field in MESSAGE_FIELDS:
            value = metadata.get(field, "").strip()
            if value:
                return value
        return None
