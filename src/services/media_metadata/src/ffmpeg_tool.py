from __future__ import annotations

import logging
import shutil
import subprocess
from threading import Lock
from typing import List, Optional

from src.utility.constants_manager import ConstantsManager


logger = logging.getLogger(__name__)


class MediaToolError(RuntimeError):
    """The ffmpeg binary is unavailable or a run failed"""


# ffmpeg_tool.py
class FFmpegTool:
    """
    Process-wide handle on the ffmpeg binary

    Resolved once on first use and reused for the rest of the process.
    """

    _instance: Optional["FFmpegTool"] = None
    _lock = Lock()

    def __init__(self, binary: str, timeout: Optional[float] = 300):
        self.binary = binary
        self.timeout = timeout

    @classmethod
    def get_instance(cls, binary: Optional[str] = None) -> "FFmpegTool":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    candidate = binary or ConstantsManager().get_ffmpeg_binary() or "ffmpeg"
                    resolved = shutil.which(candidate)
                    if resolved is None:
                        raise MediaToolError(f"ffmpeg binary not found: {candidate}")
                    logger.info(f"Using ffmpeg binary at {resolved}")
                    cls._instance = cls(resolved)
        return cls._instance

    def run(self, args: List[str]) -> subprocess.CompletedProcess:
        """
        Run ffmpeg with the given arguments

        Raises:
            MediaToolError: If ffmpeg cannot be started, times out or exits non-zero
        """
        command = [self.binary, "-hide_banner", "-loglevel", "error", *args]
        logger.debug(f"Running {' '.join(command)}")
        try:
            completed = subprocess.run(command, capture_output=True, text=True, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise MediaToolError(f"Failed to run ffmpeg: {exc}") from exc
        if completed.returncode != 0:
            raise MediaToolError(f"ffmpeg exited with code {completed.returncode}: {completed.stderr.strip()}")
        return completed
