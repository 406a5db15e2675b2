"""Custom exception hierarchy for gifzoom."""
from __future__ import annotations


class GifZoomError(Exception):
    """Base exception for all gifzoom errors."""


class InvalidEditError(GifZoomError, ValueError):
    """Raised when export settings or an edit snapshot violate their constraints."""


class ExportInProgressError(GifZoomError):
    """Raised when an export is requested while another one is still running."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Export already running: {job_id}")


class ExportError(GifZoomError):
    """Raised when the frame engine fails an export attempt."""


class FFmpegError(ExportError):
    """Raised when an FFmpeg invocation fails."""

    def __init__(self, returncode: int, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"FFmpeg failed (rc={returncode}): {stderr[:500]}")
