"""
Shared FFmpeg path resolution and progress parsing utilities.
"""
from __future__ import annotations

import logging
import os
import re
import shutil
from typing import Optional

logger = logging.getLogger(__name__)

# -progress reports out_time_ms in microseconds despite its name
_OUT_TIME_US_RE = re.compile(r"^out_time_(?:ms|us)=(\d+)$")


def get_ffmpeg_path(configured: str = "") -> str:
    """Resolve ffmpeg executable path. Checks the configured path first, then PATH."""
    if configured:
        if os.path.exists(configured):
            return configured
        logger.warning("Configured FFmpeg not found at %s, searching PATH", configured)
    path = shutil.which("ffmpeg")
    return path or "ffmpeg"


def parse_progress_seconds(line: str) -> Optional[float]:
    """Encoded position in seconds from one ``-progress`` line, if it carries one."""
    match = _OUT_TIME_US_RE.match(line.strip())
    if match is None:
        return None
    return int(match.group(1)) / 1_000_000.0


def progress_fraction(seconds: float, total: float) -> float:
    if total <= 0:
        return 0.0
    return max(0.0, min(1.0, seconds / total))
