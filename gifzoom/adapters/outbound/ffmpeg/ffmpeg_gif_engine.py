"""FFmpeg adapter implementing FrameEnginePort.

Every run gets its own temporary directory holding the source, the optional
mask and the output; the directory is removed whether the run succeeds or not.
"""
from __future__ import annotations

import asyncio
import logging
import tempfile
from pathlib import Path
from typing import Optional

from gifzoom.adapters.outbound.ffmpeg.ffmpeg_base import (
    get_ffmpeg_path,
    parse_progress_seconds,
    progress_fraction,
)
from gifzoom.core.entities.pipeline import PipelineDescription
from gifzoom.core.exceptions import FFmpegError
from gifzoom.ports.outbound.frame_engine_port import ProgressCallback

logger = logging.getLogger(__name__)

_SOURCE_NAME = "source"
_MASK_NAME = "mask.png"


class FFmpegGifEngine:
    """Runs a compiled pipeline through ``ffmpeg -filter_complex``."""

    def __init__(self, ffmpeg_path: str = "", timeout: Optional[float] = 600, log_level: str = "error"):
        self.ffmpeg_path = get_ffmpeg_path(ffmpeg_path)
        self.timeout = timeout
        self.log_level = log_level

    def build_args(
        self,
        pipeline: PipelineDescription,
        source_path: str,
        output_path: str,
        mask_path: Optional[str] = None,
    ) -> list[str]:
        """Command line for ``pipeline``, without the ffmpeg binary itself."""
        args = ["-y", "-hide_banner", "-loglevel", self.log_level, "-i", source_path]
        if pipeline.has_mask:
            if mask_path is None:
                raise ValueError("pipeline composites a mask but no mask input was given")
            args += ["-i", mask_path]
        args += [
            "-filter_complex", pipeline.to_filter_graph(),
            "-map", f"[{pipeline.output.label}]",
            "-loop", str(pipeline.output.loop),
            "-progress", "pipe:1",
            "-nostats",
            "-f", pipeline.output.container,
            output_path,
        ]
        return args

    async def run(
        self,
        pipeline: PipelineDescription,
        source: bytes,
        mask: Optional[bytes] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> bytes:
        with tempfile.TemporaryDirectory(prefix="gifzoom-") as workdir:
            work = Path(workdir)
            source_path = work / _SOURCE_NAME
            source_path.write_bytes(source)
            mask_path: Optional[Path] = None
            if mask is not None:
                mask_path = work / _MASK_NAME
                mask_path.write_bytes(mask)
            output_path = work / f"out.{pipeline.output.container}"

            args = self.build_args(
                pipeline,
                str(source_path),
                str(output_path),
                str(mask_path) if mask_path is not None else None,
            )
            await self._execute(args, pipeline.duration, on_progress)

            if not output_path.exists():
                raise FFmpegError(0, "ffmpeg exited cleanly but wrote no output")
            data = output_path.read_bytes()

        if on_progress is not None:
            on_progress(1.0)
        return data

    async def _execute(
        self,
        args: list[str],
        total_seconds: float,
        on_progress: Optional[ProgressCallback],
    ) -> None:
        cmd = [self.ffmpeg_path, *args]
        logger.debug("Running: %s", " ".join(cmd))
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

        async def read_progress() -> None:
            assert proc.stdout is not None
            async for raw in proc.stdout:
                seconds = parse_progress_seconds(raw.decode(errors="replace"))
                if seconds is not None and on_progress is not None:
                    on_progress(progress_fraction(seconds, total_seconds))

        async def read_stderr() -> bytes:
            assert proc.stderr is not None
            return await proc.stderr.read()

        readers = asyncio.gather(read_progress(), read_stderr())
        try:
            _, stderr = await asyncio.wait_for(readers, timeout=self.timeout)
            returncode = await proc.wait()
        except BaseException as e:
            # Cancellation and timeouts both land here; ffmpeg must not outlive the workdir.
            readers.cancel()
            await asyncio.gather(readers, return_exceptions=True)
            await self._reap(proc)
            if isinstance(e, asyncio.TimeoutError):
                raise FFmpegError(-1, f"timed out after {self.timeout}s") from None
            raise

        if returncode != 0:
            message = stderr.decode(errors="replace")
            logger.error("FFmpeg error: %s", message)
            raise FFmpegError(returncode, message)

    @staticmethod
    async def _reap(proc: asyncio.subprocess.Process) -> None:
        if proc.returncode is not None:
            return
        logger.warning("Killing ffmpeg (pid %s) after an aborted run", proc.pid)
        try:
            proc.kill()
        except ProcessLookupError:
            pass
        await proc.wait()
