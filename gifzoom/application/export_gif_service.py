"""
GIF export use case.
"""
from __future__ import annotations

import logging
from typing import Optional

from gifzoom.application.dto.export_request import ExportRequest
from gifzoom.application.dto.export_result import ExportResult
from gifzoom.core.entities.edit_specification import output_name
from gifzoom.core.entities.export_job import ExportJob
from gifzoom.core.exceptions import ExportError, ExportInProgressError
from gifzoom.core.services.filter_graph_compiler import FilterGraphCompiler
from gifzoom.core.services.mask_generator import generate_mask

logger = logging.getLogger(__name__)


class ExportGifService:
    """Compiles an edit snapshot and drives the frame engine to a GIF.

    Only one export runs at a time; a second request while one is in flight
    is rejected rather than queued.
    """

    def __init__(
        self,
        engine,          # FrameEnginePort
        mask_renderer,   # MaskRendererPort
        compiler: Optional[FilterGraphCompiler] = None,
        output_extension: str = ".gif",
    ):
        self._engine = engine
        self._mask_renderer = mask_renderer
        self._compiler = compiler or FilterGraphCompiler()
        self._output_extension = output_extension
        self._active: Optional[ExportJob] = None
        self._last: Optional[ExportJob] = None

    @property
    def active_job(self) -> Optional[ExportJob]:
        return self._active

    @property
    def last_job(self) -> Optional[ExportJob]:
        return self._last

    @property
    def is_busy(self) -> bool:
        return self._active is not None

    async def execute(self, request: ExportRequest) -> ExportResult:
        """Run one export end to end."""
        if self._active is not None:
            raise ExportInProgressError(self._active.id)

        spec = request.spec
        job = ExportJob(output_name=output_name(spec.source.name, self._output_extension))
        self._active = job
        self._last = job
        job.start()
        logger.info("Export %s started: %s", job.id, job.output_name)

        try:
            pipeline = self._compiler.compile(spec)
            self._report(job, request, "compiled", 0.0)

            mask: Optional[bytes] = None
            if spec.background.enabled:
                mask_spec = generate_mask(
                    pipeline.video_width, pipeline.video_height, spec.background.border_radius
                )
                mask = self._mask_renderer.render(mask_spec)

            data = await self._engine.run(
                pipeline,
                request.source,
                mask,
                on_progress=lambda fraction: self._report(job, request, "encoding", fraction),
            )

            job.complete(output_size=len(data))
            logger.info("Export %s completed: %d bytes", job.id, len(data))
            return ExportResult(
                job_id=job.id,
                output_name=job.output_name,
                data=data,
                pipeline=pipeline,
                duration=pipeline.duration,
            )

        except ExportError as e:
            logger.error("Export %s failed: %s", job.id, e)
            job.fail(str(e))
            raise
        except Exception as e:
            logger.error("Export %s failed: %s", job.id, e)
            job.fail(str(e))
            raise ExportError(str(e)) from e
        finally:
            self._active = None

    @staticmethod
    def _report(job: ExportJob, request: ExportRequest, stage: str, fraction: float) -> None:
        """Record progress. Listener failures are logged but don't halt the export."""
        job.update_progress(stage, fraction)
        if request.on_progress is None:
            return
        try:
            request.on_progress(job.progress / 100)
        except Exception as e:
            logger.warning("Progress listener failed for %s: %s", job.id, e)
