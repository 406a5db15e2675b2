"""Port for the external frame-processing engine."""
from __future__ import annotations
from typing import TYPE_CHECKING, Callable, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from gifzoom.core.entities.pipeline import PipelineDescription

ProgressCallback = Callable[[float], None]


@runtime_checkable
class FrameEnginePort(Protocol):
    async def run(
        self,
        pipeline: PipelineDescription,
        source: bytes,
        mask: Optional[bytes] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> bytes: ...
