"""DTO for GIF export results."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from gifzoom.core.entities.pipeline import PipelineDescription


@dataclass
class ExportResult:
    job_id: str
    output_name: str
    data: bytes = b""
    pipeline: Optional[PipelineDescription] = None
    success: bool = True
    duration: float = 0.0

    @property
    def size(self) -> int:
        return len(self.data)

    def to_dict(self) -> dict:
        return {
            "job_id": self.job_id,
            "output_name": self.output_name,
            "success": self.success,
            "size": self.size,
            "duration": self.duration,
            "width": self.pipeline.width if self.pipeline else 0,
            "height": self.pipeline.height if self.pipeline else 0,
        }
