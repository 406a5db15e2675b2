"""ExportJob entity - lifecycle of one export attempt."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ExportStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ExportJob:
    """Tracks a single export from submission to a terminal state.

    There is no partial success: a job either completes with an output
    artifact or fails with nothing.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    output_name: str = ""
    status: ExportStatus = ExportStatus.PENDING
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    progress: int = 0
    current_stage: str = ""
    output_size: int = 0
    error: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (ExportStatus.COMPLETED, ExportStatus.FAILED)

    def start(self) -> None:
        self.status = ExportStatus.RUNNING
        self.progress = 0
        self.updated_at = datetime.utcnow()

    def update_progress(self, stage: str, fraction: float) -> None:
        self.current_stage = stage
        self.progress = max(0, min(100, round(fraction * 100)))
        self.updated_at = datetime.utcnow()

    def complete(self, output_size: int) -> None:
        self.status = ExportStatus.COMPLETED
        self.output_size = output_size
        self.progress = 100
        self.updated_at = datetime.utcnow()

    def fail(self, error: str) -> None:
        self.status = ExportStatus.FAILED
        self.error = error
        self.progress = 0
        self.updated_at = datetime.utcnow()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "output_name": self.output_name,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "progress": self.progress,
            "current_stage": self.current_stage,
            "output_size": self.output_size,
            "error": self.error,
        }
