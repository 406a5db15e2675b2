"""DTO for GIF export requests."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional
from gifzoom.core.entities.edit_specification import EditSpecification


@dataclass
class ExportRequest:
    spec: EditSpecification
    source: bytes
    on_progress: Optional[Callable[[float], None]] = None
