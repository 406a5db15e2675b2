"""Inbound port for GIF export."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from gifzoom.application.dto.export_request import ExportRequest
    from gifzoom.application.dto.export_result import ExportResult


@runtime_checkable
class ExportGifUseCase(Protocol):
    async def execute(self, request: ExportRequest) -> ExportResult: ...
