"""EditSpecification - the immutable snapshot handed to the filter-graph compiler."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Optional

from gifzoom.core.exceptions import InvalidEditError
from gifzoom.core.value_objects.export_settings import BackgroundSettings, ExportSettings
from gifzoom.core.value_objects.geometry import Size, SourceRect
from gifzoom.core.value_objects.time_range import TrimRange, ZoomWindow

# Smallest zoom window the editing controllers can produce.
ZOOM_MIN_GAP = 0.1

_EPSILON = 1e-6


@dataclass(frozen=True)
class SourceVideo:
    """Metadata of the clip being edited."""

    name: str
    width: int
    height: int
    duration: float

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


def output_name(source_name: str, extension: str = ".gif") -> str:
    """Replace the extension of ``source_name`` with ``extension``."""
    path = PurePath(source_name)
    stem = path.stem if path.suffix else path.name
    return f"{stem}{extension}"


@dataclass(frozen=True)
class EditSpecification:
    """Frozen composition of every edit that shapes one export.

    Built fresh for each export request and never shared with live editing
    state, so edits made while an export is in flight cannot reach it.
    """

    source: SourceVideo
    trim: TrimRange
    crop: Optional[SourceRect] = None
    zoom: ZoomWindow = field(default_factory=ZoomWindow)
    export: ExportSettings = field(default_factory=ExportSettings)
    background: BackgroundSettings = field(default_factory=BackgroundSettings)
    zoom_min_gap: float = ZOOM_MIN_GAP

    def __post_init__(self) -> None:
        if self.source.width <= 0 or self.source.height <= 0:
            raise InvalidEditError("source video has no frame geometry")
        if self.trim.end_seconds > self.source.duration + _EPSILON:
            raise InvalidEditError(
                f"trim end {self.trim.end_seconds} exceeds duration {self.source.duration}"
            )
        if self.crop is not None:
            self._validate_crop(self.crop)
        self._validate_zoom()

    def _validate_crop(self, crop: SourceRect) -> None:
        if crop.width <= 0 or crop.height <= 0:
            raise InvalidEditError(f"crop rect is empty: {crop}")
        if crop.width % 2 or crop.height % 2:
            raise InvalidEditError(f"crop dimensions must be even: {crop.width}x{crop.height}")
        if not crop.fits_within(self.source.size):
            raise InvalidEditError(
                f"crop rect {crop} exceeds source frame {self.source.width}x{self.source.height}"
            )

    def _validate_zoom(self) -> None:
        start, end = self.zoom.start, self.zoom.end
        if start is not None:
            if self.crop is None:
                raise InvalidEditError("zoom-in time requires a crop rect")
            if start < self.trim.start_seconds - _EPSILON or start > self.trim.end_seconds + _EPSILON:
                raise InvalidEditError(f"zoom-in time {start} lies outside the trim range")
        if end is not None:
            if end > self.trim.end_seconds + _EPSILON:
                raise InvalidEditError(f"zoom-out time {end} exceeds trim end {self.trim.end_seconds}")
            if start is not None and end < start + self.zoom_min_gap - _EPSILON:
                raise InvalidEditError(
                    f"zoom-out time {end} must be at least {self.zoom_min_gap}s after zoom-in {start}"
                )

    @property
    def output_name(self) -> str:
        return output_name(self.source.name)

    @property
    def duration(self) -> float:
        return self.trim.duration
