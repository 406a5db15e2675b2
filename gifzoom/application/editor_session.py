"""
Editing session for one loaded clip.

Owns both interaction controllers and the export/background settings, and
turns their live state into an immutable EditSpecification on demand.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from gifzoom.core.entities.edit_specification import EditSpecification, SourceVideo
from gifzoom.core.exceptions import InvalidEditError
from gifzoom.core.services.crop_interaction import (
    DEFAULT_HANDLE_RADIUS,
    DEFAULT_MIN_CROP_SIZE,
    CropCommit,
    CropInteractionController,
)
from gifzoom.core.services.coordinate_mapper import fit_render_size
from gifzoom.core.services.timeline_controller import (
    MARKER_HIT_RADIUS,
    TRIM_MIN_GAP,
    ZOOM_MIN_GAP,
    TimelineController,
)
from gifzoom.core.value_objects.export_settings import BackgroundSettings, ExportSettings
from gifzoom.core.value_objects.geometry import Point, Size
from gifzoom.core.value_objects.time_range import TrimRange, ZoomWindow

logger = logging.getLogger(__name__)


class EditorSession:
    """Everything the user has edited on one source clip."""

    def __init__(
        self,
        source: SourceVideo,
        container_size: Size,
        export: Optional[ExportSettings] = None,
        background: Optional[BackgroundSettings] = None,
        handle_radius: float = DEFAULT_HANDLE_RADIUS,
        min_crop_size: float = DEFAULT_MIN_CROP_SIZE,
        trim_min_gap: float = TRIM_MIN_GAP,
        zoom_min_gap: float = ZOOM_MIN_GAP,
        marker_hit_radius: float = MARKER_HIT_RADIUS,
        on_seek: Optional[Callable[[float], None]] = None,
    ):
        self.source = source
        self.export = export or ExportSettings()
        self.background = background or BackgroundSettings()
        self.zoom_min_gap = zoom_min_gap
        self.crop = CropInteractionController(
            source.size,
            fit_render_size(container_size, source.size),
            handle_radius=handle_radius,
            min_size=min_crop_size,
        )
        self.timeline = TimelineController(
            source.duration,
            trim_min_gap=trim_min_gap,
            zoom_min_gap=zoom_min_gap,
            marker_hit_radius=marker_hit_radius,
            on_seek=on_seek,
            on_zoom_change=self._follow_zoom,
        )

    # -- crop surface ----------------------------------------------------------

    def crop_pointer_down(self, x: float, y: float):
        return self.crop.pointer_down(Point(x, y))

    def crop_pointer_move(self, x: float, y: float):
        return self.crop.pointer_move(Point(x, y))

    def crop_pointer_up(self) -> Optional[CropCommit]:
        commit = self.crop.pointer_up(self.timeline.playhead)
        if commit is not None:
            self._stamp_zoom_in(commit.zoom_in_time)
        return commit

    crop_pointer_leave = crop_pointer_up

    def resize_container(self, container_size: Size) -> Size:
        display = fit_render_size(container_size, self.source.size)
        self.crop.resize_canvas(display)
        return display

    def clear_crop(self) -> None:
        """Remove the crop; the zoom window goes with it."""
        self.crop.clear()
        self.timeline.clear_zoom()

    # -- zoom markers ----------------------------------------------------------

    def mark_zoom_in(self) -> Optional[float]:
        """Place the zoom-in marker at the playhead. Needs a crop."""
        if self.crop.crop_rect is None:
            return None
        return self._stamp_zoom_in(self.timeline.playhead)

    def mark_zoom_out(self) -> Optional[float]:
        if self.crop.crop_rect is None or self.timeline.zoom_in is None:
            return None
        return self.timeline.set_zoom_out(self.timeline.playhead)

    def _stamp_zoom_in(self, time: float) -> float:
        return self.timeline.set_zoom_in(time)

    def _follow_zoom(self, zoom_in: Optional[float], zoom_out: Optional[float]) -> None:
        # The timeline owns the markers; the crop controller mirrors zoom-in.
        self.crop.mark_zoom_in(zoom_in)

    # -- settings --------------------------------------------------------------

    def apply_preset(self, name: str) -> ExportSettings:
        self.export = ExportSettings.from_preset(name)
        return self.export

    def update_export_settings(self, **changes) -> ExportSettings:
        self.export = self.export.with_changes(**changes)
        return self.export

    def set_background(self, **changes) -> BackgroundSettings:
        values = {
            "enabled": self.background.enabled,
            "color": self.background.color,
            "padding": self.background.padding,
            "border_radius": self.background.border_radius,
        }
        values.update(changes)
        self.background = BackgroundSettings(**values)
        return self.background

    # -- snapshot --------------------------------------------------------------

    def snapshot(self) -> EditSpecification:
        """Freeze the current edits for an export request."""
        try:
            trim = TrimRange(self.timeline.trim_start, self.timeline.trim_end)
        except ValueError as e:
            raise InvalidEditError(str(e)) from e

        crop = self.crop.source_rect
        if crop is not None and (crop.width == 0 or crop.height == 0):
            crop = None
        zoom = ZoomWindow()
        if crop is not None and self.timeline.zoom_in is not None:
            zoom = ZoomWindow(start=self.timeline.zoom_in, end=self.timeline.zoom_out)

        spec = EditSpecification(
            source=self.source,
            trim=trim,
            crop=crop,
            zoom=zoom,
            export=self.export,
            background=self.background,
            zoom_min_gap=self.zoom_min_gap,
        )
        logger.debug("Snapshot taken: trim=%s crop=%s zoom=%s", trim.as_tuple(), crop, zoom)
        return spec
