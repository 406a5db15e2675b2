"""
Timeline editing: trim handles, zoom markers and the playhead.

Drags are modal. The target is latched on pointer-down and owns every move
until release, whatever the pointer position.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from gifzoom.core.value_objects.time_range import TrimRange, ZoomWindow


TRIM_MIN_GAP = 0.5
ZOOM_MIN_GAP = 0.1
MARKER_HIT_RADIUS = 8.0


class DragTarget(str, Enum):
    NONE = "none"
    SCRUBBER = "scrubber"
    TRIM_START = "trim_start"
    TRIM_END = "trim_end"
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"


# Tie-break order when markers overlap under the pointer.
_HIT_PRIORITY = (
    DragTarget.ZOOM_IN,
    DragTarget.ZOOM_OUT,
    DragTarget.TRIM_START,
    DragTarget.TRIM_END,
    DragTarget.SCRUBBER,
)


class TimelineController:
    """Owns trim range, zoom markers and playhead for one source clip."""

    def __init__(
        self,
        duration: float,
        track_left: float = 0.0,
        track_width: float = 1.0,
        trim_min_gap: float = TRIM_MIN_GAP,
        zoom_min_gap: float = ZOOM_MIN_GAP,
        marker_hit_radius: float = MARKER_HIT_RADIUS,
        on_seek: Optional[Callable[[float], None]] = None,
        on_zoom_change: Optional[Callable[[Optional[float], Optional[float]], None]] = None,
    ) -> None:
        self.duration = max(0.0, duration)
        self.track_left = track_left
        self.track_width = track_width
        self.trim_min_gap = trim_min_gap
        self.zoom_min_gap = zoom_min_gap
        self.marker_hit_radius = marker_hit_radius
        self.on_seek = on_seek
        self.on_zoom_change = on_zoom_change

        self.trim_start = 0.0
        self.trim_end = self.duration
        self.zoom_in: Optional[float] = None
        self.zoom_out: Optional[float] = None
        self.playhead = 0.0
        self._drag = DragTarget.NONE

    # -- derived state ---------------------------------------------------------

    @property
    def drag_target(self) -> DragTarget:
        return self._drag

    @property
    def trim(self) -> TrimRange:
        return TrimRange(self.trim_start, self.trim_end)

    @property
    def zoom_window(self) -> ZoomWindow:
        return ZoomWindow(start=self.zoom_in, end=self.zoom_out)

    def set_track(self, left: float, width: float) -> None:
        self.track_left = left
        self.track_width = width

    def time_at(self, pointer_x: float) -> float:
        if self.track_width <= 0:
            return 0.0
        fraction = (pointer_x - self.track_left) / self.track_width
        return min(max(fraction, 0.0), 1.0) * self.duration

    def position_of(self, time: float) -> float:
        if self.duration <= 0:
            return self.track_left
        return self.track_left + (time / self.duration) * self.track_width

    # -- pointer input ---------------------------------------------------------

    def hit_test(self, pointer_x: float) -> DragTarget:
        best = DragTarget.NONE
        best_distance = self.marker_hit_radius
        for target in _HIT_PRIORITY:
            time = self._marker_time(target)
            if time is None:
                continue
            distance = abs(self.position_of(time) - pointer_x)
            if distance < best_distance:
                best, best_distance = target, distance
        return best

    def pointer_down(self, pointer_x: float, target: Optional[DragTarget] = None) -> DragTarget:
        """Start a drag on ``target`` (or whatever marker is under the pointer).

        A press on empty track seeks straight away and latches nothing.
        """
        if target is None:
            target = self.hit_test(pointer_x)
        if target is not DragTarget.NONE and self._marker_time(target) is None:
            target = DragTarget.NONE

        if target is DragTarget.NONE:
            if self.duration > 0:
                self.seek(self.time_at(pointer_x))
            self._drag = DragTarget.NONE
            return DragTarget.NONE

        self._drag = target
        return target

    def pointer_move(self, pointer_x: float) -> Optional[float]:
        if self._drag is DragTarget.NONE or self.duration <= 0:
            return None

        time = self.time_at(pointer_x)
        if self._drag is DragTarget.SCRUBBER:
            return self.seek(time)
        if self._drag is DragTarget.TRIM_START:
            return self.seek(self._drag_trim_start(time))
        if self._drag is DragTarget.TRIM_END:
            return self.seek(self._drag_trim_end(time))
        if self._drag is DragTarget.ZOOM_IN:
            return self.seek(self.set_zoom_in(time))
        return self.seek(self.set_zoom_out(time))

    def pointer_up(self) -> None:
        self._drag = DragTarget.NONE

    # -- programmatic edits ----------------------------------------------------

    def seek(self, time: float) -> float:
        self.playhead = min(max(time, 0.0), self.duration)
        if self.on_seek is not None:
            self.on_seek(self.playhead)
        return self.playhead

    def set_playhead(self, time: float) -> None:
        """Follow playback without issuing a seek request."""
        self.playhead = min(max(time, 0.0), self.duration)

    def set_trim(self, start: float, end: float) -> TrimRange:
        self.trim_start = max(0.0, min(start, self.duration - self.trim_min_gap))
        self.trim_end = min(self.duration, max(end, self.trim_start + self.trim_min_gap))
        self._reconcile_zoom()
        return self.trim

    def set_zoom_in(self, time: float) -> float:
        if self.zoom_out is not None and self.zoom_out < self.trim_start + self.zoom_min_gap:
            self.zoom_out = min(self.trim_end, self.trim_start + self.zoom_min_gap)
        upper = self.zoom_out - self.zoom_min_gap if self.zoom_out is not None else self.trim_end
        self.zoom_in = min(max(time, self.trim_start), upper)
        self._zoom_changed()
        return self.zoom_in

    def set_zoom_out(self, time: float) -> float:
        if self.zoom_in is not None and self.zoom_in > self.trim_end - self.zoom_min_gap:
            # Make room for the window when zoom-in sits at the very end.
            self.zoom_in = max(self.trim_start, self.trim_end - self.zoom_min_gap)
        lower = self.zoom_in + self.zoom_min_gap if self.zoom_in is not None else self.trim_start
        self.zoom_out = max(min(time, self.trim_end), lower)
        self._zoom_changed()
        return self.zoom_out

    def clear_zoom(self) -> None:
        self.zoom_in = None
        self.zoom_out = None
        self._zoom_changed()

    # -- internals -------------------------------------------------------------

    def _marker_time(self, target: DragTarget) -> Optional[float]:
        if target is DragTarget.SCRUBBER:
            return self.playhead
        if target is DragTarget.TRIM_START:
            return self.trim_start
        if target is DragTarget.TRIM_END:
            return self.trim_end
        if target is DragTarget.ZOOM_IN:
            return self.zoom_in
        if target is DragTarget.ZOOM_OUT:
            return self.zoom_out
        return None

    def _drag_trim_start(self, time: float) -> float:
        self.trim_start = max(0.0, min(time, self.trim_end - self.trim_min_gap))
        self._reconcile_zoom()
        return self.trim_start

    def _drag_trim_end(self, time: float) -> float:
        self.trim_end = min(self.duration, max(time, self.trim_start + self.trim_min_gap))
        self._reconcile_zoom()
        return self.trim_end

    def _reconcile_zoom(self) -> None:
        """Pull zoom markers back inside the trim range, preserving their order."""
        if self.zoom_in is not None:
            upper = self.trim_end
            if self.zoom_out is not None:
                upper = self.trim_end - self.zoom_min_gap
            self.zoom_in = max(min(self.zoom_in, upper), self.trim_start)
        if self.zoom_out is not None:
            lower = self.zoom_in + self.zoom_min_gap if self.zoom_in is not None else self.trim_start
            self.zoom_out = min(max(self.zoom_out, lower), self.trim_end)
        if self.zoom_in is not None or self.zoom_out is not None:
            self._zoom_changed()

    def _zoom_changed(self) -> None:
        if self.on_zoom_change is not None:
            self.on_zoom_change(self.zoom_in, self.zoom_out)
