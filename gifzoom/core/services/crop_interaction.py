"""
Crop rectangle editing driven by pointer gestures.

A gesture is pointer-down, any number of pointer-moves, then pointer-up (or
the pointer leaving the surface). The active gesture is a single enum-tagged
mode, latched on pointer-down, so a move can only ever be attributed to one
kind of edit.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gifzoom.core.services.coordinate_mapper import to_source_rect
from gifzoom.core.value_objects.geometry import DisplayRect, Point, Size, SourceRect

logger = logging.getLogger(__name__)

DEFAULT_HANDLE_RADIUS = 30.0
DEFAULT_MIN_CROP_SIZE = 20.0


class GestureMode(str, Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    RESIZING = "resizing"
    MOVING = "moving"


class Handle(str, Enum):
    TOP_LEFT = "tl"
    TOP_RIGHT = "tr"
    BOTTOM_LEFT = "bl"
    BOTTOM_RIGHT = "br"

    @property
    def is_left(self) -> bool:
        return self in (Handle.TOP_LEFT, Handle.BOTTOM_LEFT)

    @property
    def is_top(self) -> bool:
        return self in (Handle.TOP_LEFT, Handle.TOP_RIGHT)

    def corner_of(self, rect: DisplayRect) -> Point:
        return Point(
            rect.x if self.is_left else rect.right,
            rect.y if self.is_top else rect.bottom,
        )

    def opposite_corner_of(self, rect: DisplayRect) -> Point:
        return Point(
            rect.right if self.is_left else rect.x,
            rect.bottom if self.is_top else rect.y,
        )


_CURSORS = {
    Handle.TOP_LEFT: "nwse-resize",
    Handle.BOTTOM_RIGHT: "nwse-resize",
    Handle.TOP_RIGHT: "nesw-resize",
    Handle.BOTTOM_LEFT: "nesw-resize",
}


@dataclass(frozen=True)
class CropCommit:
    """Emitted when a gesture ends with a usable rectangle."""

    rect: SourceRect
    display_rect: DisplayRect
    zoom_in_time: float


class CropInteractionController:
    """Owns the display-space crop rectangle and the zoom-in time it stamps.

    The rectangle is always locked to the source aspect ratio and kept inside
    the canvas. Geometric edge cases are clamped, never raised.
    """

    def __init__(
        self,
        source_size: Size,
        display_size: Size,
        handle_radius: float = DEFAULT_HANDLE_RADIUS,
        min_size: float = DEFAULT_MIN_CROP_SIZE,
    ) -> None:
        self._source = source_size
        self._display = display_size
        self.handle_radius = handle_radius
        self.min_size = min_size

        self._rect: Optional[DisplayRect] = None
        self._zoom_in_time: Optional[float] = None
        self._mode = GestureMode.IDLE
        self._handle: Optional[Handle] = None
        self._anchor = Point(0, 0)
        self._grabbed = Point(0, 0)
        self._gesture_start = Point(0, 0)
        self._rect_at_start: Optional[DisplayRect] = None

    # -- state -----------------------------------------------------------------

    @property
    def crop_rect(self) -> Optional[DisplayRect]:
        return self._rect

    @property
    def zoom_in_time(self) -> Optional[float]:
        return self._zoom_in_time

    @property
    def mode(self) -> GestureMode:
        return self._mode

    @property
    def active_handle(self) -> Optional[Handle]:
        return self._handle

    @property
    def display_size(self) -> Size:
        return self._display

    @property
    def aspect_ratio(self) -> float:
        return self._source.aspect_ratio

    @property
    def source_rect(self) -> Optional[SourceRect]:
        if self._rect is None:
            return None
        return to_source_rect(self._rect, self._display, self._source)

    # -- gestures --------------------------------------------------------------

    def pointer_down(self, point: Point) -> GestureMode:
        mode, handle = self._hit_test(point)
        self._gesture_start = point
        self._rect_at_start = self._rect
        self._handle = handle

        if mode is GestureMode.RESIZING:
            self._anchor = handle.opposite_corner_of(self._rect)
            self._grabbed = handle.corner_of(self._rect)
        elif mode is GestureMode.DRAWING:
            self._anchor = self._clamp_point(point)
            self._rect = DisplayRect(self._anchor.x, self._anchor.y, 0, 0)

        self._mode = mode
        return mode

    def pointer_move(self, point: Point) -> Optional[DisplayRect]:
        if self._mode is GestureMode.DRAWING:
            self._rect = self._draw_to(point)
        elif self._mode is GestureMode.RESIZING:
            self._rect = self._resize_to(point)
        elif self._mode is GestureMode.MOVING:
            self._rect = self._move_to(point)
        return self._rect

    def pointer_up(self, playhead_time: float) -> Optional[CropCommit]:
        """End the gesture; keep whatever state exists at release."""
        mode = self._mode
        self._mode = GestureMode.IDLE
        self._handle = None
        if mode is GestureMode.IDLE or self._rect is None:
            return None

        source_rect = to_source_rect(self._rect, self._display, self._source)
        if self._rect.is_degenerate or source_rect.width == 0 or source_rect.height == 0:
            # A click that drew nothing leaves the previous crop untouched.
            self._rect = self._rect_at_start
            return None

        self._zoom_in_time = playhead_time
        logger.debug(
            "Crop committed: %dx%d+%d+%d at %.3fs",
            source_rect.width, source_rect.height, source_rect.x, source_rect.y, playhead_time,
        )
        return CropCommit(rect=source_rect, display_rect=self._rect, zoom_in_time=playhead_time)

    pointer_leave = pointer_up

    def clear(self) -> None:
        """Drop the crop and its zoom-in time; the only way to remove a zoom."""
        self._rect = None
        self._zoom_in_time = None
        self._mode = GestureMode.IDLE
        self._handle = None

    def mark_zoom_in(self, time: Optional[float]) -> Optional[float]:
        """Re-stamp (or drop, with ``None``) the zoom-in time without touching the rectangle."""
        if self._rect is None:
            return None
        self._zoom_in_time = time
        return time

    def resize_canvas(self, display_size: Size) -> None:
        """Follow a change of the render surface, keeping the rect proportional."""
        if self._rect is not None and not self._display.is_empty and not display_size.is_empty:
            self._rect = self._rect.scaled(
                display_size.width / self._display.width,
                display_size.height / self._display.height,
            )
        self._display = display_size

    def cursor_at(self, point: Point) -> str:
        mode, handle = self._hit_test(point)
        if mode is GestureMode.RESIZING:
            return _CURSORS[handle]
        if mode is GestureMode.MOVING:
            return "move"
        return "crosshair"

    # -- internals -------------------------------------------------------------

    def _hit_test(self, point: Point) -> tuple[GestureMode, Optional[Handle]]:
        if self._rect is None:
            return GestureMode.DRAWING, None
        for handle in Handle:
            corner = handle.corner_of(self._rect)
            if (
                abs(point.x - corner.x) < self.handle_radius
                and abs(point.y - corner.y) < self.handle_radius
            ):
                return GestureMode.RESIZING, handle
        if self._rect.contains(point):
            return GestureMode.MOVING, None
        return GestureMode.DRAWING, None

    def _clamp_point(self, point: Point) -> Point:
        return Point(
            min(max(point.x, 0.0), self._display.width),
            min(max(point.y, 0.0), self._display.height),
        )

    def _draw_to(self, point: Point) -> DisplayRect:
        p = self._clamp_point(point)
        anchor = self._anchor
        dx = p.x - anchor.x
        dy = p.y - anchor.y
        aspect = self.aspect_ratio

        room_x = anchor.x if dx < 0 else self._display.width - anchor.x
        room_y = anchor.y if dy < 0 else self._display.height - anchor.y
        width = min(abs(dx), room_x, room_y * aspect)
        height = width / aspect

        return DisplayRect(
            anchor.x - width if dx < 0 else anchor.x,
            anchor.y - height if dy < 0 else anchor.y,
            width,
            height,
        )

    def _resize_to(self, point: Point) -> DisplayRect:
        # The grabbed corner follows the pointer delta, not the pointer itself.
        p = self._clamp_point(self._grabbed.offset(
            point.x - self._gesture_start.x, point.y - self._gesture_start.y
        ))
        anchor = self._anchor
        handle = self._handle
        aspect = self.aspect_ratio

        width = anchor.x - p.x if handle.is_left else p.x - anchor.x
        width = max(width, self.min_size)

        room_x = anchor.x if handle.is_left else self._display.width - anchor.x
        room_y = anchor.y if handle.is_top else self._display.height - anchor.y
        width = max(0.0, min(width, room_x, room_y * aspect))
        height = width / aspect

        return DisplayRect(
            anchor.x - width if handle.is_left else anchor.x,
            anchor.y - height if handle.is_top else anchor.y,
            width,
            height,
        )

    def _move_to(self, point: Point) -> DisplayRect:
        start = self._rect_at_start
        moved = start.translated(point.x - self._gesture_start.x, point.y - self._gesture_start.y)
        x = min(max(moved.x, 0.0), max(0.0, self._display.width - moved.width))
        y = min(max(moved.y, 0.0), max(0.0, self._display.height - moved.height))
        return DisplayRect(x, y, moved.width, moved.height)
