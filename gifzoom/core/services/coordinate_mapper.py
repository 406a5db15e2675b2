"""
Conversion between pointer/display space and source-video pixel space.
Stateless; every function clamps instead of rejecting out-of-range input.
"""
from __future__ import annotations

import math

from gifzoom.core.value_objects.geometry import DisplayRect, Point, Size, SourceRect


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def even_floor(value: float) -> int:
    """Largest even integer not above ``value`` (never negative)."""
    whole = int(math.floor(value))
    if whole <= 0:
        return 0
    return whole - (whole % 2)


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def fit_render_size(container: Size, source: Size) -> Size:
    """Letterbox ``source`` inside ``container`` preserving its aspect ratio.

    The result is the effective render rectangle both axis scales derive
    from; using the raw container size would skew one axis.
    """
    if container.is_empty or source.is_empty:
        return Size(0, 0)
    video_aspect = source.aspect_ratio
    if container.aspect_ratio > video_aspect:
        height = container.height
        return Size(height * video_aspect, height)
    width = container.width
    return Size(width, width / video_aspect)


def scale_factors(display: Size, source: Size) -> tuple[float, float]:
    if display.is_empty:
        return 1.0, 1.0
    return source.width / display.width, source.height / display.height


def to_source(point: Point, display: Size, source: Size) -> Point:
    sx, sy = scale_factors(display, source)
    return Point(
        _clamp(point.x * sx, 0, source.width),
        _clamp(point.y * sy, 0, source.height),
    )


def to_display(rect: SourceRect, display: Size, source: Size) -> DisplayRect:
    sx, sy = scale_factors(display, source)
    return DisplayRect(
        round_half_up(rect.x / sx),
        round_half_up(rect.y / sy),
        round_half_up(rect.width / sx),
        round_half_up(rect.height / sy),
    )


def to_source_rect(rect: DisplayRect, display: Size, source: Size) -> SourceRect:
    """Map a display rect into source pixels, clamped and with even size.

    The result always lies inside ``[0, W] x [0, H]``. Width and height are
    floored to even numbers because the encoder works on 2x2 blocks.
    """
    sx, sy = scale_factors(display, source)
    x, width = rect.x, rect.width
    if width < 0:
        x, width = x + width, -width
    y, height = rect.y, rect.height
    if height < 0:
        y, height = y + height, -height

    left = int(_clamp(round_half_up(x * sx), 0, source.width))
    top = int(_clamp(round_half_up(y * sy), 0, source.height))
    right = int(_clamp(round_half_up((x + width) * sx), left, source.width))
    bottom = int(_clamp(round_half_up((y + height) * sy), top, source.height))

    return SourceRect(left, top, even_floor(right - left), even_floor(bottom - top))
