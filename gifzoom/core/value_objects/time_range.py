"""TrimRange and ZoomWindow value objects on the source timeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TrimRange:
    """Immutable ``[start, end]`` window of the source clip kept in the export."""

    start_seconds: float
    end_seconds: float

    def __post_init__(self) -> None:
        if self.start_seconds < 0:
            object.__setattr__(self, "start_seconds", 0.0)
        if self.end_seconds <= self.start_seconds:
            raise ValueError(
                f"end_seconds ({self.end_seconds}) must be greater than start_seconds ({self.start_seconds})"
            )

    @property
    def duration(self) -> float:
        return self.end_seconds - self.start_seconds

    def contains(self, timestamp: float) -> bool:
        return self.start_seconds <= timestamp <= self.end_seconds

    def as_tuple(self) -> tuple[float, float]:
        return (self.start_seconds, self.end_seconds)


@dataclass(frozen=True)
class ZoomWindow:
    """Sub-interval of the trim range during which the crop is shown.

    ``start`` is the zoom-in time, ``end`` the optional zoom-out time.
    Consistency against a trim range and crop is checked by the edit
    specification, not here.
    """

    start: Optional[float] = None
    end: Optional[float] = None

    @property
    def is_set(self) -> bool:
        return self.start is not None

    @property
    def has_zoom_out(self) -> bool:
        return self.start is not None and self.end is not None
