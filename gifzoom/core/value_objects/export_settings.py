"""ExportSettings and BackgroundSettings value objects."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from gifzoom.core.exceptions import InvalidEditError

FPS_RANGE = (5, 30)
WIDTH_RANGE = (320, 1200)
COLORS_RANGE = (32, 256)
DITHER_RANGE = (0, 5)
LOOP_CHOICES = (-1, 0, 1, 2, 3, 5, 10)

CUSTOM_QUALITY = "custom"

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def _check_range(name: str, value: int, bounds: tuple[int, int]) -> None:
    low, high = bounds
    if not low <= value <= high:
        raise InvalidEditError(f"{name} must be within [{low}, {high}], got {value}")


@dataclass(frozen=True)
class ExportSettings:
    """GIF output parameters.

    ``loop`` follows the GIF muxer convention: ``0`` loops forever, ``-1``
    plays once, ``n > 0`` plays ``n`` additional times after the first.
    """

    fps: int = 15
    width: int = 600
    colors: int = 256
    dither: int = 5
    loop: int = 0
    quality_label: str = "high"

    def __post_init__(self) -> None:
        _check_range("fps", self.fps, FPS_RANGE)
        _check_range("width", self.width, WIDTH_RANGE)
        _check_range("colors", self.colors, COLORS_RANGE)
        _check_range("dither", self.dither, DITHER_RANGE)
        if self.loop not in LOOP_CHOICES:
            raise InvalidEditError(f"loop must be one of {LOOP_CHOICES}, got {self.loop}")

    @classmethod
    def from_preset(cls, name: str) -> ExportSettings:
        try:
            values = QUALITY_PRESETS[name]
        except KeyError:
            raise InvalidEditError(f"Unknown quality preset: {name}") from None
        return cls(quality_label=name, **values)

    def with_changes(self, **changes) -> ExportSettings:
        """Return a copy with individual values changed, relabelled as custom."""
        if "quality_label" not in changes:
            changes["quality_label"] = CUSTOM_QUALITY
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "fps": self.fps,
            "width": self.width,
            "colors": self.colors,
            "dither": self.dither,
            "loop": self.loop,
            "quality": self.quality_label,
        }


QUALITY_PRESETS: dict[str, dict[str, int]] = {
    "high": {"fps": 15, "width": 800, "colors": 256, "dither": 5, "loop": 0},
    "medium": {"fps": 12, "width": 600, "colors": 128, "dither": 4, "loop": 0},
    "low": {"fps": 10, "width": 480, "colors": 64, "dither": 3, "loop": 0},
}


@dataclass(frozen=True)
class BackgroundSettings:
    """Rounded-corner framing on a solid color background.

    ``padding`` is a fraction of the output size added on each side.
    """

    enabled: bool = False
    color: str = "#292929"
    padding: float = 0.1
    border_radius: int = 16

    def __post_init__(self) -> None:
        if not _HEX_COLOR.match(self.color):
            raise InvalidEditError(f"color must be a #RRGGBB hex string, got {self.color!r}")
        if self.padding < 0:
            raise InvalidEditError(f"padding must be >= 0, got {self.padding}")
        if self.border_radius < 0:
            raise InvalidEditError(f"border_radius must be >= 0, got {self.border_radius}")

