"""Rounded-rectangle alpha mask used for background compositing."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MaskSpec:
    """A still image: transparent background, one opaque full-frame rounded rect.

    The frame engine only reads it as an alpha plane, so what matters is the
    geometry. It is regenerated for every export and never cached.
    """

    width: int
    height: int
    radius: int

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


def generate_mask(width: int, height: int, radius: int) -> MaskSpec:
    """Describe the mask for an output of ``width`` x ``height``.

    The mask is rendered at the output geometry so it always shares the
    video's aspect ratio; the radius is capped at half the shorter side.
    """
    width = max(1, int(width))
    height = max(1, int(height))
    radius = max(0, min(int(radius), min(width, height) // 2))
    return MaskSpec(width=width, height=height, radius=radius)
