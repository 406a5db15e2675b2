"""Port for rasterizing background masks."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from gifzoom.core.services.mask_generator import MaskSpec


@runtime_checkable
class MaskRendererPort(Protocol):
    def render(self, mask: MaskSpec) -> bytes: ...
