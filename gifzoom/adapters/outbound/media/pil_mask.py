"""Pillow adapter rendering rounded-corner alpha masks.

Satisfies :class:`~gifzoom.ports.outbound.mask_renderer_port.MaskRendererPort`.
"""
from __future__ import annotations

import io
import logging

from PIL import Image, ImageDraw

from gifzoom.core.services.mask_generator import MaskSpec

logger = logging.getLogger(__name__)

_OPAQUE = (255, 255, 255, 255)
_TRANSPARENT = (0, 0, 0, 0)


class PILMaskRenderer:
    """Draws a :class:`MaskSpec` into an RGBA PNG."""

    def draw(self, mask: MaskSpec) -> Image.Image:
        image = Image.new("RGBA", (mask.width, mask.height), _TRANSPARENT)
        draw = ImageDraw.Draw(image)
        # Pillow's box is inclusive of the far edge
        draw.rounded_rectangle(
            [0, 0, mask.width - 1, mask.height - 1],
            radius=mask.radius,
            fill=_OPAQUE,
        )
        return image

    def render(self, mask: MaskSpec) -> bytes:
        buffer = io.BytesIO()
        self.draw(mask).save(buffer, format="PNG")
        logger.debug("Mask rendered: %dx%d r=%d", mask.width, mask.height, mask.radius)
        return buffer.getvalue()
