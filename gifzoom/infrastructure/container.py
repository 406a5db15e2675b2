"""
Dependency container.
Wires together ports and adapters based on configuration.
"""
from __future__ import annotations

import logging
from typing import Optional

from gifzoom.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class ApplicationContainer:
    """Simplified container that builds concrete instances from settings.

    Usage::

        container = ApplicationContainer(settings)
        service = container.export_service()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cache: dict[str, object] = {}

    def _get_or_create(self, key: str, factory):
        if key not in self._cache:
            self._cache[key] = factory(self.settings)
        return self._cache[key]

    # ── Lazy factory helpers ──────────────────────────────────────

    @staticmethod
    def _build_frame_engine(settings: Settings):
        from gifzoom.adapters.outbound.ffmpeg.ffmpeg_gif_engine import FFmpegGifEngine
        return FFmpegGifEngine(
            ffmpeg_path=settings.ffmpeg.path,
            timeout=settings.ffmpeg.timeout,
            log_level=settings.ffmpeg.log_level,
        )

    @staticmethod
    def _build_mask_renderer(settings: Settings):
        from gifzoom.adapters.outbound.media.pil_mask import PILMaskRenderer
        return PILMaskRenderer()

    @staticmethod
    def _build_compiler(settings: Settings):
        from gifzoom.core.services.filter_graph_compiler import FilterGraphCompiler
        return FilterGraphCompiler()

    # ── Port accessors ─────────────────────────────────────────────

    def frame_engine(self):
        return self._get_or_create("frame_engine", self._build_frame_engine)

    def mask_renderer(self):
        return self._get_or_create("mask_renderer", self._build_mask_renderer)

    def compiler(self):
        return self._get_or_create("compiler", self._build_compiler)

    # ── Application services ──────────────────────────────────────

    def export_service(self):
        if "export_service" not in self._cache:
            from gifzoom.application.export_gif_service import ExportGifService
            self._cache["export_service"] = ExportGifService(
                engine=self.frame_engine(),
                mask_renderer=self.mask_renderer(),
                compiler=self.compiler(),
                output_extension=self.settings.export.output_extension,
            )
        return self._cache["export_service"]

    def default_export_settings(self):
        from gifzoom.core.value_objects.export_settings import ExportSettings
        defaults = self.settings.export
        return ExportSettings(
            fps=defaults.fps,
            width=defaults.width,
            colors=defaults.colors,
            dither=defaults.dither,
            loop=defaults.loop,
            quality_label=defaults.quality,
        )

    def default_background(self):
        from gifzoom.core.value_objects.export_settings import BackgroundSettings
        defaults = self.settings.background
        return BackgroundSettings(
            enabled=defaults.enabled,
            color=defaults.color,
            padding=defaults.padding,
            border_radius=defaults.border_radius,
        )

    def editor_session(self, source, container_size):
        """A fresh session per loaded clip; never cached."""
        from gifzoom.application.editor_session import EditorSession
        interaction = self.settings.interaction
        return EditorSession(
            source,
            container_size,
            export=self.default_export_settings(),
            background=self.default_background(),
            handle_radius=interaction.handle_hit_radius,
            min_crop_size=interaction.min_crop_size,
            trim_min_gap=interaction.trim_min_gap,
            zoom_min_gap=interaction.zoom_min_gap,
            marker_hit_radius=interaction.marker_hit_radius,
        )
