from gifzoom.ports.inbound.export_gif_use_case import ExportGifUseCase

__all__ = [
    "ExportGifUseCase",
]
