from gifzoom.application.editor_session import EditorSession
from gifzoom.application.export_gif_service import ExportGifService

__all__ = [
    "EditorSession",
    "ExportGifService",
]
