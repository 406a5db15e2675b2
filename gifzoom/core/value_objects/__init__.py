from gifzoom.core.value_objects.export_settings import BackgroundSettings, ExportSettings
from gifzoom.core.value_objects.geometry import DisplayRect, Point, Size, SourceRect
from gifzoom.core.value_objects.time_range import TrimRange, ZoomWindow

__all__ = [
    "Point",
    "Size",
    "DisplayRect",
    "SourceRect",
    "TrimRange",
    "ZoomWindow",
    "ExportSettings",
    "BackgroundSettings",
]
