from gifzoom.core.services.crop_interaction import CropCommit, CropInteractionController, GestureMode, Handle
from gifzoom.core.services.filter_graph_compiler import FilterGraphCompiler, compile_pipeline, target_geometry
from gifzoom.core.services.mask_generator import MaskSpec, generate_mask
from gifzoom.core.services.timeline_controller import DragTarget, TimelineController

__all__ = [
    "CropInteractionController",
    "CropCommit",
    "GestureMode",
    "Handle",
    "TimelineController",
    "DragTarget",
    "FilterGraphCompiler",
    "compile_pipeline",
    "target_geometry",
    "MaskSpec",
    "generate_mask",
]
