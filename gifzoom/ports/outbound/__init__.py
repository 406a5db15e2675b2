from gifzoom.ports.outbound.frame_engine_port import FrameEnginePort, ProgressCallback
from gifzoom.ports.outbound.mask_renderer_port import MaskRendererPort

__all__ = [
    "FrameEnginePort",
    "MaskRendererPort",
    "ProgressCallback",
]
