"""
Pipeline preview API routes.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from gifzoom.core.entities.edit_specification import EditSpecification, SourceVideo
from gifzoom.core.value_objects.export_settings import (
    QUALITY_PRESETS,
    BackgroundSettings,
    ExportSettings,
)
from gifzoom.core.value_objects.geometry import SourceRect
from gifzoom.core.value_objects.time_range import TrimRange, ZoomWindow

router = APIRouter()


class SourceModel(BaseModel):
    name: str = "clip.mp4"
    width: int
    height: int
    duration: float


class TrimModel(BaseModel):
    start: float = 0.0
    end: float


class CropModel(BaseModel):
    x: int
    y: int
    width: int
    height: int


class ZoomModel(BaseModel):
    start: Optional[float] = None
    end: Optional[float] = None


class ExportModel(BaseModel):
    fps: int = 15
    width: int = 600
    colors: int = 256
    dither: int = 5
    loop: int = 0
    quality: str = "high"


class BackgroundModel(BaseModel):
    enabled: bool = False
    color: str = "#292929"
    padding: float = 0.1
    border_radius: int = 16


class PipelineRequest(BaseModel):
    source: SourceModel
    trim: Optional[TrimModel] = None
    crop: Optional[CropModel] = None
    zoom: ZoomModel = Field(default_factory=ZoomModel)
    export: ExportModel = Field(default_factory=ExportModel)
    background: BackgroundModel = Field(default_factory=BackgroundModel)

    def to_spec(self) -> EditSpecification:
        source = SourceVideo(**self.source.model_dump())
        trim = self.trim or TrimModel(end=source.duration)
        export = self.export.model_dump()
        return EditSpecification(
            source=source,
            trim=TrimRange(trim.start, trim.end),
            crop=SourceRect(**self.crop.model_dump()) if self.crop else None,
            zoom=ZoomWindow(start=self.zoom.start, end=self.zoom.end),
            export=ExportSettings(quality_label=export.pop("quality"), **export),
            background=BackgroundSettings(**self.background.model_dump()),
        )


@router.get("/presets")
async def list_presets():
    return {
        "presets": {
            name: ExportSettings.from_preset(name).to_dict() for name in QUALITY_PRESETS
        },
        "default": ExportSettings().to_dict(),
    }


@router.post("/pipeline")
async def compile_pipeline(request: Request, body: PipelineRequest):
    """Compile an edit specification and return its stages and filter graph."""
    spec = body.to_spec()
    pipeline = request.app.state.container.compiler().compile(spec)
    result = pipeline.to_dict()
    result["output_name"] = spec.output_name
    return result
