from gifzoom.core.entities.edit_specification import EditSpecification, SourceVideo, output_name
from gifzoom.core.entities.export_job import ExportJob, ExportStatus
from gifzoom.core.entities.pipeline import (
    OutputSpec,
    PipelineDescription,
    PipelineShape,
    Segment,
    Stage,
    StreamInput,
)

__all__ = [
    "EditSpecification",
    "SourceVideo",
    "output_name",
    "ExportJob",
    "ExportStatus",
    "PipelineDescription",
    "PipelineShape",
    "Stage",
    "StreamInput",
    "OutputSpec",
    "Segment",
]
