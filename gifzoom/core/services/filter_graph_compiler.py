"""
Filter-graph compiler - pure domain logic.

Turns an EditSpecification into a PipelineDescription: trimmed segments,
each with its own reset time base, resampled and scaled to one shared
geometry, concatenated, optionally framed on a background, then reduced to a
single palette shared by every output frame.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from gifzoom.core.entities.edit_specification import EditSpecification
from gifzoom.core.entities.pipeline import (
    OutputSpec,
    PipelineDescription,
    PipelineShape,
    Segment,
    Stage,
    StreamInput,
)
from gifzoom.core.services.coordinate_mapper import round_half_up
from gifzoom.core.value_objects.geometry import SourceRect

logger = logging.getLogger(__name__)

SOURCE_LABEL = "0:v"
MASK_LABEL = "1:v"
OUTPUT_LABEL = "out"


def target_geometry(spec: EditSpecification) -> tuple[int, int]:
    """Even output width/height for ``spec``.

    An odd requested width is decremented by one; the height follows the
    source aspect ratio and is forced even the same way.
    """
    width = spec.export.width - (spec.export.width % 2)
    height = round_half_up(width * spec.source.height / spec.source.width)
    height -= height % 2
    return width, max(2, height)


class _GraphBuilder:
    def __init__(self) -> None:
        self.stages: list[Stage] = []

    def add(self, operation: str, inputs: tuple[str, ...], outputs: tuple[str, ...],
            *args: Any, **params: Any) -> str:
        self.stages.append(Stage(operation, inputs, outputs, args, params))
        return outputs[0]


class FilterGraphCompiler:
    """Compiles edit snapshots into pipeline descriptions.

    Holds configuration only; ``compile`` has no hidden state, so the same
    snapshot always yields an identical description.
    """

    def __init__(self, scale_flags: str = "lanczos", dither_mode: str = "bayer"):
        self.scale_flags = scale_flags
        self.dither_mode = dither_mode

    def compile(self, spec: EditSpecification) -> PipelineDescription:
        """Build the pipeline for ``spec``.

        The crop rect is a precondition: callers hand in a rect already clamped
        to the source frame with even dimensions. It is not re-validated here.
        """
        width, height = target_geometry(spec)
        shape, segments = self._plan_segments(spec)
        logger.debug(
            "Compiling %s pipeline: %d segment(s), %dx%d @ %dfps",
            shape.value, len(segments), width, height, spec.export.fps,
        )

        graph = _GraphBuilder()
        if shape is PipelineShape.SIMPLE:
            video = self._segment(graph, SOURCE_LABEL, segments[0], spec, width, height, "v")
        else:
            count = len(segments)
            branches = tuple(f"src{i}" for i in range(1, count + 1))
            graph.add("split", (SOURCE_LABEL,), branches, count)
            parts = tuple(
                self._segment(graph, branch, segment, spec, width, height, f"part{i}", setsar=True)
                for i, (branch, segment) in enumerate(zip(branches, segments), start=1)
            )
            video = graph.add("concat", parts, ("concatenated",), n=count, v=1, a=0)

        out_width, out_height = width, height
        inputs = [StreamInput(SOURCE_LABEL, "source")]
        if spec.background.enabled:
            inputs.append(StreamInput(MASK_LABEL, "mask"))
            video, out_width, out_height = self._background(graph, video, spec, width, height)

        self._palette(graph, video, spec)

        return PipelineDescription(
            shape=shape,
            stages=tuple(graph.stages),
            inputs=tuple(inputs),
            output=OutputSpec(label=OUTPUT_LABEL, container="gif", loop=spec.export.loop),
            segments=tuple(segments),
            video_width=width,
            video_height=height,
            width=out_width,
            height=out_height,
        )

    # -- planning --------------------------------------------------------------

    _SHAPES = {1: PipelineShape.SIMPLE, 2: PipelineShape.TWO_PART, 3: PipelineShape.THREE_PART}

    @classmethod
    def _plan_segments(cls, spec: EditSpecification) -> tuple[PipelineShape, list[Segment]]:
        start, end = spec.trim.start_seconds, spec.trim.end_seconds
        zoom_in = spec.zoom.start
        zoom_out = spec.zoom.end

        if spec.crop is None or zoom_in is None or zoom_in <= 0:
            return PipelineShape.SIMPLE, [Segment(start, end)]

        # A zoom-out at (or past) the trim end leaves nothing to zoom back to.
        if zoom_out is not None and zoom_out < end:
            planned = [
                Segment(start, zoom_in),
                Segment(zoom_in, zoom_out, cropped=True),
                Segment(zoom_out, end),
            ]
        else:
            planned = [Segment(start, zoom_in), Segment(zoom_in, end, cropped=True)]

        # Drop the empty slices left by a marker sitting on a trim edge.
        segments = [segment for segment in planned if segment.duration > 0]
        return cls._SHAPES[len(segments)], segments

    # -- stage emitters --------------------------------------------------------

    def _segment(
        self,
        graph: _GraphBuilder,
        label: str,
        segment: Segment,
        spec: EditSpecification,
        width: int,
        height: int,
        name: str,
        setsar: bool = False,
    ) -> str:
        crop: Optional[SourceRect] = spec.crop if segment.cropped else None

        label = graph.add("trim", (label,), (f"{name}_trim",), start=segment.start, end=segment.end)
        # Every segment restarts its own time base or concat output is corrupt.
        label = graph.add("setpts", (label,), (f"{name}_pts",), "PTS-STARTPTS")
        label = graph.add("fps", (label,), (f"{name}_fps",), spec.export.fps)
        if crop is not None:
            label = graph.add(
                "crop", (label,), (f"{name}_crop",), crop.width, crop.height, crop.x, crop.y
            )
        scaled = name if not setsar else f"{name}_scale"
        label = graph.add("scale", (label,), (scaled,), width, height, flags=self.scale_flags)
        if setsar:
            label = graph.add("setsar", (label,), (name,), 1)
        return label

    @staticmethod
    def _background(
        graph: _GraphBuilder,
        video: str,
        spec: EditSpecification,
        width: int,
        height: int,
    ) -> tuple[str, int, int]:
        background = spec.background
        mask = graph.add("scale", (MASK_LABEL,), ("mask",), width, height)
        merged = graph.add("alphamerge", (video, mask), ("masked",))

        pad_x = round_half_up(width * background.padding)
        pad_y = round_half_up(height * background.padding)
        out_width = width + 2 * pad_x
        out_height = height + 2 * pad_y
        padded = graph.add(
            "pad", (merged,), ("framed",),
            out_width, out_height, pad_x, pad_y, color=background.color,
        )
        return padded, out_width, out_height

    def _palette(self, graph: _GraphBuilder, video: str, spec: EditSpecification) -> None:
        # One palette for the whole clip keeps colors stable across the cut.
        graph.add("split", (video,), ("s0", "s1"))
        graph.add("palettegen", ("s0",), ("p",), max_colors=spec.export.colors)
        graph.add(
            "paletteuse", ("s1", "p"), (OUTPUT_LABEL,),
            dither=self.dither_mode, bayer_scale=spec.export.dither,
        )


def compile_pipeline(spec: EditSpecification) -> PipelineDescription:
    """Compile ``spec`` with the default resampling and dither settings."""
    return FilterGraphCompiler().compile(spec)
