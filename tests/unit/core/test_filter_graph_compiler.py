"""Unit tests for FilterGraphCompiler."""
from __future__ import annotations

import pytest

from gifzoom.core.entities.edit_specification import EditSpecification
from gifzoom.core.entities.pipeline import PipelineShape, Segment
from gifzoom.core.services.filter_graph_compiler import (
    FilterGraphCompiler,
    compile_pipeline,
    target_geometry,
)
from gifzoom.core.value_objects.export_settings import BackgroundSettings, ExportSettings
from gifzoom.core.value_objects.time_range import TrimRange, ZoomWindow


@pytest.fixture
def compiler() -> FilterGraphCompiler:
    return FilterGraphCompiler()


class TestTargetGeometry:
    def test_even_width_kept(self, simple_spec):
        assert target_geometry(simple_spec) == (600, 338)

    def test_odd_width_rounded_down(self, source_video):
        spec = EditSpecification(
            source=source_video, trim=TrimRange(2.0, 8.0), export=ExportSettings(width=601)
        )
        assert target_geometry(spec) == (600, 338)

    def test_height_is_even(self, source_video):
        spec = EditSpecification(
            source=source_video, trim=TrimRange(0.0, 1.0), export=ExportSettings(width=350)
        )
        width, height = target_geometry(spec)
        assert width == 350
        assert height % 2 == 0


class TestSimplePipeline:
    """No crop: one trimmed segment straight into the palette stages."""

    def test_stage_order(self, compiler, simple_spec):
        pipeline = compiler.compile(simple_spec)
        assert pipeline.shape is PipelineShape.SIMPLE
        assert pipeline.operations == [
            "trim", "setpts", "fps", "scale", "split", "palettegen", "paletteuse",
        ]

    def test_trim_window(self, compiler, simple_spec):
        pipeline = compiler.compile(simple_spec)
        trim = pipeline.stages_named("trim")[0]
        assert trim.params == {"start": 2.0, "end": 8.0}
        assert pipeline.segments == (Segment(2.0, 8.0),)
        assert pipeline.duration == pytest.approx(6.0)

    def test_stage_parameters(self, compiler, simple_spec):
        pipeline = compiler.compile(simple_spec)
        assert pipeline.stages_named("fps")[0].args == (15,)
        scale = pipeline.stages_named("scale")[0]
        assert scale.args == (600, 338)
        assert scale.params == {"flags": "lanczos"}
        assert pipeline.stages_named("palettegen")[0].params == {"max_colors": 256}
        assert pipeline.stages_named("paletteuse")[0].params == {"dither": "bayer", "bayer_scale": 5}
        assert pipeline.output.loop == 0

    def test_filter_graph_string(self, compiler, simple_spec):
        graph = compiler.compile(simple_spec).to_filter_graph()
        assert graph == (
            "[0:v]trim=start=2:end=8,setpts=PTS-STARTPTS,fps=15,"
            "scale=600:338:flags=lanczos,split[s0][s1];"
            "[s0]palettegen=max_colors=256[p];"
            "[s1][p]paletteuse=dither=bayer:bayer_scale=5[out]"
        )

    def test_crop_without_zoom_is_simple(self, compiler, source_video, center_crop):
        spec = EditSpecification(source=source_video, trim=TrimRange(0.0, 10.0), crop=center_crop)
        pipeline = compiler.compile(spec)
        assert pipeline.shape is PipelineShape.SIMPLE
        assert "crop" not in pipeline.operations

    def test_zoom_in_at_zero_is_simple(self, compiler, source_video, center_crop):
        spec = EditSpecification(
            source=source_video, trim=TrimRange(0.0, 10.0), crop=center_crop, zoom=ZoomWindow(start=0.0)
        )
        assert compiler.compile(spec).shape is PipelineShape.SIMPLE

    def test_loop_setting_carried_to_output(self, compiler, source_video):
        spec = EditSpecification(
            source=source_video, trim=TrimRange(0.0, 4.0), export=ExportSettings(loop=-1)
        )
        assert compiler.compile(spec).output.loop == -1


class TestZoomPipelines:
    """Crop with a zoom-in time splits the clip into concatenated segments."""

    def test_two_part_segments(self, compiler, zoom_in_spec):
        pipeline = compiler.compile(zoom_in_spec)
        assert pipeline.shape is PipelineShape.TWO_PART
        assert pipeline.segments == (Segment(0.0, 3.0), Segment(3.0, 10.0, cropped=True))
        assert pipeline.duration == pytest.approx(10.0)

    def test_two_part_crop_only_in_second_segment(self, compiler, zoom_in_spec):
        pipeline = compiler.compile(zoom_in_spec)
        crops = pipeline.stages_named("crop")
        assert len(crops) == 1
        assert crops[0].args == (960, 540, 480, 270)
        assert crops[0].inputs == ("part2_fps",)

    def test_three_part_segments(self, compiler, zoom_window_spec):
        pipeline = compiler.compile(zoom_window_spec)
        assert pipeline.shape is PipelineShape.THREE_PART
        assert pipeline.segments == (
            Segment(0.0, 3.0),
            Segment(3.0, 6.0, cropped=True),
            Segment(6.0, 10.0),
        )
        assert pipeline.duration == pytest.approx(10.0)

    def test_split_and_concat_counts(self, compiler, zoom_window_spec):
        pipeline = compiler.compile(zoom_window_spec)
        split = pipeline.stages[0]
        assert split.operation == "split"
        assert split.inputs == ("0:v",)
        assert split.outputs == ("src1", "src2", "src3")
        concat = pipeline.stages_named("concat")[0]
        assert concat.inputs == ("part1", "part2", "part3")
        assert concat.params == {"n": 3, "v": 1, "a": 0}

    def test_every_segment_resets_timestamps(self, compiler, zoom_window_spec):
        pipeline = compiler.compile(zoom_window_spec)
        assert len(pipeline.stages_named("setpts")) == 3
        assert len(pipeline.stages_named("setsar")) == 3

    def test_segments_share_output_geometry(self, compiler, zoom_window_spec):
        pipeline = compiler.compile(zoom_window_spec)
        sizes = {stage.args for stage in pipeline.stages_named("scale")}
        assert sizes == {(600, 338)}

    def test_zoom_out_at_trim_end_collapses_to_two_parts(self, compiler, source_video, center_crop):
        spec = EditSpecification(
            source=source_video,
            trim=TrimRange(0.0, 10.0),
            crop=center_crop,
            zoom=ZoomWindow(start=3.0, end=10.0),
        )
        pipeline = compiler.compile(spec)
        assert pipeline.shape is PipelineShape.TWO_PART
        assert pipeline.duration == pytest.approx(10.0)

    def test_zoom_in_at_trim_start_crops_whole_clip(self, compiler, source_video, center_crop):
        spec = EditSpecification(
            source=source_video, trim=TrimRange(2.0, 8.0), crop=center_crop, zoom=ZoomWindow(start=2.0)
        )
        pipeline = compiler.compile(spec)

        assert pipeline.shape is PipelineShape.SIMPLE
        assert pipeline.segments == (Segment(2.0, 8.0, cropped=True),)
        assert pipeline.operations[:5] == ["trim", "setpts", "fps", "crop", "scale"]
        assert "concat" not in pipeline.operations
        assert pipeline.to_filter_graph().startswith(
            "[0:v]trim=start=2:end=8,setpts=PTS-STARTPTS,fps=15,crop=960:540:480:270,"
        )

    def test_zoom_in_at_trim_end_leaves_full_frame_only(self, compiler, source_video, center_crop):
        spec = EditSpecification(
            source=source_video, trim=TrimRange(2.0, 8.0), crop=center_crop, zoom=ZoomWindow(start=8.0)
        )
        pipeline = compiler.compile(spec)

        assert pipeline.shape is PipelineShape.SIMPLE
        assert pipeline.segments == (Segment(2.0, 8.0),)
        assert "crop" not in pipeline.operations

    def test_zoom_window_from_trim_start_is_two_part(self, compiler, source_video, center_crop):
        spec = EditSpecification(
            source=source_video,
            trim=TrimRange(2.0, 8.0),
            crop=center_crop,
            zoom=ZoomWindow(start=2.0, end=5.0),
        )
        pipeline = compiler.compile(spec)

        assert pipeline.shape is PipelineShape.TWO_PART
        assert pipeline.segments == (Segment(2.0, 5.0, cropped=True), Segment(5.0, 8.0))
        assert "trim=start=2:end=2" not in pipeline.to_filter_graph()

    def test_segment_durations_sum_to_trim(self, compiler, source_video, center_crop):
        spec = EditSpecification(
            source=source_video,
            trim=TrimRange(1.25, 9.5),
            crop=center_crop,
            zoom=ZoomWindow(start=2.75, end=7.1),
        )
        pipeline = compiler.compile(spec)
        assert sum(s.duration for s in pipeline.segments) == pytest.approx(spec.trim.duration)

    def test_filter_graph_labels_every_branch(self, compiler, zoom_in_spec):
        graph = compiler.compile(zoom_in_spec).to_filter_graph()
        assert graph.startswith("[0:v]split=2[src1][src2];")
        assert "[part1][part2]concat=n=2:v=1:a=0" in graph
        assert graph.endswith("[s1][p]paletteuse=dither=bayer:bayer_scale=5[out]")


class TestBackgroundPipeline:
    """Background framing sits between concatenation and palette generation."""

    def test_stage_positions(self, compiler, background_spec):
        pipeline = compiler.compile(background_spec)
        concat = pipeline.index_of("concat")
        merge = pipeline.index_of("alphamerge")
        pad = pipeline.index_of("pad")
        palette = pipeline.index_of("palettegen")
        assert concat < merge < pad < palette

    def test_mask_input_scaled_to_video(self, compiler, background_spec):
        pipeline = compiler.compile(background_spec)
        assert pipeline.has_mask
        mask_scale = [s for s in pipeline.stages_named("scale") if s.inputs == ("1:v",)]
        assert mask_scale[0].args == (600, 338)

    def test_pad_dimensions(self, compiler, background_spec):
        pipeline = compiler.compile(background_spec)
        pad = pipeline.stages_named("pad")[0]
        assert pad.args == (720, 406, 60, 34)
        assert pad.params == {"color": "#292929"}
        assert (pipeline.width, pipeline.height) == (720, 406)
        assert (pipeline.video_width, pipeline.video_height) == (600, 338)

    def test_pad_grows_by_padding_ratio(self, compiler, background_spec):
        pipeline = compiler.compile(background_spec)
        factor = 1 + 2 * background_spec.background.padding
        assert pipeline.width == pytest.approx(pipeline.video_width * factor, abs=2)
        assert pipeline.height == pytest.approx(pipeline.video_height * factor, abs=2)

    def test_simple_shape_with_background(self, compiler, source_video):
        spec = EditSpecification(
            source=source_video,
            trim=TrimRange(0.0, 5.0),
            background=BackgroundSettings(enabled=True),
        )
        pipeline = compiler.compile(spec)
        assert pipeline.operations[-5:] == ["alphamerge", "pad", "split", "palettegen", "paletteuse"]

    def test_disabled_background_has_no_mask(self, compiler, zoom_in_spec):
        pipeline = compiler.compile(zoom_in_spec)
        assert not pipeline.has_mask
        assert "pad" not in pipeline.operations


class TestCompilerPurity:
    def test_compile_is_idempotent(self, compiler, background_spec):
        assert compiler.compile(background_spec) == compiler.compile(background_spec)

    def test_same_graph_across_instances(self, zoom_window_spec):
        first = compile_pipeline(zoom_window_spec).to_filter_graph()
        second = FilterGraphCompiler().compile(zoom_window_spec).to_filter_graph()
        assert first == second

    def test_to_dict(self, compiler, zoom_in_spec):
        data = compiler.compile(zoom_in_spec).to_dict()
        assert data["shape"] == "two_part"
        assert data["duration"] == pytest.approx(10.0)
        assert data["filter_graph"].endswith("[out]")
        assert data["segments"][1] == {"start": 3.0, "end": 10.0, "cropped": True}
