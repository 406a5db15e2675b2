"""Shared test fixtures for all tests."""
from __future__ import annotations

import pytest
from unittest.mock import AsyncMock, MagicMock

from gifzoom.core.entities.edit_specification import EditSpecification, SourceVideo
from gifzoom.core.value_objects.export_settings import BackgroundSettings, ExportSettings
from gifzoom.core.value_objects.geometry import Size, SourceRect
from gifzoom.core.value_objects.time_range import TrimRange, ZoomWindow

GIF_BYTES = b"GIF89a\x01\x00\x01\x00\x00\x00\x00;"


# ── Source Fixtures ────────────────────────────────────────────────────────

@pytest.fixture
def source_video() -> SourceVideo:
    return SourceVideo(name="clip.mp4", width=1920, height=1080, duration=10.0)


@pytest.fixture
def source_size() -> Size:
    return Size(1920, 1080)


@pytest.fixture
def display_size() -> Size:
    # Exactly a quarter of the 1920x1080 source on each axis.
    return Size(480, 270)


@pytest.fixture
def center_crop() -> SourceRect:
    return SourceRect(x=480, y=270, width=960, height=540)


# ── Edit Specification Fixtures ────────────────────────────────────────────

@pytest.fixture
def simple_spec(source_video) -> EditSpecification:
    return EditSpecification(
        source=source_video,
        trim=TrimRange(2.0, 8.0),
        export=ExportSettings(fps=15, width=600, colors=256, dither=5, loop=0),
    )


@pytest.fixture
def zoom_in_spec(source_video, center_crop) -> EditSpecification:
    return EditSpecification(
        source=source_video,
        trim=TrimRange(0.0, 10.0),
        crop=center_crop,
        zoom=ZoomWindow(start=3.0),
    )


@pytest.fixture
def zoom_window_spec(source_video, center_crop) -> EditSpecification:
    return EditSpecification(
        source=source_video,
        trim=TrimRange(0.0, 10.0),
        crop=center_crop,
        zoom=ZoomWindow(start=3.0, end=6.0),
    )


@pytest.fixture
def background_spec(source_video, center_crop) -> EditSpecification:
    return EditSpecification(
        source=source_video,
        trim=TrimRange(0.0, 10.0),
        crop=center_crop,
        zoom=ZoomWindow(start=3.0),
        background=BackgroundSettings(enabled=True, color="#292929", padding=0.1, border_radius=16),
    )


# ── Mock Ports ─────────────────────────────────────────────────────────────

@pytest.fixture
def mock_frame_engine():
    mock = AsyncMock()
    mock.run.return_value = GIF_BYTES
    return mock


@pytest.fixture
def mock_mask_renderer():
    mock = MagicMock()
    mock.render.return_value = b"\x89PNG-mask"
    return mock
