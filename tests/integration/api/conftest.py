"""Integration test fixtures for API testing."""
from __future__ import annotations

import pytest
from httpx import AsyncClient, ASGITransport

from gifzoom.adapters.inbound.fastapi_app import app
from gifzoom.infrastructure.config import Settings
from gifzoom.infrastructure.container import ApplicationContainer


@pytest.fixture
def test_settings():
    settings = Settings()
    settings.app_env = "test"
    return settings


@pytest.fixture
def test_container(test_settings):
    return ApplicationContainer(test_settings)


@pytest.fixture
async def async_client(test_container):
    """Create an async test client for the FastAPI app."""
    app.state.container = test_container

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def pipeline_payload() -> dict:
    return {
        "source": {"name": "clip.mp4", "width": 1920, "height": 1080, "duration": 10.0},
        "trim": {"start": 0.0, "end": 10.0},
        "crop": {"x": 480, "y": 270, "width": 960, "height": 540},
        "zoom": {"start": 3.0, "end": 6.0},
    }
