"""Test configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.config import settings
from src.services import get_generator


@pytest.fixture
def override_settings():
    """Temporarily override attributes on the settings singleton."""
    original = {}

    def _override(**values):
        for key, value in values.items():
            original.setdefault(key, getattr(settings, key))
            setattr(settings, key, value)

    yield _override
    for key, value in original.items():
        setattr(settings, key, value)


@pytest.fixture
def use_generator():
    """Route the /api/json endpoint to a stub generator."""

    def _use(generator):
        app.dependency_overrides[get_generator] = lambda: generator
        return generator

    yield _use
    app.dependency_overrides.pop(get_generator, None)


@pytest.fixture
async def async_client():
    """Create an async test client for FastAPI."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
