"""Pytest configuration and fixtures."""

import pytest
from httpx import AsyncClient, ASGITransport
from unittest.mock import AsyncMock, MagicMock

from main import app
from config import Settings, get_settings
from upstream import CompletionClient, SpeechClient, get_completion_client, get_speech_client


@pytest.fixture
def settings():
    """Settings with a completion key and no speech credentials."""
    return Settings(_env_file=None, openai_api_key="sk-test")


@pytest.fixture
def mock_completion_client():
    """Mock CompletionClient for testing."""
    client = MagicMock(spec=CompletionClient)
    client.complete = AsyncMock(return_value="Here is your plan.")
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_speech_client():
    """Mock SpeechClient for testing."""
    client = MagicMock(spec=SpeechClient)
    client.synthesize = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def override_dependencies(settings, mock_completion_client):
    """Route upstream dependencies to mocks; speech is off unless a test says otherwise."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_completion_client] = lambda: mock_completion_client
    app.dependency_overrides[get_speech_client] = lambda: None
    yield app.dependency_overrides
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client():
    """Async HTTP client for testing API endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
