"""Pytest fixtures for provider-based architecture."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from app.core.config import Settings
from app.infrastructure.providers.ai_provider import reset_ai_services
from app.infrastructure.providers.database_provider import reset_database_service
from tests.mocks.mock_repositories import InMemoryProfileStore
from tests.mocks.mock_services import StubEmbeddingProvider


@pytest.fixture(autouse=True)
async def reset_provider_state() -> AsyncIterator[None]:
    """Ensure each test starts with clean provider singletons."""
    await reset_ai_services()
    await reset_database_service()
    yield
    await reset_ai_services()
    await reset_database_service()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment, with no pause between chunks."""
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="test-key",
        EMBEDDING_CHUNK_PAUSE_SECONDS=0,
    )


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def embedding_provider(settings: Settings) -> StubEmbeddingProvider:
    return StubEmbeddingProvider(dimension=settings.EMBEDDING_DIMENSION)

