"""Provider utilities for the embedding provider and the coordinator."""

from __future__ import annotations

import asyncio
from typing import Optional

from app.application.embedding_service import ProfileEmbeddingService
from app.core.config import get_settings
from app.domain.interfaces import IEmbeddingProvider
from app.infrastructure.ai.openai_embedding_provider import OpenAIEmbeddingProvider
from app.infrastructure.providers.database_provider import get_profile_store

_embedding_provider: Optional[IEmbeddingProvider] = None
_embedding_service: Optional[ProfileEmbeddingService] = None

_provider_lock = asyncio.Lock()
_service_lock = asyncio.Lock()


async def get_embedding_provider() -> IEmbeddingProvider:
    """Return singleton OpenAI embedding provider."""
    global _embedding_provider

    if _embedding_provider is not None:
        return _embedding_provider

    async with _provider_lock:
        if _embedding_provider is not None:
            return _embedding_provider

        _embedding_provider = OpenAIEmbeddingProvider(get_settings())
        return _embedding_provider


async def get_embedding_service() -> ProfileEmbeddingService:
    """Return the embedding coordinator wired to the shared store and provider."""
    global _embedding_service

    if _embedding_service is not None:
        return _embedding_service

    async with _service_lock:
        if _embedding_service is not None:
            return _embedding_service

        _embedding_service = ProfileEmbeddingService(
            profile_store=await get_profile_store(),
            embedding_provider=await get_embedding_provider(),
            settings=get_settings(),
        )
        return _embedding_service


async def reset_ai_services() -> None:
    """Reset cached AI services (useful for tests)."""
    global _embedding_provider, _embedding_service
    async with _service_lock:
        _embedding_service = None
    async with _provider_lock:
        _embedding_provider = None


__all__ = [
    "get_embedding_provider",
    "get_embedding_service",
    "reset_ai_services",
]
