"""AI infrastructure services.

This module contains the OpenAI-backed embedding provider.
"""

from app.infrastructure.ai.openai_embedding_provider import OpenAIEmbeddingProvider

__all__ = ["OpenAIEmbeddingProvider"]
