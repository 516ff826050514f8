"""
OpenAI embedding provider.

Implements ``IEmbeddingProvider`` on top of the official async OpenAI SDK:
- Lazy client creation from explicit settings
- Per-request timeout on top of the SDK's own retry policy
- Translation of SDK failures into ``UpstreamError``
- Lightweight call metrics for health reporting
"""

import asyncio
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

import openai
import structlog
from openai import AsyncOpenAI
from openai.types import CreateEmbeddingResponse

from app.core.config import Settings
from app.domain.exceptions import ConfigurationError, UpstreamError
from app.domain.interfaces import IEmbeddingProvider

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"

# Conservative character budget for an 8192 token input (1 token ~ 4 chars).
MAX_INPUT_CHARS = 8192 * 3

# Models that accept an explicit ``dimensions`` argument.
_SHORTENABLE_MODELS = ("text-embedding-3-small", "text-embedding-3-large")


class OpenAIEmbeddingProvider(IEmbeddingProvider):
    """Compute profile embeddings with the OpenAI embeddings endpoint."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        try:
            self._config = settings.get_openai_config()
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        self._client = client
        self._metrics = {"embeddings": 0, "errors": 0}

    @property
    def dimension(self) -> int:
        return self._config["dimension"]

    @property
    def model_name(self) -> str:
        return self._config["embedding_model"]

    @property
    def client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            client_kwargs = {
                "api_key": self._config["api_key"],
                "timeout": self._config["timeout"],
                "max_retries": self._config["max_retries"],
            }
            if self._config["base_url"] and self._config["base_url"] != DEFAULT_BASE_URL:
                client_kwargs["base_url"] = self._config["base_url"]

            self._client = AsyncOpenAI(**client_kwargs)
            logger.info("OpenAI client initialized", model=self.model_name)

        return self._client

    async def embed(self, text: str) -> List[float]:
        """
        Generate a single text embedding.

        Args:
            text: Text to embed

        Returns:
            List of floats of length ``dimension``

        Raises:
            UpstreamError: on empty input, SDK errors, timeouts or malformed responses
        """
        cleaned = self._clean_text(text)
        if not cleaned:
            raise UpstreamError("Cannot embed empty text")

        request: Dict[str, Any] = {
            "input": cleaned,
            "model": self.model_name,
            "encoding_format": "float",
        }
        if self.model_name in _SHORTENABLE_MODELS:
            request["dimensions"] = self.dimension

        start_time = time.time()
        try:
            response: CreateEmbeddingResponse = await asyncio.wait_for(
                self.client.embeddings.create(**request),
                timeout=self._config["timeout"],
            )
        except asyncio.TimeoutError as e:
            self._metrics["errors"] += 1
            raise UpstreamError(
                f"Embedding request timed out after {self._config['timeout']}s",
                retryable=True,
            ) from e
        except openai.RateLimitError as e:
            self._metrics["errors"] += 1
            raise UpstreamError(f"Embedding provider rate limit exceeded: {e}", retryable=True) from e
        except (openai.APITimeoutError, openai.APIConnectionError) as e:
            self._metrics["errors"] += 1
            raise UpstreamError(f"Embedding provider unreachable: {e}", retryable=True) from e
        except openai.APIStatusError as e:
            self._metrics["errors"] += 1
            raise UpstreamError(
                f"Embedding provider returned HTTP {e.status_code}: {e.message}",
                retryable=e.status_code >= 500,
            ) from e
        except openai.OpenAIError as e:
            self._metrics["errors"] += 1
            raise UpstreamError(f"Embedding generation failed: {e}") from e

        if not response.data:
            self._metrics["errors"] += 1
            raise UpstreamError("Embedding provider returned no data")

        embedding = list(response.data[0].embedding)
        self._metrics["embeddings"] += 1

        logger.debug(
            "Generated embedding",
            model=self.model_name,
            text_length=len(cleaned),
            dimensions=len(embedding),
            duration_ms=int((time.time() - start_time) * 1000),
        )
        return embedding

    def _clean_text(self, text: str) -> str:
        """Collapse whitespace and truncate overly long input."""
        if not isinstance(text, str):
            return ""

        text = " ".join(text.split())
        if len(text) > MAX_INPUT_CHARS:
            text = text[:MAX_INPUT_CHARS]
            logger.warning("Embedding input truncated", max_chars=MAX_INPUT_CHARS)

        return text

    async def check_health(self) -> Dict[str, Any]:
        """Embed a short sample string and report dimension and latency."""
        try:
            start_time = time.time()
            embedding = await self.embed("Health check test")
            return {
                "status": "healthy",
                "model": self.model_name,
                "response_time_ms": int((time.time() - start_time) * 1000),
                "embedding_dimension": len(embedding),
                "dimension_correct": len(embedding) == self.dimension,
                "metrics": self._metrics.copy(),
                "timestamp": datetime.now().isoformat(),
            }
        except UpstreamError as e:
            return {
                "status": "unhealthy",
                "model": self.model_name,
                "error": str(e),
                "metrics": self._metrics.copy(),
                "timestamp": datetime.now().isoformat(),
            }


__all__ = ["OpenAIEmbeddingProvider"]
