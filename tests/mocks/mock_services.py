"""
Mock service implementations for testing.

These mocks implement the service interfaces and track method calls
for verification.
"""

from typing import Any, Dict, List, Optional, Set

from app.domain.exceptions import UpstreamError
from app.domain.interfaces import IEmbeddingProvider


class StubEmbeddingProvider(IEmbeddingProvider):
    """Deterministic embedding provider for testing."""

    def __init__(self, dimension: int = 1536, vector: Optional[List[float]] = None):
        self._dimension = dimension
        self.vector = vector
        self.call_log: List[tuple] = []
        self.fail_on_text_containing: Set[str] = set()
        self.wrong_dimension = False

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return "stub-embedding"

    async def embed(self, text: str) -> List[float]:
        self.call_log.append(("embed", text))

        for marker in self.fail_on_text_containing:
            if marker in text:
                raise UpstreamError(f"Mock provider failure for {marker}", retryable=True)

        size = self._dimension - 1 if self.wrong_dimension else self._dimension
        if self.vector is not None:
            return list(self.vector[:size])
        return [0.01] * size

    async def check_health(self) -> Dict[str, Any]:
        return {"status": "healthy", "model": self.model_name}

    @property
    def embedded_texts(self) -> List[str]:
        return [call[1] for call in self.call_log if call[0] == "embed"]
