"""Tests for the OpenAI embedding provider."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from app.core.config import Settings
from app.domain.exceptions import ConfigurationError, UpstreamError
from app.infrastructure.ai.openai_embedding_provider import (
    MAX_INPUT_CHARS,
    OpenAIEmbeddingProvider,
)

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/embeddings")


def _embedding_response(vector):
    response = MagicMock()
    response.data = [MagicMock(embedding=vector)]
    return response


def _status_error(error_cls, status_code):
    response = httpx.Response(status_code, request=_REQUEST)
    return error_cls("upstream said no", response=response, body=None)


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.embeddings.create = AsyncMock(return_value=_embedding_response([0.1] * 1536))
    return client


@pytest.fixture
def provider(settings, mock_client):
    return OpenAIEmbeddingProvider(settings, client=mock_client)


class TestInitialization:
    def test_missing_api_key_is_a_configuration_error(self):
        settings = Settings(_env_file=None, OPENAI_API_KEY=None)

        with pytest.raises(ConfigurationError):
            OpenAIEmbeddingProvider(settings)

    def test_client_is_created_lazily_from_settings(self, settings):
        with patch("app.infrastructure.ai.openai_embedding_provider.AsyncOpenAI") as client_cls:
            provider = OpenAIEmbeddingProvider(settings)
            client_cls.assert_not_called()

            provider.client

        client_cls.assert_called_once_with(
            api_key="test-key",
            timeout=settings.REQUEST_TIMEOUT,
            max_retries=settings.OPENAI_MAX_RETRIES,
        )

    def test_reports_model_and_dimension(self, provider, settings):
        assert provider.model_name == settings.OPENAI_EMBEDDING_MODEL
        assert provider.dimension == settings.EMBEDDING_DIMENSION


class TestEmbed:
    async def test_returns_vector(self, provider, mock_client):
        result = await provider.embed("Name: Jane Doe")

        assert result == [0.1] * 1536
        assert provider._metrics["embeddings"] == 1
        mock_client.embeddings.create.assert_awaited_once_with(
            input="Name: Jane Doe",
            model="text-embedding-3-small",
            encoding_format="float",
            dimensions=1536,
        )

    async def test_collapses_whitespace(self, provider, mock_client):
        await provider.embed("Name:   Jane\n\nBio:  driver ")

        kwargs = mock_client.embeddings.create.call_args.kwargs
        assert kwargs["input"] == "Name: Jane Bio: driver"

    async def test_truncates_long_input(self, provider, mock_client):
        await provider.embed("x" * (MAX_INPUT_CHARS + 100))

        kwargs = mock_client.embeddings.create.call_args.kwargs
        assert len(kwargs["input"]) == MAX_INPUT_CHARS

    async def test_empty_text_is_rejected_without_calling_api(self, provider, mock_client):
        with pytest.raises(UpstreamError):
            await provider.embed("   ")

        mock_client.embeddings.create.assert_not_called()

    async def test_empty_response_is_an_upstream_error(self, provider, mock_client):
        mock_client.embeddings.create = AsyncMock(return_value=MagicMock(data=[]))

        with pytest.raises(UpstreamError, match="no data"):
            await provider.embed("text")

    async def test_rate_limit_is_retryable(self, provider, mock_client):
        mock_client.embeddings.create = AsyncMock(side_effect=_status_error(openai.RateLimitError, 429))

        with pytest.raises(UpstreamError) as exc_info:
            await provider.embed("text")

        assert exc_info.value.retryable
        assert provider._metrics["errors"] == 1

    async def test_connection_error_is_retryable(self, provider, mock_client):
        mock_client.embeddings.create = AsyncMock(side_effect=openai.APIConnectionError(request=_REQUEST))

        with pytest.raises(UpstreamError) as exc_info:
            await provider.embed("text")

        assert exc_info.value.retryable

    async def test_server_error_is_retryable(self, provider, mock_client):
        mock_client.embeddings.create = AsyncMock(side_effect=_status_error(openai.InternalServerError, 503))

        with pytest.raises(UpstreamError, match="HTTP 503") as exc_info:
            await provider.embed("text")

        assert exc_info.value.retryable

    async def test_client_error_is_not_retryable(self, provider, mock_client):
        mock_client.embeddings.create = AsyncMock(side_effect=_status_error(openai.BadRequestError, 400))

        with pytest.raises(UpstreamError) as exc_info:
            await provider.embed("text")

        assert not exc_info.value.retryable

    async def test_timeout_is_retryable(self, settings, mock_client):
        settings.REQUEST_TIMEOUT = 0.01

        async def slow_create(**kwargs):
            await asyncio.sleep(1)

        mock_client.embeddings.create = slow_create
        provider = OpenAIEmbeddingProvider(settings, client=mock_client)

        with pytest.raises(UpstreamError, match="timed out") as exc_info:
            await provider.embed("text")

        assert exc_info.value.retryable


class TestHealth:
    async def test_healthy_when_sample_embedding_succeeds(self, provider):
        health = await provider.check_health()

        assert health["status"] == "healthy"
        assert health["dimension_correct"] is True

    async def test_unhealthy_when_sample_embedding_fails(self, provider, mock_client):
        mock_client.embeddings.create = AsyncMock(side_effect=openai.APIConnectionError(request=_REQUEST))

        health = await provider.check_health()

        assert health["status"] == "unhealthy"
        assert "unreachable" in health["error"]
