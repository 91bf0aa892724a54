"""Tests for the chat assistant and its offline fallback."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from carecompanion.services.assistant import (
    DEFAULT_FALLBACK_RESPONSE,
    FALLBACK_RESPONSES,
    SYSTEM_PROMPT,
    AssistantService,
    ChatConfig,
    ChatProviderError,
    OpenAIChatProvider,
    fallback_reply,
)

ENDPOINT = "https://chat.example.org/v1/chat/completions"


def make_config(api_key: str = "test-key") -> ChatConfig:
    return ChatConfig(api_key=api_key, api_endpoint=ENDPOINT, model="test-model")


def make_response(status_code: int, json_body) -> httpx.Response:
    return httpx.Response(
        status_code,
        json=json_body,
        request=httpx.Request("POST", ENDPOINT),
    )


class TestFallbackReply:
    """Tests for the keyword table."""

    def test_keyword_match_is_case_insensitive(self) -> None:
        """Test that keywords match regardless of case."""
        assert fallback_reply("I can't SLEEP at night") == FALLBACK_RESPONSES["sleep"]

    def test_first_keyword_wins(self) -> None:
        """Test that table order decides between several keywords."""
        reply = fallback_reply("Does my medication affect sleep?")

        assert reply == FALLBACK_RESPONSES["medication"]

    def test_substring_match(self) -> None:
        """Test that keywords match inside longer words."""
        # "this" contains "hi"
        assert fallback_reply("What is this?") == FALLBACK_RESPONSES["hi"]

    def test_default_reply(self) -> None:
        """Test the reply when nothing matches."""
        assert fallback_reply("Tell me about vaccines") == DEFAULT_FALLBACK_RESPONSE


class TestAssistantService:
    """Tests for AssistantService with mocked providers."""

    @pytest.mark.asyncio
    async def test_uses_provider_reply(self) -> None:
        """Test that a working provider answers."""
        provider = AsyncMock()
        provider.complete = AsyncMock(return_value="Drink plenty of water.")
        service = AssistantService(provider=provider)

        reply = await service.reply("Any tips for summer?")

        assert reply.response == "Drink plenty of water."
        assert reply.source == "model"
        provider.complete.assert_awaited_once_with("Any tips for summer?")

    @pytest.mark.asyncio
    async def test_falls_back_on_provider_error(self, offline_assistant: AssistantService) -> None:
        """Test that provider failures degrade to the keyword table."""
        reply = await offline_assistant.reply("My knee pain is worse")

        assert reply.response == FALLBACK_RESPONSES["pain"]
        assert reply.source == "fallback"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", ["", "   "])
    async def test_empty_message_rejected(
        self, offline_assistant: AssistantService, message: str
    ) -> None:
        """Test that blank messages are refused."""
        with pytest.raises(ValueError, match="Message is required"):
            await offline_assistant.reply(message)


class TestOpenAIChatProvider:
    """Tests for the HTTP provider with httpx mocked out."""

    @pytest.mark.asyncio
    async def test_missing_api_key(self) -> None:
        """Test that no request is made without a key."""
        provider = OpenAIChatProvider(make_config(api_key=""))

        with patch.object(httpx.AsyncClient, "post", new=AsyncMock()) as mock_post:
            with pytest.raises(ChatProviderError, match="not configured"):
                await provider.complete("hello")

        mock_post.assert_not_called()

    @pytest.mark.asyncio
    async def test_successful_completion(self) -> None:
        """Test request payload and reply parsing."""
        provider = OpenAIChatProvider(make_config())
        body = {"choices": [{"message": {"content": "  Stay active.  "}}]}

        with patch.object(
            httpx.AsyncClient, "post", new=AsyncMock(return_value=make_response(200, body))
        ) as mock_post:
            reply = await provider.complete("exercise ideas?")

        assert reply == "Stay active."
        payload = mock_post.call_args.kwargs["json"]
        assert payload["model"] == "test-model"
        assert payload["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert payload["messages"][1] == {"role": "user", "content": "exercise ideas?"}
        assert mock_post.call_args.kwargs["headers"]["Authorization"] == "Bearer test-key"

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        """Test that error statuses become ChatProviderError."""
        provider = OpenAIChatProvider(make_config())

        with patch.object(
            httpx.AsyncClient,
            "post",
            new=AsyncMock(return_value=make_response(500, {"error": "boom"})),
        ):
            with pytest.raises(ChatProviderError, match="request failed"):
                await provider.complete("hello")

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        """Test that connection failures become ChatProviderError."""
        provider = OpenAIChatProvider(make_config())

        with patch.object(
            httpx.AsyncClient,
            "post",
            new=AsyncMock(side_effect=httpx.ConnectError("unreachable")),
        ):
            with pytest.raises(ChatProviderError):
                await provider.complete("hello")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"choices": []},
            {"unexpected": True},
            {"choices": [{"message": {"content": "   "}}]},
        ],
    )
    async def test_bad_response_shape(self, body) -> None:
        """Test that malformed or empty replies become ChatProviderError."""
        provider = OpenAIChatProvider(make_config())

        with patch.object(
            httpx.AsyncClient, "post", new=AsyncMock(return_value=make_response(200, body))
        ):
            with pytest.raises(ChatProviderError):
                await provider.complete("hello")


class TestChatEndpoint:
    """Tests for /api/v1/chat."""

    def test_offline_reply(self, client: TestClient) -> None:
        """Test that the endpoint answers even with the provider down."""
        response = client.post("/api/v1/chat", json={"message": "What should my diet be?"})

        assert response.status_code == 200
        assert response.json() == {"response": FALLBACK_RESPONSES["diet"]}

    def test_empty_message(self, client: TestClient) -> None:
        """Test that an empty message is a bad request."""
        response = client.post("/api/v1/chat", json={"message": ""})

        assert response.status_code == 400
        assert response.json()["detail"] == "Message is required"

    def test_missing_message(self, client: TestClient) -> None:
        """Test that an absent message is treated as empty."""
        response = client.post("/api/v1/chat", json={})

        assert response.status_code == 400
