"""Unit tests for the OpenAI and Anthropic provider adapters.

The SDK clients run against httpx.MockTransport so every request the
adapters build can be inspected without network access.
"""

import json
from collections.abc import Callable

import httpx
import pytest

from book_chat.config import LLMSettings
from book_chat.errors import AuthRequiredError, EmptyResponseError, NetworkError, ProviderError
from book_chat.infra.llm.anthropic_provider import AnthropicProvider, split_system
from book_chat.infra.llm.base import extract_error_message
from book_chat.infra.llm.openai_provider import OpenAIProvider
from book_chat.models.message import Message
from book_chat.models.provider import RequestOptions

Handler = Callable[[httpx.Request], httpx.Response]

MESSAGES = [
    Message(role="system", content="You are a helpful AI assistant."),
    Message(role="user", content="Who wrote this?"),
]


class RecordingTransport:
    """Collects requests and answers them with a handler."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


def openai_completion(content: str | None) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1704067200,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def anthropic_message(blocks: list[dict]) -> dict:
    return {
        "id": "msg_1",
        "type": "message",
        "role": "assistant",
        "model": "claude-3-5-sonnet-20241022",
        "content": blocks,
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": 10, "output_tokens": 5},
    }


@pytest.fixture
def settings() -> LLMSettings:
    return LLMSettings(request_timeout=5.0)


class TestExtractErrorMessage:
    """Tests for provider error body parsing."""

    def test_nested_error(self) -> None:
        assert extract_error_message({"error": {"message": "rate limited"}}) == "rate limited"

    def test_unwrapped_error(self) -> None:
        assert extract_error_message({"message": "bad key", "type": "auth"}) == "bad key"

    def test_string_error(self) -> None:
        assert extract_error_message({"error": "overloaded"}) == "overloaded"

    def test_unparseable_body(self) -> None:
        assert extract_error_message("<html>502</html>") is None
        assert extract_error_message(None) is None
        assert extract_error_message({"error": {"code": 1}}) is None


class TestOpenAIProvider:
    """Tests for OpenAIProvider."""

    @pytest.mark.asyncio
    async def test_success(self, settings: LLMSettings) -> None:
        transport = RecordingTransport(lambda r: httpx.Response(200, json=openai_completion("X")))
        provider = OpenAIProvider(settings, http_client=transport.client())

        reply = await provider.chat(MESSAGES, RequestOptions(model="gpt-4o"), "sk-test")

        assert reply == "X"
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.path.endswith("/chat/completions")
        assert request.headers["authorization"] == "Bearer sk-test"
        body = transport.last_body()
        assert body["model"] == "gpt-4o"
        assert body["messages"] == [m.to_wire() for m in MESSAGES]
        assert body["temperature"] == 0.7
        assert body["max_tokens"] == 1000

    @pytest.mark.asyncio
    async def test_defaults_applied(self, settings: LLMSettings) -> None:
        transport = RecordingTransport(lambda r: httpx.Response(200, json=openai_completion("X")))
        provider = OpenAIProvider(settings, http_client=transport.client())

        await provider.chat(MESSAGES, None, "sk-test")

        assert transport.last_body()["model"] == "gpt-4o-mini"

    @pytest.mark.asyncio
    async def test_missing_credential_sends_nothing(self, settings: LLMSettings) -> None:
        transport = RecordingTransport(lambda r: httpx.Response(200, json=openai_completion("X")))
        provider = OpenAIProvider(settings, http_client=transport.client())

        with pytest.raises(AuthRequiredError):
            await provider.chat(MESSAGES, None, None)

        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_status_error_with_message(self, settings: LLMSettings) -> None:
        transport = RecordingTransport(
            lambda r: httpx.Response(429, json={"error": {"message": "rate limited"}})
        )
        provider = OpenAIProvider(settings, http_client=transport.client())

        with pytest.raises(ProviderError) as exc_info:
            await provider.chat(MESSAGES, None, "sk-test")

        error = exc_info.value
        assert error.status_code == 429
        assert error.provider_message == "rate limited"
        assert "429" in error.user_message
        assert "rate limited" in error.user_message
        # No automatic retries
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_status_error_unparseable_body(self, settings: LLMSettings) -> None:
        transport = RecordingTransport(
            lambda r: httpx.Response(502, text="<html>bad gateway</html>")
        )
        provider = OpenAIProvider(settings, http_client=transport.client())

        with pytest.raises(ProviderError) as exc_info:
            await provider.chat(MESSAGES, None, "sk-test")

        assert exc_info.value.status_code == 502
        assert exc_info.value.provider_message is None
        assert exc_info.value.user_message == "OpenAI API error: 502 Bad Gateway"

    @pytest.mark.asyncio
    async def test_no_choices(self, settings: LLMSettings) -> None:
        body = openai_completion("X")
        body["choices"] = []
        transport = RecordingTransport(lambda r: httpx.Response(200, json=body))
        provider = OpenAIProvider(settings, http_client=transport.client())

        with pytest.raises(EmptyResponseError):
            await provider.chat(MESSAGES, None, "sk-test")

    @pytest.mark.asyncio
    async def test_empty_content(self, settings: LLMSettings) -> None:
        transport = RecordingTransport(lambda r: httpx.Response(200, json=openai_completion("")))
        provider = OpenAIProvider(settings, http_client=transport.client())

        with pytest.raises(EmptyResponseError):
            await provider.chat(MESSAGES, None, "sk-test")

    @pytest.mark.asyncio
    async def test_whitespace_content(self, settings: LLMSettings) -> None:
        body = openai_completion("  \n ")
        transport = RecordingTransport(lambda r: httpx.Response(200, json=body))
        provider = OpenAIProvider(settings, http_client=transport.client())

        with pytest.raises(EmptyResponseError, match="No response from OpenAI"):
            await provider.chat(MESSAGES, None, "sk-test")

    @pytest.mark.asyncio
    async def test_connection_failure(self, settings: LLMSettings) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = OpenAIProvider(settings, http_client=RecordingTransport(refuse).client())

        with pytest.raises(NetworkError):
            await provider.chat(MESSAGES, None, "sk-test")

    @pytest.mark.asyncio
    async def test_timeout(self, settings: LLMSettings) -> None:
        def slow(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        provider = OpenAIProvider(settings, http_client=RecordingTransport(slow).client())

        with pytest.raises(NetworkError, match="timed out"):
            await provider.chat(MESSAGES, None, "sk-test")

    @pytest.mark.asyncio
    async def test_client_reused_per_credential(self, settings: LLMSettings) -> None:
        transport = RecordingTransport(lambda r: httpx.Response(200, json=openai_completion("X")))
        provider = OpenAIProvider(settings, http_client=transport.client())

        await provider.chat(MESSAGES, None, "sk-a")
        await provider.chat(MESSAGES, None, "sk-a")
        await provider.chat(MESSAGES, None, "sk-b")

        assert len(provider._clients) == 2
        assert transport.requests[2].headers["authorization"] == "Bearer sk-b"


class TestAnthropicProvider:
    """Tests for AnthropicProvider."""

    @pytest.mark.asyncio
    async def test_success_lifts_system_message(self, settings: LLMSettings) -> None:
        transport = RecordingTransport(
            lambda r: httpx.Response(200, json=anthropic_message([{"type": "text", "text": "X"}]))
        )
        provider = AnthropicProvider(settings, http_client=transport.client())

        reply = await provider.chat(MESSAGES, None, "sk-ant")

        assert reply == "X"
        request = transport.requests[0]
        assert request.url.path.endswith("/messages")
        assert request.headers["x-api-key"] == "sk-ant"
        body = transport.last_body()
        assert body["system"] == "You are a helpful AI assistant."
        assert body["messages"] == [{"role": "user", "content": "Who wrote this?"}]
        assert body["model"] == "claude-3-5-sonnet-20241022"
        assert body["max_tokens"] == 1000
        assert body["temperature"] == 0.7

    @pytest.mark.asyncio
    async def test_without_system_message(self, settings: LLMSettings) -> None:
        transport = RecordingTransport(
            lambda r: httpx.Response(200, json=anthropic_message([{"type": "text", "text": "X"}]))
        )
        provider = AnthropicProvider(settings, http_client=transport.client())

        await provider.chat([Message(role="user", content="Hi")], None, "sk-ant")

        assert "system" not in transport.last_body()

    @pytest.mark.asyncio
    async def test_first_block_used(self, settings: LLMSettings) -> None:
        blocks = [{"type": "text", "text": "first"}, {"type": "text", "text": "second"}]
        transport = RecordingTransport(lambda r: httpx.Response(200, json=anthropic_message(blocks)))
        provider = AnthropicProvider(settings, http_client=transport.client())

        assert await provider.chat(MESSAGES, None, "sk-ant") == "first"

    @pytest.mark.asyncio
    async def test_empty_content_array(self, settings: LLMSettings) -> None:
        transport = RecordingTransport(lambda r: httpx.Response(200, json=anthropic_message([])))
        provider = AnthropicProvider(settings, http_client=transport.client())

        with pytest.raises(EmptyResponseError, match="No response from Anthropic"):
            await provider.chat(MESSAGES, None, "sk-ant")

    @pytest.mark.asyncio
    async def test_whitespace_text_block(self, settings: LLMSettings) -> None:
        blocks = [{"type": "text", "text": "   "}]
        transport = RecordingTransport(lambda r: httpx.Response(200, json=anthropic_message(blocks)))
        provider = AnthropicProvider(settings, http_client=transport.client())

        with pytest.raises(EmptyResponseError, match="No response from Anthropic"):
            await provider.chat(MESSAGES, None, "sk-ant")

    @pytest.mark.asyncio
    async def test_status_error(self, settings: LLMSettings) -> None:
        body = {"type": "error", "error": {"type": "rate_limit_error", "message": "rate limited"}}
        transport = RecordingTransport(lambda r: httpx.Response(429, json=body))
        provider = AnthropicProvider(settings, http_client=transport.client())

        with pytest.raises(ProviderError) as exc_info:
            await provider.chat(MESSAGES, None, "sk-ant")

        assert exc_info.value.status_code == 429
        assert "429" in exc_info.value.user_message
        assert "rate limited" in exc_info.value.user_message

    @pytest.mark.asyncio
    async def test_missing_credential(self, settings: LLMSettings) -> None:
        transport = RecordingTransport(lambda r: httpx.Response(200, json=anthropic_message([])))
        provider = AnthropicProvider(settings, http_client=transport.client())

        with pytest.raises(AuthRequiredError):
            await provider.chat(MESSAGES, None, "")

        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_connection_failure(self, settings: LLMSettings) -> None:
        def reset(request: httpx.Request) -> httpx.Response:
            raise httpx.RemoteProtocolError("connection reset", request=request)

        provider = AnthropicProvider(settings, http_client=RecordingTransport(reset).client())

        with pytest.raises(NetworkError):
            await provider.chat(MESSAGES, None, "sk-ant")


class TestSplitSystem:
    """Tests for system message extraction."""

    def test_single_leading_system(self) -> None:
        system, turns = split_system(MESSAGES)
        assert system == "You are a helpful AI assistant."
        assert turns == [MESSAGES[1]]

    def test_no_system(self) -> None:
        system, turns = split_system([Message(role="user", content="Hi")])
        assert system is None
        assert len(turns) == 1

    def test_only_leading_system_lifted(self) -> None:
        late = Message(role="system", content="Answer in French.")
        messages = [*MESSAGES, late, Message(role="user", content="And why?")]

        system, turns = split_system(messages)

        assert system == "You are a helpful AI assistant."
        assert turns == [MESSAGES[1], late, messages[3]]

    def test_system_after_user_not_lifted(self) -> None:
        messages = [Message(role="user", content="Hi"), Message(role="system", content="Be brief.")]

        system, turns = split_system(messages)

        assert system is None
        assert turns == messages
