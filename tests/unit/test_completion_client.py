"""
Unit tests for the chat-completion client.
"""

import json

import httpx
import pytest

from incident_hub.clients.completion_client import ChatCompletionClient
from incident_hub.core.exceptions import CompletionServiceError, ConfigurationError


def _client(handler, api_key: str = "test-key") -> ChatCompletionClient:
    return ChatCompletionClient(
        api_key=api_key,
        base_url="https://llm.test/v1",
        model="test-model",
        transport=httpx.MockTransport(handler),
    )


async def test_complete_returns_message_content() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": "Possible Cause: X"}}]}
        )

    async with _client(handler) as client:
        text = await client.complete("system", "user")

    assert text == "Possible Cause: X"
    assert seen["url"] == "https://llm.test/v1/chat/completions"
    assert seen["auth"] == "Bearer test-key"
    assert seen["body"]["model"] == "test-model"
    assert seen["body"]["max_tokens"] == 500
    assert seen["body"]["temperature"] == 0.7
    assert [m["role"] for m in seen["body"]["messages"]] == ["system", "user"]


async def test_missing_key_raises_configuration_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = _client(handler, api_key="")
    with pytest.raises(ConfigurationError):
        await client.complete("system", "user")


@pytest.mark.parametrize(
    "payload",
    [
        {"choices": []},
        {"choices": [{"message": {"content": ""}}]},
        {"result": "wrong shape"},
    ],
)
async def test_malformed_response(payload: dict) -> None:
    client = _client(lambda request: httpx.Response(200, json=payload))

    with pytest.raises(CompletionServiceError, match="Invalid response format"):
        await client.complete("system", "user")
    await client.close()


async def test_http_error_is_mapped() -> None:
    client = _client(lambda request: httpx.Response(503, text="overloaded"))

    with pytest.raises(CompletionServiceError) as exc_info:
        await client.complete("system", "user")

    assert exc_info.value.code == "COMPLETION_SERVICE_ERROR"
    assert exc_info.value.details == "overloaded"
    await client.close()


async def test_transport_error_is_mapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    with pytest.raises(CompletionServiceError):
        await client.complete("system", "user")
    await client.close()
