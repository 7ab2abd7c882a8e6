"""Completion Client — wire format and outcome mapping against a mock transport."""

from __future__ import annotations

import json

import httpx
import pytest

from app.models.response_models import CompletionErrorKind
from app.tools.completion_client import (
    ChatChoiceBody,
    CompletionClient,
    MalformedCompletion,
    TextChoiceBody,
    parse_completion_body,
)

BASE_URL = "https://llm.test/api/v1"


def _client(handler, mode: str = "chat") -> CompletionClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CompletionClient(base_url=BASE_URL, mode=mode, http_client=http)


async def _complete(client: CompletionClient, system_text: str | None = "sys"):
    return await client.complete(
        system_text=system_text,
        user_text="user",
        model_id="test/model",
        max_tokens=800,
        temperature=0.7,
        api_key="secret",
    )


@pytest.mark.asyncio
async def test_chat_request_shape_and_success():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "ATS Score: 80%"}}]})

    result = await _complete(_client(handler))

    assert result.ok
    assert result.text == "ATS Score: 80%"
    assert seen["path"] == "/api/v1/chat/completions"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"]["model"] == "test/model"
    assert seen["body"]["max_tokens"] == 800
    assert seen["body"]["temperature"] == 0.7
    assert seen["body"]["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "user"},
    ]


@pytest.mark.asyncio
async def test_chat_request_without_system_text_sends_single_message():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "Q1"}}]})

    await _complete(_client(handler), system_text=None)
    assert seen["body"]["messages"] == [{"role": "user", "content": "user"}]


@pytest.mark.asyncio
async def test_completion_mode_sends_prompt_and_reads_text_choice():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"text": "Match: 47"}]})

    result = await _complete(_client(handler, mode="completion"))

    assert result.text == "Match: 47"
    assert seen["path"] == "/api/v1/completions"
    assert seen["body"]["prompt"] == "sys\n\nuser"
    assert "messages" not in seen["body"]


@pytest.mark.asyncio
async def test_http_error_carries_status_and_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    result = await _complete(_client(handler))

    assert result.error_kind == CompletionErrorKind.HTTP_ERROR
    assert result.status_code == 500
    assert "boom" in result.detail
    assert result.describe().startswith("API error: 500")


@pytest.mark.asyncio
async def test_http_error_with_unparseable_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad gateway</html>")

    result = await _complete(_client(handler))

    assert result.error_kind == CompletionErrorKind.HTTP_ERROR
    assert result.detail is None


@pytest.mark.asyncio
async def test_transport_failure_is_network_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await _complete(_client(handler))

    assert result.error_kind == CompletionErrorKind.NETWORK_FAILURE
    assert result.text is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"foo": "bar"},
        {"choices": []},
        {"choices": [{"message": {"content": None}}]},
        {"error": {"message": "Rate limit exceeded"}},
    ],
)
async def test_unexpected_shapes_are_malformed(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    result = await _complete(_client(handler))
    assert result.error_kind == CompletionErrorKind.MALFORMED_RESPONSE


@pytest.mark.asyncio
async def test_non_json_success_body_is_malformed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json")

    result = await _complete(_client(handler))
    assert result.error_kind == CompletionErrorKind.MALFORMED_RESPONSE


@pytest.mark.asyncio
async def test_empty_content_is_reported_separately():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": [{"message": {"content": ""}}]})

    result = await _complete(_client(handler))
    assert result.error_kind == CompletionErrorKind.EMPTY_CONTENT


def test_parse_completion_body_tags_the_shape():
    chat = parse_completion_body({"choices": [{"message": {"content": "a"}}]})
    text = parse_completion_body({"choices": [{"text": "b"}]})
    assert isinstance(chat, ChatChoiceBody) and chat.content == "a"
    assert isinstance(text, TextChoiceBody) and text.content == "b"


def test_parse_completion_body_surfaces_upstream_error_message():
    with pytest.raises(MalformedCompletion, match="Rate limit exceeded"):
        parse_completion_body({"error": {"message": "Rate limit exceeded"}})
