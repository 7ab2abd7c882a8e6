"""Completion Client — one HTTPS POST to a hosted chat-completion endpoint.

Supports both response shapes seen on OpenAI-compatible APIs:

- chat form:        ``choices[0].message.content``
- completion form:  ``choices[0].text``

No retries, no streaming, no caching: every call is one outbound request and
every failure comes back as a ``CompletionResult`` rather than an exception.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Literal, Optional, Union

import httpx
from pydantic import BaseModel, Field, ValidationError

from app.config import get_settings
from app.models.response_models import CompletionErrorKind, CompletionResult

logger = logging.getLogger(__name__)


# ── Response shapes ──────────────────────────────────────────────────────────


class _ChatMessage(BaseModel):
    content: str


class _ChatChoice(BaseModel):
    message: _ChatMessage


class _TextChoice(BaseModel):
    text: str


class ChatChoiceBody(BaseModel):
    """Chat-completions response body."""

    kind: Literal["chat"] = "chat"
    choices: list[_ChatChoice] = Field(..., min_length=1)

    @property
    def content(self) -> str:
        return self.choices[0].message.content


class TextChoiceBody(BaseModel):
    """Legacy completions response body."""

    kind: Literal["text"] = "text"
    choices: list[_TextChoice] = Field(..., min_length=1)

    @property
    def content(self) -> str:
        return self.choices[0].text


CompletionBody = Union[ChatChoiceBody, TextChoiceBody]


class MalformedCompletion(ValueError):
    """Body matches neither the chat nor the completion shape."""


def parse_completion_body(body: Any) -> CompletionBody:
    """Parse *body* into one of the known response shapes."""
    if not isinstance(body, dict):
        raise MalformedCompletion(f"expected a JSON object, got {type(body).__name__}")

    errors: list[str] = []
    for shape in (ChatChoiceBody, TextChoiceBody):
        try:
            return shape.model_validate(body)
        except ValidationError as exc:
            errors.append(f"{shape.__name__}: {exc.error_count()} error(s)")

    upstream = body.get("error")
    if isinstance(upstream, dict) and upstream.get("message"):
        raise MalformedCompletion(str(upstream["message"]))
    raise MalformedCompletion("; ".join(errors))


# ── Client ───────────────────────────────────────────────────────────────────


class CompletionClient:
    """Sends built prompts to the configured completion endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        mode: Optional[str] = None,
        timeout_s: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.completion_base_url).rstrip("/")
        self._mode = (mode or settings.completion_mode).strip().lower()
        self._timeout = timeout_s if timeout_s is not None else settings.completion_timeout_s
        self._referer = settings.app_referer
        self._title = settings.app_title
        self._http_client = http_client

    # ── Public API ────────────────────────────────────────────────────────

    async def complete(
        self,
        system_text: Optional[str],
        user_text: str,
        model_id: str,
        max_tokens: int,
        temperature: float,
        api_key: str,
    ) -> CompletionResult:
        """Send one request and map the outcome to a CompletionResult."""
        url, payload = self._build_request(system_text, user_text, model_id, max_tokens, temperature)
        headers = self._build_headers(api_key)

        logger.info("Completion request — mode=%s model=%s max_tokens=%d", self._mode, model_id, max_tokens)
        try:
            resp = await self._post(url, payload, headers)
        except httpx.TransportError as exc:
            logger.error("Completion transport failure: %s", exc)
            return CompletionResult(
                error_kind=CompletionErrorKind.NETWORK_FAILURE,
                detail=str(exc) or exc.__class__.__name__,
            )

        if not resp.is_success:
            detail = self._json_or_none(resp)
            logger.error("Completion HTTP error %d: %s", resp.status_code, detail)
            return CompletionResult(
                error_kind=CompletionErrorKind.HTTP_ERROR,
                status_code=resp.status_code,
                detail=json.dumps(detail) if detail is not None else None,
            )

        try:
            body = parse_completion_body(resp.json())
        except ValueError as exc:
            # covers json.JSONDecodeError and MalformedCompletion
            logger.error("Malformed completion response: %s", exc)
            return CompletionResult(
                error_kind=CompletionErrorKind.MALFORMED_RESPONSE,
                status_code=resp.status_code,
                detail=str(exc),
            )

        content = body.content
        if not content.strip():
            logger.warning("Completion returned empty content (shape=%s)", body.kind)
            return CompletionResult(
                error_kind=CompletionErrorKind.EMPTY_CONTENT,
                status_code=resp.status_code,
            )

        logger.info("Completion received — shape=%s chars=%d", body.kind, len(content))
        return CompletionResult(text=content, status_code=resp.status_code)

    # ── Helpers ───────────────────────────────────────────────────────────

    def _build_request(
        self,
        system_text: Optional[str],
        user_text: str,
        model_id: str,
        max_tokens: int,
        temperature: float,
    ) -> tuple[str, dict[str, Any]]:
        payload: dict[str, Any] = {
            "model": model_id,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if self._mode == "completion":
            payload["prompt"] = f"{system_text}\n\n{user_text}" if system_text else user_text
            return f"{self._base_url}/completions", payload

        messages = []
        if system_text:
            messages.append({"role": "system", "content": system_text})
        messages.append({"role": "user", "content": user_text})
        payload["messages"] = messages
        return f"{self._base_url}/chat/completions", payload

    def _build_headers(self, api_key: str) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        if self._referer:
            headers["HTTP-Referer"] = self._referer
        if self._title:
            headers["X-Title"] = self._title
        return headers

    async def _post(self, url: str, payload: dict[str, Any], headers: dict[str, str]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(url, json=payload, headers=headers)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(url, json=payload, headers=headers)

    @staticmethod
    def _json_or_none(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            return None
