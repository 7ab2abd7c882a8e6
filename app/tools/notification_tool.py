"""Telegram Notification Tool.

Forwards beta feedback / reviews submitted from the UI to the operator's
Telegram chat.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Type

import httpx
from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"


class NotificationType(str, Enum):
    """Supported notification types."""

    FEEDBACK_SUBMITTED = "feedback_submitted"


# ── Message templates (Markdown) ─────────────────────────────────────────────

TEMPLATES: dict[NotificationType, str] = {
    NotificationType.FEEDBACK_SUBMITTED: (
        "📝 *New Review Submission*\n\n"
        "**Name:** {name}\n"
        "**Email:** {email}\n\n"
        "**Review:**\n{review}"
    ),
}


class NotificationInput(BaseModel):
    """Input schema for the Notification Tool."""

    notification_type: str = Field(
        ...,
        description="Type of notification: feedback_submitted",
    )
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Key-value payload for the notification template",
    )


class NotificationTool(BaseTool):
    """Sends Telegram notifications for CareerSync events."""

    name: str = "telegram_notifier"
    description: str = (
        "Sends a Telegram notification to the CareerSync operator. "
        "Supports types: feedback_submitted."
    )
    args_schema: Type[BaseModel] = NotificationInput

    # Injected from settings
    bot_token: str = ""
    chat_id: str = ""

    def _run(self, notification_type: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Synchronous send — uses httpx sync client."""
        payload = payload or {}
        if not self._configured(notification_type):
            return {"sent": False, "reason": "telegram_not_configured"}

        try:
            with httpx.Client(timeout=10) as client:
                resp = client.post(self._url(), json=self._body(notification_type, payload))
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Telegram send failed: %s", exc)
            return {"sent": False, "error": str(exc)}

        logger.info("Telegram notification sent: %s", notification_type)
        return {"sent": True, "notification_type": notification_type}

    async def _arun(self, notification_type: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Async send — uses httpx async client."""
        payload = payload or {}
        if not self._configured(notification_type):
            return {"sent": False, "reason": "telegram_not_configured"}

        try:
            async with httpx.AsyncClient(timeout=10) as client:
                resp = await client.post(self._url(), json=self._body(notification_type, payload))
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Telegram send failed: %s", exc)
            return {"sent": False, "error": str(exc)}

        logger.info("Telegram notification sent: %s", notification_type)
        return {"sent": True, "notification_type": notification_type}

    # ── Internal helpers ──────────────────────────────────────────────────

    def _configured(self, notification_type: str) -> bool:
        if not self.bot_token or not self.chat_id:
            logger.info("Telegram not configured — skipping notification: %s", notification_type)
            return False
        return True

    def _url(self) -> str:
        return TELEGRAM_API_URL.format(token=self.bot_token)

    def _body(self, notification_type: str, payload: dict[str, Any]) -> dict[str, Any]:
        return {
            "chat_id": self.chat_id,
            "text": self._build_message(notification_type, payload),
            "parse_mode": "Markdown",
        }

    def _build_message(self, notification_type: str, payload: dict[str, Any]) -> str:
        """Render notification template with payload values."""
        try:
            ntype = NotificationType(notification_type)
        except ValueError:
            return f"🔔 *Notification*\n\nType: {notification_type}\nPayload: {payload}"

        try:
            return TEMPLATES[ntype].format(**payload)
        except KeyError as exc:
            logger.warning("Template key missing: %s — falling back to raw payload", exc)
            return f"🔔 *{ntype.value}*\n\n{payload}"
