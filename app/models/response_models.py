"""Response models for the CareerSync API."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from app.models.prompt_models import FeatureKind


class CompletionErrorKind(str, Enum):
    """Ways a completion call can fail."""

    NETWORK_FAILURE = "network_failure"
    HTTP_ERROR = "http_error"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_CONTENT = "empty_content"


class CompletionResult(BaseModel):
    """Outcome of one completion call: either text or an error kind."""

    text: Optional[str] = None
    error_kind: Optional[CompletionErrorKind] = None
    status_code: Optional[int] = None
    detail: Any = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "CompletionResult":
        if (self.text is None) == (self.error_kind is None):
            raise ValueError("CompletionResult needs exactly one of text / error_kind")
        return self

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    def describe(self) -> str:
        """Short user-facing description of the error."""
        if self.error_kind is None:
            return ""
        if self.error_kind == CompletionErrorKind.HTTP_ERROR:
            if self.detail is not None:
                return f"API error: {self.status_code} - {self.detail}"
            return f"API error: {self.status_code}"
        if self.error_kind == CompletionErrorKind.NETWORK_FAILURE:
            return f"Could not reach the completion service ({self.detail})"
        if self.error_kind == CompletionErrorKind.MALFORMED_RESPONSE:
            return "The completion service returned an unexpected response"
        return "No content returned from API"


class ExtractedOutcome(BaseModel):
    """Post-processed model output."""

    score: Optional[int] = Field(default=None, ge=0, le=100)
    rendered_markup: str = ""


class OrchestratorState(str, Enum):
    """Lifecycle of one feature submission."""

    IDLE = "idle"
    VALIDATING = "validating"
    REQUESTING = "requesting"
    SUCCESS = "success"
    FAILED = "failed"


class FeatureOutcome(BaseModel):
    """Result of one feature submission, returned by every feature endpoint."""

    feature: FeatureKind
    state: OrchestratorState
    text: Optional[str] = None
    score: Optional[int] = Field(default=None, ge=0, le=100)
    score_available: bool = Field(
        default=False,
        description="False when the feature scores but no score was found in the output",
    )
    rendered_markup: str = ""
    error_kind: Optional[str] = Field(
        default=None,
        description="validation | network_failure | http_error | malformed_response | empty_content | unexpected",
    )
    error_message: Optional[str] = None


class Speaker(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    """One entry of a conversation history."""

    speaker: Speaker
    text: str
    rendered_markup: str = ""
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
    )


class ConversationResponse(BaseModel):
    """Conversation session snapshot returned by chat / interview endpoints."""

    session_id: str
    feature: str
    history: list[ChatTurn] = Field(default_factory=list)
    outcome: Optional[FeatureOutcome] = None


class UserProfile(BaseModel):
    """Profile record stored in the hosted backend."""

    id: str
    name: Optional[str] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    goals: Optional[str] = None
    skills: list[str] = Field(default_factory=list)


class DocumentTextResponse(BaseModel):
    """Normalized text extracted from an uploaded document."""

    filename: str
    characters: int
    text: str


class FeedbackResult(BaseModel):
    """Response returned by POST /api/v1/feedback."""

    received: bool = True
    notified: bool = False


class HealthResponse(BaseModel):
    """Health-check response."""

    status: str = "ok"
    version: str = "1.0.0"


class LogEntry(BaseModel):
    """Single log entry for the /api/v1/logs endpoint."""

    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    user_id: str = ""
    feature: str = ""
    state: str = ""
    score: Optional[int] = None
    error_kind: Optional[str] = None
    response_preview: str = ""
