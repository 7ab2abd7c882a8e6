"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from typing import Optional

from fastapi import Header, HTTPException

from app.agents.session_context import SessionContext, resolve_session
from app.models.errors import ProfileBackendError
from app.models.response_models import FeatureOutcome
from app.tools.completion_client import CompletionClient
from app.tools.profile_client import get_profile_client


def get_session_context(authorization: Optional[str] = Header(default=None)) -> SessionContext:
    """Resolve the caller's session from the Authorization header."""
    try:
        return resolve_session(authorization, get_profile_client())
    except ProfileBackendError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


def get_session_with_profile(authorization: Optional[str] = Header(default=None)) -> SessionContext:
    """Like get_session_context, with the stored profile loaded."""
    try:
        return resolve_session(authorization, get_profile_client(), load_profile=True)
    except ProfileBackendError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


def get_completion_client() -> CompletionClient:
    """Completion client built from settings."""
    return CompletionClient()


def raise_for_outcome(outcome: FeatureOutcome) -> FeatureOutcome:
    """Translate a failed outcome into an HTTP error carrying its message."""
    if outcome.error_kind is None:
        return outcome
    status = 422 if outcome.error_kind == "validation" else 502
    raise HTTPException(status_code=status, detail=outcome.error_message or "Request failed")
