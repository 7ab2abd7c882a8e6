"""Account router — profile, sign-out teardown and beta feedback."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.agents.session_context import SessionContext
from app.config import get_settings
from app.models.errors import ProfileBackendError
from app.models.request_models import FeedbackRequest, ProfileUpdateRequest
from app.models.response_models import FeedbackResult, UserProfile
from app.models.session_store import get_session_store
from app.routers.dependencies import get_session_context, get_session_with_profile
from app.tools.notification_tool import NotificationTool
from app.tools.profile_client import get_profile_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["account"])


@router.get("/profile", response_model=UserProfile)
async def get_profile(session: SessionContext = Depends(get_session_with_profile)) -> UserProfile:
    """Return the signed-in user's profile (empty when none is stored yet)."""
    return session.profile or UserProfile(id=session.user_id)


@router.patch("/profile", response_model=UserProfile)
def update_profile(
    req: ProfileUpdateRequest,
    session: SessionContext = Depends(get_session_context),
) -> UserProfile:
    """Update fields of the signed-in user's profile."""
    client = get_profile_client()
    if client is None or session.is_anonymous:
        raise HTTPException(status_code=503, detail="Profile storage is not configured")

    try:
        return client.update_profile(session.user_id, req.model_dump(exclude_none=True))
    except ProfileBackendError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.delete("/session", status_code=204)
async def sign_out(session: SessionContext = Depends(get_session_context)) -> None:
    """Tear down every chat / interview session owned by the caller."""
    removed = get_session_store().remove_owner(session.user_id)
    logger.info("Sign-out for %s: %d sessions destroyed", session.user_id, removed)


@router.post("/feedback", response_model=FeedbackResult)
async def submit_feedback(req: FeedbackRequest) -> FeedbackResult:
    """Forward beta feedback to the operator via Telegram."""
    settings = get_settings()
    notify_tool = NotificationTool(
        bot_token=settings.telegram_bot_token,
        chat_id=settings.telegram_chat_id,
    )
    result = await notify_tool._arun(
        notification_type="feedback_submitted",
        payload={"name": req.name, "email": req.email, "review": req.review},
    )
    logger.info("Feedback received from %s (notified=%s)", req.email, result.get("sent"))
    return FeedbackResult(received=True, notified=bool(result.get("sent")))
