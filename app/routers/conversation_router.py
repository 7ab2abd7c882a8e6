"""Conversation router — career chat and mock interview sessions."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.agents.conversation_agent import (
    CareerChatSession,
    ConversationSession,
    MockInterviewSession,
)
from app.agents.session_context import SessionContext
from app.models.request_models import (
    ChatMessageRequest,
    InterviewAnswerRequest,
    InterviewStartRequest,
)
from app.models.response_models import ConversationResponse, FeatureOutcome
from app.models.session_store import get_session_store
from app.routers.dependencies import (
    get_completion_client,
    get_session_context,
    raise_for_outcome,
)
from app.tools.completion_client import CompletionClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["conversations"])


def _snapshot(item: ConversationSession, outcome: Optional[FeatureOutcome] = None) -> ConversationResponse:
    return ConversationResponse(
        session_id=item.session_id,
        feature=item.feature_name,
        history=list(item.history),
        outcome=outcome,
    )


def _not_found(kind: str, session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{kind} session '{session_id}' not found")


# ── Career chat ───────────────────────────────────────────────────────────────


@router.post("/chat/sessions", response_model=ConversationResponse)
async def create_chat(
    session: SessionContext = Depends(get_session_context),
    client: CompletionClient = Depends(get_completion_client),
) -> ConversationResponse:
    """Open a career chat; the history starts with the advisor's greeting."""
    chat = get_session_store().add(CareerChatSession(client=client, session=session))
    return _snapshot(chat)


@router.post("/chat/sessions/{session_id}/messages", response_model=ConversationResponse)
async def ask_chat(
    session_id: str,
    req: ChatMessageRequest,
    session: SessionContext = Depends(get_session_context),
) -> ConversationResponse:
    """Ask a career question within an existing chat."""
    chat = get_session_store().get(session.user_id, session_id, CareerChatSession)
    if chat is None:
        raise _not_found("Chat", session_id)

    outcome = await chat.ask(req.question, model=req.model, api_key=req.api_key)
    raise_for_outcome(outcome)
    return _snapshot(chat, outcome)


@router.get("/chat/sessions/{session_id}", response_model=ConversationResponse)
async def get_chat(
    session_id: str,
    session: SessionContext = Depends(get_session_context),
) -> ConversationResponse:
    """Return the chat history."""
    chat = get_session_store().get(session.user_id, session_id, CareerChatSession)
    if chat is None:
        raise _not_found("Chat", session_id)
    return _snapshot(chat)


@router.delete("/chat/sessions/{session_id}", status_code=204)
async def delete_chat(
    session_id: str,
    session: SessionContext = Depends(get_session_context),
) -> None:
    """Reset the chat, destroying its history."""
    if not get_session_store().remove(session.user_id, session_id):
        raise _not_found("Chat", session_id)


# ── Mock interview ────────────────────────────────────────────────────────────


@router.post("/interviews", response_model=ConversationResponse)
async def start_interview(
    req: InterviewStartRequest,
    session: SessionContext = Depends(get_session_context),
    client: CompletionClient = Depends(get_completion_client),
) -> ConversationResponse:
    """Start a mock interview and return the opening question."""
    interview = MockInterviewSession(client=client, session=session)
    outcome = await interview.start(
        req.job_title, req.job_description, model=req.model, api_key=req.api_key,
    )
    # A failed start leaves nothing behind to answer
    raise_for_outcome(outcome)
    get_session_store().add(interview)
    return _snapshot(interview, outcome)


@router.post("/interviews/{session_id}/answers", response_model=ConversationResponse)
async def answer_interview(
    session_id: str,
    req: InterviewAnswerRequest,
    session: SessionContext = Depends(get_session_context),
) -> ConversationResponse:
    """Submit an answer; returns feedback and the next question."""
    interview = get_session_store().get(session.user_id, session_id, MockInterviewSession)
    if interview is None:
        raise _not_found("Interview", session_id)

    outcome = await interview.answer(req.response, model=req.model, api_key=req.api_key)
    raise_for_outcome(outcome)
    return _snapshot(interview, outcome)


@router.get("/interviews/{session_id}", response_model=ConversationResponse)
async def get_interview(
    session_id: str,
    session: SessionContext = Depends(get_session_context),
) -> ConversationResponse:
    """Return the interview transcript."""
    interview = get_session_store().get(session.user_id, session_id, MockInterviewSession)
    if interview is None:
        raise _not_found("Interview", session_id)
    return _snapshot(interview)


@router.delete("/interviews/{session_id}", status_code=204)
async def delete_interview(
    session_id: str,
    session: SessionContext = Depends(get_session_context),
) -> None:
    """End the interview, destroying its transcript."""
    if not get_session_store().remove(session.user_id, session_id):
        raise _not_found("Interview", session_id)
