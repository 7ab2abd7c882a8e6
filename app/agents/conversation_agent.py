"""Conversation orchestrators — career chat and mock interview.

Each successful turn appends the user's message and the assistant's reply
to an append-only history.  The history itself is never trimmed; only the
last ``history_window_turns`` turns are folded into the next prompt.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from app.agents.feature_agent import FeatureOrchestrator
from app.agents.session_context import SessionContext
from app.config import get_settings
from app.models.prompt_models import FeatureKind
from app.models.response_models import (
    ChatTurn,
    FeatureOutcome,
    OrchestratorState,
    Speaker,
)
from app.prompts.chat_prompt import CHAT_GREETING
from app.tools.completion_client import CompletionClient
from app.tools.markdown_renderer import render_markdown
from app.tools.text_normalizer import normalize

logger = logging.getLogger(__name__)


class ConversationSession:
    """Shared history handling for chat-style features."""

    feature_name: str = "conversation"
    speaker_labels: dict[Speaker, str] = {Speaker.USER: "User", Speaker.ASSISTANT: "Assistant"}

    def __init__(
        self,
        client: Optional[CompletionClient] = None,
        session: Optional[SessionContext] = None,
        session_id: Optional[str] = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self.session = session if session is not None else SessionContext()
        self._client = client if client is not None else CompletionClient()
        self._window = get_settings().history_window_turns
        self._orchestrators: dict[FeatureKind, FeatureOrchestrator] = {}
        self._last: Optional[FeatureOrchestrator] = None
        self.history: list[ChatTurn] = []

    # ── State ─────────────────────────────────────────────────────────────

    @property
    def state(self) -> OrchestratorState:
        return self._last.state if self._last else OrchestratorState.IDLE

    def reset(self) -> None:
        """Tear down the history and return to Idle."""
        self.history.clear()
        for orchestrator in self._orchestrators.values():
            orchestrator.reset()
        self._last = None

    # ── Helpers ───────────────────────────────────────────────────────────

    def _orchestrator(self, feature: FeatureKind) -> FeatureOrchestrator:
        if feature not in self._orchestrators:
            self._orchestrators[feature] = FeatureOrchestrator(feature, self._client, self.session)
        self._last = self._orchestrators[feature]
        return self._last

    def _append(self, speaker: Speaker, text: str) -> ChatTurn:
        turn = ChatTurn(speaker=speaker, text=text, rendered_markup=render_markdown(text))
        self.history.append(turn)
        return turn

    def transcript(self, exclude_last: int = 0) -> str:
        """Recent turns as ``Label: text`` lines, bounded by the window size."""
        turns = self.history[: len(self.history) - exclude_last] if exclude_last else self.history
        if self._window > 0:
            turns = turns[-self._window:]
        else:
            turns = []
        return "\n".join(f"{self.speaker_labels[t.speaker]}: {t.text}" for t in turns)

    def _record(self, user_text: Optional[str], outcome: FeatureOutcome) -> FeatureOutcome:
        if outcome.state is OrchestratorState.SUCCESS:
            if user_text:
                self._append(Speaker.USER, user_text)
            self._append(Speaker.ASSISTANT, outcome.text or "")
            logger.info("%s %s: %d turns", self.feature_name, self.session_id, len(self.history))
        return outcome


class CareerChatSession(ConversationSession):
    """Career advice chat, opened with a greeting from the advisor."""

    feature_name = "career_chat"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._append(Speaker.ASSISTANT, CHAT_GREETING)

    def reset(self) -> None:
        super().reset()
        self._append(Speaker.ASSISTANT, CHAT_GREETING)

    async def ask(
        self,
        question: str,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> FeatureOutcome:
        """Send *question* with the recent conversation and record the answer."""
        orchestrator = self._orchestrator(FeatureKind.CAREER_CHAT)
        # The opening greeting carries no context
        conversation = self.transcript() if len(self.history) > 1 else ""
        outcome = await orchestrator.submit(
            {"question": question, "conversation": conversation},
            model=model,
            api_key=api_key,
        )
        return self._record(normalize(question), outcome)


class MockInterviewSession(ConversationSession):
    """Mock interview: an opening question, then feedback + next question per answer."""

    feature_name = "mock_interview"
    speaker_labels = {Speaker.USER: "Candidate", Speaker.ASSISTANT: "Interviewer"}

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.job_title = ""
        self.job_description = ""

    @property
    def started(self) -> bool:
        return bool(self.history)

    async def start(
        self,
        job_title: str,
        job_description: str,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> FeatureOutcome:
        """Ask the opening question for the given job."""
        orchestrator = self._orchestrator(FeatureKind.MOCK_INTERVIEW_START)
        outcome = await orchestrator.submit(
            {"job_title": job_title, "job_description_text": job_description},
            model=model,
            api_key=api_key,
        )
        if outcome.state is OrchestratorState.SUCCESS:
            self.history.clear()
            self.job_title = normalize(job_title)
            self.job_description = normalize(job_description)
        return self._record(None, outcome)

    async def answer(
        self,
        response: str,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> FeatureOutcome:
        """Evaluate the candidate's *response* and ask the next question."""
        orchestrator = self._orchestrator(FeatureKind.MOCK_INTERVIEW_TURN)
        last_question = self.history[-1].text if self.started else ""
        outcome = await orchestrator.submit(
            {
                "job_title": self.job_title,
                "job_description_text": self.job_description,
                "prior_response": response,
                "question": last_question,
                # The last question is passed on its own
                "conversation": self.transcript(exclude_last=1),
            },
            model=model,
            api_key=api_key,
        )
        return self._record(normalize(response), outcome)
