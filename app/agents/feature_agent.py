"""Feature Orchestrator — one submission of one AI feature.

Flow:
1. Validating: normalize fields, check required ones (and minimum CV length)
   → on failure: Failed, no network call
2. Requesting: build the prompt, make exactly one completion call
   → on error: Failed with a user-facing message, no retry
3. Success: extract the score (scored features only) and render Markdown
4. Log the outcome
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel

from app.agents.event_log import log_event
from app.agents.session_context import SessionContext
from app.config import get_settings
from app.models.errors import ValidationError
from app.models.prompt_models import FIELD_LABELS, REQUIRED_FIELDS, FeatureKind, PromptRequest
from app.models.response_models import (
    CompletionResult,
    ExtractedOutcome,
    FeatureOutcome,
    OrchestratorState,
)
from app.prompts.builder import build
from app.tools.completion_client import CompletionClient
from app.tools.markdown_renderer import render_markdown
from app.tools.score_extractor import ScoreExtractionTool
from app.tools.text_normalizer import normalize

logger = logging.getLogger(__name__)

CV_TOO_SHORT_MESSAGE = "CV is too short. Please provide more detailed content."
BUSY_MESSAGE = "A request is already in progress. Please wait for it to finish."
MISSING_KEY_MESSAGE = "No API key configured. Please add your API key in Settings."

# Built internally from already-normalized turns; newlines are kept
VERBATIM_FIELDS = frozenset({"conversation"})


class FeatureProfile(BaseModel):
    """Fixed completion parameters and messages for one feature."""

    max_tokens: int
    temperature: float = 0.7
    scored: bool = False
    enforce_min_cv_length: bool = False
    failure_message: str


FEATURE_PROFILES: dict[FeatureKind, FeatureProfile] = {
    FeatureKind.CV_ANALYSIS: FeatureProfile(
        max_tokens=800, scored=True, enforce_min_cv_length=True,
        failure_message="Failed to analyze CV.",
    ),
    FeatureKind.JOB_MATCH: FeatureProfile(
        max_tokens=600, scored=True, failure_message="Failed to match job description.",
    ),
    FeatureKind.SKILLS_ROADMAP: FeatureProfile(
        max_tokens=1000, failure_message="Failed to generate skills map.",
    ),
    FeatureKind.CAREER_CHAT: FeatureProfile(
        max_tokens=800, failure_message="Failed to get career advice.",
    ),
    FeatureKind.MOCK_INTERVIEW_START: FeatureProfile(
        max_tokens=600, failure_message="Failed to start the interview.",
    ),
    FeatureKind.MOCK_INTERVIEW_TURN: FeatureProfile(
        max_tokens=600, failure_message="Failed to process interview response.",
    ),
}


class FeatureOrchestrator:
    """Sequences Normalizer → Prompt Builder → Completion Client → Extractor."""

    def __init__(
        self,
        feature: FeatureKind,
        client: Optional[CompletionClient] = None,
        session: Optional[SessionContext] = None,
    ) -> None:
        self._settings = get_settings()
        self._feature = feature
        self._profile = FEATURE_PROFILES[feature]
        self._client = client if client is not None else CompletionClient()
        self._session = session if session is not None else SessionContext()
        self._score_tool = ScoreExtractionTool()
        self.state = OrchestratorState.IDLE
        self.busy = False
        self.last_outcome: Optional[FeatureOutcome] = None

    # ── Public API ────────────────────────────────────────────────────────

    async def submit(
        self,
        fields: dict[str, Optional[str]],
        model: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> FeatureOutcome:
        """Run one submission and return its outcome; never raises."""
        if self.busy:
            return FeatureOutcome(
                feature=self._feature,
                state=OrchestratorState.FAILED,
                error_kind="validation",
                error_message=BUSY_MESSAGE,
            )

        # ── 1. Validating ─────────────────────────────────────────────────
        self.state = OrchestratorState.VALIDATING
        try:
            request, key = self._prepare(fields, model, api_key)
        except ValidationError as exc:
            logger.info("Validation failed for %s: %s", self._feature.value, exc.message)
            return self._finish(OrchestratorState.FAILED, error_kind="validation", error_message=exc.message)

        # ── 2. Requesting ─────────────────────────────────────────────────
        prompt = build(request)
        self.state = OrchestratorState.REQUESTING
        self.busy = True
        try:
            result = await self._client.complete(
                system_text=prompt.system_text,
                user_text=prompt.user_text,
                model_id=request.model_id,
                max_tokens=request.max_tokens,
                temperature=request.temperature,
                api_key=key,
            )
        except Exception:
            logger.exception("Completion call raised for %s", self._feature.value)
            return self._finish(
                OrchestratorState.FAILED,
                error_kind="unexpected",
                error_message=f"{self._profile.failure_message} Please try again.",
            )
        finally:
            self.busy = False

        if not result.ok:
            return self._finish_error(result)

        # ── 3. Success ────────────────────────────────────────────────────
        extracted = await self._extract(result.text or "")
        return self._finish(
            OrchestratorState.SUCCESS,
            text=result.text,
            score=extracted.score,
            score_available=extracted.score is not None,
            rendered_markup=extracted.rendered_markup,
        )

    def reset(self) -> None:
        """Return to Idle and forget the last outcome."""
        self.state = OrchestratorState.IDLE
        self.last_outcome = None

    # ── Helpers ───────────────────────────────────────────────────────────

    def _prepare(
        self,
        fields: dict[str, Optional[str]],
        model: Optional[str],
        api_key: Optional[str],
    ) -> tuple[PromptRequest, str]:
        """Normalize and validate inputs; raise ValidationError on bad input."""
        clean = {
            name: (value or "") if name in VERBATIM_FIELDS else normalize(value)
            for name, value in fields.items()
        }

        for name in REQUIRED_FIELDS[self._feature]:
            if not clean.get(name):
                label = FIELD_LABELS.get(name, name)
                raise ValidationError(f"Please provide {label}.", field=name)

        cv_text = clean.get("cv_text", "")
        if self._profile.enforce_min_cv_length and len(cv_text) < self._settings.min_cv_length:
            raise ValidationError(CV_TOO_SHORT_MESSAGE, field="cv_text")

        key = (api_key or "").strip() or self._settings.api_key_for(self._feature.value)
        if not key:
            raise ValidationError(MISSING_KEY_MESSAGE, field="api_key")

        request = PromptRequest(
            feature_kind=self._feature,
            fields=clean,
            model_id=(model or "").strip() or self._settings.completion_model,
            max_tokens=self._profile.max_tokens,
            temperature=self._profile.temperature,
        )
        return request, key

    async def _extract(self, text: str) -> ExtractedOutcome:
        score = None
        if self._profile.scored:
            found = await self._score_tool._arun(text=text)
            score = found["score"]
        return ExtractedOutcome(score=score, rendered_markup=render_markdown(text))

    def _finish_error(self, result: CompletionResult) -> FeatureOutcome:
        message = f"{self._profile.failure_message} {result.describe()}"
        if result.status_code in (401, 403):
            message += " Please check your API key and try again."
        return self._finish(
            OrchestratorState.FAILED,
            error_kind=result.error_kind.value if result.error_kind else None,
            error_message=message,
        )

    def _finish(self, state: OrchestratorState, **values) -> FeatureOutcome:
        self.state = state
        outcome = FeatureOutcome(feature=self._feature, state=state, **values)
        self.last_outcome = outcome
        log_event(self._session.user_id, outcome)
        return outcome
