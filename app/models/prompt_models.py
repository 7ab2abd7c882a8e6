"""Prompt-side models: feature kinds, prompt requests and built prompts."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class FeatureKind(str, Enum):
    """Every AI feature the service exposes."""

    CV_ANALYSIS = "cv_analysis"
    JOB_MATCH = "job_match"
    SKILLS_ROADMAP = "skills_roadmap"
    CAREER_CHAT = "career_chat"
    MOCK_INTERVIEW_START = "mock_interview_start"
    MOCK_INTERVIEW_TURN = "mock_interview_turn"


# Fields that must be non-empty before a prompt may be built
REQUIRED_FIELDS: dict[FeatureKind, tuple[str, ...]] = {
    FeatureKind.CV_ANALYSIS: ("role", "cv_text"),
    FeatureKind.JOB_MATCH: ("cv_text", "job_description_text"),
    FeatureKind.SKILLS_ROADMAP: ("target_role", "cv_text"),
    FeatureKind.CAREER_CHAT: ("question",),
    FeatureKind.MOCK_INTERVIEW_START: ("job_title", "job_description_text"),
    FeatureKind.MOCK_INTERVIEW_TURN: ("job_title", "job_description_text", "prior_response"),
}

# Human-readable names used in validation messages
FIELD_LABELS: dict[str, str] = {
    "role": "the role you are applying for",
    "cv_text": "your CV",
    "job_description_text": "the job description",
    "target_role": "your target role",
    "question": "a question",
    "job_title": "a job title",
    "prior_response": "your answer",
}


class PromptRequest(BaseModel):
    """Everything the Prompt Builder and Completion Client need for one call."""

    feature_kind: FeatureKind
    fields: dict[str, str] = Field(default_factory=dict)
    model_id: str = Field(..., min_length=1)
    max_tokens: int = Field(..., gt=0)
    temperature: float = Field(..., ge=0, le=1)

    @model_validator(mode="after")
    def _require_fields(self) -> "PromptRequest":
        missing = [
            name
            for name in REQUIRED_FIELDS[self.feature_kind]
            if not (self.fields.get(name) or "").strip()
        ]
        if missing:
            raise ValueError(
                f"Missing required field(s) for {self.feature_kind.value}: {', '.join(missing)}"
            )
        return self

    def field(self, name: str, default: str = "") -> str:
        """Return a field value, or *default* when absent or blank."""
        value = self.fields.get(name) or ""
        return value if value.strip() else default


class BuiltPrompt(BaseModel):
    """System + user text produced by the Prompt Builder."""

    system_text: Optional[str] = None
    user_text: str
