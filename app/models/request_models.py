"""Request models for the CareerSync API."""

from typing import Optional

from pydantic import BaseModel, Field


class CompletionOverrides(BaseModel):
    """Optional per-call model / key overrides shared by feature requests."""

    model: Optional[str] = Field(
        default=None,
        description="Model identifier; defaults to COMPLETION_MODEL",
        examples=["mistralai/mistral-small-3.1-24b-instruct:free"],
    )
    api_key: Optional[str] = Field(
        default=None,
        description="API key for the completion endpoint; defaults to the configured key",
    )


class CVAnalysisRequest(CompletionOverrides):
    """CV (and optional cover letter) to analyse for a role."""

    role: str = Field(default="", examples=["Data Scientist"])
    cv_text: str = Field(default="", description="Plain CV text (pasted or extracted)")
    cover_letter_text: str = Field(default="", description="Optional cover letter text")


class JobMatchRequest(CompletionOverrides):
    """CV and job description to compare."""

    cv_text: str = ""
    job_description_text: str = ""


class SkillsRoadmapRequest(CompletionOverrides):
    """Target role plus optional CV text; profile fields come from the session."""

    target_role: str = Field(default="", examples=["Machine Learning Engineer"])
    cv_text: str = Field(
        default="",
        description="CV text; falls back to the stored profile's experience",
    )


class ChatMessageRequest(CompletionOverrides):
    """A career question for an existing chat session."""

    question: str = ""


class InterviewStartRequest(CompletionOverrides):
    """Job to be interviewed for."""

    job_title: str = Field(default="", examples=["Backend Engineer"])
    job_description: str = ""


class InterviewAnswerRequest(CompletionOverrides):
    """Candidate's answer to the last interview question."""

    response: str = ""


class ProfileUpdateRequest(BaseModel):
    """Fields of the signed-in user's profile to update."""

    name: Optional[str] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    goals: Optional[str] = None
    skills: Optional[list[str]] = None


class FeedbackRequest(BaseModel):
    """Beta feedback / review submitted from the UI."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, examples=["user@example.com"])
    review: str = Field(..., min_length=1)
