"""Prompt Builder — maps a PromptRequest to system + user text."""

from __future__ import annotations

from typing import Callable

from app.models.prompt_models import BuiltPrompt, FeatureKind, PromptRequest
from app.prompts.analysis_prompt import (
    CV_ANALYSIS_SYSTEM_PROMPT,
    JOB_MATCH_SYSTEM_PROMPT,
    build_cv_analysis_user_prompt,
    build_job_match_user_prompt,
)
from app.prompts.chat_prompt import CAREER_ADVISOR_SYSTEM_PROMPT, build_chat_user_prompt
from app.prompts.interview_prompt import (
    build_interview_start_prompt,
    build_interview_turn_prompt,
)
from app.prompts.roadmap_prompt import ROADMAP_SYSTEM_PROMPT, build_roadmap_user_prompt


def _cv_analysis(req: PromptRequest) -> BuiltPrompt:
    return BuiltPrompt(
        system_text=CV_ANALYSIS_SYSTEM_PROMPT,
        user_text=build_cv_analysis_user_prompt(
            role=req.field("role"),
            cv_text=req.field("cv_text"),
            cover_letter_text=req.field("cover_letter_text"),
        ),
    )


def _job_match(req: PromptRequest) -> BuiltPrompt:
    return BuiltPrompt(
        system_text=JOB_MATCH_SYSTEM_PROMPT,
        user_text=build_job_match_user_prompt(
            cv_text=req.field("cv_text"),
            job_description_text=req.field("job_description_text"),
        ),
    )


def _skills_roadmap(req: PromptRequest) -> BuiltPrompt:
    return BuiltPrompt(
        system_text=ROADMAP_SYSTEM_PROMPT,
        user_text=build_roadmap_user_prompt(
            target_role=req.field("target_role"),
            experience=req.field("cv_text") or req.field("experience"),
            name=req.field("name"),
            education=req.field("education"),
            skills=req.field("skills"),
            goals=req.field("goals"),
        ),
    )


def _career_chat(req: PromptRequest) -> BuiltPrompt:
    return BuiltPrompt(
        system_text=CAREER_ADVISOR_SYSTEM_PROMPT,
        user_text=build_chat_user_prompt(
            question=req.field("question"),
            conversation=req.field("conversation"),
        ),
    )


def _interview(req: PromptRequest) -> BuiltPrompt:
    # Turn vs start is decided by the prior response, not the declared kind alone
    prior = req.field("prior_response")
    if prior:
        user_text = build_interview_turn_prompt(
            job_title=req.field("job_title"),
            job_description=req.field("job_description_text"),
            prior_response=prior,
            question=req.field("question"),
            conversation=req.field("conversation"),
        )
    else:
        user_text = build_interview_start_prompt(
            job_title=req.field("job_title"),
            job_description=req.field("job_description_text"),
        )
    return BuiltPrompt(system_text=None, user_text=user_text)


_BUILDERS: dict[FeatureKind, Callable[[PromptRequest], BuiltPrompt]] = {
    FeatureKind.CV_ANALYSIS: _cv_analysis,
    FeatureKind.JOB_MATCH: _job_match,
    FeatureKind.SKILLS_ROADMAP: _skills_roadmap,
    FeatureKind.CAREER_CHAT: _career_chat,
    FeatureKind.MOCK_INTERVIEW_START: _interview,
    FeatureKind.MOCK_INTERVIEW_TURN: _interview,
}


def build(request: PromptRequest) -> BuiltPrompt:
    """Produce the instruction set for *request*.

    Field values are interpolated verbatim; PromptRequest has already
    guaranteed the required ones are non-empty.
    """
    return _BUILDERS[request.feature_kind](request)
