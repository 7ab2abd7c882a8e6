"""Feature router — single-shot AI features, document upload and logs."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from app.agents.event_log import read_events
from app.agents.feature_agent import FeatureOrchestrator
from app.agents.session_context import SessionContext
from app.models.errors import DocumentReadError
from app.models.prompt_models import FeatureKind
from app.models.request_models import CVAnalysisRequest, JobMatchRequest, SkillsRoadmapRequest
from app.models.response_models import (
    DocumentTextResponse,
    FeatureOutcome,
    HealthResponse,
    LogEntry,
)
from app.routers.dependencies import (
    get_completion_client,
    get_session_context,
    get_session_with_profile,
    raise_for_outcome,
)
from app.tools.completion_client import CompletionClient
from app.tools.document_reader import read_document

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["features"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Simple liveness probe."""
    return HealthResponse()


@router.post("/cv-analysis", response_model=FeatureOutcome)
async def analyze_cv(
    req: CVAnalysisRequest,
    session: SessionContext = Depends(get_session_context),
    client: CompletionClient = Depends(get_completion_client),
) -> FeatureOutcome:
    """Analyse a CV (and optional cover letter) for a role; returns the ATS score."""
    logger.info("CV analysis requested by %s", session.user_id)
    orchestrator = FeatureOrchestrator(FeatureKind.CV_ANALYSIS, client, session)
    outcome = await orchestrator.submit(
        {"role": req.role, "cv_text": req.cv_text, "cover_letter_text": req.cover_letter_text},
        model=req.model,
        api_key=req.api_key,
    )
    return raise_for_outcome(outcome)


@router.post("/job-match", response_model=FeatureOutcome)
async def match_job(
    req: JobMatchRequest,
    session: SessionContext = Depends(get_session_context),
    client: CompletionClient = Depends(get_completion_client),
) -> FeatureOutcome:
    """Compare a CV with a job description; returns the match score."""
    logger.info("Job match requested by %s", session.user_id)
    orchestrator = FeatureOrchestrator(FeatureKind.JOB_MATCH, client, session)
    outcome = await orchestrator.submit(
        {"cv_text": req.cv_text, "job_description_text": req.job_description_text},
        model=req.model,
        api_key=req.api_key,
    )
    return raise_for_outcome(outcome)


@router.post("/skills-roadmap", response_model=FeatureOutcome)
async def skills_roadmap(
    req: SkillsRoadmapRequest,
    session: SessionContext = Depends(get_session_with_profile),
    client: CompletionClient = Depends(get_completion_client),
) -> FeatureOutcome:
    """Generate a skills roadmap from the caller's profile and target role."""
    logger.info("Skills roadmap requested by %s", session.user_id)
    fields = session.profile_fields()
    fields["target_role"] = req.target_role
    # The pasted CV wins over the stored experience
    fields["experience"] = req.cv_text or fields.get("experience", "")
    fields["cv_text"] = fields["experience"]

    orchestrator = FeatureOrchestrator(FeatureKind.SKILLS_ROADMAP, client, session)
    outcome = await orchestrator.submit(fields, model=req.model, api_key=req.api_key)
    return raise_for_outcome(outcome)


@router.post("/documents/extract", response_model=DocumentTextResponse)
async def extract_document(
    file: UploadFile = File(...),
    session: SessionContext = Depends(get_session_context),
) -> DocumentTextResponse:
    """Convert an uploaded PDF or text file to normalized plain text."""
    data = await file.read()
    filename = file.filename or "upload"
    try:
        text = read_document(filename, file.content_type, data)
    except DocumentReadError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    logger.info("Document extracted for %s: %s", session.user_id, filename)
    return DocumentTextResponse(filename=filename, characters=len(text), text=text)


@router.get("/logs", response_model=list[LogEntry])
async def get_logs(
    limit: int = 20,
    session: SessionContext = Depends(get_session_context),
) -> list[LogEntry]:
    """Return the caller's most recent feature events (newest first)."""
    return read_events(limit=limit, user_id=session.user_id)
