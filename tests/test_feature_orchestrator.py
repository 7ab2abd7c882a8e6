"""Feature Orchestrator — validation, one remote call, extraction, state."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from app.agents.feature_agent import CV_TOO_SHORT_MESSAGE, MISSING_KEY_MESSAGE, FeatureOrchestrator
from app.config import Settings
from app.models.prompt_models import FeatureKind
from app.models.response_models import CompletionErrorKind, CompletionResult, OrchestratorState
from tests.conftest import SAMPLE_CV, SAMPLE_JOB_DESCRIPTION, _make_http_error, _make_text

# Comfortably above 200 characters
LONG_CV = SAMPLE_CV


@pytest.mark.asyncio
async def test_missing_required_field_fails_without_remote_call(stub_client):
    orchestrator = FeatureOrchestrator(FeatureKind.CV_ANALYSIS, stub_client)

    outcome = await orchestrator.submit({"role": "", "cv_text": LONG_CV})

    assert outcome.state is OrchestratorState.FAILED
    assert orchestrator.state is OrchestratorState.FAILED
    assert outcome.error_kind == "validation"
    assert "role" in outcome.error_message
    assert stub_client.complete.await_count == 0


@pytest.mark.asyncio
async def test_short_cv_is_rejected_before_the_network(stub_client):
    orchestrator = FeatureOrchestrator(FeatureKind.CV_ANALYSIS, stub_client)

    outcome = await orchestrator.submit({"role": "Data Scientist", "cv_text": "Python, SQL, 3 years."})

    assert outcome.state is OrchestratorState.FAILED
    assert outcome.error_message == CV_TOO_SHORT_MESSAGE
    assert outcome.error_message.startswith("CV is too short")
    assert stub_client.complete.await_count == 0


@pytest.mark.asyncio
async def test_http_error_fails_with_message(stub_client):
    stub_client.complete.return_value = _make_http_error(500)
    orchestrator = FeatureOrchestrator(FeatureKind.CV_ANALYSIS, stub_client)

    outcome = await orchestrator.submit({"role": "Data Scientist", "cv_text": LONG_CV})

    assert outcome.state is OrchestratorState.FAILED
    assert outcome.error_kind == CompletionErrorKind.HTTP_ERROR.value
    assert outcome.error_message
    assert "500" in outcome.error_message
    assert stub_client.complete.await_count == 1


@pytest.mark.asyncio
async def test_unauthorized_error_hints_at_api_key(stub_client):
    stub_client.complete.return_value = _make_http_error(401, None)
    orchestrator = FeatureOrchestrator(FeatureKind.JOB_MATCH, stub_client)

    outcome = await orchestrator.submit({"cv_text": LONG_CV, "job_description_text": SAMPLE_JOB_DESCRIPTION})

    assert "check your API key" in outcome.error_message


@pytest.mark.asyncio
async def test_success_extracts_score(stub_client):
    stub_client.complete.return_value = _make_text("**Summary**\nATS Score: 91%\n- Strong Python")
    orchestrator = FeatureOrchestrator(FeatureKind.CV_ANALYSIS, stub_client)

    outcome = await orchestrator.submit({"role": "Data Scientist", "cv_text": LONG_CV})

    assert outcome.state is OrchestratorState.SUCCESS
    assert outcome.score == 91
    assert outcome.score_available is True
    assert "<strong>Summary</strong>" in outcome.rendered_markup
    assert "<ul><li>Strong Python</li></ul>" in outcome.rendered_markup


@pytest.mark.asyncio
async def test_end_to_end_cv_analysis(stub_client):
    """200-character CV + role → prompt carries both, score 75 is displayed."""
    stub_client.complete.return_value = _make_text("Overall solid. ATS Score: 75% Add more metrics.")
    orchestrator = FeatureOrchestrator(FeatureKind.CV_ANALYSIS, stub_client)

    outcome = await orchestrator.submit({"role": "Data Scientist", "cv_text": "\t" + LONG_CV + "\r\n"})

    assert outcome.state is OrchestratorState.SUCCESS
    assert outcome.score == 75

    kwargs = stub_client.complete.await_args.kwargs
    assert "ATS Score" in kwargs["system_text"]
    assert "Role: Data Scientist" in kwargs["user_text"]
    assert SAMPLE_CV in kwargs["user_text"]
    assert kwargs["model_id"] == "test/model"
    assert kwargs["max_tokens"] == 800
    assert kwargs["api_key"] == "test-key-not-real"


@pytest.mark.asyncio
async def test_missing_score_is_not_coerced_to_zero(stub_client):
    stub_client.complete.return_value = _make_text("Looks good, but I cannot score this.")
    orchestrator = FeatureOrchestrator(FeatureKind.JOB_MATCH, stub_client)

    outcome = await orchestrator.submit({"cv_text": LONG_CV, "job_description_text": SAMPLE_JOB_DESCRIPTION})

    assert outcome.state is OrchestratorState.SUCCESS
    assert outcome.score is None
    assert outcome.score_available is False


@pytest.mark.asyncio
async def test_unscored_feature_never_reports_a_score(stub_client):
    stub_client.complete.return_value = _make_text("## Month 1\n- Learn PyTorch (aim for 50% of the course)")
    orchestrator = FeatureOrchestrator(FeatureKind.SKILLS_ROADMAP, stub_client)

    outcome = await orchestrator.submit({"target_role": "ML Engineer", "cv_text": LONG_CV})

    assert outcome.state is OrchestratorState.SUCCESS
    assert outcome.score is None
    assert "<h2>Month 1</h2>" in outcome.rendered_markup


@pytest.mark.asyncio
async def test_overrides_model_and_key(stub_client):
    orchestrator = FeatureOrchestrator(FeatureKind.CAREER_CHAT, stub_client)

    await orchestrator.submit({"question": "Should I learn Rust?"}, model="other/model", api_key="user-key")

    kwargs = stub_client.complete.await_args.kwargs
    assert kwargs["model_id"] == "other/model"
    assert kwargs["api_key"] == "user-key"


@pytest.mark.asyncio
async def test_missing_api_key_blocks_the_request(stub_client):
    orchestrator = FeatureOrchestrator(FeatureKind.CAREER_CHAT, stub_client)
    orchestrator._settings = Settings(completion_api_key="", career_advice_api_key="")

    outcome = await orchestrator.submit({"question": "Should I learn Rust?"})

    assert outcome.state is OrchestratorState.FAILED
    assert outcome.error_message == MISSING_KEY_MESSAGE
    assert stub_client.complete.await_count == 0


@pytest.mark.asyncio
async def test_client_exception_does_not_escape(stub_client):
    stub_client.complete.side_effect = RuntimeError("socket exploded")
    orchestrator = FeatureOrchestrator(FeatureKind.CAREER_CHAT, stub_client)

    outcome = await orchestrator.submit({"question": "Is remote work declining?"})

    assert outcome.state is OrchestratorState.FAILED
    assert outcome.error_kind == "unexpected"
    assert orchestrator.busy is False


@pytest.mark.asyncio
async def test_resubmit_after_failure_and_reset(stub_client):
    stub_client.complete.side_effect = [
        _make_http_error(503),
        _make_text("ATS Score: 60%"),
    ]
    orchestrator = FeatureOrchestrator(FeatureKind.CV_ANALYSIS, stub_client)
    fields = {"role": "Data Scientist", "cv_text": LONG_CV}

    first = await orchestrator.submit(fields)
    second = await orchestrator.submit(fields)

    assert first.state is OrchestratorState.FAILED
    assert second.state is OrchestratorState.SUCCESS
    assert second.score == 60
    assert stub_client.complete.await_count == 2

    orchestrator.reset()
    assert orchestrator.state is OrchestratorState.IDLE
    assert orchestrator.last_outcome is None


@pytest.mark.asyncio
async def test_busy_orchestrator_rejects_a_second_submit(stub_client):
    orchestrator = FeatureOrchestrator(FeatureKind.CAREER_CHAT, stub_client)
    orchestrator.busy = True

    outcome = await orchestrator.submit({"question": "Hello?"})

    assert outcome.state is OrchestratorState.FAILED
    assert "already in progress" in outcome.error_message
    assert stub_client.complete.await_count == 0


@pytest.mark.asyncio
async def test_empty_content_result_fails(stub_client):
    stub_client.complete.return_value = CompletionResult(error_kind=CompletionErrorKind.EMPTY_CONTENT)
    orchestrator = FeatureOrchestrator(FeatureKind.CAREER_CHAT, stub_client)

    outcome = await orchestrator.submit({"question": "Any tips?"})

    assert outcome.state is OrchestratorState.FAILED
    assert "No content returned" in outcome.error_message


@pytest.mark.asyncio
async def test_outcomes_are_written_to_the_event_log(stub_client):
    from app.agents.event_log import read_events
    from app.agents.session_context import SessionContext

    session = SessionContext(user_id="user-log-test")
    orchestrator = FeatureOrchestrator(FeatureKind.CV_ANALYSIS, stub_client, session)
    stub_client.complete.return_value = _make_text("ATS Score: 66%")

    await orchestrator.submit({"role": "Analyst", "cv_text": LONG_CV})

    events = read_events(limit=5, user_id="user-log-test")
    assert events[0].feature == "cv_analysis"
    assert events[0].state == "success"
    assert events[0].score == 66


@pytest.mark.asyncio
async def test_unwritable_event_log_does_not_lose_the_outcome(stub_client, tmp_path, monkeypatch):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("occupied", encoding="utf-8")
    monkeypatch.setattr("app.agents.event_log._events_path", lambda: blocker / "events.jsonl")
    stub_client.complete.return_value = _make_text("ATS Score: 70%")
    orchestrator = FeatureOrchestrator(FeatureKind.CV_ANALYSIS, stub_client)

    outcome = await orchestrator.submit({"role": "Data Scientist", "cv_text": LONG_CV})

    assert outcome.state is OrchestratorState.SUCCESS
    assert outcome.score == 70
    assert orchestrator.last_outcome is outcome


@pytest.mark.asyncio
async def test_minimum_cv_length_only_applies_to_cv_analysis(stub_client):
    stub_client.complete.return_value = _make_text("Match: 40%")
    orchestrator = FeatureOrchestrator(FeatureKind.JOB_MATCH, stub_client)

    outcome = await orchestrator.submit(
        {"cv_text": "Python, SQL, 3 years.", "job_description_text": SAMPLE_JOB_DESCRIPTION},
    )

    assert outcome.state is OrchestratorState.SUCCESS
    assert outcome.score == 40
    assert stub_client.complete.await_count == 1
