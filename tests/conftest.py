"""Shared pytest fixtures for the CareerSync test suite."""

from __future__ import annotations

import os
import tempfile
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Ensure test environment variables are set BEFORE importing app modules
os.environ.setdefault("COMPLETION_API_KEY", "test-key-not-real")
os.environ.setdefault("COMPLETION_MODEL", "test/model")
os.environ.setdefault("COMPLETION_BASE_URL", "https://llm.test/api/v1")
os.environ.setdefault("COMPLETION_MODE", "chat")
os.environ.setdefault("MIN_CV_LENGTH", "50")
os.environ.setdefault("HISTORY_WINDOW_TURNS", "6")
os.environ.setdefault("SUPABASE_URL", "")
os.environ.setdefault("SUPABASE_KEY", "")
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "")
os.environ.setdefault("TELEGRAM_CHAT_ID", "")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="careersync-logs-"))

from app.models.response_models import CompletionErrorKind, CompletionResult  # noqa: E402
from app.tools.completion_client import CompletionClient  # noqa: E402


SAMPLE_CV = (
    "Jane Smith - Data Analyst with five years of experience building dashboards, "
    "cleaning large datasets and running A/B tests. Skilled in Python, pandas, SQL, "
    "scikit-learn and Tableau. Led a churn model project that cut customer attrition by "
    "12 percent. MSc in Statistics."
)

SAMPLE_JOB_DESCRIPTION = (
    "We are hiring a Data Scientist to build predictive models, own experimentation "
    "and communicate insights. Requirements: Python, SQL, machine learning, statistics."
)


def _make_text(text: str) -> CompletionResult:
    """Helper to build a successful completion result."""
    return CompletionResult(text=text, status_code=200)


def _make_http_error(status: int = 500, detail: str | None = '{"error": "boom"}') -> CompletionResult:
    """Helper to build an HTTP error completion result."""
    return CompletionResult(
        error_kind=CompletionErrorKind.HTTP_ERROR,
        status_code=status,
        detail=detail,
    )


@pytest.fixture
def stub_client() -> AsyncMock:
    """Completion client stub; set ``stub_client.complete.return_value`` per test."""
    stub = AsyncMock(spec=CompletionClient)
    stub.complete.return_value = _make_text("ATS Score: 80%\n\n**Strengths**\n- Python")
    return stub


@pytest.fixture
def client(stub_client: AsyncMock):
    """FastAPI test client with the completion client replaced by the stub."""
    from app.main import app
    from app.routers.dependencies import get_completion_client

    app.dependency_overrides[get_completion_client] = lambda: stub_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
