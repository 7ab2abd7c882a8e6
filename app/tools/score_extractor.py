"""Score Extraction Tool.

Pulls the percentage score the model was instructed to emit
("ATS Score: X%") out of free-text output.  Pure regex work, no LLM call.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Type

from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# ── Score patterns (case-insensitive) ────────────────────────────────────────

LABELED_SCORE = re.compile(r"(?:ATS Score|Match|Score):?\s*(\d+)%?", re.IGNORECASE)
BARE_PERCENT = re.compile(r"(\d+)%")


def extract_score(text: str | None) -> Optional[int]:
    """Return the score found in *text*, or None when no pattern matches.

    A labelled score wins over the first bare ``N%``.  Values above 100 are
    clamped.
    """
    if not text:
        return None
    match = LABELED_SCORE.search(text) or BARE_PERCENT.search(text)
    if match is None:
        return None
    return min(int(match.group(1)), 100)


class ScoreExtractionInput(BaseModel):
    """Input schema for the Score Extraction tool."""

    text: str = Field(..., description="Raw model output to scan for a score")


class ScoreExtractionOutput(BaseModel):
    """Output schema for the Score Extraction tool."""

    score: Optional[int] = Field(default=None, ge=0, le=100)
    found: bool = Field(..., description="Whether a score pattern was present")


class ScoreExtractionTool(BaseTool):
    """Extracts an ATS / match percentage from model output."""

    name: str = "score_extractor"
    description: str = (
        "Finds the 'ATS Score: X%' (or 'Match: X', 'Score: X', bare 'X%') marker "
        "in a model response. Returns {score, found}; score is null when absent."
    )
    args_schema: Type[BaseModel] = ScoreExtractionInput

    def _run(self, text: str) -> dict[str, Any]:
        return self._extract(text)

    async def _arun(self, text: str) -> dict[str, Any]:
        """Async wrapper — extraction is CPU-only so just delegates."""
        return self._extract(text)

    @staticmethod
    def _extract(text: str) -> dict[str, Any]:
        score = extract_score(text)
        if score is None:
            logger.warning("No score pattern found in model output (%d chars)", len(text or ""))
        return ScoreExtractionOutput(score=score, found=score is not None).model_dump()
