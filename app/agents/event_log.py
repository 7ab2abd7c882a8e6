"""JSONL event log of feature outcomes, served back by GET /api/v1/logs."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from app.config import get_settings
from app.models.response_models import FeatureOutcome, LogEntry

logger = logging.getLogger(__name__)

EVENTS_FILE = "events.jsonl"


def _events_path() -> Path:
    return Path(get_settings().log_dir) / EVENTS_FILE


def log_event(user_id: str, outcome: FeatureOutcome) -> None:
    """Persist a JSON log entry under the log directory; write failures are only logged."""
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "user_id": user_id,
        "feature": outcome.feature.value,
        "state": outcome.state.value,
        "score": outcome.score,
        "error_kind": outcome.error_kind,
        "response_preview": (outcome.text or outcome.error_message or "")[:200],
    }

    path = _events_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")
    except OSError as exc:
        logger.warning("Failed to write event log %s: %s", path, exc)
        return

    logger.info("Event logged: user=%s feature=%s state=%s score=%s",
                user_id, entry["feature"], entry["state"], outcome.score)


def read_events(limit: int = 20, user_id: str | None = None) -> list[LogEntry]:
    """Return the most recent log entries (newest first), optionally for one user."""
    path = _events_path()
    if not path.exists():
        return []

    with open(path, "r", encoding="utf-8") as f:
        lines = f.readlines()

    entries: list[LogEntry] = []
    for line in reversed(lines):
        if len(entries) >= limit:
            break
        try:
            entry = LogEntry(**json.loads(line.strip()))
        except (json.JSONDecodeError, TypeError, ValueError):
            continue
        if user_id is None or entry.user_id == user_id:
            entries.append(entry)
    return entries
