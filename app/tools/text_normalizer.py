"""Whitespace cleanup for pasted or extracted document text."""

from __future__ import annotations

import re

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize(raw: str | None) -> str:
    """Collapse line endings, tabs and whitespace runs; trim both ends.

    Idempotent: ``normalize(normalize(x)) == normalize(x)``.
    """
    if not raw:
        return ""
    text = raw.replace("\r\n", "\n").replace("\r", "\n").replace("\t", " ")
    return _WHITESPACE_RUN.sub(" ", text).strip()
