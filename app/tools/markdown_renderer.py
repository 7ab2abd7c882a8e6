"""Restricted Markdown → HTML rendering for model output.

Handles headings (#, ##, ###), **bold**, *italic*, hyphen bullets, numbered
lists and --- rules.  Nested structures, tables, code fences and links are
left as plain text.
"""

from __future__ import annotations

import html
import re
from enum import Enum

_HEADING = re.compile(r"^(#{1,3})\s+(.*)$")
_RULE = re.compile(r"^\s*(?:-{3,}|\*{3,})\s*$")
_BULLET = re.compile(r"^\s*-\s+(.*)$")
_NUMBERED = re.compile(r"^\s*\d+\.\s+(.*)$")
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*(.+?)\*")


class _ListState(str, Enum):
    NORMAL = "normal"
    UNORDERED = "ul"
    ORDERED = "ol"


def render_inline(text: str) -> str:
    """Apply emphasis; bold runs first so ``**x**`` never reads as two italics."""
    text = _BOLD.sub(r"<strong>\1</strong>", text)
    return _ITALIC.sub(r"<em>\1</em>", text)


def render_markdown(text: str | None) -> str:
    """Render *text* to HTML, wrapping each contiguous list exactly once."""
    if not text:
        return ""

    lines = html.escape(text, quote=False).replace("\r\n", "\n").replace("\r", "\n").split("\n")

    # (is_block, html) segments; <br /> only goes between two inline segments
    segments: list[tuple[bool, str]] = []
    state = _ListState.NORMAL
    items: list[str] = []

    def close_list() -> None:
        nonlocal state, items
        if state is not _ListState.NORMAL:
            tag = state.value
            segments.append((True, f"<{tag}>" + "".join(items) + f"</{tag}>"))
        state = _ListState.NORMAL
        items = []

    for line in lines:
        if _RULE.match(line):
            close_list()
            segments.append((True, "<hr />"))
            continue

        bullet = _BULLET.match(line)
        numbered = None if bullet else _NUMBERED.match(line)
        if bullet or numbered:
            wanted = _ListState.UNORDERED if bullet else _ListState.ORDERED
            if state is not wanted:
                close_list()
                state = wanted
            content = (bullet or numbered).group(1)
            items.append(f"<li>{render_inline(content)}</li>")
            continue

        close_list()
        heading = _HEADING.match(line)
        if heading:
            level = len(heading.group(1))
            segments.append((True, f"<h{level}>{render_inline(heading.group(2))}</h{level}>"))
        else:
            segments.append((False, render_inline(line)))

    close_list()

    parts: list[str] = []
    previous_inline = False
    for is_block, chunk in segments:
        if not is_block and previous_inline:
            parts.append("<br />")
        parts.append(chunk)
        previous_inline = not is_block
    return "".join(parts)
