"""Strip signout markdown down to plain text that pastes cleanly into an EMR."""

from __future__ import annotations

import re

from signout.common.patterns import TREND_INDICATOR_RE

_HEADER_MARKER_RE = re.compile(r"^###\s*", re.MULTILINE)
_BOLD_RE = re.compile(r"\*\*")
_ITALIC_RE = re.compile(r"__")
_OPEN_TASK_RE = re.compile(r"^- \[ \]", re.MULTILINE)
_DONE_TASK_RE = re.compile(r"^- \[x\]", re.MULTILINE)
_BULLET_RE = re.compile(r"^[ \t]*[*•][ \t]+", re.MULTILINE)
_INLINE_BULLET_RE = re.compile("•")

_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (_HEADER_MARKER_RE, ""),
    (_BOLD_RE, ""),
    (_ITALIC_RE, ""),
    (_OPEN_TASK_RE, "[ ]"),
    (_DONE_TASK_RE, "[x]"),
    (_BULLET_RE, "- "),
    (_INLINE_BULLET_RE, "-"),
    (TREND_INDICATOR_RE, ""),
)


def clean_text_for_emr(text: str) -> str:
    """Remove header and emphasis markers, flatten checkboxes and bullets, drop trend arrows."""

    cleaned = text or ""
    for pattern, replacement in _RULES:
        cleaned = pattern.sub(replacement, cleaned)
    return cleaned.strip()


__all__ = ["clean_text_for_emr"]
