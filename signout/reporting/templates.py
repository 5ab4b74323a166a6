"""``{{placeholder}}`` substitution for per-patient note templates."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Sequence

from config.settings import ExtractionSettings, get_extraction_settings
from signout.extraction.clinical import extract_problems, extract_vitals
from signout.extraction.header import extract_identity

PLACEHOLDER_RE = re.compile(r"\{\{\s*([a-z0-9_.]+)\s*\}\}", re.IGNORECASE)

UNKNOWN_PATIENT = "Unknown Patient"
NO_VITALS = "No vitals recorded"


def template_context(
    header: str,
    lines: Sequence[str],
    now: datetime | None = None,
    settings: ExtractionSettings | None = None,
) -> dict[str, str]:
    """Placeholder values for one patient."""

    cfg = settings or get_extraction_settings()
    now = now or datetime.now()
    identity = extract_identity(header, lines, room_max_length=cfg.room_max_length)
    vitals = extract_vitals(lines)
    problems = extract_problems(lines, max_length=cfg.problem_max_length)

    return {
        "name": identity.name or UNKNOWN_PATIENT,
        "room": identity.room,
        "age": identity.age,
        "gender": identity.gender,
        "vitals": vitals.text if vitals else NO_VITALS,
        "vitals.bp": (vitals.bp if vitals else None) or "",
        "vitals.hr": (vitals.hr if vitals else None) or "",
        "vitals.temp": (vitals.temp if vitals else None) or "",
        "vitals.o2": (vitals.o2 if vitals else None) or "",
        "problems": ", ".join(problems),
        "date": now.strftime("%m/%d/%Y"),
        "time": now.strftime("%H:%M"),
    }


def render_template(
    template: str,
    header: str,
    lines: Sequence[str],
    now: datetime | None = None,
    settings: ExtractionSettings | None = None,
) -> str:
    """Fill every known placeholder in *template*; unknown ones are left as written."""

    context = template_context(header, lines, now=now, settings=settings)

    def _replace(match: re.Match[str]) -> str:
        return context.get(match.group(1).lower(), match.group(0))

    return PLACEHOLDER_RE.sub(_replace, template)


__all__ = ["NO_VITALS", "PLACEHOLDER_RE", "UNKNOWN_PATIENT", "render_template", "template_context"]
