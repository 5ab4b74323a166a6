"""Identifying fields: name and room from the header, age and gender from the body."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Sequence

from signout.common.patterns import (
    AGE_GENDER_RE,
    AGE_LABEL_RE,
    HEADER_AGE_GENDER_RE,
    HEADER_PREFIX_RE,
    HEADER_SEPARATOR_RE,
)

DEFAULT_ROOM_MAX_LENGTH = 15

_GENDER_CODES = {
    "m": "M",
    "male": "M",
    "man": "M",
    "f": "F",
    "female": "F",
    "woman": "F",
}


@dataclass(slots=True)
class HeaderFields:
    name: str = ""
    room: str = ""
    age: str = ""
    gender: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def parse_header(header: str, *, room_max_length: int = DEFAULT_ROOM_MAX_LENGTH) -> HeaderFields:
    """Extract name and room from a ``### N. Name – Room`` header.

    The text after the last spaced dash is only taken as the room when it is
    shorter than *room_max_length*; longer tails are prose such as
    ``Smith - s/p mechanical fall with hip fracture`` and stay in the name.
    A trailing ``(78F)`` style tag is lifted into age and gender.
    """

    raw = HEADER_PREFIX_RE.sub("", header or "", count=1)

    age = gender = ""
    tag = HEADER_AGE_GENDER_RE.search(raw)
    if tag:
        age = tag.group("age")
        gender = tag.group("gender").upper()
        raw = (raw[: tag.start()] + raw[tag.end() :]).strip()

    raw = raw.strip()
    separators = list(HEADER_SEPARATOR_RE.finditer(raw))
    if separators:
        last = separators[-1]
        tail = raw[last.end() :].strip()
        if tail and len(tail) < room_max_length:
            return HeaderFields(name=raw[: last.start()].strip(), room=tail, age=age, gender=gender)

    return HeaderFields(name=raw, room="", age=age, gender=gender)


def extract_age(lines: Sequence[str]) -> str:
    """Return the text after the first ``**Age:**`` label, or ``""``."""

    for line in lines:
        match = AGE_LABEL_RE.search(line)
        if match:
            return line[match.end() :].strip()
    return ""


def split_age_gender(value: str) -> tuple[str, str]:
    """Split free-form age text like ``78F`` or ``56 y/o male`` into (age, gender)."""

    text = (value or "").strip()
    if not text:
        return "", ""
    match = AGE_GENDER_RE.match(text)
    if not match:
        return text, ""
    gender = _GENDER_CODES.get((match.group("gender") or "").lower(), "")
    return match.group("age"), gender


def extract_identity(
    header: str,
    lines: Sequence[str],
    *,
    room_max_length: int = DEFAULT_ROOM_MAX_LENGTH,
) -> HeaderFields:
    """Combine header fields with the body ``**Age:**`` label.

    The body label wins; the header ``(78F)`` tag is the fallback.
    """

    fields = parse_header(header, room_max_length=room_max_length)
    body_age, body_gender = split_age_gender(extract_age(lines))
    return HeaderFields(
        name=fields.name,
        room=fields.room,
        age=body_age or fields.age,
        gender=body_gender or fields.gender,
    )


__all__ = [
    "DEFAULT_ROOM_MAX_LENGTH",
    "HeaderFields",
    "extract_age",
    "extract_identity",
    "parse_header",
    "split_age_gender",
]
