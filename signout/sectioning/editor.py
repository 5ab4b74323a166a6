"""Content-level edits to a census document, addressed by section key.

Every operation takes the current document text, re-parses it, applies one
change and returns new document text. Keys are recomputed on each parse, so
a caller holding a stale key gets :class:`SectionNotFound` rather than an
edit applied to the wrong patient.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Literal, Sequence

from observability.logging_config import get_logger
from observability.timing import timed_function
from signout.common.exceptions import SectionNotFound
from signout.common.patterns import HEADER_PREFIX_RE
from signout.extraction.clinical import extract_admission_date
from signout.extraction.header import parse_header
from signout.extraction.tasks import toggle_task
from signout.sectioning.segmenter import (
    Section,
    parse_sections,
    patient_sections,
    reconstruct,
    section_key,
)

logger = get_logger("census_editor")

SortKey = Literal["name", "date"]

NEW_PATIENT_TEMPLATE = (
    "### {number}. New Patient{room_suffix}\n"
    "**Age:** \n"
    "**Admitted for:** \n"
    "**CC:** \n"
    "\n"
    "# Problem 1"
)


@dataclass(slots=True)
class DeletedSection:
    """Undo token for :func:`delete_section`."""

    index: int
    header: str
    lines: list[str]

    @property
    def section(self) -> Section:
        return Section(header=self.header, lines=list(self.lines), key=section_key(self.header))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def find_section_index(sections: Sequence[Section], key: str) -> int:
    for idx, section in enumerate(sections):
        if section.key == key:
            return idx
    raise SectionNotFound(key)


def find_section(sections: Sequence[Section], key: str) -> Section:
    return sections[find_section_index(sections, key)]


def resolve_section(
    sections: Sequence[Section], key: str, fallback: Section | None = None
) -> Section:
    """Look a section up by key, then by header and body equality with *fallback*.

    The fallback covers a key that shifted because an identical header was
    added or removed earlier in the document.
    """

    try:
        return find_section(sections, key)
    except SectionNotFound:
        if fallback is not None:
            for section in sections:
                if section.same_content(fallback):
                    return section
        raise


def _with_replacement(sections: Sequence[Section], idx: int, text: str) -> str:
    parts = [section.text for section in sections]
    parts[idx] = text.strip()
    return "\n\n".join(part for part in parts if part).strip("\n")


@timed_function("census.edit.update")
def update_section(content: str, key: str, new_text: str) -> str:
    """Replace the section *key* with *new_text* (header and body)."""

    sections = parse_sections(content)
    idx = find_section_index(sections, key)
    logger.info("Updating section", extra={"key": key, "index": idx})
    return _with_replacement(sections, idx, new_text)


@timed_function("census.edit.delete")
def delete_section(content: str, key: str) -> tuple[str, DeletedSection]:
    """Remove section *key*; the returned token restores it with :func:`restore_section`."""

    sections = parse_sections(content)
    idx = find_section_index(sections, key)
    removed = sections[idx]
    logger.info("Deleting section", extra={"key": key, "index": idx})
    remaining = sections[:idx] + sections[idx + 1 :]
    token = DeletedSection(index=idx, header=removed.header, lines=list(removed.lines))
    return reconstruct(remaining), token


@timed_function("census.edit.restore")
def restore_section(content: str, deleted: DeletedSection) -> str:
    """Put a deleted section back at its old position, or at the end if that is gone."""

    sections = parse_sections(content)
    idx = min(max(deleted.index, 0), len(sections))
    sections.insert(idx, deleted.section)
    logger.info("Restoring section", extra={"index": idx})
    return reconstruct(sections)


@timed_function("census.edit.move")
def move_section(content: str, key: str, new_index: int) -> str:
    """Move section *key* to *new_index*; the preamble always stays first."""

    sections = parse_sections(content)
    idx = find_section_index(sections, key)
    if sections[idx].is_preamble:
        return reconstruct(sections)

    moving = sections.pop(idx)
    lowest = 1 if sections and sections[0].is_preamble else 0
    target = min(max(new_index, lowest), len(sections))
    sections.insert(target, moving)
    return reconstruct(sections)


@timed_function("census.edit.toggle_task")
def toggle_section_task(content: str, key: str, line_index: int) -> str:
    sections = parse_sections(content)
    idx = find_section_index(sections, key)
    sections[idx] = toggle_task(sections[idx], line_index)
    return reconstruct(sections)


@timed_function("census.edit.add_patient")
def add_patient(content: str, room: str | None = None) -> str:
    """Append a blank numbered patient entry to the end of the document."""

    number = len(patient_sections(parse_sections(content))) + 1
    room_suffix = f" - Room {room.strip()}" if room and room.strip() else " - Room"
    entry = NEW_PATIENT_TEMPLATE.format(number=number, room_suffix=room_suffix)
    existing = reconstruct(parse_sections(content))
    return f"{existing}\n\n{entry}" if existing else entry


def _renumbered_header(section: Section, number: int) -> str:
    """Swap only the ordinal; name, room and any ``(78F)`` tag stay as written."""

    rest = HEADER_PREFIX_RE.sub("", section.header, count=1)
    return f"### {number}. {rest}" if rest else f"### {number}."


@timed_function("census.edit.sort")
def sort_sections(content: str, by: SortKey = "name") -> str:
    """Sort patients by name (A-Z) or admission date (newest first) and renumber them.

    Patients without an admission date sort last. The preamble stays first.
    """

    if by not in ("name", "date"):
        raise ValueError(f"Unsupported sort key: {by!r}")

    sections = parse_sections(content)
    preamble = [section for section in sections if section.is_preamble]
    patients = patient_sections(sections)

    if by == "name":
        patients.sort(key=lambda s: parse_header(s.header).name.casefold())
    else:
        patients.sort(
            key=lambda s: extract_admission_date(s.lines) or date.min,
            reverse=True,
        )

    renumbered = [
        Section(header=_renumbered_header(section, number), lines=list(section.lines))
        for number, section in enumerate(patients, start=1)
    ]
    return reconstruct(preamble + renumbered)


__all__ = [
    "DeletedSection",
    "NEW_PATIENT_TEMPLATE",
    "add_patient",
    "delete_section",
    "find_section",
    "find_section_index",
    "move_section",
    "resolve_section",
    "restore_section",
    "section_key",
    "sort_sections",
    "toggle_section_task",
    "update_section",
]
