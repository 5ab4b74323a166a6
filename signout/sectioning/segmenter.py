"""Split a signout census document into ordered patient sections."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Sequence

from signout.common.patterns import LINE_SPLIT_RE, PREAMBLE_HEADER, SECTION_HEADER_RE

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class Section:
    """One patient block (or the preamble) of a census document.

    Sections are rebuilt on every parse and treated as read-only values; edits
    produce new document text which is parsed again.
    """

    header: str
    lines: list[str] = field(default_factory=list)
    key: str = ""

    @property
    def is_preamble(self) -> bool:
        return self.header == PREAMBLE_HEADER

    @property
    def text(self) -> str:
        """Render this section the way it appears in a reconstructed document."""

        body = "\n".join(self.lines)
        if self.is_preamble:
            return body
        return f"{self.header}\n{body}" if self.lines else self.header

    def same_content(self, other: "Section") -> bool:
        """Structural equality on header and body, ignoring keys."""

        return self.header == other.header and list(self.lines) == list(other.lines)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def split_lines(content: str) -> list[str]:
    """Split on Windows, classic Mac or Unix line endings."""

    return LINE_SPLIT_RE.split(content)


def is_section_header(line: str) -> bool:
    return bool(SECTION_HEADER_RE.match(line))


def section_key(header: str, occurrence: int = 1) -> str:
    """Stable key derived from the header; repeats get an ``-N`` suffix."""

    digest = hashlib.sha256(header.strip().encode("utf-8")).hexdigest()[:12]
    return digest if occurrence <= 1 else f"{digest}-{occurrence}"


def _trim_blank_edges(lines: list[str], *, leading: bool) -> list[str]:
    end = len(lines)
    while end and not lines[end - 1].strip():
        end -= 1
    start = 0
    if leading:
        while start < end and not lines[start].strip():
            start += 1
    return lines[start:end]


def parse_sections(content: str | None) -> list[Section]:
    """Split *content* into sections.

    Lines before the first ``###`` header form a ``### Preamble`` section, which
    is only emitted when it holds non-blank text. Trailing blank lines of each
    section are dropped so that :func:`reconstruct` followed by another parse
    yields the same sections. Empty input yields an empty list.
    """

    if not content or not content.strip():
        return []

    raw: list[tuple[str, list[str]]] = []
    header = PREAMBLE_HEADER
    body: list[str] = []
    for line in split_lines(content):
        if is_section_header(line):
            raw.append((header, body))
            header = line
            body = []
        else:
            body.append(line)
    raw.append((header, body))

    sections: list[Section] = []
    seen: dict[str, int] = {}
    for idx, (header, body) in enumerate(raw):
        is_leading = idx == 0 and header == PREAMBLE_HEADER
        lines = _trim_blank_edges(body, leading=is_leading)
        if is_leading and not lines:
            continue
        occurrence = seen.get(header.strip(), 0) + 1
        seen[header.strip()] = occurrence
        sections.append(Section(header=header, lines=lines, key=section_key(header, occurrence)))

    LOGGER.debug("Parsed %d sections from %d characters", len(sections), len(content))
    return sections


def rekey(sections: Iterable[Section]) -> list[Section]:
    """Return copies of *sections* with keys recomputed for their new order."""

    out: list[Section] = []
    seen: dict[str, int] = {}
    for section in sections:
        occurrence = seen.get(section.header.strip(), 0) + 1
        seen[section.header.strip()] = occurrence
        out.append(
            Section(
                header=section.header,
                lines=list(section.lines),
                key=section_key(section.header, occurrence),
            )
        )
    return out


def reconstruct(sections: Sequence[Section]) -> str:
    """Join sections back into document text, separated by blank lines."""

    return "\n\n".join(section.text for section in sections).strip("\n")


def patient_sections(sections: Iterable[Section]) -> list[Section]:
    """Drop the preamble; it is never a patient."""

    return [section for section in sections if not section.is_preamble]


__all__ = [
    "Section",
    "is_section_header",
    "parse_sections",
    "patient_sections",
    "reconstruct",
    "rekey",
    "section_key",
    "split_lines",
]
