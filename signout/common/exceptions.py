"""Exception hierarchy for the signout census engine.

Extractors never raise on malformed clinician text; these errors are reserved
for edits that address something which no longer exists.
"""

from __future__ import annotations


class SignoutError(Exception):
    """Base error for the census engine."""

    pass


class SectionNotFound(SignoutError):
    """A section key (or index) no longer resolves after concurrent edits."""

    def __init__(self, key: str, index: int | None = None, message: str | None = None):
        self.key = key
        self.index = index
        super().__init__(message or f"No section with key {key!r}")


class TaskLineError(SignoutError):
    """A task toggle targeted a line that is missing or is not a checkbox."""

    def __init__(self, line_index: int, message: str):
        self.line_index = line_index
        super().__init__(message)


class DocumentLoadError(SignoutError):
    """A census document could not be read from its source."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message)
