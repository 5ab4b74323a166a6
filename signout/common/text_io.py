"""Helpers for loading census documents from a path or raw text."""

from __future__ import annotations

import sys
from pathlib import Path

from signout.common.exceptions import DocumentLoadError

__all__ = ["load_document", "normalize_newlines"]

STDIN_MARKER = "-"


def load_document(source: str | Path) -> str:
    """Load a census from a filesystem path, ``-`` for stdin, or literal text."""

    return normalize_newlines(_read_source(source))


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(f"Could not read {path}: {exc}", source=str(path)) from exc


def _read_source(source: str | Path) -> str:
    if isinstance(source, Path):
        if not source.exists():
            raise DocumentLoadError(f"No such file: {source}", source=str(source))
        return _read_file(source)

    if source == STDIN_MARKER:
        return sys.stdin.read()

    # Multi-line input is always literal census text.
    if "\n" not in source and "\r" not in source:
        try:
            possible_path = Path(source)
            if possible_path.is_file():
                return _read_file(possible_path)
        except (OSError, ValueError):
            # Not a usable path, so treat it as text.
            return str(source)

    return str(source)
