import io
from pathlib import Path

import pytest

from signout.common.exceptions import DocumentLoadError
from signout.common.text_io import load_document, normalize_newlines


def test_load_from_path(tmp_path: Path):
    census = tmp_path / "census.md"
    census.write_bytes("### 1. Ann – 3\r\n# AKI\r\n".encode("utf-8"))

    assert load_document(census) == "### 1. Ann – 3\n# AKI\n"


def test_load_from_path_string(tmp_path: Path):
    census = tmp_path / "census.md"
    census.write_text("### 1. Ann\n", encoding="utf-8")

    assert load_document(str(census)) == "### 1. Ann\n"


def test_missing_path_object_raises(tmp_path: Path):
    with pytest.raises(DocumentLoadError) as excinfo:
        load_document(tmp_path / "missing.md")
    assert excinfo.value.source.endswith("missing.md")


def test_literal_text_is_returned():
    assert load_document("### 1. Ann\r# AKI") == "### 1. Ann\n# AKI"
    assert load_document("not a file anywhere") == "not a file anywhere"


def test_stdin(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("### 1. Ann\n"))

    assert load_document("-") == "### 1. Ann\n"


def test_normalize_newlines():
    assert normalize_newlines("a\r\nb\rc\n") == "a\nb\nc\n"
