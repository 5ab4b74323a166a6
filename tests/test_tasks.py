"""Tests for checkbox task counting and toggling."""

import pytest

from signout.common.exceptions import TaskLineError
from signout.extraction.tasks import extract_tasks, is_task_line, toggle_task, toggle_task_line
from signout.sectioning.segmenter import parse_sections
from signout_schemas.census import TaskProgress
from tests.census_samples import JANE_DOE


def test_extract_tasks_counts_open_and_done():
    progress = extract_tasks(["- [ ] a", "  - [x] b", "- [x] c", "no task", "- [] malformed"])

    assert progress.total == 3
    assert progress.completed == 2
    assert progress.remaining == 1
    assert progress.progress == pytest.approx(200 / 3)


def test_progress_is_zero_without_tasks():
    assert TaskProgress().progress == 0.0
    assert extract_tasks([]).remaining == 0


def test_progress_fields_are_serialized():
    dumped = TaskProgress(total=4, completed=1).model_dump()

    assert dumped == {"total": 4, "completed": 1, "remaining": 3, "progress": 25.0}
    assert TaskProgress.model_validate(dumped) == TaskProgress(total=4, completed=1)


def test_is_task_line_anywhere_in_line():
    assert is_task_line("Follow up: - [ ] call family")
    assert not is_task_line("[ ] bare box")


class TestToggleLine:
    @pytest.mark.parametrize(
        "line,expected",
        [
            ("- [ ] Blood cultures", "- [x] Blood cultures"),
            ("  - [x] done", "  - [ ] done"),
            ("- [ ] a - [x] b", "- [x] a - [x] b"),
            ("- [x] a - [ ] b", "- [ ] a - [ ] b"),
        ],
    )
    def test_flips_first_marker(self, line, expected):
        assert toggle_task_line(line) == expected

    @pytest.mark.parametrize(
        "line",
        ["- [ ] Blood cultures", "\t- [x] Echo  ", "- [ ] a - [x] b", "- [x] a - [ ] b"],
    )
    def test_is_involutive(self, line):
        assert toggle_task_line(toggle_task_line(line)) == line

    def test_non_task_line_unchanged(self):
        assert toggle_task_line("# Sepsis") == "# Sepsis"


class TestToggleSection:
    def test_toggle_then_count(self):
        section = parse_sections(JANE_DOE)[0]

        toggled = toggle_task(section, 3)

        assert toggled.lines[3] == "- [x] Blood cultures"
        assert toggled.lines[:3] == section.lines[:3]
        assert toggled.key == section.key
        assert extract_tasks(toggled.lines) == TaskProgress(total=1, completed=1)
        # The input section is left as it was.
        assert section.lines[3] == "- [ ] Blood cultures"

    @pytest.mark.parametrize("line_index", [-1, 4, 99])
    def test_out_of_range(self, line_index):
        section = parse_sections(JANE_DOE)[0]

        with pytest.raises(TaskLineError) as excinfo:
            toggle_task(section, line_index)
        assert excinfo.value.line_index == line_index

    def test_not_a_task(self):
        section = parse_sections(JANE_DOE)[0]

        with pytest.raises(TaskLineError):
            toggle_task(section, 2)
