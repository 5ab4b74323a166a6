"""Checkbox task counting and toggling."""

from __future__ import annotations

from typing import Sequence

from signout.common.exceptions import TaskLineError
from signout.common.patterns import TASK_DONE, TASK_OPEN
from signout.sectioning.segmenter import Section
from signout_schemas.census import TaskProgress


def is_task_line(line: str) -> bool:
    return TASK_OPEN in line or TASK_DONE in line


def is_completed_task(line: str) -> bool:
    return TASK_DONE in line


def extract_tasks(lines: Sequence[str]) -> TaskProgress:
    total = completed = 0
    for line in lines:
        if not is_task_line(line):
            continue
        total += 1
        if is_completed_task(line):
            completed += 1
    return TaskProgress(total=total, completed=completed)


def toggle_task_line(line: str) -> str:
    """Flip the first checkbox marker on *line*; everything else is untouched.

    Non-task lines come back unchanged. Applying it twice restores the input.
    """

    open_at = line.find(TASK_OPEN)
    done_at = line.find(TASK_DONE)
    if open_at < 0 and done_at < 0:
        return line
    if done_at < 0 or (0 <= open_at < done_at):
        return line[:open_at] + TASK_DONE + line[open_at + len(TASK_OPEN) :]
    return line[:done_at] + TASK_OPEN + line[done_at + len(TASK_DONE) :]


def toggle_task(section: Section, line_index: int) -> Section:
    """Return a copy of *section* with the task on body line *line_index* flipped."""

    if not 0 <= line_index < len(section.lines):
        raise TaskLineError(
            line_index, f"Line {line_index} is out of range for section {section.key!r}"
        )
    line = section.lines[line_index]
    if not is_task_line(line):
        raise TaskLineError(line_index, f"Line {line_index} is not a task: {line!r}")

    lines = list(section.lines)
    lines[line_index] = toggle_task_line(line)
    return Section(header=section.header, lines=lines, key=section.key)


__all__ = [
    "extract_tasks",
    "is_completed_task",
    "is_task_line",
    "toggle_task",
    "toggle_task_line",
]
