# src/admin_console/tasks/codec.py

"""
Text <-> task conversion for the Todo buffer.

The text buffer is the source of truth. parse_tasks() derives the task list from it;
render_task() is only used to append a new block, and the completion helpers rewrite
the bracket of a single line in place.

Line format:
    - [14:30] Call Bob      timed task
    - [x] Buy milk          completed task (any marker containing x/X)
    - [] Something          no time, not completed
      description lines     every following non-task line, trimmed
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import replace

from ..core.models import Task

TASK_LINE_RE = re.compile(r"^-\s*\[([^\]]*)\]\s*(.*)$")
DESCRIPTION_INDENT = "  "


def is_valid_time(value: str) -> bool:
    """Empty is valid; otherwise "H:M" with unsigned integers, hours < 24 and minutes < 60."""
    s = value.strip()
    if not s:
        return True
    parts = s.split(":")
    if len(parts) != 2:
        return False
    hours, minutes = parts
    if not (hours.isascii() and hours.isdigit() and minutes.isascii() and minutes.isdigit()):
        return False
    return int(hours) < 24 and int(minutes) < 60


def _is_completed_marker(marker: str) -> bool:
    return "x" in marker.lower()


def match_task_line(line: str) -> re.Match[str] | None:
    return TASK_LINE_RE.match(line.strip())


def parse_tasks(text: str) -> list[Task]:
    tasks: list[Task] = []
    current: Task | None = None
    description: list[str] = []

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue

        m = match_task_line(line)
        if m:
            if current is not None:
                tasks.append(replace(current, description="\n".join(description)))
            marker = m.group(1)
            completed = _is_completed_marker(marker)
            current = Task(
                title=m.group(2).strip(),
                time="" if completed else marker.strip(),
                completed=completed,
            )
            description = []
        elif current is not None:
            # Preamble before the first task is dropped.
            description.append(line)

    if current is not None:
        tasks.append(replace(current, description="\n".join(description)))
    return tasks


def render_task(task: Task) -> str:
    """Render one task block: marker line plus indented description line(s)."""
    marker = "x" if task.completed else task.time
    lines = [f"- [{marker}] {task.title}"]
    lines.extend(f"{DESCRIPTION_INDENT}{d}" for d in task.description.split("\n"))
    return "\n".join(lines)


def render_tasks(tasks: Sequence[Task]) -> str:
    return "\n".join(render_task(t) for t in tasks)


def find_completion_line(lines: Sequence[str], title: str) -> int | None:
    """
    Index of the first task line containing title whose marker is not completed.

    Duplicate titles are not disambiguated: the first eligible line wins.
    """
    for i, line in enumerate(lines):
        m = match_task_line(line)
        if m is None or title not in line:
            continue
        if _is_completed_marker(m.group(1)):
            continue
        return i
    return None


def mark_line_completed(line: str) -> str:
    """Replace whatever sits between the first '[' and the first ']' with 'x'."""
    start = line.find("[")
    end = line.find("]", start + 1)
    if start < 0 or end < 0:
        return line
    return f"{line[: start + 1]}x{line[end:]}"
