# tests/test_task_codec.py

from __future__ import annotations

import pytest

from admin_console.core.models import Task
from admin_console.tasks.codec import (
    find_completion_line,
    is_valid_time,
    mark_line_completed,
    parse_tasks,
    render_task,
    render_tasks,
)


def test_parse_completed_and_timed_tasks() -> None:
    text = "- [x] Buy milk\n  get 2%  \n- [14:30] Call Bob\n"

    tasks = parse_tasks(text)

    assert [t.title for t in tasks] == ["Buy milk", "Call Bob"]
    buy, call = tasks
    assert buy.completed is True
    assert buy.time == ""
    # Indented lines belong to the task line above them.
    assert buy.description == "get 2%"
    assert call == Task(title="Call Bob", description="", time="14:30", completed=False)


def test_parse_drops_preamble_and_blank_lines() -> None:
    text = "Shopping list\nnot a task\n\n- [] First\n\n   \n- [ ] Second\n"

    tasks = parse_tasks(text)

    assert [t.title for t in tasks] == ["First", "Second"]
    assert all(t.time == "" and not t.completed for t in tasks)


def test_parse_uppercase_marker_is_completed() -> None:
    (task,) = parse_tasks("- [X] Done already")
    assert task.completed is True
    assert task.time == ""


def test_parse_keeps_malformed_time_verbatim() -> None:
    (task,) = parse_tasks("- [25:99] Late night")
    assert task.time == "25:99"
    assert task.completed is False


def test_parse_title_may_contain_brackets() -> None:
    (task,) = parse_tasks("- [10:00] Fix [prod] db")
    assert task.time == "10:00"
    assert task.title == "Fix [prod] db"


def test_parse_joins_multiline_description() -> None:
    (task,) = parse_tasks("- [] Deploy\n  build image\n    push tag\n")
    assert task.description == "build image\npush tag"


def test_parse_empty_text() -> None:
    assert parse_tasks("") == []
    assert parse_tasks("\n\n") == []


def test_render_task_with_empty_description() -> None:
    block = render_task(Task(title="Water plants", time="07:00"))
    assert block == "- [07:00] Water plants\n  "


def test_render_completed_task_uses_x_marker() -> None:
    block = render_task(Task(title="Buy milk", description="get 2%", completed=True))
    assert block == "- [x] Buy milk\n  get 2%"


def test_render_then_parse_preserves_tasks() -> None:
    tasks = [
        Task(title="Buy milk", description="get 2%", completed=True),
        Task(title="Call Bob", time="14:30"),
        Task(title="Deploy", description="build image\npush tag", time="09:05"),
        Task(title="Someday"),
    ]

    assert parse_tasks(render_tasks(tasks)) == tasks


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("", True),
        ("   ", True),
        ("00:00", True),
        ("23:59", True),
        ("9:5", True),
        (" 07:00 ", True),
        ("24:00", False),
        ("12:60", False),
        ("9:65", False),
        ("1230", False),
        ("12:30:00", False),
        ("-1:30", False),
        ("ab:cd", False),
        ("12:", False),
        ("١٢:٣٠", False),
    ],
)
def test_is_valid_time(value: str, expected: bool) -> None:
    assert is_valid_time(value) is expected


def test_find_completion_line_skips_completed_duplicates() -> None:
    lines = [
        "notes",
        "- [x] Call Bob",
        "- [14:30] Call Bob",
        "- [15:00] Call Bob",
    ]

    assert find_completion_line(lines, "Call Bob") == 2


def test_find_completion_line_ignores_description_lines() -> None:
    lines = ["- [x] Other", "  Call Bob about lunch"]
    assert find_completion_line(lines, "Call Bob") is None


def test_mark_line_completed_replaces_marker_only() -> None:
    assert mark_line_completed("- [14:30] Call Bob") == "- [x] Call Bob"
    assert mark_line_completed("  - [ ] Indented [tag]") == "  - [x] Indented [tag]"
    assert mark_line_completed("no marker here") == "no marker here"
