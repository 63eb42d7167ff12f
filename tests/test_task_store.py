# tests/test_task_store.py

from __future__ import annotations

import json
from pathlib import Path

from admin_console.cli.bootstrap import load_buffers
from admin_console.core.models import BufferId, Task
from admin_console.tasks.task_store import BufferFiles, Debouncer, TaskMirror

from .fakes import ManualTimer


def test_missing_buffer_file_loads_empty(files: BufferFiles) -> None:
    assert files.load(BufferId.NOTES) == ""


def test_buffer_save_and_reload(files: BufferFiles, tmp_path: Path) -> None:
    assert files.save(BufferId.TODO, "- [] A\n  b") is True
    assert (tmp_path / "todo.txt").read_text("utf-8") == "- [] A\n  b"
    assert files.load(BufferId.TODO) == "- [] A\n  b"
    assert not (tmp_path / "todo.txt.tmp").exists()


def test_buffer_save_creates_parent_dirs(tmp_path: Path) -> None:
    files = BufferFiles({BufferId.LOGS: tmp_path / "nested" / "dir" / "logs.txt"})
    assert files.save(BufferId.LOGS, "x") is True
    assert files.load(BufferId.LOGS) == "x"


def test_mirror_round_trip(mirror: TaskMirror, tmp_path: Path) -> None:
    tasks = [Task(title="Call Bob", time="14:30"), Task(title="Buy milk", description="get 2%", completed=True)]

    assert mirror.save(tasks) is True
    data = json.loads((tmp_path / "tasks.json").read_text("utf-8"))
    assert data[0] == {"title": "Call Bob", "description": "", "time": "14:30", "completed": False}
    assert mirror.load() == tasks


def test_mirror_tolerates_garbage(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    mirror = TaskMirror(path)

    path.write_text("{not json", "utf-8")
    assert mirror.load() == []

    path.write_text(json.dumps({"title": "not a list"}), "utf-8")
    assert mirror.load() == []

    path.write_text(json.dumps([{"title": "ok"}, {"no": "title"}, "junk"]), "utf-8")
    assert mirror.load() == [Task(title="ok")]


def test_debouncer() -> None:
    timer = ManualTimer()
    d = Debouncer(30.0, clock=timer)

    assert d.due() is False
    timer.advance(29)
    assert d.due() is False
    d.touch()
    timer.advance(29)
    assert d.due() is False
    timer.advance(1)
    assert d.due() is True


def test_empty_todo_is_seeded_from_mirror(files: BufferFiles, mirror: TaskMirror) -> None:
    mirror.save([Task(title="Standup", time="09:00")])

    buffers, seeded = load_buffers(files, mirror)

    assert seeded is True
    assert buffers[BufferId.TODO].text == "- [09:00] Standup\n  "


def test_existing_todo_wins_over_mirror(files: BufferFiles, mirror: TaskMirror) -> None:
    files.save(BufferId.TODO, "- [] From text")
    mirror.save([Task(title="From mirror")])

    buffers, seeded = load_buffers(files, mirror)

    assert seeded is False
    assert buffers[BufferId.TODO].text == "- [] From text"
