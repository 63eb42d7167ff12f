# tests/test_ui.py

from __future__ import annotations

from collections import deque

from rich.console import Console

from admin_console.core.models import HISTORY_SIZE, OFFLINE_SAMPLE, AdminCommand, BufferId, ServerStatus, Task
from admin_console.core.view import Key, Search, TaskWizard
from admin_console.editor.buffer import Move, TextBuffer
from admin_console.ui import render
from admin_console.ui.app import key_from_textual


def _plain(renderable) -> str:
    console = Console(width=100, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_sparkline_scales_and_marks_offline() -> None:
    history = deque([0] * (HISTORY_SIZE - 3) + [10, OFFLINE_SAMPLE, 20], maxlen=HISTORY_SIZE)

    line = render.sparkline(history)

    assert len(line) == HISTORY_SIZE
    assert line[-1] == render.SPARK_BARS[-1]
    assert line[-2] == render.OFFLINE_BAR
    assert line[0] == render.SPARK_BARS[0]


def test_status_color() -> None:
    assert render.status_color(ServerStatus("a", is_online=False)) == "red"
    assert render.status_color(ServerStatus("a", is_online=True, latency=150)) == "yellow"
    assert render.status_color(ServerStatus("a", is_online=True, latency=20)) == "green"


def test_schedule_order_timed_first_then_untimed() -> None:
    tasks = [
        Task(title="zeta"),
        Task(title="late", time="18:00"),
        Task(title="done", time="07:00", completed=True),
        Task(title="alpha"),
        Task(title="early", time="08:15"),
    ]

    assert [t.title for t in render.schedule_order(tasks)] == ["early", "late", "alpha", "zeta"]


def test_render_schedule_limits_rows() -> None:
    tasks = [Task(title=f"task {i}", time=f"0{i}:00") for i in range(8)]
    text = _plain(render.render_schedule(tasks))

    assert "task 4" in text
    assert "task 5" not in text


def test_render_schedule_empty() -> None:
    assert "(No active tasks)" in _plain(render.render_schedule([]))


def test_render_servers_lists_targets() -> None:
    text = _plain(render.render_servers([ServerStatus("web", is_online=True, latency=12), ServerStatus("db")]))

    assert "web" in text
    assert "12ms" in text
    assert "---" in text


def test_render_popup_by_mode() -> None:
    assert render.render_popup(TaskWizard(input_buffer="Wat")) is not None
    assert "Search: abc" in _plain(render.render_popup(Search(BufferId.NOTES, "abc")))
    assert render.render_popup(TaskWizard()) is not None


def test_render_actions_marks_selection() -> None:
    text = _plain(render.render_actions([AdminCommand("One", "a"), AdminCommand("Two", "b")], 1))
    assert ">> Two" in text
    assert "   One" in text


def test_render_buffer_window_follows_cursor() -> None:
    buf = TextBuffer("\n".join(f"line {i}" for i in range(50)))
    for _ in range(40):
        buf.move_cursor(Move.DOWN)

    text = render.render_buffer(buf, 10).plain

    assert "line 40" in text
    assert "line 0 " not in text


def test_key_translation() -> None:
    assert key_from_textual("a", "a") == Key("a")
    assert key_from_textual("A", "A") == Key("A")
    assert key_from_textual("space", " ") == Key(" ")
    assert key_from_textual("escape", None) == Key("escape")
    assert key_from_textual("ctrl+f", None) == Key("f", ctrl=True)
    assert key_from_textual("alt+t", None) == Key("t", alt=True)
    assert key_from_textual("ctrl+shift+left", None) == Key("left", ctrl=True, shift=True)
    assert key_from_textual("ctrl+h", "\x08") == Key("backspace", ctrl=True)
    assert key_from_textual("ctrl+backspace", None) == Key("backspace", ctrl=True)
    assert key_from_textual("f5", None) is None
