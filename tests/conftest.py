# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from admin_console.core.bus import EventBus, MonitorChannel
from admin_console.core.dashboard import Dashboard
from admin_console.core.models import AdminCommand, BufferId
from admin_console.tasks.task_store import BufferFiles, TaskMirror

from .fakes import FakeClipboard, FakeLauncher, ManualTimer


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with create_initial_state.

    A SimpleNamespace rather than the real Settings keeps tests independent of the
    process environment and any config_local.py.
    """
    return SimpleNamespace(
        app_name="Admin Console (tests)",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        data_dir=tmp_path,
        config_path=tmp_path / "config.json",
        notes_path=tmp_path / "notes.txt",
        todo_path=tmp_path / "todo.txt",
        logs_path=tmp_path / "logs.txt",
        tasks_json_path=tmp_path / "tasks.json",
        probe_timeout_ms=50,
        monitor_interval_seconds=0.01,
        notifications_enabled=False,
        ui_tick_ms=100,
        save_debounce_seconds=30.0,
        command_encoding="utf-8",
        input_placeholder="%INPUT%",
    )


@pytest.fixture()
def commands() -> tuple[AdminCommand, ...]:
    return (
        AdminCommand(name="Uptime", cmd="uptime"),
        AdminCommand(name="Ping host", cmd="ping", args=("-c", "4", "%INPUT%")),
        AdminCommand(name="Disk usage", cmd="df", args=("-h",)),
    )


@pytest.fixture()
def files(tmp_path: Path) -> BufferFiles:
    return BufferFiles(
        {
            BufferId.NOTES: tmp_path / "notes.txt",
            BufferId.TODO: tmp_path / "todo.txt",
            BufferId.LOGS: tmp_path / "logs.txt",
        }
    )


@pytest.fixture()
def mirror(tmp_path: Path) -> TaskMirror:
    return TaskMirror(tmp_path / "tasks.json")


@pytest.fixture()
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture()
def launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture()
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture()
def dashboard(
        commands: tuple[AdminCommand, ...],
        files: BufferFiles,
        mirror: TaskMirror,
        timer: ManualTimer,
        launcher: FakeLauncher,
        clipboard: FakeClipboard,
) -> Dashboard:
    return Dashboard(
        buffers={},
        commands=commands,
        events=EventBus(),
        monitor_channel=MonitorChannel(),
        launcher=launcher,
        clipboard=clipboard,
        files=files,
        task_mirror=mirror,
        save_debounce_seconds=30.0,
        clock=timer,
    )
