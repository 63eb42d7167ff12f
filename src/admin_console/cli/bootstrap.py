# src/admin_console/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings and config.json once,
- ensures local directories exist,
- reads the three text buffers (and seeds an empty Todo from the task mirror),
- wires channels, command runner, clipboard, notifier, dashboard and monitor into AppState.
"""

from __future__ import annotations

import logging

from ..commands.runner import CommandRunner
from ..config import AppConfig, get_settings, load_app_config
from ..core.bus import EventBus, MonitorChannel
from ..core.dashboard import Dashboard
from ..core.models import BufferId
from ..core.state import AppState
from ..editor.buffer import TextBuffer
from ..monitor.monitor import Monitor
from ..notify import DesktopNotifierSink, SystemClipboard
from ..tasks.codec import render_tasks
from ..tasks.task_store import BufferFiles, TaskMirror

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    for path in (settings.notes_path, settings.todo_path, settings.logs_path, settings.tasks_json_path):
        path.parent.mkdir(parents=True, exist_ok=True)


def load_buffers(files: BufferFiles, mirror: TaskMirror) -> tuple[dict[BufferId, TextBuffer], bool]:
    """
    Read every buffer. Returns (buffers, seeded) where seeded means the Todo buffer
    was empty and got filled from the task mirror.
    """
    buffers = {bid: TextBuffer(files.load(bid)) for bid in BufferId}
    if buffers[BufferId.TODO].text.strip():
        return buffers, False

    tasks = mirror.load()
    if not tasks:
        return buffers, False
    buffers[BufferId.TODO] = TextBuffer(render_tasks(tasks))
    logger.info("Seeded empty Todo buffer with %d tasks from the mirror.", len(tasks))
    return buffers, True


def create_initial_state(*, settings=None, app_config: AppConfig | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if app_config is None:
        app_config = load_app_config(settings.config_path)

    files = BufferFiles(
        {
            BufferId.NOTES: settings.notes_path,
            BufferId.TODO: settings.todo_path,
            BufferId.LOGS: settings.logs_path,
        }
    )
    mirror = TaskMirror(settings.tasks_json_path)
    buffers, seeded = load_buffers(files, mirror)

    events = EventBus()
    monitor_channel = MonitorChannel()

    dashboard = Dashboard(
        buffers=buffers,
        commands=app_config.commands,
        events=events,
        monitor_channel=monitor_channel,
        launcher=CommandRunner(events, encoding=settings.command_encoding),
        clipboard=SystemClipboard(),
        files=files,
        task_mirror=mirror,
        placeholder=settings.input_placeholder,
        save_debounce_seconds=settings.save_debounce_seconds,
    )
    if seeded:
        dashboard.mark_dirty(BufferId.TODO)

    monitor = Monitor(
        app_config.targets,
        dashboard.tasks,
        events,
        monitor_channel,
        DesktopNotifierSink(settings.app_name, enabled=settings.notifications_enabled),
        probe_timeout=settings.probe_timeout_ms / 1000.0,
        interval_seconds=settings.monitor_interval_seconds,
    )

    return AppState(
        settings=settings,
        app_config=app_config,
        dashboard=dashboard,
        monitor=monitor,
        events=events,
        monitor_channel=monitor_channel,
    )
