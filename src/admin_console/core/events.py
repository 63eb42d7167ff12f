# src/admin_console/core/events.py

"""
Messages crossing thread boundaries.

AppEvent flows into the foreground (monitor, command runners -> dashboard).
MonitorCommand flows from the foreground to the monitor (config updates only).
All payloads are immutable or freshly copied snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import ServerStatus, Target, Task


@dataclass(slots=True, frozen=True)
class ServerUpdate:
    statuses: tuple[ServerStatus, ...]


@dataclass(slots=True, frozen=True)
class LogOutput:
    text: str


@dataclass(slots=True, frozen=True)
class TaskFired:
    """A reminder fired; the foreground marks the task completed in the Todo text."""

    title: str


AppEvent = ServerUpdate | LogOutput | TaskFired


@dataclass(slots=True, frozen=True)
class UpdateTargets:
    targets: tuple[Target, ...]


@dataclass(slots=True, frozen=True)
class UpdateTasks:
    tasks: tuple[Task, ...]


MonitorCommand = UpdateTargets | UpdateTasks
