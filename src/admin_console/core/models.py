# src/admin_console/core/models.py

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field, replace
from enum import IntEnum, StrEnum

HISTORY_SIZE = 20
OFFLINE_SAMPLE = 999


class BufferId(IntEnum):
    """Editable text buffers, in tab order."""

    NOTES = 0
    TODO = 1
    LOGS = 2

    @property
    def title(self) -> str:
        return f" {self.value + 1}.{self.name.capitalize()} "


class WizardStep(StrEnum):
    TITLE = "title"
    DESCRIPTION = "description"
    TIME = "time"


@dataclass(slots=True, frozen=True)
class Target:
    """A network endpoint probed by the monitor ("host:port")."""

    name: str
    address: str


@dataclass(slots=True, frozen=True)
class AdminCommand:
    name: str
    cmd: str
    args: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class Task:
    """
    One structured task derived from the Todo buffer.

    time is "HH:MM" or "" (kept verbatim from the text, never validated on parse).
    """

    title: str
    description: str = ""
    time: str = ""
    completed: bool = False


def _empty_history() -> deque[int]:
    return deque([0] * HISTORY_SIZE, maxlen=HISTORY_SIZE)


@dataclass(slots=True)
class ServerStatus:
    """
    Live status of one target, owned by the monitor.

    history is a fixed-capacity FIFO: appending evicts the oldest sample,
    so its length is always HISTORY_SIZE.
    """

    name: str
    is_online: bool = False
    latency: int = 0
    history: deque[int] = field(default_factory=_empty_history)

    def record(self, online: bool, latency: int) -> None:
        self.is_online = online
        self.latency = latency
        self.history.append(latency if online else OFFLINE_SAMPLE)

    def snapshot(self) -> ServerStatus:
        """Deep copy handed across the thread boundary."""
        return replace(self, history=deque(self.history, maxlen=HISTORY_SIZE))
