# src/admin_console/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The dashboard and the monitor depend on Protocols instead of concrete implementations,
so desktop notifications, the system clipboard and process spawning can be swapped for
fakes in tests.
"""

from collections.abc import Sequence
from typing import Any, Awaitable, Protocol


class Notifier(Protocol):
    """Fire-and-forget desktop notification sink. Delivery failures must not raise."""

    def notify(self, title: str, message: str, *, urgent: bool = False) -> Awaitable[None]: ...


class Clipboard(Protocol):
    def get_text(self) -> str: ...
    def set_text(self, text: str) -> None: ...


class CommandLauncher(Protocol):
    """Starts an external command without blocking; output arrives later on the event bus."""

    def launch(self, name: str, cmd: str, args: Sequence[str]) -> Any: ...
