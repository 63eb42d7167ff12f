# src/admin_console/core/bus.py

from __future__ import annotations

import queue
from typing import Generic, TypeVar

from .events import AppEvent, MonitorCommand

T = TypeVar("T")


class Channel(Generic[T]):
    """
    Unbounded multi-producer / single-consumer channel.

    send() never blocks. The consumer polls with drain(), which returns whatever
    is queued right now and never waits. Per-producer order is preserved.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[T] = queue.SimpleQueue()

    def send(self, item: T) -> None:
        self._queue.put(item)

    def drain(self) -> list[T]:
        items: list[T] = []
        while True:
            try:
                items.append(self._queue.get_nowait())
            except queue.Empty:
                return items


EventBus = Channel[AppEvent]
MonitorChannel = Channel[MonitorCommand]
