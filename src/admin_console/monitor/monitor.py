# src/admin_console/monitor/monitor.py

from __future__ import annotations

"""
Network health monitor + reminder scanner.

The monitor owns its working copies of targets, tasks and statuses. The foreground talks
to it only through the MonitorChannel (UpdateTargets / UpdateTasks) and hears back only
through the EventBus.

Every tick:
- drain config messages (last value of each kind wins),
- probe all targets concurrently (TCP connect, bounded timeout),
- append one history sample per target, log + alert on status flips,
- publish a ServerUpdate snapshot,
- once per wall-clock minute, fire reminders for due tasks.

Desktop notifications run as their own tasks, so a slow notification backend never
delays the tick. run() waits for the ones still in flight before returning.

No debouncing: one failed probe flips a target offline.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime

from ..core.bus import EventBus, MonitorChannel
from ..core.events import LogOutput, ServerUpdate, TaskFired, UpdateTargets, UpdateTasks
from ..core.models import ServerStatus, Target, Task
from ..core.ports import Notifier
from .probe import DEFAULT_TIMEOUT, probe_target

logger = logging.getLogger(__name__)

Prober = Callable[[str, float], Awaitable[tuple[bool, int]]]
Clock = Callable[[], datetime]


class Monitor:
    def __init__(
            self,
            targets: Sequence[Target],
            tasks: Sequence[Task],
            events: EventBus,
            commands: MonitorChannel,
            notifier: Notifier | None = None,
            *,
            probe_timeout: float = DEFAULT_TIMEOUT,
            interval_seconds: float = 1.0,
            prober: Prober = probe_target,
            clock: Clock = datetime.now,
    ) -> None:
        self._events = events
        self._commands = commands
        self._notifier = notifier
        self.probe_timeout = float(probe_timeout)
        self.interval_seconds = max(0.01, float(interval_seconds))
        self._prober = prober
        self._clock = clock

        self.targets: tuple[Target, ...] = tuple(targets)
        self.tasks: tuple[Task, ...] = tuple(tasks)
        self.statuses: list[ServerStatus] = [ServerStatus(name=t.name) for t in self.targets]
        # None = unknown (never probed); treated like online so a target that is down
        # at startup still raises an alert.
        self._previous: list[bool | None] = [None] * len(self.targets)
        self._last_checked_minute = ""
        self._pending: set[asyncio.Task[None]] = set()

    # ---- config ----

    def _set_targets(self, targets: tuple[Target, ...]) -> None:
        statuses: list[ServerStatus] = []
        previous: list[bool | None] = []
        for i, t in enumerate(targets):
            if i < len(self.targets) and self.targets[i].name == t.name:
                statuses.append(self.statuses[i])
                previous.append(self._previous[i])
            else:
                statuses.append(ServerStatus(name=t.name))
                previous.append(None)
        self.targets, self.statuses, self._previous = targets, statuses, previous
        logger.info("Monitor targets updated: %d", len(targets))

    def apply_pending_commands(self) -> None:
        latest_targets: UpdateTargets | None = None
        latest_tasks: UpdateTasks | None = None
        for msg in self._commands.drain():
            if isinstance(msg, UpdateTargets):
                latest_targets = msg
            elif isinstance(msg, UpdateTasks):
                latest_tasks = msg
        if latest_targets is not None:
            self._set_targets(tuple(latest_targets.targets))
        if latest_tasks is not None:
            self.tasks = tuple(latest_tasks.tasks)
            logger.debug("Monitor tasks updated: %d", len(self.tasks))

    # ---- notifications ----

    def _notify(self, title: str, message: str, *, urgent: bool) -> None:
        """Fire-and-forget: delivery runs as its own task and never holds up the tick."""
        if self._notifier is None:
            return
        task = asyncio.create_task(self._deliver(self._notifier, title, message, urgent=urgent))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, notifier: Notifier, title: str, message: str, *, urgent: bool) -> None:
        try:
            await notifier.notify(title, message, urgent=urgent)
        except Exception:
            logger.debug("Notification delivery failed title=%s", title, exc_info=True)

    async def flush_notifications(self) -> None:
        """Wait for notifications still in flight."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    # ---- tick ----

    async def _probe_all(self) -> list[tuple[bool, int]]:
        if not self.targets:
            return []
        return list(
            await asyncio.gather(*(self._prober(t.address, self.probe_timeout) for t in self.targets))
        )

    async def _record_results(self, results: list[tuple[bool, int]]) -> None:
        for i, (online, latency) in enumerate(results):
            status = self.statuses[i]
            status.record(online, latency)
            name = self.targets[i].name
            was_online = self._previous[i] is not False

            if was_online and not online:
                ts = self._clock().strftime("%H:%M:%S")
                logger.warning("Target %s went offline", name)
                self._events.send(LogOutput(f"[{ts}] ALERT: Server '{name}' went OFFLINE!"))
                self._notify("SERVER DOWN", f"Server '{name}' stopped responding.", urgent=True)
            elif self._previous[i] is False and online:
                ts = self._clock().strftime("%H:%M:%S")
                logger.info("Target %s is back online (%d ms)", name, latency)
                self._events.send(LogOutput(f"[{ts}] INFO: Server '{name}' is back ONLINE."))

            self._previous[i] = online

    async def _check_reminders(self) -> None:
        minute = self._clock().strftime("%H:%M")
        if minute == self._last_checked_minute:
            return
        self._last_checked_minute = minute

        for task in self.tasks:
            if task.completed or not task.time or task.time != minute:
                continue
            logger.info("Reminder fired: %s at %s", task.title, minute)
            self._notify(f"Reminder: {task.title}", task.description, urgent=False)
            self._events.send(TaskFired(task.title))

    async def tick(self) -> None:
        self.apply_pending_commands()
        results = await self._probe_all()
        await self._record_results(results)
        self._events.send(ServerUpdate(tuple(s.snapshot() for s in self.statuses)))
        await self._check_reminders()

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """
        Tick forever (or until stop_event is set). Fixed sleep between ticks,
        independent of how fast the foreground consumes events.
        """
        logger.info("Monitor started targets=%d interval=%.2fs", len(self.targets), self.interval_seconds)
        while stop_event is None or not stop_event.is_set():
            try:
                await self.tick()
            except Exception:
                logger.exception("Monitor tick failed")

            if stop_event is None:
                await asyncio.sleep(self.interval_seconds)
                continue
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass
        await self.flush_notifications()
        logger.info("Monitor stopped.")
