# src/admin_console/core/dashboard.py

from __future__ import annotations

"""
Foreground controller.

Owns the editor buffers, the view state, the derived task list and the latest server
snapshot. Everything arrives here through three entry points driven by the UI loop:
- handle_key / handle_paste  (user input -> transition() -> effects)
- pump                       (non-blocking drain of the event bus)
- tick                       (re-derive tasks when Todo is dirty, debounced saves)

Two kinds of "dirty":
- unsaved buffers: written after save_debounce_seconds of input inactivity, or at exit,
- stale tasks: the Todo text changed; tasks are re-parsed on the next tick and pushed
  to the monitor as UpdateTasks.
"""

import logging
import time
from collections.abc import Callable, Mapping, Sequence

from ..editor.buffer import TextBuffer
from ..tasks.codec import find_completion_line, mark_line_completed, parse_tasks
from ..tasks.task_store import BufferFiles, Debouncer, TaskMirror
from .bus import EventBus, MonitorChannel
from .events import AppEvent, LogOutput, ServerUpdate, TaskFired, UpdateTasks
from .models import AdminCommand, BufferId, ServerStatus, Task
from .ports import Clipboard, CommandLauncher
from .view import (
    MUTATING_OPS,
    Actions,
    AppendTask,
    DispatchContext,
    EditBuffer,
    Editor,
    EditOp,
    Effect,
    Key,
    Quit,
    RunCommand,
    SearchNext,
    SetSearch,
    ViewState,
    displayed_buffer,
    transition,
)

logger = logging.getLogger(__name__)

LOG_SEPARATOR = "--------------------------"


class Dashboard:
    def __init__(
            self,
            *,
            buffers: Mapping[BufferId, TextBuffer],
            commands: Sequence[AdminCommand],
            events: EventBus,
            monitor_channel: MonitorChannel,
            launcher: CommandLauncher,
            clipboard: Clipboard | None = None,
            files: BufferFiles | None = None,
            task_mirror: TaskMirror | None = None,
            placeholder: str = "%INPUT%",
            save_debounce_seconds: float = 30.0,
            clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.buffers: dict[BufferId, TextBuffer] = {bid: buffers.get(bid) or TextBuffer() for bid in BufferId}
        self.commands: tuple[AdminCommand, ...] = tuple(commands)
        self.events = events
        self.monitor_channel = monitor_channel
        self.launcher = launcher
        self.clipboard = clipboard
        self.files = files
        self.task_mirror = task_mirror
        self.placeholder = placeholder
        self.debouncer = Debouncer(save_debounce_seconds, clock=clock)

        self.view: ViewState = Editor(BufferId.NOTES)
        self.statuses: tuple[ServerStatus, ...] = ()
        self.tasks: list[Task] = parse_tasks(self.buffers[BufferId.TODO].text)
        self.unsaved: set[BufferId] = set()
        self.tasks_stale = False
        self.should_quit = False
        self._last_action = 0

    # ---- dirty tracking ----

    def mark_dirty(self, buffer_id: BufferId) -> None:
        self.unsaved.add(buffer_id)
        if buffer_id is BufferId.TODO:
            self.tasks_stale = True

    # ---- input ----

    def context(self) -> DispatchContext:
        return DispatchContext(commands=self.commands, placeholder=self.placeholder, last_action=self._last_action)

    def handle_key(self, key: Key) -> None:
        self.debouncer.touch()
        result = transition(self.view, key, self.context())
        self.view = result.view
        if isinstance(self.view, Actions):
            self._last_action = self.view.selected
        for effect in result.effects:
            self._apply(effect)

    def handle_paste(self, text: str) -> None:
        """Bracketed paste: only inserted while an editor pane has focus."""
        if not isinstance(self.view, Editor) or not text:
            return
        self.debouncer.touch()
        buf = self.view.buffer
        if self.buffers[buf].insert_str(text):
            self.mark_dirty(buf)

    # ---- effects ----

    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, EditBuffer):
            self._edit(effect)
        elif isinstance(effect, SetSearch):
            buffer = self.buffers[effect.buffer]
            buffer.set_search_pattern(effect.pattern)
            if effect.jump:
                buffer.search_forward(match_cursor=True)
        elif isinstance(effect, SearchNext):
            buffer = self.buffers[effect.buffer]
            if effect.backward:
                buffer.search_back()
            else:
                buffer.search_forward()
        elif isinstance(effect, RunCommand):
            self._run(effect)
        elif isinstance(effect, AppendTask):
            self._append_task(effect.block)
        elif isinstance(effect, Quit):
            self.should_quit = True

    def _edit(self, effect: EditBuffer) -> None:
        buf = self.buffers[effect.buffer]
        op = effect.op
        changed = True

        if op is EditOp.INSERT:
            changed = buf.insert_str(effect.text)
        elif op is EditOp.NEWLINE:
            changed = buf.insert_newline()
        elif op is EditOp.BACKSPACE:
            changed = buf.delete_char()
        elif op is EditOp.DELETE:
            changed = buf.delete_next_char()
        elif op is EditOp.DELETE_WORD:
            changed = buf.delete_word()
        elif op is EditOp.UNDO:
            changed = buf.undo()
        elif op is EditOp.REDO:
            changed = buf.redo()
        elif op is EditOp.COPY:
            text = buf.copy()
            if text and self.clipboard is not None:
                self.clipboard.set_text(text)
        elif op is EditOp.CUT:
            text = buf.cut()
            changed = bool(text)
            if text and self.clipboard is not None:
                self.clipboard.set_text(text)
        elif op is EditOp.PASTE:
            text = (self.clipboard.get_text() if self.clipboard is not None else "") or buf.yank
            changed = buf.insert_str(text) if text else False
        elif op is EditOp.SELECT_ALL:
            buf.select_all()
        elif op is EditOp.MOVE and effect.move is not None:
            buf.cancel_selection()
            buf.move_cursor(effect.move)
        elif op is EditOp.SELECT_MOVE and effect.move is not None:
            if not buf.is_selecting:
                buf.start_selection()
            buf.move_cursor(effect.move)

        if op in MUTATING_OPS and changed:
            self.mark_dirty(effect.buffer)

    def _run(self, effect: RunCommand) -> None:
        label = effect.name if effect.user_input is None else f"{effect.name} ({effect.user_input})"
        self.buffers[BufferId.LOGS].append(f"\n--- Executing (Async): {label} ---\n")
        self.mark_dirty(BufferId.LOGS)
        try:
            self.launcher.launch(effect.name, effect.cmd, effect.args)
        except Exception as e:
            logger.exception("Launcher failed name=%s", effect.name)
            self._append_log(f"Failed to run: {e}")

    def _append_task(self, block: str) -> None:
        todo = self.buffers[BufferId.TODO]
        prefix = "\n" if todo.lines[-1] else ""
        todo.append(prefix + block)
        self.mark_dirty(BufferId.TODO)

    def _append_log(self, text: str) -> None:
        logs = self.buffers[BufferId.LOGS]
        last = logs.lines[-1]
        prefix = "\n" if last else ""
        logs.append(f"{prefix}{text}\n{LOG_SEPARATOR}\n")
        self.mark_dirty(BufferId.LOGS)

    # ---- events ----

    def _on_event(self, event: AppEvent) -> None:
        if isinstance(event, ServerUpdate):
            self.statuses = event.statuses
        elif isinstance(event, LogOutput):
            self._append_log(event.text)
        elif isinstance(event, TaskFired):
            self.complete_task(event.title)

    def complete_task(self, title: str) -> bool:
        todo = self.buffers[BufferId.TODO]
        row = find_completion_line(todo.lines, title)
        if row is None:
            logger.debug("No open task line for fired reminder %r", title)
            return False
        todo.replace_line(row, mark_line_completed(todo.lines[row]))
        self.mark_dirty(BufferId.TODO)
        return True

    def pump(self) -> bool:
        """Drain the event bus without blocking. Returns True if anything arrived."""
        events = self.events.drain()
        for event in events:
            try:
                self._on_event(event)
            except Exception:
                logger.exception("Failed to apply event %s", type(event).__name__)
        return bool(events)

    # ---- derivation + persistence ----

    def refresh_tasks(self) -> None:
        self.tasks = parse_tasks(self.buffers[BufferId.TODO].text)
        self.tasks_stale = False
        self.monitor_channel.send(UpdateTasks(tuple(self.tasks)))

    def flush(self) -> None:
        """Write every unsaved buffer; failed writes stay unsaved and retry after another quiet period."""
        if self.files is None:
            self.unsaved.clear()
            return
        for bid in sorted(self.unsaved):
            if self.files.save(bid, self.buffers[bid].text):
                self.unsaved.discard(bid)
                if bid is BufferId.TODO and self.task_mirror is not None:
                    self.task_mirror.save(self.tasks)
        if self.unsaved:
            self.debouncer.touch()

    def tick(self) -> None:
        if self.tasks_stale:
            self.refresh_tasks()
        if self.unsaved and self.debouncer.due():
            self.flush()

    def save_all(self) -> None:
        """Final synchronous save at exit."""
        self.tasks = parse_tasks(self.buffers[BufferId.TODO].text)
        self.tasks_stale = False
        self.unsaved.update(BufferId)
        self.flush()

    # ---- view helpers ----

    @property
    def displayed_buffer(self) -> BufferId | None:
        return displayed_buffer(self.view)

    @property
    def active_tasks(self) -> list[Task]:
        return [t for t in self.tasks if not t.completed]
