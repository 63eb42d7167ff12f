# src/admin_console/core/view.py

from __future__ import annotations

"""
View state machine.

ViewState is a tagged union of mutually exclusive modes. transition() is pure:
(view, key, ctx) -> Transition(view, effects). It never touches buffers, the clipboard
or processes; it only describes what should happen. The dashboard applies the effects.

Global keys (checked before the mode):
- Ctrl+Q         quit
- Alt+T          open the task wizard
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from ..editor.buffer import Move
from ..tasks.codec import is_valid_time, render_task
from .models import AdminCommand, BufferId, Task, WizardStep

DEFAULT_PLACEHOLDER = "%INPUT%"

# Ukrainian/Russian layout letters on the same physical keys as the shortcut letters.
_LAYOUT_ALIASES = {
    "й": "q",
    "а": "f",
    "с": "c",
    "м": "v",
    "ч": "x",
    "я": "z",
    "н": "y",
    "ф": "a",
}


# ---- input ----


@dataclass(slots=True, frozen=True)
class Key:
    """
    A decoded key press.

    name is either a single printable character or a special key name:
    enter, escape, tab, backspace, delete, up, down, left, right, home, end.
    """

    name: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def char(self) -> str | None:
        return self.name if len(self.name) == 1 else None

    @property
    def is_plain_char(self) -> bool:
        return self.char is not None and not self.ctrl and not self.alt

    @property
    def shortcut_name(self) -> str:
        """Lower-cased name with Cyrillic layout letters mapped to their Latin key."""
        name = self.name.lower()
        return _LAYOUT_ALIASES.get(name, name)

    def is_ctrl(self, *names: str) -> bool:
        return self.ctrl and not self.alt and not self.shift and self.shortcut_name in names

    def is_alt(self, *names: str) -> bool:
        return self.alt and not self.ctrl and self.shortcut_name in names


# ---- view states ----


@dataclass(slots=True, frozen=True)
class Editor:
    buffer: BufferId = BufferId.NOTES


@dataclass(slots=True, frozen=True)
class Actions:
    selected: int = 0


@dataclass(slots=True, frozen=True)
class Search:
    return_to: BufferId
    query: str = ""


@dataclass(slots=True, frozen=True)
class InputPopup:
    command_index: int
    input_buffer: str = ""


@dataclass(slots=True, frozen=True)
class TaskWizard:
    step: WizardStep = WizardStep.TITLE
    input_buffer: str = ""
    title: str = ""
    description: str = ""


ViewState = Editor | Actions | Search | InputPopup | TaskWizard


# ---- effects ----


class EditOp(StrEnum):
    INSERT = "insert"
    NEWLINE = "newline"
    BACKSPACE = "backspace"
    DELETE = "delete"
    DELETE_WORD = "delete_word"
    UNDO = "undo"
    REDO = "redo"
    COPY = "copy"
    CUT = "cut"
    PASTE = "paste"
    SELECT_ALL = "select_all"
    MOVE = "move"
    SELECT_MOVE = "select_move"


# Ops that change buffer content (the buffer becomes dirty).
MUTATING_OPS = frozenset(
    {
        EditOp.INSERT,
        EditOp.NEWLINE,
        EditOp.BACKSPACE,
        EditOp.DELETE,
        EditOp.DELETE_WORD,
        EditOp.UNDO,
        EditOp.REDO,
        EditOp.CUT,
        EditOp.PASTE,
    }
)


@dataclass(slots=True, frozen=True)
class EditBuffer:
    buffer: BufferId
    op: EditOp
    text: str = ""
    move: Move | None = None


@dataclass(slots=True, frozen=True)
class SetSearch:
    """Apply pattern to the buffer ("" clears); optionally jump to the next match."""

    buffer: BufferId
    pattern: str
    jump: bool = False


@dataclass(slots=True, frozen=True)
class SearchNext:
    buffer: BufferId
    backward: bool = False


@dataclass(slots=True, frozen=True)
class RunCommand:
    name: str
    cmd: str
    args: tuple[str, ...]
    user_input: str | None = None


@dataclass(slots=True, frozen=True)
class AppendTask:
    block: str


@dataclass(slots=True, frozen=True)
class Quit:
    pass


Effect = EditBuffer | SetSearch | SearchNext | RunCommand | AppendTask | Quit


@dataclass(slots=True, frozen=True)
class Transition:
    view: ViewState
    effects: tuple[Effect, ...] = ()


@dataclass(slots=True, frozen=True)
class DispatchContext:
    commands: Sequence[AdminCommand] = field(default_factory=tuple)
    placeholder: str = DEFAULT_PLACEHOLDER
    last_action: int = 0


# ---- command helpers ----


def has_placeholder(command: AdminCommand, placeholder: str = DEFAULT_PLACEHOLDER) -> bool:
    return placeholder in command.args


def substitute_args(args: Sequence[str], value: str, placeholder: str = DEFAULT_PLACEHOLDER) -> tuple[str, ...]:
    return tuple(value if a == placeholder else a for a in args)


def wrap_index(current: int, delta: int, count: int) -> int:
    if count <= 0:
        return 0
    return (current + delta) % count


# ---- transitions ----

_ARROW_MOVES = {
    "up": Move.UP,
    "down": Move.DOWN,
    "left": Move.BACK,
    "right": Move.FORWARD,
    "home": Move.HEAD,
    "end": Move.END,
}

_BUFFER_HOTKEYS = {"1": BufferId.NOTES, "2": BufferId.TODO, "3": BufferId.LOGS}


def _editor(view: Editor, key: Key, ctx: DispatchContext) -> Transition:
    buf = view.buffer

    if key.is_ctrl("f"):
        return Transition(Search(return_to=buf))
    if key.is_ctrl("c"):
        return Transition(view, (EditBuffer(buf, EditOp.COPY),))
    if key.is_ctrl("v") or key.is_alt("v"):
        return Transition(view, (EditBuffer(buf, EditOp.PASTE),))
    if key.is_ctrl("x"):
        return Transition(view, (EditBuffer(buf, EditOp.CUT),))
    if key.is_ctrl("z"):
        return Transition(view, (EditBuffer(buf, EditOp.UNDO),))
    if key.is_ctrl("y"):
        return Transition(view, (EditBuffer(buf, EditOp.REDO),))
    if key.is_ctrl("a"):
        return Transition(view, (EditBuffer(buf, EditOp.SELECT_ALL),))
    if key.ctrl and key.name == "backspace":
        return Transition(view, (EditBuffer(buf, EditOp.DELETE_WORD),))
    if key.ctrl and key.name in ("left", "right"):
        move = Move.WORD_BACK if key.name == "left" else Move.WORD_FORWARD
        op = EditOp.SELECT_MOVE if key.shift else EditOp.MOVE
        return Transition(view, (EditBuffer(buf, op, move=move),))
    if key.alt and key.name in _BUFFER_HOTKEYS:
        return Transition(Editor(_BUFFER_HOTKEYS[key.name]))

    if key.ctrl or key.alt:
        return Transition(view)

    if key.name == "escape":
        return Transition(view, (Quit(),))
    if key.name == "tab":
        return Transition(Actions(selected=wrap_index(ctx.last_action, 0, len(ctx.commands))))
    if key.name == "enter":
        return Transition(view, (EditBuffer(buf, EditOp.NEWLINE),))
    if key.name == "backspace":
        return Transition(view, (EditBuffer(buf, EditOp.BACKSPACE),))
    if key.name == "delete":
        return Transition(view, (EditBuffer(buf, EditOp.DELETE),))
    if key.name in _ARROW_MOVES:
        op = EditOp.SELECT_MOVE if key.shift else EditOp.MOVE
        return Transition(view, (EditBuffer(buf, op, move=_ARROW_MOVES[key.name]),))
    if key.char is not None:
        return Transition(view, (EditBuffer(buf, EditOp.INSERT, text=key.char),))
    return Transition(view)


def _search(view: Search, key: Key) -> Transition:
    buf = view.return_to
    if key.name == "escape":
        return Transition(Editor(buf), (SetSearch(buf, ""),))
    if key.name in ("enter", "down"):
        return Transition(view, (SearchNext(buf),))
    if key.name == "up":
        return Transition(view, (SearchNext(buf, backward=True),))
    if key.name == "backspace":
        query = view.query[:-1]
        return Transition(Search(buf, query), (SetSearch(buf, query),))
    if key.is_plain_char:
        query = view.query + key.name
        return Transition(Search(buf, query), (SetSearch(buf, query, jump=True),))
    return Transition(view)


def _launch(command: AdminCommand, args: Sequence[str], user_input: str | None = None) -> Transition:
    effect = RunCommand(name=command.name, cmd=command.cmd, args=tuple(args), user_input=user_input)
    return Transition(Editor(BufferId.LOGS), (effect,))


def _actions(view: Actions, key: Key, ctx: DispatchContext) -> Transition:
    count = len(ctx.commands)
    if key.name in ("escape", "tab"):
        return Transition(Editor(BufferId.NOTES))
    if key.name == "down":
        return Transition(Actions(wrap_index(view.selected, 1, count)))
    if key.name == "up":
        return Transition(Actions(wrap_index(view.selected, -1, count)))
    if key.name == "enter" and 0 <= view.selected < count:
        command = ctx.commands[view.selected]
        if has_placeholder(command, ctx.placeholder):
            return Transition(InputPopup(command_index=view.selected))
        return _launch(command, command.args)
    return Transition(view)


def _input_popup(view: InputPopup, key: Key, ctx: DispatchContext) -> Transition:
    if key.name == "escape":
        return Transition(Actions(view.command_index))
    if key.name == "enter":
        if not 0 <= view.command_index < len(ctx.commands):
            return Transition(Actions())
        command = ctx.commands[view.command_index]
        args = substitute_args(command.args, view.input_buffer, ctx.placeholder)
        return _launch(command, args, user_input=view.input_buffer)
    if key.name == "backspace":
        return Transition(InputPopup(view.command_index, view.input_buffer[:-1]))
    if key.is_plain_char:
        return Transition(InputPopup(view.command_index, view.input_buffer + key.name))
    return Transition(view)


def _wizard(view: TaskWizard, key: Key) -> Transition:
    if key.name == "escape":
        return Transition(Editor(BufferId.TODO))
    if key.name == "backspace":
        return Transition(TaskWizard(view.step, view.input_buffer[:-1], view.title, view.description))
    if key.is_plain_char:
        return Transition(TaskWizard(view.step, view.input_buffer + key.name, view.title, view.description))
    if key.name != "enter":
        return Transition(view)

    value = view.input_buffer.strip()
    if view.step is WizardStep.TITLE:
        if not value:
            return Transition(view)
        return Transition(TaskWizard(WizardStep.DESCRIPTION, "", value, ""))
    if view.step is WizardStep.DESCRIPTION:
        return Transition(TaskWizard(WizardStep.TIME, "", view.title, value))

    if not is_valid_time(value):
        return Transition(view)
    block = render_task(Task(title=view.title, description=view.description, time=value))
    return Transition(Editor(BufferId.TODO), (AppendTask(block),))


def transition(view: ViewState, key: Key, ctx: DispatchContext | None = None) -> Transition:
    ctx = ctx or DispatchContext()

    if key.is_ctrl("q"):
        return Transition(view, (Quit(),))
    if key.is_alt("t") and not isinstance(view, TaskWizard):
        return Transition(TaskWizard())

    if isinstance(view, Editor):
        return _editor(view, key, ctx)
    if isinstance(view, Search):
        return _search(view, key)
    if isinstance(view, Actions):
        return _actions(view, key, ctx)
    if isinstance(view, InputPopup):
        return _input_popup(view, key, ctx)
    if isinstance(view, TaskWizard):
        return _wizard(view, key)
    return Transition(view)


def displayed_buffer(view: ViewState) -> BufferId | None:
    """Buffer shown in the content pane, or None when the action list is shown."""
    if isinstance(view, Editor):
        return view.buffer
    if isinstance(view, Search):
        return view.return_to
    if isinstance(view, TaskWizard):
        return BufferId.TODO
    return None
