# src/admin_console/editor/buffer.py

"""
Editable multi-line text buffer.

Holds everything the editor panes need that is not rendering:
- lines + cursor (row, col),
- an optional selection anchor (selection = anchor .. cursor),
- a yank register used by copy/cut/paste,
- bounded undo/redo history (whole-buffer snapshots),
- an incremental regex search pattern.

Rendering only reads from it (lines, cursor, selection_range, matches_in_line).
"""

from __future__ import annotations

import re
from collections import deque
from enum import StrEnum

Position = tuple[int, int]


class Move(StrEnum):
    UP = "up"
    DOWN = "down"
    BACK = "back"
    FORWARD = "forward"
    WORD_BACK = "word_back"
    WORD_FORWARD = "word_forward"
    HEAD = "head"
    END = "end"
    TOP = "top"
    BOTTOM = "bottom"


def _split(text: str) -> list[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


class TextBuffer:
    def __init__(self, text: str = "", *, max_histories: int = 10_000) -> None:
        self._lines: list[str] = _split(text)
        self.row = 0
        self.col = 0
        self._anchor: Position | None = None
        self.yank = ""
        self._undo: deque[tuple[list[str], Position]] = deque(maxlen=max_histories)
        self._redo: list[tuple[list[str], Position]] = []
        self._pattern: re.Pattern[str] | None = None

    # ---- read access ----

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def cursor(self) -> Position:
        return self.row, self.col

    @property
    def is_selecting(self) -> bool:
        return self._anchor is not None

    def selection_range(self) -> tuple[Position, Position] | None:
        if self._anchor is None or self._anchor == self.cursor:
            return None
        return min(self._anchor, self.cursor), max(self._anchor, self.cursor)

    def selected_text(self) -> str:
        rng = self.selection_range()
        if rng is None:
            return ""
        (r1, c1), (r2, c2) = rng
        if r1 == r2:
            return self._lines[r1][c1:c2]
        parts = [self._lines[r1][c1:]]
        parts.extend(self._lines[r1 + 1 : r2])
        parts.append(self._lines[r2][:c2])
        return "\n".join(parts)

    # ---- history ----

    def _checkpoint(self) -> None:
        self._undo.append((list(self._lines), self.cursor))
        self._redo.clear()

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append((list(self._lines), self.cursor))
        lines, (self.row, self.col) = self._undo.pop()
        self._lines = lines
        self._anchor = None
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append((list(self._lines), self.cursor))
        lines, (self.row, self.col) = self._redo.pop()
        self._lines = lines
        self._anchor = None
        return True

    # ---- selection ----

    def start_selection(self) -> None:
        self._anchor = self.cursor

    def cancel_selection(self) -> None:
        self._anchor = None

    def select_all(self) -> None:
        self.move_cursor(Move.TOP)
        self.move_cursor(Move.HEAD)
        self.start_selection()
        self.move_cursor(Move.BOTTOM)
        self.move_cursor(Move.END)

    def _delete_range(self, start: Position, end: Position) -> None:
        (r1, c1), (r2, c2) = start, end
        head = self._lines[r1][:c1]
        tail = self._lines[r2][c2:]
        self._lines[r1 : r2 + 1] = [head + tail]
        self.row, self.col = r1, c1

    def _delete_selection(self) -> bool:
        rng = self.selection_range()
        self._anchor = None
        if rng is None:
            return False
        self._delete_range(*rng)
        return True

    # ---- editing ----

    def _insert_raw(self, text: str) -> None:
        line = self._lines[self.row]
        head, tail = line[: self.col], line[self.col :]
        parts = _split(text)
        if len(parts) == 1:
            self._lines[self.row] = head + text + tail
            self.col += len(text)
            return
        new_lines = [head + parts[0], *parts[1:-1], parts[-1] + tail]
        self._lines[self.row : self.row + 1] = new_lines
        self.row += len(parts) - 1
        self.col = len(parts[-1])

    def insert_str(self, text: str) -> bool:
        if not text and self.selection_range() is None:
            return False
        self._checkpoint()
        self._delete_selection()
        self._insert_raw(text)
        return True

    def insert_newline(self) -> bool:
        return self.insert_str("\n")

    def delete_char(self) -> bool:
        """Backspace."""
        if self.selection_range() is not None:
            self._checkpoint()
            return self._delete_selection()
        self._anchor = None
        if self.col == 0 and self.row == 0:
            return False
        self._checkpoint()
        if self.col > 0:
            self._delete_range((self.row, self.col - 1), self.cursor)
        else:
            prev = len(self._lines[self.row - 1])
            self._delete_range((self.row - 1, prev), self.cursor)
        return True

    def delete_next_char(self) -> bool:
        if self.selection_range() is not None:
            self._checkpoint()
            return self._delete_selection()
        self._anchor = None
        line = self._lines[self.row]
        if self.col >= len(line) and self.row >= len(self._lines) - 1:
            return False
        self._checkpoint()
        if self.col < len(line):
            self._delete_range(self.cursor, (self.row, self.col + 1))
        else:
            self._delete_range(self.cursor, (self.row + 1, 0))
        return True

    def delete_word(self) -> bool:
        """Delete from the start of the previous word up to the cursor."""
        self._anchor = None
        start = self._word_back_position()
        if start == self.cursor:
            return False
        self._checkpoint()
        self._delete_range(start, self.cursor)
        return True

    def copy(self) -> str:
        text = self.selected_text()
        if text:
            self.yank = text
        self._anchor = None
        return text

    def cut(self) -> str:
        text = self.selected_text()
        if not text:
            self._anchor = None
            return ""
        self.yank = text
        self._checkpoint()
        self._delete_selection()
        return text

    def replace_line(self, row: int, text: str) -> bool:
        if not 0 <= row < len(self._lines) or self._lines[row] == text:
            return False
        self._checkpoint()
        self._lines[row] = text
        if self.row == row:
            self.col = min(self.col, len(text))
        return True

    def append(self, text: str, *, move_cursor: bool = True) -> None:
        """Append text after the last line (not at the cursor)."""
        self._checkpoint()
        saved = self.cursor
        self.row = len(self._lines) - 1
        self.col = len(self._lines[self.row])
        self._insert_raw(text)
        if not move_cursor:
            self.row, self.col = saved

    # ---- cursor movement ----

    def _word_forward_position(self) -> Position:
        row, col = self.cursor
        line = self._lines[row]
        if col >= len(line):
            if row >= len(self._lines) - 1:
                return row, col
            row, col = row + 1, 0
            line = self._lines[row]
            while col < len(line) and line[col].isspace():
                col += 1
            return row, col
        while col < len(line) and not line[col].isspace():
            col += 1
        while col < len(line) and line[col].isspace():
            col += 1
        return row, col

    def _word_back_position(self) -> Position:
        row, col = self.cursor
        if col == 0:
            if row == 0:
                return 0, 0
            return row - 1, len(self._lines[row - 1])
        line = self._lines[row]
        while col > 0 and line[col - 1].isspace():
            col -= 1
        while col > 0 and not line[col - 1].isspace():
            col -= 1
        return row, col

    def move_cursor(self, move: Move) -> None:
        last = len(self._lines) - 1
        if move is Move.UP:
            if self.row > 0:
                self.row -= 1
        elif move is Move.DOWN:
            if self.row < last:
                self.row += 1
        elif move is Move.BACK:
            if self.col > 0:
                self.col -= 1
            elif self.row > 0:
                self.row -= 1
                self.col = len(self._lines[self.row])
        elif move is Move.FORWARD:
            if self.col < len(self._lines[self.row]):
                self.col += 1
            elif self.row < last:
                self.row, self.col = self.row + 1, 0
        elif move is Move.WORD_FORWARD:
            self.row, self.col = self._word_forward_position()
        elif move is Move.WORD_BACK:
            self.row, self.col = self._word_back_position()
        elif move is Move.HEAD:
            self.col = 0
        elif move is Move.END:
            self.col = len(self._lines[self.row])
        elif move is Move.TOP:
            self.row = 0
        elif move is Move.BOTTOM:
            self.row = last
        self.col = min(self.col, len(self._lines[self.row]))

    # ---- search ----

    @property
    def search_pattern(self) -> str:
        return self._pattern.pattern if self._pattern is not None else ""

    def set_search_pattern(self, pattern: str) -> bool:
        """Empty clears the pattern. An invalid regex clears it too and returns False."""
        if not pattern:
            self._pattern = None
            return True
        try:
            self._pattern = re.compile(pattern)
        except re.error:
            self._pattern = None
            return False
        return True

    def matches_in_line(self, row: int) -> list[tuple[int, int]]:
        if self._pattern is None:
            return []
        return [m.span() for m in self._pattern.finditer(self._lines[row]) if m.end() > m.start()]

    def search_forward(self, match_cursor: bool = False) -> bool:
        """Move to the next match after the cursor (at the cursor if match_cursor), wrapping."""
        if self._pattern is None:
            return False
        n = len(self._lines)
        for step in range(n + 1):
            row = (self.row + step) % n
            for start, _end in self.matches_in_line(row):
                if step == 0 and (start < self.col or (start == self.col and not match_cursor)):
                    continue
                if step == n and start >= self.col:
                    break
                self.row, self.col = row, start
                return True
        return False

    def search_back(self) -> bool:
        """Move to the previous match before the cursor, wrapping."""
        if self._pattern is None:
            return False
        n = len(self._lines)
        for step in range(n + 1):
            row = (self.row - step) % n
            for start, _end in reversed(self.matches_in_line(row)):
                if step == 0 and start >= self.col:
                    continue
                if step == n and start <= self.col:
                    break
                self.row, self.col = row, start
                return True
        return False
