"""Line-based text buffer with a cursor, an optional mark and file context.

Commands operate on this model the way editor commands operate on an
editor buffer: lines are stored without their trailing newline, positions
are ``(line, col)`` pairs with ``col`` counted in characters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

Position = tuple[int, int]


@dataclass
class BufferState:
    """Mutable text and point of a buffer."""

    lines: list[str] = field(default_factory=lambda: [""])
    cursor_line: int = 0
    cursor_col: int = 0


class Buffer:
    """A named text buffer, optionally visiting a file or a directory."""

    def __init__(
        self,
        name: str = "*scratch*",
        text: str = "",
        *,
        file_path: str | None = None,
        default_directory: str | None = None,
        mode: str = "text",
    ) -> None:
        self.name = name
        self.file_path = file_path
        self.default_directory = default_directory
        self.mode = mode
        self._state = BufferState()
        self._mark: Position | None = None
        self.region_active: bool = False
        self._set_text_internal(text)

    # -- Factories -----------------------------------------------------------

    @classmethod
    def from_file(cls, path: str, mode: str | None = None) -> Buffer:
        """Visit ``path``: read its text and derive mode from the extension."""
        abs_path = os.path.abspath(path)
        with open(abs_path, encoding="utf-8") as f:
            text = f.read()
        return cls(
            os.path.basename(abs_path),
            text,
            file_path=abs_path,
            default_directory=os.path.dirname(abs_path),
            mode=mode or mode_for_path(abs_path),
        )

    @classmethod
    def for_directory(cls, path: str) -> Buffer:
        """A directory listing buffer (``dired`` mode) with no file."""
        abs_path = os.path.abspath(path)
        listing = "\n".join(sorted(os.listdir(abs_path)))
        return cls(
            os.path.basename(abs_path) or abs_path,
            listing,
            default_directory=abs_path,
            mode="dired",
        )

    # -- Text accessors ------------------------------------------------------

    def get_text(self) -> str:
        return "\n".join(self._state.lines)

    def get_lines(self) -> list[str]:
        return list(self._state.lines)

    @property
    def line_count(self) -> int:
        return len(self._state.lines)

    def line(self, index: int) -> str:
        return self._state.lines[index]

    @property
    def last_text_line(self) -> int:
        """Index of the last line holding text.

        A text ending in a newline splits into a trailing empty line; that
        line marks end of buffer and is not counted.
        """
        last = len(self._state.lines) - 1
        if last > 0 and self._state.lines[last] == "":
            return last - 1
        return last

    def set_text(self, text: str) -> None:
        self._set_text_internal(text)
        self.deactivate_mark()

    def _set_text_internal(self, text: str) -> None:
        normalized = text.replace("\r\n", "\n").replace("\r", "\n")
        self._state.lines = normalized.split("\n")
        self.set_cursor(self._state.cursor_line, self._state.cursor_col)

    def replace_lines(self, lines: list[str]) -> None:
        """Swap in a new line list, keeping point and mark (clamped)."""
        self._state.lines = list(lines) if lines else [""]
        self.set_cursor(self._state.cursor_line, self._state.cursor_col)

    def save(self) -> None:
        """Write the buffer back to its file, if it is visiting one."""
        if self.file_path is None:
            return
        with open(self.file_path, "w", encoding="utf-8") as f:
            f.write(self.get_text())

    # -- Point ---------------------------------------------------------------

    def get_cursor(self) -> dict[str, int]:
        return {"line": self._state.cursor_line, "col": self._state.cursor_col}

    @property
    def point(self) -> Position:
        return (self._state.cursor_line, self._state.cursor_col)

    def set_cursor(self, line: int, col: int = 0) -> None:
        line = max(0, min(line, len(self._state.lines) - 1))
        col = max(0, min(col, len(self._state.lines[line])))
        self._state.cursor_line = line
        self._state.cursor_col = col

    def move_to_column(self, col: int) -> None:
        """Move point to ``col`` on the current line, stopping at line end."""
        self.set_cursor(self._state.cursor_line, col)

    def forward_line(self, n: int = 1) -> None:
        """Move ``n`` lines and to the start of that line."""
        self.set_cursor(self._state.cursor_line + n, 0)

    def at_end(self) -> bool:
        return self.point == self.end_position()

    def end_position(self) -> Position:
        last = len(self._state.lines) - 1
        return (last, len(self._state.lines[last]))

    # -- Mark and region -----------------------------------------------------

    @property
    def mark(self) -> Position | None:
        return self._mark

    def set_mark(self, line: int, col: int = 0, *, activate: bool = True) -> None:
        line = max(0, min(line, len(self._state.lines) - 1))
        col = max(0, min(col, len(self._state.lines[line])))
        self._mark = (line, col)
        self.region_active = activate

    def deactivate_mark(self) -> None:
        self.region_active = False

    def region_bounds(self) -> tuple[Position, Position] | None:
        """Ordered (start, end) of the active region, or None."""
        if not self.region_active or self._mark is None:
            return None
        return min(self._mark, self.point), max(self._mark, self.point)

    # -- Offsets -------------------------------------------------------------

    def offset_of(self, position: Position) -> int:
        line, col = position
        return sum(len(text) + 1 for text in self._state.lines[:line]) + col

    def position_of(self, offset: int) -> Position:
        remaining = max(0, offset)
        for index, text in enumerate(self._state.lines):
            if remaining <= len(text):
                return (index, remaining)
            remaining -= len(text) + 1
        return self.end_position()

    # -- Process output ------------------------------------------------------

    def append_output(self, text: str) -> None:
        """Append raw process output at the end of the buffer."""
        if not text:
            return
        normalized = text.replace("\r\n", "\n").replace("\r", "\n")
        chunks = normalized.split("\n")
        self._state.lines[-1] += chunks[0]
        self._state.lines.extend(chunks[1:])

    def __repr__(self) -> str:
        return f"Buffer(name={self.name!r}, mode={self.mode!r}, file_path={self.file_path!r})"


_MODES_BY_EXTENSION = {
    ".md": "markdown",
    ".markdown": "markdown",
    ".py": "python",
    ".dart": "dart",
    ".org": "org",
    ".txt": "text",
}


def mode_for_path(path: str) -> str:
    """Major mode name for a file, based on its extension."""
    _, ext = os.path.splitext(path)
    return _MODES_BY_EXTENSION.get(ext.lower(), "text")
