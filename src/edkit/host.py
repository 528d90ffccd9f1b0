"""The editor surface commands talk to: messages, windows and buffers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from edkit.buffer import Buffer

logger = logging.getLogger(__name__)


@dataclass
class Window:
    """A top-level window. ``None`` colors mean "unspecified"."""

    name: str
    foreground: str | None = None
    background: str | None = None


WindowHook = Callable[[Window], None]


class EditorHost(Protocol):
    @property
    def display_available(self) -> bool: ...

    @property
    def window_system(self) -> str | None: ...

    def message(self, text: str) -> None: ...

    def windows(self) -> list[Window]: ...

    def add_window_hook(self, hook: WindowHook) -> None: ...

    def get_buffer(self, name: str, *, create: bool = False, mode: str = "text") -> Buffer | None: ...

    def show_buffer(self, buffer: Buffer) -> None: ...


class Workspace:
    """In-memory host: records messages and owns windows and buffers.

    ``window_system`` follows the editor convention: ``"ns"`` for macOS,
    ``"x"`` for X11, ``None`` for a terminal without a graphical display.
    """

    def __init__(
        self,
        *,
        window_system: str | None = None,
        echo: Callable[[str], None] | None = None,
    ) -> None:
        self._window_system = window_system
        self._echo = echo
        self._windows: list[Window] = []
        self._window_hooks: list[WindowHook] = []
        self._buffers: dict[str, Buffer] = {}
        self.messages: list[str] = []
        self.visible_buffer: Buffer | None = None
        if window_system is not None:
            self._windows.append(Window(name="main"))

    @property
    def display_available(self) -> bool:
        return self._window_system is not None

    @property
    def window_system(self) -> str | None:
        return self._window_system

    def message(self, text: str) -> None:
        self.messages.append(text)
        if self._echo is not None:
            self._echo(text)

    def windows(self) -> list[Window]:
        return list(self._windows)

    def create_window(self, name: str | None = None) -> Window:
        """Open a new window and run the window-created hooks on it."""
        window = Window(name=name or f"window-{len(self._windows) + 1}")
        self._windows.append(window)
        for hook in self._window_hooks:
            hook(window)
        return window

    def add_window_hook(self, hook: WindowHook) -> None:
        if hook not in self._window_hooks:
            self._window_hooks.append(hook)

    def add_buffer(self, buffer: Buffer) -> Buffer:
        self._buffers[buffer.name] = buffer
        return buffer

    def get_buffer(self, name: str, *, create: bool = False, mode: str = "text") -> Buffer | None:
        buffer = self._buffers.get(name)
        if buffer is None and create:
            buffer = self.add_buffer(Buffer(name, mode=mode))
        return buffer

    def show_buffer(self, buffer: Buffer) -> None:
        logger.debug("Showing buffer %s", buffer.name)
        self.visible_buffer = buffer
