"""User-facing error types raised by edkit commands."""

from __future__ import annotations


class EdkitError(Exception):
    """Base class for errors shown to the user as a plain message."""


class NoFileError(EdkitError):
    """The command needs a file but the buffer is not visiting one."""

    def __init__(self, buffer_name: str) -> None:
        super().__init__(f"Buffer '{buffer_name}' is not visiting a file")
        self.buffer_name = buffer_name


class ProjectRootNotFoundError(EdkitError):
    def __init__(self, start: str, marker: str) -> None:
        super().__init__(f"Project root not found: no {marker} above {start}")
        self.start = start
        self.marker = marker


class UnknownCommandError(EdkitError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name}")
        self.name = name


class InvalidAppearanceError(EdkitError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid appearance {value!r}; expected 'light', 'dark' or None")
        self.value = value


class CheckerNotApplicableError(EdkitError):
    def __init__(self, checker: str, mode: str) -> None:
        super().__init__(f"Checker '{checker}' does not apply to mode '{mode}'")
        self.checker = checker
        self.mode = mode


class CommandSyntaxError(EdkitError):
    """A command line or header argument string could not be split."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"Cannot parse {text!r}: {reason}")
        self.text = text
        self.reason = reason


class ToolNotFoundError(EdkitError):
    def __init__(self, command: str) -> None:
        super().__init__(f"Command not found: {command}")
        self.command = command
