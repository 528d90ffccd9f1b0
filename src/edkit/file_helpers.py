"""Clipboard and macOS Finder/Terminal helpers for the visited file."""

from __future__ import annotations

import logging
import os

import pyperclip

from edkit.buffer import Buffer
from edkit.errors import NoFileError
from edkit.host import EditorHost
from edkit.shell import ShellResult, quote_path, run_shell

logger = logging.getLogger(__name__)


def buffer_path(buffer: Buffer) -> str | None:
    """The file a buffer visits, or the directory of a ``dired`` buffer."""
    if buffer.file_path:
        return buffer.file_path
    if buffer.mode == "dired" and buffer.default_directory:
        return buffer.default_directory
    return None


def _require_file(buffer: Buffer) -> str:
    if not buffer.file_path:
        raise NoFileError(buffer.name)
    return buffer.file_path


def _working_directory(buffer: Buffer) -> str:
    return buffer.default_directory or os.getcwd()


def copy_file_path(buffer: Buffer, host: EditorHost) -> str | None:
    """Put the buffer's path on the system clipboard.

    Buffers without a path are left alone without complaint.
    """
    path = buffer_path(buffer)
    if path is None:
        return None
    pyperclip.copy(path)
    host.message(f"Copied '{path}' to the clipboard.")
    return path


def open_file(buffer: Buffer) -> ShellResult:
    """Open the visited file in its default application."""
    path = _require_file(buffer)
    return run_shell(f"open {quote_path(path)}", cwd=_working_directory(buffer))


def reveal_in_finder(buffer: Buffer) -> ShellResult:
    path = _require_file(buffer)
    return run_shell(f"open -R {quote_path(path)}", cwd=_working_directory(buffer))


def open_terminal(buffer: Buffer) -> ShellResult:
    """Open Terminal.app at the buffer's working directory."""
    directory = _working_directory(buffer)
    return run_shell(f"open -a Terminal {quote_path(directory)}", cwd=directory)


def touch_file(buffer: Buffer, host: EditorHost) -> str | None:
    """Update the visited file's mtime and report the new time.

    Returns the printed modification time, or None when there is no file.
    """
    path = buffer_path(buffer)
    if path is None:
        return None
    cwd = _working_directory(buffer)
    run_shell(f"touch {quote_path(path)}", cwd=cwd)
    result = run_shell(f"date -r {quote_path(path)}", cwd=cwd)
    mtime = result.stdout.strip()
    host.message(f"{path}: {mtime}")
    return mtime
