"""Drive ``flutter run`` as a long-lived process, one per project root.

The process runs inside a pseudo-terminal so it accepts single keystrokes
(``r`` for hot reload, ``q`` to quit, ...) without a trailing newline.
Liveness is never cached: every action polls the process first and starts
a new one when the previous run has exited.
"""

from __future__ import annotations

import errno
import logging
import os
import pty
import select
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from edkit.buffer import Buffer
from edkit.errors import ProjectRootNotFoundError
from edkit.host import EditorHost
from edkit.settings import SettingsManager

if TYPE_CHECKING:
    from edkit.commands import CommandContext, CommandRegistry

logger = logging.getLogger(__name__)

PROJECT_MARKER = "pubspec.yaml"
BUFFER_MODE = "flutter"
HOT_RELOAD_KEY = "r"


@dataclass(frozen=True)
class FlutterAction:
    key: str
    name: str
    description: str


FLUTTER_ACTIONS: tuple[FlutterAction, ...] = (
    FlutterAction("r", "hot-reload", "Hot reload"),
    FlutterAction("R", "hot-restart", "Hot restart"),
    FlutterAction("h", "help", "Show the interactive help"),
    FlutterAction("w", "widget-hierarchy", "Dump the widget hierarchy"),
    FlutterAction("t", "rendering-tree", "Dump the rendering tree"),
    FlutterAction("L", "layers", "Dump the layer tree"),
    FlutterAction("S", "accessibility-traversal-order", "Dump accessibility tree in traversal order"),
    FlutterAction("U", "accessibility-inverse-hit-test-order", "Dump accessibility tree in inverse hit test order"),
    FlutterAction("i", "inspector", "Toggle the widget inspector"),
    FlutterAction("p", "construction-lines", "Toggle construction lines"),
    FlutterAction("o", "operating-system", "Simulate a different operating system"),
    FlutterAction("P", "performance-overlay", "Toggle the performance overlay"),
    FlutterAction("q", "quit", "Quit the running application"),
)


def locate_project_root(start: str, marker: str = PROJECT_MARKER) -> str:
    """Nearest directory at or above ``start`` that contains ``marker``."""
    path = Path(start).resolve()
    if path.is_file():
        path = path.parent
    for candidate in (path, *path.parents):
        if (candidate / marker).exists():
            return str(candidate)
    raise ProjectRootNotFoundError(str(path), marker)


def flutter_command(settings: SettingsManager | None = None) -> list[str]:
    """``<flutterSdkPath>flutter run`` plus any configured arguments."""
    if settings is None:
        return ["flutter", "run"]
    sdk_path = settings.get_flutter_sdk_path()
    return [f"{sdk_path}flutter", "run", *settings.get_flutter_run_args()]


def buffer_name_for(root: str) -> str:
    return f"*Flutter: {os.path.basename(root.rstrip(os.sep)) or root}*"


# ---------------------------------------------------------------------------
# Processes
# ---------------------------------------------------------------------------


class FlutterProcess(Protocol):
    def is_alive(self) -> bool: ...

    def write(self, data: str) -> None: ...

    def read_available(self) -> str: ...

    def close(self) -> None: ...


Spawner = Callable[[list[str], str], FlutterProcess]


class PtyProcess:
    """A child process whose stdio is the slave side of a pseudo-terminal."""

    def __init__(self, argv: list[str], cwd: str) -> None:
        master_fd, slave_fd = pty.openpty()
        try:
            self._proc = subprocess.Popen(
                argv,
                cwd=cwd,
                stdin=slave_fd,
                stdout=slave_fd,
                stderr=slave_fd,
                start_new_session=True,
                close_fds=True,
                env={**os.environ, "TERM": "dumb"},
            )
        except Exception:
            os.close(master_fd)
            raise
        finally:
            os.close(slave_fd)
        self._master_fd: int | None = master_fd

    def is_alive(self) -> bool:
        return self._proc.poll() is None

    def write(self, data: str) -> None:
        if self._master_fd is None:
            raise BrokenPipeError("flutter process output is closed")
        os.write(self._master_fd, data.encode("utf-8"))

    def read_available(self) -> str:
        """Everything the process has printed so far, without blocking."""
        if self._master_fd is None:
            return ""
        chunks: list[bytes] = []
        while True:
            ready, _, _ = select.select([self._master_fd], [], [], 0)
            if not ready:
                break
            try:
                chunk = os.read(self._master_fd, 65536)
            except OSError as e:
                # EIO: the child closed its side of the terminal
                if e.errno != errno.EIO:
                    raise
                break
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks).decode("utf-8", errors="replace")

    def close(self) -> None:
        if self._master_fd is not None:
            os.close(self._master_fd)
            self._master_fd = None


def spawn_in_pty(argv: list[str], cwd: str) -> FlutterProcess:
    return PtyProcess(argv, cwd)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


@dataclass
class FlutterSession:
    root: str
    process: FlutterProcess
    buffer: Buffer

    def is_alive(self) -> bool:
        return self.process.is_alive()


class FlutterManager:
    """Keeps at most one live ``flutter run`` per project root."""

    def __init__(
        self,
        host: EditorHost,
        settings: SettingsManager | None = None,
        *,
        spawner: Spawner = spawn_in_pty,
    ) -> None:
        self._host = host
        self._settings = settings
        self._spawner = spawner
        self._sessions: dict[str, FlutterSession] = {}

    def build_command(self) -> list[str]:
        return flutter_command(self._settings)

    def live_session(self, start: str) -> FlutterSession | None:
        root = locate_project_root(start)
        session = self._sessions.get(root)
        if session is not None and session.is_alive():
            return session
        return None

    def ensure_running(self, start: str) -> FlutterSession:
        """Return the live session for ``start``'s project, starting one if needed."""
        root = locate_project_root(start)
        session = self._sessions.get(root)
        if session is not None and session.is_alive():
            return session
        if session is not None:
            logger.debug("flutter run for %s has exited; starting a new one", root)
            session.process.close()

        buffer = self._host.get_buffer(buffer_name_for(root), create=True, mode=BUFFER_MODE)
        assert buffer is not None
        buffer.mode = BUFFER_MODE
        buffer.default_directory = root

        argv = self.build_command()
        logger.debug("Starting %s in %s", " ".join(argv), root)
        process = self._spawner(argv, root)
        session = FlutterSession(root=root, process=process, buffer=buffer)
        self._sessions[root] = session
        return session

    def send_key(self, key: str, start: str) -> FlutterSession:
        """Write ``key`` verbatim (no newline) to the project's flutter process."""
        session = self.ensure_running(start)
        session.process.write(key)
        return session

    def run_or_hot_reload(self, start: str) -> FlutterSession:
        """Hot reload a live run, or start a new run and show its buffer."""
        session = self.live_session(start)
        if session is not None:
            session.process.write(HOT_RELOAD_KEY)
            return session
        session = self.ensure_running(start)
        self._host.show_buffer(session.buffer)
        return session

    def read_output(self, start: str) -> str:
        """Move pending process output into the session buffer."""
        root = locate_project_root(start)
        session = self._sessions.get(root)
        if session is None:
            return ""
        output = session.process.read_available()
        session.buffer.append_output(output)
        return output


def run_attached(start: str, settings: SettingsManager | None = None) -> int:
    """Run flutter in the foreground with the caller's terminal. Returns exit code."""
    root = locate_project_root(start)
    argv = flutter_command(settings)
    logger.debug("Running %s in %s", " ".join(argv), root)
    proc = subprocess.Popen(argv, cwd=root)
    return proc.wait() or 0


# ---------------------------------------------------------------------------
# Command registration
# ---------------------------------------------------------------------------


def _start_directory(ctx: CommandContext) -> str:
    return ctx.buffer.default_directory or os.getcwd()


def _make_key_sender(manager: FlutterManager, key: str) -> Callable[..., FlutterSession]:
    def send(ctx: CommandContext, **_: object) -> FlutterSession:
        return manager.send_key(key, _start_directory(ctx))

    return send


def register_flutter_commands(registry: CommandRegistry, manager: FlutterManager) -> None:
    """One ``flutter-<action>`` command per key table entry, plus run-or-reload."""
    for action in FLUTTER_ACTIONS:
        registry.register(
            f"flutter-{action.name}",
            _make_key_sender(manager, action.key),
            f"{action.description} (sends '{action.key}')",
        )

    def run_or_reload(ctx: CommandContext, **_: object) -> FlutterSession:
        return manager.run_or_hot_reload(_start_directory(ctx))

    registry.register(
        "flutter-run-or-hot-reload",
        run_or_reload,
        "Start flutter run, or hot reload when it is already running",
    )
