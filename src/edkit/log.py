"""Colored console logging with timestamps for the command-line front end."""

from __future__ import annotations

import logging
import sys
from datetime import datetime

# ── ANSI helpers ─────────────────────────────────────────────────────

_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_BLUE = "\033[34m"
_RED = "\033[31m"
_DIM = "\033[2m"
_RESET = "\033[0m"


def _timestamp() -> str:
    now = datetime.now()
    return f"[{now.strftime('%H:%M:%S')}]"


def _indent(text: str) -> str:
    return "\n".join(f"           {line}" for line in text.split("\n"))


# ── Public logging functions ─────────────────────────────────────────


def log_command(name: str, detail: str | None = None) -> None:
    print(f"{_GREEN}{_timestamp()} [command] {name}{_RESET}")
    if detail:
        print(f"{_DIM}{_indent(detail)}{_RESET}")


def log_message(text: str) -> None:
    """Echo a message produced by a command."""
    print(f"{_BLUE}{_timestamp()} {text}{_RESET}")


def log_info(message: str) -> None:
    print(f"{_BLUE}{_timestamp()} [system] {message}{_RESET}")


def log_warning(message: str, details: str | None = None) -> None:
    print(f"{_YELLOW}{_timestamp()} [system] ⚠ {message}{_RESET}")
    if details:
        print(f"{_DIM}{_indent(details)}{_RESET}")


def log_error(message: str) -> None:
    print(f"{_RED}{_timestamp()} ✗ {message}{_RESET}", file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Route module loggers to stderr; debug traces only when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=f"{_DIM}%(asctime)s %(name)s %(levelname)s %(message)s{_RESET}",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
