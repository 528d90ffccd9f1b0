"""Blocking shell command execution for the file helpers."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class ShellResult:
    command: str
    stdout: str
    stderr: str
    exit_code: int


def quote_path(path: str) -> str:
    """Quote a path for interpolation into a shell command."""
    return shlex.quote(path)


def run_shell(command: str, *, cwd: str | None = None) -> ShellResult:
    """Run ``command`` through the shell and wait for it to finish.

    A non-zero exit status is not an error here: it is logged and
    returned to the caller untouched.
    """
    logger.debug("Running %s (cwd=%s)", command, cwd)
    proc = subprocess.run(
        command,
        shell=True,
        cwd=cwd,
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
        errors="replace",
    )
    if proc.returncode != 0:
        logger.debug("%s exited with %d: %s", command, proc.returncode, proc.stderr.strip())
    return ShellResult(
        command=command,
        stdout=proc.stdout,
        stderr=proc.stderr,
        exit_code=proc.returncode,
    )
