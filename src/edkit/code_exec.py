"""Run source blocks through an interpreter, with a per-call ``:cmd`` override.

The interpreter command comes from the caller (normally the
``interpreterCommand`` setting). A block may name its own interpreter in
its header arguments, e.g. ``:cmd python3.11``; that value is used for
that one call and nothing else is touched.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from edkit.errors import CommandSyntaxError, ToolNotFoundError
from edkit.settings import DEFAULT_INTERPRETER_COMMAND, SettingsManager

logger = logging.getLogger(__name__)

CMD_KEYS = (":cmd", "cmd")


@dataclass
class ExecutionResult:
    command: str
    stdout: str
    stderr: str
    exit_code: int
    result: str


def _split(text: str) -> list[str]:
    try:
        return shlex.split(text)
    except ValueError as e:
        raise CommandSyntaxError(text, str(e)) from e


def parse_header_args(header: str) -> dict[str, str]:
    """Parse ``:key value ...`` header arguments into a dict.

    Values may span several words; they run until the next ``:key``.
    """
    params: dict[str, str] = {}
    key: str | None = None
    words: list[str] = []
    for token in _split(header):
        if token.startswith(":") and len(token) > 1:
            if key is not None:
                params[key] = " ".join(words)
            key = token
            words = []
        elif key is not None:
            words.append(token)
    if key is not None:
        params[key] = " ".join(words)
    return params


def resolve_command(params: Mapping[str, Any] | None, interpreter_command: str) -> str:
    """The interpreter for one call: the block's ``:cmd`` if set, else the default."""
    if params:
        for key in CMD_KEYS:
            value = params.get(key)
            if value:
                return str(value)
    return interpreter_command


def execute_block(
    body: str,
    params: Mapping[str, Any] | None = None,
    *,
    interpreter_command: str = DEFAULT_INTERPRETER_COMMAND,
) -> ExecutionResult:
    """Pipe ``body`` to the interpreter and collect what it prints.

    ``:results value`` returns the last non-empty line of output instead of
    the whole output.
    """
    command = resolve_command(params, interpreter_command)
    logger.debug("Executing block with %s", command)
    argv = _split(command)
    try:
        proc = subprocess.run(
            argv,
            input=body,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except FileNotFoundError as e:
        raise ToolNotFoundError(argv[0] if argv else command) from e
    if proc.returncode != 0:
        logger.debug("%s exited with %d", command, proc.returncode)

    result = proc.stdout
    if params and params.get(":results") == "value":
        lines = [line for line in proc.stdout.splitlines() if line.strip()]
        result = lines[-1].strip() if lines else ""

    return ExecutionResult(
        command=command,
        stdout=proc.stdout,
        stderr=proc.stderr,
        exit_code=proc.returncode,
        result=result,
    )


def execute_with_settings(
    body: str,
    params: Mapping[str, Any] | None,
    settings: SettingsManager,
) -> ExecutionResult:
    return execute_block(
        body, params, interpreter_command=settings.get_interpreter_command()
    )
