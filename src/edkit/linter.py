"""Checker definitions: run an external binary over stdin and parse its output."""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Literal

from edkit.buffer import Buffer
from edkit.errors import CheckerNotApplicableError, ToolNotFoundError
from edkit.settings import SettingsManager

logger = logging.getLogger(__name__)

Level = Literal["info", "warning", "error"]

_SEVERITY: dict[str, int] = {"info": 0, "warning": 1, "error": 2}

Stream = Literal["stdout", "stderr"]

# line:column:(whitespace)*message
LINE_COLUMN_MESSAGE = re.compile(r"^(?P<line>[1-9]\d*):(?P<column>[1-9]\d*):\s*(?P<message>.*)$")

# pymarkdown scan-stdin: "stdin:3:1: MD022: Headings should be surrounded by blank lines."
PYMARKDOWN_MESSAGE = re.compile(
    r"^stdin:(?P<line>[1-9]\d*):(?P<column>[1-9]\d*):\s*(?P<message>.*)$"
)

# markdownlint --stdin: "stdin:3:81 MD013/line-length Line length [...]", column optional
MARKDOWNLINT_MESSAGE = re.compile(
    r"^stdin:(?P<line>[1-9]\d*)(?::(?P<column>[1-9]\d*))?\s+(?P<message>.*)$"
)


@dataclass(frozen=True)
class LintError:
    line: int
    column: int | None
    message: str
    level: Level = "error"
    checker: str = ""


@dataclass(frozen=True)
class CheckerDefinition:
    """How to invoke a checker binary and read its output.

    ``next_checkers`` holds ``(threshold, name)`` pairs: ``name`` runs after
    this checker when none of its results is more severe than ``threshold``.
    ``stream`` names the output the pattern is matched against.
    """

    name: str
    command: tuple[str, ...]
    modes: frozenset[str]
    error_pattern: re.Pattern[str] = LINE_COLUMN_MESSAGE
    level: Level = "error"
    next_checkers: tuple[tuple[Level, str], ...] = ()
    standard_input: bool = True
    stream: Stream = "stdout"

    def applies_to(self, mode: str) -> bool:
        return mode in self.modes


MARKDOWN_MODES = frozenset({"markdown", "gfm"})

PYMARKDOWN_CHECKER = CheckerDefinition(
    name="pymarkdown",
    command=("pymarkdown", "scan-stdin"),
    modes=MARKDOWN_MODES,
    error_pattern=PYMARKDOWN_MESSAGE,
    next_checkers=(("warning", "markdownlint"),),
)

MARKDOWNLINT_CHECKER = CheckerDefinition(
    name="markdownlint",
    command=("markdownlint", "--stdin"),
    modes=MARKDOWN_MODES,
    error_pattern=MARKDOWNLINT_MESSAGE,
    level="warning",
    stream="stderr",
)

DEFAULT_CHECKERS: tuple[CheckerDefinition, ...] = (
    PYMARKDOWN_CHECKER,
    MARKDOWNLINT_CHECKER,
)


def configured_checkers(
    settings: SettingsManager | None,
    checkers: Sequence[CheckerDefinition] = DEFAULT_CHECKERS,
) -> list[CheckerDefinition]:
    """Apply per-checker command overrides from the ``checkers`` setting."""
    if settings is None:
        return list(checkers)
    result: list[CheckerDefinition] = []
    for checker in checkers:
        command = settings.get_checker_command(checker.name)
        result.append(replace(checker, command=tuple(command)) if command else checker)
    return result


def parse_output(definition: CheckerDefinition, output: str) -> list[LintError]:
    """Turn checker output into records; lines that do not match are skipped."""
    errors: list[LintError] = []
    for raw_line in output.splitlines():
        m = definition.error_pattern.match(raw_line)
        if not m:
            continue
        column = m.groupdict().get("column")
        errors.append(
            LintError(
                line=int(m.group("line")),
                column=int(column) if column else None,
                message=m.group("message"),
                level=definition.level,
                checker=definition.name,
            )
        )
    return errors


def run_checker(definition: CheckerDefinition, text: str, *, mode: str) -> list[LintError]:
    """Run one checker over ``text`` and parse what it prints."""
    if not definition.applies_to(mode):
        raise CheckerNotApplicableError(definition.name, mode)
    logger.debug("Running checker %s: %s", definition.name, " ".join(definition.command))
    try:
        proc = subprocess.run(
            list(definition.command),
            input=text if definition.standard_input else None,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except FileNotFoundError as e:
        raise ToolNotFoundError(definition.command[0]) from e
    return parse_output(definition, proc.stderr if definition.stream == "stderr" else proc.stdout)


CheckerRunner = Callable[..., list[LintError]]


def _most_severe(errors: Sequence[LintError]) -> int:
    return max((_SEVERITY[e.level] for e in errors), default=-1)


def check_buffer(
    buffer: Buffer,
    checkers: Sequence[CheckerDefinition] = DEFAULT_CHECKERS,
    *,
    runner: CheckerRunner = run_checker,
) -> list[LintError]:
    """Check a buffer with the first applicable checker and its chain.

    Chained checkers run one after the other, never in parallel. Returns
    the results of every checker that ran, in order.
    """
    by_name = {c.name: c for c in checkers}
    current = next((c for c in checkers if c.applies_to(buffer.mode)), None)
    text = buffer.get_text()
    results: list[LintError] = []
    seen: set[str] = set()

    while current is not None and current.name not in seen:
        seen.add(current.name)
        errors = runner(current, text, mode=buffer.mode)
        results.extend(errors)

        following: CheckerDefinition | None = None
        for threshold, name in current.next_checkers:
            candidate = by_name.get(name)
            if candidate is None or not candidate.applies_to(buffer.mode):
                continue
            if _most_severe(errors) <= _SEVERITY[threshold]:
                following = candidate
                break
        current = following

    return results
