"""The stock command table."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from edkit import file_helpers, line_mover
from edkit.appearance import AppearanceMode, AppearanceSettings
from edkit.code_exec import ExecutionResult, execute_with_settings
from edkit.commands import CommandContext, CommandRegistry
from edkit.flutter import FlutterManager, register_flutter_commands
from edkit.linter import LintError, check_buffer, configured_checkers
from edkit.splitter import split_characters


def _split(ctx: CommandContext, delimiter: str | None = None) -> None:
    split_characters(
        ctx.buffer,
        ctx.settings.get_split_delimiter() if delimiter is None else delimiter,
    )


def _execute(
    ctx: CommandContext,
    body: str | None = None,
    params: Mapping[str, Any] | None = None,
) -> ExecutionResult:
    source = ctx.buffer.get_text() if body is None else body
    return execute_with_settings(source, params, ctx.settings)


def _lint(ctx: CommandContext) -> list[LintError]:
    return check_buffer(ctx.buffer, configured_checkers(ctx.settings))


def register_default_commands(
    registry: CommandRegistry,
    *,
    appearance: AppearanceSettings | None = None,
    flutter: FlutterManager | None = None,
) -> CommandRegistry:
    """Register every built-in command; appearance and flutter ones need their owners."""
    # Line mover
    registry.register("move-text-up", lambda ctx: line_mover.move_text_up(ctx.buffer),
                      "Move the line, or the region's lines, up one line")
    registry.register("move-text-down", lambda ctx: line_mover.move_text_down(ctx.buffer),
                      "Move the line, or the region's lines, down one line")
    registry.register("move-line-up", lambda ctx: line_mover.move_line_up(ctx.buffer),
                      "Swap the current line with the one above")
    registry.register("move-line-down", lambda ctx: line_mover.move_line_down(ctx.buffer),
                      "Swap the current line with the one below")
    registry.register("move-lines-up", lambda ctx: line_mover.move_lines_up(ctx.buffer),
                      "Move the region's lines up one line")
    registry.register("move-lines-down", lambda ctx: line_mover.move_lines_down(ctx.buffer),
                      "Move the region's lines down one line")

    # File helpers
    registry.register("copy-file-path",
                      lambda ctx: file_helpers.copy_file_path(ctx.buffer, ctx.host),
                      "Copy the visited file's path to the clipboard")
    registry.register("open-file", lambda ctx: file_helpers.open_file(ctx.buffer),
                      "Open the visited file in its default application")
    registry.register("reveal-in-finder", lambda ctx: file_helpers.reveal_in_finder(ctx.buffer),
                      "Reveal the visited file in Finder")
    registry.register("open-terminal", lambda ctx: file_helpers.open_terminal(ctx.buffer),
                      "Open Terminal at the buffer's directory")
    registry.register("touch-file", lambda ctx: file_helpers.touch_file(ctx.buffer, ctx.host),
                      "Touch the visited file and show its modification time")

    # Editing
    registry.register("split-characters", _split,
                      "Insert a delimiter after every character from point")
    registry.register("execute-block", _execute,
                      "Run the buffer (or a body) through the interpreter")
    registry.register("lint-buffer", _lint, "Run the buffer's checkers")

    if appearance is not None:
        def toggle(ctx: CommandContext) -> AppearanceMode:
            return appearance.toggle()

        def set_mode(ctx: CommandContext, mode: AppearanceMode = None) -> AppearanceMode:
            appearance.set(mode)
            return appearance.mode

        registry.register("toggle-appearance", toggle, "Cycle light, dark and auto appearance")
        registry.register("set-appearance", set_mode, "Set the appearance mode")

    if flutter is not None:
        register_flutter_commands(registry, flutter)

    return registry
