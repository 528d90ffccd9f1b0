"""CLI entry point for edkit. Uses Click for argument parsing."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

import click

from edkit.appearance import AppearanceSettings, parse_mode
from edkit.buffer import Buffer
from edkit.builtin_commands import register_default_commands
from edkit.commands import CommandContext, CommandRegistry
from edkit.errors import EdkitError
from edkit.flutter import FLUTTER_ACTIONS, FlutterManager, locate_project_root, run_attached
from edkit.host import Workspace
from edkit.keybindings import KeybindingsManager
from edkit.log import (
    configure_logging,
    log_command,
    log_error,
    log_info,
    log_message,
    log_warning,
)
from edkit.settings import SettingsManager


@dataclass
class _App:
    settings: SettingsManager
    host: Workspace
    registry: CommandRegistry
    appearance: AppearanceSettings

    def run(self, name: str, buffer: Buffer, **kwargs):
        log_command(name, buffer.file_path or buffer.default_directory)
        try:
            return self.registry.run(
                name, CommandContext(self.host, buffer, self.settings), **kwargs
            )
        except EdkitError as e:
            log_error(str(e))
            sys.exit(1)


def _visit(path: str) -> Buffer:
    if os.path.isdir(path):
        return Buffer.for_directory(path)
    return Buffer.from_file(path)


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.option("--interpreter", default=None, help="Interpreter command for this run")
@click.option("--flutter-sdk", default=None, help="Flutter SDK bin directory for this run")
@click.pass_context
def main(ctx, verbose, interpreter, flutter_sdk):
    """Personal editor commands: line moving, file helpers, appearance, flutter."""
    configure_logging(verbose)
    settings = SettingsManager.create(os.getcwd())
    if settings.load_error is not None:
        log_warning("Settings file could not be read; changes will not be saved", str(settings.load_error))
    settings.apply_overrides({"interpreterCommand": interpreter, "flutterSdkPath": flutter_sdk})
    host = Workspace(echo=log_message)
    appearance = AppearanceSettings(host, settings)
    registry = register_default_commands(
        CommandRegistry(),
        appearance=appearance,
        flutter=FlutterManager(host, settings),
    )
    ctx.obj = _App(settings, host, registry, appearance)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


@main.command("copy-path")
@click.argument("path", type=click.Path(exists=True))
@click.pass_obj
def copy_path(app, path):
    """Copy PATH (file or directory) to the clipboard."""
    app.run("copy-file-path", _visit(path))


@main.command("open")
@click.argument("path", type=click.Path(exists=True))
@click.pass_obj
def open_(app, path):
    """Open PATH in its default application."""
    app.run("open-file", _visit(path))


@main.command()
@click.argument("path", type=click.Path(exists=True))
@click.pass_obj
def reveal(app, path):
    """Reveal PATH in Finder."""
    app.run("reveal-in-finder", _visit(path))


@main.command()
@click.argument("directory", required=False, type=click.Path(exists=True, file_okay=False))
@click.pass_obj
def terminal(app, directory):
    """Open Terminal at DIRECTORY (default: current directory)."""
    buffer = Buffer(default_directory=os.path.abspath(directory or os.getcwd()))
    app.run("open-terminal", buffer)


@main.command()
@click.argument("path", type=click.Path(exists=True))
@click.pass_obj
def touch(app, path):
    """Touch PATH and print its new modification time."""
    app.run("touch-file", _visit(path))


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--delimiter", default=None, help="Text to insert after each character")
@click.option("--line", default=0, type=int, help="Start line (0-based)")
@click.option("--col", default=0, type=int, help="Start column")
@click.pass_obj
def split(app, path, delimiter, line, col):
    """Insert a delimiter after every character of PATH from LINE:COL on."""
    buffer = _visit(path)
    buffer.set_cursor(line, col)
    app.run("split-characters", buffer, delimiter=delimiter)
    buffer.save()


@main.command("move-line")
@click.argument("direction", type=click.Choice(["up", "down"]))
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--line", required=True, type=int, help="Line to move (0-based)")
@click.option("--col", default=0, type=int, help="Cursor column")
@click.option("--to-line", default=None, type=int, help="Move lines LINE..TO-LINE as a block")
@click.pass_obj
def move_line(app, direction, path, line, col, to_line):
    """Move a line (or a block of lines) of PATH up or down."""
    buffer = _visit(path)
    if to_line is None:
        buffer.set_cursor(line, col)
    else:
        buffer.set_mark(line, 0)
        buffer.set_cursor(to_line, len(buffer.line(min(to_line, buffer.line_count - 1))))
    moved = app.run(f"move-text-{direction}", buffer)
    if moved:
        buffer.save()
    cursor = buffer.get_cursor()
    click.echo(f"{cursor['line']}:{cursor['col']}")


@main.command("exec")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--cmd", default=None, help="Interpreter command for this run only")
@click.option("--results", type=click.Choice(["output", "value"]), default="output")
@click.pass_obj
def exec_(app, path, cmd, results):
    """Run PATH through the configured interpreter."""
    params = {":results": results}
    if cmd:
        params[":cmd"] = cmd
    result = app.run("execute-block", _visit(path), params=params)
    click.echo(result.result, nl=False)
    if result.stderr:
        click.echo(result.stderr, err=True, nl=False)
    sys.exit(result.exit_code)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--mode", default=None, help="Override the mode derived from the file name")
@click.pass_obj
def lint(app, path, mode):
    """Check PATH with the checkers for its mode."""
    buffer = _visit(path)
    if mode:
        buffer.mode = mode
    errors = app.run("lint-buffer", buffer)
    for error in errors:
        location = f"{error.line}:{error.column}" if error.column is not None else str(error.line)
        click.echo(f"{path}:{location}: {error.level}: {error.message} [{error.checker}]")
    if errors:
        sys.exit(1)


# ---------------------------------------------------------------------------
# Appearance
# ---------------------------------------------------------------------------


@main.command()
@click.argument("mode", required=False, type=click.Choice(["light", "dark", "auto", "toggle"]))
@click.pass_obj
def appearance(app, mode):
    """Show, set or cycle the appearance mode."""
    buffer = Buffer()
    if mode == "toggle":
        app.run("toggle-appearance", buffer)
    elif mode is not None:
        app.run("set-appearance", buffer, mode=parse_mode(mode))
    click.echo(app.appearance.mode or "auto")


# ---------------------------------------------------------------------------
# Flutter
# ---------------------------------------------------------------------------


@main.group()
def flutter():
    """Flutter project helpers."""


@flutter.command("root")
@click.argument("directory", required=False, default=".")
def flutter_root(directory):
    """Print the project root above DIRECTORY."""
    try:
        click.echo(locate_project_root(directory))
    except EdkitError as e:
        log_error(str(e))
        sys.exit(1)


@flutter.command("run")
@click.argument("directory", required=False, default=".")
@click.pass_obj
def flutter_run(app, directory):
    """Run flutter attached to this terminal."""
    try:
        log_info(f"Running flutter in {locate_project_root(directory)}")
        sys.exit(run_attached(directory, app.settings))
    except EdkitError as e:
        log_error(str(e))
        sys.exit(1)


@flutter.command("keys")
def flutter_keys():
    """List the interactive keys edkit can send."""
    for action in FLUTTER_ACTIONS:
        click.echo(f"{action.key}  flutter-{action.name:<40} {action.description}")


# ---------------------------------------------------------------------------
# Introspection
# ---------------------------------------------------------------------------


@main.command("commands")
@click.pass_obj
def list_commands(app):
    """List registered commands and their key bindings."""
    keybindings = KeybindingsManager(app.settings.get_keybindings())
    for command in app.registry.commands():
        keys = ", ".join(keybindings.get_keys(command.name))
        click.echo(f"{command.name:<45} {keys:<25} {command.description}")


if __name__ == "__main__":
    main()
