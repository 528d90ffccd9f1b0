"""edkit: personal editor commands for buffers, files, appearance and flutter."""

# Appearance
from edkit.appearance import AppearanceMode, AppearanceSettings, next_mode

# Buffer and host
from edkit.buffer import Buffer
from edkit.builtin_commands import register_default_commands

# Source block execution
from edkit.code_exec import ExecutionResult, execute_block, parse_header_args

# Commands
from edkit.commands import CommandContext, CommandRegistry, RegisteredCommand

# Errors
from edkit.errors import (
    CheckerNotApplicableError,
    CommandSyntaxError,
    EdkitError,
    InvalidAppearanceError,
    NoFileError,
    ProjectRootNotFoundError,
    ToolNotFoundError,
    UnknownCommandError,
)

# File helpers
from edkit.file_helpers import (
    copy_file_path,
    open_file,
    open_terminal,
    reveal_in_finder,
    touch_file,
)

# Flutter
from edkit.flutter import (
    FLUTTER_ACTIONS,
    FlutterAction,
    FlutterManager,
    FlutterSession,
    locate_project_root,
    register_flutter_commands,
)
from edkit.host import EditorHost, Window, Workspace

# Key bindings
from edkit.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager

# Line mover
from edkit.line_mover import (
    move_line_down,
    move_line_up,
    move_lines_down,
    move_lines_up,
    move_text_down,
    move_text_up,
)

# Linter
from edkit.linter import CheckerDefinition, LintError, check_buffer, parse_output, run_checker

# Settings
from edkit.settings import SettingsManager

# Text splitter
from edkit.splitter import split_characters

__all__ = [
    # Appearance
    "AppearanceMode",
    "AppearanceSettings",
    "next_mode",
    # Buffer and host
    "Buffer",
    "EditorHost",
    "Window",
    "Workspace",
    # Source block execution
    "ExecutionResult",
    "execute_block",
    "parse_header_args",
    # Commands
    "CommandContext",
    "CommandRegistry",
    "RegisteredCommand",
    "register_default_commands",
    # Errors
    "CheckerNotApplicableError",
    "CommandSyntaxError",
    "EdkitError",
    "InvalidAppearanceError",
    "NoFileError",
    "ProjectRootNotFoundError",
    "ToolNotFoundError",
    "UnknownCommandError",
    # File helpers
    "copy_file_path",
    "open_file",
    "open_terminal",
    "reveal_in_finder",
    "touch_file",
    # Flutter
    "FLUTTER_ACTIONS",
    "FlutterAction",
    "FlutterManager",
    "FlutterSession",
    "locate_project_root",
    "register_flutter_commands",
    # Key bindings
    "DEFAULT_KEYBINDINGS",
    "KeybindingsManager",
    # Line mover
    "move_line_down",
    "move_line_up",
    "move_lines_down",
    "move_lines_up",
    "move_text_down",
    "move_text_up",
    # Linter
    "CheckerDefinition",
    "LintError",
    "check_buffer",
    "parse_output",
    "run_checker",
    # Settings
    "SettingsManager",
    # Text splitter
    "split_characters",
]
