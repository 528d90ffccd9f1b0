"""Hierarchical settings manager with JSON persistence.

Two file levels, global and project, with project values winning.
CLI overrides can be layered on top for a single run.
Tracks per-field modifications so saving keeps external edits.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".edkit"

DEFAULT_INTERPRETER_COMMAND = "python3"
DEFAULT_SPLIT_DELIMITER = "\n"


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    For nested dicts, merge recursively. For primitives and arrays,
    override value wins completely.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


# --- Migrations ---


def _migrate_settings(settings: dict[str, Any]) -> dict[str, Any]:
    """Apply all settings migrations."""
    # Migration 1: "auto" stored as a string -> absent
    if settings.get("appearance") == "auto":
        del settings["appearance"]

    # Migration 2: pythonCommand -> interpreterCommand
    if "pythonCommand" in settings and "interpreterCommand" not in settings:
        settings["interpreterCommand"] = settings.pop("pythonCommand")
    elif "pythonCommand" in settings:
        del settings["pythonCommand"]

    return settings


# --- SettingsManager ---


class SettingsManager:
    """Manages hierarchical settings with JSON file persistence.

    Precedence:
        CLI overrides > project settings > global settings

    Use factory methods (create, in_memory) instead of calling constructor directly.
    """

    def __init__(
        self,
        *,
        settings_path: str | None,
        project_settings_path: str | None,
        initial_settings: dict[str, Any],
        persist: bool = True,
        load_error: Exception | None = None,
    ) -> None:
        self._settings_path = settings_path
        self._project_settings_path = project_settings_path
        self._global_settings = dict(initial_settings)
        self._persist = persist
        self._load_error = load_error
        self._modified_fields: set[str] = set()
        self._overrides: dict[str, Any] = {}

        project = self._load_project_settings() if self._project_settings_path else {}
        self._settings = deep_merge_settings(self._global_settings, project)

    # --- Factory methods ---

    @classmethod
    def create(cls, cwd: str, config_dir: str | None = None) -> SettingsManager:
        """Create a settings manager with file persistence."""
        cdir = config_dir or default_config_dir()
        settings_path = os.path.join(cdir, "settings.json")
        project_settings_path = os.path.join(cwd, CONFIG_DIR_NAME, "settings.json")

        settings, error = _load_from_file(settings_path)
        if error is not None:
            logger.debug("Could not read %s: %s", settings_path, error)
        return cls(
            settings_path=settings_path,
            project_settings_path=project_settings_path,
            initial_settings=settings,
            persist=True,
            load_error=error,
        )

    @classmethod
    def in_memory(cls, settings: dict[str, Any] | None = None) -> SettingsManager:
        """Create an in-memory settings manager for testing."""
        return cls(
            settings_path=None,
            project_settings_path=None,
            initial_settings=settings or {},
            persist=False,
        )

    # --- Core operations ---

    def apply_overrides(self, overrides: dict[str, Any]) -> None:
        """Apply CLI-level overrides on top of merged settings."""
        self._overrides = deep_merge_settings(self._overrides, overrides)
        self._settings = deep_merge_settings(self._settings, overrides)

    @property
    def load_error(self) -> Exception | None:
        return self._load_error

    # --- Persistence ---

    def _set_global(self, field_name: str, value: Any) -> None:
        self._global_settings[field_name] = value
        self._modified_fields.add(field_name)
        self._save()

    def _save(self) -> None:
        """Write only modified fields to global settings file, preserving external changes."""
        if self._persist and self._settings_path:
            # Don't overwrite corrupted files
            if self._load_error:
                logger.warning("Not saving %s: file failed to load", self._settings_path)
                return

            # Re-read to capture external changes
            current_file, _ = _load_from_file(self._settings_path)
            merged: dict[str, Any] = dict(current_file)
            for field_name in self._modified_fields:
                merged[field_name] = self._global_settings.get(field_name)

            # A None value removes the key
            merged = {k: v for k, v in merged.items() if v is not None}

            os.makedirs(os.path.dirname(self._settings_path), exist_ok=True)
            Path(self._settings_path).write_text(
                json.dumps(merged, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
            logger.debug("Saved %s", self._settings_path)

        self._remerge()

    def _remerge(self) -> None:
        project = self._load_project_settings() if self._project_settings_path else {}
        self._settings = deep_merge_settings(
            deep_merge_settings(self._global_settings, project), self._overrides
        )

    def _load_project_settings(self) -> dict[str, Any]:
        """Load project-level settings from disk."""
        if not self._project_settings_path:
            return {}
        settings, _ = _load_from_file(self._project_settings_path)
        return settings

    # --- Appearance ---

    def get_appearance(self) -> str | None:
        return self._settings.get("appearance")

    def set_appearance(self, mode: str | None) -> None:
        self._set_global("appearance", mode)

    # --- Source block execution ---

    def get_interpreter_command(self) -> str:
        return self._settings.get("interpreterCommand") or DEFAULT_INTERPRETER_COMMAND

    # --- Flutter ---

    def get_flutter_sdk_path(self) -> str:
        return self._settings.get("flutterSdkPath") or ""

    def get_flutter_run_args(self) -> list[str]:
        return list(self._settings.get("flutterRunArgs") or [])

    # --- Editing ---

    def get_split_delimiter(self) -> str:
        value = self._settings.get("splitDelimiter")
        return DEFAULT_SPLIT_DELIMITER if value is None else value

    def get_keybindings(self) -> dict[str, Any]:
        return dict(self._settings.get("keybindings") or {})

    def get_checker_command(self, name: str) -> list[str] | None:
        checkers = self._settings.get("checkers") or {}
        entry = checkers.get(name)
        if not isinstance(entry, dict):
            return None
        command = entry.get("command")
        return list(command) if command else None


# --- File I/O helpers ---


def _load_from_file(path: str) -> tuple[dict[str, Any], Exception | None]:
    """Load settings from a JSON file. Returns (settings, error)."""
    if not os.path.exists(path):
        return {}, None
    try:
        content = Path(path).read_text(encoding="utf-8")
        settings = json.loads(content)
        return _migrate_settings(settings), None
    except (OSError, json.JSONDecodeError) as e:
        return {}, e


def default_config_dir() -> str:
    """Global config directory (``$EDKIT_CONFIG_DIR`` or ~/.edkit)."""
    env_dir = os.environ.get("EDKIT_CONFIG_DIR")
    if env_dir:
        return env_dir
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)
