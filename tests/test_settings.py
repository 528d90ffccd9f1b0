"""Tests for the hierarchical settings manager."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from edkit.settings import (
    DEFAULT_INTERPRETER_COMMAND,
    SettingsManager,
    _migrate_settings,
    deep_merge_settings,
    default_config_dir,
)

# --- Deep merge ---


def test_deep_merge_simple():
    base = {"a": 1, "b": 2}
    overrides = {"b": 3, "c": 4}
    assert deep_merge_settings(base, overrides) == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested():
    base = {"checkers": {"markdownlint": {"command": ["markdownlint"]}, "other": {}}}
    overrides = {"checkers": {"markdownlint": {"command": ["mdl"]}}}
    result = deep_merge_settings(base, overrides)
    assert result == {"checkers": {"markdownlint": {"command": ["mdl"]}, "other": {}}}


def test_deep_merge_none_values_skipped():
    assert deep_merge_settings({"a": 1}, {"a": None, "c": 3}) == {"a": 1, "c": 3}


def test_deep_merge_array_replacement():
    result = deep_merge_settings({"flutterRunArgs": ["-d", "macos"]}, {"flutterRunArgs": ["-v"]})
    assert result == {"flutterRunArgs": ["-v"]}


# --- Migrations ---


def test_migrate_auto_appearance_removed():
    assert _migrate_settings({"appearance": "auto"}) == {}


def test_migrate_python_command_renamed():
    migrated = _migrate_settings({"pythonCommand": "python3.12"})
    assert migrated == {"interpreterCommand": "python3.12"}


def test_migrate_python_command_dropped_when_both_present():
    migrated = _migrate_settings({"pythonCommand": "old", "interpreterCommand": "new"})
    assert migrated == {"interpreterCommand": "new"}


def test_migrate_no_change():
    assert _migrate_settings({"appearance": "dark"}) == {"appearance": "dark"}


# --- In-memory settings manager ---


def test_in_memory_defaults():
    mgr = SettingsManager.in_memory()
    assert mgr.get_appearance() is None
    assert mgr.get_interpreter_command() == DEFAULT_INTERPRETER_COMMAND
    assert mgr.get_flutter_sdk_path() == ""
    assert mgr.get_flutter_run_args() == []
    assert mgr.get_split_delimiter() == "\n"
    assert mgr.get_keybindings() == {}
    assert mgr.get_checker_command("markdownlint") is None


def test_in_memory_with_initial():
    mgr = SettingsManager.in_memory(
        {"appearance": "dark", "flutterSdkPath": "/opt/flutter/bin/", "splitDelimiter": ","}
    )
    assert mgr.get_appearance() == "dark"
    assert mgr.get_flutter_sdk_path() == "/opt/flutter/bin/"
    assert mgr.get_split_delimiter() == ","


def test_empty_delimiter_is_kept():
    assert SettingsManager.in_memory({"splitDelimiter": ""}).get_split_delimiter() == ""


def test_set_appearance():
    mgr = SettingsManager.in_memory()
    mgr.set_appearance("light")
    assert mgr.get_appearance() == "light"


def test_set_appearance_none_clears():
    mgr = SettingsManager.in_memory({"appearance": "dark"})
    mgr.set_appearance(None)
    assert mgr.get_appearance() is None


def test_checker_command():
    mgr = SettingsManager.in_memory({"checkers": {"markdownlint": {"command": ["mdl"]}, "bad": "x"}})
    assert mgr.get_checker_command("markdownlint") == ["mdl"]
    assert mgr.get_checker_command("bad") is None


def test_apply_overrides():
    mgr = SettingsManager.in_memory({"interpreterCommand": "python3"})
    mgr.apply_overrides({"interpreterCommand": "pypy3"})
    assert mgr.get_interpreter_command() == "pypy3"


def test_overrides_survive_a_save():
    mgr = SettingsManager.in_memory()
    mgr.apply_overrides({"splitDelimiter": "|"})
    mgr.set_appearance("dark")
    assert mgr.get_split_delimiter() == "|"


# --- File persistence ---


def test_create_and_save():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_dir = os.path.join(tmpdir, ".edkit")
        cwd = os.path.join(tmpdir, "project")
        os.makedirs(cwd, exist_ok=True)

        mgr = SettingsManager.create(cwd, config_dir)
        mgr.set_appearance("dark")

        settings_path = os.path.join(config_dir, "settings.json")
        content = json.loads(Path(settings_path).read_text(encoding="utf-8"))
        assert content == {"appearance": "dark"}


def test_auto_appearance_removes_key():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_dir = os.path.join(tmpdir, ".edkit")
        mgr = SettingsManager.create(tmpdir, config_dir)
        mgr.set_appearance("light")
        mgr.set_appearance(None)

        content = json.loads(Path(config_dir, "settings.json").read_text(encoding="utf-8"))
        assert "appearance" not in content


def test_project_settings_override():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_dir = os.path.join(tmpdir, ".edkit")
        cwd = os.path.join(tmpdir, "project")
        project_dir = os.path.join(cwd, ".edkit")
        os.makedirs(project_dir, exist_ok=True)
        os.makedirs(config_dir, exist_ok=True)

        Path(config_dir, "settings.json").write_text(
            json.dumps({"interpreterCommand": "python3", "appearance": "dark"}),
            encoding="utf-8",
        )
        Path(project_dir, "settings.json").write_text(
            json.dumps({"interpreterCommand": "python3.11"}),
            encoding="utf-8",
        )

        mgr = SettingsManager.create(cwd, config_dir)
        assert mgr.get_interpreter_command() == "python3.11"
        assert mgr.get_appearance() == "dark"


def test_modification_tracking_preserves_external_changes():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_dir = os.path.join(tmpdir, ".edkit")
        os.makedirs(config_dir, exist_ok=True)
        settings_path = Path(config_dir, "settings.json")
        settings_path.write_text(json.dumps({"appearance": "dark"}), encoding="utf-8")

        mgr = SettingsManager.create(tmpdir, config_dir)

        # Externally edit a field the manager never touches
        settings_path.write_text(
            json.dumps({"appearance": "dark", "flutterSdkPath": "/sdk/"}),
            encoding="utf-8",
        )
        mgr.set_appearance("light")

        content = json.loads(settings_path.read_text(encoding="utf-8"))
        assert content == {"appearance": "light", "flutterSdkPath": "/sdk/"}


def test_corrupted_file_is_not_overwritten():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_dir = os.path.join(tmpdir, ".edkit")
        os.makedirs(config_dir, exist_ok=True)
        settings_path = Path(config_dir, "settings.json")
        settings_path.write_text("{not json", encoding="utf-8")

        mgr = SettingsManager.create(tmpdir, config_dir)
        assert mgr.load_error is not None

        mgr.set_appearance("dark")
        assert mgr.get_appearance() == "dark"
        assert settings_path.read_text(encoding="utf-8") == "{not json"


def test_legacy_file_is_migrated_on_load():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_dir = os.path.join(tmpdir, ".edkit")
        os.makedirs(config_dir, exist_ok=True)
        Path(config_dir, "settings.json").write_text(
            json.dumps({"pythonCommand": "python3.9", "appearance": "auto"}),
            encoding="utf-8",
        )
        mgr = SettingsManager.create(tmpdir, config_dir)
        assert mgr.get_interpreter_command() == "python3.9"
        assert mgr.get_appearance() is None


def test_default_config_dir_from_environment(monkeypatch):
    monkeypatch.setenv("EDKIT_CONFIG_DIR", "/tmp/edkit-config")
    assert default_config_dir() == "/tmp/edkit-config"


def test_default_config_dir_in_home(monkeypatch):
    monkeypatch.delenv("EDKIT_CONFIG_DIR", raising=False)
    monkeypatch.setenv("HOME", "/home/someone")
    assert default_config_dir() == os.path.join("/home/someone", ".edkit")
