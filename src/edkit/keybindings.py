"""Key bindings for edkit commands."""

from __future__ import annotations

KeyId = str

KeybindingsConfig = dict[str, KeyId | list[KeyId]]

DEFAULT_KEYBINDINGS: dict[str, KeyId | list[KeyId]] = {
    # Line mover
    "move-text-up": ["alt+up", "alt+p"],
    "move-text-down": ["alt+down", "alt+n"],
    # File helpers
    "copy-file-path": "ctrl+c p",
    "open-file": "ctrl+c o",
    "reveal-in-finder": "ctrl+c f",
    "open-terminal": "ctrl+c t",
    "touch-file": "ctrl+c ctrl+t",
    # Editing
    "split-characters": "ctrl+c s",
    # Appearance
    "toggle-appearance": "f5",
    # Flutter
    "flutter-run-or-hot-reload": "ctrl+alt+x",
    "flutter-hot-restart": "ctrl+c ctrl+r",
    "flutter-quit": "ctrl+c ctrl+q",
}

_MODIFIER_ORDER = ("ctrl", "alt", "shift", "super")
_MODIFIER_ALIASES = {"control": "ctrl", "meta": "alt", "option": "alt", "cmd": "super"}


def normalize_key(key: KeyId) -> KeyId:
    """Canonical spelling of a key sequence.

    ``"Shift+Ctrl+X"`` and ``"ctrl+shift+x"`` normalize to the same id;
    chords in a sequence are separated by single spaces.
    """
    chords: list[str] = []
    for chord in key.split():
        parts = [p for p in chord.lower().split("+") if p]
        if not parts:
            continue
        *mods, base = parts
        names = {_MODIFIER_ALIASES.get(m, m) for m in mods}
        ordered = [m for m in _MODIFIER_ORDER if m in names]
        ordered.extend(sorted(names - set(_MODIFIER_ORDER)))
        chords.append("+".join([*ordered, base]))
    return " ".join(chords)


class KeybindingsManager:
    """Maps keys to command names, defaults first, then user config."""

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._command_to_keys: dict[str, list[KeyId]] = {}
        self._key_to_command: dict[KeyId, str] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeybindingsConfig) -> None:
        self._command_to_keys.clear()
        self._key_to_command.clear()

        # Start with defaults
        for command, keys in DEFAULT_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._command_to_keys[command] = [normalize_key(k) for k in key_array]

        # Override with user config
        for command, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._command_to_keys[command] = [normalize_key(k) for k in key_array]

        # A key bound by the user wins over the same key in the defaults
        for command, keys in self._command_to_keys.items():
            if command in config:
                continue
            for key in keys:
                self._key_to_command.setdefault(key, command)
        for command in config:
            for key in self._command_to_keys[command]:
                self._key_to_command[key] = command

    def lookup(self, key: KeyId) -> str | None:
        """Command bound to ``key``, if any."""
        return self._key_to_command.get(normalize_key(key))

    def get_keys(self, command: str) -> list[KeyId]:
        return self._command_to_keys.get(command, [])

    def set_config(self, config: KeybindingsConfig) -> None:
        self._build_maps(config)
