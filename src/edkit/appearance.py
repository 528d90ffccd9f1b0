"""Light/dark/auto appearance setting applied to every window.

Every assignment goes through :meth:`AppearanceSettings.set`, which
persists the mode and re-applies colors to the open windows.
"""

from __future__ import annotations

import logging
from typing import Literal

from edkit.errors import InvalidAppearanceError
from edkit.host import EditorHost, Window
from edkit.settings import SettingsManager

logger = logging.getLogger(__name__)

AppearanceMode = Literal["light", "dark"] | None

# light -> dark -> auto -> light
_NEXT_MODE: dict[str | None, str | None] = {
    "light": "dark",
    "dark": None,
    None: "light",
}

# (foreground, background)
_FIXED_COLORS: dict[str, tuple[str, str]] = {
    "light": ("black", "white"),
    "dark": ("white", "black"),
}

# Dynamic system colors; only the macOS ("ns") window system knows them.
_NATIVE_AUTO_COLORS = ("textColor", "textBackgroundColor")
NATIVE_AUTO_WINDOW_SYSTEM = "ns"


def next_mode(mode: AppearanceMode) -> AppearanceMode:
    if mode not in _NEXT_MODE:
        raise InvalidAppearanceError(mode)
    return _NEXT_MODE[mode]  # type: ignore[return-value]


def colors_for(mode: AppearanceMode, window_system: str | None) -> tuple[str | None, str | None]:
    """Foreground/background for a mode; (None, None) clears explicit colors."""
    if mode is None:
        if window_system == NATIVE_AUTO_WINDOW_SYSTEM:
            return _NATIVE_AUTO_COLORS
        return (None, None)
    return _FIXED_COLORS[mode]


class AppearanceSettings:
    """Owns the current appearance mode and pushes it to the host's windows."""

    def __init__(
        self,
        host: EditorHost,
        settings: SettingsManager | None = None,
    ) -> None:
        self._host = host
        self._settings = settings
        initial = settings.get_appearance() if settings is not None else None
        if initial not in _NEXT_MODE:
            logger.warning("Ignoring invalid appearance setting %r", initial)
            initial = None
        self._mode: AppearanceMode = initial  # type: ignore[assignment]

    @property
    def mode(self) -> AppearanceMode:
        return self._mode

    def set(self, mode: AppearanceMode) -> None:
        if mode not in _NEXT_MODE:
            raise InvalidAppearanceError(mode)
        self._mode = mode
        if self._settings is not None:
            self._settings.set_appearance(mode)
        self.apply()

    def toggle(self) -> AppearanceMode:
        """Advance light -> dark -> auto -> light and return the new mode."""
        self.set(next_mode(self._mode))
        return self._mode

    def apply(self, window: Window | None = None) -> None:
        """Set colors on one window, or on all open windows."""
        if not self._host.display_available:
            return
        foreground, background = colors_for(self._mode, self._host.window_system)
        targets = [window] if window is not None else self._host.windows()
        for target in targets:
            target.foreground = foreground
            target.background = background
        logger.debug("Applied appearance %s to %d window(s)", self._mode or "auto", len(targets))

    def install(self) -> None:
        """Re-apply on every new window, and apply now."""
        self._host.add_window_hook(self.apply)
        self.apply()


def parse_mode(value: str) -> AppearanceMode:
    """Map CLI/config spelling to a mode (``auto`` and ``none`` mean None)."""
    lowered = value.strip().lower()
    if lowered in ("auto", "none", ""):
        return None
    if lowered in _FIXED_COLORS:
        return lowered  # type: ignore[return-value]
    raise InvalidAppearanceError(value)
