"""Named interactive commands and the context they run in."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from edkit.buffer import Buffer
from edkit.errors import UnknownCommandError
from edkit.host import EditorHost
from edkit.settings import SettingsManager

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    """What a command sees: the host, the current buffer, and settings."""

    host: EditorHost
    buffer: Buffer
    settings: SettingsManager = field(default_factory=SettingsManager.in_memory)


CommandHandler = Callable[..., Any]


@dataclass
class RegisteredCommand:
    name: str
    handler: CommandHandler
    description: str = ""


class CommandRegistry:
    """Command name -> handler table. Re-registering a name replaces it."""

    def __init__(self) -> None:
        self._commands: dict[str, RegisteredCommand] = {}

    def register(self, name: str, handler: CommandHandler, description: str = "") -> None:
        if name in self._commands:
            logger.debug("Replacing command %s", name)
        self._commands[name] = RegisteredCommand(name, handler, description)

    def get(self, name: str) -> RegisteredCommand | None:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return sorted(self._commands)

    def commands(self) -> list[RegisteredCommand]:
        return [self._commands[name] for name in self.names()]

    def run(self, name: str, ctx: CommandContext, **kwargs: Any) -> Any:
        command = self._commands.get(name)
        if command is None:
            raise UnknownCommandError(name)
        logger.debug("Running command %s in %s", name, ctx.buffer.name)
        return command.handler(ctx, **kwargs)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)
