"""Prefix command routing.

Pure Python, no framework dependencies.
"""

from typing import Optional

from authbot.config import BotConfig
from authbot.domain.models import ParsedCommand
from authbot.ports.inbound import IncomingMessage


class CommandRouter:
    """Maps an incoming message to a ParsedCommand."""

    def __init__(self, config: BotConfig):
        self._config = config

    @property
    def config(self) -> BotConfig:
        return self._config

    def route(self, message: IncomingMessage, bot_user_id: Optional[int]) -> ParsedCommand:
        # Ignore messages we send
        if bot_user_id is not None and message.author_id == bot_user_id:
            return ParsedCommand.unmatched()

        prefix = self._config.command_prefix
        content = message.content
        if len(content) <= 1 or not content.startswith(prefix):
            return ParsedCommand.unmatched()

        tokens = content.split()
        if not tokens:
            return ParsedCommand.unmatched()

        head = tokens[0]
        if head.startswith(prefix):
            head = head[len(prefix):]
        command = head.lower()
        if command != self._config.command_name.lower():
            return ParsedCommand.unmatched()

        return ParsedCommand(matched=True, command=command, arguments=tuple(tokens[1:]))
