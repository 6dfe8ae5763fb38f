"""Discord adapters."""

from authbot.adapters.discord.bot import AuthBot
from authbot.adapters.discord.platform import DiscordPlatformAdapter

__all__ = ["AuthBot", "DiscordPlatformAdapter"]
