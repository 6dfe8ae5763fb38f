"""Discord adapter — bridges discord.Client to the command router.

Converts discord.Message to IncomingMessage, routes it, and hands a
matched command to AuthenticationHandler.
"""

import discord

from authbot.config import AppConfig
from authbot.adapters.discord.platform import DiscordPlatformAdapter
from authbot.domain.auth import AuthenticationHandler
from authbot.domain.router import CommandRouter
from authbot.ports.inbound import IncomingMessage
from authbot.ports.outbound import PlatformCallError


def _log(msg: str):
    print(msg, flush=True)


class AuthBot(discord.Client):
    """Discord client for the authentication command."""

    def __init__(self, config: AppConfig, **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self.config = config
        self.platform = DiscordPlatformAdapter(self)
        self.router = CommandRouter(config.bot)
        self.handler = AuthenticationHandler(config.bot, self.platform)

    @staticmethod
    def to_incoming(message: discord.Message) -> IncomingMessage:
        """Convert a Discord message to platform-agnostic IncomingMessage."""
        return IncomingMessage(
            content=message.content,
            channel_id=message.channel.id,
            guild_id=message.guild.id if message.guild else None,
            author_id=message.author.id,
            author_name=message.author.name,
        )

    async def on_ready(self):
        _log(f"[authbot] logged in as {self.user}")
        try:
            await self.platform.set_presence(self.config.presence)
        except PlatformCallError as e:
            _log(f"[authbot] Failed to set activity: {e}")

    async def on_message(self, message: discord.Message):
        # Guard: self.user can be None before on_ready fires
        if not self.user:
            return

        incoming = self.to_incoming(message)
        parsed = self.router.route(incoming, self.platform.user_id)
        if not parsed.matched:
            return
        if not incoming.in_guild:
            _log(f"[authbot] ignoring {parsed.command} from {incoming.author_name} outside a guild")
            return

        _log(f"[authbot] {incoming.author_name} invoked {parsed.command} in guild {incoming.guild_id}")
        await self.handler.authenticate(incoming, parsed.arguments)
