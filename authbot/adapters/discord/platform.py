"""ChatPlatformPort implementation on top of discord.Client."""

from typing import Optional

import discord

from authbot.domain.models import ReplyPanel
from authbot.ports.outbound import GuildInfo, GuildRole, PlatformCallError


def to_embed(panel: ReplyPanel) -> discord.Embed:
    return discord.Embed(title=panel.title, description=panel.description, color=panel.color)


class DiscordPlatformAdapter:
    """ChatPlatformPort backed by a discord.Client.

    Guilds, members and channels come from the client cache when present
    and are fetched over REST otherwise. discord.HTTPException is re-raised
    as PlatformCallError.
    """

    def __init__(self, client: discord.Client):
        self._client = client

    @property
    def user_id(self) -> Optional[int]:
        user = self._client.user
        return user.id if user else None

    async def set_presence(self, status: str) -> None:
        try:
            await self._client.change_presence(activity=discord.Game(name=status))
        except (discord.HTTPException, discord.ConnectionClosed) as e:
            raise PlatformCallError("set presence", str(e)) from e

    async def _fetch_guild(self, guild_id: int) -> discord.Guild:
        guild = self._client.get_guild(guild_id)
        if guild is not None:
            return guild
        try:
            return await self._client.fetch_guild(guild_id)
        except discord.HTTPException as e:
            raise PlatformCallError(f"fetch guild {guild_id}", str(e)) from e

    async def _fetch_member(self, guild_id: int, user_id: int) -> discord.Member:
        guild = await self._fetch_guild(guild_id)
        member = guild.get_member(user_id)
        if member is not None:
            return member
        try:
            return await guild.fetch_member(user_id)
        except discord.HTTPException as e:
            raise PlatformCallError(f"fetch member {user_id}", str(e)) from e

    async def rename_member(self, guild_id: int, user_id: int, name: str) -> None:
        member = await self._fetch_member(guild_id, user_id)
        try:
            await member.edit(nick=name)
        except discord.HTTPException as e:
            raise PlatformCallError(f"rename member {user_id}", str(e)) from e

    async def get_guild(self, guild_id: int) -> GuildInfo:
        guild = await self._fetch_guild(guild_id)
        return GuildInfo(
            id=guild.id,
            name=guild.name,
            roles=[GuildRole(id=role.id, name=role.name) for role in guild.roles],
        )

    async def add_member_role(
        self, guild_id: int, user_id: int, role_id: Optional[int]
    ) -> None:
        if role_id is None:
            raise PlatformCallError(f"add role to member {user_id}", "unknown role")
        member = await self._fetch_member(guild_id, user_id)
        try:
            await member.add_roles(discord.Object(id=role_id))
        except discord.HTTPException as e:
            raise PlatformCallError(f"add role {role_id} to member {user_id}", str(e)) from e

    async def send_message(self, channel_id: int, panel: ReplyPanel) -> None:
        channel = self._client.get_channel(channel_id)
        try:
            if channel is None:
                channel = await self._client.fetch_channel(channel_id)
            await channel.send(embed=to_embed(panel))
        except discord.HTTPException as e:
            raise PlatformCallError(f"send message to channel {channel_id}", str(e)) from e
