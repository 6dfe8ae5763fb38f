"""Tests for DiscordPlatformAdapter with a mocked discord.Client."""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from authbot.adapters.discord.platform import DiscordPlatformAdapter, to_embed
from authbot.domain.models import FAILURE_COLOR, SUCCESS_COLOR, ReplyPanel
from authbot.ports.outbound import ChatPlatformPort, GuildInfo, PlatformCallError

GUILD_ID = 10
USER_ID = 1234
CHANNEL_ID = 100


def _forbidden() -> discord.Forbidden:
    return discord.Forbidden(MagicMock(status=403, reason="Forbidden"), "Missing Permissions")


def _role(role_id: int, name: str) -> MagicMock:
    role = MagicMock()
    role.id = role_id
    role.name = name
    return role


def _make_client(cached_member: bool = True, cached_guild: bool = True):
    member = MagicMock()
    member.edit = AsyncMock()
    member.add_roles = AsyncMock()

    guild = MagicMock()
    guild.id = GUILD_ID
    guild.name = "Test Guild"
    guild.roles = [_role(1, "@everyone"), _role(555, "Members")]
    guild.get_member = MagicMock(return_value=member if cached_member else None)
    guild.fetch_member = AsyncMock(return_value=member)

    channel = MagicMock()
    channel.send = AsyncMock()

    client = MagicMock()
    client.user = MagicMock(id=999)
    client.get_guild = MagicMock(return_value=guild if cached_guild else None)
    client.fetch_guild = AsyncMock(return_value=guild)
    client.get_channel = MagicMock(return_value=channel)
    client.fetch_channel = AsyncMock(return_value=channel)
    client.change_presence = AsyncMock()
    return client, guild, member, channel


class TestToEmbed:
    def test_success_panel(self):
        embed = to_embed(ReplyPanel.success("ok"))
        assert embed.title == "Success!"
        assert embed.description == "ok"
        assert embed.colour.value == SUCCESS_COLOR

    def test_failure_panel(self):
        assert to_embed(ReplyPanel.failure("no")).colour.value == FAILURE_COLOR


class TestAdapter:
    def test_implements_port(self):
        client, *_ = _make_client()
        assert isinstance(DiscordPlatformAdapter(client), ChatPlatformPort)

    def test_user_id(self):
        client, *_ = _make_client()
        assert DiscordPlatformAdapter(client).user_id == 999

    def test_user_id_before_login(self):
        client, *_ = _make_client()
        client.user = None
        assert DiscordPlatformAdapter(client).user_id is None

    @pytest.mark.asyncio
    async def test_set_presence(self):
        client, *_ = _make_client()
        await DiscordPlatformAdapter(client).set_presence("github.com/fallendusk/authbot")
        activity = client.change_presence.call_args.kwargs["activity"]
        assert isinstance(activity, discord.Game)
        assert activity.name == "github.com/fallendusk/authbot"

    @pytest.mark.asyncio
    async def test_rename_member_cached(self):
        client, guild, member, _ = _make_client()
        await DiscordPlatformAdapter(client).rename_member(GUILD_ID, USER_ID, "Jane Smith")
        guild.get_member.assert_called_once_with(USER_ID)
        member.edit.assert_awaited_once_with(nick="Jane Smith")

    @pytest.mark.asyncio
    async def test_rename_member_fetched(self):
        client, guild, member, _ = _make_client(cached_member=False, cached_guild=False)
        await DiscordPlatformAdapter(client).rename_member(GUILD_ID, USER_ID, "Jane Smith")
        client.fetch_guild.assert_awaited_once_with(GUILD_ID)
        guild.fetch_member.assert_awaited_once_with(USER_ID)
        member.edit.assert_awaited_once_with(nick="Jane Smith")

    @pytest.mark.asyncio
    async def test_rename_member_forbidden(self):
        client, _, member, _ = _make_client()
        member.edit.side_effect = _forbidden()
        with pytest.raises(PlatformCallError):
            await DiscordPlatformAdapter(client).rename_member(GUILD_ID, USER_ID, "Jane Smith")

    @pytest.mark.asyncio
    async def test_get_guild_roles(self):
        client, *_ = _make_client()
        info = await DiscordPlatformAdapter(client).get_guild(GUILD_ID)
        assert isinstance(info, GuildInfo)
        assert info.id == GUILD_ID
        assert [(r.id, r.name) for r in info.roles] == [(1, "@everyone"), (555, "Members")]

    @pytest.mark.asyncio
    async def test_get_guild_fetch_failure(self):
        client, *_ = _make_client(cached_guild=False)
        client.fetch_guild.side_effect = _forbidden()
        with pytest.raises(PlatformCallError):
            await DiscordPlatformAdapter(client).get_guild(GUILD_ID)

    @pytest.mark.asyncio
    async def test_add_member_role(self):
        client, _, member, _ = _make_client()
        await DiscordPlatformAdapter(client).add_member_role(GUILD_ID, USER_ID, 555)
        (role_obj,), _ = member.add_roles.call_args
        assert role_obj.id == 555

    @pytest.mark.asyncio
    async def test_add_member_role_unknown_role(self):
        client, _, member, _ = _make_client()
        with pytest.raises(PlatformCallError, match="unknown role"):
            await DiscordPlatformAdapter(client).add_member_role(GUILD_ID, USER_ID, None)
        member.add_roles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_member_role_forbidden(self):
        client, _, member, _ = _make_client()
        member.add_roles.side_effect = _forbidden()
        with pytest.raises(PlatformCallError):
            await DiscordPlatformAdapter(client).add_member_role(GUILD_ID, USER_ID, 555)

    @pytest.mark.asyncio
    async def test_send_message_embed(self):
        client, _, _, channel = _make_client()
        await DiscordPlatformAdapter(client).send_message(CHANNEL_ID, ReplyPanel.success("hi"))
        embed = channel.send.call_args.kwargs["embed"]
        assert embed.title == "Success!"
        assert embed.description == "hi"

    @pytest.mark.asyncio
    async def test_send_message_fetches_uncached_channel(self):
        client, _, _, channel = _make_client()
        client.get_channel.return_value = None
        await DiscordPlatformAdapter(client).send_message(CHANNEL_ID, ReplyPanel.failure("x"))
        client.fetch_channel.assert_awaited_once_with(CHANNEL_ID)
        channel.send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_send_message_failure(self):
        client, _, _, channel = _make_client()
        channel.send.side_effect = _forbidden()
        with pytest.raises(PlatformCallError):
            await DiscordPlatformAdapter(client).send_message(CHANNEL_ID, ReplyPanel.failure("x"))
