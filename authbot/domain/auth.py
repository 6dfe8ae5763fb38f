"""AuthenticationHandler — rename the member and grant the default role.

Talks to the chat platform only through ChatPlatformPort, so the whole
flow runs against a fake port in tests.
"""

import re
from typing import Iterable, Optional, Sequence

from authbot.config import BotConfig
from authbot.domain.errors import ValidationError
from authbot.domain.models import AuthFailure, AuthResult, AuthSuccess, ReplyPanel
from authbot.ports.inbound import IncomingMessage
from authbot.ports.outbound import ChatPlatformPort, GuildRole, PlatformCallError

MIN_ARGUMENTS = 3  # server name, first name, last name
_WORD_START = re.compile(r"(?<!\w)\w")


def _log(msg: str):
    print(msg, flush=True)


def _title(token: str) -> str:
    """Upper-case the first letter of each word part; the rest stays as typed."""
    return _WORD_START.sub(lambda m: m.group(0).upper(), token)


def build_display_name(arguments: Sequence[str]) -> str:
    """'srv', 'john', 'doe' -> 'John Doe'. The server name is not used."""
    return f"{_title(arguments[1])} {_title(arguments[2])}"


def find_role_id(roles: Iterable[GuildRole], name: str) -> Optional[int]:
    """Return the id of the first role named exactly ``name``, else None."""
    for role in roles:
        if role.name == name:
            return role.id
    return None


def mention(user_id: int) -> str:
    return f"<@{user_id}>"


class AuthenticationHandler:
    """Runs the rename + role-grant workflow for one command invocation.

    Holds only the read-only config and the port, so concurrent
    invocations need no locking.
    """

    def __init__(self, config: BotConfig, platform: ChatPlatformPort):
        self._config = config
        self._platform = platform

    def _validate(self, arguments: Sequence[str]):
        if len(arguments) < MIN_ARGUMENTS:
            raise ValidationError(
                f"expected {MIN_ARGUMENTS} arguments, got {len(arguments)}"
            )

    async def _reply(self, channel_id: int, panel: ReplyPanel):
        try:
            await self._platform.send_message(channel_id, panel)
        except PlatformCallError as e:
            _log(f"[authbot] failed to send reply to channel {channel_id}: {e}")

    async def authenticate(
        self, message: IncomingMessage, arguments: Sequence[str]
    ) -> AuthResult:
        try:
            self._validate(arguments)
        except ValidationError as e:
            _log(f"[authbot] {message.author_name}: {e}")
            await self._reply(
                message.channel_id,
                ReplyPanel.failure(f"Missing argument. Please use {self._config.usage}"),
            )
            return AuthFailure(reason="missing argument")

        guild_id = message.guild_id
        user_id = message.author_id
        display_name = build_display_name(arguments)

        # Nickname is best effort; the role grant still goes ahead
        try:
            await self._platform.rename_member(guild_id, user_id, display_name)
        except PlatformCallError as e:
            _log(f"[authbot] Failed to change nickname for {message.author_name}: {e}")

        try:
            guild = await self._platform.get_guild(guild_id)
        except PlatformCallError as e:
            _log(f"[authbot] {e}")
            return AuthFailure(reason=str(e), replied=False)

        role_name = self._config.default_role_name
        role_id = find_role_id(guild.roles, role_name)
        try:
            await self._platform.add_member_role(guild_id, user_id, role_id)
        except PlatformCallError as e:
            reason = f"Failed to add role {role_name} to {message.author_name}"
            _log(f"[authbot] {reason}: {e}")
            await self._reply(message.channel_id, ReplyPanel.failure(reason))
            return AuthFailure(reason=reason)

        text = f"{mention(user_id)} authenticated as **{display_name}**"
        _log(f"[authbot] {message.author_name} authenticated as {display_name}")
        await self._reply(message.channel_id, ReplyPanel.success(text))
        return AuthSuccess(display_name=display_name, message=text)
