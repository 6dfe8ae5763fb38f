"""Outbound ports: interfaces for the chat platform adapter."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from authbot.domain.models import ReplyPanel


class PlatformCallError(Exception):
    """A single chat-platform call failed."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"{operation} failed"
        if detail:
            message += f": {detail}"
        super().__init__(message)


@dataclass
class GuildRole:
    id: int
    name: str


@dataclass
class GuildInfo:
    """Guild snapshot returned by the platform."""

    id: int
    name: str = ""
    roles: List[GuildRole] = field(default_factory=list)


@runtime_checkable
class ChatPlatformPort(Protocol):
    """Interface for the chat platform the bot runs on.

    All methods raise PlatformCallError on failure.
    """

    @property
    def user_id(self) -> Optional[int]: ...

    async def set_presence(self, status: str) -> None: ...

    async def rename_member(self, guild_id: int, user_id: int, name: str) -> None: ...

    async def get_guild(self, guild_id: int) -> GuildInfo: ...

    async def add_member_role(
        self, guild_id: int, user_id: int, role_id: Optional[int]
    ) -> None: ...

    async def send_message(self, channel_id: int, panel: "ReplyPanel") -> None: ...
