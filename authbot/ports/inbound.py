"""Inbound port — platform-agnostic message representation."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class IncomingMessage:
    """Discord-agnostic view of a chat message."""

    content: str
    channel_id: int
    guild_id: Optional[int]
    author_id: int
    author_name: str

    @property
    def in_guild(self) -> bool:
        return self.guild_id is not None
