"""Port interfaces (Hexagonal Architecture)."""

from authbot.ports.inbound import IncomingMessage
from authbot.ports.outbound import ChatPlatformPort, GuildInfo, GuildRole, PlatformCallError

__all__ = [
    "IncomingMessage",
    "ChatPlatformPort",
    "GuildInfo",
    "GuildRole",
    "PlatformCallError",
]
