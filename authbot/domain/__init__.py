"""Domain layer — pure Python, no framework dependencies."""

from authbot.domain.models import (
    AuthFailure,
    AuthResult,
    AuthSuccess,
    ParsedCommand,
    ReplyPanel,
)
from authbot.domain.errors import ValidationError
from authbot.domain.router import CommandRouter
from authbot.domain.auth import AuthenticationHandler, build_display_name, find_role_id

__all__ = [
    "AuthFailure",
    "AuthResult",
    "AuthSuccess",
    "ParsedCommand",
    "ReplyPanel",
    "ValidationError",
    "CommandRouter",
    "AuthenticationHandler",
    "build_display_name",
    "find_role_id",
]
