"""Domain data models, pure Python dataclasses."""

from dataclasses import dataclass
from typing import Tuple, Union

SUCCESS_COLOR = 1022555
FAILURE_COLOR = 16711684


@dataclass(frozen=True)
class ParsedCommand:
    """Result of routing one message."""

    matched: bool
    command: str = ""
    arguments: Tuple[str, ...] = ()

    @classmethod
    def unmatched(cls) -> "ParsedCommand":
        return cls(matched=False)


@dataclass(frozen=True)
class ReplyPanel:
    """Titled, colored reply. Rendered as an embed by the adapter."""

    title: str
    description: str
    color: int

    @classmethod
    def success(cls, description: str) -> "ReplyPanel":
        return cls(title="Success!", description=description, color=SUCCESS_COLOR)

    @classmethod
    def failure(cls, description: str) -> "ReplyPanel":
        return cls(title="Failure!", description=description, color=FAILURE_COLOR)


@dataclass(frozen=True)
class AuthSuccess:
    display_name: str
    message: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class AuthFailure:
    reason: str
    replied: bool = True  # False when the flow aborted without telling the user

    @property
    def ok(self) -> bool:
        return False


AuthResult = Union[AuthSuccess, AuthFailure]
