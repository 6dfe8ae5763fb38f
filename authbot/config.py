"""Startup configuration.

Values come from command-line flags, then ``AUTHBOT_*`` environment
variables, then a dotenv file, then the defaults below.
"""

import argparse
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from dotenv import dotenv_values

DEFAULT_PREFIX = "!"
DEFAULT_ROLE = "Members"
DEFAULT_COMMAND = "iam"
DEFAULT_WELCOME_MESSAGE = (
    "Welcome {name}! Please set your in-game character with "
    "!iam server firstname lastname"
)
DEFAULT_PRESENCE = "github.com/fallendusk/authbot"
DEFAULT_DOTENV = ".env"

ENV_PREFIX = "AUTHBOT_"
_TRUTHY = ("1", "true", "yes", "on")

# flag name -> help text; flag names double as env suffixes (AUTHBOT_<NAME>)
_OPTIONS = {
    "token": "Bot token",
    "prefix": "Command prefix",
    "role": "Name of the role to place authenticated members in",
    "cmd": "Bot command name",
    "welcomemsg": "Message to send when a new user joins",
    "welcomechannel": "Channel ID of channel to send welcome messages to "
                      "(required if welcome is enabled)",
}


class ConfigurationError(Exception):
    """Invalid or missing startup configuration."""


@dataclass(frozen=True)
class BotConfig:
    """Command settings shared by the router and the handler."""

    command_prefix: str = DEFAULT_PREFIX
    command_name: str = DEFAULT_COMMAND
    default_role_name: str = DEFAULT_ROLE

    @property
    def usage(self) -> str:
        return f"{self.command_prefix}{self.command_name} servername firstname lastname"


@dataclass(frozen=True)
class WelcomeConfig:
    enabled: bool = False
    message: str = DEFAULT_WELCOME_MESSAGE
    channel_id: str = ""


@dataclass(frozen=True)
class AppConfig:
    """Complete process configuration, immutable after startup."""

    token: str = ""
    bot: BotConfig = field(default_factory=BotConfig)
    welcome: WelcomeConfig = field(default_factory=WelcomeConfig)
    presence: str = DEFAULT_PRESENCE

    def validate(self) -> "AppConfig":
        if not self.token:
            raise ConfigurationError("Missing bot token. Please specify via -token")
        if self.welcome.enabled and not (self.welcome.channel_id and self.welcome.message):
            raise ConfigurationError(
                "New user welcome is enabled, but welcome channel or welcome "
                "message is not set. Please check configuration!"
            )
        return self


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="authbot",
        description="Discord bot that renames members and grants them a role.",
        allow_abbrev=False,
    )
    # Single-dash spellings (-token) are kept alongside the GNU style (--token)
    for name, help_text in _OPTIONS.items():
        parser.add_argument(f"-{name}", f"--{name}", dest=name, default=None, help=help_text)
    parser.add_argument(
        "-welcome", "--welcome",
        dest="welcome",
        nargs="?",
        const="true",
        default=None,
        help="Enable new member welcome message",
    )
    parser.add_argument(
        "-config", "--config",
        dest="config",
        default=None,
        help=f"dotenv file with AUTHBOT_* settings (default: {DEFAULT_DOTENV})",
    )
    return parser


def _read_dotenv(path: Optional[str]) -> Mapping[str, Optional[str]]:
    if path is None:
        return dotenv_values(DEFAULT_DOTENV) if os.path.isfile(DEFAULT_DOTENV) else {}
    if not os.path.isfile(path):
        raise ConfigurationError(f"Config file not found: {path}")
    return dotenv_values(path)


def load_config(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Build an AppConfig from flags, environment and dotenv file.

    The result is not validated; call ``AppConfig.validate()``.
    """
    args = build_parser().parse_args(argv)
    if environ is None:
        environ = os.environ

    values = {k: v for k, v in _read_dotenv(args.config).items() if v is not None}
    values.update(environ)

    def _get(name: str, default: str) -> str:
        flag = getattr(args, name)
        if flag is not None:
            return flag
        return values.get(ENV_PREFIX + name.upper(), default)

    return AppConfig(
        token=_get("token", "").strip(),
        bot=BotConfig(
            command_prefix=_get("prefix", DEFAULT_PREFIX),
            command_name=_get("cmd", DEFAULT_COMMAND),
            default_role_name=_get("role", DEFAULT_ROLE),
        ),
        welcome=WelcomeConfig(
            enabled=_parse_bool(_get("welcome", "false")),
            message=_get("welcomemsg", DEFAULT_WELCOME_MESSAGE),
            channel_id=_get("welcomechannel", "").strip(),
        ),
    )
