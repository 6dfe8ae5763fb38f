"""Discord member authentication bot."""

__version__ = "0.1.0"

from authbot.config import AppConfig, BotConfig, ConfigurationError, WelcomeConfig, load_config
from authbot.domain import AuthenticationHandler, CommandRouter

__all__ = [
    "__version__",
    "AppConfig",
    "BotConfig",
    "ConfigurationError",
    "WelcomeConfig",
    "load_config",
    "AuthenticationHandler",
    "CommandRouter",
]
