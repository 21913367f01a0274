"""Configuration management module for the job mailer."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import LogFormat, LogLevel

__all__ = [
    "load_environment_config",
    "EnvironmentConfig",
    "LogLevel",
    "LogFormat",
    "ConfigurationError",
]
