"""Configuration management for devbridge."""

from .loader import ConfigLoader, ConfigurationError, load_config
from .models import DevBridgeConfig, LoggingConfig, SerializationConfig

__all__ = [
    "DevBridgeConfig",
    "SerializationConfig",
    "LoggingConfig",
    "ConfigLoader",
    "ConfigurationError",
    "load_config",
]
