"""
Configuration management for todo_gateway.

Configuration comes from defaults, an optional YAML/JSON file and
environment variables.
"""

from .loader import ConfigLoader, load_config
from .models import (
    AppConfig,
    ClientConfig,
    GatewayConfig,
    LoggingConfig,
    LogLevel,
    UpstreamConfig,
    ViewConfig,
)

__all__ = [
    "ConfigLoader",
    "load_config",
    "AppConfig",
    "ClientConfig",
    "GatewayConfig",
    "LoggingConfig",
    "LogLevel",
    "UpstreamConfig",
    "ViewConfig",
]
