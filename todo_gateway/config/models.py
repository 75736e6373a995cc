"""
Configuration models for todo_gateway.

This module defines all configuration data models with validation and defaults.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_SCHEMA_SDL = """
type Query {
  hello: String
}
"""

DEFAULT_ITEM_TEMPLATE = (
    '<div class="todo-item$done_class" data-id="$id">'
    '<label for="$id"><input id="$id" type="checkbox"$checked>$text</label>'
    "</div>"
)


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Default logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    file_path: Optional[Path] = Field(default=None, description="Log file path")
    max_file_size: int = Field(
        default=10 * 1024 * 1024, description="Max log file size in bytes"
    )
    backup_count: int = Field(default=5, description="Number of backup log files")
    enable_console: bool = Field(default=True, description="Enable console logging")
    enable_structured: bool = Field(
        default=False, description="Enable structured JSON logging"
    )

    # Component-specific log levels
    component_levels: Dict[str, LogLevel] = Field(
        default_factory=dict, description="Per-component log levels"
    )


class UpstreamConfig(BaseModel):
    """Upstream GraphQL server the gateway relays POST requests to."""

    base_url: str = Field(
        default="http://localhost:8080/", description="Base URL of the upstream server"
    )
    timeout: float = Field(default=30.0, gt=0, description="Relay timeout in seconds")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return v


class GatewayConfig(BaseModel):
    """Gateway listen address and console schema."""

    host: str = Field(default="0.0.0.0", description="Listen host")
    port: int = Field(default=4000, ge=0, le=65535, description="Listen port")
    schema_sdl: str = Field(
        default=DEFAULT_SCHEMA_SDL, description="SDL of the schema served on GET /graphql"
    )
    root_value: Dict[str, Any] = Field(
        default_factory=dict, description="Root resolver values for the console schema"
    )
    graphiql: bool = Field(default=True, description="Serve the interactive console page")

    @field_validator("schema_sdl")
    @classmethod
    def validate_schema_sdl(cls, v: str) -> str:
        if not v.strip():
            return DEFAULT_SCHEMA_SDL
        return v


class ClientConfig(BaseModel):
    """Todo client settings."""

    endpoint: str = Field(
        default="http://localhost:8080/graphql", description="GraphQL endpoint URL"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Default headers for requests"
    )


class ViewConfig(BaseModel):
    """Rendering options of the todo view."""

    use_template: bool = Field(
        default=False, description="Render items through item_template"
    )
    full_reload_on_toggle: bool = Field(
        default=False, description="Reload the whole list after a toggle (superseded)"
    )
    empty_message: str = Field(
        default="There are no tasks for you today",
        description="Placeholder shown for an empty list",
    )
    item_template: str = Field(
        default=DEFAULT_ITEM_TEMPLATE,
        description="string.Template markup for one item",
    )


class AppConfig(BaseModel):
    """Top-level configuration."""

    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
