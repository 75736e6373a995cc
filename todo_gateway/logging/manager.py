"""
Logging manager for todo_gateway.

This module provides centralized logging configuration.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional

from ..config.models import LoggingConfig, LogLevel
from .formatters import ColoredFormatter, StructuredFormatter


class LoggingManager:
    """Centralized logging manager."""

    def __init__(self) -> None:
        self._configured = False
        self._handlers: Dict[str, logging.Handler] = {}

    def setup_logging(self, config: LoggingConfig) -> None:
        """
        Setup logging based on configuration.

        Calling it again replaces the handlers installed by the previous call.

        Args:
            config: Logging configuration
        """
        if self._configured:
            self.cleanup()

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, config.level.value))

        if config.enable_console:
            self._setup_console_handler(config)

        if config.file_path:
            self._setup_file_handler(config)

        for component, level in config.component_levels.items():
            logging.getLogger(component).setLevel(getattr(logging, level.value))

        self._configured = True
        logging.getLogger(__name__).debug("Logging system configured")

    def _formatter(self, config: LoggingConfig, console: bool) -> logging.Formatter:
        if config.enable_structured:
            return StructuredFormatter()
        if console:
            return ColoredFormatter(config.format)
        return logging.Formatter(config.format)

    def _setup_console_handler(self, config: LoggingConfig) -> None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self._formatter(config, console=True))
        handler.setLevel(getattr(logging, config.level.value))
        self.add_handler("console", handler)

    def _setup_file_handler(self, config: LoggingConfig) -> None:
        log_path = Path(str(config.file_path))
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(self._formatter(config, console=False))
        handler.setLevel(getattr(logging, config.level.value))
        self.add_handler("file", handler)

    def set_level(self, level: LogLevel, component: Optional[str] = None) -> None:
        """
        Set logging level.

        Args:
            level: New logging level
            component: Specific component (None for root logger and handlers)
        """
        log_level = getattr(logging, level.value)

        if component:
            logging.getLogger(component).setLevel(log_level)
            return

        logging.getLogger().setLevel(log_level)
        for handler in self._handlers.values():
            handler.setLevel(log_level)

    def add_handler(self, name: str, handler: logging.Handler) -> None:
        logging.getLogger().addHandler(handler)
        self._handlers[name] = handler

    def remove_handler(self, name: str) -> None:
        handler = self._handlers.pop(name, None)
        if handler is not None:
            logging.getLogger().removeHandler(handler)
            handler.close()

    def cleanup(self) -> None:
        """Remove and close every handler this manager installed."""
        for name in list(self._handlers):
            self.remove_handler(name)
        self._configured = False

    def is_configured(self) -> bool:
        return self._configured


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(config: LoggingConfig) -> None:
    """Setup logging with configuration."""
    _logging_manager.setup_logging(config)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def cleanup_logging() -> None:
    """Cleanup logging system."""
    _logging_manager.cleanup()
