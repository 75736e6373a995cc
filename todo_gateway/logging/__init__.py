"""
Logging setup for todo_gateway.

Modules log through ``logging.getLogger(__name__)``; this package only
configures handlers and formatters for the running process.
"""

from .formatters import ColoredFormatter, StructuredFormatter
from .manager import LoggingManager, cleanup_logging, get_logger, setup_logging

__all__ = [
    "LoggingManager",
    "setup_logging",
    "get_logger",
    "cleanup_logging",
    "StructuredFormatter",
    "ColoredFormatter",
]
