"""
Command-line interface for todo_gateway.
"""

from .main import cli, main

__all__ = ["cli", "main"]
