"""
Demo todo GraphQL server used as the upstream of the client and gateway.
"""

from .schema import build_todo_schema
from .server import create_upstream_app, run_upstream
from .store import TodoStore

__all__ = ["TodoStore", "build_todo_schema", "create_upstream_app", "run_upstream"]
