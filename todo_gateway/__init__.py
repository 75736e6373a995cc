"""
todo_gateway - GraphQL todo client, view synchronizer and POST-to-GET gateway.

Components:

- ``todo_gateway.graphql``: builds todo queries/mutations from intents and
  sends them to a GraphQL endpoint.
- ``todo_gateway.view``: keeps an explicit view state of the todo list in
  step with the server.
- ``todo_gateway.gateway``: aiohttp application relaying ``POST /*`` to an
  upstream server as GET requests, with a GraphQL console on ``GET /graphql``.
- ``todo_gateway.upstream``: in-memory demo todo GraphQL server.
"""

from .config import AppConfig, ClientConfig, GatewayConfig, UpstreamConfig, ViewConfig
from .exceptions import (
    DecodeError,
    GatewayRelayError,
    TodoGatewayError,
    TransportError,
    ValidationError,
)
from .gateway import create_app
from .graphql import (
    CreateTodo,
    ListTodos,
    TodoClient,
    TodoRecord,
    UpdateTodo,
    build_create_query,
    build_list_query,
    build_update_query,
)
from .view import ViewState, ViewSynchronizer, reconcile

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Config
    "AppConfig",
    "ClientConfig",
    "GatewayConfig",
    "UpstreamConfig",
    "ViewConfig",
    # Errors
    "TodoGatewayError",
    "ValidationError",
    "TransportError",
    "DecodeError",
    "GatewayRelayError",
    # GraphQL
    "TodoClient",
    "TodoRecord",
    "ListTodos",
    "CreateTodo",
    "UpdateTodo",
    "build_list_query",
    "build_create_query",
    "build_update_query",
    # Gateway
    "create_app",
    # View
    "ViewSynchronizer",
    "ViewState",
    "reconcile",
]
