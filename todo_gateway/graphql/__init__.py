"""
GraphQL support for todo_gateway.

This package builds todo queries and mutations from intents and sends them
to a GraphQL endpoint.
"""

from .builder import (
    build_create_query,
    build_get_query,
    build_list_query,
    build_query,
    build_update_query,
    encode_value,
    serialize,
    to_request,
)
from .client import TodoClient, decode_envelope
from .models import (
    CreateTodo,
    GetTodo,
    GraphQLOperationType,
    GraphQLRequest,
    Intent,
    LastTodo,
    ListTodos,
    TodoRecord,
    UpdateTodo,
)

__all__ = [
    # Client
    "TodoClient",
    "decode_envelope",
    # Models
    "TodoRecord",
    "GraphQLRequest",
    "GraphQLOperationType",
    "Intent",
    "ListTodos",
    "GetTodo",
    "LastTodo",
    "CreateTodo",
    "UpdateTodo",
    # Builder
    "build_query",
    "build_list_query",
    "build_create_query",
    "build_update_query",
    "build_get_query",
    "encode_value",
    "serialize",
    "to_request",
]
