"""
GraphQL query builder.

Intents are first turned into an abstract ``GraphQLRequest`` and then
serialized through ``serialize``, which encodes every argument value as a
GraphQL literal. User input is never concatenated into the query text
directly.

The serialized form is the compact grammar the todo backend understands::

    {todoList{id,text,done}}
    mutation _{createTodo(text:"Buy milk"){id,text,done}}
    mutation _{updateTodo(id:"a",done:true){id,text,done}}
"""

from __future__ import annotations

import json
from typing import Any

from ..exceptions import ValidationError
from .models import (
    CreateTodo,
    GetTodo,
    GraphQLOperationType,
    GraphQLRequest,
    Intent,
    LastTodo,
    ListTodos,
    UpdateTodo,
)

# Anonymous mutations are named "_" by the todo backend's clients.
MUTATION_NAME = "_"


def encode_value(value: Any) -> str:
    """
    Encode a Python value as a GraphQL input literal.

    Strings become quoted string literals with backslash, quote and control
    characters escaped; booleans become the bare tokens ``true``/``false``.

    Args:
        value: Argument value

    Returns:
        GraphQL literal text
    """
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, (int, float)):
        return str(value)
    elif isinstance(value, str):
        # JSON string escapes are a subset of GraphQL's
        return json.dumps(value, ensure_ascii=False)
    elif isinstance(value, (list, tuple)):
        return "[" + ",".join(encode_value(item) for item in value) + "]"
    elif isinstance(value, dict):
        pairs = ",".join(f"{key}:{encode_value(item)}" for key, item in value.items())
        return "{" + pairs + "}"
    raise TypeError(f"Cannot encode {type(value).__name__} as a GraphQL literal")


def serialize(request: GraphQLRequest) -> str:
    """
    Render an abstract request as compact GraphQL text.

    Args:
        request: Request to render

    Returns:
        Query or mutation string
    """
    text = request.field
    if request.arguments:
        args = ",".join(
            f"{name}:{encode_value(value)}" for name, value in request.arguments.items()
        )
        text += f"({args})"
    if request.selection:
        text += "{" + ",".join(request.selection) + "}"

    if request.is_mutation:
        return f"mutation {MUTATION_NAME}{{{text}}}"
    return f"{{{text}}}"


def validate_text(text: Any) -> str:
    """
    Reject blank todo text.

    Raises:
        ValidationError: If ``text`` is empty or whitespace-only
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Please specify a task")
    return text


def to_request(intent: Intent) -> GraphQLRequest:
    """
    Map an intent onto the abstract request it stands for.

    Args:
        intent: One of the intent types in ``models``

    Returns:
        GraphQLRequest for the intent

    Raises:
        ValidationError: If a create intent carries blank text
    """
    if isinstance(intent, ListTodos):
        return GraphQLRequest(field="todoList", many=True)
    elif isinstance(intent, GetTodo):
        return GraphQLRequest(field="todo", arguments={"id": str(intent.id)})
    elif isinstance(intent, LastTodo):
        return GraphQLRequest(field="lastTodo")
    elif isinstance(intent, CreateTodo):
        return GraphQLRequest(
            field="createTodo",
            arguments={"text": validate_text(intent.text)},
            operation_type=GraphQLOperationType.MUTATION,
        )
    elif isinstance(intent, UpdateTodo):
        return GraphQLRequest(
            field="updateTodo",
            arguments={"id": str(intent.id), "done": bool(intent.done)},
            operation_type=GraphQLOperationType.MUTATION,
        )
    raise TypeError(f"Unknown intent: {intent!r}")


def build_query(intent: Intent) -> str:
    """Serialize an intent in one step."""
    return serialize(to_request(intent))


def build_list_query() -> str:
    return build_query(ListTodos())


def build_create_query(text: str) -> str:
    return build_query(CreateTodo(text))


def build_update_query(todo_id: str, done: bool) -> str:
    return build_query(UpdateTodo(todo_id, done))


def build_get_query(todo_id: str) -> str:
    return build_query(GetTodo(todo_id))
