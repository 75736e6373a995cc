"""
GraphQL schema of the demo todo server.

Queries: ``todo(id)``, ``lastTodo``, ``todoList``.
Mutations: ``createTodo(text: String!)``, ``updateTodo(id: String!, done: Boolean)``.
"""

from __future__ import annotations

from typing import Any, Optional

from graphql import (
    GraphQLArgument,
    GraphQLBoolean,
    GraphQLField,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
)

from ..graphql.models import TodoRecord
from .store import TodoStore

todo_type = GraphQLObjectType(
    "Todo",
    lambda: {
        "id": GraphQLField(GraphQLString),
        "text": GraphQLField(GraphQLString),
        "done": GraphQLField(GraphQLBoolean),
    },
)


def build_todo_schema(store: TodoStore) -> GraphQLSchema:
    """Build a schema whose resolvers read and write ``store``."""

    def resolve_todo(_root: Any, _info: Any, id: Optional[str] = None) -> TodoRecord:
        found = store.get(id) if id is not None else None
        return found or TodoRecord(id="", text="", done=False)

    def resolve_last(_root: Any, _info: Any) -> Optional[TodoRecord]:
        return store.last()

    def resolve_list(_root: Any, _info: Any) -> list:
        return store.list()

    def resolve_create(_root: Any, _info: Any, text: str) -> TodoRecord:
        return store.create(text)

    def resolve_update(
        _root: Any, _info: Any, id: str, done: Optional[bool] = None
    ) -> TodoRecord:
        return store.update(id, bool(done))

    query = GraphQLObjectType(
        "RootQuery",
        {
            "todo": GraphQLField(
                todo_type,
                args={"id": GraphQLArgument(GraphQLString)},
                resolve=resolve_todo,
                description="Get single todo",
            ),
            "lastTodo": GraphQLField(
                todo_type, resolve=resolve_last, description="Last todo added"
            ),
            "todoList": GraphQLField(
                GraphQLList(todo_type), resolve=resolve_list, description="List of todos"
            ),
        },
    )

    mutation = GraphQLObjectType(
        "RootMutation",
        {
            "createTodo": GraphQLField(
                todo_type,
                args={"text": GraphQLArgument(GraphQLNonNull(GraphQLString))},
                resolve=resolve_create,
                description="Create new todo",
            ),
            "updateTodo": GraphQLField(
                todo_type,
                args={
                    "done": GraphQLArgument(GraphQLBoolean),
                    "id": GraphQLArgument(GraphQLNonNull(GraphQLString)),
                },
                resolve=resolve_update,
                description="Update existing todo, mark it done or not done",
            ),
        },
    )

    return GraphQLSchema(query=query, mutation=mutation)
