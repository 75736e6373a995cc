"""
GraphQL models and data structures.

This module defines the todo record, the query intents understood by the
builder, and the abstract request an intent is turned into before it is
serialized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

TODO_FIELDS: Tuple[str, ...] = ("id", "text", "done")


class TodoRecord(BaseModel):
    """A single todo as returned by the upstream server."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Opaque server-assigned identifier")
    text: str = Field(default="", description="Free-form todo text")
    done: bool = Field(default=False, description="Completion flag")


class GraphQLOperationType(str, Enum):
    """GraphQL operation types."""

    QUERY = "query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class ListTodos:
    """Intent: fetch the whole todo collection."""


@dataclass(frozen=True)
class GetTodo:
    """Intent: fetch one todo by id."""

    id: str


@dataclass(frozen=True)
class LastTodo:
    """Intent: fetch the most recently added todo."""


@dataclass(frozen=True)
class CreateTodo:
    """Intent: create a todo with the given text."""

    text: str


@dataclass(frozen=True)
class UpdateTodo:
    """Intent: set the done flag of one todo."""

    id: str
    done: bool


Intent = Union[ListTodos, GetTodo, LastTodo, CreateTodo, UpdateTodo]


@dataclass
class GraphQLRequest:
    """
    Abstract GraphQL request: one root field, typed arguments, a selection.

    The request is rendered to text only by ``builder.serialize``, which is the
    single place argument values are escaped.
    """

    field: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    selection: Tuple[str, ...] = TODO_FIELDS
    operation_type: GraphQLOperationType = GraphQLOperationType.QUERY
    many: bool = False

    @property
    def is_mutation(self) -> bool:
        return self.operation_type == GraphQLOperationType.MUTATION
