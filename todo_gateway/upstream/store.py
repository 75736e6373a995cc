"""In-memory todo store backing the demo server."""

from __future__ import annotations

import random
import string
from typing import Iterable, List, Optional

from ..graphql.models import TodoRecord

SEED_TODOS = (
    TodoRecord(id="a", text="A todo not to forget", done=False),
    TodoRecord(id="b", text="This is the most important", done=False),
    TodoRecord(id="c", text="Please do this or else", done=False),
)

ID_LENGTH = 8


def random_id(length: int = ID_LENGTH) -> str:
    return "".join(random.choices(string.ascii_letters, k=length))


class TodoStore:
    """
    Ordered todo collection.

    Not persistent and not shared between processes.
    """

    def __init__(self, todos: Optional[Iterable[TodoRecord]] = None) -> None:
        self._todos: List[TodoRecord] = list(SEED_TODOS if todos is None else todos)

    def list(self) -> List[TodoRecord]:
        return list(self._todos)

    def get(self, todo_id: str) -> Optional[TodoRecord]:
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        return None

    def last(self) -> Optional[TodoRecord]:
        return self._todos[-1] if self._todos else None

    def create(self, text: str) -> TodoRecord:
        existing = {todo.id for todo in self._todos}
        new_id = random_id()
        while new_id in existing:
            new_id = random_id()
        todo = TodoRecord(id=new_id, text=text, done=False)
        self._todos.append(todo)
        return todo

    def update(self, todo_id: str, done: bool) -> TodoRecord:
        """
        Set the done flag of ``todo_id``.

        An unknown id yields an empty record and changes nothing.
        """
        for i, todo in enumerate(self._todos):
            if todo.id == todo_id:
                self._todos[i] = todo.model_copy(update={"done": done})
                return self._todos[i]
        return TodoRecord(id="", text="", done=False)
