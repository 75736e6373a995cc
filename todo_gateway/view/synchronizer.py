"""
View synchronizer.

Keeps a ``ViewState`` in step with the todo server:

- ``load`` fetches the whole list and reconciles the state against it.
- ``create`` validates the text, creates one todo and appends only that item.
- ``toggle`` sends the checkbox state of one item and patches its done
  presentation in place.

A failed request leaves the state exactly as it was.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from ..config.models import ViewConfig
from ..exceptions import DecodeError, TransportError
from ..graphql.builder import validate_text
from ..graphql.client import Payload
from ..graphql.models import CreateTodo, Intent, ListTodos, TodoRecord, UpdateTodo
from .reconcile import reconcile
from .render import render_list
from .state import AppendItem, HidePlaceholder, Patch, SetDone, ViewState

logger = logging.getLogger(__name__)


class TodoExecutor(Protocol):
    async def execute(self, intent: Intent) -> Payload: ...


class ViewSynchronizer:
    """Drives a ViewState from UI actions."""

    def __init__(
        self,
        client: TodoExecutor,
        config: Optional[ViewConfig] = None,
        state: Optional[ViewState] = None,
    ):
        self.client = client
        self.config = config or ViewConfig()
        self.state = state if state is not None else ViewState()

    async def load(self) -> List[Patch]:
        """
        Fetch every todo and make the state show exactly that list.

        Returns:
            The patches that were applied
        """
        records = await self.client.execute(ListTodos())
        if not isinstance(records, list):
            raise DecodeError("todoList did not return a list")

        try:
            patches = reconcile(self.state, records, self.config.empty_message)
        except ValueError as e:
            raise DecodeError(str(e)) from e

        self.state.apply(patches)
        self._bind_handlers()
        logger.debug("Loaded %d todos with %d patches", len(records), len(patches))
        return patches

    async def create(self, text: str) -> TodoRecord:
        """
        Create a todo and append it to the view.

        Raises:
            ValidationError: If ``text`` is blank; no request is issued
        """
        validate_text(text)
        record = await self._expect_record(CreateTodo(text))

        patches: List[Patch] = []
        if self.state.placeholder is not None:
            patches.append(HidePlaceholder())
        patches.append(AppendItem(record))
        self.state.apply(patches)
        self._bind_handlers()
        return record

    async def toggle(self, todo_id: str) -> TodoRecord:
        """
        Send the current checkbox state of ``todo_id`` and apply the result.

        Only the done presentation of that item changes; its text and id are
        left as rendered. With ``full_reload_on_toggle`` the whole list is
        reloaded instead.
        """
        checked = self.state.get(todo_id).checked
        record = await self._expect_record(UpdateTodo(todo_id, checked))

        if self.config.full_reload_on_toggle:
            await self.load()
        elif todo_id in self.state:
            self.state.apply([SetDone(todo_id, record.done)])
        return record

    async def change(self, todo_id: str, checked: bool) -> None:
        """
        Simulate the user changing a checkbox and run its bound handler.

        Args:
            todo_id: Item whose checkbox changed
            checked: New checkbox state
        """
        item = self.state.get(todo_id)
        previous = item.checked
        item.checked = checked
        if item.on_change is None:
            return
        try:
            await item.on_change(todo_id)
        except TransportError:
            item.checked = previous
            raise

    def render(self) -> str:
        return render_list(self.state, self.config)

    async def _expect_record(self, intent: Intent) -> TodoRecord:
        record = await self.client.execute(intent)
        if not isinstance(record, TodoRecord):
            raise DecodeError(f"Expected a single todo for {type(intent).__name__}")
        return record

    def _bind_handlers(self) -> None:
        for item in self.state.items.values():
            if item.on_change is None:
                item.on_change = self.toggle
