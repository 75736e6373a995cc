"""
View state of the todo list.

The rendering surface is an explicit ``ViewState`` owned by the
synchronizer. It only changes through ``apply`` with the patch types
defined here, so every change the UI goes through can be inspected.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Union

from ..graphql.models import TodoRecord

ChangeHandler = Callable[[str], Awaitable[object]]


@dataclass
class ItemView:
    """One rendered todo, keyed by the record id."""

    id: str
    text: str
    checked: bool = False
    done: bool = False
    on_change: Optional[ChangeHandler] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_record(cls, record: TodoRecord) -> "ItemView":
        return cls(id=record.id, text=record.text, checked=record.done, done=record.done)


@dataclass(frozen=True)
class ClearItems:
    """Remove every item from the surface."""


@dataclass(frozen=True)
class RemoveItem:
    id: str


@dataclass(frozen=True)
class AppendItem:
    record: TodoRecord


@dataclass(frozen=True)
class ReplaceItem:
    """Rewrite text and state of an item in place."""

    record: TodoRecord


@dataclass(frozen=True)
class SetDone:
    """Switch the done presentation of an item without touching its text."""

    id: str
    done: bool


@dataclass(frozen=True)
class ShowPlaceholder:
    message: str


@dataclass(frozen=True)
class HidePlaceholder:
    pass


Patch = Union[
    ClearItems, RemoveItem, AppendItem, ReplaceItem, SetDone, ShowPlaceholder, HidePlaceholder
]


class ViewState:
    """Ordered set of rendered items plus an optional empty-list placeholder."""

    def __init__(self, items: Optional[Iterable[ItemView]] = None) -> None:
        self.items: "OrderedDict[str, ItemView]" = OrderedDict()
        self.placeholder: Optional[str] = None
        for item in items or ():
            self.items[item.id] = item

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, todo_id: object) -> bool:
        return todo_id in self.items

    def ids(self) -> List[str]:
        return list(self.items)

    def get(self, todo_id: str) -> ItemView:
        try:
            return self.items[todo_id]
        except KeyError:
            raise KeyError(f"No rendered todo with id {todo_id!r}")

    def snapshot(self) -> Dict[str, TodoRecord]:
        """Records as currently shown, keyed by id."""
        return {
            item.id: TodoRecord(id=item.id, text=item.text, done=item.done)
            for item in self.items.values()
        }

    def apply(self, patches: Iterable[Patch]) -> None:
        """Apply patches in order."""
        for patch in patches:
            self._apply_one(patch)

    def _apply_one(self, patch: Patch) -> None:
        if isinstance(patch, ClearItems):
            self.items.clear()
        elif isinstance(patch, RemoveItem):
            self.items.pop(patch.id, None)
        elif isinstance(patch, AppendItem):
            # re-appending an id moves it rather than duplicating it
            self.items.pop(patch.record.id, None)
            self.items[patch.record.id] = ItemView.from_record(patch.record)
        elif isinstance(patch, ReplaceItem):
            current = self.get(patch.record.id)
            current.text = patch.record.text
            current.checked = patch.record.done
            current.done = patch.record.done
        elif isinstance(patch, SetDone):
            current = self.get(patch.id)
            current.done = patch.done
            current.checked = patch.done
        elif isinstance(patch, ShowPlaceholder):
            self.placeholder = patch.message
        elif isinstance(patch, HidePlaceholder):
            self.placeholder = None
        else:
            raise TypeError(f"Unknown patch: {patch!r}")
