"""
Reconciliation of a view state against freshly loaded records.

``reconcile`` is pure: it reads the old state and returns the patches that
make the surface show exactly ``records``. It never mutates its inputs.
"""

from __future__ import annotations

from typing import List, Sequence

from ..graphql.models import TodoRecord
from .state import (
    AppendItem,
    ClearItems,
    HidePlaceholder,
    Patch,
    RemoveItem,
    ReplaceItem,
    ShowPlaceholder,
    ViewState,
)


def reconcile(
    old: ViewState, records: Sequence[TodoRecord], empty_message: str
) -> List[Patch]:
    """
    Compute the patches that move ``old`` to a rendering of ``records``.

    Items that are unchanged produce no patch. When surviving items would
    change their relative order the whole list is cleared and re-appended.

    Args:
        old: Current view state
        records: Records returned by a full load
        empty_message: Placeholder text shown for an empty list

    Returns:
        Ordered list of patches
    """
    patches: List[Patch] = []

    if not records:
        if len(old):
            patches.append(ClearItems())
        if old.placeholder != empty_message:
            patches.append(ShowPlaceholder(empty_message))
        return patches

    if old.placeholder is not None:
        patches.append(HidePlaceholder())

    new_ids = [record.id for record in records]
    if len(set(new_ids)) != len(new_ids):
        raise ValueError("Duplicate todo ids in response")

    new_set = set(new_ids)
    shown = old.snapshot()
    surviving = [todo_id for todo_id in old.ids() if todo_id in new_set]
    kept_order = [todo_id for todo_id in new_ids if todo_id in shown]
    # appends land at the end, so kept items must lead the new list in order
    in_order = surviving == kept_order and new_ids[: len(kept_order)] == kept_order

    if not in_order:
        if len(old):
            patches.append(ClearItems())
        patches.extend(AppendItem(record) for record in records)
        return patches

    patches.extend(RemoveItem(todo_id) for todo_id in old.ids() if todo_id not in new_set)
    for record in records:
        current = shown.get(record.id)
        if current is None:
            patches.append(AppendItem(record))
        elif current != record or old.get(record.id).checked != record.done:
            patches.append(ReplaceItem(record))
    return patches
