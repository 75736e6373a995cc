"""
Todo view synchronization.

The view is an explicit state object; ``reconcile`` computes the patches
that move it to a new record list and ``ViewSynchronizer`` drives it from
UI actions.
"""

from .reconcile import reconcile
from .render import render_item, render_list, render_page
from .state import (
    AppendItem,
    ClearItems,
    HidePlaceholder,
    ItemView,
    Patch,
    RemoveItem,
    ReplaceItem,
    SetDone,
    ShowPlaceholder,
    ViewState,
)
from .synchronizer import ViewSynchronizer

__all__ = [
    "ViewSynchronizer",
    "ViewState",
    "ItemView",
    "Patch",
    "ClearItems",
    "RemoveItem",
    "AppendItem",
    "ReplaceItem",
    "SetDone",
    "ShowPlaceholder",
    "HidePlaceholder",
    "reconcile",
    "render_item",
    "render_list",
    "render_page",
]
