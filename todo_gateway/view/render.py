"""
HTML rendering of the todo view.

Items are rendered either with the built-in markup or, when
``ViewConfig.use_template`` is set, through ``ViewConfig.item_template``
(a ``string.Template`` with ``$id``, ``$text``, ``$checked`` and
``$done_class`` placeholders). All substituted values are HTML-escaped.
"""

from __future__ import annotations

from html import escape
from string import Template

from ..config.models import ViewConfig
from .state import ItemView, ViewState

PAGE_TEMPLATE = Template(
    """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>$title</title>
</head>
<body>
  <form class="todo-add-form" method="post" action="/todos">
    <input id="task" name="text" type="text" placeholder="What needs to be done?">
    <button type="submit">Add</button>
  </form>
  $list
</body>
</html>
"""
)


def render_item(item: ItemView, config: ViewConfig) -> str:
    checked = ' checked="checked"' if item.checked else ""
    done_class = " done" if item.done else ""
    todo_id = escape(item.id)
    text = escape(item.text)

    if config.use_template:
        return Template(config.item_template).safe_substitute(
            id=todo_id, text=text, checked=checked, done_class=done_class
        )

    checkbox = f'<input id="{todo_id}" type="checkbox"{checked}>'
    label = f'<label for="{todo_id}">{checkbox}{text}</label>'
    return f'<div class="todo-item{done_class}" data-id="{todo_id}">{label}</div>'


def render_list(state: ViewState, config: ViewConfig) -> str:
    """Render the list container with its items or the placeholder."""
    parts = []
    if state.placeholder is not None:
        parts.append(f"<p>{escape(state.placeholder)}</p>")
    parts.extend(render_item(item, config) for item in state.items.values())
    return '<div class="todo-list-container">' + "".join(parts) + "</div>"


def render_page(state: ViewState, config: ViewConfig, title: str = "Todos") -> str:
    """Render a complete HTML page around the list."""
    return PAGE_TEMPLATE.substitute(title=escape(title), list=render_list(state, config))
