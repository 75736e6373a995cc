"""
Demo todo GraphQL server.

Serves ``GET /graphql?query=...`` (queries and mutations alike) over an
in-memory store, plus a server-rendered page of the list at ``/``.
"""

from __future__ import annotations

import logging
from typing import Optional

from aiohttp import web

from ..config.models import ViewConfig
from ..exceptions import ValidationError
from ..gateway.console import execute_query
from ..graphql.builder import validate_text
from ..view.reconcile import reconcile
from ..view.render import render_page
from ..view.state import ViewState
from .schema import build_todo_schema
from .store import TodoStore

logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", TodoStore)


def create_upstream_app(
    store: Optional[TodoStore] = None, view_config: Optional[ViewConfig] = None
) -> web.Application:
    """
    Build the demo server application.

    Args:
        store: Store to serve; a freshly seeded one by default
        view_config: Rendering options for the HTML page
    """
    store = store if store is not None else TodoStore()
    view_config = view_config or ViewConfig()
    schema = build_todo_schema(store)

    async def handle_graphql(request: web.Request) -> web.Response:
        status, payload = await execute_query(
            schema,
            request.query.get("query"),
            request.query.get("variables"),
            request.query.get("operationName"),
            allow_mutations=True,
        )
        return web.json_response(payload, status=status)

    async def handle_index(request: web.Request) -> web.Response:
        state = ViewState()
        state.apply(reconcile(state, store.list(), view_config.empty_message))
        return web.Response(text=render_page(state, view_config), content_type="text/html")

    async def handle_add(request: web.Request) -> web.Response:
        form = await request.post()
        try:
            text = validate_text(form.get("text"))
        except ValidationError as e:
            return web.Response(status=400, text=e.message)
        todo = store.create(text)
        logger.info("Created todo %s", todo.id)
        raise web.HTTPSeeOther("/")

    app = web.Application()
    app[STORE_KEY] = store
    app.router.add_get("/graphql", handle_graphql)
    app.router.add_get("/", handle_index)
    app.router.add_post("/todos", handle_add)
    return app


def run_upstream(
    host: str = "0.0.0.0", port: int = 8080, view_config: Optional[ViewConfig] = None
) -> None:
    """Serve the demo todo server until interrupted."""
    logger.info("Todo server running on http://%s:%s/graphql", host, port)
    web.run_app(create_upstream_app(view_config=view_config), host=host, port=port, print=None)
