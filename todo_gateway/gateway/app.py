"""
Gateway application factory.

The gateway exposes two surfaces: ``GET /graphql`` runs the console schema
locally, and ``POST /{any path}`` is relayed to the upstream server as a
GET request.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Optional

import aiohttp
from aiohttp import web

from ..config.models import AppConfig
from .console import GraphQLConsole
from .relay import RELAY_KEY, GatewayRelay, handle_relay

logger = logging.getLogger(__name__)

CONSOLE_KEY = web.AppKey("console", GraphQLConsole)


def create_app(
    config: Optional[AppConfig] = None,
    session: Optional[aiohttp.ClientSession] = None,
) -> web.Application:
    """
    Build the gateway application.

    Args:
        config: Application configuration
        session: Outbound session to use instead of creating one on startup

    Returns:
        Configured aiohttp application
    """
    config = config or AppConfig()
    app = web.Application()
    app[CONSOLE_KEY] = GraphQLConsole(config.gateway)

    async def relay_session(app: web.Application) -> AsyncIterator[None]:
        if session is not None:
            app[RELAY_KEY] = GatewayRelay(config.upstream, session)
            yield
            return
        async with aiohttp.ClientSession() as own_session:
            app[RELAY_KEY] = GatewayRelay(config.upstream, own_session)
            logger.info("Relaying POST requests to %s", config.upstream.base_url)
            yield

    app.cleanup_ctx.append(relay_session)
    app.router.add_get("/graphql", app[CONSOLE_KEY].handle)
    app.router.add_post("/{tail:.*}", handle_relay)
    return app


def run_gateway(config: Optional[AppConfig] = None) -> None:
    """Serve the gateway until interrupted."""
    config = config or AppConfig()
    logger.info(
        "GraphQL playground gateway running on http://%s:%s/graphql",
        config.gateway.host,
        config.gateway.port,
    )
    web.run_app(
        create_app(config),
        host=config.gateway.host,
        port=config.gateway.port,
        print=None,
    )
