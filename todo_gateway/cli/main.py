#!/usr/bin/env python3
"""
Command-line interface for todo_gateway.

Runs the gateway or the demo todo server, and drives the todo view against
a GraphQL endpoint from the terminal.
"""

import asyncio
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional
from urllib.parse import urlsplit

import click

from ..config.loader import ConfigLoader
from ..config.models import AppConfig, LogLevel
from ..exceptions import TodoGatewayError, ValidationError
from ..graphql.builder import validate_text
from ..graphql.client import TodoClient
from ..logging import setup_logging
from ..view.synchronizer import ViewSynchronizer


def _config(ctx: click.Context) -> AppConfig:
    return ctx.obj["config"]


def _run_view(
    ctx: click.Context, action: Callable[[ViewSynchronizer], Awaitable[None]]
) -> None:
    """Run ``action`` against a synchronizer and print the rendered list."""
    config = _config(ctx)

    async def run() -> str:
        async with TodoClient(config.client) as client:
            sync = ViewSynchronizer(client, config.view)
            await action(sync)
            return sync.render()

    try:
        click.echo(asyncio.run(run()))
    except ValidationError as e:
        click.echo(e.message, err=True)
        sys.exit(2)
    except TodoGatewayError as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="graphql-todo-gateway")
@click.option("--config", "-c", type=click.Path(exists=True), help="Configuration file path")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """GraphQL todo gateway, demo server and client."""
    ctx.ensure_object(dict)
    try:
        app_config = ConfigLoader().load_config(config)
    except TodoGatewayError as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)

    if verbose:
        app_config.logging.level = LogLevel.DEBUG
    setup_logging(app_config.logging)
    ctx.obj["config"] = app_config


@cli.command()
@click.option("--host", help="Listen host")
@click.option("--port", "-p", type=int, help="Listen port")
@click.option("--upstream", "-u", help="Base URL of the upstream GraphQL server")
@click.option(
    "--schema-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="SDL file for the GET /graphql console",
)
@click.pass_context
def gateway(
    ctx: click.Context,
    host: Optional[str],
    port: Optional[int],
    upstream: Optional[str],
    schema_file: Optional[Path],
) -> None:
    """Run the POST-to-GET GraphQL gateway."""
    from ..gateway.app import run_gateway

    config = _config(ctx)
    if host:
        config.gateway.host = host
    if port is not None:
        config.gateway.port = port
    if upstream:
        config.upstream.base_url = upstream
    if schema_file:
        config.gateway.schema_sdl = schema_file.read_text(encoding="utf-8")
    run_gateway(config)


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Listen host")
@click.option(
    "--port", "-p", type=int, help="Listen port (default: the configured upstream port)"
)
@click.pass_context
def upstream(ctx: click.Context, host: str, port: Optional[int]) -> None:
    """Run the demo in-memory todo GraphQL server."""
    from ..upstream.server import run_upstream

    config = _config(ctx)
    if port is None:
        port = urlsplit(config.upstream.base_url).port or 8080
    run_upstream(host, port, config.view)


@cli.command(name="list")
@click.pass_context
def list_todos(ctx: click.Context) -> None:
    """Load and print the todo list."""

    async def action(sync: ViewSynchronizer) -> None:
        await sync.load()

    _run_view(ctx, action)


@cli.command()
@click.argument("text")
@click.pass_context
def add(ctx: click.Context, text: str) -> None:
    """Create a todo and print the list with it appended."""

    async def action(sync: ViewSynchronizer) -> None:
        validate_text(text)
        await sync.load()
        await sync.create(text)

    _run_view(ctx, action)


@cli.command()
@click.argument("todo_id")
@click.option("--done/--not-done", default=True, help="New state of the checkbox")
@click.pass_context
def toggle(ctx: click.Context, todo_id: str, done: bool) -> None:
    """Check or uncheck a todo."""

    async def action(sync: ViewSynchronizer) -> None:
        await sync.load()
        if todo_id not in sync.state:
            raise TodoGatewayError(f"No todo with id {todo_id!r}")
        await sync.change(todo_id, done)

    _run_view(ctx, action)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
