"""
GraphQL console served on ``GET /graphql``.

Queries are executed directly against a configured schema and root value;
the upstream server is never consulted. A browser request without a query
gets an interactive GraphiQL page instead.
"""

from __future__ import annotations

import inspect
import json
import logging
from typing import Any, Dict, Optional, Tuple

from aiohttp import web
from graphql import (
    GraphQLError,
    GraphQLSchema,
    OperationType,
    build_schema,
    execute,
    get_operation_ast,
    parse,
    validate,
)

from ..config.models import GatewayConfig

logger = logging.getLogger(__name__)

GRAPHIQL_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>GraphiQL</title>
  <style>body { height: 100%; margin: 0; width: 100%; overflow: hidden; } #graphiql { height: 100vh; }</style>
  <link rel="stylesheet" href="https://unpkg.com/graphiql/graphiql.min.css" />
  <script crossorigin src="https://unpkg.com/react@18/umd/react.production.min.js"></script>
  <script crossorigin src="https://unpkg.com/react-dom@18/umd/react-dom.production.min.js"></script>
  <script crossorigin src="https://unpkg.com/graphiql/graphiql.min.js"></script>
</head>
<body>
  <div id="graphiql">Loading...</div>
  <script>
    const fetcher = GraphiQL.createFetcher({ url: window.location.pathname, method: 'GET' });
    ReactDOM.createRoot(document.getElementById('graphiql')).render(
      React.createElement(GraphiQL, { fetcher: fetcher })
    );
  </script>
</body>
</html>
"""

Result = Tuple[int, Dict[str, Any]]


def _errors(*messages: str) -> Dict[str, Any]:
    return {"errors": [{"message": message} for message in messages]}


async def execute_query(
    schema: GraphQLSchema,
    query: Optional[str],
    variables: Optional[str] = None,
    operation_name: Optional[str] = None,
    root_value: Any = None,
    allow_mutations: bool = False,
) -> Result:
    """
    Execute a GraphQL request taken from query-string parameters.

    Args:
        schema: Schema to execute against
        query: Query text
        variables: JSON-encoded variables, if any
        operation_name: Operation to run when the document holds several
        root_value: Root resolver object
        allow_mutations: Whether mutations may run over this transport

    Returns:
        Tuple of HTTP status and the GraphQL response envelope
    """
    if not query:
        return 400, _errors("Must provide query string.")

    variable_values = None
    if variables:
        try:
            variable_values = json.loads(variables)
        except json.JSONDecodeError:
            return 400, _errors("Variables are invalid JSON.")

    try:
        document = parse(query)
    except GraphQLError as e:
        return 400, {"errors": [e.formatted]}

    validation_errors = validate(schema, document)
    if validation_errors:
        return 400, {"errors": [e.formatted for e in validation_errors]}

    operation = get_operation_ast(document, operation_name)
    if (
        not allow_mutations
        and operation is not None
        and operation.operation != OperationType.QUERY
    ):
        return 405, _errors(
            f"Can only perform a {operation.operation.value} operation from a POST request."
        )

    result = execute(
        schema,
        document,
        root_value=root_value,
        variable_values=variable_values,
        operation_name=operation_name,
    )
    if inspect.isawaitable(result):
        result = await result

    payload: Dict[str, Any] = {"data": result.data}
    if result.errors:
        logger.warning("GraphQL execution errors: %s", [e.message for e in result.errors])
        payload["errors"] = [e.formatted for e in result.errors]
    return 200, payload


def wants_html(request: web.Request) -> bool:
    accept = request.headers.get("Accept", "")
    return "text/html" in accept and "query" not in request.query


class GraphQLConsole:
    """Executes console queries against the configured schema."""

    def __init__(self, config: GatewayConfig):
        self.config = config
        self.schema = build_schema(config.schema_sdl)
        self.root_value = dict(config.root_value)

    async def handle(self, request: web.Request) -> web.Response:
        """Handler for ``GET /graphql``."""
        if self.config.graphiql and wants_html(request):
            return web.Response(text=GRAPHIQL_HTML, content_type="text/html")

        status, payload = await execute_query(
            self.schema,
            request.query.get("query"),
            request.query.get("variables"),
            request.query.get("operationName"),
            root_value=self.root_value,
        )
        headers = {"Allow": "POST"} if status == 405 else None
        return web.json_response(payload, status=status, headers=headers)
