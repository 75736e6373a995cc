"""
Protocol-translating GraphQL gateway.
"""

from .app import create_app, run_gateway
from .console import GraphQLConsole, execute_query
from .relay import GatewayRelay, RelayResponse, parse_params, upstream_url

__all__ = [
    "create_app",
    "run_gateway",
    "GraphQLConsole",
    "execute_query",
    "GatewayRelay",
    "RelayResponse",
    "parse_params",
    "upstream_url",
]
