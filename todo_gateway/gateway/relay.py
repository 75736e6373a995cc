"""
POST-to-GET relay.

Any ``POST /<path>`` with a flat JSON object body is re-issued as
``GET <upstream>/<path>?<body as query parameters>`` and the upstream
response is handed back to the caller unchanged. The relay does not look
at what the parameters mean.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import aiohttp
from aiohttp import web

from ..config.models import UpstreamConfig
from ..exceptions import ErrorHandler, GatewayRelayError, ValidationError

logger = logging.getLogger(__name__)

Params = List[Tuple[str, str]]


@dataclass
class RelayResponse:
    """Upstream answer as it will be handed back to the caller."""

    status: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)


def error_body(message: str) -> bytes:
    """GraphQL-shaped error payload for failures the gateway answers itself."""
    return json.dumps({"errors": [{"message": message}]}).encode("utf-8")


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def parse_params(body: bytes) -> Params:
    """
    Turn a JSON request body into an ordered list of query parameters.

    An empty body is an empty parameter set. ``null`` values are dropped,
    lists repeat their key and nested objects are sent as compact JSON.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    if not body.strip():
        return []
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"Request body is not valid JSON: {e}")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    params: Params = []
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, list):
            params.extend((key, _param_value(item)) for item in value if item is not None)
        else:
            params.append((key, _param_value(value)))
    return params


def upstream_url(base_url: str, path: str) -> str:
    """Join the upstream base URL and the inbound request path."""
    return base_url.rstrip("/") + "/" + path.lstrip("/")


class GatewayRelay:
    """Issues the outbound GET for each relayed request."""

    def __init__(self, config: UpstreamConfig, session: aiohttp.ClientSession):
        self.config = config
        self._session = session

    async def relay(self, path: str, params: Params) -> RelayResponse:
        """
        Forward one request upstream.

        Non-2xx upstream answers are returned like any other answer.

        Args:
            path: Inbound request path
            params: Query parameters for the outbound GET

        Returns:
            RelayResponse with the upstream status, body and content type

        Raises:
            GatewayRelayError: If no upstream response could be obtained
        """
        url = upstream_url(self.config.base_url, path)
        try:
            async with self._session.get(
                url,
                params=params,
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            ) as response:
                body = await response.read()
                headers = {}
                if "Content-Type" in response.headers:
                    headers["Content-Type"] = response.headers["Content-Type"]
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            error = ErrorHandler.handle_aiohttp_error(e, url, self.config.timeout)
            raise GatewayRelayError(
                error.message,
                url=url,
                status_code=ErrorHandler.relay_status(error),
                body=error_body(error.message),
            )

        if status >= 400:
            logger.warning("Upstream GET %s answered %s", url, status)
        else:
            logger.debug("Upstream GET %s answered %s", url, status)
        return RelayResponse(status=status, body=body, headers=headers)


RELAY_KEY = web.AppKey("relay", GatewayRelay)


async def handle_relay(request: web.Request) -> web.Response:
    """Handler for ``POST /*``."""
    relay = request.app[RELAY_KEY]
    try:
        params = parse_params(await request.read())
    except ValidationError as e:
        return web.Response(
            status=400, body=error_body(e.message), content_type="application/json"
        )

    try:
        result = await relay.relay(request.rel_url.raw_path, params)
    except GatewayRelayError as e:
        logger.warning("Relay of %s failed: %s", request.path, e.message)
        return web.Response(
            status=e.status_code or 502,
            body=e.body or error_body(e.message),
            content_type="application/json",
        )

    return web.Response(status=result.status, body=result.body, headers=result.headers)
