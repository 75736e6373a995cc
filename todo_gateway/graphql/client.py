"""
GraphQL transport client.

This module provides the client that carries a built query string to the
todo GraphQL endpoint as the ``query`` parameter of a GET request and
decodes the ``{data: {<field>: <payload>}}`` envelope it answers with.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, List, Optional, Union

import aiohttp
from pydantic import ValidationError as PydanticValidationError

from ..config.models import ClientConfig
from ..exceptions import DecodeError, ErrorHandler, HTTPStatusError
from .builder import serialize, to_request
from .models import GraphQLRequest, Intent, TodoRecord

logger = logging.getLogger(__name__)

Payload = Union[TodoRecord, List[TodoRecord]]


def decode_envelope(
    text: str, field: Optional[str] = None, url: Optional[str] = None
) -> Any:
    """
    Extract the payload of a GraphQL response envelope.

    Args:
        text: Raw response body
        field: Root field to extract; when omitted the envelope must hold
            exactly one field
        url: URL the body came from, for error context

    Returns:
        The raw payload under ``data.<field>``

    Raises:
        DecodeError: If the body is not JSON or lacks the expected shape
    """
    try:
        envelope = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"Invalid JSON response: {e}", url=url, response_text=text
        ) from e

    if not isinstance(envelope, dict) or not isinstance(envelope.get("data"), dict):
        errors = envelope.get("errors") if isinstance(envelope, dict) else None
        raise DecodeError(
            "Response has no data object", url=url, response_text=text, errors=errors
        )

    data = envelope["data"]
    if field is None:
        if len(data) != 1:
            raise DecodeError(
                f"Expected one root field, got {sorted(data)}",
                url=url,
                response_text=text,
            )
        field = next(iter(data))

    if data.get(field) is None:
        raise DecodeError(
            f"Response has no payload for {field!r}",
            url=url,
            response_text=text,
            errors=envelope.get("errors"),
        )
    return data[field]


def to_records(
    payload: Any, url: Optional[str] = None, many: Optional[bool] = None
) -> Payload:
    """
    Validate a decoded payload as one todo record or a list of them.

    When ``many`` is given the payload must be a list exactly when it is true.
    """
    if many is not None and isinstance(payload, list) != many:
        expected = "a list of todos" if many else "a single todo"
        raise DecodeError(f"Expected {expected} in response", url=url)
    try:
        if isinstance(payload, list):
            return [TodoRecord.model_validate(item) for item in payload]
        return TodoRecord.model_validate(payload)
    except PydanticValidationError as e:
        raise DecodeError(f"Unexpected todo payload: {e}", url=url) from e


class TodoClient:
    """
    Client for the todo GraphQL endpoint.

    Every call is a single GET with no retry. The configured timeout bounds
    each call; callers may impose a tighter one themselves.

    Examples:
        ```python
        async with TodoClient(ClientConfig(endpoint="http://localhost:8080/graphql")) as client:
            todos = await client.execute(ListTodos())
            created = await client.execute(CreateTodo("Buy milk"))
        ```
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration
            session: Externally owned session to reuse instead of creating one
        """
        self.config = config or ClientConfig()
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "TodoClient":
        await self._create_session()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _create_session(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
                headers=self.config.headers,
            )
            self._owns_session = True

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def send(self, query: Union[str, GraphQLRequest]) -> Payload:
        """
        Send a query and return its decoded payload.

        Args:
            query: Query string, or an abstract request to serialize

        Returns:
            A TodoRecord or a list of them

        Raises:
            TransportError: On network failure or a non-2xx status
            DecodeError: If the response cannot be decoded
        """
        field = None
        many = None
        if isinstance(query, GraphQLRequest):
            field = query.field
            many = query.many
            query = serialize(query)

        text = await self.fetch_raw(query)
        payload = decode_envelope(text, field, url=self.config.endpoint)
        return to_records(payload, url=self.config.endpoint, many=many)

    async def execute(self, intent: Intent) -> Payload:
        """Build the query for ``intent`` and send it."""
        return await self.send(to_request(intent))

    async def fetch_raw(self, query: str) -> str:
        """
        Issue the GET carrying ``query`` and return the response body.

        Raises:
            TransportError: On network failure or a non-2xx status
        """
        await self._create_session()
        assert self._session is not None
        url = self.config.endpoint

        logger.debug("GraphQL GET %s query=%s", url, query)
        try:
            async with self._session.get(
                url,
                params={"query": query},
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            ) as response:
                text = await response.text()
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            error = ErrorHandler.handle_aiohttp_error(e, url, self.config.timeout)
            logger.warning("GraphQL request to %s failed: %s", url, error)
            raise error

        if not 200 <= status < 300:
            logger.warning("GraphQL request to %s answered %s", url, status)
            raise HTTPStatusError(
                f"GraphQL endpoint answered HTTP {status}",
                url=url,
                status_code=status,
                response_text=text,
            )
        return text
