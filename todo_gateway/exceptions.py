"""
Exception hierarchy for the todo gateway.

Every error is scoped to the single operation that raised it. Validation
problems are reported before any network call; transport, decode and relay
problems carry enough context (URL, status, raw body) for the caller to
report them.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import aiohttp


class TodoGatewayError(Exception):
    """
    Base exception for all todo gateway operations.

    Attributes:
        message: Human-readable error message
        url: URL involved in the failure (if applicable)
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = kwargs


class ValidationError(TodoGatewayError):
    """
    Raised when input is rejected before any request is issued.

    The typical case is blank or whitespace-only todo text.
    """

    pass


class ConfigurationError(TodoGatewayError):
    """Raised when configuration cannot be loaded or parsed."""

    pass


class TransportError(TodoGatewayError):
    """
    Raised when an outbound HTTP call fails.

    Attributes:
        status_code: HTTP status of the response, if one was received
        response_text: Raw response body, if one was received
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, url, **kwargs)
        self.status_code = status_code
        self.response_text = response_text


class ConnectionError(TransportError):
    """Raised when the remote host cannot be reached."""

    pass


class TimeoutError(TransportError):
    """
    Raised when an outbound call exceeds its timeout.

    Attributes:
        timeout_value: The timeout that was exceeded (in seconds)
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        timeout_value: Optional[float] = None,
    ) -> None:
        super().__init__(message, url)
        self.timeout_value = timeout_value


class HTTPStatusError(TransportError):
    """Raised when the remote side answers with a non-2xx status."""

    pass


class DecodeError(TransportError):
    """Raised when a response is not JSON or lacks the ``{data: {...}}`` envelope."""

    pass


class GatewayRelayError(TransportError):
    """
    Raised when the gateway cannot complete its outbound relay.

    Attributes:
        body: Raw upstream body to hand back to the caller, if any
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[bytes] = None,
    ) -> None:
        super().__init__(message, url, status_code=status_code)
        self.body = body


class ErrorHandler:
    """Converts aiohttp and asyncio failures into gateway exceptions."""

    @staticmethod
    def handle_aiohttp_error(
        error: Exception, url: Optional[str] = None, timeout: Optional[float] = None
    ) -> TransportError:
        """
        Convert an aiohttp exception to a TransportError subclass.

        Args:
            error: The original exception
            url: The URL that caused the error
            timeout: Timeout in force when the error happened

        Returns:
            Appropriate TransportError subclass
        """
        if isinstance(error, asyncio.TimeoutError):
            return TimeoutError(
                f"Request timed out: {error}", url=url, timeout_value=timeout
            )

        elif isinstance(error, aiohttp.ClientConnectionError):
            return ConnectionError(f"Connection error: {error}", url=url)

        elif isinstance(error, aiohttp.ClientResponseError):
            return HTTPStatusError(
                f"HTTP {error.status}: {error.message}",
                url=url,
                status_code=error.status,
            )

        else:
            return TransportError(f"Unexpected network error: {error}", url=url)

    @staticmethod
    def relay_status(error: TransportError) -> int:
        """
        Pick the status the gateway answers with for a failed relay.

        Args:
            error: Failure of the outbound call

        Returns:
            HTTP status code for the original caller
        """
        if isinstance(error, TimeoutError):
            return 504
        if error.status_code is not None:
            return error.status_code
        return 502
