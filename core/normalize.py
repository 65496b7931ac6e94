"""Normalization of upstream failures into gateway errors.

Every route shares these helpers so that the error shape returned to callers
is the same regardless of which provider failed:

- non-2xx response: status mirrored, ``details`` carries the upstream body
- response body that cannot be decoded: 502
- no response (connection refused, timeout, read error): 503
- request could not be built or sent: 500
"""

from typing import Any

import httpx

from core.exceptions import (
    GatewayError,
    RequestSetupError,
    UpstreamStatusError,
    UpstreamUnreachableError,
)
from core.operations import not_found_message
from core.request_types import OutboundRequest

SETUP_ERROR_MESSAGE = "Error setting up the request"

# Raised before any bytes reach the provider
SETUP_ERRORS: tuple[type[Exception], ...] = (
    httpx.InvalidURL,
    httpx.UnsupportedProtocol,
    httpx.LocalProtocolError,
    ValueError,
    TypeError,
)


def decode_body(response: httpx.Response) -> Any:
    """Return the upstream body as JSON when possible, raw text otherwise."""
    try:
        return response.json()
    except ValueError:
        return response.text


def status_error(response: httpx.Response, request: OutboundRequest) -> UpstreamStatusError:
    """Build the error for a non-2xx upstream response."""
    message = request.context or f"Error fetching data from {request.provider}"
    if response.status_code == 404:
        message = not_found_message(request.operation, request.coin_id) or message
    return UpstreamStatusError(
        message,
        status_code=response.status_code,
        details=decode_body(response),
        provider=request.provider,
    )


def normalize_failure(exc: Exception, *, provider: str) -> GatewayError:
    """Map an exception raised while calling a provider to a gateway error.

    ``exc`` is one of ``SETUP_ERRORS`` or an ``httpx.RequestError``.
    """
    if isinstance(exc, SETUP_ERRORS):
        return RequestSetupError(SETUP_ERROR_MESSAGE, details=_describe(exc), provider=provider)
    if isinstance(exc, httpx.DecodingError):
        # A response arrived but its body could not be decoded
        return UpstreamStatusError(
            f"Invalid response from {provider}",
            status_code=502,
            details=_describe(exc),
            provider=provider,
        )
    return UpstreamUnreachableError(
        f"No response from {provider}",
        details=_describe(exc),
        provider=provider,
    )


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__
