"""Custom exception hierarchy for the crypto gateway."""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Classification of a failed gateway request."""

    VALIDATION = "ValidationError"
    UPSTREAM_STATUS = "UpstreamStatusError"
    UPSTREAM_UNREACHABLE = "UpstreamUnreachable"
    REQUEST_SETUP = "RequestSetupError"


class GatewayError(Exception):
    """Base exception for errors surfaced to gateway callers.

    Attributes:
        message: Summary placed in the ``error`` field of the response
        status_code: HTTP status returned to the caller
        details: Underlying cause placed in the ``details`` field (optional)
        provider: Upstream provider name (e.g., 'CoinGecko', 'CryptoPanic')
    """

    kind: ErrorKind
    default_status = 500

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any = None,
        provider: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status
        self.details = details
        self.provider = provider

    def to_body(self) -> dict[str, Any]:
        """Render the JSON error shape returned to callers."""
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ParameterValidationError(GatewayError):
    """Raised when a required caller parameter is missing."""

    kind = ErrorKind.VALIDATION
    default_status = 400


class UpstreamStatusError(GatewayError):
    """Raised when an upstream provider answers with a non-2xx status."""

    kind = ErrorKind.UPSTREAM_STATUS

    def __init__(
        self,
        message: str,
        status_code: int,
        details: Any = None,
        provider: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, details=details, provider=provider)


class UpstreamUnreachableError(GatewayError):
    """Raised when a request was sent but no response came back."""

    kind = ErrorKind.UPSTREAM_UNREACHABLE
    default_status = 503


class RequestSetupError(GatewayError):
    """Raised when the upstream request could not be built or sent."""

    kind = ErrorKind.REQUEST_SETUP
    default_status = 500
