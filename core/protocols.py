"""Shared protocol definitions."""

from typing import Any, Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard, ConsoleLogger)."""

    def log_request(
        self,
        provider: str,
        operation: str,
        url: str,
        params: dict[str, str],
        headers: dict[str, str],
    ) -> None: ...
    def log_response(self, provider: str, operation: str, status: int, body: Any) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
