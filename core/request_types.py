"""Shared request data types."""

from dataclasses import dataclass, field
from typing import Any

from core.exceptions import ErrorKind
from core.operations import Operation


@dataclass(frozen=True)
class OutboundRequest:
    """Fully specified upstream request."""

    provider: str
    operation: Operation
    url: str
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    context: str = ""
    coin_id: str | None = None


@dataclass(frozen=True)
class UpstreamOutcome:
    """Status and body to return to the caller."""

    status_code: int
    body: Any
    error_kind: ErrorKind | None = None
