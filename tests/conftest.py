"""Shared fixtures: stub providers behind httpx.MockTransport and a recording logger."""

from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import CoinGeckoSettings, Config, CryptoPanicSettings


class RecordingLogger:
    """RequestLogger that keeps every call in memory."""

    def __init__(self):
        self.requests: list[tuple[str, str, str, dict[str, str]]] = []
        self.responses: list[tuple[str, str, int]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_request(self, provider, operation, url, params, headers) -> None:
        self.requests.append((provider, operation, url, dict(params)))

    def log_response(self, provider, operation, status, body) -> None:
        self.responses.append((provider, operation, status))

    def log_error(self, route, status, message) -> None:
        self.errors.append((route, status, message))


class StubProvider:
    """MockTransport handler recording calls and answering via ``responder``."""

    def __init__(self):
        self.calls: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], Any] = lambda request: httpx.Response(
            200, json=[]
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.responder(request)

    def respond(self, status_code: int = 200, **kwargs: Any) -> None:
        self.responder = lambda request: httpx.Response(status_code, **kwargs)

    def fail(self, exc_type: type[httpx.TransportError], message: str) -> None:
        def raise_error(request: httpx.Request):
            raise exc_type(message, request=request)

        self.responder = raise_error


@pytest.fixture
def config() -> Config:
    return Config(
        coingecko=CoinGeckoSettings(api_key="cg-test-key"),
        cryptopanic=CryptoPanicSettings(api_key="cp-test-token"),
    )


@pytest.fixture
def recorder() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def stub() -> StubProvider:
    return StubProvider()


@pytest.fixture
def transport(stub) -> httpx.MockTransport:
    return httpx.MockTransport(stub)


@pytest.fixture
def client(config, recorder, transport):
    app = create_app(config, recorder, transport=transport)
    with TestClient(app) as test_client:
        yield test_client
