"""Tests for the dashboard request bookkeeping (without starting Live)."""

import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config
from ui import dashboard as dashboard_module
from ui.dashboard import ConsoleLogger, Dashboard, describe_target


@pytest.fixture
def dashboard(monkeypatch):
    written = []
    monkeypatch.setattr(dashboard_module, "write_upstream_log", lambda *args, **kw: written.append(args))
    monkeypatch.setattr(dashboard_module, "write_cli_log", lambda *args, **kw: None)
    board = Dashboard(Config())
    board.written = written
    return board


def test_request_then_response_sets_status(dashboard):
    dashboard.log_request("CoinGecko", "coin-detail", "https://api/coins/bitcoin", {}, {})
    dashboard.log_response("CoinGecko", "coin-detail", 200, {"id": "bitcoin"})

    assert dashboard._request_count["CoinGecko"] == 1
    assert dashboard._recent[0].status == 200
    assert len(dashboard.written) == 1


def test_error_marks_latest_pending_request(dashboard):
    dashboard.log_request("CryptoPanic", "news", "https://api/posts/", {"currencies": "BTC"}, {})
    dashboard.log_error("CryptoPanic", 503, "No response from CryptoPanic: refused")

    assert dashboard._recent[0].status == 503
    assert dashboard._errors == ["CryptoPanic 503: No response from CryptoPanic: refused"]


def test_layout_builds_without_live(dashboard):
    dashboard.log_request("CoinGecko", "market-listing", "https://api/coins/markets", {}, {})

    assert dashboard._build_layout() is not None


def test_describe_target_redacts_tokens():
    target = describe_target("https://api/posts/", {"auth_token": "secret-token-123456"})

    assert target == "https://api/posts/?auth_token=secret...3456"


@pytest.fixture
def failing_writes(monkeypatch):
    def disk_full(*args, **kwargs):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(dashboard_module, "write_upstream_log", disk_full)
    monkeypatch.setattr(dashboard_module, "write_cli_log", disk_full)


@pytest.mark.parametrize("logger_cls", [Dashboard, ConsoleLogger])
def test_log_write_failures_do_not_reach_callers(failing_writes, stub, transport, logger_cls):
    stub.respond(200, json=[{"id": "bitcoin"}])
    app = create_app(Config(), logger_cls(Config()), transport=transport)

    with TestClient(app) as client:
        ok = client.get("/api/coin-data")
        rejected = client.get("/api/crypto-news")

    assert ok.status_code == 200
    assert ok.json() == [{"id": "bitcoin"}]
    assert rejected.status_code == 400
    assert rejected.json() == {"error": "Currency parameter is required"}
