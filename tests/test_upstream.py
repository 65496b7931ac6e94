"""Tests for UpstreamClient.forward outcome normalization."""

import httpx
import pytest

from core.exceptions import ErrorKind
from core.operations import Operation
from core.request_types import OutboundRequest
from services.upstream import UpstreamClient


def _chart_request(coin_id: str = "bitcoin") -> OutboundRequest:
    return OutboundRequest(
        provider="CoinGecko",
        operation=Operation.COIN_CHART,
        url=f"https://api.coingecko.com/api/v3/coins/{coin_id}/market_chart",
        params={"vs_currency": "usd", "days": "30"},
        headers={"x-cg-api-key": "cg-test-key"},
        context="Error fetching coin chart data",
        coin_id=coin_id,
    )


@pytest.fixture
async def upstream(transport):
    async with httpx.AsyncClient(transport=transport) as coingecko, httpx.AsyncClient(
        transport=transport
    ) as cryptopanic:
        yield UpstreamClient(coingecko, cryptopanic)


async def test_success_returns_200_with_body(upstream, stub, recorder):
    stub.respond(203, json={"prices": [[1, 2]]})

    outcome = await upstream.forward(_chart_request(), recorder)

    assert outcome.error_kind is None
    assert outcome.status_code == 200
    assert outcome.body == {"prices": [[1, 2]]}
    assert recorder.responses == [("CoinGecko", "coin-chart", 203)]


async def test_request_carries_params_and_headers(upstream, stub, recorder):
    await upstream.forward(_chart_request(), recorder)

    sent = stub.calls[0]
    assert sent.method == "GET"
    assert sent.url.params["days"] == "30"
    assert sent.headers["x-cg-api-key"] == "cg-test-key"
    assert recorder.requests[0][:2] == ("CoinGecko", "coin-chart")


async def test_chart_not_found_uses_domain_message(upstream, stub, recorder):
    stub.respond(404, json={"error": "coin not found"})

    outcome = await upstream.forward(_chart_request("nope"), recorder)

    assert outcome.error_kind is ErrorKind.UPSTREAM_STATUS
    assert outcome.status_code == 404
    assert outcome.body == {
        "error": "No chart data available for coin with id: nope",
        "details": {"error": "coin not found"},
    }


async def test_non_json_error_body_is_passed_as_text(upstream, stub, recorder):
    stub.respond(502, text="Bad Gateway")

    outcome = await upstream.forward(_chart_request(), recorder)

    assert outcome.status_code == 502
    assert outcome.body == {"error": "Error fetching coin chart data", "details": "Bad Gateway"}
    assert recorder.errors[0][:2] == ("CoinGecko", 502)


async def test_timeout_yields_503(upstream, stub, recorder):
    stub.fail(httpx.ReadTimeout, "timed out")

    outcome = await upstream.forward(_chart_request(), recorder)

    assert outcome.error_kind is ErrorKind.UPSTREAM_UNREACHABLE
    assert outcome.status_code == 503
    assert outcome.body == {"error": "No response from CoinGecko", "details": "timed out"}


async def test_setup_failure_yields_500(upstream, stub, recorder):
    stub.fail(httpx.LocalProtocolError, "Illegal header value")

    outcome = await upstream.forward(_chart_request(), recorder)

    assert outcome.error_kind is ErrorKind.REQUEST_SETUP
    assert outcome.status_code == 500
    assert outcome.body == {
        "error": "Error setting up the request",
        "details": "Illegal header value",
    }
