"""Logical gateway operations and their fixed upstream defaults."""

from enum import Enum


class Operation(str, Enum):
    """Operations the gateway can forward upstream."""

    MARKET_LISTING = "market-listing"
    COIN_DETAIL = "coin-detail"
    COIN_CHART = "coin-chart"
    NEWS = "news"


MARKET_LISTING_DEFAULTS = {
    "vs_currency": "inr",
    "order": "market_cap_desc",
    "per_page": "120",
    "page": "1",
    "sparkline": "false",
}

COIN_CHART_DEFAULTS = {
    "vs_currency": "usd",
    "days": "30",
    "interval": "daily",
    "precision": "7",
}

NEWS_DEFAULTS = {
    "filter": "hot",
    "region": "en",
    "kind": "news",
}

# Summary placed in the ``error`` field when the upstream call fails
CONTEXT_MESSAGES = {
    Operation.MARKET_LISTING: "Error fetching data from CoinGecko API",
    Operation.COIN_DETAIL: "Error fetching coin details",
    Operation.COIN_CHART: "Error fetching coin chart data",
    Operation.NEWS: "Failed to fetch crypto news",
}


def not_found_message(operation: Operation, coin_id: str | None) -> str | None:
    """Return the domain message used for an upstream 404, if any."""
    if operation is Operation.COIN_DETAIL:
        return "Coin not found"
    if operation is Operation.COIN_CHART:
        return f"No chart data available for coin with id: {coin_id}"
    return None
