"""Upstream target handlers for CoinGecko and CryptoPanic."""

from collections.abc import Mapping
from urllib.parse import quote

from core.config import Config
from core.headers import HeaderBuilder
from core.operations import (
    COIN_CHART_DEFAULTS,
    CONTEXT_MESSAGES,
    MARKET_LISTING_DEFAULTS,
    NEWS_DEFAULTS,
    Operation,
)
from core.request_types import OutboundRequest

COINGECKO = "CoinGecko"
CRYPTOPANIC = "CryptoPanic"


class CoinGeckoTarget:
    """CoinGecko-specific request preparation."""

    def __init__(self, config: Config, header_builder: HeaderBuilder) -> None:
        self._config = config
        self._headers = header_builder

    def prepare_market_listing(self) -> OutboundRequest:
        """Prepare /coins/markets with the fixed listing defaults."""
        return self._request(
            Operation.MARKET_LISTING,
            "/coins/markets",
            dict(MARKET_LISTING_DEFAULTS),
        )

    def prepare_coin_detail(self, coin_id: str) -> OutboundRequest:
        """Prepare /coins/{id}."""
        return self._request(
            Operation.COIN_DETAIL,
            f"/coins/{quote(coin_id, safe='')}",
            {},
            coin_id=coin_id,
        )

    def prepare_coin_chart(self, coin_id: str, params: Mapping[str, str]) -> OutboundRequest:
        """Prepare /coins/{id}/market_chart, caller values override defaults."""
        query = {
            key: params.get(key, default)
            for key, default in COIN_CHART_DEFAULTS.items()
        }
        return self._request(
            Operation.COIN_CHART,
            f"/coins/{quote(coin_id, safe='')}/market_chart",
            query,
            coin_id=coin_id,
        )

    def _request(
        self,
        operation: Operation,
        path: str,
        params: dict[str, str],
        coin_id: str | None = None,
    ) -> OutboundRequest:
        base_url = self._config.coingecko.base_url.rstrip("/")
        return OutboundRequest(
            provider=COINGECKO,
            operation=operation,
            url=f"{base_url}{path}",
            params=params,
            headers=self._headers.build_coingecko_headers(self._config.coingecko.api_key),
            context=CONTEXT_MESSAGES[operation],
            coin_id=coin_id,
        )


class CryptoPanicTarget:
    """CryptoPanic-specific request preparation."""

    def __init__(self, config: Config, header_builder: HeaderBuilder) -> None:
        self._config = config
        self._headers = header_builder

    def prepare_news(self, currency: str, params: Mapping[str, str]) -> OutboundRequest:
        """Prepare /posts/ for the given currency codes."""
        options = {
            key: params.get(key, default)
            for key, default in NEWS_DEFAULTS.items()
        }
        query = {
            "currencies": currency,
            "filter": options["filter"],
            "regions": options["region"],
            "kind": options["kind"],
            "public": "true",
        }
        if self._config.cryptopanic.api_key:
            query["auth_token"] = self._config.cryptopanic.api_key

        base_url = self._config.cryptopanic.base_url.rstrip("/")
        return OutboundRequest(
            provider=CRYPTOPANIC,
            operation=Operation.NEWS,
            url=f"{base_url}/posts/",
            params=query,
            headers=self._headers.build_cryptopanic_headers(),
            context=CONTEXT_MESSAGES[Operation.NEWS],
        )
