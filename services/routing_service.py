"""Routing orchestration for gateway requests."""

from collections.abc import Mapping

from core.config import Config
from core.exceptions import ParameterValidationError
from core.headers import HeaderBuilder
from core.operations import Operation
from core.request_types import OutboundRequest
from services.targets import CoinGeckoTarget, CryptoPanicTarget


class RoutingService:
    """Validate caller parameters and prepare requests for CoinGecko or CryptoPanic."""

    def __init__(
        self,
        config: Config,
        header_builder: HeaderBuilder,
        coingecko_target: CoinGeckoTarget | None = None,
        cryptopanic_target: CryptoPanicTarget | None = None,
    ) -> None:
        self._coingecko = coingecko_target or CoinGeckoTarget(config, header_builder)
        self._cryptopanic = cryptopanic_target or CryptoPanicTarget(config, header_builder)

    def prepare(self, operation: Operation, params: Mapping[str, str]) -> OutboundRequest:
        """Prepare the upstream request for an operation.

        Raises:
            ParameterValidationError: A required parameter is missing. No
                upstream request is prepared in that case.
        """
        if operation is Operation.MARKET_LISTING:
            return self._coingecko.prepare_market_listing()

        if operation is Operation.COIN_DETAIL:
            return self._coingecko.prepare_coin_detail(_require_coin_id(params))

        if operation is Operation.COIN_CHART:
            return self._coingecko.prepare_coin_chart(_require_coin_id(params), params)

        if operation is Operation.NEWS:
            currency = (params.get("currency") or "").strip()
            if not currency:
                raise ParameterValidationError("Currency parameter is required")
            return self._cryptopanic.prepare_news(currency, params)

        raise ValueError(f"Unknown operation: {operation}")


def _require_coin_id(params: Mapping[str, str]) -> str:
    coin_id = (params.get("id") or "").strip()
    if not coin_id:
        raise ParameterValidationError("Coin id parameter is required")
    return coin_id
