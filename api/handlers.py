"""FastAPI route handlers."""

from fastapi import Request
from fastapi.responses import JSONResponse

from core.config import Config
from core.exceptions import GatewayError
from core.operations import Operation
from core.protocols import RequestLogger

CHART_QUERY_PARAMS = ("vs_currency", "days", "interval", "precision")
NEWS_QUERY_PARAMS = ("currency", "filter", "region", "kind")


async def _forward(
    request: Request,
    operation: Operation,
    params: dict[str, str],
    logger: RequestLogger,
) -> JSONResponse:
    """Prepare, send and relay a single upstream call."""
    routing_service = request.app.state.routing_service
    prepared = routing_service.prepare(operation, params)
    upstream = request.app.state.upstream_client

    outcome = await upstream.forward(prepared, logger)
    return JSONResponse(content=outcome.body, status_code=outcome.status_code)


def _query(request: Request, names: tuple[str, ...]) -> dict[str, str]:
    return {name: request.query_params[name] for name in names if name in request.query_params}


async def handle_coin_data(request: Request, logger: RequestLogger) -> JSONResponse:
    """Handle /api/coin-data with fixed listing defaults."""
    return await _forward(request, Operation.MARKET_LISTING, {}, logger)


async def handle_coin_detail(request: Request, coin_id: str, logger: RequestLogger) -> JSONResponse:
    """Handle /api/coin/{id}."""
    return await _forward(request, Operation.COIN_DETAIL, {"id": coin_id}, logger)


async def handle_coin_chart(request: Request, coin_id: str, logger: RequestLogger) -> JSONResponse:
    """Handle /api/coin-chart/{id}, query params override chart defaults."""
    params = _query(request, CHART_QUERY_PARAMS)
    params["id"] = coin_id
    return await _forward(request, Operation.COIN_CHART, params, logger)


async def handle_crypto_news(request: Request, logger: RequestLogger) -> JSONResponse:
    """Handle /api/crypto-news, ``currency`` is required."""
    return await _forward(request, Operation.NEWS, _query(request, NEWS_QUERY_PARAMS), logger)


async def handle_health(_request: Request, config: Config) -> JSONResponse:
    """Report liveness and which provider keys are configured."""
    return JSONResponse(
        content={
            "status": "ok",
            "providers": {
                "coingecko": bool(config.coingecko.api_key),
                "cryptopanic": bool(config.cryptopanic.api_key),
            },
        }
    )


def gateway_error_handler(logger: RequestLogger):
    """Build the exception handler rendering GatewayError as JSON."""

    async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        logger.log_error(exc.provider or "gateway", exc.status_code, exc.message)
        return JSONResponse(content=exc.to_body(), status_code=exc.status_code)

    return handle_gateway_error
