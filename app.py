"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.handlers import (
    gateway_error_handler,
    handle_coin_chart,
    handle_coin_data,
    handle_coin_detail,
    handle_crypto_news,
    handle_health,
)
from core.config import Config
from core.exceptions import GatewayError
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.routing_service import RoutingService
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``transport`` replaces the network transport of the upstream clients,
    which lets tests stub the providers.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(
            max_connections=config.limits.max_connections,
            max_keepalive_connections=config.limits.max_keepalive_connections,
        )
        coingecko_client = httpx.AsyncClient(
            timeout=config.limits.timeout,
            limits=limits,
            transport=transport,
        )
        cryptopanic_client = httpx.AsyncClient(
            timeout=config.limits.timeout,
            limits=limits,
            transport=transport,
        )
        app.state.upstream_client = UpstreamClient(coingecko_client, cryptopanic_client)
        app.state.routing_service = RoutingService(
            config=config,
            header_builder=HeaderBuilder(),
        )
        try:
            yield
        finally:
            await coingecko_client.aclose()
            await cryptopanic_client.aclose()

    app = FastAPI(title="Crypto Data Gateway", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GatewayError, gateway_error_handler(logger))

    @app.get("/api/coin-data")
    async def coin_data(request: Request):
        return await handle_coin_data(request, logger)

    @app.get("/api/coin/{coin_id}")
    async def coin_detail(request: Request, coin_id: str):
        return await handle_coin_detail(request, coin_id, logger)

    @app.get("/api/coin-chart/{coin_id}")
    async def coin_chart(request: Request, coin_id: str):
        return await handle_coin_chart(request, coin_id, logger)

    @app.get("/api/crypto-news")
    async def crypto_news(request: Request):
        return await handle_crypto_news(request, logger)

    @app.get("/health")
    async def health(request: Request):
        return await handle_health(request, config)

    return app
