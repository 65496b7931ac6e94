"""HTTP forwarding to upstream providers."""

import httpx

from core.exceptions import GatewayError
from core.normalize import SETUP_ERRORS, decode_body, normalize_failure, status_error
from core.protocols import RequestLogger
from core.request_types import OutboundRequest, UpstreamOutcome
from services.targets import COINGECKO, CRYPTOPANIC


class UpstreamClient:
    """Forward prepared requests to upstream providers."""

    def __init__(
        self,
        coingecko_client: httpx.AsyncClient,
        cryptopanic_client: httpx.AsyncClient,
    ) -> None:
        self._clients = {
            COINGECKO: coingecko_client,
            CRYPTOPANIC: cryptopanic_client,
        }

    async def forward(self, request: OutboundRequest, logger: RequestLogger) -> UpstreamOutcome:
        """Issue a single upstream call and normalize its outcome.

        A 2xx body is returned unmodified with status 200. Any failure is
        replaced by the ``{error, details}`` shape with the mapped status.
        """
        logger.log_request(
            request.provider,
            request.operation.value,
            request.url,
            request.params,
            request.headers,
        )
        try:
            response = await self._send(request)
        except (httpx.RequestError, *SETUP_ERRORS) as e:
            return self._failure(normalize_failure(e, provider=request.provider), logger)

        if not response.is_success:
            return self._failure(status_error(response, request), logger)

        body = decode_body(response)
        logger.log_response(request.provider, request.operation.value, response.status_code, body)
        return UpstreamOutcome(status_code=200, body=body)

    async def _send(self, request: OutboundRequest) -> httpx.Response:
        client = self._client_for(request.provider)
        req = client.build_request(
            "GET",
            request.url,
            params=request.params,
            headers=request.headers,
        )
        return await client.send(req)

    def _failure(self, error: GatewayError, logger: RequestLogger) -> UpstreamOutcome:
        logger.log_error(error.provider or "gateway", error.status_code, _log_message(error))
        return UpstreamOutcome(
            status_code=error.status_code,
            body=error.to_body(),
            error_kind=error.kind,
        )

    def _client_for(self, provider: str) -> httpx.AsyncClient:
        """Select the cached client for a provider."""
        return self._clients[provider]


def _log_message(error: GatewayError) -> str:
    if error.details is None:
        return error.message
    return f"{error.message}: {error.details}"
