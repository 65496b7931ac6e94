"""Header construction for upstream requests."""

COINGECKO_KEY_HEADER = "x-cg-api-key"


class HeaderBuilder:
    """Build upstream headers for different providers."""

    def build_coingecko_headers(self, api_key: str) -> dict[str, str]:
        """Attach the CoinGecko key header when a key is configured."""
        headers = {"Accept": "application/json"}
        if api_key:
            headers[COINGECKO_KEY_HEADER] = api_key
        return headers

    def build_cryptopanic_headers(self) -> dict[str, str]:
        """CryptoPanic authenticates via query param, not headers."""
        return {"Accept": "application/json"}
