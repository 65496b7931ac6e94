"""Configuration models and loading."""

import json
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from ui.log_utils import write_cli_log

CONFIG_DIR = Path.home() / ".config" / "crypto-gateway"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Environment variable names checked in order, first non-empty wins
COINGECKO_KEY_ENV = ("X-CG-API-KEY", "COINGECKO_API_KEY")
CRYPTOPANIC_KEY_ENV = ("CRYPTO_PANIC_API_KEY",)


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class CoinGeckoSettings(BaseModel):
    base_url: str = "https://api.coingecko.com/api/v3"
    api_key: str = ""


class CryptoPanicSettings(BaseModel):
    base_url: str = "https://cryptopanic.com/api/free/v1"
    api_key: str = ""


class LimitSettings(BaseModel):
    timeout: float = 30.0
    max_connections: int = 100
    max_keepalive_connections: int = 20
    keep_alive_timeout: int = 5


class Config(BaseModel):
    server: ServerSettings = Field(default_factory=ServerSettings)
    coingecko: CoinGeckoSettings = Field(default_factory=CoinGeckoSettings)
    cryptopanic: CryptoPanicSettings = Field(default_factory=CryptoPanicSettings)
    limits: LimitSettings = Field(default_factory=LimitSettings)

    def missing_keys(self) -> list[str]:
        """Return the environment names of provider keys that are not set."""
        missing = []
        if not self.coingecko.api_key:
            missing.append(COINGECKO_KEY_ENV[0])
        if not self.cryptopanic.api_key:
            missing.append(CRYPTOPANIC_KEY_ENV[0])
        return missing


def load_config(
    config_file: Path = CONFIG_FILE,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load configuration from JSON file, then apply environment overrides."""
    config = _load_file(config_file)
    return apply_env_overrides(config, os.environ if environ is None else environ)


def apply_env_overrides(config: Config, environ: Mapping[str, str]) -> Config:
    """Return a copy of config with provider keys and server address from environ."""
    config = config.model_copy(deep=True)

    coingecko_key = _first_env(environ, COINGECKO_KEY_ENV)
    if coingecko_key:
        config.coingecko.api_key = coingecko_key

    cryptopanic_key = _first_env(environ, CRYPTOPANIC_KEY_ENV)
    if cryptopanic_key:
        config.cryptopanic.api_key = cryptopanic_key

    if environ.get("HOST"):
        config.server.host = environ["HOST"]

    port = environ.get("PORT")
    if port:
        try:
            config.server.port = int(port)
        except ValueError:
            write_cli_log(
                "WARNING",
                f"Invalid PORT {port!r}, keeping {config.server.port}",
            )

    return config


def _load_file(config_file: Path) -> Config:
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default


def _first_env(environ: Mapping[str, str], names: tuple[str, ...]) -> str:
    for name in names:
        value = environ.get(name, "").strip()
        if value:
            return value
    return ""
