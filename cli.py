"""CLI entry point for crypto-gateway."""

import sys
from datetime import datetime

from dotenv import load_dotenv
from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, COINGECKO_KEY_ENV, CRYPTOPANIC_KEY_ENV, Config, load_config
from ui.dashboard import ConsoleLogger, Dashboard
from ui.log_utils import clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    load_dotenv()

    # Handle CLI arguments
    plain = False
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--check":
            print_key_status(load_config())
            return

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        if arg == "--plain":
            plain = True
        else:
            console.print(f"[red][ERROR][/red] Unknown argument: {arg}")
            _print_help()
            sys.exit(2)

    # Config warnings land in the fresh log
    clear_logs()
    config = load_config()

    # Missing keys are reported, serving continues
    for name in config.missing_keys():
        console.print(f"[yellow]Warning:[/yellow] {name} is not set in the environment variables")
        write_cli_log("WARNING", f"{name} is not set", config=str(CONFIG_FILE))

    import uvicorn

    if plain:
        logger = ConsoleLogger(config)
        dashboard = None
    else:
        dashboard = Dashboard(config)
        logger = dashboard

    app = create_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level="info" if plain else "warning",
        timeout_keep_alive=config.limits.keep_alive_timeout,
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Gateway started", port=config.server.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Gateway stopped", duration=str(duration))
        if dashboard:
            dashboard.stop()


def print_key_status(config: Config) -> None:
    """Print which provider keys are configured."""
    missing = config.missing_keys()
    for name in (COINGECKO_KEY_ENV[0], CRYPTOPANIC_KEY_ENV[0]):
        if name in missing:
            console.print(f"[yellow]{name}[/yellow] not set")
        else:
            console.print(f"[green]{name}[/green] configured")


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Crypto Data Gateway[/bold cyan]

Forwards market data requests to CoinGecko and news requests to CryptoPanic,
injecting API keys server side.

[bold]Usage:[/bold]
    crypto-gateway              Start with live dashboard
    crypto-gateway --plain      Start with plain console logging
    crypto-gateway --check      Show which API keys are configured
    crypto-gateway --config     Show config location
    crypto-gateway --help       Show this help

[bold]Environment:[/bold]
    X-CG-API-KEY / COINGECKO_API_KEY   CoinGecko API key
    CRYPTO_PANIC_API_KEY               CryptoPanic auth token
    PORT, HOST                         Listen address (default 127.0.0.1:5000)
    A .env file in the working directory is loaded first.
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
