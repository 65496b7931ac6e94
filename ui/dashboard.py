"""Real-time CLI dashboard for gateway monitoring."""

from datetime import datetime
from threading import Lock
from typing import Any

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import redact, write_cli_log, write_upstream_log

console = Console()


def _write_quietly(write, *args: Any, **kwargs: Any) -> None:
    """Run a log writer, ignoring filesystem errors."""
    try:
        write(*args, **kwargs)
    except OSError:
        pass


class RequestInfo:
    """Info about a single upstream request."""

    def __init__(self, provider: str, operation: str, target: str, timestamp: datetime):
        self.provider = provider
        self.operation = operation
        self.target = target[:60] + "..." if len(target) > 60 else target
        self.status: int | None = None
        self.timestamp = timestamp


def describe_target(url: str, params: dict[str, str]) -> str:
    """Short one-line description of an upstream call."""
    query = "&".join(f"{k}={v}" for k, v in redact(params).items())
    return f"{url}?{query}" if query else url


class Dashboard:
    """Real-time dashboard showing upstream traffic per provider."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 8
        self._request_count = {"CoinGecko": 0, "CryptoPanic": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_request(
        self,
        provider: str,
        operation: str,
        url: str,
        params: dict[str, str],
        headers: dict[str, str],
    ) -> None:
        """Log an outbound request."""
        with self._lock:
            self._request_count[provider] = self._request_count.get(provider, 0) + 1
            info = RequestInfo(
                provider=provider,
                operation=operation,
                target=describe_target(url, params),
                timestamp=datetime.now(),
            )
            self._recent.insert(0, info)
            self._recent = self._recent[: self._max_recent]

            _write_quietly(write_upstream_log, provider, operation, url, params, headers)
            _write_quietly(write_cli_log, provider.upper(), operation, url=url)

            self._refresh()

    def log_response(self, provider: str, operation: str, status: int, body: Any) -> None:
        """Record a successful upstream response."""
        with self._lock:
            self._mark_status(provider, operation, status)
            _write_quietly(write_cli_log, "OK", operation, provider=provider, status=status)
            self._refresh()

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._mark_status(route, None, status)
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            _write_quietly(write_cli_log, "ERROR", message[:200], route=route, status=status)

    def _mark_status(self, provider: str, operation: str | None, status: int) -> None:
        """Attach a status to the latest pending request of a provider."""
        for info in self._recent:
            if info.provider != provider or info.status is not None:
                continue
            if operation is None or info.operation == operation:
                info.status = status
                return

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Crypto Data Gateway", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"CoinGecko: {self._request_count.get('CoinGecko', 0)}", style="green")
        stats.append("  |  ")
        stats.append(f"CryptoPanic: {self._request_count.get('CryptoPanic', 0)}", style="magenta")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.server.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent upstream requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Provider", width=12)
            table.add_column("Operation", width=15)
            table.add_column("Status", width=6)
            table.add_column("Target", ratio=1)

            for info in self._recent:
                if info.status is None:
                    status = "[dim]...[/dim]"
                elif 200 <= info.status < 300:
                    status = f"[green]{info.status}[/green]"
                else:
                    status = f"[red]{info.status}[/red]"

                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.provider,
                    info.operation,
                    status,
                    info.target,
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Upstream Requests[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            missing = self.config.missing_keys()
            hint = f"Listening on http://{self.config.server.host}:{self.config.server.port}"
            if missing:
                hint += f"  (missing keys: {', '.join(missing)})"
            content = Text(hint, style="dim")

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")


class ConsoleLogger:
    """Plain line-based logger for running without the live dashboard."""

    def __init__(self, config: Config):
        self.config = config

    def log_request(
        self,
        provider: str,
        operation: str,
        url: str,
        params: dict[str, str],
        headers: dict[str, str],
    ) -> None:
        console.print(f"[cyan]{provider}[/cyan] {operation} {describe_target(url, params)}")
        _write_quietly(write_cli_log, provider.upper(), operation, url=url)

    def log_response(self, provider: str, operation: str, status: int, body: Any) -> None:
        console.print(f"[green]{provider}[/green] {operation} -> {status}")
        _write_quietly(write_cli_log, "OK", operation, provider=provider, status=status)

    def log_error(self, route: str, status: int, message: str) -> None:
        console.print(f"[red]{route} {status}:[/red] {message[:200]}")
        _write_quietly(write_cli_log, "ERROR", message[:200], route=route, status=status)
