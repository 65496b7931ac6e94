"""Shared logging utilities."""

import json
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "gateway.log"

SENSITIVE_MARKERS = ("key", "token", "authorization")


def write_upstream_log(
    provider: str,
    operation: str,
    url: str,
    params: dict[str, str],
    headers: dict[str, str],
    *,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single outbound request log entry."""
    payload = {
        "timestamp": _utc_now(),
        "target": provider,
        "operation": operation,
        "url": url,
        "params": redact(params),
        "headers": redact(headers),
    }
    folder = log_root / provider.lower()
    _cleanup_folder(folder, keep=50)
    return _write_json(folder, payload)


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path | None = None,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    log_file = log_file or CLI_LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with log_file.open("a") as f:
        f.write(line)


def clear_logs(log_root: Path = LOG_ROOT) -> None:
    """Remove logs from previous runs."""
    if log_root.exists():
        shutil.rmtree(log_root, ignore_errors=True)


def redact(values: dict[str, str]) -> dict[str, str]:
    """Mask values whose name looks like a credential."""
    redacted = {}
    for key, value in values.items():
        if any(marker in key.lower() for marker in SENSITIVE_MARKERS):
            redacted[key] = _mask(value)
        else:
            redacted[key] = value
    return redacted


def _cleanup_folder(folder: Path, keep: int) -> int:
    """Delete all but the ``keep`` most recent log files in a folder."""
    if not folder.exists():
        return 0

    files = sorted(folder.glob("*.json"))
    if len(files) < keep:
        return 0

    deleted = 0
    # Filenames start with a timestamp, so sorted order is oldest first
    for old_file in files[: len(files) - keep + 1]:
        try:
            old_file.unlink()
            deleted += 1
        except OSError:
            pass
    return deleted


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _mask(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
