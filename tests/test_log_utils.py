"""Tests for diagnostic log helpers."""

import json

from ui.log_utils import redact, write_cli_log, write_upstream_log


def test_redact_masks_credentials():
    assert redact({"auth_token": "abcdefghijklmnop", "currencies": "BTC"}) == {
        "auth_token": "abcdef...mnop",
        "currencies": "BTC",
    }
    assert redact({"x-cg-api-key": "short"}) == {"x-cg-api-key": "***"}


def test_upstream_log_never_contains_raw_key(tmp_path):
    path = write_upstream_log(
        "CryptoPanic",
        "news",
        "https://cryptopanic.com/api/free/v1/posts/",
        {"auth_token": "secret-token-123456", "currencies": "BTC"},
        {"Accept": "application/json"},
        log_root=tmp_path,
    )

    assert path.parent == tmp_path / "cryptopanic"
    payload = json.loads(path.read_text())
    assert payload["operation"] == "news"
    assert "secret-token-123456" not in path.read_text()


def test_cli_log_appends_lines(tmp_path):
    log_file = tmp_path / "gateway.log"

    write_cli_log("STARTUP", "Gateway started", log_file=log_file, port=5000)
    write_cli_log("ERROR", "boom", log_file=log_file)

    lines = log_file.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("STARTUP: Gateway started port=5000")
    assert lines[1].endswith("ERROR: boom")
