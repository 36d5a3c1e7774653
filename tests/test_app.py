from __future__ import annotations

import logging
import urllib.error

import app


class UnreachableWebClient:
    def conversations_info(self, channel: str) -> dict:
        raise urllib.error.URLError("Temporary failure in name resolution")

    def conversations_history(self, channel: str) -> dict:
        raise AssertionError("history must not be fetched")


def test_inspect_logs_unreachable_channel(monkeypatch, caplog, capsys) -> None:
    monkeypatch.setattr(app, "_configure_logging", lambda: None)
    monkeypatch.setattr(app, "build_client", UnreachableWebClient)

    with caplog.at_level(logging.ERROR):
        app.main(["inspect", "--channel-id", "C1"])

    assert "Could not read channel C1" in caplog.text
    assert capsys.readouterr().out == ""


def test_formatter_masks_secrets() -> None:
    formatter = app._SecretMaskingFormatter(["xoxb-123", "", "xoxb-123-456"])
    record = logging.LogRecord("app", logging.INFO, __file__, 1, "token %s", ("xoxb-123-456",), None)

    line = formatter.format(record)

    assert "xoxb" not in line
    assert line.endswith("token ***")
