from __future__ import annotations

import http.client
import io
import json
import socket
import urllib.error
import urllib.request

import pytest

from adapters.webhook_notifier import WebhookAlertNotifier
from core.errors import AlertEventError
from core.models import AlertRecord


class FakeResponse:
    def __init__(self, status: int) -> None:
        self.status = status

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


def _record() -> AlertRecord:
    return AlertRecord(
        is_alert=True,
        alert_name="DiskFull",
        installation_name="anteater",
        slack_channel_id="C1",
        slack_channel_name="inc-disk",
    )


def test_posts_payload_as_json(monkeypatch) -> None:
    requests: list[urllib.request.Request] = []

    def fake_urlopen(request, timeout):
        requests.append(request)
        return FakeResponse(200)

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    WebhookAlertNotifier("http://events.local/alert").trigger(_record())

    assert len(requests) == 1
    request = requests[0]
    assert request.full_url == "http://events.local/alert"
    assert request.get_method() == "POST"
    assert request.get_header("Content-type") == "application/json"
    assert json.loads(request.data) == _record().to_payload()


def test_non_ok_status_is_an_error(monkeypatch) -> None:
    monkeypatch.setattr(urllib.request, "urlopen", lambda request, timeout: FakeResponse(202))

    with pytest.raises(AlertEventError, match="status was 202"):
        WebhookAlertNotifier("http://events.local/alert").trigger(_record())


def test_http_error_is_an_error(monkeypatch) -> None:
    def fake_urlopen(request, timeout):
        raise urllib.error.HTTPError(request.full_url, 500, "boom", {}, io.BytesIO(b"oops"))

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(AlertEventError, match="status was 500"):
        WebhookAlertNotifier("http://events.local/alert").trigger(_record())


def test_unreachable_webhook_is_an_error(monkeypatch) -> None:
    def fake_urlopen(request, timeout):
        raise urllib.error.URLError("Name or service not known")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(AlertEventError, match="could not reach"):
        WebhookAlertNotifier("http://events.local/alert").trigger(_record())


@pytest.mark.parametrize(
    "error",
    [
        socket.timeout("timed out"),
        ConnectionResetError(104, "Connection reset by peer"),
        http.client.RemoteDisconnected("Remote end closed connection without response"),
    ],
)
def test_transport_failures_are_errors(monkeypatch, error) -> None:
    def fake_urlopen(request, timeout):
        raise error

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(AlertEventError, match="could not reach") as excinfo:
        WebhookAlertNotifier("http://events.local/alert").trigger(_record())
    assert excinfo.value.__cause__ is error
