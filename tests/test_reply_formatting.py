from __future__ import annotations

import json

from adapters.reply_formatting import NO_ALERT_PROMPT, format_reply
from core.errors import AlertEventError
from core.models import AlertRecord

DONE = "[done for channel C1]"


def test_alert_reply_contains_payload_and_marker() -> None:
    record = AlertRecord(
        is_alert=True,
        alert_name="PrometheusPersistentVolumeSpaceTooLow",
        priority="P3",
        installation_name="anteater",
        provider="aws",
        slack_channel_id="C1",
        slack_channel_name="inc-disk",
    )
    reply = format_reply(record, DONE, None)

    assert reply.startswith("I'm passing these alert details")
    assert reply.endswith(f"`{DONE}`")
    body = reply.split("```")[1]
    assert json.loads(body) == record.to_payload()
    assert '    "priority": "P3"' in body


def test_no_alert_reply_prompts_for_details() -> None:
    reply = format_reply(AlertRecord(slack_channel_id="C1"), DONE, None)
    assert reply == NO_ALERT_PROMPT
    assert DONE not in reply


def test_event_error_reply() -> None:
    error = AlertEventError("could not trigger alert event, webhook status was 503")
    reply = format_reply(AlertRecord(is_alert=True), DONE, error)
    assert reply == "Could not trigger alert event: `could not trigger alert event, webhook status was 503`"


def test_payload_omits_empty_optional_fields() -> None:
    payload = AlertRecord(is_alert=True, is_done=False, provider="kvm").to_payload()

    assert payload == {
        "provider": "kvm",
        "affects_management_cluster": False,
        "affects_workload_cluster": False,
        "slack_channel_id": "",
        "slack_channel_name": "",
    }


def test_payload_includes_workload_cluster_id_when_set() -> None:
    record = AlertRecord(is_alert=True, affects_workload_cluster=True, workload_cluster_id="x7k2p")
    payload = record.to_payload()
    assert payload["workload_cluster_id"] == "x7k2p"
    assert payload["affects_workload_cluster"] is True
    assert "is_alert" not in payload
