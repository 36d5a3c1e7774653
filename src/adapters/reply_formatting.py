"""Shared feedback formatting helpers.

Keeping formatting here prevents drift between the channel reply and the
console output of the inspect command.
"""

from __future__ import annotations

import json
from typing import Optional

from core.models import AlertRecord

ALERT_INTRO = "I'm passing these alert details to my co-bots to gather some information for you:"
NO_ALERT_PROMPT = "No alert info found so far. Please share an #opsgenie alert message in this channel."


def format_payload(record: AlertRecord) -> str:
    """Render the downstream payload as indented JSON."""

    return json.dumps(record.to_payload(), indent=4)


def format_reply(record: AlertRecord, done_marker: str, event_error: Optional[Exception]) -> str:
    """Return the Slack mrkdwn feedback text for one reader run.

    The completion marker is only appended to alert replies so later runs
    on the same channel can recognize that it was already processed.
    """

    if event_error is not None:
        return f"Could not trigger alert event: `{event_error}`"
    if not record.is_alert:
        return NO_ALERT_PROMPT

    lines = [
        ALERT_INTRO,
        "",
        f"```{format_payload(record)}```",
        "",
        "",
        f"`{done_marker}`",
    ]
    return "\n".join(lines)
