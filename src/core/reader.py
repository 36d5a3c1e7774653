"""Incident channel reader workflow.

The reader enforces a strict order:
1) Ignore channels that are not incident channels
2) Wait for the alert details to show up, then join
3) Scan the history for an alert message
4) Trigger the downstream alert event when an alert was found
5) Post feedback into the channel

This module is integration-agnostic. It only relies on ports for channel
access and alert events.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from core.config import ReaderConfig
from core.errors import AlertEventError, ReplyError
from core.message_parser import scan_history
from core.models import AlertRecord
from core.ports import AlertEventPort, ChannelPort

LOGGER = logging.getLogger(__name__)


class ReadStatus(enum.Enum):
    IGNORED = "ignored"
    ALREADY_DONE = "already_done"
    ALERT_FORWARDED = "alert_forwarded"
    ALERT_EVENT_FAILED = "alert_event_failed"
    NO_ALERT_FOUND = "no_alert_found"


@dataclass
class ReadOutcome:
    """What a single reader run did."""

    status: ReadStatus
    record: Optional[AlertRecord] = None
    reply_posted: bool = False
    event_error: Optional[AlertEventError] = None


class IncidentChannelReader:
    """Orchestrates channel checks, history scanning, events and feedback."""

    def __init__(
        self,
        channel: ChannelPort,
        events: AlertEventPort,
        config: ReaderConfig,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._channel = channel
        self._events = events
        self._config = config
        self._sleep = sleep

    def run(self, channel_id: str) -> ReadOutcome:
        """Process one channel through the reader workflow."""

        info = self._channel.get_channel_info(channel_id)
        LOGGER.info("Channel %s is named %s", channel_id, info.name)
        if not info.name.startswith(self._config.channel_prefix):
            LOGGER.info(
                "Ignoring channel %s, name does not start with %r",
                info.name,
                self._config.channel_prefix,
            )
            return ReadOutcome(status=ReadStatus.IGNORED)

        # Alert details are usually shared a moment after the channel is created.
        if self._config.join_delay_seconds > 0:
            self._sleep(self._config.join_delay_seconds)
        self._channel.join(channel_id)

        done_marker = self._config.done_marker(channel_id)
        history = self._channel.fetch_history(channel_id)
        scan = scan_history(history, done_marker)
        LOGGER.info(
            "Scanned %s messages, alert found: %s, skipped: %s",
            scan.messages_checked,
            scan.record.is_alert,
            len(scan.diagnostics),
        )

        if scan.done_seen and self._config.skip_when_done:
            LOGGER.info("Channel %s was already processed, nothing to do", info.name)
            return ReadOutcome(status=ReadStatus.ALREADY_DONE)

        record = scan.record
        record.slack_channel_id = channel_id
        record.slack_channel_name = info.name

        event_error: Optional[AlertEventError] = None
        if record.is_alert:
            try:
                self._events.trigger(record)
            except AlertEventError as exc:
                LOGGER.error("Could not trigger alert event: %s", exc)
                event_error = exc

        if event_error is not None:
            status = ReadStatus.ALERT_EVENT_FAILED
        elif record.is_alert:
            status = ReadStatus.ALERT_FORWARDED
        else:
            status = ReadStatus.NO_ALERT_FOUND

        outcome = ReadOutcome(status=status, record=record, event_error=event_error)
        try:
            self._channel.post_feedback(channel_id, record, done_marker, event_error)
            outcome.reply_posted = True
        except ReplyError:
            LOGGER.exception("Could not post feedback to %s", channel_id)
        return outcome
