"""Slack channel adapter.

Implements channel access and feedback delivery on top of slack_sdk's
WebClient.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError

from adapters.reply_formatting import format_reply
from adapters.slack_mapper import build_messages
from core.errors import ChannelAccessError, ReplyError
from core.models import AlertRecord, ChannelInfo, ChatMessage

LOGGER = logging.getLogger(__name__)


# Connectivity failures surface as URLError/TimeoutError from the client.
_CLIENT_ERRORS = (SlackClientError, OSError)


def _error_code(exc: Exception) -> str:
    response = getattr(exc, "response", None)
    if not isinstance(exc, SlackApiError) or response is None:
        return str(exc) or repr(exc)
    return str(response.get("error", exc))


class SlackChannelAdapter:
    """Channel adapter backed by the Slack Web API."""

    def __init__(self, client: WebClient) -> None:
        self._client = client

    def get_channel_info(self, channel_id: str) -> ChannelInfo:
        try:
            response = self._client.conversations_info(channel=channel_id)
        except _CLIENT_ERRORS as exc:
            raise ChannelAccessError(
                f"Cannot get details of channel {channel_id}: {_error_code(exc)}"
            ) from exc
        channel = response["channel"]
        return ChannelInfo(channel_id=channel_id, name=channel.get("name", ""))

    def join(self, channel_id: str) -> None:
        try:
            self._client.conversations_join(channel=channel_id)
        except _CLIENT_ERRORS as exc:
            raise ChannelAccessError(f"Could not join channel {channel_id}: {_error_code(exc)}") from exc

    def fetch_history(self, channel_id: str) -> List[ChatMessage]:
        """Fetch the first page of the channel history, newest first."""

        try:
            response = self._client.conversations_history(channel=channel_id)
        except _CLIENT_ERRORS as exc:
            raise ChannelAccessError(
                f"Could not get conversation history of {channel_id}: {_error_code(exc)}"
            ) from exc
        raw_messages = response.get("messages", [])
        LOGGER.debug("Fetched %s messages from %s", len(raw_messages), channel_id)
        return build_messages(raw_messages)

    def post_message(self, channel_id: str, text: str) -> None:
        try:
            self._client.chat_postMessage(channel=channel_id, text=text)
        except _CLIENT_ERRORS as exc:
            raise ReplyError(f"Could not post to {channel_id}: {_error_code(exc)}") from exc

    def post_feedback(
        self,
        channel_id: str,
        record: AlertRecord,
        done_marker: str,
        event_error: Optional[Exception],
    ) -> None:
        """Send the formatted feedback reply to the channel."""

        self.post_message(channel_id, format_reply(record, done_marker, event_error))
