"""Ports (interfaces) used by the channel reader.

Ports define the minimal contracts for the channel and alert event adapters
so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from core.models import AlertRecord, ChannelInfo, ChatMessage


class ChannelPort(Protocol):
    """Channel operations required by the reader."""

    def get_channel_info(self, channel_id: str) -> ChannelInfo:
        ...

    def join(self, channel_id: str) -> None:
        ...

    def fetch_history(self, channel_id: str) -> Sequence[ChatMessage]:
        ...

    def post_feedback(
        self,
        channel_id: str,
        record: AlertRecord,
        done_marker: str,
        event_error: Optional[Exception],
    ) -> None:
        ...


class AlertEventPort(Protocol):
    """Downstream automation trigger required by the reader."""

    def trigger(self, record: AlertRecord) -> None:
        ...
