"""Error taxonomy shared by the core and adapters."""

from __future__ import annotations

from typing import Optional


class ChatOpsError(Exception):
    """Base class for all chatops-reader errors."""


class ClassificationFailure(ChatOpsError):
    """A single message could not be classified.

    Failures are non-fatal: the history scan records them and moves on to
    the next message.
    """

    def __init__(self, reason: str, timestamp: Optional[str] = None) -> None:
        self.reason = reason
        self.timestamp = timestamp
        if timestamp:
            super().__init__(f"Message {timestamp} could not be classified: {reason}")
        else:
            super().__init__(f"Message could not be classified: {reason}")


class ChannelAccessError(ChatOpsError):
    """Reading channel details, joining, or fetching history failed."""


class AlertEventError(ChatOpsError):
    """Triggering the downstream alert event failed."""


class ReplyError(ChatOpsError):
    """Posting the feedback reply into the channel failed."""
