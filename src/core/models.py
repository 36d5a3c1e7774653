"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to Slack-specific payload shapes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Field:
    """A single name/value pair attached to a chat attachment."""

    name: str
    value: str


@dataclass(frozen=True)
class Attachment:
    """Minimal attachment context used by the parser."""

    title: str = ""
    title_link: str = ""
    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class ChatMessage:
    """Minimal message context used by the parser."""

    text: str = ""
    attachments: tuple[Attachment, ...] = ()
    timestamp: Optional[str] = None


@dataclass
class AlertRecord:
    """Structured alert details extracted from a channel message.

    The record is built once per evaluated message. The channel reader
    enriches the qualifying record with the channel identity before it is
    handed to the downstream automation.
    """

    is_alert: bool = False
    is_done: bool = False
    alert_name: str = ""
    priority: str = ""
    installation_name: str = ""
    installation_pipeline: str = ""
    provider: str = ""
    affects_management_cluster: bool = False
    affects_workload_cluster: bool = False
    workload_cluster_id: str = ""
    slack_channel_id: str = ""
    slack_channel_name: str = ""

    def to_payload(self) -> dict[str, Any]:
        """Return the downstream wire representation.

        Downstream automation branches on field presence, so empty string
        fields are left out while the cluster flags and channel identity
        are always present. is_alert and is_done never leave the process.
        """

        payload: dict[str, Any] = {}
        for name in _OPTIONAL_PAYLOAD_FIELDS:
            value = getattr(self, name)
            if value:
                payload[name] = value
        payload["affects_management_cluster"] = self.affects_management_cluster
        payload["affects_workload_cluster"] = self.affects_workload_cluster
        if self.workload_cluster_id:
            payload["workload_cluster_id"] = self.workload_cluster_id
        payload["slack_channel_id"] = self.slack_channel_id
        payload["slack_channel_name"] = self.slack_channel_name
        return payload


_OPTIONAL_PAYLOAD_FIELDS = (
    "alert_name",
    "priority",
    "installation_name",
    "installation_pipeline",
    "provider",
)


@dataclass(frozen=True)
class ChannelInfo:
    """Identity of the channel being read."""

    channel_id: str
    name: str


@dataclass(frozen=True)
class ParseOutcome:
    """Result of classifying a single message: a record or a failure."""

    record: Optional[AlertRecord] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ScanResult:
    """Outcome of scanning a channel history for an alert."""

    record: AlertRecord
    messages_checked: int = 0
    done_seen: bool = False
    diagnostics: list[Exception] = field(default_factory=list)
