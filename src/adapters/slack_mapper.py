"""Slack-to-core message mapping adapter.

This keeps Slack payload details out of the core parser.
"""

from __future__ import annotations

from typing import Any, Iterable, List

from core.models import Attachment, ChatMessage, Field


def _build_field(raw: dict[str, Any]) -> Field:
    # Slack calls the field name "title".
    return Field(name=raw.get("title") or "", value=raw.get("value") or "")


def build_attachment(raw: dict[str, Any]) -> Attachment:
    """Build a core Attachment from a Slack attachment payload."""

    fields = tuple(_build_field(item) for item in raw.get("fields") or [])
    return Attachment(
        title=raw.get("title") or "",
        title_link=raw.get("title_link") or "",
        fields=fields,
    )


def build_message(raw: dict[str, Any]) -> ChatMessage:
    """Build a core ChatMessage from a conversations.history message."""

    attachments = tuple(build_attachment(item) for item in raw.get("attachments") or [])
    return ChatMessage(
        text=raw.get("text") or "",
        attachments=attachments,
        timestamp=raw.get("ts"),
    )


def build_messages(raw_messages: Iterable[dict[str, Any]]) -> List[ChatMessage]:
    return [build_message(raw) for raw in raw_messages]
