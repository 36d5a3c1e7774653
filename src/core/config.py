"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DONE_MARKER_TEMPLATE = "[giant-chatops-slack-reader done for channel {channel_id}]"


@dataclass(frozen=True)
class ReaderConfig:
    """Channel reader settings for the core workflow."""

    channel_prefix: str = "inc-"
    join_delay_seconds: float = 5.0
    done_marker_template: str = DEFAULT_DONE_MARKER_TEMPLATE
    skip_when_done: bool = False

    def done_marker(self, channel_id: str) -> str:
        return self.done_marker_template.format(channel_id=channel_id)
