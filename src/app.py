"""Application entry point for the chatops channel reader."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

from art import tprint
from dotenv import load_dotenv

import settings
from adapters.reply_formatting import format_payload
from adapters.slack_channel import SlackChannelAdapter
from adapters.webhook_notifier import WebhookAlertNotifier
from client import build_client
from core.config import ReaderConfig
from core.errors import ChannelAccessError
from core.message_parser import scan_history
from core.reader import IncidentChannelReader

NAME = "CHATOPS"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _SecretMaskingFormatter(logging.Formatter):
    """Mask secret values such as the Slack token in every log line."""

    def __init__(self, secrets: list[str]) -> None:
        super().__init__(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        # Longest first, so a secret containing another one is masked whole.
        self._secrets = sorted({secret for secret in secrets if secret}, key=len, reverse=True)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _configure_logging() -> None:
    # The reader runs as a one-shot job, so logs only go to the console.
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
    secrets = [os.getenv(name) or "" for name in config.get("redact_env", ["SLACK_TOKEN"])]

    handler = logging.StreamHandler()
    handler.setFormatter(_SecretMaskingFormatter(secrets))
    logging.basicConfig(level=level, handlers=[handler])


def _resolve_channel_id(channel_id: Optional[str]) -> str:
    channel_id = channel_id or os.getenv("SLACK_CHANNEL_ID")
    if not channel_id:
        raise RuntimeError("Environment variable SLACK_CHANNEL_ID must be set")
    return channel_id


def _reader_config() -> ReaderConfig:
    return ReaderConfig(
        channel_prefix=settings.CHANNEL_PREFIX,
        join_delay_seconds=settings.JOIN_DELAY_SECONDS,
        done_marker_template=settings.DONE_MARKER_TEMPLATE,
        skip_when_done=settings.SKIP_WHEN_DONE,
    )


def _run(channel_id: Optional[str]) -> None:
    _print_banner()
    _configure_logging()
    logger = logging.getLogger(__name__)

    channel_id = _resolve_channel_id(channel_id)
    logger.info("Reading channel %s", channel_id)

    reader = IncidentChannelReader(
        channel=SlackChannelAdapter(build_client()),
        events=WebhookAlertNotifier(settings.WEBHOOK_URL, settings.WEBHOOK_TIMEOUT_SECONDS),
        config=_reader_config(),
    )

    # This is a one-shot job; channel problems are reported, never retried.
    try:
        outcome = reader.run(channel_id)
    except ChannelAccessError:
        logger.exception("Could not read channel %s", channel_id)
        return
    logger.info("Finished channel %s: %s", channel_id, outcome.status.value)


def _inspect(channel_id: Optional[str]) -> None:
    _configure_logging()
    channel_id = _resolve_channel_id(channel_id)
    config = _reader_config()

    channel = SlackChannelAdapter(build_client())
    try:
        info = channel.get_channel_info(channel_id)
        history = channel.fetch_history(channel_id)
    except ChannelAccessError:
        logging.getLogger(__name__).exception("Could not read channel %s", channel_id)
        return
    scan = scan_history(history, config.done_marker(channel_id))
    record = scan.record
    record.slack_channel_id = channel_id
    record.slack_channel_name = info.name

    print(f"Channel: {info.name} ({channel_id})")
    print(f"Messages checked: {scan.messages_checked}")
    print(f"Already processed: {'yes' if scan.done_seen else 'no'}")
    if not record.is_alert:
        print("No alert found.")
        return
    print(format_payload(record))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="chatops-reader")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Read the channel and forward the alert")
    run_parser.add_argument("--channel-id", help="Slack channel id (default: $SLACK_CHANNEL_ID)")
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print the alert parsed from the channel without posting or forwarding it.",
    )
    inspect_parser.add_argument("--channel-id", help="Slack channel id (default: $SLACK_CHANNEL_ID)")

    args = parser.parse_args(argv)
    channel_id = getattr(args, "channel_id", None)
    if args.command == "inspect":
        _inspect(channel_id)
        return
    _run(channel_id)


if __name__ == "__main__":
    main()
