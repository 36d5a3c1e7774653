"""Slack client factory for chatops-reader."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from slack_sdk import WebClient


def build_client() -> WebClient:
    """Create a Slack WebClient from environment variables.

    We read SLACK_TOKEN via python-dotenv to keep secrets out of the repo.
    """

    load_dotenv()

    token = os.getenv("SLACK_TOKEN")
    # Fail fast on missing credentials rather than on the first API call.
    if not token:
        raise RuntimeError("Environment variable SLACK_TOKEN must be set")

    logging.getLogger(__name__).info("Initializing Slack client")

    return WebClient(token=token)
