"""Static configuration for chatops-reader.

All tunable settings (channel filter, webhook, logging) live in a single
JSON file for quick edits without touching Python. Secrets come from the
environment.
"""

import json
import os

from dotenv import load_dotenv

from core.config import DEFAULT_DONE_MARKER_TEMPLATE

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.getenv("CHATOPS_READER_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


load_dotenv()

_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Channel handling.
# - CHANNEL_PREFIX: only channels with this name prefix are incident channels
# - JOIN_DELAY_SECONDS: wait before reading so alert details can arrive
# - DONE_MARKER_TEMPLATE: "{channel_id}" is replaced with the channel id
# - SKIP_WHEN_DONE: stop when a previous run already left its marker
_slack = _CONFIG.get("slack", {})
CHANNEL_PREFIX = _slack.get("channel_prefix", "inc-")
JOIN_DELAY_SECONDS = float(_slack.get("join_delay_seconds", 5))
DONE_MARKER_TEMPLATE = _slack.get("done_marker_template", DEFAULT_DONE_MARKER_TEMPLATE)
SKIP_WHEN_DONE = bool(_slack.get("skip_when_done", False))

# Downstream automation endpoint; the environment wins over config.json.
_webhook = _CONFIG.get("webhook", {})
WEBHOOK_URL = os.getenv("ALERT_WEBHOOK_URL") or _webhook.get(
    "url", "http://giant-chatops-alert-eventsource-svc:12000/alert"
)
WEBHOOK_TIMEOUT_SECONDS = float(_webhook.get("timeout_seconds", 10))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
