"""Alert event webhook adapter.

Posts the alert payload to the automation event source, which starts the
downstream workflows.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request

from core.errors import AlertEventError
from core.models import AlertRecord

LOGGER = logging.getLogger(__name__)

DEFAULT_WEBHOOK_URL = "http://giant-chatops-alert-eventsource-svc:12000/alert"


class WebhookAlertNotifier:
    """Alert event adapter that POSTs JSON to a webhook."""

    def __init__(self, url: str = DEFAULT_WEBHOOK_URL, timeout: float = 10) -> None:
        self._url = url
        self._timeout = timeout

    def trigger(self, record: AlertRecord) -> None:
        """Send the alert payload; anything but HTTP 200 is a failure."""

        data = json.dumps(record.to_payload()).encode("utf-8")
        request = urllib.request.Request(self._url, data=data, method="POST")
        request.add_header("Content-Type", "application/json")
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                status = response.status
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="replace")
            raise AlertEventError(
                f"could not trigger alert event, webhook status was {e.code}: {body}"
            ) from e
        except urllib.error.URLError as e:
            raise AlertEventError(f"could not reach webhook {self._url}: {e.reason}") from e
        except (OSError, http.client.HTTPException) as e:
            raise AlertEventError(f"could not reach webhook {self._url}: {e!r}") from e

        if status != 200:
            raise AlertEventError(f"could not trigger alert event, webhook status was {status}")
        LOGGER.info("Alert event triggered for %s", record.slack_channel_name)
