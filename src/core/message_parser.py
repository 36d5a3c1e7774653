"""Alert message parsing (core domain).

Recognizes alert-shaped messages among arbitrary channel messages and
extracts structured alert details from them. The grammar is fixed and
narrow: Opsgenie attachments with a known title layout and a free-text
"Tags" field.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, List, Optional

from core.errors import ClassificationFailure
from core.models import AlertRecord, Attachment, ChatMessage, ParseOutcome, ScanResult

LOGGER = logging.getLogger(__name__)

# Title links of Opsgenie alert attachments point to its short link host.
ALERT_SOURCE_MARKER = "https://opsg.in/"

# "#4865: [Prometheus]: anteater / anteater - PrometheusPersistentVolumeSpaceTooLow"
TITLE_PATTERN = re.compile(r"#[0-9]+: \[([A-Za-z0-9]+)\]: ([a-z]+) / ([a-z0-9]+) - (.+)")
TITLE_INSTALLATION_GROUP = 2
TITLE_CLUSTER_ID_GROUP = 3
TITLE_ALERT_NAME_GROUP = 4

TAG_SEPARATOR = re.compile(r",\s*")

PRIORITY_FIELD = "Priority"
TAGS_FIELD = "Tags"

MANAGEMENT_CLUSTER_TAG = "management_cluster"
WORKLOAD_CLUSTER_TAG = "workload_cluster"

# First match wins, in this order.
PROVIDER_TAGS = ("aws", "azure", "kvm")
PIPELINE_TAGS = ("stable", "testing")

Classifier = Callable[[ChatMessage, str], ParseOutcome]


def split_tags(value: str) -> List[str]:
    """Split a comma separated tag list.

    Only the separator and the whitespace directly after it are removed.
    Case and duplicates are kept as written.
    """

    return TAG_SEPARATOR.split(value)


def _first_present(tags: List[str], candidates: Iterable[str]) -> str:
    for candidate in candidates:
        if candidate in tags:
            return candidate
    return ""


def _apply_tags(record: AlertRecord, tags: List[str], title_match: Optional[re.Match]) -> None:
    if MANAGEMENT_CLUSTER_TAG in tags:
        record.affects_management_cluster = True
    if WORKLOAD_CLUSTER_TAG in tags:
        record.affects_workload_cluster = True
        if title_match is not None:
            record.workload_cluster_id = title_match.group(TITLE_CLUSTER_ID_GROUP)

    provider = _first_present(tags, PROVIDER_TAGS)
    if provider:
        record.provider = provider
    pipeline = _first_present(tags, PIPELINE_TAGS)
    if pipeline:
        record.installation_pipeline = pipeline


def _apply_attachment(record: AlertRecord, attachment: Attachment) -> None:
    record.is_alert = True

    title_match = TITLE_PATTERN.search(attachment.title)
    LOGGER.debug("Title %r matched: %s", attachment.title, title_match is not None)
    if title_match is not None:
        record.installation_name = title_match.group(TITLE_INSTALLATION_GROUP)
        record.alert_name = title_match.group(TITLE_ALERT_NAME_GROUP)

    for item in attachment.fields:
        if item.name == PRIORITY_FIELD:
            record.priority = item.value
        elif item.name == TAGS_FIELD:
            # Tags are completely unstructured, so matching is plain token
            # membership.
            _apply_tags(record, split_tags(item.value), title_match)


def classify_message(message: ChatMessage, done_marker: str) -> ParseOutcome:
    """Classify one message and extract alert details from it.

    Processing order:
    1) A message carrying the completion marker is only flagged as done.
    2) Messages without attachments yield an all-default record.
    3) Every attachment linking to the alert source marks the record as an
       alert; the last such attachment determines the extracted values.

    Malformed titles and unknown fields degrade to empty values. The
    failure branch of the outcome is never produced by this grammar.
    """

    record = AlertRecord()

    if done_marker in message.text:
        record.is_done = True
        return ParseOutcome(record=record)

    for attachment in message.attachments:
        if ALERT_SOURCE_MARKER in attachment.title_link:
            _apply_attachment(record, attachment)

    return ParseOutcome(record=record)


def parse_message(message: ChatMessage, done_marker: str) -> AlertRecord:
    """Return the classified record, raising the failure if there is one."""

    outcome = classify_message(message, done_marker)
    if outcome.error is not None:
        raise outcome.error
    return outcome.record


def scan_history(
    messages: Iterable[ChatMessage],
    done_marker: str,
    classifier: Classifier = classify_message,
) -> ScanResult:
    """Scan messages in the given order and stop at the first alert.

    A done-marked message does not stop the scan. Messages that fail
    classification are skipped and reported as diagnostics.
    """

    result = ScanResult(record=AlertRecord())
    for message in messages:
        result.messages_checked += 1
        outcome = classifier(message, done_marker)
        if outcome.error is not None or outcome.record is None:
            failure = outcome.error or ClassificationFailure("no record produced", message.timestamp)
            LOGGER.warning("Skipping message: %s", failure)
            result.diagnostics.append(failure)
            continue

        if outcome.record.is_done:
            result.done_seen = True
        if outcome.record.is_alert:
            result.record = outcome.record
            return result

    return result


def find_alert_in_history(messages: Iterable[ChatMessage], done_marker: str) -> AlertRecord:
    """Return the first alert record in the history, or an all-default record."""

    return scan_history(messages, done_marker).record
