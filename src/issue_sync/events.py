"""Adapters turning the GitHub Actions context into an :class:`IssueEvent`."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple

import structlog

from .errors import InvalidIssueEvent

DEFAULT_TITLE = "No Title"
DEFAULT_URL = "No URL."

LOGGER = structlog.get_logger("issue_sync.events")


@dataclass(frozen=True)
class IssueEvent:
    """A single GitHub issue event as seen by the synchronisation."""

    action: str
    number: int
    title: str = DEFAULT_TITLE
    url: str = DEFAULT_URL
    state: Optional[str] = None
    assignees: Tuple[str, ...] = ()
    labels: Tuple[str, ...] = ()

    @property
    def issue_id(self) -> str:
        """Correlation key stored in the Notion ``Issue ID`` property."""
        return str(self.number)


def _dedupe(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(value for value in values if value))


def _names_from_items(items: Iterable[Any], key: str) -> List[str]:
    names: List[str] = []
    for item in items:
        if isinstance(item, Mapping):
            value = item.get(key)
            if value:
                names.append(str(value).strip())
        elif item is not None:
            names.append(str(item).strip())
    return names


def _parse_name_list(raw: Optional[str], *, field: str, key: str, logger: Any) -> Tuple[str, ...]:
    if raw is None or not raw.strip():
        return ()
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning(f"{field}_parse_failed", error=str(exc), raw=raw[:200])
        return ()
    if not isinstance(decoded, list):
        logger.warning(f"{field}_parse_failed", error="expected a JSON array", raw=raw[:200])
        return ()
    return _dedupe(_names_from_items(decoded, key))


def parse_assignees(raw: Optional[str], *, logger: Any = None) -> Tuple[str, ...]:
    """Decode a JSON array of assignee logins.

    Entries may be plain strings or GitHub user objects carrying a ``login``
    key. Malformed input degrades to an empty tuple with a warning.
    """
    return _parse_name_list(raw, field="assignees", key="login", logger=logger or LOGGER)


def parse_labels(raw: Optional[str], *, logger: Any = None) -> Tuple[str, ...]:
    """Decode a JSON array of label names or GitHub label objects."""
    return _parse_name_list(raw, field="labels", key="name", logger=logger or LOGGER)


def _parse_number(raw: Any) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise InvalidIssueEvent("ISSUE_NUMBER is required")
    if isinstance(raw, bool):
        raise InvalidIssueEvent(f"Issue number must be an integer, got {raw!r}")
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise InvalidIssueEvent(f"Issue number must be an integer, got {raw!r}") from exc


def load_issue_event(environ: Optional[Mapping[str, str]] = None, *, logger: Any = None) -> IssueEvent:
    """Build an :class:`IssueEvent` from the ``ISSUE_*`` environment variables.

    Raises:
        InvalidIssueEvent: If the action is missing or the issue number is
            not an integer.
    """
    env = os.environ if environ is None else environ
    action = (env.get("ISSUE_ACTION") or "").strip()
    if not action:
        raise InvalidIssueEvent("ISSUE_ACTION is required")

    return IssueEvent(
        action=action,
        number=_parse_number(env.get("ISSUE_NUMBER")),
        title=env.get("ISSUE_TITLE") or DEFAULT_TITLE,
        url=env.get("ISSUE_URL") or DEFAULT_URL,
        state=env.get("ISSUE_STATE") or None,
        assignees=parse_assignees(env.get("ISSUE_ASSIGNEES"), logger=logger),
        labels=parse_labels(env.get("ISSUE_LABELS"), logger=logger),
    )


def issue_event_from_payload(payload: Mapping[str, Any]) -> IssueEvent:
    """Build an :class:`IssueEvent` from a GitHub ``issues`` webhook payload."""
    action = payload.get("action")
    issue = payload.get("issue")
    if not action or not isinstance(issue, Mapping):
        raise InvalidIssueEvent("Event payload is not an issues event (missing 'action' or 'issue')")

    return IssueEvent(
        action=str(action),
        number=_parse_number(issue.get("number")),
        title=issue.get("title") or DEFAULT_TITLE,
        url=issue.get("html_url") or DEFAULT_URL,
        state=issue.get("state") or None,
        assignees=_dedupe(_names_from_items(issue.get("assignees") or [], "login")),
        labels=_dedupe(_names_from_items(issue.get("labels") or [], "name")),
    )


def read_event_payload(event_path: Optional[str], environ: Optional[Mapping[str, str]] = None) -> Mapping[str, Any]:
    """Read the webhook payload at ``event_path``, or at ``GITHUB_EVENT_PATH`` when unset.

    Raises:
        InvalidIssueEvent: If no path is available or the file is not a
            readable JSON object.
    """
    env = os.environ if environ is None else environ
    path = event_path or env.get("GITHUB_EVENT_PATH")
    if not path:
        raise InvalidIssueEvent("No event payload path: pass --event-path or set GITHUB_EVENT_PATH")

    try:
        with open(path, "r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except OSError as exc:
        raise InvalidIssueEvent(f"Cannot read event payload at {path}: {exc}") from exc
    except ValueError as exc:
        raise InvalidIssueEvent(f"Event payload at {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise InvalidIssueEvent(f"Event payload at {path} must be a JSON object")
    return payload


__all__ = [
    "DEFAULT_TITLE",
    "DEFAULT_URL",
    "IssueEvent",
    "issue_event_from_payload",
    "load_issue_event",
    "parse_assignees",
    "parse_labels",
    "read_event_payload",
]
