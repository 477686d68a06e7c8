"""Runtime configuration for the GitHub issue → Notion synchronisation."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from .errors import MissingConfiguration

NOTION_API_BASE_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
DEFAULT_TIMEOUT = 30

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class NotionPropertyNames:
    """Names of the Notion properties written by the synchronisation.

    ``labels`` is optional; label synchronisation is disabled when it is
    ``None``.
    """

    title: str = "Title"
    status: str = "Status"
    url: str = "URL"
    assignees: str = "Assignee"
    issue_id: str = "Issue ID"
    labels: Optional[str] = None


@dataclass(frozen=True)
class StatusLabels:
    """Notion status option names used for each GitHub issue state."""

    open: str = "In progress"
    closed: str = "Done"
    default: str = "Not started"


DEFAULT_PROPERTY_NAMES = NotionPropertyNames()
DEFAULT_STATUS_LABELS = StatusLabels()


@dataclass(frozen=True)
class SyncConfig:
    """Immutable settings constructed once at startup and passed to each component."""

    notion_token: str
    database_id: str
    properties: NotionPropertyNames = field(default_factory=NotionPropertyNames)
    status_labels: StatusLabels = field(default_factory=StatusLabels)
    fail_on_write_error: bool = False
    dry_run: bool = False
    max_attempts: int = 1
    log_level: str = "INFO"
    log_format: str = "json"
    api_base_url: str = NOTION_API_BASE_URL
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "SyncConfig":
        """Build the configuration from environment variables.

        Keyword overrides (typically CLI flags) take precedence over the
        environment when they are not ``None``.

        Raises:
            MissingConfiguration: If the Notion token or database identifier
                is not available.
        """
        env = os.environ if environ is None else environ

        token = overrides.pop("notion_token", None) or env.get("NOTION_TOKEN")
        if not token:
            raise MissingConfiguration("NOTION_TOKEN environment variable is required")

        database_id = overrides.pop("database_id", None) or env.get("NOTION_DATABASE_ID")
        if not database_id:
            raise MissingConfiguration("NOTION_DATABASE_ID environment variable is required")

        properties = NotionPropertyNames(
            title=env.get("NOTION_PROPERTY_TITLE") or DEFAULT_PROPERTY_NAMES.title,
            status=env.get("NOTION_PROPERTY_STATUS") or DEFAULT_PROPERTY_NAMES.status,
            url=env.get("NOTION_PROPERTY_URL") or DEFAULT_PROPERTY_NAMES.url,
            assignees=env.get("NOTION_PROPERTY_ASSIGNEE") or DEFAULT_PROPERTY_NAMES.assignees,
            issue_id=env.get("NOTION_PROPERTY_ISSUE_ID") or DEFAULT_PROPERTY_NAMES.issue_id,
            labels=env.get("NOTION_PROPERTY_LABELS") or None,
        )
        status_labels = StatusLabels(
            open=env.get("NOTION_STATUS_OPEN") or DEFAULT_STATUS_LABELS.open,
            closed=env.get("NOTION_STATUS_CLOSED") or DEFAULT_STATUS_LABELS.closed,
            default=env.get("NOTION_STATUS_DEFAULT") or DEFAULT_STATUS_LABELS.default,
        )

        config = cls(
            notion_token=token,
            database_id=database_id,
            properties=properties,
            status_labels=status_labels,
            fail_on_write_error=parse_bool(env.get("NOTION_SYNC_FAIL_ON_WRITE_ERROR"), "NOTION_SYNC_FAIL_ON_WRITE_ERROR"),
            dry_run=parse_bool(env.get("NOTION_SYNC_DRY_RUN"), "NOTION_SYNC_DRY_RUN"),
            max_attempts=parse_positive_int(env.get("NOTION_SYNC_MAX_ATTEMPTS"), "NOTION_SYNC_MAX_ATTEMPTS", default=1),
            log_level=(env.get("NOTION_SYNC_LOG_LEVEL") or "INFO").upper(),
            log_format=(env.get("NOTION_SYNC_LOG_FORMAT") or "json").lower(),
        )

        explicit = {key: value for key, value in overrides.items() if value is not None}
        if explicit:
            config = replace(config, **explicit)
        return config


def parse_bool(raw: Optional[str], name: str) -> bool:
    if raw is None:
        return False
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise MissingConfiguration(f"{name} must be a boolean flag, got {raw!r}")


def parse_positive_int(raw: Optional[str], name: str, *, default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise MissingConfiguration(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise MissingConfiguration(f"{name} must be at least 1, got {value}")
    return value


__all__ = [
    "DEFAULT_PROPERTY_NAMES",
    "DEFAULT_STATUS_LABELS",
    "NotionPropertyNames",
    "StatusLabels",
    "SyncConfig",
    "parse_bool",
    "parse_positive_int",
]
