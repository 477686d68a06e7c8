"""Synchronise GitHub issue events with pages in a Notion database."""

from .config import NotionPropertyNames, StatusLabels, SyncConfig  # noqa: F401
from .errors import (  # noqa: F401
    InvalidIssueEvent,
    IssueSyncError,
    MissingConfiguration,
    NotionApiError,
    PageLookupError,
    PageWriteError,
)
from .events import IssueEvent, load_issue_event  # noqa: F401
from .reconcile import IssueReconciler, SyncOutcome, plan_action  # noqa: F401
from .status import map_status  # noqa: F401
