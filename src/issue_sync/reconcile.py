"""Decide and apply the Notion write for a single GitHub issue event.

The decision table, evaluated in order:

* ``opened`` with an existing page: skip (duplicate).
* ``opened`` without a page: create, including the ``Issue ID`` key.
* ``closed`` without a page: skip.
* any other action without a page: create.
* ``closed`` with a page: rewrite only the status.
* any other action with a page: rewrite title, status, URL and assignees.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import structlog

from .config import SyncConfig
from .errors import PageWriteError
from .events import IssueEvent
from .notion.mappers import build_issue_properties, build_status_properties
from .notion.pages import PageLocator, PageWriter
from .status import map_status

LOGGER = structlog.get_logger("issue_sync.reconcile")

OPENED = "opened"
CLOSED = "closed"


class SyncOutcome(str, enum.Enum):
    """Result of handling one issue event."""

    CREATED = "created"
    UPDATED = "updated"
    STATUS_UPDATED = "status_updated"
    SKIPPED = "skipped"
    FAILED = "failed"


class ActionKind(enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    UPDATE_STATUS = "update_status"
    SKIP = "skip"


_SUCCESS_OUTCOMES = {
    ActionKind.CREATE: SyncOutcome.CREATED,
    ActionKind.UPDATE: SyncOutcome.UPDATED,
    ActionKind.UPDATE_STATUS: SyncOutcome.STATUS_UPDATED,
    ActionKind.SKIP: SyncOutcome.SKIPPED,
}


@dataclass(frozen=True)
class PageAction:
    """The single write (or skip) chosen for an event."""

    kind: ActionKind
    page_id: Optional[str] = None
    properties: Dict[str, Any] = field(default_factory=dict)
    status: Optional[str] = None
    reason: Optional[str] = None

    @property
    def outcome(self) -> SyncOutcome:
        return _SUCCESS_OUTCOMES[self.kind]


def plan_action(event: IssueEvent, page_id: Optional[str], config: SyncConfig) -> PageAction:
    """Apply the decision table to ``event`` and the looked-up ``page_id``."""
    names = config.properties
    labels = config.status_labels

    if event.action == OPENED:
        if page_id:
            return PageAction(
                ActionKind.SKIP,
                page_id=page_id,
                reason="page already exists for opened issue",
            )
        return PageAction(
            ActionKind.CREATE,
            properties=build_issue_properties(event, names, labels, include_issue_id=True),
        )

    if not page_id:
        if event.action == CLOSED:
            return PageAction(ActionKind.SKIP, reason="closed issue has no tracked page")
        return PageAction(
            ActionKind.CREATE,
            properties=build_issue_properties(event, names, labels, include_issue_id=True),
        )

    if event.action == CLOSED:
        status = map_status(event.state, labels)
        return PageAction(
            ActionKind.UPDATE_STATUS,
            page_id=page_id,
            properties=build_status_properties(status, names),
            status=status,
        )

    return PageAction(
        ActionKind.UPDATE,
        page_id=page_id,
        properties=build_issue_properties(event, names, labels),
    )


class IssueReconciler:
    """Coordinates lookup, decision and write for one issue event."""

    def __init__(
        self,
        locator: PageLocator,
        writer: PageWriter,
        config: SyncConfig,
        *,
        logger: Any = None,
    ) -> None:
        self._locator = locator
        self._writer = writer
        self._config = config
        self._logger = (logger or LOGGER).bind(component="reconciler")

    def reconcile(self, event: IssueEvent) -> SyncOutcome:
        """Synchronise ``event`` with Notion and report what happened.

        Lookup failures propagate as :class:`~issue_sync.errors.PageLookupError`;
        write failures are logged and reported as ``SyncOutcome.FAILED``.
        """
        log = self._logger.bind(issue_id=event.issue_id, action=event.action)
        page_id = self._locator.find(event.number)
        action = plan_action(event, page_id, self._config)

        if action.kind is ActionKind.SKIP:
            log.warning("issue_sync_skipped", reason=action.reason, page_id=action.page_id)
            return SyncOutcome.SKIPPED

        if self._config.dry_run:
            log.info(
                "dry_run_skipping_write",
                planned=action.kind.value,
                page_id=action.page_id,
                properties=action.properties,
            )
            return action.outcome

        try:
            self._apply(action)
        except PageWriteError as exc:
            log.error("issue_sync_write_failed", planned=action.kind.value, page_id=action.page_id, error=str(exc))
            return SyncOutcome.FAILED

        log.info("issue_synced", outcome=action.outcome.value)
        return action.outcome

    def _apply(self, action: PageAction) -> None:
        if action.kind is ActionKind.CREATE:
            self._writer.create(action.properties)
        elif action.kind is ActionKind.UPDATE:
            self._writer.update_full(action.page_id, action.properties)
        elif action.kind is ActionKind.UPDATE_STATUS:
            self._writer.update_status_only(action.page_id, action.status)
        else:  # pragma: no cover - skips never reach the writer
            raise ValueError(f"Unsupported page action: {action.kind}")


__all__ = [
    "ActionKind",
    "IssueReconciler",
    "PageAction",
    "SyncOutcome",
    "plan_action",
]
