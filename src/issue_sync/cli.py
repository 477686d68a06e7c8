"""Command line entry-point for the GitHub issue → Notion synchronisation."""
from __future__ import annotations

import argparse
import os
import sys
from typing import Any, Optional

from .config import SyncConfig
from .errors import InvalidIssueEvent, MissingConfiguration, PageLookupError
from .events import IssueEvent, issue_event_from_payload, load_issue_event, read_event_payload
from .notion.client import NotionApi
from .notion.pages import PageLocator, PageWriter
from .reconcile import IssueReconciler, SyncOutcome
from .utils import configure_logger

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_WRITE_FAILED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Synchronise a GitHub issue event with a Notion database")
    parser.add_argument("--database-id", help="Target Notion database identifier (default: NOTION_DATABASE_ID)")
    parser.add_argument(
        "--event-path",
        help="Read the issue from a GitHub webhook payload file instead of ISSUE_* variables",
    )
    parser.add_argument(
        "--from-event",
        action="store_true",
        help="Read the issue from the payload at GITHUB_EVENT_PATH",
    )
    parser.add_argument("--dry-run", action="store_true", help="Log the planned write without calling Notion")
    parser.add_argument(
        "--fail-on-write-error",
        action="store_true",
        help=f"Exit with status {EXIT_WRITE_FAILED} when the Notion write fails",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: NOTION_SYNC_LOG_LEVEL or INFO)",
    )
    return parser


def build_reconciler(config: SyncConfig, *, logger: Any = None) -> IssueReconciler:
    api = NotionApi(
        config.notion_token,
        base_url=config.api_base_url,
        timeout=config.timeout,
        max_attempts=config.max_attempts,
        logger=logger,
    )
    locator = PageLocator(
        api,
        database_id=config.database_id,
        property_names=config.properties,
        logger=logger,
    )
    writer = PageWriter(
        api,
        database_id=config.database_id,
        property_names=config.properties,
        logger=logger,
    )
    return IssueReconciler(locator, writer, config, logger=logger)


def exit_code_for(outcome: SyncOutcome, config: SyncConfig) -> int:
    if outcome is SyncOutcome.FAILED and config.fail_on_write_error:
        return EXIT_WRITE_FAILED
    return EXIT_OK


def _load_event(args: argparse.Namespace, logger: Any) -> IssueEvent:
    if args.event_path or args.from_event:
        return issue_event_from_payload(read_event_payload(args.event_path))
    return load_issue_event(logger=logger)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = SyncConfig.from_env(
            database_id=args.database_id,
            dry_run=True if args.dry_run else None,
            fail_on_write_error=True if args.fail_on_write_error else None,
            log_level=args.log_level.upper() if args.log_level else None,
        )
    except MissingConfiguration as exc:
        logger = configure_logger(args.log_level or os.environ.get("NOTION_SYNC_LOG_LEVEL") or "INFO")
        logger.error("configuration_error", error=str(exc))
        return EXIT_FATAL

    logger = configure_logger(config.log_level, config.log_format)

    try:
        event = _load_event(args, logger)
        logger.info("issue_event_received", action=event.action, issue_id=event.issue_id, state=event.state)
        outcome = build_reconciler(config, logger=logger).reconcile(event)
    except InvalidIssueEvent as exc:
        logger.error("invalid_issue_event", error=str(exc))
        return EXIT_FATAL
    except PageLookupError as exc:
        logger.error("notion_lookup_failed", error=str(exc))
        return EXIT_FATAL
    except Exception:  # pragma: no cover - defensive guard for workflow stability
        logger.exception("unexpected_error")
        return EXIT_FATAL

    exit_code = exit_code_for(outcome, config)
    logger.info("issue_sync_finished", outcome=outcome.value, exit_code=exit_code)
    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
