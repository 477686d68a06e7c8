"""Translation utilities converting issue events into Notion property payloads."""
from __future__ import annotations

from typing import Any, Dict, Iterable

from ..config import NotionPropertyNames, StatusLabels
from ..events import IssueEvent
from ..status import map_status

MAX_TEXT_LENGTH = 2000
MAX_OPTION_LENGTH = 100


def _title_property(value: str) -> Dict[str, Any]:
    return {"title": [{"type": "text", "text": {"content": value[:MAX_TEXT_LENGTH]}}]}


def _rich_text_property(value: str) -> Dict[str, Any]:
    return {"rich_text": [{"type": "text", "text": {"content": value[:MAX_TEXT_LENGTH]}}]}


def _status_property(value: str) -> Dict[str, Any]:
    return {"status": {"name": value[:MAX_OPTION_LENGTH]}}


def _url_property(value: str) -> Dict[str, Any]:
    return {"url": value or None}


def _multi_select_property(values: Iterable[str]) -> Dict[str, Any]:
    # Notion rejects option names containing commas.
    options = [value.replace(",", " ")[:MAX_OPTION_LENGTH] for value in values if value]
    return {"multi_select": [{"name": option} for option in dict.fromkeys(options)]}


def build_status_properties(status: str, names: NotionPropertyNames) -> Dict[str, Any]:
    """Return a payload that rewrites only the status property."""
    return {names.status: _status_property(status)}


def build_issue_properties(
    event: IssueEvent,
    names: NotionPropertyNames,
    labels: StatusLabels,
    *,
    include_issue_id: bool = False,
) -> Dict[str, Any]:
    """Create the full property payload for an issue page.

    Parameters
    ----------
    event:
        The issue event whose title, state, URL and assignees are written.
    names:
        Property names of the target Notion database.
    labels:
        Status option names used by the database.
    include_issue_id:
        Whether to write the correlation key. Only page creation sets it;
        updates never rewrite it.
    """
    properties: Dict[str, Any] = {
        names.title: _title_property(event.title),
        names.status: _status_property(map_status(event.state, labels)),
        names.url: _url_property(event.url),
        names.assignees: _multi_select_property(event.assignees),
    }
    if names.labels:
        properties[names.labels] = _multi_select_property(event.labels)
    if include_issue_id:
        properties[names.issue_id] = _rich_text_property(event.issue_id)
    return properties


def build_issue_id_filter(issue_number: int, names: NotionPropertyNames) -> Dict[str, Any]:
    return {
        "property": names.issue_id,
        "rich_text": {"equals": str(issue_number)},
    }


__all__ = [
    "build_issue_id_filter",
    "build_issue_properties",
    "build_status_properties",
]
