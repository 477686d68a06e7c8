"""Page lookup and write operations against the issue tracking database."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import structlog

from ..config import NotionPropertyNames
from ..errors import NotionApiError, PageLookupError, PageWriteError, wrap_api_error
from .client import NotionApi
from .mappers import build_issue_id_filter, build_status_properties

LOGGER = structlog.get_logger("issue_sync.notion.pages")


class PageLocator:
    """Finds the Notion page tracking a GitHub issue."""

    def __init__(
        self,
        api: NotionApi,
        *,
        database_id: str,
        property_names: NotionPropertyNames,
        logger: Any = None,
    ) -> None:
        self._api = api
        self._database_id = database_id
        self._names = property_names
        self._logger = (logger or LOGGER).bind(component="page_locator")

    def find(self, issue_number: int) -> Optional[str]:
        """Return the page ID for ``issue_number`` or ``None`` when untracked.

        Raises:
            PageLookupError: If the database query fails. This is distinct
                from the page simply not existing.
        """
        filter_body = build_issue_id_filter(issue_number, self._names)
        try:
            response = self._api.query_database(self._database_id, filter_body, page_size=1)
        except NotionApiError as exc:
            self._logger.error("notion_database_query_failed", issue_id=str(issue_number), error=str(exc))
            raise wrap_api_error(PageLookupError, f"Failed to look up page for issue {issue_number}", exc) from exc

        results = response.get("results") or []
        if not results:
            self._logger.debug("notion_page_not_found", issue_id=str(issue_number))
            return None
        raw_id = results[0].get("id")
        if not raw_id:
            self._logger.error("notion_query_result_missing_id", issue_id=str(issue_number))
            raise PageLookupError(f"Notion query for issue {issue_number} returned a page without an id")
        page_id = str(raw_id)
        self._logger.debug("existing_page_found", issue_id=str(issue_number), page_id=page_id)
        return page_id


class PageWriter:
    """Creates and updates issue pages; every operation is a single remote call."""

    def __init__(
        self,
        api: NotionApi,
        *,
        database_id: str,
        property_names: NotionPropertyNames,
        logger: Any = None,
    ) -> None:
        self._api = api
        self._database_id = database_id
        self._names = property_names
        self._logger = (logger or LOGGER).bind(component="page_writer")

    def create(self, properties: Mapping[str, object]) -> str:
        try:
            page: Dict[str, Any] = self._api.create_page(self._database_id, properties)
        except NotionApiError as exc:
            self._logger.error("notion_page_create_failed", error=str(exc))
            raise wrap_api_error(PageWriteError, "Failed to create Notion page", exc) from exc
        page_id = str(page.get("id"))
        self._logger.info("notion_page_created", page_id=page_id)
        return page_id

    def update_full(self, page_id: str, properties: Mapping[str, object]) -> None:
        try:
            self._api.update_page(page_id, properties)
        except NotionApiError as exc:
            self._logger.error("notion_page_update_failed", page_id=page_id, error=str(exc))
            raise wrap_api_error(PageWriteError, f"Failed to update Notion page {page_id}", exc) from exc
        self._logger.info("notion_page_updated", page_id=page_id, properties=sorted(properties))

    def update_status_only(self, page_id: str, status: str) -> None:
        """Rewrite only the status property of ``page_id``."""
        properties = build_status_properties(status, self._names)
        try:
            self._api.update_page(page_id, properties)
        except NotionApiError as exc:
            self._logger.error("notion_status_update_failed", page_id=page_id, error=str(exc))
            raise wrap_api_error(PageWriteError, f"Failed to update status of Notion page {page_id}", exc) from exc
        self._logger.info("notion_status_updated", page_id=page_id, status=status)


__all__ = ["PageLocator", "PageWriter"]
