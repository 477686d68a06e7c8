"""Thin wrapper around the Notion REST endpoints used by the issue sync."""
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

import requests
import structlog
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential

from ..config import DEFAULT_TIMEOUT, NOTION_API_BASE_URL, NOTION_VERSION
from ..errors import NotionApiError

LOGGER = structlog.get_logger("issue_sync.notion.client")


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, NotionApiError) and exc.is_transient


class NotionApi:
    """Small wrapper around the Notion API endpoints used by the sync.

    Every call is attempted ``max_attempts`` times at most; transient errors
    (transport failures, HTTP 429 and 5xx) are retried with exponential
    backoff when more than one attempt is allowed.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = NOTION_API_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
        max_attempts: int = 1,
        session: Optional[requests.Session] = None,
        wait: Any = None,
        logger: Any = None,
    ) -> None:
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Notion-Version": NOTION_VERSION,
                "Content-Type": "application/json",
            }
        )
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_attempts = max(1, max_attempts)
        self._wait = wait if wait is not None else wait_exponential(multiplier=1, min=1, max=10)
        self._logger = (logger or LOGGER).bind(component="notion_api")

    def _call_with_retry(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        retrying = Retrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=self._wait,
            retry=retry_if_exception(_is_transient),
            before_sleep=self._log_retry,
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                return func(*args, **kwargs)
        return None  # pragma: no cover - Retrying always yields at least one attempt

    def _log_retry(self, retry_state: Any) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        self._logger.warning(
            "notion_api_retrying",
            attempt=retry_state.attempt_number,
            error=str(exc),
        )

    def _request(self, method: str, path: str, *, json: Optional[Mapping[str, object]] = None) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(method, url, json=json, timeout=self._timeout)
        except requests.RequestException as exc:
            raise NotionApiError(f"Notion API request to {path} failed: {exc}") from exc
        if response.status_code >= 400:
            raise NotionApiError(
                f"Notion API {method} {path} returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise NotionApiError(
                f"Notion API {method} {path} returned a non-JSON body: {exc}",
                status_code=response.status_code,
            ) from exc

    def query_database(
        self,
        database_id: str,
        filter_body: Mapping[str, object],
        *,
        page_size: Optional[int] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, object] = {"filter": filter_body}
        if page_size is not None:
            payload["page_size"] = page_size
        return self._call_with_retry(self._request, "POST", f"/databases/{database_id}/query", json=payload)

    def create_page(self, database_id: str, properties: Mapping[str, object]) -> Dict[str, Any]:
        payload = {"parent": {"database_id": database_id}, "properties": properties}
        return self._call_with_retry(self._request, "POST", "/pages", json=payload)

    def update_page(self, page_id: str, properties: Mapping[str, object]) -> Dict[str, Any]:
        return self._call_with_retry(self._request, "PATCH", f"/pages/{page_id}", json={"properties": properties})


__all__ = ["NotionApi"]
