"""Exception hierarchy shared by the issue synchronisation components."""
from __future__ import annotations

from typing import Optional


class IssueSyncError(RuntimeError):
    """Base class for errors raised while synchronising an issue."""


class MissingConfiguration(IssueSyncError):
    """Raised when a mandatory configuration value is absent."""


class InvalidIssueEvent(IssueSyncError):
    """Raised when the incoming issue event cannot be interpreted."""


class NotionApiError(IssueSyncError):
    """Raised when the Notion API returns an error or cannot be reached."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_transient(self) -> bool:
        if self.status_code is None:
            return True
        return self.status_code == 429 or self.status_code >= 500


class PageLookupError(NotionApiError):
    """Raised when the database query for an issue's page fails."""


class PageWriteError(NotionApiError):
    """Raised when creating or updating a Notion page fails."""


def wrap_api_error(error_cls: type, message: str, cause: NotionApiError) -> NotionApiError:
    return error_cls(f"{message}: {cause}", status_code=cause.status_code)
