from typing import Dict, List

import pytest
from structlog.testing import capture_logs

from issue_sync.config import NotionPropertyNames
from issue_sync.errors import NotionApiError, PageLookupError, PageWriteError
from issue_sync.notion.pages import PageLocator, PageWriter


class DummyNotionAPI:
    def __init__(self, *, results=None, should_fail: bool = False) -> None:
        self.results = results or []
        self.should_fail = should_fail
        self.queries: List[Dict[str, object]] = []
        self.created: List[Dict[str, object]] = []
        self.updated: List[Dict[str, object]] = []

    def query_database(self, database_id, filter_body, *, page_size=None):
        self.queries.append({"database_id": database_id, "filter": filter_body, "page_size": page_size})
        if self.should_fail:
            raise NotionApiError("unauthorized", status_code=401)
        return {"results": self.results}

    def create_page(self, database_id, properties):
        if self.should_fail:
            raise NotionApiError("create failed", status_code=400)
        self.created.append({"database_id": database_id, "properties": properties})
        return {"id": "new-page"}

    def update_page(self, page_id, properties):
        if self.should_fail:
            raise NotionApiError("update failed", status_code=409)
        self.updated.append({"page_id": page_id, "properties": properties})
        return {"id": page_id}


NAMES = NotionPropertyNames()


def test_find_filters_on_issue_id_property() -> None:
    api = DummyNotionAPI(results=[{"id": "page-1"}, {"id": "page-2"}])
    locator = PageLocator(api, database_id="db1", property_names=NAMES)

    assert locator.find(42) == "page-1"
    assert api.queries == [
        {
            "database_id": "db1",
            "filter": {"property": "Issue ID", "rich_text": {"equals": "42"}},
            "page_size": 1,
        }
    ]


def test_find_uses_configured_property_name() -> None:
    api = DummyNotionAPI()
    locator = PageLocator(api, database_id="db1", property_names=NotionPropertyNames(issue_id="GitHub ID"))

    assert locator.find(7) is None
    assert api.queries[0]["filter"]["property"] == "GitHub ID"


def test_find_raises_lookup_error_on_api_failure() -> None:
    locator = PageLocator(DummyNotionAPI(should_fail=True), database_id="db1", property_names=NAMES)

    with pytest.raises(PageLookupError) as excinfo:
        locator.find(42)

    assert excinfo.value.status_code == 401
    assert isinstance(excinfo.value.__cause__, NotionApiError)


def test_find_rejects_result_without_id() -> None:
    api = DummyNotionAPI(results=[{"object": "page"}])
    locator = PageLocator(api, database_id="db1", property_names=NAMES)

    with capture_logs() as logs:
        with pytest.raises(PageLookupError):
            locator.find(42)

    assert logs[-1]["event"] == "notion_query_result_missing_id"


def test_create_returns_page_id() -> None:
    api = DummyNotionAPI()
    writer = PageWriter(api, database_id="db1", property_names=NAMES)

    with capture_logs() as logs:
        page_id = writer.create({"Title": {"title": []}})

    assert page_id == "new-page"
    assert api.created[0]["database_id"] == "db1"
    assert logs[-1]["event"] == "notion_page_created"


def test_update_status_only_writes_single_property() -> None:
    api = DummyNotionAPI()
    writer = PageWriter(api, database_id="db1", property_names=NotionPropertyNames(status="State"))

    writer.update_status_only("page-1", "Done")

    assert api.updated == [{"page_id": "page-1", "properties": {"State": {"status": {"name": "Done"}}}}]


@pytest.mark.parametrize(
    "operation",
    [
        lambda writer: writer.create({}),
        lambda writer: writer.update_full("page-1", {}),
        lambda writer: writer.update_status_only("page-1", "Done"),
    ],
)
def test_write_failures_raise_page_write_error(operation) -> None:
    writer = PageWriter(DummyNotionAPI(should_fail=True), database_id="db1", property_names=NAMES)

    with capture_logs() as logs:
        with pytest.raises(PageWriteError):
            operation(writer)

    assert logs[-1]["log_level"] == "error"
