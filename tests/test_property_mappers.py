from issue_sync.config import NotionPropertyNames, StatusLabels
from issue_sync.events import IssueEvent
from issue_sync.notion.mappers import build_issue_properties, build_status_properties


def _event(**overrides) -> IssueEvent:
    values = {
        "action": "opened",
        "number": 42,
        "title": "Login button misaligned",
        "url": "https://github.com/org/repo/issues/42",
        "state": "open",
        "assignees": ("octocat", "hubot"),
        "labels": ("bug",),
    }
    values.update(overrides)
    return IssueEvent(**values)


def test_build_issue_properties_full_payload() -> None:
    props = build_issue_properties(_event(), NotionPropertyNames(), StatusLabels(), include_issue_id=True)

    assert props["Title"]["title"][0]["text"]["content"] == "Login button misaligned"
    assert props["Status"] == {"status": {"name": "In progress"}}
    assert props["URL"] == {"url": "https://github.com/org/repo/issues/42"}
    assert props["Assignee"] == {"multi_select": [{"name": "octocat"}, {"name": "hubot"}]}
    assert props["Issue ID"]["rich_text"][0]["text"]["content"] == "42"
    assert set(props) == {"Title", "Status", "URL", "Assignee", "Issue ID"}


def test_build_issue_properties_omits_issue_id_for_updates() -> None:
    props = build_issue_properties(_event(), NotionPropertyNames(), StatusLabels())

    assert "Issue ID" not in props


def test_build_issue_properties_uses_custom_names_and_labels() -> None:
    names = NotionPropertyNames(
        title="Name",
        status="ステータス",
        url="GitHub URL",
        assignees="Assignees",
        issue_id="GitHub ID",
        labels="ラベル",
    )

    props = build_issue_properties(_event(state="closed"), names, StatusLabels(closed="完了"), include_issue_id=True)

    assert set(props) == {"Name", "ステータス", "GitHub URL", "Assignees", "GitHub ID", "ラベル"}
    assert props["ステータス"] == {"status": {"name": "完了"}}
    assert props["ラベル"] == {"multi_select": [{"name": "bug"}]}


def test_build_issue_properties_truncates_long_values() -> None:
    props = build_issue_properties(
        _event(title="x" * 2500, assignees=("a" * 150, "team,ops")),
        NotionPropertyNames(),
        StatusLabels(),
    )

    assert len(props["Title"]["title"][0]["text"]["content"]) == 2000
    names = [option["name"] for option in props["Assignee"]["multi_select"]]
    assert names == ["a" * 100, "team ops"]


def test_build_issue_properties_clears_assignees_when_none() -> None:
    props = build_issue_properties(_event(assignees=()), NotionPropertyNames(), StatusLabels())

    assert props["Assignee"] == {"multi_select": []}


def test_build_status_properties_only_contains_status() -> None:
    assert build_status_properties("Done", NotionPropertyNames()) == {"Status": {"status": {"name": "Done"}}}
