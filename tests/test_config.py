import pytest

from issue_sync.config import NotionPropertyNames, StatusLabels, SyncConfig
from issue_sync.errors import MissingConfiguration


@pytest.fixture
def base_env():
    return {"NOTION_TOKEN": "secret", "NOTION_DATABASE_ID": "db1"}


def test_from_env_defaults(base_env) -> None:
    config = SyncConfig.from_env(base_env)

    assert config.notion_token == "secret"
    assert config.database_id == "db1"
    assert config.properties == NotionPropertyNames()
    assert config.status_labels == StatusLabels()
    assert config.fail_on_write_error is False
    assert config.dry_run is False
    assert config.max_attempts == 1
    assert config.log_format == "json"


@pytest.mark.parametrize("missing", ["NOTION_TOKEN", "NOTION_DATABASE_ID"])
def test_from_env_requires_credentials(base_env, missing) -> None:
    del base_env[missing]

    with pytest.raises(MissingConfiguration, match=missing):
        SyncConfig.from_env(base_env)


def test_from_env_reads_property_names_and_labels(base_env) -> None:
    base_env.update(
        {
            "NOTION_PROPERTY_TITLE": "Name",
            "NOTION_PROPERTY_STATUS": "ステータス",
            "NOTION_PROPERTY_URL": "GitHub URL",
            "NOTION_PROPERTY_ASSIGNEE": "Assignees",
            "NOTION_PROPERTY_ISSUE_ID": "GitHub ID",
            "NOTION_PROPERTY_LABELS": "ラベル",
            "NOTION_STATUS_OPEN": "対応中",
            "NOTION_STATUS_CLOSED": "完了",
        }
    )

    config = SyncConfig.from_env(base_env)

    assert config.properties == NotionPropertyNames(
        title="Name",
        status="ステータス",
        url="GitHub URL",
        assignees="Assignees",
        issue_id="GitHub ID",
        labels="ラベル",
    )
    assert config.status_labels == StatusLabels(open="対応中", closed="完了", default="Not started")


def test_from_env_parses_flags(base_env) -> None:
    base_env.update(
        {
            "NOTION_SYNC_FAIL_ON_WRITE_ERROR": "true",
            "NOTION_SYNC_DRY_RUN": "1",
            "NOTION_SYNC_MAX_ATTEMPTS": "3",
            "NOTION_SYNC_LOG_LEVEL": "debug",
        }
    )

    config = SyncConfig.from_env(base_env)

    assert config.fail_on_write_error is True
    assert config.dry_run is True
    assert config.max_attempts == 3
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    "key, value",
    [
        ("NOTION_SYNC_DRY_RUN", "maybe"),
        ("NOTION_SYNC_MAX_ATTEMPTS", "zero"),
        ("NOTION_SYNC_MAX_ATTEMPTS", "0"),
    ],
)
def test_from_env_rejects_invalid_values(base_env, key, value) -> None:
    base_env[key] = value

    with pytest.raises(MissingConfiguration):
        SyncConfig.from_env(base_env)


def test_overrides_take_precedence(base_env) -> None:
    config = SyncConfig.from_env(base_env, database_id="db2", dry_run=True, fail_on_write_error=None)

    assert config.database_id == "db2"
    assert config.dry_run is True
    assert config.fail_on_write_error is False
