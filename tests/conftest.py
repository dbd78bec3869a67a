"""Shared test fixtures."""

import pytest

import idpdash.settings as settings_module
from idpdash.models import Issue
from idpdash.settings import IdpSettings

BASE_URL = "https://acme.atlassian.net"


def make_settings(**kwargs) -> IdpSettings:
    defaults: dict = {
        "backend_mock": "true",
        "jira_base_url": None,
        "jira_email": None,
        "jira_api_token": None,
    }
    defaults.update(kwargs)
    return IdpSettings(_env_file=None, **defaults)  # type: ignore[call-arg]


def raw_issue(key: str, status: str, category: str, *, issue_id: str = "1", summary: str = "Something") -> dict:
    return {
        "id": issue_id,
        "key": key,
        "fields": {
            "summary": summary,
            "status": {"name": status, "statusCategory": {"key": category}},
            "issuetype": {"name": "Task"},
            "updated": "2024-05-01T10:00:00.000+0000",
        },
    }


def make_issue(key: str, status: str, category: str) -> Issue:
    return Issue(
        id=key,
        key=key,
        summary=f"Summary of {key}",
        status_name=status,
        status_category_key=category,
        issue_type="Task",
        updated="2024-05-01T10:00:00.000+0000",
        web_url=f"{BASE_URL}/browse/{key}",
    )


@pytest.fixture(autouse=True)
def reset_settings_cache():
    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()


@pytest.fixture
def mock_settings() -> IdpSettings:
    return make_settings(backend_mock="true")


@pytest.fixture
def live_settings() -> IdpSettings:
    return make_settings(
        backend_mock="false",
        jira_base_url=BASE_URL + "/",
        jira_email="me@example.com",
        jira_api_token="tok_secret",
    )


@pytest.fixture
def unconfigured_settings() -> IdpSettings:
    return make_settings(backend_mock="false")
