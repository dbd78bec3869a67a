"""Canned Jira payloads served in mock mode."""

import copy
from datetime import UTC, datetime

_PROJECTS = {
    "self": "http://mock/jira/project/search",
    "nextPage": None,
    "maxResults": 50,
    "startAt": 0,
    "total": 3,
    "values": [
        {"id": "10001", "key": "PLAT", "name": "Platform"},
        {"id": "10002", "key": "IDP", "name": "Internal Developer Platform"},
        {"id": "10003", "key": "OBS", "name": "Observability"},
    ],
}


def _issue(issue_id: str, key: str, summary: str, status: str, category: str, category_name: str, kind: str) -> dict:
    return {
        "id": issue_id,
        "key": key,
        "fields": {
            "summary": summary,
            "status": {"name": status, "statusCategory": {"key": category, "name": category_name}},
            "issuetype": {"name": kind},
            "updated": None,
        },
    }


_MY_ISSUES = {
    "expand": "schema,names",
    "startAt": 0,
    "maxResults": 25,
    "total": 5,
    "issues": [
        _issue("20001", "IDP-101", "Implement backend mock mode", "In Progress", "indeterminate", "In Progress", "Task"),
        _issue("20002", "IDP-102", "Wire Jira view to backend", "To Do", "new", "To Do", "Story"),
        _issue("20003", "IDP-103", "Unblock deployment pipeline", "Blocked", "indeterminate", "In Progress", "Bug"),
        _issue("20004", "IDP-104", "Migrate docs to Confluence", "Resolved", "done", "Done", "Task"),
        _issue("20005", "IDP-105", "Clean up old branches", "Closed", "done", "Done", "Task"),
    ],
}


def mock_projects() -> dict:
    return copy.deepcopy(_PROJECTS)


def mock_my_issues() -> dict:
    """The "assigned to me" set, with ``updated`` stamped at call time."""
    payload = copy.deepcopy(_MY_ISSUES)
    now = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    for issue in payload["issues"]:
        issue["fields"]["updated"] = now
    return payload
