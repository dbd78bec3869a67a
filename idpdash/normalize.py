"""Map raw Jira or fixture payloads onto the canonical Project/Issue shape.

All functions here are total: malformed or partial payloads produce
empty-string defaults rather than exceptions, so the caller never has to
care whether the data came from fixtures or from the live API.
"""

from typing import Any

from idpdash.models import Issue, IssuePage, Project, ProjectPage

DEFAULT_BASE_URL = "https://your-domain.atlassian.net"


def normalize_base_url(base_url: str | None) -> str:
    return (base_url or DEFAULT_BASE_URL).strip().rstrip("/")


def project_url(base_url: str, key: str) -> str:
    return f"{normalize_base_url(base_url)}/jira/projects/{key}/summary"


def board_url(base_url: str, key: str) -> str:
    return f"{normalize_base_url(base_url)}/jira/software/c/projects/{key}/boards"


def issue_url(base_url: str, key: str) -> str:
    return f"{normalize_base_url(base_url)}/browse/{key}"


def _dig(node: Any, *path: str) -> Any:
    for part in path:
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _items(raw: Any, key: str) -> list[dict]:
    items = _dig(raw, key)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def normalize_projects(raw: Any, base_url: str | None) -> list[Project]:
    projects = []
    for node in _items(raw, "values"):
        key = _text(node.get("key"))
        projects.append(
            Project(
                id=_text(node.get("id")),
                key=key,
                name=_text(node.get("name")),
                project_url=project_url(base_url, key),
                board_url=board_url(base_url, key),
            )
        )
    return projects


def normalize_issues(raw: Any, base_url: str | None) -> list[Issue]:
    issues = []
    for node in _items(raw, "issues"):
        key = _text(node.get("key"))
        issues.append(
            Issue(
                id=_text(node.get("id")),
                key=key,
                summary=_text(_dig(node, "fields", "summary")),
                status_name=_text(_dig(node, "fields", "status", "name")),
                status_category_key=_text(_dig(node, "fields", "status", "statusCategory", "key")).lower(),
                issue_type=_text(_dig(node, "fields", "issuetype", "name")),
                updated=_text(_dig(node, "fields", "updated")),
                web_url=issue_url(base_url, key),
            )
        )
    return issues


def normalize_project_page(raw: Any, base_url: str | None) -> ProjectPage:
    values = normalize_projects(raw, base_url)
    return ProjectPage(
        self_url=_text(_dig(raw, "self")),
        start_at=_int(_dig(raw, "startAt"), 0),
        max_results=_int(_dig(raw, "maxResults"), len(values)),
        total=_int(_dig(raw, "total"), len(values)),
        values=values,
    )


def normalize_issue_page(raw: Any, base_url: str | None) -> IssuePage:
    issues = normalize_issues(raw, base_url)
    return IssuePage(
        start_at=_int(_dig(raw, "startAt"), 0),
        max_results=_int(_dig(raw, "maxResults"), len(issues)),
        total=_int(_dig(raw, "total"), len(issues)),
        issues=issues,
    )


def payload_total(raw: Any, default: int) -> int:
    return _int(_dig(raw, "total"), default)
