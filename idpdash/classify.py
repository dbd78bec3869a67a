"""Workflow-bucket classification for issues."""

from collections.abc import Iterable
from enum import StrEnum

from idpdash.models import Issue, IssueGroups


class WorkflowBucket(StrEnum):
    OPEN = "open"
    INPROGRESS = "inprogress"
    BLOCKED = "blocked"
    COMPLETED = "completed"
    CLOSED = "closed"


def classify(status_name: str | None, status_category_key: str | None) -> WorkflowBucket:
    """Map a status name and status-category key onto one workflow bucket.

    First match wins:

    1. a status name containing "block" is blocked, whatever its category
    2. category "new" is open
    3. category "indeterminate" is in progress
    4. category "done" is closed when the name says "closed", else completed
    5. anything else is open
    """
    name = (status_name or "").lower()
    category = (status_category_key or "").lower()

    if "block" in name:
        return WorkflowBucket.BLOCKED
    match category:
        case "new":
            return WorkflowBucket.OPEN
        case "indeterminate":
            return WorkflowBucket.INPROGRESS
        case "done":
            return WorkflowBucket.CLOSED if "closed" in name else WorkflowBucket.COMPLETED
        case _:
            return WorkflowBucket.OPEN


def group_issues(issues: Iterable[Issue]) -> dict[WorkflowBucket, list[Issue]]:
    """Stable partition of issues by bucket; every bucket is present."""
    groups: dict[WorkflowBucket, list[Issue]] = {bucket: [] for bucket in WorkflowBucket}
    for issue in issues:
        groups[classify(issue.status_name, issue.status_category_key)].append(issue)
    return groups


def to_issue_groups(groups: dict[WorkflowBucket, list[Issue]]) -> IssueGroups:
    return IssueGroups(**{bucket.value: items for bucket, items in groups.items()})
