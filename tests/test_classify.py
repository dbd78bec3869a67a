"""Tests for idpdash.classify."""

import itertools

import pytest
from conftest import make_issue

from idpdash.classify import WorkflowBucket, classify, group_issues, to_issue_groups


class TestClassify:
    @pytest.mark.parametrize(
        ("status", "category", "expected"),
        [
            ("To Do", "new", WorkflowBucket.OPEN),
            ("In Progress", "indeterminate", WorkflowBucket.INPROGRESS),
            ("In Review", "indeterminate", WorkflowBucket.INPROGRESS),
            ("Done", "done", WorkflowBucket.COMPLETED),
            ("Resolved", "done", WorkflowBucket.COMPLETED),
            ("Closed", "done", WorkflowBucket.CLOSED),
            ("Blocked", "indeterminate", WorkflowBucket.BLOCKED),
        ],
    )
    def test_known_statuses(self, status: str, category: str, expected: WorkflowBucket) -> None:
        assert classify(status, category) == expected

    @pytest.mark.parametrize("category", ["new", "indeterminate", "done", "", "weird"])
    def test_block_wins_over_any_category(self, category: str) -> None:
        assert classify("Blocked", category) == WorkflowBucket.BLOCKED
        assert classify("Blocker review", category) == WorkflowBucket.BLOCKED

    def test_blocked_done_is_blocked(self) -> None:
        assert classify("Blocked", "done") == WorkflowBucket.BLOCKED

    def test_case_insensitive(self) -> None:
        assert classify("CLOSED", "DONE") == WorkflowBucket.CLOSED
        assert classify("to do", "NEW") == WorkflowBucket.OPEN
        assert classify("UNBLOCKED?", "New") == WorkflowBucket.BLOCKED

    def test_unknown_category_defaults_to_open(self) -> None:
        assert classify("Triage", "undefined") == WorkflowBucket.OPEN
        assert classify("Closed", "") == WorkflowBucket.OPEN

    def test_none_inputs(self) -> None:
        assert classify(None, None) == WorkflowBucket.OPEN

    def test_total_over_mixed_inputs(self) -> None:
        names = ["", "Blocked", "Closed", "Done", "In Progress", "To Do", "ÉTAT"]
        categories = ["", "new", "indeterminate", "done", "NEW", "other"]
        for name, category in itertools.product(names, categories):
            result = classify(name, category)
            assert result in set(WorkflowBucket)
            assert classify(name, category) is result


class TestGroupIssues:
    def test_stable_partition(self) -> None:
        a = make_issue("IDP-1", "To Do", "new")
        b = make_issue("IDP-2", "Blocked", "indeterminate")
        c = make_issue("IDP-3", "Backlog", "new")
        groups = group_issues([a, b, c])
        assert groups[WorkflowBucket.OPEN] == [a, c]
        assert groups[WorkflowBucket.BLOCKED] == [b]

    def test_every_bucket_present(self) -> None:
        groups = group_issues([])
        assert list(groups) == list(WorkflowBucket)
        assert all(items == [] for items in groups.values())

    def test_each_issue_lands_exactly_once(self) -> None:
        issues = [
            make_issue("IDP-1", "To Do", "new"),
            make_issue("IDP-2", "In Progress", "indeterminate"),
            make_issue("IDP-3", "Blocked", "new"),
            make_issue("IDP-4", "Done", "done"),
            make_issue("IDP-5", "Closed", "done"),
            make_issue("IDP-6", "Whatever", "mystery"),
        ]
        groups = group_issues(issues)
        assert sum(len(items) for items in groups.values()) == len(issues)
        placed = [issue.key for items in groups.values() for issue in items]
        assert sorted(placed) == sorted(issue.key for issue in issues)

    def test_to_issue_groups_dumps_bucket_names(self) -> None:
        issue = make_issue("IDP-9", "Closed", "done")
        dumped = to_issue_groups(group_issues([issue])).model_dump(by_alias=True)
        assert set(dumped) == {"open", "inprogress", "blocked", "completed", "closed"}
        assert dumped["closed"][0]["key"] == "IDP-9"
