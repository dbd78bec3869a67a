"""Fixture-backed provider used when mock mode is on."""

import copy

from idpdash import fixtures
from idpdash.providers.base import IssueProvider


class MockProvider(IssueProvider):
    """Answers every call from the canned fixtures.

    Query, JQL and paging arguments are accepted for interface parity and
    ignored: the fixtures are returned whole.
    """

    def __init__(self, issues: dict | None = None, projects: dict | None = None) -> None:
        self._issues = issues
        self._projects = projects

    def _issue_payload(self) -> dict:
        if self._issues is None:
            return fixtures.mock_my_issues()
        return copy.deepcopy(self._issues)

    async def find_projects(
        self,
        query: str | None = None,
        start_at: int = 0,
        max_results: int = 25,
    ) -> dict:
        if self._projects is None:
            return fixtures.mock_projects()
        return copy.deepcopy(self._projects)

    async def search_issues(
        self,
        jql: str,
        start_at: int = 0,
        max_results: int = 25,
        fields: list[str] | None = None,
    ) -> dict:
        return self._issue_payload()

    async def get_my_issues(
        self,
        start_at: int = 0,
        max_results: int = 25,
        fields: list[str] | None = None,
    ) -> dict:
        return self._issue_payload()
