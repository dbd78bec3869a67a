"""Issue-tracker gateway: mode selection, fetch, normalise, classify."""

import logging
import re
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from enum import StrEnum

from idpdash.classify import group_issues, to_issue_groups
from idpdash.errors import InvalidRequestError, NotConfiguredError
from idpdash.models import GroupedIssues, Issue, IssuePage, ProjectPage
from idpdash.normalize import normalize_issue_page, normalize_issues, normalize_project_page, payload_total
from idpdash.providers.base import IssueProvider
from idpdash.providers.jira import JiraClient
from idpdash.providers.mock import MockProvider
from idpdash.settings import IdpSettings, JiraConfig

logger = logging.getLogger(__name__)

GROUPED_FIELDS = ["summary", "status", "issuetype", "updated"]
GROUPED_MAX_RESULTS = 50
DEFAULT_MAX_RESULTS = 25

_PROJECT_KEY = re.compile(r"^[A-Z][A-Z0-9_]*$")

ProviderFactory = Callable[[JiraConfig], IssueProvider]


class Mode(StrEnum):
    MOCK = "mock"
    LIVE = "live"


def select_mode(settings: IdpSettings) -> Mode:
    # Mock wins even when Jira is fully configured
    return Mode.MOCK if settings.mock_mode else Mode.LIVE


def project_jql(project_key: str) -> str:
    return f"project = {project_key} AND assignee = currentUser() ORDER BY updated DESC"


def _normalize_project_key(project_key: str) -> str:
    key = (project_key or "").strip().upper()
    if not _PROJECT_KEY.match(key):
        raise InvalidRequestError(f"Invalid project key: {project_key!r}")
    return key


def _in_project(issue: Issue, project_key: str) -> bool:
    prefix, sep, number = issue.key.upper().rpartition("-")
    return bool(sep) and bool(number) and prefix == project_key


class IssueGateway:
    """One instance per process; every call decides its own data source."""

    def __init__(
        self,
        settings: IdpSettings,
        provider_factory: ProviderFactory = JiraClient,
        mock_provider: IssueProvider | None = None,
    ) -> None:
        self._settings = settings
        self._provider_factory = provider_factory
        self._mock = mock_provider or MockProvider()

    @property
    def mode(self) -> Mode:
        return select_mode(self._settings)

    @property
    def base_url(self) -> str | None:
        return self._settings.jira_base_url

    @asynccontextmanager
    async def _provider(self) -> AsyncIterator[IssueProvider]:
        if self.mode is Mode.MOCK:
            yield self._mock
        else:
            config = self._settings.jira()
            if not config.is_configured:
                raise NotConfiguredError("Jira")
            provider = self._provider_factory(config)
            try:
                yield provider
            finally:
                await provider.aclose()

    async def list_projects(
        self,
        query: str | None = None,
        start_at: int = 0,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> ProjectPage:
        async with self._provider() as provider:
            raw = await provider.find_projects(query=query, start_at=start_at, max_results=max_results)
        page = normalize_project_page(raw, self.base_url)
        logger.debug("list_projects mode=%s count=%d", self.mode, len(page.values))
        return page

    async def search_issues(
        self,
        jql: str | None,
        start_at: int = 0,
        max_results: int = DEFAULT_MAX_RESULTS,
        fields: list[str] | None = None,
    ) -> IssuePage:
        async with self._provider() as provider:
            if self.mode is Mode.LIVE and not jql:
                raise InvalidRequestError("Missing jql")
            raw = await provider.search_issues(jql or "", start_at=start_at, max_results=max_results, fields=fields)
        page = normalize_issue_page(raw, self.base_url)
        logger.debug("search_issues mode=%s count=%d", self.mode, len(page.issues))
        return page

    async def my_issues(
        self,
        start_at: int = 0,
        max_results: int = DEFAULT_MAX_RESULTS,
        fields: list[str] | None = None,
    ) -> IssuePage:
        async with self._provider() as provider:
            raw = await provider.get_my_issues(start_at=start_at, max_results=max_results, fields=fields)
        return normalize_issue_page(raw, self.base_url)

    async def my_issues_grouped(
        self,
        start_at: int = 0,
        max_results: int = GROUPED_MAX_RESULTS,
        fields: list[str] | None = None,
    ) -> GroupedIssues:
        async with self._provider() as provider:
            raw = await provider.get_my_issues(
                start_at=start_at, max_results=max_results, fields=fields or GROUPED_FIELDS
            )
        issues = normalize_issues(raw, self.base_url)
        return GroupedIssues(
            groups=to_issue_groups(group_issues(issues)),
            total=payload_total(raw, len(issues)),
        )

    async def project_issues_grouped(
        self,
        project_key: str,
        start_at: int = 0,
        max_results: int = GROUPED_MAX_RESULTS,
        fields: list[str] | None = None,
    ) -> GroupedIssues:
        async with self._provider() as provider:
            if self.mode is Mode.MOCK:
                key = (project_key or "").strip().upper()
                raw = await provider.get_my_issues()
                issues = [issue for issue in normalize_issues(raw, self.base_url) if _in_project(issue, key)]
                total = len(issues)
            else:
                key = _normalize_project_key(project_key)
                raw = await provider.search_issues(
                    project_jql(key), start_at=start_at, max_results=max_results, fields=fields or GROUPED_FIELDS
                )
                issues = normalize_issues(raw, self.base_url)
                total = payload_total(raw, len(issues))
        logger.debug("project_issues_grouped key=%s mode=%s total=%d", key, self.mode, total)
        return GroupedIssues(groups=to_issue_groups(group_issues(issues)), total=total)
