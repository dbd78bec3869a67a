"""Jira Cloud REST API v3 client."""

import logging
from typing import Any

import httpx

from idpdash.errors import NotConfiguredError, UpstreamError
from idpdash.normalize import normalize_base_url
from idpdash.providers.base import IssueProvider
from idpdash.settings import JiraConfig

logger = logging.getLogger(__name__)

API_PATH = "/rest/api/3"
DEFAULT_TIMEOUT = 15.0
MAX_RESULTS_CEILING = 100

MY_ISSUES_JQL = "assignee = currentUser() AND resolution = Unresolved ORDER BY updated DESC"


def _error_details(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return (response.text or "")[:800] or None


class JiraClient(IssueProvider):
    def __init__(
        self,
        config: JiraConfig,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not config.base_url:
            raise NotConfiguredError("Jira")
        headers = {"Accept": "application/json", "User-Agent": config.user_agent}
        auth = None
        if config.has_credentials:
            # Basic base64(email:token)
            auth = httpx.BasicAuth(config.email, config.api_token.get_secret_value())  # type: ignore[arg-type,union-attr]
        self._client = httpx.AsyncClient(
            base_url=normalize_base_url(config.base_url) + API_PATH,
            headers=headers,
            auth=auth,
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "JiraClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict | None = None) -> dict:
        try:
            response = await self._client.get(path, params=params or {})
        except httpx.TimeoutException as exc:
            logger.warning("Jira request %s timed out", path)
            raise UpstreamError(message=f"Jira request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Jira request %s failed: %s", path, exc)
            raise UpstreamError(message=f"Jira request failed: {exc}") from exc

        if not response.is_success:
            logger.warning("Jira returned %s for %s", response.status_code, path)
            raise UpstreamError(
                upstream_status=response.status_code,
                details=_error_details(response),
                message=f"Jira returned {response.status_code}",
            )
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Jira returned a non-JSON body for %s", path)
            raise UpstreamError(
                details=(response.text or "")[:800],
                message="Jira returned a non-JSON body",
            ) from exc

    async def find_projects(
        self,
        query: str | None = None,
        start_at: int = 0,
        max_results: int = 25,
    ) -> dict:
        if start_at < 0:
            raise ValueError("start_at must be >= 0")
        params: dict[str, str | int] = {"startAt": start_at, "maxResults": max_results}
        if query:
            params["query"] = query
        return await self._get("/project/search", params)

    async def search_issues(
        self,
        jql: str,
        start_at: int = 0,
        max_results: int = 25,
        fields: list[str] | None = None,
    ) -> dict:
        if start_at < 0:
            raise ValueError("start_at must be >= 0")
        params: dict[str, str | int] = {
            "jql": jql,
            "startAt": start_at,
            "maxResults": min(max_results, MAX_RESULTS_CEILING),
        }
        if fields:
            params["fields"] = ",".join(fields)
        logger.debug("Jira search jql=%r startAt=%d maxResults=%d", jql, start_at, params["maxResults"])
        return await self._get("/search", params)

    async def get_my_issues(
        self,
        start_at: int = 0,
        max_results: int = 25,
        fields: list[str] | None = None,
    ) -> dict:
        return await self.search_issues(MY_ISSUES_JQL, start_at=start_at, max_results=max_results, fields=fields)
