"""Abstract base class for issue-tracker data sources."""

from abc import ABC, abstractmethod


class IssueProvider(ABC):
    """Returns raw, provider-shaped payloads; normalisation happens upstream of the UI."""

    @abstractmethod
    async def find_projects(
        self,
        query: str | None = None,
        start_at: int = 0,
        max_results: int = 25,
    ) -> dict: ...

    @abstractmethod
    async def search_issues(
        self,
        jql: str,
        start_at: int = 0,
        max_results: int = 25,
        fields: list[str] | None = None,
    ) -> dict: ...

    @abstractmethod
    async def get_my_issues(
        self,
        start_at: int = 0,
        max_results: int = 25,
        fields: list[str] | None = None,
    ) -> dict: ...

    async def aclose(self) -> None:
        return None
