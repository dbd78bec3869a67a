"""Tests for MockProvider and the canned fixtures."""

import asyncio

from idpdash.fixtures import mock_my_issues, mock_projects
from idpdash.providers.mock import MockProvider


class TestFixtures:
    def test_projects(self) -> None:
        keys = [p["key"] for p in mock_projects()["values"]]
        assert keys == ["PLAT", "IDP", "OBS"]

    def test_my_issues_are_stamped(self) -> None:
        payload = mock_my_issues()
        assert payload["total"] == 5
        assert [i["key"] for i in payload["issues"]] == ["IDP-101", "IDP-102", "IDP-103", "IDP-104", "IDP-105"]
        assert all(i["fields"]["updated"] for i in payload["issues"])

    def test_copies_are_independent(self) -> None:
        first = mock_projects()
        first["values"].clear()
        assert len(mock_projects()["values"]) == 3


class TestMockProvider:
    def test_ignores_query_and_paging(self) -> None:
        provider = MockProvider()
        narrow = asyncio.run(provider.find_projects(query="zzz", start_at=2, max_results=1))
        assert len(narrow["values"]) == 3

    def test_search_ignores_jql(self) -> None:
        provider = MockProvider()
        result = asyncio.run(provider.search_issues("project = NOPE", max_results=1))
        assert len(result["issues"]) == 5

    def test_custom_payloads(self) -> None:
        provider = MockProvider(issues={"issues": []}, projects={"values": []})
        assert asyncio.run(provider.get_my_issues()) == {"issues": []}
        assert asyncio.run(provider.find_projects()) == {"values": []}

    def test_custom_payloads_are_copied(self) -> None:
        issues = {"issues": [{"key": "IDP-1"}]}
        provider = MockProvider(issues=issues, projects={"values": [{"key": "IDP"}]})

        first = asyncio.run(provider.get_my_issues())
        first["issues"].clear()
        asyncio.run(provider.find_projects())["values"].clear()

        assert asyncio.run(provider.search_issues("ignored")) == {"issues": [{"key": "IDP-1"}]}
        assert asyncio.run(provider.find_projects()) == {"values": [{"key": "IDP"}]}
        assert issues == {"issues": [{"key": "IDP-1"}]}
