"""Shared pydantic models — the JSON contract between the gateway and the UI."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CONTRACT = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Project(BaseModel):
    model_config = _CONTRACT

    id: str
    key: str  # PLAT, IDP, ...
    name: str
    project_url: str
    board_url: str


class Issue(BaseModel):
    model_config = _CONTRACT

    id: str
    key: str  # IDP-101
    summary: str
    status_name: str
    status_category_key: str  # new | indeterminate | done, "" when upstream omits it
    issue_type: str
    updated: str  # ISO-8601 as sent upstream
    web_url: str


class ProjectPage(BaseModel):
    model_config = _CONTRACT

    self_url: str = Field(default="", alias="self")
    start_at: int
    max_results: int
    total: int
    values: list[Project] = []


class IssuePage(BaseModel):
    model_config = _CONTRACT

    start_at: int
    max_results: int
    total: int
    issues: list[Issue] = []


class IssueGroups(BaseModel):
    """One ordered list per workflow bucket, every bucket always present."""

    model_config = _CONTRACT

    open: list[Issue] = []
    inprogress: list[Issue] = []
    blocked: list[Issue] = []
    completed: list[Issue] = []
    closed: list[Issue] = []


class GroupedIssues(BaseModel):
    model_config = _CONTRACT

    groups: IssueGroups
    total: int

