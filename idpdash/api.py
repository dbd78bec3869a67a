"""HTTP surface for the dashboard backend."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from idpdash.errors import GatewayError
from idpdash.gateway import DEFAULT_MAX_RESULTS, GROUPED_MAX_RESULTS, IssueGateway
from idpdash.models import GroupedIssues, IssuePage, ProjectPage
from idpdash.settings import IdpSettings, get_settings

logger = logging.getLogger(__name__)

StartAt = Annotated[int, Query(alias="startAt", ge=0)]
MaxResults = Annotated[int | None, Query(alias="maxResults", ge=1)]
Fields = Annotated[str | None, Query(description="Comma-separated Jira field names")]


def get_gateway(request: Request) -> IssueGateway:
    return request.app.state.gateway


GatewayDep = Annotated[IssueGateway, Depends(get_gateway)]


def _split_fields(fields: str | None) -> list[str] | None:
    if not fields:
        return None
    names = [name.strip() for name in fields.split(",") if name.strip()]
    return names or None


jira_router = APIRouter(prefix="/api/jira", tags=["jira"])


@jira_router.get("/projects", response_model=ProjectPage)
async def list_projects(
    gateway: GatewayDep,
    query: str | None = None,
    start_at: StartAt = 0,
    max_results: MaxResults = None,
) -> ProjectPage:
    return await gateway.list_projects(query=query, start_at=start_at, max_results=max_results or DEFAULT_MAX_RESULTS)


@jira_router.get("/issues/search", response_model=IssuePage)
async def search_issues(
    gateway: GatewayDep,
    jql: str | None = None,
    start_at: StartAt = 0,
    max_results: MaxResults = None,
    fields: Fields = None,
) -> IssuePage:
    return await gateway.search_issues(
        jql,
        start_at=start_at,
        max_results=max_results or DEFAULT_MAX_RESULTS,
        fields=_split_fields(fields),
    )


@jira_router.get("/issues/mine", response_model=IssuePage)
async def my_issues(
    gateway: GatewayDep,
    start_at: StartAt = 0,
    max_results: MaxResults = None,
    fields: Fields = None,
) -> IssuePage:
    return await gateway.my_issues(
        start_at=start_at,
        max_results=max_results or DEFAULT_MAX_RESULTS,
        fields=_split_fields(fields),
    )


@jira_router.get("/issues/mine/grouped", response_model=GroupedIssues)
async def my_issues_grouped(
    gateway: GatewayDep,
    start_at: StartAt = 0,
    max_results: MaxResults = None,
    fields: Fields = None,
) -> GroupedIssues:
    return await gateway.my_issues_grouped(
        start_at=start_at,
        max_results=max_results or GROUPED_MAX_RESULTS,
        fields=_split_fields(fields),
    )


@jira_router.get("/projects/{project_key}/issues/grouped", response_model=GroupedIssues)
async def project_issues_grouped(
    project_key: str,
    gateway: GatewayDep,
    start_at: StartAt = 0,
    max_results: MaxResults = None,
    fields: Fields = None,
) -> GroupedIssues:
    return await gateway.project_issues_grouped(
        project_key,
        start_at=start_at,
        max_results=max_results or GROUPED_MAX_RESULTS,
        fields=_split_fields(fields),
    )


async def _gateway_error_handler(_: Request, exc: GatewayError) -> JSONResponse:
    logger.warning("%s: %s", type(exc).__name__, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _unhandled_error_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_app(settings: IdpSettings | None = None, gateway: IssueGateway | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="idpdash API", version="0.1.0")
    app.state.settings = settings
    app.state.gateway = gateway or IssueGateway(settings)

    app.add_exception_handler(GatewayError, _gateway_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict:
        return {"status": "ok"}

    app.include_router(jira_router)
    logger.info("API ready (mode=%s)", app.state.gateway.mode)
    return app
