"""idpdash CLI — serve the API and inspect the issue gateway from a terminal."""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Annotated, Any, TypeVar

import typer
from rich import print as rprint
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from idpdash.classify import WorkflowBucket
from idpdash.errors import GatewayError
from idpdash.gateway import IssueGateway
from idpdash.models import GroupedIssues
from idpdash.settings import get_settings

app = typer.Typer(help="idpdash: developer-platform dashboard backend", no_args_is_help=True)

T = TypeVar("T")

_BUCKET_TITLE = {
    WorkflowBucket.OPEN: "Open",
    WorkflowBucket.INPROGRESS: "In Progress",
    WorkflowBucket.BLOCKED: "Blocked",
    WorkflowBucket.COMPLETED: "Completed",
    WorkflowBucket.CLOSED: "Closed",
}


# ---------------------------------------------------------------------------
# Gateway factory
# ---------------------------------------------------------------------------


def get_gateway() -> IssueGateway:
    return IssueGateway(get_settings())


def _run(call: Coroutine[Any, Any, T]) -> T:
    try:
        return asyncio.run(call)
    except GatewayError as exc:
        rprint(f"[red]{exc.to_body()['error']}[/red]")
        details = getattr(exc, "details", None)
        if details:
            rprint(f"[dim]{escape(str(details))}[/dim]")
        raise typer.Exit(1) from exc


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level")] = False,
) -> None:
    level = "DEBUG" if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("serve")
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address (default: HOST or 127.0.0.1)")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port (default: PORT or 3001)")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Restart on code changes")] = False,
) -> None:
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    mode = "mock" if settings.mock_mode else "live"
    rprint(f"[green]✓[/green] idpdash API on http://{bind_host}:{bind_port} ([bold]{mode}[/bold] mode)")
    uvicorn.run(
        "idpdash.api:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command("projects")
def projects(
    query: Annotated[str | None, typer.Option("--query", "-q", help="Filter by name or key (live mode)")] = None,
) -> None:
    """List Jira projects."""
    page = _run(get_gateway().list_projects(query=query))

    table = Table(title=f"Projects ({page.total})")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Board", style="dim")

    for project in page.values:
        table.add_row(project.key, project.name, project.board_url)

    rprint(table)


@app.command("my-issues")
def my_issues(
    max_results: Annotated[int, typer.Option("--max", "-n", min=1, help="Maximum issues to fetch")] = 25,
) -> None:
    """List unresolved issues assigned to me."""
    page = _run(get_gateway().my_issues(max_results=max_results))

    table = Table(title="My Issues")
    table.add_column("Key", style="cyan")
    table.add_column("Status")
    table.add_column("Type")
    table.add_column("Summary")
    table.add_column("URL", style="dim")

    for issue in page.issues:
        table.add_row(issue.key, issue.status_name, issue.issue_type, issue.summary, issue.web_url)

    rprint(table)


def _render_groups(grouped: GroupedIssues, title: str) -> None:
    rprint(f"[bold]{title}[/bold] — {grouped.total} issue(s)")
    for bucket in WorkflowBucket:
        issues = getattr(grouped.groups, bucket.value)
        table = Table(title=f"{_BUCKET_TITLE[bucket]} ({len(issues)})", title_justify="left")
        table.add_column("Key", style="cyan")
        table.add_column("Status")
        table.add_column("Summary")
        for issue in issues:
            table.add_row(issue.key, issue.status_name, issue.summary)
        rprint(table)


@app.command("grouped")
def grouped(
    project: Annotated[str | None, typer.Option("--project", "-k", help="Restrict to one project key")] = None,
) -> None:
    """Show my issues grouped by workflow bucket."""
    gateway = get_gateway()
    if project:
        result = _run(gateway.project_issues_grouped(project))
        _render_groups(result, f"{project.upper()} issues")
    else:
        result = _run(gateway.my_issues_grouped())
        _render_groups(result, "My issues")


@app.command("config-show")
def config_show() -> None:
    """Show resolved configuration (masks credentials)."""
    settings = get_settings()
    jira = settings.jira()

    def mask(val: str | None) -> str:
        if val is None:
            return "[dim](not set)[/dim]"
        if len(val) <= 5:
            return "***"
        return f"...{val[-5:]}"

    table = Table(title="idpdash Configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("mode", "mock" if settings.mock_mode else "live")
    table.add_row("host", settings.host)
    table.add_row("port", str(settings.port))
    table.add_row("cors_origin", settings.cors_origin)
    table.add_row("jira_base_url", jira.base_url or "[dim](not set)[/dim]")
    table.add_row("jira_email", jira.email or "[dim](not set)[/dim]")
    table.add_row("jira_api_token", mask(jira.api_token.get_secret_value() if jira.api_token else None))
    table.add_row("jira_configured", "yes" if jira.is_configured else "no")

    rprint(table)
