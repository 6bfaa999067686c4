"""Typer CLI for the Asana MCP server."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console

from asana_mcp.client import AsanaClient
from asana_mcp.config import AsanaConfig, ConfigError, configure_logging
from asana_mcp.tasks import fetch_tasks_due_today

app = typer.Typer(
    name="asana-mcp",
    help="Asana tasks due today, as an MCP server or from the command line.",
    no_args_is_help=True,
)
console = Console()


def _require_config() -> AsanaConfig:
    load_dotenv()
    try:
        return AsanaConfig.from_env()
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def serve() -> None:
    """Run the MCP server on stdio."""
    from asana_mcp.mcp_server import main

    main()


@app.command()
def today(
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw tool result as JSON")] = False,
) -> None:
    """Show your Asana tasks due today."""
    config = _require_config()
    configure_logging()
    result = asyncio.run(fetch_tasks_due_today(config))

    if as_json:
        console.print_json(result.model_dump_json())
        return

    if result.tasksFound == 0:
        console.print(result.summary, markup=False)
        return
    header, _, body = result.summary.partition("\n")
    console.print(f"[bold underline]{header}[/bold underline]")
    console.print(body, markup=False, highlight=False)


@app.command()
def check() -> None:
    """Verify the token and workspace by resolving your user task list."""
    config = _require_config()
    configure_logging()

    async def _resolve() -> str | None:
        async with AsanaClient(config) as client:
            return await client.get_user_task_list_gid(config.workspace_gid)

    gid = asyncio.run(_resolve())
    if not gid:
        console.print(f"[red]Could not resolve a user task list in workspace {config.workspace_gid}.[/red]")
        raise typer.Exit(1)
    console.print(f"[green]User task list for workspace {config.workspace_gid}: {gid}[/green]")
