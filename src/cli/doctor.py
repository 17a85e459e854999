"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from adapters.archive_client import ArchiveClient
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import ArchiveError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_token(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with ArchiveClient(settings) as client:
            token = await client.get_unique_token()
        return True, f"submitid {token[:8]}..."
    except ArchiveError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Show the effective configuration and try to acquire a submission token."""

    settings = AppSettings()

    table = Table(title="archiveis Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Service", "OK", settings.service_root)
    table.add_row("User-Agent", "OK", settings.user_agent)
    table.add_row("Concurrency", "OK", str(settings.max_concurrency))
    table.add_row("Retries", "OK", str(settings.retries))
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    # Connectivity + landing page scraping in one request.
    ok_token, detail_token = asyncio.run(_check_token(settings))
    table.add_row("Token", "OK" if ok_token else "FAIL", detail_token)

    _console.print(table)

    if not ok_token:
        _console.print(
            "\n[yellow]Note:[/yellow] archive.is may block some user agents; "
            "try `archive doctor setup --user-agent ...`."
        )
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup(
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="User-Agent sent to archive.is."),
    max_concurrency: Optional[int] = typer.Option(
        None, "--max-concurrency", min=1, max=100, help="Maximum in-flight capture requests."
    ),
    retries: Optional[int] = typer.Option(None, "--retries", min=0, max=20, help="Default retry rounds."),
) -> None:
    """Store defaults in the user config .env (no manual editing needed)."""

    values: dict[str, str] = {}
    if user_agent:
        values["ARCHIVEIS_USER_AGENT"] = user_agent
    if max_concurrency is not None:
        values["ARCHIVEIS_MAX_CONCURRENCY"] = str(max_concurrency)
    if retries is not None:
        values["ARCHIVEIS_RETRIES"] = str(retries)

    if not values:
        raise typer.BadParameter("nothing to store: pass at least one option")

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
