"""Command line interface.

Commands:
- `archive links URL...`: archive the links given as arguments.
- `archive file PATH`: archive every link in a line-separated text file.
- `archive doctor ...`: environment diagnostics and configuration.

The CLI only reads input, prints and writes output: the capture flow lives in
`core.services.capture_pipeline`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.archive_client import ArchiveClient
from adapters.link_reader import read_links_file, validate_links
from adapters.output_writer import write_captures
from cli import doctor
from cli.ui_components import build_captures_table, build_failures_panel, print_banner
from core.config import AppSettings
from core.domain.errors import ArchiveError, InvalidLink
from core.services.capture_pipeline import BatchReport, archive_links

app = typer.Typer(
    no_args_is_help=True,
    help="Archive urls using the archive.is capturing service.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@dataclass
class RunOptions:
    """Options shared by the `links` and `file` commands."""

    output: Path | None = None
    archives_only: bool = False
    text: bool = False
    append: bool = False
    silent: bool = False
    retries: int | None = None
    ignore_failures: bool = False
    concurrency: int | None = None
    user_agent: str | None = None
    table: bool = False


def configure_logging(*, verbose: bool, silent: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    if silent and not verbose:
        level = logging.CRITICAL
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _settings_for(opts: RunOptions) -> AppSettings:
    settings = AppSettings()
    overrides: dict[str, object] = {}
    if opts.user_agent:
        overrides["user_agent"] = opts.user_agent
    if opts.concurrency is not None:
        overrides["max_concurrency"] = opts.concurrency
    if opts.retries is not None:
        overrides["retries"] = opts.retries
    if not overrides:
        return settings
    try:
        return AppSettings.model_validate({**settings.model_dump(), **overrides})
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


async def _archive(links: list[str], settings: AppSettings) -> BatchReport:
    async with ArchiveClient(settings) as client:
        return await archive_links(
            client,
            links,
            retries=settings.retries,
            max_concurrency=settings.max_concurrency,
        )


def _run(links: list[str], opts: RunOptions) -> None:
    if not links:
        if not opts.silent:
            _err_console.print("Nothing to archive.")
        raise typer.Exit(code=1)

    settings = _settings_for(opts)
    if not opts.silent and opts.table:
        print_banner(_console)

    try:
        report = asyncio.run(_archive(links, settings))
    except ArchiveError as exc:
        if not opts.silent:
            _err_console.print(f"[red]Archiving aborted:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if report.failures and not opts.ignore_failures:
        if not opts.silent:
            if opts.table:
                _err_console.print(build_failures_panel(report.failed_urls))
            else:
                _err_console.print(
                    f"Failed to archive links: {report.failed_urls}", markup=False, soft_wrap=True
                )
        raise typer.Exit(code=1)

    if not opts.silent:
        if opts.table:
            _console.print(build_captures_table(report.archived))
        else:
            for archived in report.archived:
                _console.print(
                    f"Archived {archived.target_url}  -->  {archived.archived_url}",
                    markup=False,
                    highlight=False,
                    soft_wrap=True,
                )

    if opts.output is not None:
        try:
            written = write_captures(
                archives=report.archived,
                output_path=opts.output,
                text=opts.text,
                archives_only=opts.archives_only,
                append=opts.append,
            )
        except OSError as exc:
            if not opts.silent:
                _err_console.print(f"Couldn't write to file: {exc}", markup=False, soft_wrap=True)
            raise typer.Exit(code=1) from exc
        if not opts.silent:
            _console.print(
                f"Wrote {written} archived links to: {opts.output}", markup=False, soft_wrap=True
            )


_OutputOpt = typer.Option(None, "--output", "-o", help="Save all archived elements to this file.")
_ArchivesOnlyOpt = typer.Option(False, "--archives-only", help="Save only the archive urls.")
_TextOpt = typer.Option(False, "--text", "-t", help="Save output as line separated text instead of json.")
_AppendOpt = typer.Option(
    False, "--append", "-a", help="If the output file already exists, append instead of overwriting it."
)
_SilentOpt = typer.Option(False, "--silent", "-s", help="Do not print anything.")
_RetriesOpt = typer.Option(
    None,
    "--retries",
    "-r",
    min=0,
    max=20,
    help="How many times failed archive attempts should be tried again.",
)
_IgnoreFailuresOpt = typer.Option(
    False,
    "--ignore-failures",
    help="Continue anyway if after all retries some links are not successfully archived.",
)
_ConcurrencyOpt = typer.Option(
    None, "--concurrency", "-c", min=1, max=100, help="Maximum in-flight capture requests."
)
_UserAgentOpt = typer.Option(None, "--user-agent", help="User-Agent sent to archive.is.")
_TableOpt = typer.Option(False, "--table", help="Print results as a table.")
_VerboseOpt = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")


@app.command()
def links(
    links: List[str] = typer.Argument(..., help="All links that should be archived via archive.is."),
    output: Optional[Path] = _OutputOpt,
    archives_only: bool = _ArchivesOnlyOpt,
    text: bool = _TextOpt,
    append: bool = _AppendOpt,
    silent: bool = _SilentOpt,
    retries: Optional[int] = _RetriesOpt,
    ignore_failures: bool = _IgnoreFailuresOpt,
    concurrency: Optional[int] = _ConcurrencyOpt,
    user_agent: Optional[str] = _UserAgentOpt,
    table: bool = _TableOpt,
    verbose: bool = _VerboseOpt,
) -> None:
    """Archive all links provided as arguments."""

    configure_logging(verbose=verbose, silent=silent)
    try:
        urls = validate_links(links)
    except InvalidLink as exc:
        raise typer.BadParameter(str(exc), param_hint="LINKS") from exc

    _run(
        urls,
        RunOptions(
            output=output,
            archives_only=archives_only,
            text=text,
            append=append,
            silent=silent,
            retries=retries,
            ignore_failures=ignore_failures,
            concurrency=concurrency,
            user_agent=user_agent,
            table=table,
        ),
    )


@app.command()
def file(
    input: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Archive all the links in the line separated text file.",
    ),
    output: Optional[Path] = _OutputOpt,
    archives_only: bool = _ArchivesOnlyOpt,
    text: bool = _TextOpt,
    append: bool = _AppendOpt,
    silent: bool = _SilentOpt,
    retries: Optional[int] = _RetriesOpt,
    ignore_failures: bool = _IgnoreFailuresOpt,
    concurrency: Optional[int] = _ConcurrencyOpt,
    user_agent: Optional[str] = _UserAgentOpt,
    table: bool = _TableOpt,
    verbose: bool = _VerboseOpt,
) -> None:
    """Archive all the links in the line separated text file."""

    configure_logging(verbose=verbose, silent=silent)
    try:
        urls = read_links_file(input)
    except InvalidLink as exc:
        raise typer.BadParameter(str(exc), param_hint="INPUT") from exc

    _run(
        urls,
        RunOptions(
            output=output,
            archives_only=archives_only,
            text=text,
            append=append,
            silent=silent,
            retries=retries,
            ignore_failures=ignore_failures,
            concurrency=concurrency,
            user_agent=user_agent,
            table=table,
        ),
    )


def run() -> None:
    app()
