"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets several commands reuse the same tables/panels.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Archived


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in silent mode)."""

    title = Text("archiveis", style="bold cyan")
    subtitle = Text("archive.is capture client", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_captures_table(archives: Sequence[Archived]) -> Table:
    table = Table(title="Archived links")
    table.add_column("Target", style="white")
    table.add_column("Archive", style="magenta")
    table.add_column("Captured", style="dim", no_wrap=True)
    for archived in archives:
        captured = archived.time_stamp.isoformat() if archived.time_stamp else "-"
        table.add_row(archived.target_url, archived.archived_url, captured)
    return table


def build_failures_panel(urls: Sequence[str]) -> Panel:
    body = Text()
    for url in urls:
        body.append(f"- {url}\n")
    return Panel(body, title=Text("Failed to archive", style="bold red"), border_style="red")
