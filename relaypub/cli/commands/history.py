"""``relaypub history`` — list the releases recorded in the manifest."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from relaypub.config import ReleaseSettings
from relaypub.core.errors import ReleaseError
from relaypub.core.manifest_store import ManifestStore

console = Console()
err_console = Console(stderr=True)


def _format_timestamp(nanos: int) -> str:
    try:
        moment = datetime.fromtimestamp(nanos / 1e9, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return str(nanos)
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def history_cmd(
    manifest_name: str = typer.Option(
        None,
        "--json",
        help="Name of the JSON manifest file.",
    ),
    show_links: bool = typer.Option(
        False,
        "--links",
        help="Also list every file with its SHA-256.",
    ),
) -> None:
    """Show every release entry, in manifest order."""
    path = Path(manifest_name or ReleaseSettings().manifest_name)
    try:
        entries = ManifestStore(path).load()
    except ReleaseError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if not entries:
        console.print(f"[dim]No releases recorded in {path}.[/dim]")
        return

    table = Table(title=f"Releases ({path})")
    table.add_column("Version", style="cyan")
    table.add_column("Published", style="green")
    table.add_column("Files", justify="right")

    for entry in entries:
        table.add_row(entry.version, _format_timestamp(entry.timestamp), str(len(entry.links)))

    console.print(table)

    if show_links:
        for entry in entries:
            console.print(f"\n[bold]{entry.version}[/bold]")
            for link in entry.links:
                console.print(f"  {link.path}  [dim]{link.checksum}[/dim]")
