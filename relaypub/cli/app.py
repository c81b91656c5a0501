"""Main Typer application — imports and registers all CLI commands.

Entry point: ``relaypub`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from relaypub.cli.commands.history import history_cmd
from relaypub.cli.commands.release import next_version_cmd, release_cmd
from relaypub.config import ReleaseSettings

app = typer.Typer(
    name="relaypub",
    help="Relaypub: build, version, and publish release archives.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: RELAYPUB_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Configure logging before any command runs."""
    level = (log_level or ReleaseSettings().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="release", help="Build, stage, record, and publish a new version.")(release_cmd)
app.command(name="next-version", help="Show the version the next release would get.")(next_version_cmd)
app.command(name="history", help="List the releases recorded in the manifest.")(history_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
