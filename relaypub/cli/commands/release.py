"""``relaypub release`` — run the full release pipeline.

Resolves the version, runs the build script, stages the archives,
records them in the manifest and (unless ``--dry-run``) publishes the
files and manifest to the remote host and repoints the ``-latest`` aliases.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from relaypub.config import ReleaseSettings
from relaypub.core.errors import ReleaseError
from relaypub.core.orchestrator import Orchestrator
from relaypub.models.config import PipelineConfig, RemoteTarget

console = Console()
err_console = Console(stderr=True)


def build_config(
    *,
    dry_run: bool = False,
    src_dir: Path | None = None,
    version: str | None = None,
    host: str | None = None,
    user: str | None = None,
    remote_dir: str | None = None,
    manifest_name: str | None = None,
    build_script: Path | None = None,
    release_dir: Path | None = None,
    extension: str | None = None,
    settings: ReleaseSettings | None = None,
) -> PipelineConfig:
    """Merge command-line flags over env-driven settings into a PipelineConfig."""
    s = settings or ReleaseSettings()
    try:
        remote = RemoteTarget.from_host_port(
            host or s.host,
            user=user or s.user,
            base_dir=remote_dir or s.remote_dir,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--host") from exc
    return PipelineConfig(
        dry_run=dry_run,
        source_dir=src_dir or s.source_dir,
        version=version or None,
        remote=remote,
        manifest_path=Path(manifest_name or s.manifest_name),
        release_dir=release_dir or s.release_dir,
        build_script=build_script or s.build_script,
        artifact_extension=extension or s.artifact_extension,
    )


def release_cmd(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Do everything locally but skip all remote (ssh/scp) steps.",
    ),
    src_dir: Path = typer.Option(
        None,
        "--src-dir",
        help="Directory to scan for build archives.",
    ),
    version: str = typer.Option(
        None,
        "--version",
        help="Release this exact version (format a.b.c) instead of bumping the patch.",
    ),
    host: str = typer.Option(
        None,
        "--host",
        help="SSH host[:port].",
    ),
    user: str = typer.Option(
        None,
        "--user",
        help="SSH username.",
    ),
    remote_dir: str = typer.Option(
        None,
        "--remote-dir",
        help="Remote base directory.",
    ),
    manifest_name: str = typer.Option(
        None,
        "--json",
        help="Name of the JSON manifest file.",
    ),
    build_script: Path = typer.Option(
        None,
        "--build-script",
        help="Build script run as `bash SCRIPT VERSION`.",
    ),
    release_dir: Path = typer.Option(
        None,
        "--release-dir",
        help="Local (and remote) downloads directory name.",
    ),
    extension: str = typer.Option(
        None,
        "--ext",
        help="Archive extension to collect.",
    ),
) -> None:
    """Build and publish a new release.

    Any failure stops the run immediately; steps already completed are
    left in place. Re-running with the same --version is safe.
    """
    config = build_config(
        dry_run=dry_run,
        src_dir=src_dir,
        version=version,
        host=host,
        user=user,
        remote_dir=remote_dir,
        manifest_name=manifest_name,
        build_script=build_script,
        release_dir=release_dir,
        extension=extension,
    )

    try:
        result = Orchestrator(config=config).run()
    except ReleaseError as exc:
        err_console.print(f"[bold red]Release failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    lines = [
        f"[bold green]Released version {result.version}[/bold green]",
        "",
        f"[bold]Directory:[/bold] {result.version_dir}",
        f"[bold]Files:[/bold]     {len(result.files)}",
    ]
    lines += [f"  [cyan]{name}[/cyan]" for name in result.files]
    if result.dry_run:
        lines += ["", "[yellow]Dry run: nothing was uploaded.[/yellow]"]
    elif result.publish is not None:
        lines += ["", f"[bold]Remote:[/bold]    {config.remote.login}:{result.publish.remote_dir}"]

    console.print()
    console.print(
        Panel(
            "\n".join(lines),
            title="[bold]Release[/bold]",
            border_style="yellow" if result.dry_run else "green",
            padding=(1, 2),
        )
    )


def next_version_cmd(
    version: str = typer.Option(
        None,
        "--version",
        help="Validate this explicit version instead of bumping the patch.",
    ),
    manifest_name: str = typer.Option(
        None,
        "--json",
        help="Name of the JSON manifest file.",
    ),
) -> None:
    """Print the version the next release would get."""
    config = build_config(version=version, manifest_name=manifest_name)
    try:
        next_version = Orchestrator(config=config).next_version()
    except ReleaseError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    console.print(next_version)
