"""
CLI module - Command line interface for FastBoot S3 Deploy

Entry point for the `fsd` command using Typer.
"""

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import DeployConfig, load_config, resolve_config
from .context import DeployContext
from .exceptions import ConfigurationError
from .logger import DeployLogger
from .plugin import DeployPlugin
from .revision import generate_revision_key
from .runners import RunnerCallbacks, RunnerResult, SequentialRunner
from .workflow import TaskType, create_deploy_workflow

console = Console()
app = typer.Typer(
    name="fsd",
    help="FastBoot S3 Deploy - pack a built app and publish it to S3.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    if value:
        console.print(f"fsd version {__version__}")
        raise typer.Exit()


# Type aliases for common options
DistDirArgument = Annotated[Path, typer.Argument(help="Build output directory to archive")]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to config file", exists=True, dir_okay=False),
]
BucketOption = Annotated[str | None, typer.Option("--bucket", "-b", help="Target bucket")]
PrefixOption = Annotated[str | None, typer.Option("--prefix", help="Key prefix for uploaded objects")]
RegionOption = Annotated[str | None, typer.Option("--region", help="S3 region")]
EndpointOption = Annotated[str | None, typer.Option("--endpoint", help="Custom S3-compatible endpoint URL")]
RevisionOption = Annotated[
    str | None, typer.Option("--revision", "-r", help="Revision key (default: content hash of DIST_DIR)")
]
ArchiveTypeOption = Annotated[str | None, typer.Option("--archive-type", help="zip, tar, tar.gz, tgz, tar.bz2, tar.xz")]
ArchivePathOption = Annotated[Path | None, typer.Option("--archive-path", help="Local staging directory")]
VerboseOption = Annotated[bool, typer.Option("--verbose", help="Show verbose phase output")]


@app.callback()
def main(
    version: Annotated[
        bool, typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version")
    ] = False,
):
    """FastBoot S3 Deploy - pack a built app and publish it to S3."""
    pass


def format_size(size_bytes: int) -> str:
    """Format a byte count as a human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes}B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f}KB"
    return f"{size_bytes / (1024 * 1024):.1f}MB"


def build_config(
    dist_dir: Path,
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    revision: str | None = None,
    defaults: dict[str, Any] | None = None,
) -> DeployConfig:
    """
    Load, overlay and resolve the configuration for one run.

    Command-line overrides win over the config file. Without a revision
    on the command line or in the file, the revision key is a content
    hash of the build directory. ``defaults`` fill keys the file leaves unset.
    """
    raw = load_config(config_path)
    for key, value in (defaults or {}).items():
        raw.setdefault(key, value)
    for key, value in (overrides or {}).items():
        if value is not None:
            raw[key] = value

    if revision:
        raw.pop("revision_key", None)
        raw["revisionKey"] = revision

    revision_data = None
    if not (raw.get("revisionKey") or raw.get("revision_key")) and dist_dir.is_dir():
        revision_data = {"revisionKey": generate_revision_key(dist_dir)}

    context = DeployContext(
        dist_dir=dist_dir,
        command_options={"revision": revision} if revision else {},
        revision_data=revision_data,
    )
    return resolve_config(raw, context)


def _print_summary(result: RunnerResult, config: DeployConfig, dry_run: bool) -> None:
    console.print()
    if dry_run:
        console.print(f"[bold]Dry Run:[/bold] revision {config.revision_key}")
        console.print(f"  Archive:     {result.archive_file}")
        console.print(f"  Artifact:    s3://{config.bucket}/{result.artifact_key}")
        console.print(f"  Descriptor:  s3://{config.bucket}/{result.deploy_info_key}")
        console.print("\n[dim]Dry run - nothing packed or uploaded. Remove --dry-run to execute.[/dim]")
        return

    if result.success:
        console.print(f"[bold]Complete:[/bold] revision {config.revision_key}")
        if result.archive_file:
            console.print(
                f"  Archive:     {result.archive_file} "
                f"({result.files_packed} files, {format_size(result.archive_size_bytes)})"
            )
        if result.artifact_key:
            console.print(f"  Artifact:    s3://{config.bucket}/{result.artifact_key}")
        if result.deploy_info_key:
            console.print(f"  Descriptor:  s3://{config.bucket}/{result.deploy_info_key}")
        return

    console.print(f"[red]Failed:[/red] {result.tasks_failed} failed, {result.tasks_skipped} skipped")
    for err in result.errors:
        console.print(f"  {err}")


def _run(config: DeployConfig, phases: list[TaskType] | None, verbose: bool, dry_run: bool) -> RunnerResult:
    plugin = DeployPlugin(log=DeployLogger(verbose=verbose, console=console, prefix="  "))
    workflow = create_deploy_workflow(config, phases)

    def on_task_start(task_id: str, description: str):
        if verbose:
            console.print(f"[cyan]{task_id}[/cyan] {description}")

    def on_task_complete(task_id: str, success: bool):
        if success:
            console.print(f"  [green]✓[/green] {task_id}")
        else:
            console.print(f"  [red]✗[/red] {task_id}")

    callbacks = RunnerCallbacks(on_task_start=on_task_start, on_task_complete=on_task_complete)
    runner = SequentialRunner(plugin=plugin, dry_run=dry_run)
    result = runner.run(workflow, callbacks)
    _print_summary(result, config, dry_run)
    return result


@app.command()
def deploy(
    dist_dir: DistDirArgument = Path("dist"),
    bucket: BucketOption = None,
    prefix: PrefixOption = None,
    region: RegionOption = None,
    endpoint: EndpointOption = None,
    revision: RevisionOption = None,
    archive_type: ArchiveTypeOption = None,
    archive_path: ArchivePathOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Validate and show keys without uploading")] = False,
):
    """
    Pack DIST_DIR and publish it to S3 with a deploy descriptor.

    [bold]Examples:[/bold]

        fsd deploy ./dist --bucket my-bucket --region us-east-1

        fsd deploy ./dist -b my-bucket --endpoint http://localhost:9000 --prefix releases

        fsd deploy ./dist -b my-bucket --region eu-west-1 --revision abc123 --dry-run
    """
    overrides = {
        "bucket": bucket,
        "prefix": prefix,
        "region": region,
        "endpoint": endpoint,
        "archiveType": archive_type,
        "archivePath": archive_path,
    }
    try:
        cfg = build_config(dist_dir, config, overrides, revision)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    result = _run(cfg, None, verbose, dry_run)
    if not result.success:
        raise typer.Exit(1)


@app.command()
def pack(
    dist_dir: DistDirArgument = Path("dist"),
    revision: RevisionOption = None,
    archive_type: ArchiveTypeOption = None,
    archive_path: ArchivePathOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """Pack DIST_DIR into the deploy archive without uploading."""
    overrides = {"archiveType": archive_type, "archivePath": archive_path}
    try:
        # Packing never talks to S3, so a placeholder bucket satisfies resolution
        cfg = build_config(dist_dir, config, overrides, revision, defaults={"bucket": "-"})
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    result = _run(cfg, [TaskType.PREPARE], verbose, dry_run=False)
    if not result.success:
        raise typer.Exit(1)


@app.command("show-config")
def show_config(
    dist_dir: DistDirArgument = Path("dist"),
    bucket: BucketOption = None,
    prefix: PrefixOption = None,
    region: RegionOption = None,
    endpoint: EndpointOption = None,
    revision: RevisionOption = None,
    config: ConfigOption = None,
):
    """Show the resolved deploy settings (credentials masked)."""
    overrides = {"bucket": bucket, "prefix": prefix, "region": region, "endpoint": endpoint}
    try:
        cfg = build_config(dist_dir, config, overrides, revision)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    plugin = DeployPlugin()

    table = Table(title="Deploy Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for name, value in cfg.describe().items():
        table.add_row(name, value)
    table.add_row("archive key", plugin.archive_key(cfg))
    table.add_row("descriptor key", plugin.deploy_info_key(cfg))

    console.print(table)


if __name__ == "__main__":
    app()
