"""NLU Export CLI - Main entry point."""

import asyncio
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from nlu_export import __version__
from nlu_export.compiler import ExportCompiler, ExportResult, ProjectSnapshot
from nlu_export.config.settings import Settings
from nlu_export.sdk import ProjectClient
from nlu_export.writer import OutputWriter

logger = logging.getLogger(__name__)

console = Console()


def load_snapshot(path: Path) -> ProjectSnapshot:
    with open(path, encoding="utf-8") as f:
        return ProjectSnapshot.model_validate(json.load(f))


async def fetch_snapshot(settings: Settings) -> ProjectSnapshot:
    async with ProjectClient.from_settings(settings) as client:
        return await client.fetch()


async def export_project(
    settings: Settings,
    writer: OutputWriter,
    snapshot_path: Optional[Path] = None,
    platform: Optional[str] = None,
    concurrency: Optional[int] = None,
) -> ExportResult:
    """Prepare the output tree, load the snapshot, compile it, and copy templates."""
    console.print("[dim]creating output directories[/dim]")
    writer.prepare()

    console.print("[dim]fetching project data[/dim]")
    if snapshot_path:
        snapshot = load_snapshot(snapshot_path)
    else:
        snapshot = await fetch_snapshot(settings)

    console.print("[dim]writing files[/dim]")
    compiler = ExportCompiler(
        snapshot,
        writer,
        concurrency=concurrency or settings.export_concurrency,
        platform=platform,
    )
    result = await compiler.run()
    writer.copy_templates()
    return result


def write_error_report(path: Path, err: BaseException) -> None:
    """Leave {message, stack} behind for a failed run."""
    report = {
        "message": str(err),
        "stack": "".join(traceback.format_exception(type(err), err, err.__traceback__)),
    }
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)
    except OSError as e:
        logger.error(f"[CLI] Could not write error report {path}: {e}")


@click.command()
@click.version_option(version=__version__, prog_name="nlu-export")
@click.argument("output_directory", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option("--snapshot", "snapshot_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Compile a project snapshot JSON file instead of fetching from the API")
@click.option("--platform", default=None, help="Override the project's platform (slack, facebook, google, ...)")
@click.option("--concurrency", "-c", type=click.IntRange(min=1), default=None,
              help="Maximum number of messages exported at once (default: CPU count)")
@click.option("--zip/--no-zip", "zip_output", default=None, help="Archive the output directory when done")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(
    output_directory: Optional[Path],
    snapshot_path: Optional[Path],
    platform: Optional[str],
    concurrency: Optional[int],
    zip_output: Optional[bool],
    debug: bool,
):
    """Export a conversation board as an NLU agent.

    \b
    Examples:
      nlu-export
      nlu-export ./agent --zip
      nlu-export ./agent --snapshot project.json --platform slack
    """
    settings = Settings()
    logging.basicConfig(
        level=logging.DEBUG if debug else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not snapshot_path:
        missing = settings.missing_credentials()
        if missing:
            raise click.UsageError(f"Missing settings: {', '.join(missing)} (or pass --snapshot)")

    output_dir = output_directory or Path(settings.output_dir)
    writer = OutputWriter(output_dir)
    try:
        result = asyncio.run(
            export_project(settings, writer, snapshot_path, platform=platform, concurrency=concurrency)
        )
        if zip_output is None:
            zip_output = settings.export_zip
        if zip_output:
            console.print("[dim]zipping output directory[/dim]")
            writer.archive()
    except Exception as e:
        logger.exception(f"[CLI] Export failed: {e}")
        write_error_report(output_dir.resolve().parent / "err.json", e)
        console.print(f"[red]✗[/red] [bold]export failed:[/bold] {escape(str(e))}")
        sys.exit(1)

    console.print(
        f"[green]✓[/green] {result.intent_files} intents, {result.entity_files} entity files "
        f"({result.compilation_time_ms}ms)"
    )
    console.print("[bold]done[/bold]")


if __name__ == "__main__":
    cli()
