"""
jitc command line.

Runs the await try/catch injection over component source files.
"""

import asyncio
from pathlib import Path
from typing import Dict, List, Optional

import typer

from jitc.config import settings
from jitc.loader import get_plugin_manager, transform_many
from jitc.utils.logging import get_logger, setup_logging
from jitc.utils.metrics import StatsAccumulator

app = typer.Typer(
    name="jitc",
    help="Inject fallback try/catch around unprotected await expressions in JSX/TSX components",
    add_completion=False,
)

logger = get_logger(__name__)


def _collect_files(paths: List[Path], extensions: List[str]) -> List[Path]:
    files: List[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in extensions)
            )
        else:
            files.append(path)
    return files


@app.command()
def transform(
    paths: List[Path] = typer.Argument(..., exists=True, help="Files or directories to transform"),
    write: bool = typer.Option(False, "--write", "-w", help="Rewrite files in place instead of printing"),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Verbose logging of rewrites and failures"),
    stats: Optional[bool] = typer.Option(None, "--stats/--no-stats", help="Log time spent per file and in total"),
    workers: Optional[int] = typer.Option(None, "--workers", help="Files processed concurrently"),
):
    """
    Transform files and print the result, or rewrite them with --write.

    Files that fail to parse are left untouched.
    """
    setup_logging("DEBUG" if debug else settings.log_level, settings.json_logs)

    manager = get_plugin_manager()
    files = _collect_files(paths, manager.list_supported_extensions())
    sources: Dict[str, str] = {str(f): f.read_text(encoding="utf8") for f in files}

    accumulator = StatsAccumulator()
    results = asyncio.run(
        transform_many(
            sources,
            debug=debug,
            stats=stats,
            plugin_manager=manager,
            accumulator=accumulator,
            max_workers=workers,
        )
    )

    failed = 0
    for filename, result in results.items():
        if result.error is not None:
            failed += 1
        if write:
            if result.changed:
                Path(filename).write_text(result.code, encoding="utf8")
                typer.echo(f"rewrote {filename}", err=True)
        else:
            if len(results) > 1:
                typer.echo(f"// {filename}")
                typer.echo(result.code, nl=not result.code.endswith("\n"))
            else:
                typer.echo(result.code, nl=False)

    if accumulator.file_count:
        logger.info("Transform statistics", extra=accumulator.get_summary())
    if failed:
        typer.echo(f"{failed} file(s) left unchanged because of errors", err=True)


@app.command()
def languages():
    """List the languages and file extensions that can be transformed."""
    manager = get_plugin_manager()
    for language in manager.list_supported_languages():
        plugin = manager.get_plugin(language)
        typer.echo(f"{language}: {', '.join(plugin.file_extensions)}")


if __name__ == "__main__":
    app()
