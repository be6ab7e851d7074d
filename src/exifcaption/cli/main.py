"""Command line interface for exposure captions."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from exifcaption.logging_utils import configure_logging

from ..core.config import load_config
from ..core.errors import ExifCaptionError
from ..core.pipeline import AnnotationResult, caption_for, run_annotation

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(help="Caption photos with their exposure settings.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    log_path = configure_logging(
        "exifcaption", level=logging.DEBUG if verbose else logging.INFO
    )
    logger.debug("exifcaption logging initialised → %s", log_path)


def _fail(exc: Exception) -> NoReturn:
    logger.exception("exifcaption run aborted: %s", exc)
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def caption(
    source: Optional[Path] = typer.Argument(
        None, help="Image to read (defaults to [tool.exifcaption].default_source)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the resolved fields as JSON."),
) -> None:
    """Print the exposure caption for SOURCE."""

    try:
        config = load_config(source=source)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        info = caption_for(config.source)
    except ExifCaptionError as exc:
        _fail(exc)

    if as_json:
        typer.echo(json.dumps(info.as_dict(), indent=2))
    else:
        typer.echo(info.caption())


@app.command()
def annotate(
    source: Optional[Path] = typer.Argument(
        None, help="Image to read (defaults to [tool.exifcaption].default_source)."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the annotated canvas here."
    ),
    composite: Optional[bool] = typer.Option(
        None,
        "--composite/--no-composite",
        help="Draw over a copy of the source pixels instead of a blank canvas.",
    ),
    image_format: Optional[str] = typer.Option(
        None, "--format", help="Pillow format for --output (inferred from its suffix)."
    ),
) -> None:
    """Render the exposure caption of SOURCE onto a canvas of the same size."""

    try:
        config = load_config(
            source=source,
            destination=output,
            composite=composite,
            image_format=image_format,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        result = run_annotation(config)
    except ExifCaptionError as exc:
        _fail(exc)

    _print_summary(result)


def _print_summary(result: AnnotationResult) -> None:
    table = Table(title=str(result.source))
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in result.info.as_dict().items():
        table.add_row(key, str(value))
    table.add_row("canvas", f"{result.canvas.width}x{result.canvas.height}")
    table.add_row(
        "written", str(result.destination) if result.destination else "(in memory only)"
    )
    console.print(table)
    typer.echo(result.caption)


if __name__ == "__main__":
    app()
