"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich import print

from .core.cuts import Axis
from .core.session import SplitSession
from .errors import ImageDecodeError, QuadSplitError, UnsupportedFileError
from .io.export import export_slices
from .io.ingest import load_source
from .utils.console_logger import ensure_console_logger

app = typer.Typer(help="Split one image into four pieces along adjustable cuts")


class AxisChoice(str, Enum):
    across = "across"
    down = "down"


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (UnsupportedFileError, ImageDecodeError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except QuadSplitError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output")) -> None:
    """Split one image into four pieces."""

    level = logging.DEBUG if verbose else logging.WARNING
    ensure_console_logger(logging.getLogger("quadsplit"), "quadsplit-console", level=level)


@app.command()
@_handle_errors
def split(
    image: Path = typer.Argument(..., exists=False, help="Image to split"),
    axis: AxisChoice = typer.Option(AxisChoice.across, "--axis", "-a", help="Cut direction"),
    cut: Optional[List[float]] = typer.Option(
        None, "--cut", "-c", help="Cut position in (0, 1); repeat up to three times"
    ),
    out: Path = typer.Option(Path("."), "--out", "-o", help="Output directory"),
) -> None:
    """Split IMAGE into four pieces and write split_image_1..4.png."""

    session = SplitSession()
    errors: list[str] = []
    session.error_handler.register_ui_callback(lambda message, _severity: errors.append(message))
    session.set_axis(Axis(axis.value))
    if cut:
        session.set_cuts(cut)
    session.set_source(load_source(image))

    if errors:
        typer.echo(f"Error: {errors[-1]}", err=True)
        raise typer.Exit(1)

    paths = export_slices(session.results, out)
    cuts = ", ".join(f"{value:.3f}" for value in session.cuts)
    print(f"[green]Split {image.name} {axis.value} at {cuts}")
    for result, path in zip(session.results, paths):
        print(f"  {result.index + 1}: {path} ({result.width}x{result.height})")


@app.command()
def gui(image: Optional[Path] = typer.Argument(None, help="Image to open")) -> None:
    """Launch the desktop editor."""

    from .gui.main import main as gui_main

    argv = ["quadsplit"] + ([str(image)] if image is not None else [])
    raise typer.Exit(gui_main(argv))


if __name__ == "__main__":
    app()
