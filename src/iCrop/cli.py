"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from .config import MAX_SCALE_FACTOR, VIEWPORT_PADDING, EngineSettings
from .engine.layout import compute_layout
from .engine.session import CropSession
from .errors import CropperError, EditorValueError
from .models.editor_value import CropperValue
from .models.schema import iter_errors
from .models.types import Crop, ViewportGeometry
from .utils.image_loader import read_natural_size
from .utils.jsonio import read_json, write_json
from .utils.logging import configure_logging

app = typer.Typer(help="Inspect crop layouts and persisted crop values")
console = Console()


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except EditorValueError as exc:
            typer.echo(f"Invalid value: {exc}", err=True)
            raise typer.Exit(1) from exc
        except CropperError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _parse_size(text: str) -> tuple[float, float]:
    """Parse ``WIDTHxHEIGHT`` into a pair of floats."""

    parts = text.lower().replace("×", "x").split("x")
    if len(parts) != 2:
        raise typer.BadParameter(f"expected WIDTHxHEIGHT, got {text!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise typer.BadParameter(f"expected WIDTHxHEIGHT, got {text!r}") from exc


def _load_value(path: Path) -> CropperValue:
    try:
        payload = read_json(path)
    except (OSError, ValueError) as exc:
        raise EditorValueError(f"cannot read {path}: {exc}") from exc
    return CropperValue.from_mapping(payload)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command()
@_handle_errors
def layout(
    viewport: str = typer.Option(..., help="Viewport size as WIDTHxHEIGHT"),
    crop: str = typer.Option(..., help="Crop target size as WIDTHxHEIGHT"),
    image: str = typer.Option(..., help="Natural image size as WIDTHxHEIGHT"),
    padding: float = typer.Option(VIEWPORT_PADDING, help="Viewport padding"),
    max_scale_factor: float = typer.Option(MAX_SCALE_FACTOR, help="Maximum zoom relative to cover scale"),
) -> None:
    """Print the mask geometry and zoom range for one crop."""

    view_w, view_h = _parse_size(viewport)
    crop_w, crop_h = _parse_size(crop)
    image_w, image_h = _parse_size(image)
    result = compute_layout(
        ViewportGeometry(view_w, view_h),
        crop_w,
        crop_h,
        image_w,
        image_h,
        padding=padding,
        max_scale_factor=max_scale_factor,
    )
    mask = result.mask
    table = Table(title="Layout")
    table.add_column("Field")
    table.add_column("Value", justify="right")
    table.add_row("mask width", f"{mask.width:.4f}")
    table.add_row("mask height", f"{mask.height:.4f}")
    table.add_row("mask left", f"{mask.left:.4f}")
    table.add_row("mask top", f"{mask.top:.4f}")
    table.add_row("min scale", f"{result.min_scale:.6f}")
    table.add_row("max scale", f"{result.max_scale:.6f}")
    console.print(table)


@app.command()
@_handle_errors
def size(image: Path = typer.Argument(..., exists=False)) -> None:
    """Print the natural size of an image file."""

    width, height = read_natural_size(image)
    print(f"{width}x{height}")


@app.command()
def validate(value_file: Path = typer.Argument(..., exists=False)) -> None:
    """Validate a persisted editor value file."""

    try:
        payload = read_json(value_file)
    except (OSError, ValueError) as exc:
        typer.echo(f"Invalid value: cannot read {value_file}: {exc}", err=True)
        raise typer.Exit(1) from exc
    messages = iter_errors(payload)
    if not messages:
        try:
            CropperValue.from_mapping(payload)
        except EditorValueError as exc:
            messages = [str(exc)]
    if messages:
        for message in messages:
            typer.echo(f"Invalid value: {message}", err=True)
        raise typer.Exit(1)
    print(f"[green]{value_file} is valid")


@app.command()
@_handle_errors
def inspect(
    value_file: Path = typer.Argument(..., exists=False),
    viewport: str = typer.Option("800x600", help="Viewport size as WIDTHxHEIGHT"),
    image: Optional[Path] = typer.Option(None, help="Image file to read the natural size from"),
    image_size: Optional[str] = typer.Option(None, "--size", help="Natural image size as WIDTHxHEIGHT"),
    padding: float = typer.Option(VIEWPORT_PADDING, help="Viewport padding"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the value with every crop's re-derived coordinates"
    ),
) -> None:
    """Rebuild every crop of a persisted value and print its geometry."""

    value = _load_value(value_file)
    if image_size is not None:
        natural = _parse_size(image_size)
    elif image is not None:
        natural = read_natural_size(image)
    elif value.src and Path(value.src).is_file():
        natural = read_natural_size(Path(value.src))
    else:
        raise typer.BadParameter("pass --image or --size when the value's src is not a local file")

    view_w, view_h = _parse_size(viewport)
    session = CropSession(
        EngineSettings(viewport_padding=padding),
        src=value.src,
        focal_point=value.focal_point,
    )
    session.set_image_size(*natural)
    session.set_viewport(view_w, view_h)

    table = Table(title=f"Crops of {value.src or value_file}")
    for column in ("alias", "source", "image (w x h @ left, top)", "zoom", "x1", "y1", "x2", "y2"):
        table.add_column(column)
    normalised: list[Crop] = []
    for crop in value.crops:
        working = crop.copy()
        snapshot = session.select_crop(working)
        if snapshot is None:
            continue
        inset = session.save()
        normalised.append(working)
        geometry = snapshot.image
        table.add_row(
            crop.alias,
            "coordinates" if crop.user_defined else "focal point",
            f"{geometry.width:.2f} x {geometry.height:.2f} @ {geometry.left:.2f}, {geometry.top:.2f}",
            f"{session.zoom_alpha():.4f}",
            *(f"{part:.6f}" for part in (inset.x1, inset.y1, inset.x2, inset.y2)),
        )
    console.print(table)

    if output is not None:
        result = CropperValue(src=value.src, focal_point=value.focal_point, crops=normalised)
        write_json(output, result.to_mapping())
        print(f"[green]Wrote {len(normalised)} crops to {output}")


if __name__ == "__main__":
    app()
