"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from brick_mosaic.config import BrickConfig
from brick_mosaic.errors import BrickMosaicError
from brick_mosaic.image_io import load_image, make_comparison_grid
from brick_mosaic.palette import parse_palette
from brick_mosaic.pipeline import MosaicResult, build_mosaic, palette_usage, write_outputs

app = typer.Typer(
    name="brick-mosaic",
    help="Turn any image into a brick-art mosaic split into build plates.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _collect_images(folder: Path, extensions: frozenset[str]) -> list[Path]:
    if not folder.exists():
        return []
    return sorted(
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in extensions
    )


def _make_config(
    cell_size: int,
    pallets: int,
    stud_size: int,
    border: int,
    colors: list[str] | None,
    output_format: str,
    preview_upscale: int,
    output_dir: Path,
) -> BrickConfig:
    kwargs = {}
    if colors:
        kwargs["palette"] = parse_palette(colors)
    return BrickConfig(
        cell_size=cell_size,
        pallets_per_canvas=pallets,
        stud_size=stud_size,
        border=border,
        output_format=output_format.lower().lstrip("."),
        preview_upscale=preview_upscale,
        output_dir=output_dir,
        **kwargs,
    )


def _usage_table(result: MosaicResult, cfg: BrickConfig) -> Table:
    table = Table(title="Studs per colour", show_edge=False)
    table.add_column("Colour")
    table.add_column("RGB", style="dim")
    table.add_column("Count", justify="right")
    for color, count in palette_usage(result.adapted, cfg.palette).items():
        hex_str = "#{:02X}{:02X}{:02X}".format(*color)
        table.add_row(f"[on {hex_str}]    [/]", f"{color}", str(count))
    return table


def _process(img_path: Path, cfg: BrickConfig, prefix: str, comparison: bool) -> None:
    image = load_image(img_path)
    result = build_mosaic(image, cfg)
    written = write_outputs(result, cfg.output_dir, cfg, prefix=prefix)
    if comparison:
        comp_path = cfg.output_dir / f"{prefix}comparison.png"
        make_comparison_grid(
            image, result.averages, result.adapted, result.canvas, comp_path,
        )
        written.append(comp_path)
    console.print(_usage_table(result, cfg))
    console.print(f"  [green]✓[/green] {len(written)} files in {cfg.output_dir}/")


# Defaults come from BrickConfig - single source of truth
_DEFAULTS = BrickConfig()


# -- build command -----------------------------------------------------

@app.command()
def build(
    image: Path = typer.Argument(_DEFAULTS.input_path, help="Source image"),
    output_dir: Path = typer.Option(
        _DEFAULTS.output_dir, "--output", "-o", help="Results folder",
    ),
    cell_size: int = typer.Option(
        _DEFAULTS.cell_size, "--cell-size", "-c", help="Studs per pallet side",
    ),
    pallets: int = typer.Option(
        _DEFAULTS.pallets_per_canvas, "--pallets", "-p",
        help="Pallets per canvas side",
    ),
    stud_size: int = typer.Option(
        _DEFAULTS.stud_size, "--stud-size", help="Pixel size of one stud",
    ),
    border: int = typer.Option(
        _DEFAULTS.border, "--border", help="Padding around each stud circle",
    ),
    colors: list[str] | None = typer.Option(
        None, "--color",
        help="Palette colour as hex, repeatable; the first one fills empty cells",
    ),
    output_format: str = typer.Option(
        _DEFAULTS.output_format, "--format", "-f", help="Output image format",
    ),
    preview_upscale: int = typer.Option(
        _DEFAULTS.preview_upscale, "--preview-upscale",
        help="Upscale factor for the small colour previews",
    ),
    comparison: bool = typer.Option(
        False, "--comparison/--no-comparison", help="Save a comparison sheet",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Build the mosaic for a single IMAGE."""
    _setup_logging(verbose)
    try:
        cfg = _make_config(
            cell_size, pallets, stud_size, border, colors,
            output_format, preview_upscale, output_dir,
        )
        _process(image, cfg, prefix="", comparison=comparison)
    except BrickMosaicError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc
    console.print("Done")


# -- batch command -----------------------------------------------------

@app.command()
def batch(
    input_dir: Path = typer.Option(
        Path("images"), "--input", "-i", help="Folder with source images",
    ),
    output_dir: Path = typer.Option(
        _DEFAULTS.output_dir, "--output", "-o", help="Results folder",
    ),
    cell_size: int = typer.Option(_DEFAULTS.cell_size, "--cell-size", "-c"),
    pallets: int = typer.Option(_DEFAULTS.pallets_per_canvas, "--pallets", "-p"),
    stud_size: int = typer.Option(_DEFAULTS.stud_size, "--stud-size"),
    border: int = typer.Option(_DEFAULTS.border, "--border"),
    colors: list[str] | None = typer.Option(None, "--color"),
    output_format: str = typer.Option(_DEFAULTS.output_format, "--format", "-f"),
    preview_upscale: int = typer.Option(
        _DEFAULTS.preview_upscale, "--preview-upscale",
    ),
    comparison: bool = typer.Option(True, "--comparison/--no-comparison"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Process all images in INPUT_DIR; outputs are prefixed with each file name."""
    _setup_logging(verbose)

    try:
        cfg = _make_config(
            cell_size, pallets, stud_size, border, colors,
            output_format, preview_upscale, output_dir,
        )
    except BrickMosaicError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    images = _collect_images(input_dir, cfg.SUPPORTED_EXTENSIONS)
    if not images:
        console.print(f"\n[yellow]No images found in {input_dir}/[/yellow]")
        console.print("Place .jpg / .png / ... files there and re-run.\n")
        raise typer.Exit(0)

    console.print(Panel.fit(
        f"[bold]BRICK MOSAIC[/bold]\n"
        f"Canvas: {cfg.canvas_size}x{cfg.canvas_size} studs  |  "
        f"Pallets: {cfg.pallets_per_canvas}x{cfg.pallets_per_canvas}\n"
        f"Palette: {len(cfg.palette)} colours  |  Images: {len(images)}",
        border_style="cyan",
    ))

    for idx, img_path in enumerate(images, 1):
        console.rule(f"[bold cyan][{idx}/{len(images)}] {img_path.name}[/bold cyan]")
        t0 = time.perf_counter()
        try:
            _process(img_path, cfg, prefix=f"{img_path.stem}_", comparison=comparison)
        except BrickMosaicError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(1) from exc
        console.print(f"  [dim]time={time.perf_counter() - t0:.1f}s[/dim]")

    console.print(Panel.fit(
        f"[bold green]ALL DONE[/bold green] - results in [bold]{output_dir}/[/bold]",
        border_style="green",
    ))


if __name__ == "__main__":
    app()
