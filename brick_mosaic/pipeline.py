"""End-to-end pipeline: reduce, quantise, render, and split into pallets."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from brick_mosaic.config import BrickConfig
from brick_mosaic.grid import reduce_to_grid
from brick_mosaic.image_io import save_image, save_upscaled
from brick_mosaic.palette import Color, quantize_grid
from brick_mosaic.render import TileIndex, render_canvas, split_tiles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MosaicResult:
    """Every artefact produced by one run.

    Attributes:
        averages: (N, N, 3) average colour per stud.
        adapted:  (N, N, 3) averages mapped onto the palette.
        canvas:   Rendered stud image of the whole mosaic.
        tiles:    Canvas slices keyed by pallet index ``(i, j)``.
    """

    averages: np.ndarray
    adapted: np.ndarray
    canvas: np.ndarray
    tiles: dict[TileIndex, np.ndarray]


def build_mosaic(image: np.ndarray, config: BrickConfig) -> MosaicResult:
    """Run the full pipeline on a decoded (H, W, 3) image."""
    n = config.canvas_size
    h, w = image.shape[:2]

    logger.info("Reducing %dx%d image to %dx%d studs ...", w, h, n, n)
    t0 = time.perf_counter()
    averages = reduce_to_grid(image, n, config.default_color)
    adapted = quantize_grid(averages, config.palette)
    logger.info("Colours ready  (%.2f s)", time.perf_counter() - t0)

    t0 = time.perf_counter()
    canvas = render_canvas(adapted, config.stud_size, config.border, config.background)
    tiles = split_tiles(canvas, config.tile_side, config.pallets_per_canvas)
    logger.info(
        "Rendered %dx%d canvas, %d pallets  (%.2f s)",
        canvas.shape[1], canvas.shape[0], len(tiles), time.perf_counter() - t0,
    )
    return MosaicResult(averages=averages, adapted=adapted, canvas=canvas, tiles=tiles)


def palette_usage(adapted: np.ndarray, palette: tuple[Color, ...]) -> dict[Color, int]:
    """Count the studs of each palette colour, in palette order."""
    cells = adapted.reshape(-1, 3)
    return {
        color: int(np.all(cells == np.asarray(color, dtype=np.uint8), axis=1).sum())
        for color in palette
    }


def write_outputs(
    result: MosaicResult,
    output_dir: Path,
    config: BrickConfig,
    prefix: str = "",
) -> list[Path]:
    """Persist previews, canvas and pallets; returns the written paths."""
    output_dir.mkdir(parents=True, exist_ok=True)
    ext = config.output_format
    written: list[Path] = []

    for name, grid in (
        ("small_original_colors", result.averages),
        ("small_adapted_colors", result.adapted),
    ):
        path = output_dir / f"{prefix}{name}.{ext}"
        save_upscaled(grid, path, config.preview_upscale)
        written.append(path)

    canvas_path = output_dir / f"{prefix}canvas.{ext}"
    save_image(result.canvas, canvas_path)
    written.append(canvas_path)

    for (i, j), tile in sorted(result.tiles.items()):
        path = output_dir / f"{prefix}pallet_{i}{j}.{ext}"
        save_image(tile, path)
        written.append(path)

    logger.debug("Wrote %d files to %s", len(written), output_dir)
    return written
