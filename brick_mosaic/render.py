"""Stud rendering of a quantised grid and slicing into pallets."""

from __future__ import annotations

import logging

import numpy as np
from PIL import Image, ImageDraw

from brick_mosaic.errors import InvalidGeometry
from brick_mosaic.palette import Color

logger = logging.getLogger(__name__)

TileIndex = tuple[int, int]


def render_canvas(
    grid: np.ndarray,
    stud_size: int = 20,
    border: int = 2,
    background: Color = (0, 0, 0),
) -> np.ndarray:
    """Draw every grid cell as a filled circle on a larger canvas.

    Each cell owns a *stud_size* square; its circle has diameter
    ``stud_size - 2 * border`` and is inset by *border* on both axes.
    Pixels outside the circles keep *background*.

    Args:
        grid:       (N, M, 3) uint8 quantised colours, indexed ``grid[y, x]``.
        stud_size:  Pixel side of one stud square.
        border:     Inset of the circle inside its square.
        background: Canvas colour between studs.

    Returns:
        (N * stud_size, M * stud_size, 3) uint8 canvas.
    """
    diameter = stud_size - 2 * border
    if diameter <= 0:
        msg = f"border {border} leaves no room for a stud in {stud_size}px"
        raise InvalidGeometry(msg)

    rows, cols = grid.shape[:2]
    canvas = Image.new("RGB", (cols * stud_size, rows * stud_size), background)
    draw = ImageDraw.Draw(canvas)

    for y in range(rows):
        for x in range(cols):
            x0 = x * stud_size + border
            y0 = y * stud_size + border
            # ellipse() bounds are inclusive
            draw.ellipse(
                [x0, y0, x0 + diameter - 1, y0 + diameter - 1],
                fill=tuple(int(c) for c in grid[y, x]),
            )

    return np.array(canvas, dtype=np.uint8)


def split_tiles(
    canvas: np.ndarray,
    tile_side: int,
    pallets_per_canvas: int,
) -> dict[TileIndex, np.ndarray]:
    """Cut the canvas into ``pallets_per_canvas ** 2`` square tiles.

    Tile ``(i, j)`` starts at pixel ``(i * tile_side, j * tile_side)``,
    i.e. *i* counts along x and *j* along y.

    Raises:
        InvalidGeometry: If the canvas cannot be partitioned exactly.
    """
    height, width = canvas.shape[:2]
    if tile_side <= 0 or width % tile_side or height % tile_side:
        msg = (
            f"Canvas {width}x{height} is not evenly divisible "
            f"by tile side {tile_side}"
        )
        raise InvalidGeometry(msg)
    if width // tile_side != pallets_per_canvas or height // tile_side != pallets_per_canvas:
        msg = (
            f"Canvas {width}x{height} holds {width // tile_side}x"
            f"{height // tile_side} tiles, expected "
            f"{pallets_per_canvas}x{pallets_per_canvas}"
        )
        raise InvalidGeometry(msg)

    tiles: dict[TileIndex, np.ndarray] = {}
    for i in range(pallets_per_canvas):
        for j in range(pallets_per_canvas):
            x0 = i * tile_side
            y0 = j * tile_side
            tiles[(i, j)] = canvas[y0 : y0 + tile_side, x0 : x0 + tile_side].copy()
    logger.debug("Split %dx%d canvas into %d tiles", width, height, len(tiles))
    return tiles


def assemble_tiles(tiles: dict[TileIndex, np.ndarray], tile_side: int) -> np.ndarray:
    """Paste tiles back by index into one canvas (inverse of :func:`split_tiles`)."""
    across = max(i for i, _ in tiles) + 1
    down = max(j for _, j in tiles) + 1
    canvas = np.zeros((down * tile_side, across * tile_side, 3), dtype=np.uint8)
    for (i, j), tile in tiles.items():
        canvas[j * tile_side : (j + 1) * tile_side, i * tile_side : (i + 1) * tile_side] = tile
    return canvas
