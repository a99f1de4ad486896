"""Down-sampling of a source image into a square grid of average colours.

The source is scanned in square steps of ``max(W, H) // n`` pixels, so a
non-square image leaves the cells past its short side empty; those cells
take the default colour.  The region read for each cell is clamped to
``n`` pixels per axis rather than to the step size, which means large
images average only the top-left ``n x n`` block of every step and tiny
images (step of 0) read the same block for every cell.  Both behaviours
are part of the reduction contract.
"""

from __future__ import annotations

import numpy as np

from brick_mosaic.errors import InvalidInput
from brick_mosaic.palette import Color


def cell_region(
    width: int,
    height: int,
    n: int,
    x: int,
    y: int,
) -> tuple[int, int, int, int] | None:
    """Source rectangle ``(x0, y0, w, h)`` summarised by grid cell (x, y).

    Returns ``None`` when the cell starts outside the source image.
    """
    cell_pixels = max(width, height) // n
    x0 = x * cell_pixels
    y0 = y * cell_pixels
    if x0 >= width or y0 >= height:
        return None
    return x0, y0, min(n, width - x0), min(n, height - y0)


def average_color(region: np.ndarray | None, default: Color) -> Color:
    """Per-channel mean of an (h, w, 3) region, truncated to integers."""
    if region is None or region.size == 0:
        return default
    pixels = region.reshape(-1, 3).astype(np.int64)
    r, g, b = (int(s) // len(pixels) for s in pixels.sum(axis=0))
    return r, g, b


def reduce_to_grid(image: np.ndarray, n: int, default_color: Color) -> np.ndarray:
    """Summarise *image* as an n x n grid of average colours.

    Args:
        image:         (H, W, 3) uint8 source bitmap.
        n:             Grid side.
        default_color: Colour of cells with no source pixels.

    Returns:
        (n, n, 3) uint8 grid, indexed ``grid[y, x]``.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        msg = f"Expected an (H, W, 3) image, got shape {image.shape}"
        raise InvalidInput(msg)
    height, width = image.shape[:2]
    if width <= 0 or height <= 0:
        msg = f"Image dimensions must be positive, got {width}x{height}"
        raise InvalidInput(msg)
    if n <= 0:
        msg = f"Grid size must be positive, got {n}"
        raise InvalidInput(msg)

    grid = np.empty((n, n, 3), dtype=np.uint8)
    for y in range(n):
        for x in range(n):
            rect = cell_region(width, height, n, x, y)
            region = None
            if rect is not None:
                x0, y0, w, h = rect
                region = image[y0 : y0 + h, x0 : x0 + w]
            grid[y, x] = average_color(region, default_color)
    return grid
