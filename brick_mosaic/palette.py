"""Palette definition and nearest-colour quantisation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np

from brick_mosaic.errors import InvalidInput

Color = tuple[int, int, int]

# Colours of the brick set; the first one fills cells without source pixels
DEFAULT_PALETTE: tuple[Color, ...] = (
    (255, 255, 255),  # white
    (248, 5, 5),  # red
    (246, 132, 61),  # orange
    (214, 252, 43),  # lime
    (73, 190, 46),  # green
    (0, 197, 238),  # cyan
)


def parse_hex_color(hex_str: str) -> Color:
    """Parse ``'#RRGGBB'`` (leading ``#`` optional) to an RGB tuple."""
    h = hex_str.strip().lstrip("#")
    if len(h) != 6:
        msg = f"Expected a colour like '#RRGGBB', got {hex_str!r}"
        raise InvalidInput(msg)
    try:
        r, g, b = (int(h[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError as exc:
        msg = f"Invalid hex colour {hex_str!r}"
        raise InvalidInput(msg) from exc
    return r, g, b


def parse_palette(hex_colors: Iterable[str]) -> tuple[Color, ...]:
    """Parse hex strings into an ordered palette; order is preserved."""
    palette = tuple(parse_hex_color(h) for h in hex_colors)
    if not palette:
        msg = "palette must contain at least one colour"
        raise InvalidInput(msg)
    return palette


def color_difference(a: Sequence[int], b: Sequence[int]) -> int:
    """Sum of absolute per-channel differences between two colours."""
    return (
        abs(int(a[0]) - int(b[0]))
        + abs(int(a[1]) - int(b[1]))
        + abs(int(a[2]) - int(b[2]))
    )


def nearest_color(color: Sequence[int], palette: Sequence[Color]) -> Color:
    """Return the palette entry closest to *color*.

    When several entries share the minimal difference the earliest one
    in *palette* wins.
    """
    if not palette:
        msg = "palette must contain at least one colour"
        raise InvalidInput(msg)
    return min(palette, key=lambda p: color_difference(p, color))


def quantize_grid(grid: np.ndarray, palette: Sequence[Color]) -> np.ndarray:
    """Map every cell of an (H, W, 3) grid to its nearest palette colour.

    Args:
        grid:    (H, W, 3) uint8 average colours.
        palette: Ordered palette, non-empty.

    Returns:
        (H, W, 3) uint8 grid containing palette colours only.
    """
    if not palette:
        msg = "palette must contain at least one colour"
        raise InvalidInput(msg)
    pal = np.asarray(palette, dtype=np.int32)
    cells = grid.reshape(-1, 3).astype(np.int32)

    # (cells, palette) difference table; argmin picks the first minimum
    diff = np.abs(cells[:, np.newaxis, :] - pal[np.newaxis, :, :]).sum(axis=2)
    idx = np.argmin(diff, axis=1)
    return pal[idx].astype(np.uint8).reshape(grid.shape)
