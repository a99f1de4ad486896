"""
Brick Mosaic Generator
======================

Turn any image into a brick-art mosaic: the picture is reduced to a
square grid of average colours, each mapped onto a small fixed palette,
rendered as round studs, and cut into equal build plates ("pallets").
"""

__version__ = "1.0.0"

from brick_mosaic.config import BrickConfig
from brick_mosaic.errors import (
    BrickMosaicError,
    ImageReadError,
    InvalidGeometry,
    InvalidInput,
)
from brick_mosaic.grid import average_color, cell_region, reduce_to_grid
from brick_mosaic.image_io import load_image, make_comparison_grid, save_image
from brick_mosaic.palette import (
    DEFAULT_PALETTE,
    color_difference,
    nearest_color,
    parse_palette,
    quantize_grid,
)
from brick_mosaic.pipeline import MosaicResult, build_mosaic, palette_usage, write_outputs
from brick_mosaic.render import assemble_tiles, render_canvas, split_tiles

__all__ = [
    "DEFAULT_PALETTE",
    "BrickConfig",
    "BrickMosaicError",
    "ImageReadError",
    "InvalidGeometry",
    "InvalidInput",
    "MosaicResult",
    "assemble_tiles",
    "average_color",
    "build_mosaic",
    "cell_region",
    "color_difference",
    "load_image",
    "make_comparison_grid",
    "nearest_color",
    "palette_usage",
    "parse_palette",
    "quantize_grid",
    "reduce_to_grid",
    "render_canvas",
    "save_image",
    "split_tiles",
    "write_outputs",
]
