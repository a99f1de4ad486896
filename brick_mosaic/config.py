"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from numbers import Integral
from pathlib import Path

from brick_mosaic.errors import InvalidGeometry, InvalidInput
from brick_mosaic.palette import DEFAULT_PALETTE, Color


def _as_color(value: Sequence[int]) -> Color:
    """Validate an RGB triple of integers 0-255 and return it as a tuple."""
    try:
        channels = tuple(value)
    except TypeError as exc:
        msg = f"Invalid RGB colour {value!r}"
        raise InvalidInput(msg) from exc
    if len(channels) != 3 or not all(
        isinstance(c, Integral) and not isinstance(c, bool) and 0 <= c <= 255
        for c in channels
    ):
        msg = f"Invalid RGB colour {value!r}"
        raise InvalidInput(msg)
    r, g, b = (int(c) for c in channels)
    return r, g, b


@dataclass(frozen=True)
class BrickConfig:
    """All constants for a brick mosaic run.

    Attributes:
        cell_size:          Studs per side of one pallet (build plate).
        pallets_per_canvas: Pallets per side of the whole canvas.
        stud_size:          Pixel size of the square holding one stud.
        border:             Padding between a stud circle and its square.
        palette:            Available colours; the first one fills empty cells.
        background:         Canvas colour left visible between studs.
        output_format:      Image format for saved files.
        preview_upscale:    Upscale factor for the small colour previews.
        input_path:         Source image used when none is given.
        output_dir:         Folder for results.
    """

    # Geometry
    cell_size: int = 16
    pallets_per_canvas: int = 3  # 3 means a 3x3 arrangement of pallets
    stud_size: int = 20
    border: int = 2

    # Colours
    palette: tuple[Color, ...] = DEFAULT_PALETTE
    background: Color = (0, 0, 0)

    # Output
    output_format: str = "jpg"
    preview_upscale: int = 1  # small previews stay one pixel per stud

    # Paths
    input_path: Path = field(default_factory=lambda: Path("pic.png"))
    output_dir: Path = field(default_factory=lambda: Path("output"))

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".gif"}
    )

    def __post_init__(self) -> None:
        for name in ("cell_size", "pallets_per_canvas", "stud_size", "preview_upscale"):
            value = getattr(self, name)
            if value <= 0:
                msg = f"{name} must be positive, got {value}"
                raise InvalidInput(msg)
        if self.border < 0:
            msg = f"border must not be negative, got {self.border}"
            raise InvalidInput(msg)
        if not self.palette:
            msg = "palette must contain at least one colour"
            raise InvalidInput(msg)
        # frozen: store hashable int tuples whatever sequences were passed
        object.__setattr__(
            self, "palette", tuple(_as_color(c) for c in self.palette),
        )
        object.__setattr__(self, "background", _as_color(self.background))
        if self.stud_diameter <= 0:
            msg = (
                f"border {self.border} leaves no room for a stud "
                f"in a {self.stud_size}px square"
            )
            raise InvalidGeometry(msg)

    @property
    def canvas_size(self) -> int:
        """Studs per side of the whole canvas (the grid side N)."""
        return self.cell_size * self.pallets_per_canvas

    @property
    def tile_side(self) -> int:
        """Pixel side of one rendered pallet."""
        return self.stud_size * self.cell_size

    @property
    def canvas_pixels(self) -> int:
        """Pixel side of the rendered canvas."""
        return self.canvas_size * self.stud_size

    @property
    def stud_diameter(self) -> int:
        """Diameter of one stud circle in pixels."""
        return self.stud_size - 2 * self.border

    @property
    def default_color(self) -> Color:
        """Colour of cells without source pixels."""
        return self.palette[0]
