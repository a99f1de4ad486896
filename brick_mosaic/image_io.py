"""Image loading, saving, and comparison-sheet generation."""

from __future__ import annotations

from pathlib import Path
from typing import IO

import numpy as np
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from brick_mosaic.errors import ImageReadError


def load_image(path: str | Path | IO[bytes]) -> np.ndarray:
    """Load an image path or binary file object as RGB, dropping alpha.

    Returns:
        (H, W, 3) uint8 array.

    Raises:
        ImageReadError: If the file is missing or cannot be decoded.
    """
    try:
        with Image.open(path) as img:
            return np.array(img.convert("RGB"), dtype=np.uint8)
    except FileNotFoundError as exc:
        msg = f"Image not found: {path}"
        raise ImageReadError(msg) from exc
    except (UnidentifiedImageError, OSError) as exc:
        msg = f"Cannot decode image {path}: {exc}"
        raise ImageReadError(msg) from exc


def save_image(array: np.ndarray, path: str | Path) -> None:
    """Save an (H, W, 3) array; the format follows the file suffix."""
    Image.fromarray(array.astype(np.uint8)).save(path)


def save_upscaled(
    array: np.ndarray,
    path: str | Path,
    pixel_upscale: int = 12,
) -> None:
    """Save a small array as a nearest-neighbour-upscaled image."""
    img = Image.fromarray(array.astype(np.uint8))
    h, w = array.shape[:2]
    img = img.resize((w * pixel_upscale, h * pixel_upscale), Image.NEAREST)
    img.save(path)


def make_comparison_grid(
    original: np.ndarray,
    averages: np.ndarray,
    adapted: np.ndarray,
    canvas: np.ndarray,
    output_path: str | Path,
) -> None:
    """Create a 4-panel sheet: Original | Averages | Adapted | Studs.

    Every panel is scaled to the pixel size of the rendered *canvas*.
    """
    panel_h, panel_w = canvas.shape[:2]
    label_height = 36

    original_img = Image.fromarray(original).resize((panel_w, panel_h), Image.LANCZOS)
    averages_img = Image.fromarray(averages).resize((panel_w, panel_h), Image.NEAREST)
    adapted_img = Image.fromarray(adapted).resize((panel_w, panel_h), Image.NEAREST)
    studs_img = Image.fromarray(canvas)

    gh, gw = averages.shape[:2]
    panels = [original_img, averages_img, adapted_img, studs_img]
    labels = ["Original", f"Averages {gw}x{gh}", "Adapted", "Studs"]

    gap = 8
    total_w = len(panels) * panel_w + (len(panels) - 1) * gap
    total_h = panel_h + label_height

    sheet = Image.new("RGB", (total_w, total_h), (30, 30, 30))
    draw = ImageDraw.Draw(sheet)

    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 18,
        )
    except OSError:
        font = ImageFont.load_default()

    for i, (panel, label) in enumerate(zip(panels, labels, strict=False)):
        x = i * (panel_w + gap)
        sheet.paste(panel, (x, label_height))

        bbox = draw.textbbox((0, 0), label, font=font)
        text_w = bbox[2] - bbox[0]
        tx = x + (panel_w - text_w) // 2
        draw.text((tx, 6), label, fill=(220, 220, 220), font=font)

    sheet.save(output_path)
