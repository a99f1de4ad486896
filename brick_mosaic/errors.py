"""Exception hierarchy for the brick mosaic pipeline."""

from __future__ import annotations


class BrickMosaicError(Exception):
    """Base class for every error raised by :mod:`brick_mosaic`."""


class InvalidInput(BrickMosaicError, ValueError):
    """Non-positive image dimensions, grid size, or a malformed palette."""


class ImageReadError(BrickMosaicError, OSError):
    """The source image is missing or cannot be decoded."""


class InvalidGeometry(BrickMosaicError, ValueError):
    """Canvas and tile sizes do not fit together (configuration defect)."""
