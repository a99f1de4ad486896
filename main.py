#!/usr/bin/env python3
"""
main.py - Quick-start entry point.

Put ``pic.png`` next to this file and run:

    python main.py build

Or use the full CLI:

    python -m brick_mosaic.cli build --help
    python -m brick_mosaic.cli batch --input images/
"""

from brick_mosaic.cli import app

if __name__ == "__main__":
    app()
