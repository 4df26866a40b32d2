#!/usr/bin/env python3
"""
Compute mean brightness for every tile image in a directory.

Usage:
    python scripts/build_tile_metadata.py --tile-dir assets/tiles --output config/tiles.json
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mask_scatter.tiles import describe_tile_images, save_tile_metadata
from mask_scatter.utils.logging import setup_logging, get_logger

logger = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Build tile metadata from tile images")
    parser.add_argument("--tile-dir", type=Path, required=True, help="Directory of tile images")
    parser.add_argument("--output", type=Path, required=True, help="Output metadata JSON")
    parser.add_argument(
        "--log-level", type=str, default="INFO", help="Log level (DEBUG, INFO, WARNING, ERROR)"
    )
    args = parser.parse_args()

    setup_logging(level=args.log_level, format_style="simple")

    try:
        tiles = describe_tile_images(args.tile_dir)
    except OSError as e:
        logger.error(f"Could not read tiles: {e}", exc_info=True)
        sys.exit(1)

    if not tiles:
        logger.error(f"No tile images found in {args.tile_dir}")
        sys.exit(1)

    save_tile_metadata(tiles, args.output)


if __name__ == "__main__":
    main()
