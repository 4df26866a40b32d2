"""
File validation utilities.
"""

from pathlib import Path
import json
import logging

import yaml
from PIL import Image, UnidentifiedImageError

from mask_scatter.tiles import parse_tiles, read_tile_entries

logger = logging.getLogger(__name__)

PLACEMENT_FIELDS = {"file", "x", "y", "z", "scale", "rotation", "layer", "brightness"}


def validate_mask_file(file_path: Path) -> bool:
    """
    Validate a mask image.

    Args:
        file_path: Path to mask image

    Returns:
        True if valid, False otherwise
    """
    file_path = Path(file_path)
    if not file_path.exists():
        logger.error(f"Mask file does not exist: {file_path}")
        return False

    if file_path.stat().st_size == 0:
        logger.error(f"Mask file is empty: {file_path}")
        return False

    try:
        with Image.open(file_path) as img:
            width, height = img.size
            mode = img.mode
    except (OSError, UnidentifiedImageError) as e:
        logger.error(f"Mask file is not a readable image {file_path}: {e}")
        return False

    if width == 0 or height == 0:
        logger.error(f"Mask has no pixels: {file_path}")
        return False

    if "A" not in mode and mode != "P":
        # Still usable: convert("RGBA") makes every pixel opaque
        logger.warning(f"Mask has no alpha channel ({mode}), whole image is placeable: {file_path}")

    logger.debug(f"Mask file validated: {file_path} ({width}x{height}, {mode})")
    return True


def validate_tile_metadata_file(file_path: Path) -> bool:
    """
    Validate a tile metadata file.

    Args:
        file_path: Path to JSON/YAML tile list

    Returns:
        True if valid, False otherwise
    """
    file_path = Path(file_path)
    if not file_path.exists():
        logger.error(f"Tile metadata does not exist: {file_path}")
        return False

    try:
        tiles = parse_tiles(read_tile_entries(file_path))
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Invalid tile metadata {file_path}: {e}")
        return False

    if not tiles:
        logger.error(f"Tile metadata has no tiles: {file_path}")
        return False

    logger.debug(f"Tile metadata validated: {file_path} ({len(tiles)} tiles)")
    return True


def validate_placements_file(file_path: Path, min_count: int = 0) -> bool:
    """
    Validate a placements output file.

    Args:
        file_path: Path to placements JSON
        min_count: Minimum expected number of placements

    Returns:
        True if valid, False otherwise
    """
    file_path = Path(file_path)
    if not file_path.exists():
        logger.error(f"Placements file does not exist: {file_path}")
        return False

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            records = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Error reading placements file {file_path}: {e}")
        return False

    if not isinstance(records, list):
        logger.error(f"Placements file is not a list: {file_path}")
        return False

    if len(records) < min_count:
        logger.error(f"Placements file has {len(records)} records (< {min_count}): {file_path}")
        return False

    for i, record in enumerate(records):
        if not isinstance(record, dict):
            logger.error(f"Placement {i} is not a record: {file_path}")
            return False
        missing = PLACEMENT_FIELDS - set(record)
        if missing:
            logger.error(f"Placement {i} missing fields {sorted(missing)}: {file_path}")
            return False

    logger.debug(f"Placements file validated: {file_path} ({len(records)} placements)")
    return True
