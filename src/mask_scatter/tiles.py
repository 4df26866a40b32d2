"""
Tile metadata: loading, validation and generation from tile images.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence
import json
import math
import numbers
import logging

import numpy as np
import yaml
from PIL import Image

logger = logging.getLogger(__name__)

TILE_IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".webp", ".tif", ".tiff")


@dataclass(frozen=True)
class TileDescriptor:
    """Selectable asset with its mean brightness in [0, 1]."""

    file: str
    mean_brightness: float
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, entry: dict, index: int = 0) -> "TileDescriptor":
        """
        Create descriptor from a metadata entry.

        Accepts ``meanBrightness`` (legacy JSON metadata)
        or ``mean_brightness``. Unknown keys are kept in ``extra``.
        """
        if not isinstance(entry, dict):
            raise ValueError(f"Tile entry {index} is not a mapping: {entry!r}")
        if "file" not in entry:
            raise ValueError(f"Tile entry {index} has no 'file'")

        if "meanBrightness" in entry:
            key = "meanBrightness"
        elif "mean_brightness" in entry:
            key = "mean_brightness"
        else:
            raise ValueError(f"Tile entry {index} ({entry['file']}) has no mean brightness")

        value = entry[key]
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ValueError(
                f"Tile entry {index} ({entry['file']}) has non-numeric brightness {value!r}"
            )

        if not 0.0 <= value <= 1.0:
            logger.warning(
                f"Tile entry {index} ({entry['file']}) has mean brightness {value} outside [0, 1]"
            )

        extra = {k: v for k, v in entry.items() if k not in ("file", key)}
        return cls(file=str(entry["file"]), mean_brightness=float(value), extra=extra)

    def to_dict(self) -> dict:
        return {"file": self.file, "meanBrightness": self.mean_brightness, **self.extra}


def parse_tiles(entries: Sequence[dict]) -> List[TileDescriptor]:
    """Convert raw metadata entries to descriptors, preserving order."""
    if not isinstance(entries, (list, tuple)):
        raise ValueError(f"Tile metadata must be a list, got {type(entries).__name__}")
    return [TileDescriptor.from_dict(entry, i) for i, entry in enumerate(entries)]


def read_tile_entries(metadata_path: Path):
    """
    Read raw tile entries from a JSON or YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON
        yaml.YAMLError: If the file is not valid YAML
    """
    metadata_path = Path(metadata_path)
    if not metadata_path.exists():
        raise FileNotFoundError(f"Tile metadata not found: {metadata_path}")

    with open(metadata_path, "r", encoding="utf-8") as f:
        if metadata_path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)


def load_tile_metadata(metadata_path: Path) -> List[TileDescriptor]:
    """
    Load tile metadata from a JSON or YAML file.

    Args:
        metadata_path: Path to metadata file (list of tile entries)

    Returns:
        Ordered list of TileDescriptor

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If an entry is malformed
    """
    metadata_path = Path(metadata_path)
    tiles = parse_tiles(read_tile_entries(metadata_path))
    logger.info(f"Loaded {len(tiles)} tiles from {metadata_path.name}")
    return tiles


def mean_brightness(image: Image.Image) -> float:
    """
    Mean luminance of an image in [0, 1].

    Fully transparent pixels are ignored; an image with no visible pixels
    reports 0.0.
    """
    rgba = np.asarray(image.convert("RGBA"), dtype=np.float64)
    luminance = np.asarray(image.convert("L"), dtype=np.float64)
    visible = rgba[..., 3] > 0
    if not visible.any():
        return 0.0
    return float(luminance[visible].mean() / 255.0)


def describe_tile_images(tile_dir: Path) -> List[TileDescriptor]:
    """
    Build descriptors for every image in a directory.

    Args:
        tile_dir: Directory containing tile images

    Returns:
        Descriptors sorted by file name, ``file`` relative to ``tile_dir``
    """
    tile_dir = Path(tile_dir)
    if not tile_dir.is_dir():
        raise FileNotFoundError(f"Tile directory not found: {tile_dir}")

    tiles = []
    for image_path in sorted(tile_dir.iterdir()):
        if image_path.suffix.lower() not in TILE_IMAGE_SUFFIXES:
            continue
        with Image.open(image_path) as img:
            brightness = mean_brightness(img)
            size = img.size
        tiles.append(
            TileDescriptor(
                file=image_path.name,
                mean_brightness=brightness,
                extra={"width": size[0], "height": size[1]},
            )
        )
        logger.debug(f"{image_path.name}: mean brightness {brightness:.3f}")

    logger.info(f"Described {len(tiles)} tile images in {tile_dir}")
    return tiles


def save_tile_metadata(tiles: Sequence[TileDescriptor], output_path: Path) -> Path:
    """Write descriptors as a JSON list."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump([tile.to_dict() for tile in tiles], f, indent=2)
    logger.info(f"Wrote metadata for {len(tiles)} tiles -> {output_path}")
    return output_path


def has_finite_brightness(tile: TileDescriptor) -> bool:
    return math.isfinite(tile.mean_brightness)
