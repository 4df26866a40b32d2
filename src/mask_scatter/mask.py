"""
Mask loading and point queries.

The alpha channel marks where placements are allowed, the red channel
(grayscale masks have R=G=B) carries the brightness field that drives
attribute selection.
"""

from dataclasses import dataclass
from pathlib import Path
import math
import logging

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Mask:
    """Decoded RGBA mask, ``data`` has shape (height, width, 4)."""

    data: np.ndarray

    def __post_init__(self):
        data = np.array(self.data)
        if data.ndim != 3 or data.shape[2] != 4:
            raise ValueError(
                f"Malformed mask: expected (height, width, 4) RGBA array, got shape {data.shape}"
            )
        if data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Malformed mask: empty pixel grid {data.shape[1]}x{data.shape[0]}")
        if data.dtype != np.uint8:
            if data.min() < 0 or data.max() > 255:
                raise ValueError("Malformed mask: channel values must be in [0, 255]")
            data = data.astype(np.uint8)
        data.setflags(write=False)
        object.__setattr__(self, "data", data)

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @classmethod
    def from_image(cls, image: Image.Image) -> "Mask":
        """Create mask from a PIL image (converted to RGBA)."""
        return cls(np.array(image.convert("RGBA"), dtype=np.uint8))


def load_mask(mask_path: Path) -> Mask:
    """
    Load a mask image from disk.

    Args:
        mask_path: Path to a PNG (or any Pillow-readable) image

    Returns:
        Decoded Mask

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    mask_path = Path(mask_path)
    if not mask_path.exists():
        raise FileNotFoundError(f"Mask file not found: {mask_path}")

    with Image.open(mask_path) as img:
        mask = Mask.from_image(img)

    logger.info(f"Loaded mask {mask_path.name} ({mask.width}x{mask.height})")
    return mask


class MaskSampler:
    """
    Evaluate a mask at fractional pixel coordinates.

    Coordinates are floored to the containing pixel, no interpolation is done
    so hard mask edges stay hard.
    """

    def __init__(self, mask: Mask):
        self.mask = mask
        self.width = mask.width
        self.height = mask.height

    def _pixel(self, x: float, y: float):
        # NaN fails both comparisons and lands here too
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return int(math.floor(y)), int(math.floor(x))

    def is_inside(self, x: float, y: float) -> bool:
        """True iff the pixel under (x, y) has alpha > 0. Out of bounds is outside."""
        pixel = self._pixel(x, y)
        if pixel is None:
            return False
        return bool(self.mask.data[pixel[0], pixel[1], 3] > 0)

    def brightness(self, x: float, y: float) -> float:
        """
        Red channel under (x, y) scaled to [0, 1].

        Callers should only query points inside the mask; out-of-bounds
        coordinates return 0.0.
        """
        pixel = self._pixel(x, y)
        if pixel is None:
            return 0.0
        return int(self.mask.data[pixel[0], pixel[1], 0]) / 255
