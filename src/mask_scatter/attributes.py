"""
Brightness-driven attribute assignment.

Per placement the shared random stream is consumed in a fixed order:

    tile pick (0 or 1 draws) -> scale (1) -> rotation (1) -> z (1)

Changing this order changes every placement generated from a given seed.
"""

from dataclasses import dataclass
from typing import Callable, Sequence, Tuple
import math
import logging

from mask_scatter.tiles import TileDescriptor

logger = logging.getLogger(__name__)

# Brightness thresholds for depth band choice
BACK_BAND_LIMIT = 0.33
MID_BAND_LIMIT = 0.66

SCALE_JITTER = 0.3

# Layer indices (lower renders in front)
LAYER_FRONT = 0
LAYER_MID = 1
LAYER_BACK = 2


@dataclass(frozen=True)
class ZoneBand:
    """Depth interval [min, max]."""

    min: float
    max: float

    @classmethod
    def from_dict(cls, band: dict) -> "ZoneBand":
        return cls(min=float(band["min"]), max=float(band["max"]))


@dataclass(frozen=True)
class ZoneConfig:
    """Back, mid and front depth bands."""

    back: ZoneBand
    mid: ZoneBand
    front: ZoneBand

    @classmethod
    def from_dict(cls, zones: dict) -> "ZoneConfig":
        return cls(
            back=ZoneBand.from_dict(zones["back"]),
            mid=ZoneBand.from_dict(zones["mid"]),
            front=ZoneBand.from_dict(zones["front"]),
        )

    def is_ordered(self) -> bool:
        """True if bands are non-overlapping and increase back to front."""
        bounds = [
            self.back.min, self.back.max,
            self.mid.min, self.mid.max,
            self.front.min, self.front.max,
        ]
        return all(a <= b for a, b in zip(bounds, bounds[1:]))


def pick_tile(tiles: Sequence[TileDescriptor], brightness: float, rng: Callable[[], float]) -> TileDescriptor:
    """
    Pick the tile whose mean brightness is closest to ``brightness``.

    Ties keep the first tile encountered. When no tile scores (every mean
    brightness is NaN) one value is drawn to choose a tile uniformly.
    """
    if not tiles:
        raise ValueError("Cannot pick a tile from an empty tile list")

    best = None
    best_diff = 999.0
    for tile in tiles:
        diff = abs(tile.mean_brightness - brightness)
        if diff < best_diff:
            best_diff = diff
            best = tile

    if best is None:
        best = tiles[int(math.floor(rng() * len(tiles)))]
    return best


def pick_scale(brightness: float, rng: Callable[[], float], min_scale: float, max_scale: float) -> float:
    """Darker -> larger. Jitter of +-0.15 is applied before clamping to [0, 1]."""
    t = (1 - brightness) + (rng() - 0.5) * SCALE_JITTER
    if t < 0:
        t = 0.0
    if t > 1:
        t = 1.0
    return min_scale + t * (max_scale - min_scale)


def pick_rotation(rng: Callable[[], float], min_deg: float, max_deg: float) -> float:
    return min_deg + rng() * (max_deg - min_deg)


def pick_z(brightness: float, rng: Callable[[], float], zones: ZoneConfig) -> float:
    """Band chosen by brightness alone, z uniform within it."""
    if brightness < BACK_BAND_LIMIT:
        band = zones.back
    elif brightness < MID_BAND_LIMIT:
        band = zones.mid
    else:
        band = zones.front
    return band.min + rng() * (band.max - band.min)


def pick_layer(z: float, zones: ZoneConfig) -> int:
    """Layer from z thresholds only, independent of the band that produced z."""
    if z <= zones.mid.min:
        return LAYER_BACK
    if z <= zones.front.min:
        return LAYER_MID
    return LAYER_FRONT


class AttributeMapper:
    """Derive tile, scale, rotation, z and layer from brightness."""

    def __init__(
        self,
        tiles: Sequence[TileDescriptor],
        min_scale: float,
        max_scale: float,
        rotation_range: Tuple[float, float],
        zones: ZoneConfig,
    ):
        self.tiles = list(tiles)
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.min_deg, self.max_deg = rotation_range
        self.zones = zones

    def assign(self, brightness: float, rng: Callable[[], float]):
        """
        Compute all attributes for one point.

        Returns:
            Tuple of (tile, scale, rotation, z, layer)
        """
        tile = pick_tile(self.tiles, brightness, rng)
        scale = pick_scale(brightness, rng, self.min_scale, self.max_scale)
        rotation = pick_rotation(rng, self.min_deg, self.max_deg)
        z = pick_z(brightness, rng, self.zones)
        layer = pick_layer(z, self.zones)
        return tile, scale, rotation, z, layer
