"""
Placement records and placement configuration.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple
import math
import logging

from mask_scatter.attributes import ZoneConfig

logger = logging.getLogger(__name__)


class PlacementConfigError(ValueError):
    """Raised when a placement configuration is unusable."""


# camelCase keys used by legacy JSON configs
_CAMEL_CASE_KEYS = {
    "poissonRadius": "poisson_radius",
    "minScale": "min_scale",
    "maxScale": "max_scale",
    "rotationRange": "rotation_range",
    "zLayers": "z_layers",
    "tileMetadata": "tile_metadata",
}

# output is required to be a path when present, the others may be null
_PATH_KEYS = ("mask", "tile_metadata", "output", "preview")


@dataclass(frozen=True)
class Placement:
    """Single placement (output record)."""

    file: str
    x: float
    y: float
    z: float
    scale: float
    rotation: float  # Degrees
    layer: int  # 0 = front, 1 = mid, 2 = back
    brightness: float  # Mask brightness at (x, y), kept for diagnostics

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PlacementConfig:
    """Configuration for a placement run."""

    poisson_radius: float
    z_layers: ZoneConfig
    density: float = 1.0
    min_scale: float = 0.5
    max_scale: float = 1.5
    rotation_range: Tuple[float, float] = (0.0, 360.0)
    seed: Optional[Any] = None

    # Input / output locations, only needed for file-level runs
    mask: Optional[str] = None
    tile_metadata: Optional[str] = None
    output: str = "placements.json"
    preview: Optional[str] = None

    @classmethod
    def from_dict(cls, config: dict) -> "PlacementConfig":
        """
        Create config from dictionary (loaded from YAML or JSON).

        Raises:
            PlacementConfigError: If required keys are missing or values are invalid
        """
        config = {_CAMEL_CASE_KEYS.get(key, key): value for key, value in config.items()}

        for key in ("poisson_radius", "z_layers"):
            if key not in config:
                raise PlacementConfigError(f"Missing required config key: {key}")

        try:
            z_layers = ZoneConfig.from_dict(config["z_layers"])
        except (KeyError, TypeError, ValueError) as e:
            raise PlacementConfigError(
                f"z_layers must define back/mid/front with numeric min/max: {e}"
            ) from e

        rotation_range = config.get("rotation_range", (0.0, 360.0))
        try:
            min_deg, max_deg = rotation_range
            rotation_range = (float(min_deg), float(max_deg))
        except (TypeError, ValueError) as e:
            raise PlacementConfigError(
                f"rotation_range must be two numbers, got {rotation_range!r}"
            ) from e

        for key in _PATH_KEYS:
            if key not in config:
                continue
            value = config[key]
            if value is None and key != "output":
                continue
            if not isinstance(value, str) or not value:
                raise PlacementConfigError(f"{key} must be a non-empty path string, got {value!r}")

        try:
            placement_config = cls(
                poisson_radius=float(config["poisson_radius"]),
                z_layers=z_layers,
                density=float(config.get("density", 1.0)),
                min_scale=float(config.get("min_scale", 0.5)),
                max_scale=float(config.get("max_scale", 1.5)),
                rotation_range=rotation_range,
                seed=config.get("seed"),
                mask=config.get("mask"),
                tile_metadata=config.get("tile_metadata"),
                output=config.get("output", "placements.json"),
                preview=config.get("preview"),
            )
        except (TypeError, ValueError) as e:
            raise PlacementConfigError(f"Invalid numeric value in placement config: {e}") from e

        placement_config.validate()
        return placement_config

    def validate(self):
        """
        Check value ranges before any sampling happens.

        Raises:
            PlacementConfigError: On the first violated precondition
        """
        if not (math.isfinite(self.poisson_radius) and self.poisson_radius > 0):
            raise PlacementConfigError(
                f"poisson_radius must be a positive number, got {self.poisson_radius}"
            )
        if math.isnan(self.density) or self.density <= 0:
            raise PlacementConfigError(f"density must be a number > 0, got {self.density}")
        if not (math.isfinite(self.min_scale) and math.isfinite(self.max_scale)):
            raise PlacementConfigError(
                f"Scale range must be finite, got [{self.min_scale}, {self.max_scale}]"
            )
        if self.min_scale > self.max_scale:
            raise PlacementConfigError(
                f"Inverted scale range: min_scale={self.min_scale} > max_scale={self.max_scale}"
            )
        min_deg, max_deg = self.rotation_range
        if not (math.isfinite(min_deg) and math.isfinite(max_deg)):
            raise PlacementConfigError(f"Rotation range must be finite, got [{min_deg}, {max_deg}]")
        if min_deg > max_deg:
            raise PlacementConfigError(
                f"Inverted rotation range: [{min_deg}, {max_deg}]"
            )
        if not self.z_layers.is_ordered():
            zones = self.z_layers
            raise PlacementConfigError(
                "z_layers must be ordered and non-overlapping "
                "(back.min <= back.max <= mid.min <= mid.max <= front.min <= front.max), got "
                f"back=[{zones.back.min}, {zones.back.max}] "
                f"mid=[{zones.mid.min}, {zones.mid.max}] "
                f"front=[{zones.front.min}, {zones.front.max}]"
            )
