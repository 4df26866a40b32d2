"""
Pipeline orchestration - sampling, density thinning, attribute assignment.
"""

from pathlib import Path
from typing import Callable, List, Optional, Sequence
import logging

from mask_scatter.attributes import AttributeMapper
from mask_scatter.exporter import PlacementExporter
from mask_scatter.mask import Mask, MaskSampler, load_mask
from mask_scatter.placement import Placement, PlacementConfig
from mask_scatter.rng import RandomStream
from mask_scatter.sampling import PoissonDiskSampler
from mask_scatter.tiles import TileDescriptor, has_finite_brightness, load_tile_metadata
from mask_scatter.utils.paths import PathManager

logger = logging.getLogger(__name__)


class PlacementPipeline:
    """
    Generate placements from a mask, a tile list and a configuration.

    Random draws happen in this order for every sampled point:
    density thinning (only when density < 1), tile fallback (rare),
    scale, rotation, z.
    """

    def __init__(self, config: PlacementConfig):
        """
        Initialize pipeline.

        Args:
            config: Placement configuration (validated here)
        """
        config.validate()
        self.config = config
        self.sampler = PoissonDiskSampler(config.poisson_radius)
        self.exporter = PlacementExporter()

    def _check_inputs(self, mask: Mask, tiles: Sequence[TileDescriptor]):
        if not isinstance(mask, Mask):
            raise ValueError(f"Malformed mask: expected Mask, got {type(mask).__name__}")
        if not tiles:
            raise ValueError("Tile list is empty - at least one tile is required")

        unscored = [tile.file for tile in tiles if not has_finite_brightness(tile)]
        if unscored:
            logger.warning(f"Tiles without a usable mean brightness: {unscored}")

    def generate(
        self,
        mask: Mask,
        tiles: Sequence[TileDescriptor],
        rng: Callable[[], float],
    ) -> List[Placement]:
        """
        Run sampling and attribute assignment.

        Args:
            mask: Decoded mask
            tiles: Non-empty ordered tile list
            rng: Shared random stream (advanced in place)

        Returns:
            Placements in sampling order
        """
        self._check_inputs(mask, tiles)

        mask_sampler = MaskSampler(mask)
        mapper = AttributeMapper(
            tiles,
            min_scale=self.config.min_scale,
            max_scale=self.config.max_scale,
            rotation_range=self.config.rotation_range,
            zones=self.config.z_layers,
        )
        density = self.config.density

        points = self.sampler.sample(mask_sampler, rng)
        logger.info(f"Sampled {len(points)} positions inside mask.")

        placements = []
        for point in points:
            if density < 1 and rng() > density:
                continue

            brightness = mask_sampler.brightness(point.x, point.y)
            tile, scale, rotation, z, layer = mapper.assign(brightness, rng)

            placements.append(
                Placement(
                    file=tile.file,
                    x=point.x,
                    y=point.y,
                    z=z,
                    scale=scale,
                    rotation=rotation,
                    layer=layer,
                    brightness=brightness,
                )
            )

        logger.info(f"Generated {len(placements)} placements ({len(points) - len(placements)} thinned)")
        return placements

    def run(self, paths: PathManager) -> Path:
        """
        Load inputs from disk, generate, and write the output file.

        Args:
            paths: Resolved input/output locations

        Returns:
            Path to written placements file
        """
        mask = load_mask(paths.mask_path)
        tiles = load_tile_metadata(paths.tile_metadata_path)
        rng = RandomStream(self.config.seed)

        placements = self.generate(mask, tiles, rng)
        logger.debug(f"Consumed {rng.draws} random draws")

        output_path = self.exporter.export(placements, paths.output_path)

        if paths.preview_path is not None:
            # Deferred: matplotlib is only needed for previews
            from mask_scatter.preview import render_preview

            render_preview(mask, placements, paths.preview_path)

        return output_path


def generate_placements(
    mask: Mask,
    tiles: Sequence[TileDescriptor],
    config: PlacementConfig,
    rng: Optional[Callable[[], float]] = None,
) -> List[Placement]:
    """
    Convenience wrapper: one pipeline run.

    When ``rng`` is None a stream seeded with ``config.seed`` is created.
    """
    if rng is None:
        rng = RandomStream(config.seed)
    return PlacementPipeline(config).generate(mask, tiles, rng)
