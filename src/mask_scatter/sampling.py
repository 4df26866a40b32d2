"""
Approximate Poisson-disk sampling constrained by a mask.

This is grid-jittered rejection sampling rather than Bridson's algorithm:
anchors on a regular grid (step = 0.8 * radius) are jittered by up to
radius / 2 per axis and kept when they stay inside the mask and respect the
minimum distance to everything accepted so far.
"""

from collections import defaultdict
from typing import Callable, Dict, List, NamedTuple, Tuple
import math
import numbers
import logging

from mask_scatter.mask import MaskSampler

logger = logging.getLogger(__name__)

GRID_STEP_FACTOR = 0.8


class Point(NamedTuple):
    x: float
    y: float


class _SpatialHash:
    """Bucket accepted points by cell so the distance test only scans neighbours."""

    def __init__(self, cell_size: float):
        self.cell_size = cell_size
        self.cells: Dict[Tuple[int, int], List[Point]] = defaultdict(list)

    def _cell(self, x: float, y: float) -> Tuple[int, int]:
        return int(math.floor(x / self.cell_size)), int(math.floor(y / self.cell_size))

    def add(self, point: Point):
        self.cells[self._cell(point.x, point.y)].append(point)

    def is_far_enough(self, x: float, y: float, radius2: float) -> bool:
        cx, cy = self._cell(x, y)
        # +-2 cells tolerates rounding in the cell index near boundaries
        for gy in range(cy - 2, cy + 3):
            for gx in range(cx - 2, cx + 3):
                bucket = self.cells.get((gx, gy))
                if not bucket:
                    continue
                for other in bucket:
                    dx = x - other.x
                    dy = y - other.y
                    if dx * dx + dy * dy < radius2:
                        return False
        return True


def poisson_sample(sampler: MaskSampler, radius: float, rng: Callable[[], float]) -> List[Point]:
    """
    Sample points inside the mask with a minimum spacing of ``radius``.

    Args:
        sampler: Mask sampler used for inside tests
        radius: Minimum distance between accepted points
        rng: Shared random stream, two draws per anchor that lies inside the mask

    Returns:
        Accepted points in grid traversal order (rows top to bottom)

    Raises:
        ValueError: If radius is not a positive finite number
    """
    if not (isinstance(radius, numbers.Real) and math.isfinite(radius) and radius > 0):
        raise ValueError(f"Poisson radius must be a positive number, got {radius!r}")

    width = sampler.width
    height = sampler.height
    radius2 = radius * radius
    step = radius * GRID_STEP_FACTOR

    samples: List[Point] = []
    index = _SpatialHash(radius)
    anchors = 0

    y = 0
    while y < height:
        x = 0
        while x < width:
            if sampler.is_inside(x, y):
                anchors += 1
                # x jitter is drawn before y jitter
                jitter_x = x + (rng() - 0.5) * radius
                jitter_y = y + (rng() - 0.5) * radius

                if (
                    0 <= jitter_x < width
                    and 0 <= jitter_y < height
                    and sampler.is_inside(jitter_x, jitter_y)
                    and index.is_far_enough(jitter_x, jitter_y, radius2)
                ):
                    point = Point(jitter_x, jitter_y)
                    samples.append(point)
                    index.add(point)
            x += step
        y += step

    logger.debug(f"Poisson sampling: {anchors} anchors inside mask, {len(samples)} accepted")
    return samples


class PoissonDiskSampler:
    """Mask-constrained sampler with a fixed radius."""

    def __init__(self, radius: float):
        self.radius = radius

    def sample(self, sampler: MaskSampler, rng: Callable[[], float]) -> List[Point]:
        return poisson_sample(sampler, self.radius, rng)
