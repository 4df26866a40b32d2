"""
Seeded random stream shared by every stochastic step of a run.
"""

import random
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class RandomStream:
    """
    Callable [0, 1) generator built on ``random.Random``.

    A single instance is threaded through sampling, thinning and attribute
    assignment. The order of calls is part of the output contract: the same
    seed only reproduces the same placements if every consumer draws in the
    same sequence.
    """

    def __init__(self, seed: Optional[Any] = None):
        """
        Initialize stream.

        Args:
            seed: Any value accepted by ``random.Random`` (int, str, bytes...).
                None seeds from system entropy and is not reproducible.
        """
        if seed is None:
            logger.warning("No seed configured - placements will not be reproducible")
        self.seed = seed
        self._random = random.Random(seed)
        self.draws = 0

    def __call__(self) -> float:
        self.draws += 1
        return self._random.random()

    def __repr__(self):
        return f"RandomStream(seed={self.seed!r}, draws={self.draws})"
