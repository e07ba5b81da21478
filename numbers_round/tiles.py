"""Tile pools and round setup generation.

A round draws ``large_count`` tiles from the large pool and fills the rest of
the six slots from the small pool, which models two decks of 1-10. Both pools
are drawn without replacement, so a large value appears at most once and a
small value at most twice.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, Tuple

from .game_models import RoundSetup, Tile

logger = logging.getLogger(__name__)

LARGE_POOL: Tuple[int, ...] = (25, 50, 75, 100)
SMALL_POOL: Tuple[int, ...] = tuple(v for v in range(1, 11) for _ in range(2))

TILES_PER_ROUND = 6
TARGET_MIN = 100
TARGET_MAX = 999


class TilePoolGenerator:
    """Deals the six tiles and the target for a round.

    The random source is injected so a seeded ``random.Random`` gives a
    reproducible deal.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    @classmethod
    def from_seed(cls, seed) -> "TilePoolGenerator":
        return cls(random.Random(seed))

    def generate(self, large_count: int) -> RoundSetup:
        if isinstance(large_count, bool) or not isinstance(large_count, int):
            raise ValueError(f"large_count must be an int, got {large_count!r}")
        if not 0 <= large_count <= len(LARGE_POOL):
            raise ValueError(f"large_count must be between 0 and {len(LARGE_POOL)}, got {large_count}")

        values = self._draw(LARGE_POOL, large_count)
        values += self._draw(SMALL_POOL, TILES_PER_ROUND - large_count)
        target = TARGET_MIN + self.rng.randint(0, TARGET_MAX - TARGET_MIN)

        tiles = tuple(Tile(index=i, value=v) for i, v in enumerate(values))
        logger.debug("Dealt tiles %s with target %d", [t.value for t in tiles], target)
        return RoundSetup(target=target, tiles=tiles)

    def _draw(self, pool: Sequence[int], count: int) -> List[int]:
        shuffled = list(pool)
        self.rng.shuffle(shuffled)
        return shuffled[:count]


__all__ = [
    "LARGE_POOL",
    "SMALL_POOL",
    "TILES_PER_ROUND",
    "TARGET_MIN",
    "TARGET_MAX",
    "TilePoolGenerator",
]
