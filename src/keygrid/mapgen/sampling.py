# src/keygrid/mapgen/sampling.py
# Bounded rejection sampling of level cells.

import logging
from typing import Callable

from ..grid import INTERIOR_MAX, INTERIOR_MIN, XY, Level
from ..rng import Xoroshiro128Plus

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """A generator or placer ran out of attempts without finding a valid cell."""


def random_interior_cell(rng: Xoroshiro128Plus) -> XY:
    x = rng.next_int_range(INTERIOR_MIN, INTERIOR_MAX)
    y = rng.next_int_range(INTERIOR_MIN, INTERIOR_MAX)
    return x, y


def sample_cell(
    level: Level,
    rng: Xoroshiro128Plus,
    accept: Callable[[Level, int, int], bool],
    attempts: int,
    what: str,
) -> XY:
    """
    Draw random interior cells until accept(level, x, y) holds.
    Raises GenerationError after `attempts` rejected draws.
    """
    for _ in range(attempts):
        x, y = random_interior_cell(rng)
        if accept(level, x, y):
            return x, y
    logger.warning("no valid cell for %s after %d attempts", what, attempts)
    raise GenerationError(f"could not place {what} after {attempts} attempts")
