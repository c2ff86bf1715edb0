# src/keygrid/mapgen/refine.py
# Subtractive refiners: add walls to an existing level, rolling back any wall
# that breaks the acceptance test.

import logging
from typing import Callable

from ..config import DEFAULT_CONFIG, RefineConfig
from ..grid import INTERIOR_MAX, INTERIOR_MIN, LEVEL_AREA, Level, find_player
from ..rng import Xoroshiro128Plus
from ..tiles import PLAYER, WALL, bit
from ..validate import is_completable, reachable_entity_count, total_entity_count
from .sampling import random_interior_cell

logger = logging.getLogger(__name__)

Acceptance = Callable[[Level], bool]


def try_wall(level: Level, x: int, y: int, accept: Acceptance) -> bool:
    """
    Tentatively add a wall at (x, y), keeping the tile's other bits while the
    acceptance test runs. Accepted: the tile becomes pure wall. Rejected: the
    tile is restored.
    """
    before = level.get(x, y)
    level.set(x, y, before | bit(WALL))
    if accept(level):
        level.set(x, y, bit(WALL))
        return True
    level.set(x, y, before)
    return False


def _insert_walls(
    level: Level,
    rng: Xoroshiro128Plus,
    wall_count: int,
    attempts: int,
    accept: Acceptance,
) -> int:
    placed = 0
    for _ in range(wall_count):
        for _ in range(attempts):
            x, y = random_interior_cell(rng)
            if level.get(x, y) & bit(PLAYER):
                continue
            if try_wall(level, x, y, accept):
                placed += 1
                break
    return placed


def reverse_verified_scatter_generator(
    level: Level,
    rng: Xoroshiro128Plus,
    cfg: RefineConfig = DEFAULT_CONFIG.refine,
) -> int:
    """
    Scatter walls over a populated level, keeping only those after which the
    level is still completable. Returns the number of walls accepted.
    """
    if not is_completable(level):
        # Walls only remove reachability; nothing could be accepted.
        logger.warning("reverse verified scatter: level is not completable, skipping")
        return 0
    wall_count = int(cfg.scatter_wall_portion * LEVEL_AREA)
    placed = _insert_walls(level, rng, wall_count, cfg.attempts, is_completable)
    logger.debug("reverse verified scatter: %d/%d walls accepted", placed, wall_count)
    return placed


def _all_entities_reachable(level: Level) -> bool:
    return reachable_entity_count(level) == total_entity_count(level)


def reverse_entity_preserving_scatter_generator(
    level: Level,
    rng: Xoroshiro128Plus,
    cfg: RefineConfig = DEFAULT_CONFIG.refine,
) -> int:
    """
    Like the verified scatter, but a wall is kept only if every entity-bearing
    tile (gold, enemies, key, exit...) is still reachable from the player.
    """
    if find_player(level) is None:
        logger.warning("entity preserving scatter: no player in level, skipping")
        return 0
    if not _all_entities_reachable(level):
        logger.warning("entity preserving scatter: some entities already unreachable, skipping")
        return 0
    wall_count = int(cfg.preserving_wall_portion * LEVEL_AREA)
    placed = _insert_walls(level, rng, wall_count, cfg.attempts, _all_entities_reachable)
    logger.debug("entity preserving scatter: %d/%d walls accepted", placed, wall_count)
    return placed


def reverse_verified_fill_generator(level: Level) -> int:
    """
    Deterministic sweep: try to wall every interior cell in row-major order,
    keeping each wall that leaves the level completable.
    """
    if not is_completable(level):
        logger.warning("reverse verified fill: level is not completable, skipping")
        return 0
    placed = 0
    for y in range(INTERIOR_MIN, INTERIOR_MAX + 1):
        for x in range(INTERIOR_MIN, INTERIOR_MAX + 1):
            if try_wall(level, x, y, is_completable):
                placed += 1
    logger.debug("reverse verified fill: %d walls accepted", placed)
    return placed
