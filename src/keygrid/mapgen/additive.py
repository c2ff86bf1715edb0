# src/keygrid/mapgen/additive.py
# Generators that build walkable topology from scratch.

import logging
from typing import Optional, Sequence

from ..config import DEFAULT_CONFIG, DiggerConfig, RoomConfig, ScatterConfig
from ..grid import (
    LEVEL_AREA, LEVEL_SIZE, Direction, Level, Rect, clamp_interior, fill,
    is_pure_floor, stamp_rect,
)
from ..rng import Xoroshiro128Plus
from ..tiles import FLOOR, WALL, bit
from .sampling import random_interior_cell, sample_cell

logger = logging.getLogger(__name__)


def _on_pure_floor(level: Level, x: int, y: int) -> bool:
    return is_pure_floor(level.get(x, y))


def empty_bordered_level() -> Level:
    """All floor, with the outer ring overwritten by wall."""
    level = Level.filled(FLOOR)
    stamp_rect(level, WALL, Rect(0, 0, LEVEL_SIZE, LEVEL_SIZE), outline=True, replace=True)
    return level


def scatter_generator(
    level: Level,
    rng: Xoroshiro128Plus,
    cfg: ScatterConfig = DEFAULT_CONFIG.scatter,
) -> None:
    """
    Noise: all wall, then floor dropped on random interior cells.
    Nothing guarantees the floor is connected.
    """
    floor_count = int(cfg.portion_of_level_to_be_floor * LEVEL_AREA)
    fill(level, WALL)
    for _ in range(floor_count):
        x, y = random_interior_cell(rng)
        level.set(x, y, bit(FLOOR))


def digger_generator(
    level: Level,
    rng: Xoroshiro128Plus,
    params: Optional[Sequence[float]] = None,
    cfg: DiggerConfig = DEFAULT_CONFIG.digger,
    max_attempts: int = DEFAULT_CONFIG.max_placement_attempts,
) -> None:
    """
    Random-walk diggers. Every walk after the first starts on floor dug by an
    earlier walk, so all dug floor is connected. The level is not cleared
    first; start from an all-wall level for a cave.
    """
    turn_chance_step = cfg.turn_chance_step
    ideal_walkable_portion = cfg.ideal_walkable_portion
    if params:
        turn_chance_step *= 2 * params[1]
        ideal_walkable_portion *= 2 * params[2]
    ideal_walkable = int(ideal_walkable_portion * LEVEL_AREA)

    for i in range(cfg.iterations):
        turn_chance = turn_chance_step
        if i == 0:
            x, y = random_interior_cell(rng)
        else:
            x, y = sample_cell(level, rng, _on_pure_floor, max_attempts, "digger start")
        direction = Direction(rng.next_int_range(1, 4))

        for _ in range(ideal_walkable):
            level.set(x, y, bit(FLOOR))
            dx, dy = direction.delta
            x = clamp_interior(x + dx)
            y = clamp_interior(y + dy)
            if rng.chance(turn_chance):
                direction = Direction(rng.next_int_range(1, 4))
                turn_chance = turn_chance_step
            else:
                turn_chance += turn_chance_step
    logger.debug("digger: %d walks of %d steps", cfg.iterations, ideal_walkable)


def basic_room_generator(
    level: Level,
    rng: Xoroshiro128Plus,
    cfg: RoomConfig = DEFAULT_CONFIG.rooms,
    max_attempts: int = DEFAULT_CONFIG.max_placement_attempts,
) -> None:
    """
    Stamps solid floor rectangles centred on existing floor, clamped to the
    interior. Rooms may overlap; needs some floor to start from.
    """
    for _ in range(cfg.count):
        cx, cy = sample_cell(level, rng, _on_pure_floor, max_attempts, "room centre")
        w = rng.next_int_range(cfg.min_width, cfg.max_width)
        h = rng.next_int_range(cfg.min_height, cfg.max_height)
        x0 = clamp_interior(cx - w // 2)
        y0 = clamp_interior(cy - h // 2)
        x1 = clamp_interior(cx - w // 2 + w - 1)
        y1 = clamp_interior(cy - h // 2 + h - 1)
        stamp_rect(level, FLOOR, Rect(x0, y0, x1 - x0 + 1, y1 - y0 + 1), replace=True)

