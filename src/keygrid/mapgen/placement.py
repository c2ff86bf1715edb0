# src/keygrid/mapgen/placement.py
import logging
from typing import Optional, Sequence

from ..config import DEFAULT_CONFIG, PlacerConfig
from ..flood import StopWhenSeen, flood
from ..grid import INTERIOR_MAX, INTERIOR_MIN, XY, Level, is_pure_floor
from ..rng import Xoroshiro128Plus
from ..tiles import (
    ENEMY, EXIT, FLOOR, GOLD, KEY, LOCK, PLAYER, SPIKES, TRAVERSAL_MASK,
    TRAVERSAL_TARGET, WALL, bit,
)
from .sampling import sample_cell

logger = logging.getLogger(__name__)


def _chances(cfg: PlacerConfig, params: Optional[Sequence[float]]):
    if params:
        return params[0], params[1], params[2]
    return cfg.gold_chance, cfg.enemy_chance, cfg.spikes_chance


def scatter_hazards(
    level: Level,
    rng: Xoroshiro128Plus,
    gold_chance: float,
    enemy_chance: float,
    spikes_chance: float,
) -> None:
    """
    Roll gold, then enemy, then spikes on every interior tile without a wall.
    At most one of the three lands on a tile; existing bits are kept.
    """
    for y in range(INTERIOR_MIN, INTERIOR_MAX + 1):
        for x in range(INTERIOR_MIN, INTERIOR_MAX + 1):
            t = level.get(x, y)
            if t & bit(WALL):
                continue
            if rng.chance(gold_chance):
                t |= bit(GOLD)
            elif rng.chance(enemy_chance):
                t |= bit(ENEMY)
            elif rng.chance(spikes_chance):
                t |= bit(SPIKES)
            level.set(x, y, t)


def _on_pure_floor(level: Level, x: int, y: int) -> bool:
    return is_pure_floor(level.get(x, y))


def scatter_placer(
    level: Level,
    rng: Xoroshiro128Plus,
    params: Optional[Sequence[float]] = None,
    cfg: PlacerConfig = DEFAULT_CONFIG.placer,
    max_attempts: int = DEFAULT_CONFIG.max_placement_attempts,
) -> None:
    """
    Hazards, then exit+lock, key and player each on a random plain floor tile.
    Nothing checks that the result can be completed.
    Raises GenerationError when no plain floor tile turns up.
    """
    scatter_hazards(level, rng, *_chances(cfg, params))

    x, y = sample_cell(level, rng, _on_pure_floor, max_attempts, "exit")
    level.set(x, y, bit(FLOOR) | bit(EXIT) | bit(LOCK))

    x, y = sample_cell(level, rng, _on_pure_floor, max_attempts, "key")
    level.set(x, y, bit(FLOOR) | bit(KEY))

    x, y = sample_cell(level, rng, _on_pure_floor, max_attempts, "player")
    level.set(x, y, bit(FLOOR) | bit(PLAYER))


def _reaches(wanted_any: int):
    """Acceptance test: plain floor from which a flood sees any of wanted_any."""
    def accept(level: Level, x: int, y: int) -> bool:
        if not is_pure_floor(level.get(x, y)):
            return False
        seen = StopWhenSeen(wanted_any, any_of=True)
        flood(level, (x, y), TRAVERSAL_MASK, TRAVERSAL_TARGET, seen)
        return seen.found
    return accept


def verified_scatter_placer(
    level: Level,
    rng: Xoroshiro128Plus,
    params: Optional[Sequence[float]] = None,
    cfg: PlacerConfig = DEFAULT_CONFIG.placer,
    max_attempts: int = DEFAULT_CONFIG.max_placement_attempts,
) -> XY:
    """
    Hazards, then exit+lock on plain floor; the key goes on plain floor that
    floods to the exit; the player on plain floor that floods to the key or
    exit. Returns the player position.
    Raises GenerationError when a placement runs out of attempts.
    """
    scatter_hazards(level, rng, *_chances(cfg, params))

    x, y = sample_cell(level, rng, _on_pure_floor, max_attempts, "exit")
    level.add(x, y, EXIT)
    level.add(x, y, LOCK)

    x, y = sample_cell(level, rng, _reaches(bit(EXIT)), max_attempts, "key")
    level.add(x, y, KEY)

    x, y = sample_cell(level, rng, _reaches(bit(EXIT) | bit(KEY)), max_attempts, "player")
    level.add(x, y, PLAYER)
    logger.debug("verified placer: player at (%d, %d)", x, y)
    return x, y
