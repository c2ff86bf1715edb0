# src/keygrid/mapgen/generator.py
# Level pipeline: one additive generator, any refiners, one placer.

import logging
from typing import Callable, Dict, Sequence, Tuple

from ..config import DEFAULT_CONFIG, GenerationConfig
from ..grid import Level
from ..rng import Xoroshiro128Plus
from ..tiles import WALL
from ..validate import is_completable
from .additive import basic_room_generator, digger_generator, empty_bordered_level, scatter_generator
from .placement import scatter_placer, verified_scatter_placer
from .refine import (
    reverse_entity_preserving_scatter_generator,
    reverse_verified_fill_generator,
    reverse_verified_scatter_generator,
)

logger = logging.getLogger(__name__)

DEFAULT_SEED = (1, 1)


def _empty(rng: Xoroshiro128Plus, cfg: GenerationConfig) -> Level:
    return empty_bordered_level()


def _scatter(rng: Xoroshiro128Plus, cfg: GenerationConfig) -> Level:
    level = Level()
    scatter_generator(level, rng, cfg.scatter)
    return level


def _digger(rng: Xoroshiro128Plus, cfg: GenerationConfig) -> Level:
    level = Level.filled(WALL)
    digger_generator(level, rng, cfg=cfg.digger, max_attempts=cfg.max_placement_attempts)
    return level


def _digger_rooms(rng: Xoroshiro128Plus, cfg: GenerationConfig) -> Level:
    level = _digger(rng, cfg)
    basic_room_generator(level, rng, cfg.rooms, cfg.max_placement_attempts)
    return level


def _empty_rooms(rng: Xoroshiro128Plus, cfg: GenerationConfig) -> Level:
    level = empty_bordered_level()
    basic_room_generator(level, rng, cfg.rooms, cfg.max_placement_attempts)
    return level


GENERATORS: Dict[str, Callable[[Xoroshiro128Plus, GenerationConfig], Level]] = {
    "empty": _empty,
    "empty+rooms": _empty_rooms,
    "scatter": _scatter,
    "digger": _digger,
    "digger+rooms": _digger_rooms,
}

REFINERS: Dict[str, Callable[[Level, Xoroshiro128Plus, GenerationConfig], int]] = {
    "verified_scatter": lambda level, rng, cfg: reverse_verified_scatter_generator(level, rng, cfg.refine),
    "entity_preserving_scatter": lambda level, rng, cfg: reverse_entity_preserving_scatter_generator(level, rng, cfg.refine),
    "verified_fill": lambda level, rng, cfg: reverse_verified_fill_generator(level),
}

PLACERS: Dict[str, Callable[[Level, Xoroshiro128Plus, GenerationConfig], object]] = {
    "scatter": lambda level, rng, cfg: scatter_placer(level, rng, cfg=cfg.placer, max_attempts=cfg.max_placement_attempts),
    "verified": lambda level, rng, cfg: verified_scatter_placer(level, rng, cfg=cfg.placer, max_attempts=cfg.max_placement_attempts),
}


def generate_level(
    seed: Tuple[int, int] = DEFAULT_SEED,
    *,
    generator: str = "empty",
    placer: str = "scatter",
    refiners: Sequence[str] = ("verified_scatter",),
    config: GenerationConfig = DEFAULT_CONFIG,
) -> Level:
    """
    Build a level from a (a, b) seed. Entities are placed before the refiners
    run, since every refiner judges a wall by what it cuts off from the player.
    Raises KeyError for unknown stage names and GenerationError when a
    placement runs out of attempts.
    """
    build = GENERATORS[generator]
    place = PLACERS[placer]
    refine = [REFINERS[name] for name in refiners]

    rng = Xoroshiro128Plus.from_seed(*seed)
    level = build(rng, config)
    place(level, rng, config)
    for name, step in zip(refiners, refine):
        placed = step(level, rng, config)
        logger.debug("%s: %d walls", name, placed)

    logger.info(
        "generated level seed=%s generator=%s placer=%s refiners=%s completable=%s",
        seed, generator, placer, ",".join(refiners) or "-", is_completable(level),
    )
    return level
