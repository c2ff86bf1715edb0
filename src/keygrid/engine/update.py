# src/keygrid/engine/update.py
# One turn of the game: enemies wander, the player steps, collectables and the
# lock are carried over. No pygame.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..grid import LEVEL_AREA, LEVEL_SIZE, Direction, Level, in_bounds
from ..rng import Xoroshiro128Plus
from ..tiles import ENEMY, EXIT, GOLD, KEY, LOCK, PLAYER, SOLID_ENTITIES, SPIKES, STATIC_ENTITIES, bit


@dataclass
class GameStats:
    gold_collected: int = 0
    enemies_killed: int = 0
    steps_taken: int = 0

    def summary(self) -> str:
        return (
            f"Gold Collected: {self.gold_collected}\n"
            f"Enemies Killed: {self.enemies_killed}\n"
            f"Steps Taken: {self.steps_taken}"
        )


def _step(x: int, y: int, direction: Optional[Direction]):
    if direction is None:
        return x, y
    dx, dy = direction.delta
    return x + dx, y + dy


def _blocked(level: Level, x: int, y: int) -> bool:
    return not in_bounds(x, y) or bool(level.get(x, y) & SOLID_ENTITIES)


def update_level(
    level: Level,
    direction: Optional[Direction],
    rng: Xoroshiro128Plus,
    stats: GameStats,
) -> bool:
    """
    Advance the level one turn in place; direction None waits a turn.
    Returns True when the game is over (unlocked exit reached, or spikes).
    The whole update is applied even when the game ends part way.
    """
    game_over = False
    updated = [t & STATIC_ENTITIES for t in level.buf]

    def at(x: int, y: int) -> int:
        return y * LEVEL_SIZE + x

    for i in range(LEVEL_AREA):
        x, y = i % LEVEL_SIZE, i // LEVEL_SIZE
        tile = level.buf[i]

        if tile & bit(ENEMY):
            # 1..4 move, 5..6 stay put
            roll = rng.next_int_range(1, 6)
            nx, ny = _step(x, y, Direction(roll) if roll <= 4 else None)
            if _blocked(level, nx, ny):
                updated[i] |= bit(ENEMY)
            else:
                updated[at(nx, ny)] |= bit(ENEMY)

        if tile & bit(PLAYER):
            # an enemy that wandered onto the player dies
            if updated[i] & bit(ENEMY):
                updated[i] ^= bit(ENEMY)
                stats.enemies_killed += 1

            nx, ny = _step(x, y, direction)
            if _blocked(level, nx, ny):
                updated[i] |= bit(PLAYER)
                continue

            j = at(nx, ny)
            target = level.buf[j]
            updated[j] |= bit(PLAYER)
            if target & bit(GOLD):
                level.buf[j] ^= bit(GOLD)
                stats.gold_collected += 1
            if target & bit(KEY):
                level.buf[j] ^= bit(KEY)
            if target & bit(ENEMY):
                level.buf[j] ^= bit(ENEMY)
                stats.enemies_killed += 1
            if target & bit(EXIT) and not target & bit(LOCK):
                game_over = True
            if target & bit(SPIKES):
                game_over = True

    key_remaining = False
    for i, tile in enumerate(level.buf):
        if tile & bit(GOLD):
            updated[i] |= bit(GOLD)
        if tile & bit(KEY):
            key_remaining = True
            updated[i] |= bit(KEY)

    if key_remaining:
        for i, tile in enumerate(level.buf):
            if tile & bit(LOCK):
                updated[i] |= bit(LOCK)

    level.buf[:] = updated
    stats.steps_taken += 1
    return game_over
