# src/keygrid/validate.py
# Completability and invariant checks built on the flood fill.

from typing import List

from .flood import EntityCounter, StopWhenSeen, flood
from .grid import Level, border_ring, count_tiles_with, find_player, is_pure_wall
from .tiles import (
    EXIT, FLOOR, KEY, LOCK, PLAYER, TERRAIN_ENTITIES, TRAVERSAL_MASK,
    TRAVERSAL_TARGET, WALL, bit,
)

KEY_AND_EXIT = bit(KEY) | bit(EXIT)


def is_completable(level: Level) -> bool:
    """
    True when the key and the exit are both reachable from the player over
    floor tiles that hold neither wall nor spikes. No player -> False.
    """
    start = find_player(level)
    if start is None:
        return False
    seen = StopWhenSeen(KEY_AND_EXIT)
    flood(level, start, TRAVERSAL_MASK, TRAVERSAL_TARGET, seen)
    return seen.found


def total_entity_count(level: Level) -> int:
    """Tiles carrying any non-terrain entity (gold, key, enemy, player, exit, lock)."""
    return sum(1 for t in level.buf if t & ~TERRAIN_ENTITIES)


def reachable_entity_count(level: Level) -> int:
    """Entity-carrying tiles reachable from the player; 0 without a player."""
    start = find_player(level)
    if start is None:
        return 0
    counter = EntityCounter()
    flood(level, start, TRAVERSAL_MASK, TRAVERSAL_TARGET, counter)
    return counter.count


def check_invariants(level: Level, bordered: bool = True) -> List[str]:
    """
    Return a list of human-readable problems with a generated level; empty
    when it is well formed.
    """
    problems = []
    for entity, name in ((PLAYER, "player"), (KEY, "key"), (EXIT, "exit"), (LOCK, "lock")):
        n = count_tiles_with(level, entity)
        if n != 1:
            problems.append(f"expected exactly one {name}, found {n}")

    lock_on_exit = any(t & bit(LOCK) and t & bit(EXIT) for t in level.buf)
    if count_tiles_with(level, LOCK) and not lock_on_exit:
        problems.append("lock is not on the exit")

    both = bit(FLOOR) | bit(WALL)
    overlap = sum(1 for t in level.buf if (t & both) == both)
    if overlap:
        problems.append(f"{overlap} tile(s) hold both floor and wall")

    if bordered and not all(is_pure_wall(t) for t in border_ring(level)):
        problems.append("border ring is not entirely wall")

    if not is_completable(level):
        problems.append("level is not completable")
    return problems
