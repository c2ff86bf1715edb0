# src/keygrid/flood.py
# Masked four-way flood fill over a Level.
#
# A tile matches when (tile & mask) == (target & mask); bits outside the mask
# are ignored. Every matching tile connected to the start is handed to the
# visitor exactly once. The visitor receives the level and the coordinates, so
# it may rewrite the visited tile, and may return Visit.STOP to end the flood.

from __future__ import annotations

import enum
from collections import deque
from typing import Callable, Deque, List, Optional

from .grid import LEVEL_AREA, LEVEL_SIZE, XY, Level
from .tiles import TERRAIN_ENTITIES


class Visit(enum.Enum):
    CONTINUE = 0
    STOP = 1


Visitor = Callable[[Level, int, int], Optional[Visit]]

_NEIGHBOURS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def matches(tile: int, mask: int, target: int) -> bool:
    return (tile & mask) == (target & mask)


def flood(level: Level, start: XY, mask: int, target: int, visit: Visitor) -> int:
    """
    Breadth-first flood from start. Returns the number of tiles visited; when
    the visitor stops the flood the stopping tile is not counted.
    A non-matching start visits nothing.
    """
    sx, sy = start
    level.idx(sx, sy)  # bounds check

    queued = [False] * LEVEL_AREA
    queue: Deque[int] = deque()
    queue.append(sx + sy * LEVEL_SIZE)
    queued[sx + sy * LEVEL_SIZE] = True
    steps = 0

    while queue:
        i = queue.popleft()
        if not matches(level.buf[i], mask, target):
            continue  # dead end
        x, y = i % LEVEL_SIZE, i // LEVEL_SIZE
        if visit(level, x, y) is Visit.STOP:
            return steps
        steps += 1
        for dx, dy in _NEIGHBOURS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < LEVEL_SIZE and 0 <= ny < LEVEL_SIZE:
                j = nx + ny * LEVEL_SIZE
                if not queued[j]:
                    queued[j] = True
                    queue.append(j)
    return steps


# ---------- stock visitors ----------

class TileRecorder:
    """OR of every visited tile's full bitmask."""

    def __init__(self) -> None:
        self.seen = 0

    def __call__(self, level: Level, x: int, y: int) -> Visit:
        self.seen |= level.get(x, y)
        return Visit.CONTINUE


class StopWhenSeen(TileRecorder):
    """Record tiles, stopping once every bit in `wanted` (any one, with any_of) has been seen."""

    def __init__(self, wanted: int, any_of: bool = False) -> None:
        super().__init__()
        self.wanted = wanted
        self.any_of = any_of

    def __call__(self, level: Level, x: int, y: int) -> Visit:
        super().__call__(level, x, y)
        return Visit.STOP if self.found else Visit.CONTINUE

    @property
    def found(self) -> bool:
        if self.any_of:
            return bool(self.seen & self.wanted)
        return (self.seen & self.wanted) == self.wanted


class EntityCounter:
    """Count visited tiles carrying anything besides floor/wall/spikes."""

    def __init__(self) -> None:
        self.count = 0

    def __call__(self, level: Level, x: int, y: int) -> Visit:
        if level.get(x, y) & ~TERRAIN_ENTITIES:
            self.count += 1
        return Visit.CONTINUE


def record_tiles(level: Level, start: XY, mask: int, target: int) -> int:
    rec = TileRecorder()
    flood(level, start, mask, target, rec)
    return rec.seen


def reachable_cells(level: Level, start: XY, mask: int, target: int) -> List[XY]:
    out: List[XY] = []

    def collect(_level: Level, x: int, y: int) -> Visit:
        out.append((x, y))
        return Visit.CONTINUE

    flood(level, start, mask, target, collect)
    return out
