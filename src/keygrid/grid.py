import enum
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .tiles import FLOOR, PLAYER, WALL, bit

LEVEL_SIZE = 22
LEVEL_AREA = LEVEL_SIZE * LEVEL_SIZE
# Interior bounds (inclusive) inside the 1-tile border ring.
INTERIOR_MIN, INTERIOR_MAX = 1, LEVEL_SIZE - 2

XY = Tuple[int, int]


class Direction(enum.IntEnum):
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4

    @property
    def delta(self) -> XY:
        return _DELTAS[self]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    w: int
    h: int

    def cells(self, outline: bool = False):
        for ty in range(self.y, self.y + self.h):
            for tx in range(self.x, self.x + self.w):
                if outline and self.x < tx < self.x + self.w - 1 and self.y < ty < self.y + self.h - 1:
                    continue
                yield tx, ty


@dataclass
class Level:
    # Row-major, LEVEL_SIZE x LEVEL_SIZE tiles.
    buf: List[int] = field(default_factory=lambda: [0] * LEVEL_AREA)

    def __post_init__(self) -> None:
        if len(self.buf) != LEVEL_AREA:
            raise ValueError(f"level needs {LEVEL_AREA} tiles, got {len(self.buf)}")

    @classmethod
    def filled(cls, entity: int) -> "Level":
        level = cls()
        fill(level, entity)
        return level

    @classmethod
    def from_matrix(cls, rows: List[List[int]]) -> "Level":
        if len(rows) != LEVEL_SIZE or any(len(r) != LEVEL_SIZE for r in rows):
            raise ValueError(f"expected {LEVEL_SIZE} rows of {LEVEL_SIZE} columns")
        return cls(buf=[t for row in rows for t in row])

    def idx(self, x: int, y: int) -> int:
        if not in_bounds(x, y):
            raise ValueError(f"({x}, {y}) is outside the level")
        return y * LEVEL_SIZE + x

    def get(self, x: int, y: int) -> int:
        return self.buf[self.idx(x, y)]

    def set(self, x: int, y: int, v: int) -> None:
        self.buf[self.idx(x, y)] = v

    def add(self, x: int, y: int, entity: int) -> None:
        self.buf[self.idx(x, y)] |= bit(entity)

    def copy(self) -> "Level":
        return Level(buf=list(self.buf))

    def cells(self):
        """Yield (x, y, tile) in row-major order."""
        for i, t in enumerate(self.buf):
            yield i % LEVEL_SIZE, i // LEVEL_SIZE, t

    def as_matrix(self) -> List[List[int]]:
        return [self.buf[y * LEVEL_SIZE:(y + 1) * LEVEL_SIZE] for y in range(LEVEL_SIZE)]


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < LEVEL_SIZE and 0 <= y < LEVEL_SIZE


def is_interior(x: int, y: int) -> bool:
    return INTERIOR_MIN <= x <= INTERIOR_MAX and INTERIOR_MIN <= y <= INTERIOR_MAX


def clamp_interior(v: int) -> int:
    return max(INTERIOR_MIN, min(v, INTERIOR_MAX))


def fill(level: Level, entity: int) -> None:
    """Set every tile to exactly bit(entity), discarding all other bits."""
    value = bit(entity)
    for i in range(LEVEL_AREA):
        level.buf[i] = value


def stamp_rect(level: Level, entity: int, rect: Rect, outline: bool = False, replace: bool = False) -> None:
    """
    OR bit(entity) into the rect's area (or only its border when outline=True).
    With replace=True the tiles are set to exactly bit(entity) instead.
    Cells falling outside the level are ignored.
    """
    value = bit(entity)
    for x, y in rect.cells(outline):
        if not in_bounds(x, y):
            continue
        i = y * LEVEL_SIZE + x
        level.buf[i] = value if replace else level.buf[i] | value


def border_ring(level: Level) -> List[int]:
    return [t for x, y, t in level.cells() if not is_interior(x, y)]


def find_first(level: Level, pred: Callable[[int], bool]) -> Optional[XY]:
    for x, y, t in level.cells():
        if pred(t):
            return (x, y)
    return None


def find_player(level: Level) -> Optional[XY]:
    """First row-major tile with the player bit, or None."""
    player = bit(PLAYER)
    return find_first(level, lambda t: bool(t & player))


def count_tiles_with(level: Level, entity: int) -> int:
    b = bit(entity)
    return sum(1 for t in level.buf if t & b)


def is_pure_floor(tile: int) -> bool:
    return tile == bit(FLOOR)


def is_pure_wall(tile: int) -> bool:
    return tile == bit(WALL)
