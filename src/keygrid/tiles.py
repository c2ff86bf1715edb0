# Entity bit indices. A tile is a 16-bit mask of bit(entity) flags; bit 0 is unused.

from typing import List

FLOOR = 1
WALL = 2
SPIKES = 3
EXIT = 4
LOCK = 5
GOLD = 6
KEY = 7
ENEMY = 8
PLAYER = 9
ENTITY_TYPE_COUNT = 9

TILE_MASK = 0xFFFF

# Debug dump glyphs, indexed by the highest entity bit on a tile.
ENTITY_CHARS = " _#^E%*KEP"


def bit(entity: int) -> int:
    if not 0 <= entity <= ENTITY_TYPE_COUNT:
        raise ValueError(f"unknown entity index {entity}")
    return 1 << entity


# Unaffected by turn updates.
STATIC_ENTITIES = bit(FLOOR) | bit(WALL) | bit(SPIKES) | bit(EXIT)
# Cannot be walked on.
SOLID_ENTITIES = bit(WALL)
TERRAIN_ENTITIES = bit(FLOOR) | bit(WALL) | bit(SPIKES)

# Flood mask/target for "safe" reachability: plain floor, no wall, no spikes.
TRAVERSAL_MASK = TERRAIN_ENTITIES
TRAVERSAL_TARGET = bit(FLOOR)


def is_solid(tile: int) -> bool:
    return bool(tile & SOLID_ENTITIES)


def entity_bits(tile: int) -> List[int]:
    """Entity indices set on a tile, ascending (the draw order)."""
    return [e for e in range(1, ENTITY_TYPE_COUNT + 1) if tile & (1 << e)]


def top_entity(tile: int) -> int:
    bits = entity_bits(tile)
    return bits[-1] if bits else 0


def tile_char(tile: int) -> str:
    return ENTITY_CHARS[top_entity(tile)]
