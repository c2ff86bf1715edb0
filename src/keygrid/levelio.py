# src/keygrid/levelio.py
"""
.lvl files: LEVEL_SIZE*LEVEL_SIZE unsigned 16-bit tiles, little-endian,
row-major, with no header. Reads and writes move the whole level or fail.
"""

import os
import struct
from typing import BinaryIO, Union

from .grid import LEVEL_AREA, LEVEL_SIZE, Level
from .tiles import TILE_MASK, tile_char

_FORMAT = struct.Struct(f"<{LEVEL_AREA}H")
LEVEL_BYTES = _FORMAT.size

PathLike = Union[str, "os.PathLike[str]"]


class LevelIOError(IOError):
    pass


def encode_level(level: Level) -> bytes:
    if any(not 0 <= t <= TILE_MASK for t in level.buf):
        raise LevelIOError("tile value does not fit in 16 bits")
    return _FORMAT.pack(*level.buf)


def decode_level(data: bytes) -> Level:
    if len(data) != LEVEL_BYTES:
        raise LevelIOError(f"expected {LEVEL_BYTES} bytes, got {len(data)}")
    return Level(buf=list(_FORMAT.unpack(data)))


def read_level(stream: BinaryIO) -> Level:
    return decode_level(stream.read(LEVEL_BYTES))


def write_level(stream: BinaryIO, level: Level) -> None:
    data = encode_level(level)
    written = stream.write(data)
    if written is not None and written != len(data):
        raise LevelIOError(f"short write: {written} of {len(data)} bytes")


def load_level(path: PathLike) -> Level:
    with open(path, "rb") as f:
        return read_level(f)


def save_level(path: PathLike, level: Level) -> None:
    with open(path, "wb") as f:
        write_level(f, level)


def dump_ascii(level: Level) -> str:
    """One glyph per tile (highest entity bit wins), one line per row."""
    lines = []
    for y in range(LEVEL_SIZE):
        lines.append("".join(tile_char(level.get(x, y)) for x in range(LEVEL_SIZE)))
    return "\n".join(lines) + "\n"
