import io

import pytest

from keygrid.grid import Level
from keygrid.levelio import (
    LEVEL_BYTES, LevelIOError, decode_level, dump_ascii, encode_level, load_level,
    read_level, save_level, write_level,
)
from keygrid.mapgen.additive import empty_bordered_level
from keygrid.mapgen.generator import generate_level
from keygrid.tiles import EXIT, FLOOR, KEY, LOCK, PLAYER, bit


def test_file_is_484_little_endian_u16():
    level = Level()
    level.buf[0] = 0x0203
    level.buf[-1] = 0xFFFF
    data = encode_level(level)
    assert LEVEL_BYTES == 968
    assert len(data) == 968
    assert data[:2] == b"\x03\x02"
    assert data[-2:] == b"\xff\xff"


def test_round_trip_generated_level(tmp_path):
    level = generate_level((3, 5), generator="digger+rooms", placer="scatter", refiners=())
    path = tmp_path / "a.lvl"
    save_level(path, level)
    assert path.stat().st_size == LEVEL_BYTES
    assert load_level(path) == level

    buf = io.BytesIO()
    write_level(buf, level)
    buf.seek(0)
    assert read_level(buf) == level


def test_short_read_fails_whole():
    data = encode_level(Level.filled(FLOOR))
    with pytest.raises(LevelIOError):
        read_level(io.BytesIO(data[:-1]))
    with pytest.raises(LevelIOError):
        decode_level(b"")


def test_oversized_tile_cannot_be_written():
    level = Level()
    level.buf[10] = 1 << 16
    with pytest.raises(LevelIOError):
        encode_level(level)


def test_ascii_dump():
    level = empty_bordered_level()
    level.add(1, 1, PLAYER)
    level.add(2, 1, KEY)
    level.add(3, 1, EXIT)
    level.add(3, 1, LOCK)
    level.set(4, 1, bit(EXIT) | bit(FLOOR))
    level.set(5, 1, 0)
    lines = dump_ascii(level).splitlines()
    assert len(lines) == 22
    assert lines[0] == "#" * 22
    assert lines[1] == "#PK%E " + "_" * 15 + "#"
    assert lines[2] == "#" + "_" * 20 + "#"
