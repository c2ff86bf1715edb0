import pytest

from keygrid.grid import Level, border_ring, count_tiles_with, find_player, is_pure_wall
from keygrid.mapgen.additive import empty_bordered_level
from keygrid.mapgen.placement import scatter_hazards, scatter_placer, verified_scatter_placer
from keygrid.mapgen.sampling import GenerationError
from keygrid.rng import Xoroshiro128Plus
from keygrid.tiles import ENEMY, EXIT, FLOOR, GOLD, KEY, LOCK, PLAYER, SPIKES, WALL, bit
from keygrid.validate import check_invariants, is_completable


def test_hazards_never_land_on_walls():
    level = empty_bordered_level()
    level.set(5, 5, bit(WALL))
    scatter_hazards(level, Xoroshiro128Plus.from_seed(1, 1), 1.0, 1.0, 1.0)
    assert level.get(5, 5) == bit(WALL)
    assert all(is_pure_wall(t) for t in border_ring(level))
    # gold wins whenever it rolls
    assert count_tiles_with(level, GOLD) == 399
    assert count_tiles_with(level, ENEMY) == 0


def test_scatter_placer_places_unique_entities():
    level = empty_bordered_level()
    scatter_placer(level, Xoroshiro128Plus.from_seed(1, 1))
    for entity in (PLAYER, KEY, EXIT, LOCK):
        assert count_tiles_with(level, entity) == 1
    x, y = find_player(level)
    assert level.get(x, y) == bit(FLOOR) | bit(PLAYER)
    assert any(t == bit(FLOOR) | bit(EXIT) | bit(LOCK) for t in level.buf)
    assert all(is_pure_wall(t) for t in border_ring(level))


def test_scatter_placer_fails_without_floor():
    with pytest.raises(GenerationError):
        scatter_placer(Level.filled(WALL), Xoroshiro128Plus.from_seed(1, 1), max_attempts=100)


def test_params_override_hazard_chances():
    level = empty_bordered_level()
    verified_scatter_placer(level, Xoroshiro128Plus.from_seed(6, 1), params=(0.0, 0.0, 0.0))
    for entity in (GOLD, ENEMY, SPIKES):
        assert count_tiles_with(level, entity) == 0


def test_verified_placer_fails_when_no_plain_floor_left():
    level = empty_bordered_level()
    with pytest.raises(GenerationError):
        verified_scatter_placer(level, Xoroshiro128Plus.from_seed(1, 1),
                                params=(1.0, 0.0, 0.0), max_attempts=100)


def test_verified_placer_output_is_completable():
    done = 0
    for seed in range(1, 9):
        level = empty_bordered_level()
        try:
            verified_scatter_placer(level, Xoroshiro128Plus.from_seed(seed, 0))
        except GenerationError:
            continue
        assert check_invariants(level) == []
        assert is_completable(level)
        done += 1
    assert done > 0


def test_verified_placer_requires_exit_side_for_key():
    # Two sealed halves; whichever half the exit lands in, key and player follow.
    for seed in range(1, 6):
        level = empty_bordered_level()
        for y in range(1, 21):
            level.set(11, y, bit(WALL))
        try:
            verified_scatter_placer(level, Xoroshiro128Plus.from_seed(seed, seed), params=(0.0, 0.0, 0.0))
        except GenerationError:
            continue
        xs = {x for x, _, t in level.cells() if t & (bit(KEY) | bit(EXIT) | bit(PLAYER))}
        assert all(x < 11 for x in xs) or all(x > 11 for x in xs)
        assert is_completable(level)
