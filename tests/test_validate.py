from keygrid.mapgen.additive import empty_bordered_level
from keygrid.tiles import EXIT, GOLD, KEY, LOCK, PLAYER, SPIKES, WALL, bit
from keygrid.validate import (
    check_invariants, is_completable, reachable_entity_count, total_entity_count,
)


def make_level(player=(1, 1), key=(5, 5), exit_=(10, 10)):
    level = empty_bordered_level()
    if player:
        level.add(*player, PLAYER)
    if key:
        level.add(*key, KEY)
    if exit_:
        level.add(*exit_, EXIT)
        level.add(*exit_, LOCK)
    return level


def test_simple_level_is_completable():
    level = make_level()
    assert is_completable(level)
    assert check_invariants(level) == []


def test_missing_key_is_not_completable():
    assert not is_completable(make_level(key=None))


def test_missing_player_fails_closed():
    level = make_level(player=None)
    assert not is_completable(level)
    assert reachable_entity_count(level) == 0


def test_spikes_block_reachability():
    level = make_level(key=(1, 1), player=(10, 10), exit_=(15, 15))
    level.add(2, 1, SPIKES)
    level.add(1, 2, SPIKES)
    assert not is_completable(level)


def test_wall_cuts_off_exit():
    level = make_level(exit_=(15, 15))
    for y in range(1, 21):
        level.set(12, y, bit(WALL))
    assert not is_completable(level)
    assert "level is not completable" in check_invariants(level)


def test_entity_counts():
    level = make_level()
    level.add(3, 3, GOLD)
    level.add(18, 18, GOLD)
    assert total_entity_count(level) == 5
    assert reachable_entity_count(level) == 5
    for y in range(1, 21):
        level.set(16, y, bit(WALL))
    assert reachable_entity_count(level) == 4


def test_invariant_problems_are_reported():
    level = make_level()
    level.add(3, 3, PLAYER)
    level.add(4, 4, WALL)
    level.set(0, 5, 0)
    problems = check_invariants(level)
    assert "expected exactly one player, found 2" in problems
    assert "1 tile(s) hold both floor and wall" in problems
    assert "border ring is not entirely wall" in problems
    assert check_invariants(level, bordered=False) != problems
