from keygrid.flood import EntityCounter, StopWhenSeen, Visit, flood, reachable_cells, record_tiles
from keygrid.grid import Level
from keygrid.mapgen.additive import empty_bordered_level
from keygrid.tiles import (
    ENEMY, EXIT, FLOOR, GOLD, KEY, SPIKES, TRAVERSAL_MASK, TRAVERSAL_TARGET, WALL, bit,
)


def wall_column(level, x):
    for y in range(1, 21):
        level.set(x, y, bit(WALL))


def test_flood_visits_whole_open_interior_once():
    level = empty_bordered_level()
    seen = []

    def visit(lvl, x, y):
        seen.append((x, y))
        return Visit.CONTINUE

    steps = flood(level, (1, 1), TRAVERSAL_MASK, TRAVERSAL_TARGET, visit)
    assert steps == 400
    assert len(seen) == 400
    assert len(set(seen)) == 400


def test_flood_respects_walls():
    level = empty_bordered_level()
    wall_column(level, 10)
    cells = reachable_cells(level, (1, 1), TRAVERSAL_MASK, TRAVERSAL_TARGET)
    assert len(cells) == 9 * 20
    assert all(x < 10 for x, _ in cells)


def test_non_matching_start_visits_nothing():
    level = empty_bordered_level()
    calls = []
    steps = flood(level, (0, 0), TRAVERSAL_MASK, TRAVERSAL_TARGET,
                  lambda lvl, x, y: calls.append((x, y)))
    assert steps == 0
    assert calls == []


def test_visitor_can_stop_early():
    level = empty_bordered_level()
    calls = []

    def visit(lvl, x, y):
        calls.append((x, y))
        return Visit.STOP if len(calls) == 5 else Visit.CONTINUE

    steps = flood(level, (5, 5), TRAVERSAL_MASK, TRAVERSAL_TARGET, visit)
    assert len(calls) == 5
    assert steps == 4


def test_mask_ignores_unmasked_bits_and_blocks_spikes():
    level = empty_bordered_level()
    level.add(2, 1, GOLD)
    level.add(3, 1, ENEMY)
    wall_column(level, 5)
    level.add(4, 1, SPIKES)
    seen = record_tiles(level, (1, 1), TRAVERSAL_MASK, TRAVERSAL_TARGET)
    assert seen & bit(GOLD)
    assert seen & bit(ENEMY)
    assert not seen & bit(SPIKES)
    assert len(reachable_cells(level, (1, 1), TRAVERSAL_MASK, TRAVERSAL_TARGET)) == 4 * 20 - 1


def test_visitor_may_rewrite_visited_tile():
    level = empty_bordered_level()

    def mark(lvl, x, y):
        lvl.add(x, y, SPIKES)
        return Visit.CONTINUE

    # Floor-only mask: the spikes being written do not stop the flood.
    steps = flood(level, (1, 1), bit(FLOOR), bit(FLOOR), mark)
    assert steps == 400
    assert sum(1 for t in level.buf if t & bit(SPIKES)) == 400


def test_stop_when_seen_and_entity_counter():
    level = empty_bordered_level()
    level.add(20, 20, KEY)
    level.add(1, 20, EXIT)
    level.add(10, 10, GOLD)

    stopper = StopWhenSeen(bit(KEY) | bit(EXIT))
    steps = flood(level, (1, 1), TRAVERSAL_MASK, TRAVERSAL_TARGET, stopper)
    assert stopper.found
    assert steps < 400

    anyone = StopWhenSeen(bit(KEY) | bit(EXIT), any_of=True)
    flood(level, (1, 1), TRAVERSAL_MASK, TRAVERSAL_TARGET, anyone)
    assert anyone.found

    counter = EntityCounter()
    flood(level, (1, 1), TRAVERSAL_MASK, TRAVERSAL_TARGET, counter)
    assert counter.count == 3


def test_flood_on_blank_level_with_zero_target():
    level = Level()
    # Every zero tile matches a zero target under any mask.
    assert flood(level, (0, 0), bit(WALL), 0, lambda lvl, x, y: Visit.CONTINUE) == 484
