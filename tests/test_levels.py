import pytest

from slithersphere.constants import START_SEGMENTS
from slithersphere.errors import InvalidConfiguration
from slithersphere.levels import build_border_walls, initial_speed, layout_for, ring_cells
from slithersphere.models import Axis, TeleportZone


def test_classic_level_is_empty():
    layout = layout_for(1)
    assert layout.obstacles == set()
    assert layout.teleport_zones == []
    assert layout.moving_obstacle_seeds == []


def test_bottleneck_has_side_gaps_at_midline():
    walls = layout_for(2).obstacles
    for gap in [(2, 10), (3, 10), (16, 10), (17, 10)]:
        assert gap not in walls
    for wall in [(2, 9), (3, 11), (17, 2), (10, 2), (10, 3), (10, 17)]:
        assert wall in walls


def test_corner_blocks_and_moving_seeds():
    layout = layout_for(3)
    assert len(layout.obstacles) == 4 * 16
    assert (0, 0) in layout.obstacles
    assert (19, 19) in layout.obstacles
    assert (3, 16) in layout.obstacles
    assert (4, 4) not in layout.obstacles

    seeds = layout.moving_obstacle_seeds
    assert [s.axis for s in seeds] == [Axis.HORIZONTAL, Axis.VERTICAL, Axis.HORIZONTAL]
    assert [s.cell for s in seeds] == [(5, 5), (10, 5), (15, 15)]


def test_maze_level_border_lattice_and_teleports():
    layout = layout_for(4)
    assert build_border_walls() <= layout.obstacles
    assert layout.teleport_zones == [
        TeleportZone(source=(3, 3), target=(16, 16)),
        TeleportZone(source=(16, 16), target=(3, 3)),
    ]
    for zone in layout.teleport_zones:
        assert zone.source not in layout.obstacles
    assert (5, 1) in layout.obstacles
    assert (5, 3) not in layout.obstacles
    assert (1, 4) in layout.obstacles
    assert (3, 4) not in layout.obstacles
    assert (10, 4) not in layout.obstacles


@pytest.mark.parametrize("level", [1, 2, 3, 4])
def test_start_position_is_clear(level):
    layout = layout_for(level)
    blocked = layout.obstacles | {s.cell for s in layout.moving_obstacle_seeds}
    assert not blocked & set(START_SEGMENTS)


@pytest.mark.parametrize("level", [1, 2, 3, 4])
def test_layout_is_deterministic(level):
    a, b = layout_for(level), layout_for(level)
    assert a.obstacles == b.obstacles
    assert a.teleport_zones == b.teleport_zones
    assert a.moving_obstacle_seeds == b.moving_obstacle_seeds
    assert a.moving_obstacle_seeds is not b.moving_obstacle_seeds


def test_unknown_level():
    with pytest.raises(InvalidConfiguration):
        layout_for(5)


@pytest.mark.parametrize("level, difficulty, expected", [
    (1, "medium", 150),
    (1, "easy", 200),
    (1, "hard", 120),
    (2, "medium", 130),
    (3, "easy", 170),
    (4, "hard", 80),
])
def test_initial_speed(level, difficulty, expected):
    assert initial_speed(level, difficulty) == expected


def test_initial_speed_rejects_unknown_difficulty():
    with pytest.raises(InvalidConfiguration):
        initial_speed(1, "insane")


def test_rings():
    assert ring_cells(0) == build_border_walls()
    assert len(ring_cells(1)) == 68
    assert len(ring_cells(5)) == 36
    assert ring_cells(10) == set()
