import random

import pytest

from slithersphere.errors import SpawnExhausted
from slithersphere.grid import Grid


def test_contains_bounds():
    grid = Grid(20)
    assert grid.contains((0, 0))
    assert grid.contains((19, 19))
    assert not grid.contains((-1, 5))
    assert not grid.contains((20, 0))
    assert not grid.contains((3, 20))


def test_random_free_cell_avoids_exclusions():
    grid = Grid(5, random.Random(7))
    free = (2, 3)
    taken = {c for c in grid.cells() if c != free}
    assert grid.random_free_cell(taken) == free


def test_random_free_cell_merges_exclusion_sets():
    grid = Grid(4, random.Random(3))
    snake = {(x, 0) for x in range(4)}
    walls = {(x, 1) for x in range(4)}
    for _ in range(50):
        x, y = grid.random_free_cell(snake, walls, [(0, 2)])
        assert y >= 2
        assert (x, y) != (0, 2)


def test_saturated_grid_raises():
    grid = Grid(3, random.Random(0))
    with pytest.raises(SpawnExhausted):
        grid.random_free_cell(set(grid.cells()))
