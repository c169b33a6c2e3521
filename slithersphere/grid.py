"""Grid geometry and free-cell sampling."""

import random
from typing import Iterable

from .constants import GRID_SIZE, SPAWN_ATTEMPT_FACTOR
from .errors import SpawnExhausted
from .models import Cell


class Grid:
    def __init__(self, size: int = GRID_SIZE, rng: random.Random = None):
        self.size = size
        self.rng = rng or random.Random()

    @property
    def area(self) -> int:
        return self.size * self.size

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def cells(self):
        for y in range(self.size):
            for x in range(self.size):
                yield (x, y)

    def random_cell(self) -> Cell:
        return (self.rng.randrange(self.size), self.rng.randrange(self.size))

    def random_free_cell(self, *exclusions: Iterable[Cell]) -> Cell:
        """Sample uniformly until a cell outside every exclusion set turns up.

        Raises SpawnExhausted after ``area * SPAWN_ATTEMPT_FACTOR`` misses.
        """
        blocked = set()
        for cells in exclusions:
            blocked.update(cells)

        attempts = 0
        while attempts < self.area * SPAWN_ATTEMPT_FACTOR:
            cell = self.random_cell()
            if cell not in blocked:
                return cell
            attempts += 1
        raise SpawnExhausted(
            f"no free cell after {attempts} attempts ({len(blocked)} cells blocked)"
        )
