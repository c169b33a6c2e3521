"""Food and special-food placement."""

import logging
from typing import Iterable, Optional

from .constants import SPECIAL_FOOD_CHANCE, SPECIAL_FOOD_TTL
from .grid import Grid
from .models import Cell, SpecialFood

logger = logging.getLogger(__name__)


class Spawner:
    def __init__(self, grid: Grid):
        self.grid = grid

    def place_food(self, exclusions: Iterable[Cell]) -> Cell:
        return self.grid.random_free_cell(exclusions)

    def maybe_place_special_food(
        self,
        food: Optional[Cell],
        exclusions: Iterable[Cell],
        active: Optional[SpecialFood],
        now: float,
        chance: Optional[float] = None,
        ttl: Optional[float] = None,
    ) -> Optional[SpecialFood]:
        """Roll for a special food.

        An active special food is returned unchanged; a failed roll returns None.
        """
        chance = SPECIAL_FOOD_CHANCE if chance is None else chance
        ttl = SPECIAL_FOOD_TTL if ttl is None else ttl
        if active is not None:
            return active
        if self.grid.rng.random() >= chance:
            return None
        taken = [food] if food is not None else []
        cell = self.grid.random_free_cell(exclusions, taken)
        logger.debug("special food at %s expires in %.1fs", cell, ttl)
        return SpecialFood(cell=cell, expires_at=now + ttl)


def expire_special_food(special: Optional[SpecialFood], now: float) -> Optional[SpecialFood]:
    if special is not None and special.expired(now):
        logger.debug("special food at %s expired", special.cell)
        return None
    return special
