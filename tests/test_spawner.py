import random

from slithersphere.grid import Grid
from slithersphere.models import SpecialFood
from slithersphere.spawner import Spawner, expire_special_food


def make_spawner(seed=11):
    return Spawner(Grid(20, random.Random(seed)))


def test_place_food_respects_exclusions():
    spawner = make_spawner()
    blocked = {(x, y) for x in range(20) for y in range(20) if x < 18}
    for _ in range(30):
        x, _y = spawner.place_food(blocked)
        assert x >= 18


def test_special_food_spawns_apart_from_food():
    spawner = make_spawner()
    for _ in range(30):
        special = spawner.maybe_place_special_food((4, 4), {(5, 5)}, None, now=100.0, chance=1.0)
        assert special.cell not in {(4, 4), (5, 5)}
        assert special.expires_at == 105.0


def test_special_food_roll_can_fail():
    spawner = make_spawner()
    assert spawner.maybe_place_special_food((4, 4), set(), None, now=0.0, chance=0.0) is None


def test_only_one_special_food_at_a_time():
    spawner = make_spawner()
    active = SpecialFood(cell=(1, 1), expires_at=10.0)
    assert spawner.maybe_place_special_food((4, 4), set(), active, now=0.0, chance=1.0) is active


def test_expire_special_food():
    special = SpecialFood(cell=(1, 1), expires_at=5.0)
    assert expire_special_food(special, 5.0) is special
    assert expire_special_food(special, 5.01) is None
    assert expire_special_food(None, 5.0) is None
