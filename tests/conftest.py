import random

import pytest

from slithersphere.game import GameState


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_game(rng):
    def _make(level=1, difficulty="medium"):
        return GameState(level=level, difficulty=difficulty, rng=rng)
    return _make


@pytest.fixture
def game(make_game):
    g = make_game(1)
    g.start(now=0.0)
    return g
