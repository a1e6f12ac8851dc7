import random

import pytest

from game_engine import Game2048


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(2048)


@pytest.fixture()
def engine(rng: random.Random) -> Game2048:
    return Game2048(rng=rng)


@pytest.fixture()
def client():
    import app as app_module

    app_module.app.config["TESTING"] = True
    app_module.GAMES.clear()
    with app_module.app.test_client() as c:
        yield c
    app_module.GAMES.clear()
