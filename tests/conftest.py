import random

import pytest

from flappy_ball.data_models import Obstacle, PlayerProfile, RunState
from flappy_ball.leveling import LevelingTable, RankTable
from flappy_ball.profile_db import ProfileStore
from flappy_ball.progression import ProgressionEngine
from flappy_ball.scoring import ScoringEvaluator


@pytest.fixture
def store():
    store = ProfileStore(":memory:")
    yield store
    store.close()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def leveling():
    return LevelingTable()


@pytest.fixture
def ranks():
    return RankTable()


@pytest.fixture
def engine(store, leveling, ranks):
    return ProgressionEngine(store, leveling, ranks)


@pytest.fixture
def evaluator(engine):
    return ScoringEvaluator(engine)


@pytest.fixture
def profile():
    return PlayerProfile()


@pytest.fixture
def run():
    return RunState()


def make_leader(x: float) -> Obstacle:
    return Obstacle(x=x, y=100.0, height=200.0, velocity_x=-150.0, is_leader=True)
