import pytest

from burako.logic.engine import GameEngine
from burako.logic.settings import GameSettings
from burako.session.manager import TableSessionManager
from burako.tests.helpers import FIXED_SEED, make_table


@pytest.fixture
def settings():
    return GameSettings()


@pytest.fixture
def engine(settings):
    return GameEngine(settings, seed=FIXED_SEED)


@pytest.fixture
def table():
    return make_table(2)


@pytest.fixture
def four_table():
    return make_table(4)


@pytest.fixture
def manager(engine):
    return TableSessionManager(engine, max_tables=4)
