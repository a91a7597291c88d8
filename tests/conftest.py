import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from core.search import SearchIndex
from core.stations import StationCatalog, parse_stations
from game.round_state import RoundStateMachine


STATION_RECORDS = [
    {"name": "Oxford Circus", "positions": [[0.478, 0.452]],
     "name_data": {"anchor": "NorthEast", "name_lines": ["Oxford", "Circus"]}},
    {"name": "Bond Street", "positions": [[0.437, 0.452]]},
    {"name": "Baker Street", "positions": [[0.408, 0.398]]},
    {"name": "Edgware Road (Bakerloo)", "positions": [[0.360, 0.405]]},
    {"name": "Edgware Road (Circle, District and H&C)", "positions": [[0.354, 0.421]]},
    {"name": "Elephant & Castle", "positions": [[0.620, 0.653]]},
    {"name": "King's Cross St. Pancras", "positions": [[0.565, 0.340], [0.574, 0.346]],
     "name_data": {"position_index": 1}},
    {"name": "Brixton", "positions": [[0.560, 0.820]]},
]

OXFORD, BOND, BAKER, EDGWARE_BAK, EDGWARE_CIR, ELEPHANT, KINGS_CROSS, BRIXTON = range(8)


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FixedRng(random.Random):
    """randrange always returns the configured station"""

    def __init__(self, target: int):
        super().__init__(0)
        self.target = target

    def randrange(self, *args, **kwargs):
        return self.target


@pytest.fixture(scope="session", autouse=True)
def _pygame():
    pygame.display.init()
    pygame.font.init()
    yield
    pygame.quit()


@pytest.fixture
def catalog():
    return StationCatalog(parse_stations(STATION_RECORDS))


@pytest.fixture
def index(catalog):
    return SearchIndex.build(catalog)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_game(catalog, index, clock):
    def _make(target: int = BRIXTON) -> RoundStateMachine:
        return RoundStateMachine(catalog, index, rng=FixedRng(target), clock=clock)
    return _make
