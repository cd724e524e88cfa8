"""Shared fixtures for the antsvbees test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from antsvbees.colony.colony import Colony
from antsvbees.simulation.config import GameConfig
from antsvbees.simulation.engine import Game
from antsvbees.simulation.events import EventLog
from antsvbees.world.hive import Hive


class FixedRng:
    """Stand-in generator returning scripted values from ``random()``."""

    def __init__(self, *rolls: float) -> None:
        self.rolls = list(rolls)

    def random(self) -> float:
        return self.rolls.pop(0)

    def integers(self, high: int) -> int:
        return 0


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def events() -> EventLog:
    return EventLog()


@pytest.fixture
def small_colony(rng: Generator) -> Colony:
    """A single 3-place tunnel with 10 food."""
    return Colony(food=10, num_tunnels=1, tunnel_length=3, rng=rng)


@pytest.fixture
def long_colony(rng: Generator) -> Colony:
    """A single 8-place tunnel with plenty of food."""
    return Colony(food=100, num_tunnels=1, tunnel_length=8, rng=rng)


@pytest.fixture
def empty_hive() -> Hive:
    return Hive(bee_armor=3, bee_damage=1)


@pytest.fixture
def default_config() -> GameConfig:
    """Default game config (no YAML file needed), seeded."""
    return GameConfig(seed=42)


@pytest.fixture
def game(default_config: GameConfig) -> Game:
    return Game.from_config(default_config)


@pytest.fixture
def fixed_rng() -> type[FixedRng]:
    """Factory for scripted generators: ``fixed_rng(0.1, 0.7)``."""
    return FixedRng
