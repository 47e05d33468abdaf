# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Pytest fixtures for Lemonade Stand tests.
"""

import random
from decimal import Decimal

import pytest

from lemonade_stand.models import (
    WEATHER_MULTIPLIERS,
    DayContext,
    GameConfig,
    PlayerDecision,
    PlayerState,
    Weather,
)
from lemonade_stand.server.lemonade_environment import LemonadeStandEnvironment


class FixedRandom(random.Random):
    """Random source that returns a scripted sequence from random()."""

    def __init__(self, values):
        super().__init__(0)
        self._values = list(values)

    def random(self):
        return self._values.pop(0)


@pytest.fixture
def fixed_random():
    """Factory for scripted random sources."""
    return FixedRandom


@pytest.fixture
def default_config() -> GameConfig:
    """Default game configuration for tests."""
    return GameConfig()


@pytest.fixture
def stormy_config() -> GameConfig:
    """Every day is cloudy and every cloudy day turns into a thunderstorm."""
    return GameConfig(
        sunny_chance=0.0,
        cloudy_chance=1.0,
        hot_dry_chance=0.0,
        thunderstorm_chance=1.0,
    )


@pytest.fixture
def sunny_config() -> GameConfig:
    """Every day is sunny."""
    return GameConfig(sunny_chance=1.0, cloudy_chance=0.0, hot_dry_chance=0.0)


def make_context(weather: Weather = Weather.SUNNY, day: int = 1, lemonade_cost: int = 2) -> DayContext:
    return DayContext(
        day=day,
        lemonade_cost=lemonade_cost,
        sign_cost=15,
        weather=weather,
        weather_multiplier=WEATHER_MULTIPLIERS[weather],
        thunderstorm=weather == Weather.THUNDERSTORM,
    )


@pytest.fixture
def make_day():
    """Factory for day contexts: make_day(weather, day=1, lemonade_cost=2)."""
    return make_context


@pytest.fixture
def sunny_context() -> DayContext:
    """Day 1, sunny, two cents a glass."""
    return make_context(Weather.SUNNY)


@pytest.fixture
def cloudy_context() -> DayContext:
    return make_context(Weather.CLOUDY)


@pytest.fixture
def hot_context() -> DayContext:
    return make_context(Weather.HOT_DRY)


@pytest.fixture
def storm_context() -> DayContext:
    return make_context(Weather.THUNDERSTORM)


@pytest.fixture
def player() -> PlayerState:
    """A fresh stand with $2.00."""
    return PlayerState(player_id=0, assets=200)


@pytest.fixture
def example_decision() -> PlayerDecision:
    """50 glasses, 2 signs, 5 cents a glass."""
    return PlayerDecision(glasses=50, signs=2, price=5)


@pytest.fixture
def ruinous_decision() -> PlayerDecision:
    """Spend everything on lemonade nobody will buy."""
    return PlayerDecision(glasses=100, signs=0, price=100)


@pytest.fixture
def env() -> LemonadeStandEnvironment:
    """Single-player environment with a fixed seed."""
    return LemonadeStandEnvironment(seed=42)


@pytest.fixture
def two_player_env() -> LemonadeStandEnvironment:
    """Two-player environment with a fixed seed."""
    return LemonadeStandEnvironment(num_players=2, seed=42)
