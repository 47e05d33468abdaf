# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Lemonade Stand - the classic Lemonsville business simulation.

Every day each stand decides how many glasses of lemonade to make, how many
advertising signs to put up and what to charge. The weather and the price
decide how much sells. Stands that can no longer afford a single glass go
bankrupt; when every stand is bankrupt, the richest one wins.

Quick Start:
    # Play at the terminal
    lemonade-stand play --players 2

    # Or use the Python API
    from lemonade_stand import LemonadeStandEnvironment, StandAction, PlayerDecision

    env = LemonadeStandEnvironment(num_players=1, seed=42)
    obs = env.reset()
    obs = env.step(StandAction(decisions={0: PlayerDecision(glasses=50, signs=2, price=5)}))
"""

from .models import (
    DayContext,
    GameConfig,
    PlayerDecision,
    PlayerState,
    SettlementResult,
    Weather,
    WinnerResult,
)
from .settlement import is_game_over, resolve_winners, settle_day
from .weather import WeatherGenerator
from .server.lemonade_environment import LemonadeStandEnvironment, StandAction, StandObservation

__all__ = [
    # Core models
    "DayContext",
    "GameConfig",
    "PlayerDecision",
    "PlayerState",
    "SettlementResult",
    "Weather",
    "WinnerResult",
    # Engine
    "WeatherGenerator",
    "settle_day",
    "is_game_over",
    "resolve_winners",
    # Environment
    "LemonadeStandEnvironment",
    "StandAction",
    "StandObservation",
]
