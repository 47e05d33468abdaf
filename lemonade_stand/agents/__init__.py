# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Lemonade Stand Player Framework.

This module provides the player abstraction for everyone who runs a stand:
- Base agent class and the hot-seat game loop
- Callbacks for following a game day by day
- Computer players that can fill empty seats
"""

from .base import (
    StandAgent,
    GameResult,
    DayRecord,
    GameCallback,
    SimpleCallback,
    collect_decision,
    context_from_observation,
    run_game,
)
from .computer import AGENTS, CautiousAgent, GreedyAgent, create_agent

__all__ = [
    # Base classes
    "StandAgent",
    "GameResult",
    "DayRecord",
    "GameCallback",
    "SimpleCallback",
    "collect_decision",
    "context_from_observation",
    "run_game",
    # Computer players
    "AGENTS",
    "CautiousAgent",
    "GreedyAgent",
    "create_agent",
]
