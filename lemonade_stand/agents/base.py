# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Base agent classes for Lemonade Stand.

Provides the abstract base class every player (human or computer) implements,
the hot-seat game loop, and the data structures and callbacks used to follow
a game as it is played.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Optional, Protocol, Sequence

from ..intake import validate_decision
from ..models import DayContext, GameConfig, PlayerDecision, Weather
from ..server.lemonade_environment import (
    LemonadeStandEnvironment,
    StandAction,
    StandObservation,
)
from ..settlement import resolve_winners


@dataclass(kw_only=True)
class DayRecord:
    """Everything that happened on one settled day."""
    day: int
    weather: str  # weather after the storm check
    thunderstorm: bool
    lemonade_cost: int
    decisions: dict[int, PlayerDecision]
    reasoning: dict[int, str] = field(default_factory=dict)
    results: list[dict[str, Any]] = field(default_factory=list)
    bankrupt: list[int] = field(default_factory=list)  # stands already out before today
    announcement: Optional[str] = None


@dataclass(kw_only=True)
class GameResult:
    """Complete result of one game."""
    days_played: int
    final_assets: list[int]
    winners: list[int]
    winner_message: str
    completed: bool  # False if stopped by a day limit before everyone went bankrupt
    days: list[DayRecord] = field(default_factory=list)
    seed: Optional[int] = None
    agent_names: list[str] = field(default_factory=list)

    # Error tracking
    error_count: int = 0  # Total number of rejected decisions
    fallback_count: int = 0  # Decisions replaced by the do-nothing plan


class GameCallback(Protocol):
    """Protocol for callbacks that follow a game."""

    def on_game_start(self, observation: StandObservation) -> None:
        """Called once the game has been reset."""
        ...

    def on_day_start(self, observation: StandObservation) -> None:
        """Called when a day's weather is revealed, before any decisions."""
        ...

    def on_day_end(self, record: DayRecord, observation: StandObservation) -> None:
        """Called after a day has been settled."""
        ...

    def on_game_end(self, result: GameResult) -> None:
        """Called when the game is over."""
        ...


class SimpleCallback:
    """Simple callback implementation that can be subclassed or used with lambdas."""

    def __init__(
        self,
        on_game_start: Callable[[StandObservation], None] | None = None,
        on_day_start: Callable[[StandObservation], None] | None = None,
        on_day_end: Callable[[DayRecord, StandObservation], None] | None = None,
        on_game_end: Callable[[GameResult], None] | None = None,
    ):
        self._on_game_start = on_game_start
        self._on_day_start = on_day_start
        self._on_day_end = on_day_end
        self._on_game_end = on_game_end

    def on_game_start(self, observation: StandObservation) -> None:
        if self._on_game_start:
            self._on_game_start(observation)

    def on_day_start(self, observation: StandObservation) -> None:
        if self._on_day_start:
            self._on_day_start(observation)

    def on_day_end(self, record: DayRecord, observation: StandObservation) -> None:
        if self._on_day_end:
            self._on_day_end(record, observation)

    def on_game_end(self, result: GameResult) -> None:
        if self._on_game_end:
            self._on_game_end(result)


def context_from_observation(observation: StandObservation) -> DayContext:
    """Rebuild the (pre-storm) day context an observation describes."""
    return DayContext(
        day=observation.day,
        lemonade_cost=observation.lemonade_cost,
        sign_cost=observation.sign_cost,
        weather=Weather(observation.weather),
        weather_multiplier=Decimal(str(observation.weather_multiplier)),
        announcement=observation.announcement,
    )


class StandAgent(ABC):
    """
    Abstract base class for Lemonade Stand players.

    All agents must implement the `decide` method which takes an observation
    and the stand to play, and returns a decision with reasoning.
    """

    # Maximum rejected decisions per day before the do-nothing plan is used
    MAX_RETRIES_PER_DAY = 3

    name = "agent"

    @abstractmethod
    def decide(
        self,
        observation: StandObservation,
        player_id: int,
        errors: Sequence[str] = (),
    ) -> tuple[PlayerDecision, str]:
        """
        Decide what the stand does today.

        Args:
            observation: Current game state
            player_id: The stand to decide for
            errors: Why the previous attempt today was rejected (if any)

        Returns:
            Tuple of (decision, reasoning)
        """
        pass

    def reset(self) -> None:
        """
        Reset agent state for a new game.

        Override this in subclasses that remember earlier days.
        """
        pass


def collect_decision(
    agent: StandAgent,
    observation: StandObservation,
    player_id: int,
    config: GameConfig,
) -> tuple[PlayerDecision, str, int, bool]:
    """
    Ask one agent for an acceptable decision.

    Returns:
        Tuple of (decision, reasoning, rejected attempts, used fallback)
    """
    context = context_from_observation(observation)
    assets = observation.assets[player_id]
    errors: list[str] = []
    retries = 0

    while retries <= agent.MAX_RETRIES_PER_DAY:
        decision, reasoning = agent.decide(observation, player_id, errors)
        errors = validate_decision(decision, assets, context, config)
        if not errors:
            return decision, reasoning, retries, False
        retries += 1

    # Making nothing is always affordable
    return PlayerDecision(), "[FALLBACK] Max retries exceeded, making nothing today", retries, True


def run_game(
    env: LemonadeStandEnvironment,
    agents: Sequence[StandAgent],
    callbacks: Sequence[GameCallback] | None = None,
    max_days: Optional[int] = None,
) -> GameResult:
    """
    Play a full game: one agent per stand, taking turns each day.

    Args:
        env: LemonadeStandEnvironment instance
        agents: One agent per stand, in player id order
        callbacks: Optional list of callbacks for monitoring
        max_days: Stop after this many days even if stands are still solvent

    Returns:
        GameResult with every settled day and the final standings
    """
    callbacks = callbacks or []
    if len(agents) != env.num_players:
        raise ValueError(f"Need {env.num_players} agents, got {len(agents)}")

    for agent in agents:
        agent.reset()

    obs = env.reset()
    for cb in callbacks:
        cb.on_game_start(obs)

    days: list[DayRecord] = []
    total_errors = 0
    total_fallbacks = 0

    while not obs.done and (max_days is None or len(days) < max_days):
        for cb in callbacks:
            cb.on_day_start(obs)

        pre_obs = obs
        decisions: dict[int, PlayerDecision] = {}
        reasoning: dict[int, str] = {}
        for player_id in pre_obs.active_players:
            decision, why, retries, fell_back = collect_decision(
                agents[player_id], pre_obs, player_id, env.config
            )
            decisions[player_id] = decision
            reasoning[player_id] = why
            total_errors += retries
            total_fallbacks += int(fell_back)

        obs = env.step(StandAction(decisions=decisions))
        if obs.is_error_response:
            # Each decision was already validated against the same state
            raise RuntimeError(f"Day {pre_obs.day} was rejected: {'; '.join(obs.action_errors)}")

        record = DayRecord(
            day=obs.settled_day,
            weather=obs.settled_weather,
            thunderstorm=obs.thunderstorm,
            lemonade_cost=pre_obs.lemonade_cost,
            decisions=decisions,
            reasoning=reasoning,
            results=obs.results,
            bankrupt=[i for i, out in enumerate(pre_obs.bankrupt) if out],
            announcement=pre_obs.announcement,
        )
        days.append(record)

        for cb in callbacks:
            cb.on_day_end(record, obs)

    if obs.done:
        winner = env.winner
    else:
        winner = resolve_winners(env.players)

    result = GameResult(
        days_played=len(days),
        final_assets=list(obs.assets),
        winners=list(winner.winners),
        winner_message=winner.message,
        completed=obs.done,
        days=days,
        seed=env._seed,
        agent_names=[agent.name for agent in agents],
        error_count=total_errors,
        fallback_count=total_fallbacks,
    )

    for cb in callbacks:
        cb.on_game_end(result)

    return result
