# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Lemonade Stand Environment Implementation.

One hot-seat game of Lemonade Stand for any number of local players:
- Each day the weather is revealed and the cost of lemonade is announced
- Every solvent stand submits a plan (glasses, signs, price)
- A storm may strike a cloudy day after the plans are in
- The day is settled and stands that run out of money go bankrupt
- The game ends when every stand is bankrupt
"""

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import uuid4

from openenv_core.env_server.interfaces import Environment
from openenv_core.env_server.types import Action, Observation, State

from ..intake import validate_decision
from ..models import (
    DayContext,
    GameConfig,
    PlayerDecision,
    PlayerState,
    SettlementResult,
    WinnerResult,
)
from ..settlement import is_game_over, resolve_winners, settle_day
from ..weather import WeatherGenerator


@dataclass(kw_only=True)
class StandAction(Action):
    """
    Action for the Lemonade Stand environment: every solvent stand's plan.

    - decisions: Plan per player id. Bankrupt stands must not be included.
    """
    decisions: Dict[int, PlayerDecision] = field(default_factory=dict)


@dataclass(kw_only=True)
class StandObservation(Observation):
    """
    Observation from the Lemonade Stand environment.

    Describes the day the players are about to plan, plus the results of
    the day that was just settled (if any).
    """
    # Day being planned
    day: int
    weather: str
    weather_multiplier: float
    lemonade_cost: int  # cents per glass
    sign_cost: int  # cents per sign
    announcement: Optional[str] = None

    # Stands, indexed by player id
    assets: List[int] = field(default_factory=list)  # cents
    bankrupt: List[bool] = field(default_factory=list)
    active_players: List[int] = field(default_factory=list)

    # Previous day's settlement
    settled_day: Optional[int] = None
    settled_weather: Optional[str] = None
    thunderstorm: bool = False
    results: List[Dict[str, Any]] = field(default_factory=list)

    # Game over
    winners: List[int] = field(default_factory=list)
    winner_message: Optional[str] = None

    # Error feedback (when action validation fails)
    action_errors: List[str] = field(default_factory=list)
    is_error_response: bool = False  # True if the day was not advanced


class LemonadeStandEnvironment(Environment):
    """
    A hot-seat lemonade stand game for one or more local players.

    Example:
        >>> env = LemonadeStandEnvironment(num_players=2, seed=42)
        >>> obs = env.reset()
        >>> print(f"Day {obs.day}: {obs.weather}")
        >>>
        >>> action = StandAction(decisions={
        ...     0: PlayerDecision(glasses=50, signs=2, price=5),
        ...     1: PlayerDecision(glasses=30, signs=0, price=10),
        ... })
        >>> obs = env.step(action)
        >>> for result in obs.results:
        ...     print(result["player_id"], result["glasses_sold"], result["profit"])
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        num_players: Optional[int] = None,
    ):
        """
        Initialize the lemonade stand environment.

        Args:
            config: Game configuration (uses defaults if None)
            seed: Random seed for reproducible weather
            num_players: Overrides ``config.num_players`` if given
        """
        self.config = config or GameConfig()
        self.num_players = num_players if num_players is not None else self.config.num_players
        if not self.config.min_players <= self.num_players <= self.config.max_players:
            raise ValueError(
                f"num_players must be between {self.config.min_players} and "
                f"{self.config.max_players}, got {self.num_players}"
            )
        self._seed = seed
        self._rng = random.Random(seed)
        self._state = State(episode_id=str(uuid4()), step_count=0)
        self._reset_game_state()

    def _reset_game_state(self):
        """Reset all game state variables."""
        self.players: list[PlayerState] = [
            PlayerState(player_id=i, assets=self.config.starting_assets)
            for i in range(self.num_players)
        ]
        self.weather = WeatherGenerator(self.config, rng=self._rng)
        self.context: DayContext = self.weather.new_day(1)
        self.last_results: list[SettlementResult] = []
        self.last_context: Optional[DayContext] = None
        self.winner: Optional[WinnerResult] = None

    @property
    def day(self) -> int:
        return self.context.day

    @property
    def done(self) -> bool:
        return is_game_over(self.players)

    def active_players(self) -> list[int]:
        """Ids of the stands still in business."""
        return [p.player_id for p in self.players if not p.bankrupt]

    def reset(self) -> StandObservation:
        """
        Reset the environment for a new game.

        Returns:
            Observation for day 1
        """
        self._state = State(episode_id=str(uuid4()), step_count=0)
        self._rng = random.Random(self._seed)
        self._reset_game_state()
        return self._build_observation(reward=0.0)

    def validate_action(self, action: StandAction) -> list[str]:
        """
        Validate an action and return a list of errors (empty if valid).

        Every solvent stand needs exactly one acceptable decision.

        Args:
            action: The action to validate

        Returns:
            List of error messages (empty if action is valid)
        """
        errors = []
        for player_id in action.decisions:
            if not 0 <= player_id < len(self.players):
                errors.append(f"Unknown stand: {player_id + 1}")
            elif self.players[player_id].bankrupt:
                errors.append(f"Stand {player_id + 1} is bankrupt and cannot make decisions")

        for player in self.players:
            if player.bankrupt:
                continue
            decision = action.decisions.get(player.player_id)
            if decision is None:
                errors.append(f"Missing decision for stand {player.number}")
                continue
            for message in validate_decision(decision, player.assets, self.context, self.config):
                errors.append(f"Stand {player.number}: {message}")

        return errors

    def _build_observation(
        self,
        reward: Optional[float] = None,
        errors: Optional[list[str]] = None,
    ) -> StandObservation:
        last = self.last_context
        return StandObservation(
            day=self.context.day,
            weather=self.context.weather.value,
            weather_multiplier=float(self.context.weather_multiplier),
            lemonade_cost=self.context.lemonade_cost,
            sign_cost=self.context.sign_cost,
            announcement=self.context.announcement,
            assets=[p.assets for p in self.players],
            bankrupt=[p.bankrupt for p in self.players],
            active_players=self.active_players(),
            settled_day=last.day if last else None,
            settled_weather=last.weather.value if last else None,
            thunderstorm=last.thunderstorm if last else False,
            results=[r.to_dict() for r in self.last_results],
            winners=list(self.winner.winners) if self.winner else [],
            winner_message=self.winner.message if self.winner else None,
            action_errors=errors or [],
            is_error_response=bool(errors),
            done=self.done,
            reward=reward,
        )

    def step(self, action: StandAction) -> StandObservation:
        """
        Play one day of Lemonsville.

        Args:
            action: Every solvent stand's plan for the day

        Returns:
            Observation for the next day with the settled day's results.
            If the action is invalid, returns an error observation with
            is_error_response=True and the day is not advanced.

        Raises:
            RuntimeError: If the game is already over
        """
        if self.done:
            raise RuntimeError("The game is over; call reset() to start a new one")

        errors = self.validate_action(action)
        if errors:
            return self._build_observation(reward=0.0, errors=errors)

        self._state.step_count += 1

        # Storm check happens after the plans are in
        settled_context = self.weather.resolve_storm(self.context)
        results = settle_day(self.players, action.decisions, settled_context, self.config)

        self.last_context = settled_context
        self.last_results = results

        if self.done:
            self.winner = resolve_winners(self.players)
        else:
            self.context = self.weather.new_day(settled_context.day + 1)

        reward = sum(r.profit for r in results) / 100.0
        observation = self._build_observation(reward=reward)
        observation.metadata = {
            "settled_weather_multiplier": float(settled_context.weather_multiplier),
            "newly_bankrupt": [r.player_id for r in results if r.newly_bankrupt],
        }
        return observation

    @property
    def state(self) -> State:
        """Get the current environment state."""
        return self._state
