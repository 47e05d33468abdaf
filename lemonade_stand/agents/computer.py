# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Computer players for Lemonade Stand.

Both players read the revealed weather and size their batch to the demand
they expect, so they fill empty seats in a hot-seat game or play whole
games on their own with ``lemonade-stand simulate``.

- CautiousAgent: charges the reference price and never risks more than
  half of its assets
- GreedyAgent: searches the discretized decision space for the plan with
  the best expected profit, pricing in the chance of a storm on cloudy days
"""

from decimal import Decimal
from itertools import product
from typing import Optional, Sequence

from ..models import DayContext, GameConfig, PlayerDecision, Weather
from ..server.lemonade_environment import StandObservation
from ..settlement import REFERENCE_PRICE, base_sales
from .base import StandAgent, context_from_observation


def expected_demand(decision: PlayerDecision, observation: StandObservation) -> int:
    """Glasses the stand expects to sell if it made plenty."""
    return int(base_sales(decision, Decimal(str(observation.weather_multiplier))))


class CautiousAgent(StandAgent):
    """Charges 10 cents and keeps half of its money in the bank."""

    name = "cautious"

    def decide(
        self,
        observation: StandObservation,
        player_id: int,
        errors: Sequence[str] = (),
    ) -> tuple[PlayerDecision, str]:
        assets = observation.assets[player_id]
        budget = min(assets, max(assets // 2, observation.lemonade_cost))

        signs = 1 if budget >= 3 * observation.sign_cost else 0
        plan = PlayerDecision(glasses=0, signs=signs, price=REFERENCE_PRICE)
        affordable = (budget - signs * observation.sign_cost) // observation.lemonade_cost
        plan.glasses = max(0, min(affordable, expected_demand(plan, observation)))

        return plan, f"Spending up to ${budget / 100:.2f}: {plan.glasses} glasses at {plan.price}c"


class GreedyAgent(StandAgent):
    """
    Picks the plan with the best expected profit for today.

    Every (price, signs) pair on the grid is tried; the batch size is the
    expected demand, cut down to what the stand can afford.
    """

    name = "greedy"

    PRICES = list(range(0, 101))  # cents
    SIGNS = list(range(0, 11))

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()

    def candidate_decisions(self, observation: StandObservation, player_id: int) -> list[PlayerDecision]:
        """Generate every affordable plan on the grid."""
        assets = observation.assets[player_id]
        candidates = []

        for price, signs in product(self.PRICES, self.SIGNS):
            if price > self.config.max_price or signs > self.config.max_signs:
                continue
            sign_spend = signs * observation.sign_cost
            if sign_spend > assets:
                continue

            plan = PlayerDecision(glasses=0, signs=signs, price=price)
            affordable = (assets - sign_spend) // observation.lemonade_cost
            plan.glasses = max(0, min(affordable, expected_demand(plan, observation), self.config.max_glasses))
            candidates.append(plan)

        return candidates

    def expected_profit(self, plan: PlayerDecision, context: DayContext) -> float:
        """Expected profit in cents, counting the storm risk on cloudy days."""
        income = plan.glasses * plan.price
        if context.weather == Weather.CLOUDY:
            income *= 1.0 - self.config.thunderstorm_chance
        return income - plan.cost(context)

    def decide(
        self,
        observation: StandObservation,
        player_id: int,
        errors: Sequence[str] = (),
    ) -> tuple[PlayerDecision, str]:
        context = context_from_observation(observation)
        best = PlayerDecision()
        best_profit = 0.0

        for plan in self.candidate_decisions(observation, player_id):
            profit = self.expected_profit(plan, context)
            if profit > best_profit:
                best, best_profit = plan, profit

        if best.glasses == 0 and best.signs == 0:
            return best, "Nothing worth making today"
        return best, f"Expecting ${best_profit / 100:.2f} profit on {observation.weather} weather"


AGENTS = {
    "greedy": GreedyAgent,
    "cautious": CautiousAgent,
}


def create_agent(strategy: str, config: Optional[GameConfig] = None) -> StandAgent:
    """
    Create a computer player by strategy name.

    Raises:
        ValueError: If the strategy is unknown
    """
    if strategy == "greedy":
        return GreedyAgent(config=config)
    elif strategy == "cautious":
        return CautiousAgent()
    raise ValueError(f"Unknown strategy: {strategy}. Must be one of: {', '.join(AGENTS)}")
