# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Daily settlement: turning every stand's plan and the weather into sales.

Demand model (per stand):
- Price factor peaks below the 10 cent reference price and falls off with
  the square of the price above it
- Advertising signs add up to 100% more demand, with diminishing returns
- The weather multiplies the result (a thunderstorm means no sales at all)
- You can never sell more glasses than you made

Expenses are charged on everything made, sold or not.
"""

import math
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from .intake import validate_decision
from .models import (
    DayContext,
    GameConfig,
    PlayerDecision,
    PlayerState,
    SettlementResult,
    WinnerResult,
)


REFERENCE_PRICE = 10  # cents
BASE_DEMAND = Decimal(30)


class SettlementError(Exception):
    """Settlement was handed decisions it cannot settle."""


def price_factor(price: int) -> Decimal:
    """Glasses demanded at ``price`` cents before signs and weather."""
    if price < REFERENCE_PRICE:
        return Decimal(REFERENCE_PRICE - price) / Decimal(REFERENCE_PRICE) * Decimal("0.8") * BASE_DEMAND + BASE_DEMAND
    return Decimal(REFERENCE_PRICE * REFERENCE_PRICE) * BASE_DEMAND / Decimal(price * price)


def signage_uplift(signs: int) -> Decimal:
    """Extra demand from advertising, from 0 (no signs) towards 1 (double)."""
    return Decimal(1) - Decimal(str(math.exp(-0.5 * signs)))


def base_sales(decision: PlayerDecision, weather_multiplier: Decimal) -> Decimal:
    """Glasses customers would buy today if supply were unlimited."""
    factor = price_factor(decision.price)
    return weather_multiplier * (factor + factor * signage_uplift(decision.signs))


def glasses_sold(decision: PlayerDecision, context: DayContext) -> int:
    if context.thunderstorm:
        return 0
    demand = base_sales(decision, context.weather_multiplier)
    return int(min(demand, Decimal(decision.glasses)))


def settle_player(
    player: PlayerState,
    decision: PlayerDecision,
    context: DayContext,
) -> SettlementResult:
    """
    Settle one solvent stand for the day, updating ``player`` in place.

    Args:
        player: The stand to settle (must not be bankrupt)
        decision: The stand's plan for the day
        context: Today's costs and weather, after the storm check

    Returns:
        The stand's results for the daily report
    """
    if player.bankrupt:
        raise SettlementError(f"Stand {player.number} is bankrupt and cannot be settled")

    sold = glasses_sold(decision, context)
    income = sold * decision.price
    expenses = decision.signs * context.sign_cost + decision.glasses * context.lemonade_cost
    profit = income - expenses

    player.assets = max(0, player.assets + profit)

    # Not enough left to make even one glass tomorrow
    newly_bankrupt = player.assets < context.lemonade_cost
    if newly_bankrupt:
        player.bankrupt = True

    return SettlementResult(
        player_id=player.player_id,
        day=context.day,
        glasses_sold=sold,
        price=decision.price,
        glasses_made=decision.glasses,
        signs_made=decision.signs,
        income=income,
        expenses=expenses,
        profit=profit,
        assets=player.assets,
        newly_bankrupt=newly_bankrupt,
    )


def settle_day(
    players: Sequence[PlayerState],
    decisions: Mapping[int, PlayerDecision],
    context: DayContext,
    config: Optional[GameConfig] = None,
) -> list[SettlementResult]:
    """
    Settle every solvent stand for the day.

    Decisions are re-checked before anything is mutated, so a bad batch
    leaves every stand untouched. Decisions for bankrupt stands are ignored.

    Args:
        players: All stands, in player id order
        decisions: Plan per player id (every solvent stand needs one)
        context: Today's costs and weather, after the storm check
        config: Game limits used to re-check decisions

    Returns:
        One result per solvent stand, in player id order

    Raises:
        SettlementError: If a solvent stand has no decision or an invalid one
    """
    active = [p for p in players if not p.bankrupt]

    for player in active:
        if player.player_id not in decisions:
            raise SettlementError(f"No decision for stand {player.number}")
        errors = validate_decision(decisions[player.player_id], player.assets, context, config)
        if errors:
            raise SettlementError(f"Stand {player.number}: {'; '.join(errors)}")

    return [settle_player(p, decisions[p.player_id], context) for p in active]


def is_game_over(players: Sequence[PlayerState]) -> bool:
    """The game ends once every stand is bankrupt."""
    return all(p.bankrupt for p in players)


def resolve_winners(players: Sequence[PlayerState]) -> WinnerResult:
    """
    Find the stand(s) with the most assets. Ties are shared, never broken.

    Raises:
        ValueError: If there are no players
    """
    if not players:
        raise ValueError("Cannot resolve a winner without players")

    max_assets = max(p.assets for p in players)
    winners = [p.player_id for p in players if p.assets == max_assets]

    if len(winners) == 1:
        message = f"Player {winners[0] + 1} wins with ${max_assets / 100:.2f}!"
    else:
        tied = ", ".join(str(w + 1) for w in winners)
        message = f"It's a tie between players: {tied} with ${max_assets / 100:.2f} each!"

    return WinnerResult(winners=winners, max_assets=max_assets, message=message)
