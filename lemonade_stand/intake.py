# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Validation of a player's daily decision before it reaches settlement.

A rejected decision is never clamped: the player must enter it again.
"""

from typing import Optional

from .models import DayContext, GameConfig, PlayerDecision


class IntakeError(ValueError):
    """A decision the player has to re-enter."""


class MalformedInputError(IntakeError):
    """The player typed something that is not a whole number."""


class OutOfRangeError(IntakeError):
    """A glasses, signs or price value outside the allowed bounds."""


class InsufficientFundsError(IntakeError):
    """The batch and signs cost more than the stand's assets."""

    def __init__(self, assets: int, cost: int):
        self.assets = assets
        self.cost = cost
        super().__init__(insufficient_funds_message(assets, cost))


MALFORMED_MESSAGE = "Please enter valid numbers."
GLASSES_RANGE_MESSAGE = "Please enter a reasonable number of glasses (0-{max})."
SIGNS_RANGE_MESSAGE = "Please enter a reasonable number of signs (0-{max})."
PRICE_RANGE_MESSAGE = "Please enter a reasonable price (0-{max} cents)."


def insufficient_funds_message(assets: int, cost: int) -> str:
    return f"You don't have enough money! You have ${assets / 100:.2f} but need ${cost / 100:.2f}"


def parse_quantity(text: str, field_name: str = "value") -> int:
    """
    Parse a whole number typed by a player.

    Raises:
        MalformedInputError: If the text is not a whole number
    """
    try:
        return int(str(text).strip())
    except ValueError:
        raise MalformedInputError(f"{MALFORMED_MESSAGE} ({field_name}: {text!r})") from None


def range_errors(decision: PlayerDecision, config: Optional[GameConfig] = None) -> list[str]:
    """Check each field of a decision against its limits."""
    config = config or GameConfig()
    errors = []
    if not 0 <= decision.glasses <= config.max_glasses:
        errors.append(GLASSES_RANGE_MESSAGE.format(max=config.max_glasses))
    if not 0 <= decision.signs <= config.max_signs:
        errors.append(SIGNS_RANGE_MESSAGE.format(max=config.max_signs))
    if not 0 <= decision.price <= config.max_price:
        errors.append(PRICE_RANGE_MESSAGE.format(max=config.max_price))
    return errors


def validate_decision(
    decision: PlayerDecision,
    assets: int,
    context: DayContext,
    config: Optional[GameConfig] = None,
) -> list[str]:
    """
    Validate a decision and return a list of errors (empty if valid).

    Range checks come first, then affordability, matching the order the
    messages are shown to the player.

    Args:
        decision: The player's plan for the day
        assets: The player's current assets in cents
        context: Today's costs
        config: Game limits (defaults if None)

    Returns:
        List of error messages (empty if the decision is acceptable)
    """
    errors = range_errors(decision, config)
    cost = decision.cost(context)
    if cost > assets:
        errors.append(insufficient_funds_message(assets, cost))
    return errors


def check_decision(
    decision: PlayerDecision,
    assets: int,
    context: DayContext,
    config: Optional[GameConfig] = None,
) -> PlayerDecision:
    """
    Raise the first applicable intake error, otherwise return the decision.

    Raises:
        OutOfRangeError: If any field is outside its limits
        InsufficientFundsError: If the player cannot pay for the plan
    """
    out_of_range = range_errors(decision, config)
    if out_of_range:
        raise OutOfRangeError(out_of_range[0])
    cost = decision.cost(context)
    if cost > assets:
        raise InsufficientFundsError(assets, cost)
    return decision
