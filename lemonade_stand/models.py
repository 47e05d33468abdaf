# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Data models for the Lemonade Stand game.

The classic Lemonsville lemonade stand simulation where each player must:
- Decide how many glasses of lemonade to make each morning
- Decide how many advertising signs to put up
- Set the price per glass
- Stay solvent while the cost of lemonade goes up

All money is tracked in integer cents ($2.00 == 200).
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Weather(str, Enum):
    """Weather conditions that affect lemonade sales."""
    SUNNY = "sunny"
    HOT_DRY = "hot_dry"  # Hot and dry - twice the demand!
    CLOUDY = "cloudy"
    THUNDERSTORM = "thunderstorm"  # Only ever replaces a cloudy day


# Demand multiplier per weather condition
WEATHER_MULTIPLIERS: Dict[Weather, Decimal] = {
    Weather.SUNNY: Decimal("1.0"),
    Weather.HOT_DRY: Decimal("2.0"),
    Weather.CLOUDY: Decimal("0.6"),
    Weather.THUNDERSTORM: Decimal("0.0"),
}

WEATHER_LABELS: Dict[Weather, str] = {
    Weather.SUNNY: "SUNNY",
    Weather.HOT_DRY: "HOT AND DRY",
    Weather.CLOUDY: "CLOUDY",
    Weather.THUNDERSTORM: "THUNDERSTORMS!",
}

# One-time news flashes shown on the day the cost of lemonade changes
COST_ANNOUNCEMENTS: Dict[int, str] = {
    3: "(YOUR MOTHER QUIT GIVING YOU FREE SUGAR)",
    7: "(THE PRICE OF LEMONADE MIX JUST WENT UP)",
}

VALID_THEMES = ["modern", "classic"]


@dataclass(kw_only=True)
class GameConfig:
    """Configuration for a lemonade stand game session."""
    num_players: int = 1
    min_players: int = 1
    max_players: int = 30
    starting_assets: int = 200  # $2.00 in cents

    # Costs (in cents)
    sign_cost: int = 15
    # (first day, cost per glass) - each entry applies until the next one
    lemonade_cost_schedule: List[Tuple[int, int]] = field(
        default_factory=lambda: [(1, 2), (3, 4), (7, 5)]
    )

    # Decision limits
    max_glasses: int = 1000
    max_signs: int = 50
    max_price: int = 100  # cents

    # Weather draw weights (sunny, then cloudy, then hot and dry)
    sunny_chance: float = 0.4
    cloudy_chance: float = 0.3
    hot_dry_chance: float = 0.3
    thunderstorm_chance: float = 0.25  # Only checked on cloudy days

    # Presentation
    theme: str = "modern"
    weather_pause: float = 2.0  # seconds between weather report and decisions

    def lemonade_cost_for_day(self, day: int) -> int:
        """Cost in cents to make one glass of lemonade on the given day."""
        schedule = sorted(self.lemonade_cost_schedule)
        cost = schedule[0][1]
        for first_day, day_cost in schedule:
            if day >= first_day:
                cost = day_cost
        return cost

    def announcement_for_day(self, day: int) -> Optional[str]:
        """News flash for a day on which the cost of lemonade changes."""
        if day <= 1 or day not in {first_day for first_day, _ in self.lemonade_cost_schedule}:
            return None
        if self.lemonade_cost_for_day(day) == self.lemonade_cost_for_day(day - 1):
            return None
        cost = self.lemonade_cost_for_day(day)
        return COST_ANNOUNCEMENTS.get(day, f"(LEMONADE NOW COSTS ${cost / 100:.2f} A GLASS TO MAKE)")

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty if valid)."""
        errors = []
        if not self.min_players <= self.num_players <= self.max_players:
            errors.append(
                f"num_players must be between {self.min_players} and {self.max_players}, got {self.num_players}"
            )
        if self.starting_assets <= 0:
            errors.append(f"starting_assets must be positive, got {self.starting_assets}")
        if self.sign_cost < 0:
            errors.append(f"sign_cost must not be negative, got {self.sign_cost}")
        if not self.lemonade_cost_schedule:
            errors.append("lemonade_cost_schedule must have at least one entry")
        else:
            first_days = [first_day for first_day, _ in self.lemonade_cost_schedule]
            if min(first_days) != 1:
                errors.append("lemonade_cost_schedule must start on day 1")
            if len(set(first_days)) != len(first_days):
                errors.append("lemonade_cost_schedule has duplicate days")
            for first_day, cost in self.lemonade_cost_schedule:
                if cost <= 0:
                    errors.append(f"lemonade cost for day {first_day} must be positive, got {cost}")
        for name in ("max_glasses", "max_signs", "max_price"):
            if getattr(self, name) < 0:
                errors.append(f"{name} must not be negative, got {getattr(self, name)}")
        chances = (self.sunny_chance, self.cloudy_chance, self.hot_dry_chance)
        if any(c < 0 for c in chances):
            errors.append("weather chances must not be negative")
        elif abs(sum(chances) - 1.0) > 1e-9:
            errors.append(f"weather chances must add up to 1.0, got {sum(chances):g}")
        if not 0.0 <= self.thunderstorm_chance <= 1.0:
            errors.append(f"thunderstorm_chance must be between 0 and 1, got {self.thunderstorm_chance}")
        if self.theme not in VALID_THEMES:
            errors.append(f"theme must be one of {VALID_THEMES}, got {self.theme!r}")
        if self.weather_pause < 0:
            errors.append(f"weather_pause must not be negative, got {self.weather_pause}")
        return errors


@dataclass(kw_only=True)
class PlayerState:
    """A single stand's running totals. Only settlement mutates these."""
    player_id: int  # 0-based, stable for the whole game
    assets: int  # cents
    bankrupt: bool = False

    @property
    def number(self) -> int:
        """1-based stand number used in reports."""
        return self.player_id + 1


@dataclass(kw_only=True)
class PlayerDecision:
    """
    One player's plan for the day.

    - glasses: Glasses of lemonade to make (only one batch each morning)
    - signs: Advertising signs to make
    - price: Price to charge per glass, in cents
    """
    glasses: int = 0
    signs: int = 0
    price: int = 0  # cents

    def cost(self, context: "DayContext") -> int:
        """Up-front cost in cents of making this batch and these signs."""
        return self.glasses * context.lemonade_cost + self.signs * context.sign_cost

    def to_dict(self) -> Dict[str, int]:
        return {"glasses": self.glasses, "signs": self.signs, "price": self.price}


@dataclass(kw_only=True)
class DayContext:
    """Everything about the day that is the same for every stand."""
    day: int
    lemonade_cost: int  # cents per glass
    sign_cost: int  # cents per sign
    weather: Weather
    weather_multiplier: Decimal
    thunderstorm: bool = False
    announcement: Optional[str] = None  # News flash when the cost changes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day,
            "lemonade_cost": self.lemonade_cost,
            "sign_cost": self.sign_cost,
            "weather": self.weather.value,
            "weather_multiplier": float(self.weather_multiplier),
            "thunderstorm": self.thunderstorm,
            "announcement": self.announcement,
        }


@dataclass(kw_only=True)
class SettlementResult:
    """How one stand did on one day."""
    player_id: int
    day: int
    glasses_sold: int
    price: int  # cents per glass
    glasses_made: int
    signs_made: int
    income: int  # cents
    expenses: int  # cents
    profit: int  # cents, may be negative
    assets: int  # cents after settlement
    newly_bankrupt: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "day": self.day,
            "glasses_sold": self.glasses_sold,
            "price": self.price,
            "glasses_made": self.glasses_made,
            "signs_made": self.signs_made,
            "income": self.income,
            "expenses": self.expenses,
            "profit": self.profit,
            "assets": self.assets,
            "newly_bankrupt": self.newly_bankrupt,
        }


@dataclass(kw_only=True)
class WinnerResult:
    """Final standings once every stand has gone bankrupt."""
    winners: List[int]  # player ids, ascending
    max_assets: int  # cents
    message: str

    @property
    def is_tie(self) -> bool:
        return len(self.winners) > 1
