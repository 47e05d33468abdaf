# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Daily weather for Lemonsville.

Each morning the weather is drawn as sunny, cloudy or hot and dry. A
thunderstorm is never forecast: it can only strike a cloudy day, after
every stand has already committed to its plan.
"""

import random
from dataclasses import replace
from typing import Optional

from .models import (
    WEATHER_MULTIPLIERS,
    DayContext,
    GameConfig,
    Weather,
)


class WeatherGenerator:
    """
    Draws the day's weather and decides whether a storm ruins it.

    Example:
        >>> weather = WeatherGenerator(seed=42)
        >>> context = weather.new_day(1)
        >>> context = weather.resolve_storm(context)
        >>> print(context.weather, context.weather_multiplier)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or GameConfig()
        self._rng = rng or random.Random(seed)

    def draw(self) -> Weather:
        """Draw the forecast weather for a day (never a thunderstorm)."""
        chance = self._rng.random()
        if chance < self.config.sunny_chance:
            return Weather.SUNNY
        elif chance < self.config.sunny_chance + self.config.cloudy_chance:
            return Weather.CLOUDY
        else:
            return Weather.HOT_DRY

    def storm_strikes(self, weather: Weather) -> bool:
        """Roll for a thunderstorm. Only cloudy days can turn stormy."""
        if weather != Weather.CLOUDY:
            return False
        return self._rng.random() < self.config.thunderstorm_chance

    def context_for_day(self, day: int, weather: Weather) -> DayContext:
        """Build the day's context from the cost schedule and the weather."""
        return DayContext(
            day=day,
            lemonade_cost=self.config.lemonade_cost_for_day(day),
            sign_cost=self.config.sign_cost,
            weather=weather,
            weather_multiplier=WEATHER_MULTIPLIERS[weather],
            thunderstorm=weather == Weather.THUNDERSTORM,
            announcement=self.config.announcement_for_day(day),
        )

    def new_day(self, day: int) -> DayContext:
        """Draw the weather for ``day`` and return its context."""
        return self.context_for_day(day, self.draw())

    @staticmethod
    def apply_thunderstorm(context: DayContext) -> DayContext:
        """Turn the day into a thunderstorm: nobody sells anything."""
        return replace(
            context,
            weather=Weather.THUNDERSTORM,
            weather_multiplier=WEATHER_MULTIPLIERS[Weather.THUNDERSTORM],
            thunderstorm=True,
        )

    def resolve_storm(self, context: DayContext) -> DayContext:
        """
        Run the once-per-day storm check.

        Must be called after every stand has decided and before settlement.

        Returns:
            The thunderstorm context if the storm struck, otherwise ``context``
        """
        if self.storm_strikes(context.weather):
            return self.apply_thunderstorm(context)
        return context
