# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""Game environment for Lemonade Stand."""

from .lemonade_environment import LemonadeStandEnvironment, StandAction, StandObservation

__all__ = ["LemonadeStandEnvironment", "StandAction", "StandObservation"]
