# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Lemonade Stand Terminal Harness.

Everything between the game and the people playing it:
- Typer CLI for hot-seat play and computer-only games
- YAML configuration files for custom rules
- Daily financial reports in the modern or classic look
- Console progress and JSON game transcripts
"""

from .config import (
    HarnessConfig,
    LoggingConfig,
    load_config,
    save_config,
    game_config_from_dict,
    game_config_to_dict,
    create_example_config,
    VALID_STRATEGIES,
)
from .reports import (
    ReportRenderer,
    ClassicRenderer,
    get_renderer,
    format_daily_report,
    money,
)
from .runner import GameLogger, VerboseCallback

__all__ = [
    # Config
    "HarnessConfig",
    "LoggingConfig",
    "load_config",
    "save_config",
    "game_config_from_dict",
    "game_config_to_dict",
    "create_example_config",
    "VALID_STRATEGIES",
    # Reports
    "ReportRenderer",
    "ClassicRenderer",
    "get_renderer",
    "format_daily_report",
    "money",
    # Runner
    "GameLogger",
    "VerboseCallback",
]
