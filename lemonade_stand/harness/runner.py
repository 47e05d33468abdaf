# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Game orchestration helpers for Lemonade Stand.

Handles console progress for computer games and JSON transcripts of
finished games.
"""

import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from ..agents.base import DayRecord, GameResult
from ..models import GameConfig
from ..server.lemonade_environment import StandObservation
from .config import game_config_to_dict
from .reports import ReportRenderer, money


def day_record_to_dict(record: DayRecord) -> dict[str, Any]:
    """Convert a day record to a JSON-serializable dict."""
    return {
        "day": record.day,
        "weather": record.weather,
        "thunderstorm": record.thunderstorm,
        "lemonade_cost": record.lemonade_cost,
        "announcement": record.announcement,
        "decisions": {str(pid): d.to_dict() for pid, d in record.decisions.items()},
        "reasoning": {str(pid): why for pid, why in record.reasoning.items()},
        "results": record.results,
        "bankrupt": record.bankrupt,
    }


def game_result_to_dict(result: GameResult) -> dict[str, Any]:
    """Convert a game result to a JSON-serializable dict."""
    return {
        "seed": result.seed,
        "agents": result.agent_names,
        "days_played": result.days_played,
        "completed": result.completed,
        "final_assets": result.final_assets,
        "winners": result.winners,
        "winner_message": result.winner_message,
        "error_count": result.error_count,
        "fallback_count": result.fallback_count,
        "days": [day_record_to_dict(d) for d in result.days],
    }


class VerboseCallback:
    """Callback that prints a computer game's progress to the console."""

    def __init__(self, console: Console | None = None, renderer: ReportRenderer | None = None):
        self.renderer = renderer or ReportRenderer(console)
        self.console = self.renderer.console

    def on_game_start(self, observation: StandObservation) -> None:
        self.console.print("[bold]" + "═" * 50 + "[/bold]")
        self.console.print("[bold yellow]🍋 Starting Game[/bold yellow]")
        self.console.print("[bold]" + "═" * 50 + "[/bold]")
        self.console.print(f"Stands: {len(observation.assets)}")
        self.console.print(f"Starting assets: {money(observation.assets[0])}")
        self.console.print()

    def on_day_start(self, observation: StandObservation) -> None:
        if observation.announcement:
            self.renderer.announcement(observation.announcement)
        self.renderer.weather(observation.day, observation.weather, observation.weather_multiplier)

    def on_day_end(self, record: DayRecord, observation: StandObservation) -> None:
        if record.thunderstorm:
            self.console.print("   [red]⛈️  Thunderstorm! Everything was ruined.[/red]")

        for result in record.results:
            stand = result["player_id"] + 1
            emoji = "📈" if result["profit"] > 0 else "📉"
            why = escape(record.reasoning.get(result["player_id"], ""))
            self.console.print(f"   [dim]Stand {stand}: {why}[/dim]")
            self.console.print(
                f"   {emoji} Stand {stand}: sold {result['glasses_sold']}/{result['glasses_made']} "
                f"at {money(result['price'])}, profit {money(result['profit'])}, "
                f"assets {money(result['assets'])}"
            )
            if result["newly_bankrupt"]:
                self.console.print(f"   [yellow]⚠️  Stand {stand} is bankrupt![/yellow]")

    def on_game_end(self, result: GameResult) -> None:
        self.console.print()
        if not result.completed:
            self.console.print(f"[dim]Stopped after {result.days_played} days with stands still in business[/dim]")
        self.renderer.winner(result.winner_message, result.final_assets)


class GameLogger:
    """
    Writes a JSON transcript of each game.

    Layout: ``<base_dir>/<timestamp>_<short id>/game.json``
    """

    def __init__(self, base_dir: str | Path = "runs"):
        self.base_dir = Path(base_dir)
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.run_id = uuid.uuid4().hex[:8]
        self.run_dir = self.base_dir / f"{self.timestamp}_{self.run_id}"
        self.run_dir.mkdir(parents=True, exist_ok=True)

    def save_game(self, result: GameResult, config: GameConfig) -> Path:
        """Save the finished game and return the file written."""
        path = self.run_dir / "game.json"
        data = {
            "timestamp": self.timestamp,
            "run_id": self.run_id,
            "config": game_config_to_dict(config),
            "result": game_result_to_dict(result),
        }
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        return path
