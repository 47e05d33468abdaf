#!/usr/bin/env python3
# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
CLI entry point for Lemonade Stand.

Play the game at the terminal, let computer players run a game on their
own, or write a configuration file to change the rules.

Usage:
    # One player, modern look
    lemonade-stand play

    # Three players at one keyboard, green-screen look
    lemonade-stand play --players 3 --classic

    # You against two computer players, same weather every time
    lemonade-stand play --bots 2 --seed 42

    # Computer players only
    lemonade-stand simulate --players 4 --strategy greedy --max-days 20

    # Write a config file to tweak costs and weather
    lemonade-stand init-config lemonade.yaml
"""

import time
from pathlib import Path
from typing import Optional, Sequence

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from dotenv import load_dotenv
load_dotenv()

from ..agents.base import (
    DayRecord,
    GameResult,
    StandAgent,
    context_from_observation,
    run_game,
)
from ..agents.computer import create_agent
from ..intake import MalformedInputError, parse_quantity, validate_decision
from ..models import GameConfig, PlayerDecision
from ..server.lemonade_environment import LemonadeStandEnvironment, StandObservation
from .config import VALID_STRATEGIES, HarnessConfig, create_example_config, load_config
from .reports import ReportRenderer, get_renderer, money
from .runner import GameLogger, VerboseCallback

app = typer.Typer(
    name="lemonade-stand",
    help="Lemonade Stand - run a lemonade stand in Lemonsville, California",
    add_completion=False,
)
console = Console()


class ConsoleAgent(StandAgent):
    """A human at the keyboard. Keeps asking until the plan is acceptable."""

    name = "human"

    def __init__(self, renderer: ReportRenderer, config: GameConfig):
        self.renderer = renderer
        self.config = config

    def _ask(self, question: str) -> int:
        while True:
            answer = Prompt.ask(question, console=self.renderer.console, default="0")
            try:
                return parse_quantity(answer)
            except MalformedInputError:
                self.renderer.error("Please enter valid numbers.")

    def decide(
        self,
        observation: StandObservation,
        player_id: int,
        errors: Sequence[str] = (),
    ) -> tuple[PlayerDecision, str]:
        context = context_from_observation(observation)
        assets = observation.assets[player_id]

        while True:
            self.renderer.turn_header(
                observation.day, player_id, assets, observation.lemonade_cost, observation.sign_cost
            )
            decision = PlayerDecision(
                glasses=self._ask("How many glasses of lemonade do you wish to make?"),
                signs=self._ask(f"How many advertising signs ({money(observation.sign_cost)} each) do you want to make?"),
                price=self._ask("What price (in cents) do you wish to charge for lemonade?"),
            )
            problems = validate_decision(decision, assets, context, self.config)
            if not problems:
                return decision, "entered at the keyboard"
            for problem in problems:
                self.renderer.error(problem)


class PlayCallback:
    """Shows a hot-seat game to the players as it happens."""

    def __init__(self, renderer: ReportRenderer, pause: float = 0.0, wait_for_players: bool = True):
        self.renderer = renderer
        self.pause = pause
        self.wait_for_players = wait_for_players

    def on_game_start(self, observation: StandObservation) -> None:
        pass

    def on_day_start(self, observation: StandObservation) -> None:
        self.renderer.weather(observation.day, observation.weather, observation.weather_multiplier)
        if self.pause:
            time.sleep(self.pause)
        if observation.announcement:
            self.renderer.announcement(observation.announcement)

    def on_day_end(self, record: DayRecord, observation: StandObservation) -> None:
        if record.thunderstorm:
            self.renderer.thunderstorm()
        self.renderer.daily_report(record.results, len(observation.assets))
        if self.wait_for_players and not observation.done:
            Prompt.ask("Press Enter for the next day", console=self.renderer.console, default="", show_default=False)

    def on_game_end(self, result: GameResult) -> None:
        if not result.completed:
            self.renderer.console.print(f"Stopped after {result.days_played} days.")
        self.renderer.winner(result.winner_message, result.final_assets)


def resolve_config(config_file: Optional[Path]) -> HarnessConfig:
    """Load the config file if one was given, exiting on errors."""
    if config_file is None:
        return HarnessConfig()
    if not config_file.exists():
        console.print(f"[red]Config file not found: {escape(str(config_file))}[/red]")
        raise typer.Exit(1)
    try:
        return load_config(config_file)
    except ValueError as e:
        console.print(f"[red]Invalid config: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def check_player_count(total: int, game: GameConfig) -> None:
    if not game.min_players <= total <= game.max_players:
        console.print(
            f"[red]Number of stands must be between {game.min_players} and {game.max_players}, got {total}[/red]"
        )
        raise typer.Exit(1)


def check_strategy(strategy: str) -> None:
    if strategy not in VALID_STRATEGIES:
        console.print(f"[red]Invalid strategy: {strategy}. Must be one of: {', '.join(VALID_STRATEGIES)}[/red]")
        raise typer.Exit(1)


def save_transcript(result: GameResult, game: GameConfig, log_dir: Optional[Path], harness: HarnessConfig) -> None:
    base_dir = log_dir or (Path(harness.logging.dir) if harness.logging.local else None)
    if base_dir is None:
        return
    path = GameLogger(base_dir=base_dir).save_game(result, game)
    console.print(f"\n[dim]Game saved to: {escape(str(path))}[/dim]")


@app.command()
def play(
    players: Optional[int] = typer.Option(
        None,
        "--players", "-p",
        help="Number of human players taking turns (default: from config, or 1)"
    ),
    bots: int = typer.Option(
        0,
        "--bots", "-b",
        help="Number of computer players joining the game"
    ),
    bot_strategy: str = typer.Option(
        "greedy",
        "--bot-strategy",
        help=f"Computer player strategy: {', '.join(VALID_STRATEGIES)}"
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed", "-s",
        envvar="LEMONADE_STAND_SEED",
        help="Random seed for the same weather every game"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        envvar="LEMONADE_STAND_CONFIG",
        help="YAML configuration file"
    ),
    classic: bool = typer.Option(
        False,
        "--classic",
        help="Classic 80's green-screen look"
    ),
    no_pause: bool = typer.Option(
        False,
        "--no-pause",
        help="Don't pause on the weather report"
    ),
    max_days: Optional[int] = typer.Option(
        None,
        "--max-days",
        help="End the game after this many days"
    ),
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        help="Save a JSON transcript of each game here"
    ),
):
    """
    Play Lemonade Stand at the terminal.

    Examples:
        lemonade-stand play
        lemonade-stand play --players 3 --classic
        lemonade-stand play --bots 2 --bot-strategy cautious --seed 42
    """
    harness = resolve_config(config_file)
    game = harness.game
    check_strategy(bot_strategy)

    humans = players if players is not None else game.num_players
    if humans < 0 or bots < 0:
        console.print("[red]Player counts must not be negative[/red]")
        raise typer.Exit(1)
    check_player_count(humans + bots, game)

    game.num_players = humans + bots
    if classic:
        game.theme = "classic"
    seed = seed if seed is not None else harness.seed

    renderer = get_renderer(game.theme, console)
    renderer.title()
    renderer.welcome()

    while True:
        renderer.instructions()

        agents: list[StandAgent] = [ConsoleAgent(renderer, game) for _ in range(humans)]
        agents += [create_agent(bot_strategy, game) for _ in range(bots)]

        env = LemonadeStandEnvironment(config=game, seed=seed)
        callback = PlayCallback(
            renderer,
            pause=0.0 if no_pause else game.weather_pause,
            wait_for_players=humans > 0,
        )
        result = run_game(env, agents, callbacks=[callback], max_days=max_days)
        save_transcript(result, game, log_dir, harness)

        if not Confirm.ask("Would you like to play again?", console=console, default=False):
            break

    return result


@app.command()
def simulate(
    players: int = typer.Option(
        2,
        "--players", "-p",
        help="Number of computer players"
    ),
    strategy: str = typer.Option(
        "greedy",
        "--strategy",
        help=f"Computer player strategy: {', '.join(VALID_STRATEGIES)}"
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed", "-s",
        envvar="LEMONADE_STAND_SEED",
        help="Random seed for reproducibility"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        envvar="LEMONADE_STAND_CONFIG",
        help="YAML configuration file"
    ),
    max_days: int = typer.Option(
        30,
        "--max-days",
        help="Stop after this many days if anyone is still in business"
    ),
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        help="Save a JSON transcript of the game here"
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet", "-q",
        help="Only print the final summary"
    ),
):
    """
    Let computer players run a whole game on their own.

    Examples:
        lemonade-stand simulate --players 4 --seed 42
        lemonade-stand simulate --strategy cautious --max-days 10 --quiet
    """
    harness = resolve_config(config_file)
    game = harness.game
    check_strategy(strategy)
    check_player_count(players, game)
    if max_days < 1:
        console.print(f"[red]--max-days must be at least 1, got {max_days}[/red]")
        raise typer.Exit(1)

    game.num_players = players
    seed = seed if seed is not None else harness.seed

    renderer = get_renderer(game.theme, console)
    callbacks = [] if quiet else [VerboseCallback(renderer=renderer)]

    env = LemonadeStandEnvironment(config=game, seed=seed)
    agents = [create_agent(strategy, game) for _ in range(players)]
    result = run_game(env, agents, callbacks=callbacks, max_days=max_days)

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Days Played", str(result.days_played))
    table.add_row("Everyone Bankrupt", "yes" if result.completed else "no")
    table.add_row("Thunderstorms", str(sum(1 for d in result.days if d.thunderstorm)))
    table.add_row("Result", escape(result.winner_message))
    if seed is not None:
        table.add_row("Seed", str(seed))

    console.print()
    console.print(table)
    save_transcript(result, game, log_dir, harness)
    return result


@app.command()
def rules(
    classic: bool = typer.Option(
        False,
        "--classic",
        help="Classic 80's green-screen look"
    ),
):
    """
    Show the game instructions.
    """
    renderer = get_renderer("classic" if classic else "modern", console)
    renderer.title()
    renderer.welcome()
    renderer.instructions()


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(
        Path("lemonade.yaml"),
        help="Where to write the configuration file"
    ),
    force: bool = typer.Option(
        False,
        "--force", "-f",
        help="Overwrite an existing file"
    ),
):
    """
    Write an example configuration file with the classic rules.
    """
    if path.exists() and not force:
        console.print(f"[red]{escape(str(path))} already exists (use --force to overwrite)[/red]")
        raise typer.Exit(1)
    create_example_config(path)
    console.print(f"[green]✓ Wrote {escape(str(path))}[/green]")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
