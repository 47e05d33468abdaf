# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Configuration schema and loader for games.

Supports YAML configuration files so a classroom can agree on the rules.

Example config.yaml:
    name: "Lemonsville Classic"
    seed: 42
    game:
      players: 3
      starting_assets: 200
    costs:
      sign: 15
      lemonade:
        - {from_day: 1, cost: 2}
        - {from_day: 3, cost: 4}
        - {from_day: 7, cost: 5}
    weather:
      sunny: 0.4
      cloudy: 0.3
      hot_dry: 0.3
      thunderstorm: 0.25
    display:
      theme: classic
    logging:
      local: true
      dir: ./runs
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..models import VALID_THEMES, GameConfig


# Valid computer player strategies
VALID_STRATEGIES = ["greedy", "cautious"]


@dataclass
class LoggingConfig:
    """Configuration for game transcripts."""
    local: bool = False
    dir: str = "runs"

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "LoggingConfig":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("Section 'logging' must be a mapping")
        return cls(
            local=data.get("local", False),
            dir=data.get("dir", "runs"),
        )


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config section, or an empty one if it is missing."""
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"Section '{name}' must be a mapping")
    return section


def game_config_from_dict(data: dict[str, Any] | None) -> GameConfig:
    """
    Build a GameConfig from the sections of a config file.

    Missing keys keep their defaults.

    Raises:
        ValueError: If a value has the wrong type or breaks a game rule
    """
    data = data or {}
    defaults = GameConfig()
    game = _section(data, "game")
    costs = _section(data, "costs")
    limits = _section(data, "limits")
    weather = _section(data, "weather")
    display = _section(data, "display")

    schedule = defaults.lemonade_cost_schedule
    if "lemonade" in costs:
        try:
            schedule = [(int(entry["from_day"]), int(entry["cost"])) for entry in costs["lemonade"]]
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid costs.lemonade entry: {e}") from e

    theme = display.get("theme", defaults.theme)
    if theme not in VALID_THEMES:
        raise ValueError(f"Invalid theme: {theme}. Must be one of {VALID_THEMES}")

    try:
        config = GameConfig(
            num_players=int(game.get("players", defaults.num_players)),
            starting_assets=int(game.get("starting_assets", defaults.starting_assets)),
            sign_cost=int(costs.get("sign", defaults.sign_cost)),
            lemonade_cost_schedule=schedule,
            max_glasses=int(limits.get("glasses", defaults.max_glasses)),
            max_signs=int(limits.get("signs", defaults.max_signs)),
            max_price=int(limits.get("price", defaults.max_price)),
            sunny_chance=float(weather.get("sunny", defaults.sunny_chance)),
            cloudy_chance=float(weather.get("cloudy", defaults.cloudy_chance)),
            hot_dry_chance=float(weather.get("hot_dry", defaults.hot_dry_chance)),
            thunderstorm_chance=float(weather.get("thunderstorm", defaults.thunderstorm_chance)),
            theme=theme,
            weather_pause=float(display.get("weather_pause", defaults.weather_pause)),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration value: {e}") from e

    errors = config.validate()
    if errors:
        raise ValueError("; ".join(errors))
    return config


def game_config_to_dict(config: GameConfig) -> dict[str, Any]:
    """Inverse of game_config_from_dict."""
    return {
        "game": {
            "players": config.num_players,
            "starting_assets": config.starting_assets,
        },
        "costs": {
            "sign": config.sign_cost,
            "lemonade": [
                {"from_day": first_day, "cost": cost}
                for first_day, cost in sorted(config.lemonade_cost_schedule)
            ],
        },
        "limits": {
            "glasses": config.max_glasses,
            "signs": config.max_signs,
            "price": config.max_price,
        },
        "weather": {
            "sunny": config.sunny_chance,
            "cloudy": config.cloudy_chance,
            "hot_dry": config.hot_dry_chance,
            "thunderstorm": config.thunderstorm_chance,
        },
        "display": {
            "theme": config.theme,
            "weather_pause": config.weather_pause,
        },
    }


@dataclass
class HarnessConfig:
    """
    Complete configuration for a game session.

    Attributes:
        name: Human-readable name for this setup
        game: The rules of the game
        seed: Optional random seed for reproducible weather
        logging: Game transcript configuration
    """
    name: str = "Lemonsville"
    game: GameConfig = field(default_factory=GameConfig)
    seed: int | None = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "HarnessConfig":
        data = data or {}
        seed = data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise ValueError(f"Invalid seed: {seed!r}. Must be an integer")
        return cls(
            name=data.get("name", "Lemonsville"),
            game=game_config_from_dict(data),
            seed=seed,
            logging=LoggingConfig.from_dict(data.get("logging")),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.seed is not None:
            data["seed"] = self.seed
        data.update(game_config_to_dict(self.game))
        data["logging"] = {
            "local": self.logging.local,
            "dir": self.logging.dir,
        }
        return data


def load_config(path: str | Path) -> HarnessConfig:
    """
    Load a game configuration from a YAML file.

    Args:
        path: Path to YAML config file

    Returns:
        HarnessConfig instance

    Example:
        config = load_config("config.yaml")
        print(config.game.num_players)
    """
    path = Path(path)

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is not None and not isinstance(data, dict):
        raise ValueError(f"{path} must contain a YAML mapping")

    return HarnessConfig.from_dict(data)


def save_config(config: HarnessConfig, path: str | Path) -> None:
    """
    Save a game configuration to a YAML file.

    Args:
        config: HarnessConfig to save
        path: Output path
    """
    path = Path(path)

    with open(path, "w") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


# Example config template
EXAMPLE_CONFIG = """# Lemonade Stand Game Configuration
name: "Lemonsville"

# seed: 42  # Uncomment for the same weather every game

game:
  players: 1             # 1-30 stands, taking turns at one keyboard
  starting_assets: 200   # cents ($2.00)

costs:
  sign: 15               # cents per advertising sign
  lemonade:              # cents per glass, from the given day on
    - {from_day: 1, cost: 2}   # Mother gives you some sugar
    - {from_day: 3, cost: 4}   # ...until she stops
    - {from_day: 7, cost: 5}   # Lemonade mix goes up

limits:
  glasses: 1000
  signs: 50
  price: 100             # cents

weather:
  sunny: 0.4             # Draw chances - must add up to 1.0
  cloudy: 0.3
  hot_dry: 0.3
  thunderstorm: 0.25     # Chance a cloudy day turns into a storm

display:
  theme: modern          # Options: modern, classic (green-screen)
  weather_pause: 2.0     # Seconds to show the weather report

logging:
  local: false           # Save a JSON transcript of every game
  dir: ./runs
"""


def create_example_config(path: str | Path = "lemonade.yaml") -> None:
    """
    Create an example configuration file.

    Args:
        path: Output path for the config file
    """
    path = Path(path)
    with open(path, "w") as f:
        f.write(EXAMPLE_CONFIG)
