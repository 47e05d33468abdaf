# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Tests for the lemonade-stand command line.
"""

import pytest
from typer.testing import CliRunner

from lemonade_stand.harness.cli import app
from lemonade_stand.harness.config import load_config


@pytest.fixture
def runner():
    return CliRunner()


# glasses, signs, price for one day, then "no" to another game
RUINOUS_DAY = "100\n0\n100\nn\n"


class TestPlay:
    """Tests for hot-seat play."""

    def test_single_player_goes_bankrupt(self, runner):
        result = runner.invoke(app, ["play", "--no-pause", "--seed", "42"], input=RUINOUS_DAY)
        assert result.exit_code == 0, result.output
        assert "Welcome to Lemonsville" in result.output
        assert "LEMONSVILLE DAILY FINANCIAL REPORT" in result.output
        assert "YOU'RE BANKRUPT" in result.output
        assert "Player 1 wins with $0.00!" in result.output
        assert "Would you like to play again?" in result.output

    def test_malformed_input_is_asked_again(self, runner):
        result = runner.invoke(app, ["play", "--no-pause"], input="lots\n" + RUINOUS_DAY)
        assert result.exit_code == 0, result.output
        assert "Please enter valid numbers." in result.output
        assert "Player 1 wins" in result.output

    def test_unaffordable_plan_is_entered_again(self, runner):
        result = runner.invoke(app, ["play", "--no-pause"], input="101\n0\n10\n" + RUINOUS_DAY)
        assert result.exit_code == 0, result.output
        assert "You don't have enough money! You have $2.00 but need $2.02" in result.output

    def test_out_of_range_price(self, runner):
        result = runner.invoke(app, ["play", "--no-pause"], input="0\n0\n500\n" + RUINOUS_DAY)
        assert result.exit_code == 0, result.output
        assert "Please enter a reasonable price (0-100 cents)." in result.output

    def test_two_players_share_the_win(self, runner):
        result = runner.invoke(
            app,
            ["play", "--players", "2", "--no-pause", "--classic"],
            input="100\n0\n100\n100\n0\n100\nn\n",
        )
        assert result.exit_code == 0, result.output
        assert "IT'S A TIE BETWEEN PLAYERS: 1, 2 WITH $0.00 EACH!" in result.output

    def test_bot_fills_a_seat(self, runner):
        result = runner.invoke(
            app,
            ["play", "--bots", "1", "--bot-strategy", "cautious", "--players", "0", "--no-pause", "--max-days", "2"],
            input="n\n",
        )
        assert result.exit_code == 0, result.output
        assert "Stopped after 2 days." in result.output

    def test_too_many_players(self, runner):
        result = runner.invoke(app, ["play", "--players", "31"])
        assert result.exit_code == 1
        assert "between 1 and 30" in result.output

    def test_no_players(self, runner):
        result = runner.invoke(app, ["play", "--players", "0"])
        assert result.exit_code == 1

    def test_bad_strategy(self, runner):
        result = runner.invoke(app, ["play", "--bots", "1", "--bot-strategy", "psychic"])
        assert result.exit_code == 1
        assert "Invalid strategy" in result.output

    def test_transcript_saved(self, runner, tmp_path):
        result = runner.invoke(
            app, ["play", "--no-pause", "--log-dir", str(tmp_path)], input=RUINOUS_DAY
        )
        assert result.exit_code == 0, result.output
        assert len(list(tmp_path.glob("*/game.json"))) == 1


class TestSimulate:
    """Tests for computer-only games."""

    def test_quiet_summary(self, runner):
        result = runner.invoke(app, ["simulate", "--players", "3", "--seed", "42", "--max-days", "5", "--quiet"])
        assert result.exit_code == 0, result.output
        assert "Days Played" in result.output
        assert "Seed" in result.output
        assert "LEMONSVILLE" not in result.output

    def test_verbose(self, runner):
        result = runner.invoke(app, ["simulate", "--strategy", "cautious", "--seed", "1", "--max-days", "3"])
        assert result.exit_code == 0, result.output
        assert "Starting Game" in result.output
        assert "Final Standings" in result.output

    def test_seed_from_environment(self, runner):
        result = runner.invoke(
            app, ["simulate", "--max-days", "2", "--quiet"], env={"LEMONADE_STAND_SEED": "9"}
        )
        assert result.exit_code == 0, result.output
        assert "Seed" in result.output

    def test_bad_max_days(self, runner):
        result = runner.invoke(app, ["simulate", "--max-days", "0"])
        assert result.exit_code == 1


class TestConfigCommands:
    """Tests for rules and config files."""

    def test_rules(self, runner):
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        assert "Game Instructions" in result.output
        assert "advertising signs" in result.output

    def test_init_config(self, runner, tmp_path):
        path = tmp_path / "lemonade.yaml"
        result = runner.invoke(app, ["init-config", str(path)])
        assert result.exit_code == 0, result.output
        assert load_config(path).game.sign_cost == 15

        again = runner.invoke(app, ["init-config", str(path)])
        assert again.exit_code == 1

        forced = runner.invoke(app, ["init-config", str(path), "--force"])
        assert forced.exit_code == 0

    def test_play_with_config(self, runner, tmp_path):
        path = tmp_path / "rich.yaml"
        path.write_text("game:\n  starting_assets: 1000\n")
        result = runner.invoke(app, ["play", "--no-pause", "--config", str(path)], input="500\n0\n100\nn\n")
        assert result.exit_code == 0, result.output
        assert "Assets: $10.00" in result.output

    def test_missing_config(self, runner, tmp_path):
        result = runner.invoke(app, ["simulate", "--config", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_invalid_config(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("weather:\n  sunny: 0.9\n")
        result = runner.invoke(app, ["simulate", "--config", str(path)])
        assert result.exit_code == 1
        assert "Invalid config" in result.output

    @pytest.mark.parametrize("text", ["game: 5\n", "logging: yes\n", "costs: [1, 2]\n"])
    def test_badly_shaped_config(self, runner, tmp_path, text):
        path = tmp_path / "shape.yaml"
        path.write_text(text)
        result = runner.invoke(app, ["simulate", "--config", str(path), "--quiet", "--max-days", "1"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, AttributeError)
        assert "Invalid config" in result.output
        assert "must be a mapping" in result.output
