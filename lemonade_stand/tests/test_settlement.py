# Copyright (c) 2025 Lemonade Stand Contributors
# BSD-3-Clause License

"""
Tests for daily settlement.

Covers:
- Price factor and signage uplift
- Sales capped by production
- Income, expenses, profit and assets
- Thunderstorm days
- Clamping and bankruptcy
- Game over and winner resolution
"""

from decimal import Decimal

import pytest

from lemonade_stand.models import PlayerDecision, PlayerState, Weather
from lemonade_stand.settlement import (
    SettlementError,
    base_sales,
    glasses_sold,
    is_game_over,
    price_factor,
    resolve_winners,
    settle_day,
    settle_player,
    signage_uplift,
)


class TestDemandCurve:
    """Tests for price factor and signage uplift."""

    def test_price_factor_below_reference(self):
        """Below 10 cents demand rises linearly from 30 towards 54."""
        assert price_factor(5) == Decimal(42)
        assert price_factor(0) == Decimal(54)
        assert price_factor(9) == Decimal("32.4")

    def test_price_factor_at_and_above_reference(self):
        """From 10 cents up demand falls with the square of the price."""
        assert price_factor(10) == Decimal(30)
        assert price_factor(20) == Decimal("7.5")
        assert price_factor(100) == Decimal("0.3")

    def test_price_factor_never_increases_with_price(self):
        factors = [price_factor(p) for p in range(0, 101)]
        assert all(a >= b for a, b in zip(factors, factors[1:]))

    def test_no_signs_no_uplift(self):
        assert signage_uplift(0) == 0

    def test_uplift_saturates_below_one(self):
        assert Decimal("0.63") < signage_uplift(2) < Decimal("0.64")
        assert Decimal("0.99") < signage_uplift(50) < 1

    def test_more_signs_never_lower_sales(self):
        """Holding price fixed, more signs never reduce base sales."""
        for price in (0, 5, 10, 25, 100):
            sales = [
                base_sales(PlayerDecision(glasses=1000, signs=s, price=price), Decimal("1.0"))
                for s in range(0, 51)
            ]
            assert all(a <= b for a, b in zip(sales, sales[1:]))

    def test_base_sales_example(self):
        """Sunny, 2 signs, 5 cents: about 68.5 glasses."""
        sales = base_sales(PlayerDecision(glasses=50, signs=2, price=5), Decimal("1.0"))
        assert Decimal("68.5") < sales < Decimal("68.6")

    def test_weather_scales_demand(self, make_day):
        decision = PlayerDecision(glasses=1000, signs=0, price=10)
        assert glasses_sold(decision, make_day(Weather.SUNNY)) == 30
        assert glasses_sold(decision, make_day(Weather.HOT_DRY)) == 60
        assert glasses_sold(decision, make_day(Weather.CLOUDY)) == 18


class TestSettlePlayer:
    """Tests for settling a single stand."""

    def test_example_settlement(self, player, example_decision, sunny_context):
        """50 glasses, 2 signs, 5 cents on a sunny day."""
        result = settle_player(player, example_decision, sunny_context)

        assert result.glasses_sold == 50
        assert result.income == 250
        assert result.expenses == 130
        assert result.profit == 120
        assert result.assets == 320
        assert player.assets == 320
        assert result.newly_bankrupt is False
        assert player.bankrupt is False

    def test_result_echoes_decision(self, player, example_decision, sunny_context):
        result = settle_player(player, example_decision, sunny_context)
        assert result.player_id == 0
        assert result.day == 1
        assert result.price == 5
        assert result.glasses_made == 50
        assert result.signs_made == 2

    def test_sales_never_exceed_production(self, sunny_context):
        for glasses in (0, 1, 10, 29, 30, 31, 100):
            player = PlayerState(player_id=0, assets=1000)
            result = settle_player(player, PlayerDecision(glasses=glasses, signs=0, price=10), sunny_context)
            assert result.glasses_sold == min(glasses, 30)

    def test_unsold_lemonade_still_costs(self, player, sunny_context):
        """Expenses are charged on every glass made."""
        result = settle_player(player, PlayerDecision(glasses=80, signs=0, price=10), sunny_context)
        assert result.glasses_sold == 30
        assert result.expenses == 160
        assert result.income == 300
        assert result.profit == 140

    def test_thunderstorm_sells_nothing(self, player, example_decision, storm_context):
        result = settle_player(player, example_decision, storm_context)
        assert result.glasses_sold == 0
        assert result.income == 0
        assert result.profit == -130
        assert player.assets == 70

    def test_assets_clamped_at_zero(self, sunny_context):
        """Losses beyond the stand's assets leave it at $0.00, not below."""
        player = PlayerState(player_id=0, assets=10)
        result = settle_player(player, PlayerDecision(glasses=100, signs=0, price=100), sunny_context)
        assert result.profit == -200
        assert result.assets == 0
        assert player.assets == 0
        assert player.bankrupt is True

    def test_bankrupt_when_one_glass_is_unaffordable(self, sunny_context):
        player = PlayerState(player_id=0, assets=3)
        result = settle_player(player, PlayerDecision(glasses=1, signs=0, price=0), sunny_context)
        assert result.assets == 1
        assert result.newly_bankrupt is True
        assert player.bankrupt is True

    def test_exactly_one_glass_left_is_solvent(self, sunny_context):
        player = PlayerState(player_id=0, assets=2)
        result = settle_player(player, PlayerDecision(), sunny_context)
        assert result.assets == 2
        assert result.newly_bankrupt is False
        assert player.bankrupt is False

    def test_threshold_follows_cost_of_lemonade(self, make_day):
        """Four cents is enough on day 1 but not once lemonade costs five."""
        early = PlayerState(player_id=0, assets=4)
        settle_player(early, PlayerDecision(), make_day(Weather.SUNNY, day=1, lemonade_cost=2))
        assert early.bankrupt is False

        late = PlayerState(player_id=1, assets=4)
        settle_player(late, PlayerDecision(), make_day(Weather.SUNNY, day=7, lemonade_cost=5))
        assert late.bankrupt is True

    def test_bankrupt_stand_cannot_be_settled(self, sunny_context):
        player = PlayerState(player_id=0, assets=0, bankrupt=True)
        with pytest.raises(SettlementError):
            settle_player(player, PlayerDecision(), sunny_context)


class TestSettleDay:
    """Tests for settling every stand at once."""

    def test_settles_active_players_in_order(self, sunny_context):
        players = [PlayerState(player_id=i, assets=200) for i in range(3)]
        decisions = {
            2: PlayerDecision(glasses=10, signs=0, price=10),
            0: PlayerDecision(glasses=20, signs=1, price=8),
            1: PlayerDecision(),
        }
        results = settle_day(players, decisions, sunny_context)
        assert [r.player_id for r in results] == [0, 1, 2]
        assert all(p.assets >= 0 for p in players)

    def test_bankrupt_players_are_skipped(self, sunny_context):
        players = [
            PlayerState(player_id=0, assets=0, bankrupt=True),
            PlayerState(player_id=1, assets=200),
        ]
        decisions = {
            0: PlayerDecision(glasses=10, signs=0, price=10),
            1: PlayerDecision(glasses=10, signs=0, price=10),
        }
        results = settle_day(players, decisions, sunny_context)
        assert [r.player_id for r in results] == [1]
        assert players[0].assets == 0
        assert players[0].bankrupt is True

    def test_bankruptcy_is_one_way(self, make_day):
        players = [PlayerState(player_id=0, assets=0, bankrupt=True), PlayerState(player_id=1, assets=200)]
        for day in range(1, 10):
            settle_day(players, {1: PlayerDecision()}, make_day(Weather.HOT_DRY, day=day))
            assert players[0].bankrupt is True

    def test_storm_zeroes_every_stand(self, storm_context):
        players = [PlayerState(player_id=i, assets=200) for i in range(3)]
        decisions = {
            0: PlayerDecision(glasses=50, signs=2, price=5),
            1: PlayerDecision(glasses=10, signs=10, price=0),
            2: PlayerDecision(glasses=100, signs=0, price=10),
        }
        results = settle_day(players, decisions, storm_context)
        assert all(r.glasses_sold == 0 for r in results)

    def test_missing_decision_raises(self, sunny_context):
        players = [PlayerState(player_id=0, assets=200), PlayerState(player_id=1, assets=200)]
        with pytest.raises(SettlementError, match="No decision for stand 2"):
            settle_day(players, {0: PlayerDecision()}, sunny_context)

    def test_invalid_decision_leaves_everyone_untouched(self, sunny_context):
        players = [PlayerState(player_id=0, assets=200), PlayerState(player_id=1, assets=200)]
        decisions = {
            0: PlayerDecision(glasses=50, signs=2, price=5),
            1: PlayerDecision(glasses=101, signs=0, price=10),  # $2.02 > $2.00
        }
        with pytest.raises(SettlementError, match="Stand 2"):
            settle_day(players, decisions, sunny_context)
        assert [p.assets for p in players] == [200, 200]

    def test_out_of_range_decision_raises(self, sunny_context):
        players = [PlayerState(player_id=0, assets=100000)]
        with pytest.raises(SettlementError):
            settle_day(players, {0: PlayerDecision(glasses=0, signs=51, price=10)}, sunny_context)


class TestGameOver:
    """Tests for the game-over check."""

    def test_all_bankrupt(self):
        players = [PlayerState(player_id=i, assets=0, bankrupt=True) for i in range(3)]
        assert is_game_over(players) is True

    def test_one_solvent_player_keeps_game_going(self):
        players = [PlayerState(player_id=i, assets=0, bankrupt=True) for i in range(3)]
        players[1].bankrupt = False
        players[1].assets = 500
        assert is_game_over(players) is False

    def test_fresh_game_not_over(self):
        assert is_game_over([PlayerState(player_id=0, assets=200)]) is False


class TestWinnerResolution:
    """Tests for resolving the winner."""

    def test_single_winner(self):
        players = [
            PlayerState(player_id=0, assets=1, bankrupt=True),
            PlayerState(player_id=1, assets=3, bankrupt=True),
        ]
        winner = resolve_winners(players)
        assert winner.winners == [1]
        assert winner.max_assets == 3
        assert winner.is_tie is False
        assert winner.message == "Player 2 wins with $0.03!"

    def test_tie_is_reported_jointly(self):
        players = [
            PlayerState(player_id=0, assets=500),
            PlayerState(player_id=1, assets=500),
            PlayerState(player_id=2, assets=300),
        ]
        winner = resolve_winners(players)
        assert winner.winners == [0, 1]
        assert winner.is_tie is True
        assert winner.message == "It's a tie between players: 1, 2 with $5.00 each!"

    def test_everyone_broke_is_a_tie(self):
        players = [PlayerState(player_id=i, assets=0, bankrupt=True) for i in range(3)]
        winner = resolve_winners(players)
        assert winner.winners == [0, 1, 2]
        assert winner.message == "It's a tie between players: 1, 2, 3 with $0.00 each!"

    def test_no_players_raises(self):
        with pytest.raises(ValueError):
            resolve_winners([])
