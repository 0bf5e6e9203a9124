"""Tests for payout resolution."""

from decimal import Decimal

import pytest

from engine.payout import (
    Outcome,
    SeatResult,
    insurance_delta,
    insurance_stake,
    main_bet_delta,
    resolve_side_bet,
)
from engine.rules import PayoutRule
from engine.sidebets import SideBet


class TestMainBet:
    """Tests for main bet deltas."""

    @pytest.mark.parametrize(
        "outcome,bet,expected",
        [
            (Outcome.WIN, 20, Decimal("20")),
            (Outcome.LOSS, 20, Decimal("-20")),
            (Outcome.PUSH, 20, Decimal("0")),
            (Outcome.SURRENDER, 20, Decimal("-10")),
            (Outcome.EVEN_MONEY, 10, Decimal("10")),
            (Outcome.BLACKJACK, 10, Decimal("15")),
        ],
    )
    def test_delta_by_outcome(self, outcome, bet, expected):
        assert main_bet_delta(outcome, bet) == expected

    def test_six_to_five_blackjack(self):
        assert main_bet_delta(Outcome.BLACKJACK, 10, PayoutRule.SIX_TO_FIVE) == Decimal("12")

    def test_odd_bet_pays_half_dollars(self):
        """Test that a 3:2 payout on an odd bet keeps the half dollar."""
        assert main_bet_delta(Outcome.BLACKJACK, 25) == Decimal("37.5")


class TestInsurance:
    """Tests for insurance money."""

    def test_stake_is_half_the_bet(self):
        assert insurance_stake(10) == Decimal("5")

    def test_pays_two_to_one_on_dealer_blackjack(self):
        assert insurance_delta(10, dealer_has_blackjack=True) == Decimal("10")

    def test_lost_otherwise(self):
        assert insurance_delta(10, dealer_has_blackjack=False) == Decimal("-5")


class TestSideBets:
    """Tests for side bet settlement."""

    def test_winning_side_bet(self, cards):
        outcome = resolve_side_bet(SideBet.PERFECT_PAIRS, 5, cards("8H", "8D"), cards("9C")[0])
        assert outcome.won
        assert outcome.hand_name == "Colored Pair"
        assert outcome.payout == Decimal("60")
        assert outcome.net == Decimal("60")

    def test_losing_side_bet_forfeits_stake(self, cards):
        outcome = resolve_side_bet(SideBet.TWENTY_ONE_PLUS_THREE, 5, cards("2S", "9H"), cards("KD")[0])
        assert not outcome.won
        assert outcome.payout == Decimal("0")
        assert outcome.net == Decimal("-5")


class TestSeatResult:
    """Tests for the per-seat total."""

    def test_total_adds_every_wager(self):
        result = SeatResult(
            seat_id="1",
            outcome=Outcome.LOSS,
            main=Decimal("-10"),
            insurance=Decimal("10"),
            side_bets={SideBet.PERFECT_PAIRS: Decimal("60"), SideBet.TWENTY_ONE_PLUS_THREE: Decimal("-5")},
        )
        assert result.total == Decimal("55")
