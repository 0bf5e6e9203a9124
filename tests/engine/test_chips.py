"""Tests for chip breakdowns."""

from decimal import Decimal

from engine.chips import calculate_chips


class TestCalculateChips:
    """Tests for the greedy chip breakdown."""

    def test_nothing(self):
        assert calculate_chips(0) == {}

    def test_single_denomination(self):
        assert calculate_chips(15) == {Decimal("5"): 3}

    def test_every_denomination(self):
        assert calculate_chips(Decimal("637.5")) == {
            Decimal("500"): 1,
            Decimal("100"): 1,
            Decimal("25"): 1,
            Decimal("5"): 2,
            Decimal("1"): 2,
            Decimal("0.5"): 1,
        }

    def test_blackjack_payout_on_odd_bet(self):
        """Test the 3:2 payout on $25."""
        assert calculate_chips(Decimal("37.5")) == {
            Decimal("25"): 1,
            Decimal("5"): 2,
            Decimal("1"): 2,
            Decimal("0.5"): 1,
        }

    def test_losses_use_the_absolute_amount(self):
        assert calculate_chips(-30) == {Decimal("25"): 1, Decimal("5"): 1}

    def test_fractions_below_smallest_chip_dropped(self):
        assert calculate_chips("0.25") == {}
