"""Tests for practice table setup."""

from random import Random

import pytest

from engine.rules import PayoutRule
from engine.table import PayoutConfig, random_seat_configs


class TestRandomSeatConfigs:
    """Tests for generated tables."""

    def test_four_seats_one_autonomous(self, rng):
        configs = random_seat_configs(4, rng=rng)

        assert [c.seat_number for c in configs] == [1, 2, 3, 4]
        assert sum(c.is_autonomous for c in configs) == 1
        assert all(5 <= c.bet <= 50 for c in configs)

    def test_single_seat_is_never_autonomous(self, rng):
        configs = random_seat_configs(1, rng=rng)
        assert not configs[0].is_autonomous

    def test_fixed_payout(self, rng):
        configs = random_seat_configs(4, PayoutConfig.SIX_TO_FIVE, rng)
        assert {c.payout_rule for c in configs} == {PayoutRule.SIX_TO_FIVE}

    def test_mixed_payout_favours_three_to_two(self):
        configs = random_seat_configs(2000, PayoutConfig.MIXED, Random(0))
        share = sum(c.payout_rule == PayoutRule.THREE_TO_TWO for c in configs) / len(configs)
        assert 0.65 < share < 0.75

    def test_reproducible_with_seed(self):
        assert random_seat_configs(4, rng=Random(3)) == random_seat_configs(4, rng=Random(3))

    def test_needs_a_seat(self):
        with pytest.raises(ValueError):
            random_seat_configs(0)
