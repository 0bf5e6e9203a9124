"""Pytest fixtures for blackjack trainer tests."""

import pytest
from random import Random

from engine.cards import Card, Shoe, Rank, Suit
from engine.game import SeatConfig, deal, start_round
from engine.hand import Hand
from engine.rules import PayoutRule, RuleSet


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def cards():
    """Build cards from short codes such as 'AS', '10H' or 'K♦'."""

    def _cards(*codes: str) -> tuple[Card, ...]:
        return tuple(Card.from_string(code) for code in codes)

    return _cards


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand((Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)))


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand((Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)))


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand((Card(Rank.TEN, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)))


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return Hand((Card(Rank.EIGHT, Suit.SPADES), Card(Rank.EIGHT, Suit.HEARTS)))


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand(
        (
            Card(Rank.TEN, Suit.SPADES),
            Card(Rank.SIX, Suit.HEARTS),
            Card(Rank.KING, Suit.CLUBS),
        )
    )


@pytest.fixture
def seat_configs():
    """Factory for seat configs in table order."""

    def _configs(num_seats=1, bet=10, autonomous=(), payout_rule=PayoutRule.THREE_TO_TWO):
        return [
            SeatConfig(
                seat_number=n,
                bet=bet,
                is_autonomous=n in autonomous,
                payout_rule=payout_rule,
            )
            for n in range(1, num_seats + 1)
        ]

    return _configs


@pytest.fixture
def dealt(rng, cards, seat_configs):
    """
    Factory: open a round and deal it from a stacked shoe.

    ``top`` lists the first cards out of the shoe in deal order: two per
    seat in table order, then the dealer's up-card and hole card, then
    whatever later hits and dealer draws should receive.
    """

    def _dealt(*top, rules=None, **config_kwargs):
        state = start_round(seat_configs(**config_kwargs), rules or RuleSet())
        return deal(state, shoe=Shoe.stacked(cards(*top), rng))

    return _dealt
