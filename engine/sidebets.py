"""Side bet classifiers: Perfect Pairs and 21+3."""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from engine.cards import Card, Rank


class SideBet(Enum):
    """Side wagers a seat can place alongside its main bet."""

    TWENTY_ONE_PLUS_THREE = "21+3"
    PERFECT_PAIRS = "perfectPairs"

    def __str__(self) -> str:
        return self.value


# Pays N:1
PERFECT_PAIRS_PAYOUTS = {
    "Perfect Pair": 25,  # Same suit, same rank
    "Colored Pair": 12,  # Same color, different suit, same rank
    "Mixed Pair": 6,  # Different color, same rank
}

TWENTY_ONE_PLUS_THREE_PAYOUTS = {
    "Straight Flush": 40,
    "Three of a Kind": 30,
    "Straight": 10,
    "Flush": 5,
}


@dataclass(frozen=True)
class SideBetHand:
    """A winning side-bet combination and what it pays."""

    name: str
    multiplier: int

    def __str__(self) -> str:
        return f"{self.name} ({self.multiplier}:1)"


def perfect_pairs(cards: Sequence[Card]) -> SideBetHand | None:
    """
    Classify the first two cards of a hand for the Perfect Pairs wager.

    Returns:
        The pair tier, or None if the cards are not a pair
    """
    if len(cards) != 2:
        return None
    first, second = cards

    if first.rank != second.rank:
        return None

    if first.suit == second.suit:
        name = "Perfect Pair"
    elif first.suit.is_red == second.suit.is_red:
        name = "Colored Pair"
    else:
        name = "Mixed Pair"
    return SideBetHand(name, PERFECT_PAIRS_PAYOUTS[name])


def _is_straight(values: list[int]) -> bool:
    """Check sorted poker values for three in a row, including A-2-3."""
    if values[2] - values[1] == 1 and values[1] - values[0] == 1:
        return True
    return values == [Rank.TWO.value, Rank.THREE.value, Rank.ACE.value]


def twenty_one_plus_three(cards: Sequence[Card], dealer_up_card: Card) -> SideBetHand | None:
    """
    Classify a seat's first two cards plus the dealer up-card as a poker hand.

    Hands are checked strongest first, so a suited run is a straight flush
    rather than a straight or a flush.

    Returns:
        The best qualifying poker hand, or None
    """
    three_cards = [*cards, dealer_up_card]
    if len(three_cards) != 3:
        return None

    values = sorted(card.rank.value for card in three_cards)
    is_flush = len({card.suit for card in three_cards}) == 1
    is_straight = _is_straight(values)

    if is_flush and is_straight:
        name = "Straight Flush"
    elif values[0] == values[1] == values[2]:
        name = "Three of a Kind"
    elif is_straight:
        name = "Straight"
    elif is_flush:
        name = "Flush"
    else:
        return None
    return SideBetHand(name, TWENTY_ONE_PLUS_THREE_PAYOUTS[name])
