"""Hand evaluation for blackjack."""

from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple

from engine.cards import Card


class HandDetails(NamedTuple):
    """A hand total together with its soft/hard classification."""

    value: int
    is_soft: bool


def hand_details(cards: Iterable[Card], count_face_down: bool = False) -> HandDetails:
    """
    Calculate the best total of a run of cards.

    Aces start at 11 and drop to 1, one at a time, while the total is over 21.
    The hand is soft when at least one Ace is still worth 11 afterwards.

    Args:
        cards: Cards to total
        count_face_down: Include face-down cards (used to peek at the hole card)
    """
    total = 0
    aces = 0

    for card in cards:
        if card.face_down and not count_face_down:
            continue
        if card.is_ace:
            aces += 1
            total += 11
        else:
            total += card.value

    # Reduce aces from 11 to 1 as needed
    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return HandDetails(total, aces > 0)


def hand_value(cards: Iterable[Card], count_face_down: bool = False) -> int:
    """Return the best total of a run of cards."""
    return hand_details(cards, count_face_down).value


def is_blackjack(cards: Iterable[Card]) -> bool:
    """Check for a natural: exactly two cards totalling 21, hole card included."""
    cards = tuple(cards)
    return len(cards) == 2 and hand_value(cards, count_face_down=True) == 21


@dataclass(frozen=True)
class Hand:
    """
    An immutable blackjack hand.

    Totals are recomputed from the cards on every access.
    """

    cards: tuple[Card, ...] = ()

    def with_card(self, card: Card) -> "Hand":
        """Return a new hand with ``card`` added."""
        return Hand(self.cards + (card,))

    def revealed(self) -> "Hand":
        """Return the hand with every card face-up."""
        return Hand(tuple(card.revealed() for card in self.cards))

    @property
    def value(self) -> int:
        """Return the best visible total."""
        return hand_value(self.cards)

    @property
    def details(self) -> HandDetails:
        """Return the visible total and softness."""
        return hand_details(self.cards)

    @property
    def is_soft(self) -> bool:
        """Check if the hand is soft (has an ace counted as 11)."""
        return self.details.is_soft

    @property
    def is_hard(self) -> bool:
        """Check if the hand is hard (not soft)."""
        return not self.is_soft

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return is_blackjack(self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    @property
    def is_pair(self) -> bool:
        """Check if the hand is a pair (two cards of same rank)."""
        return (
            len(self.cards) == 2
            and self.cards[0].rank == self.cards[1].rank
        )

    @property
    def has_hidden_card(self) -> bool:
        """Check if any card is still face-down."""
        return any(card.face_down for card in self.cards)

    @property
    def up_card(self) -> Card | None:
        """Return the first face-up card, if any."""
        return next((card for card in self.cards if not card.face_down), None)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack and not self.has_hidden_card:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"


def compare_hands(player_hand: Hand, dealer_hand: Hand, player_has_blackjack: bool | None = None) -> int:
    """
    Compare player and dealer hands.

    Args:
        player_hand: The player's final hand
        dealer_hand: The dealer's final, revealed hand
        player_has_blackjack: Override natural detection (split hands never
            count as blackjack even when they hold two cards totalling 21)

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    if player_has_blackjack is None:
        player_has_blackjack = player_hand.is_blackjack

    player_value = player_hand.value
    dealer_value = dealer_hand.value

    # Player busts always loses
    if player_hand.is_busted:
        return -1

    dealer_bj = dealer_hand.is_blackjack

    if player_has_blackjack and dealer_bj:
        return 0  # Push
    if player_has_blackjack:
        return 1
    if dealer_bj:
        return -1

    # Dealer busts, player wins
    if dealer_hand.is_busted:
        return 1

    if player_value > dealer_value:
        return 1
    if dealer_value > player_value:
        return -1
    return 0  # Push
