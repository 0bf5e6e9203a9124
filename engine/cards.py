"""Card and Shoe classes - immutable card representations."""

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from random import Random
from typing import Iterable, Iterator, Sequence

from engine.errors import EmptyShoeError


class Suit(Enum):
    """Card suits."""

    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Check if this suit is red (hearts or diamonds)."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks; the enum value doubles as the poker ordering (Ace high)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @classmethod
    def from_symbol(cls, symbol: str) -> "Rank":
        """Look up a rank by its printed symbol ('A', '2'..'10', 'J', 'Q', 'K')."""
        symbol = symbol.strip().upper()
        if symbol == "T":
            symbol = "10"
        for rank in cls:
            if str(rank) == symbol:
                return rank
        raise ValueError(f"Invalid rank: {symbol}")


_SUIT_CODES = {
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable playing card.

    Equality and hashing only look at rank and suit, so a revealed hole card
    is still the same card as its face-down self.
    """

    rank: Rank
    suit: Suit
    face_down: bool = field(default=False, compare=False)

    def __str__(self) -> str:
        if self.face_down:
            return "??"
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        hidden = ", face_down=True" if self.face_down else ""
        return f"Card({self.rank.name}, {self.suit.name}{hidden})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    def turned_down(self) -> "Card":
        """Return this card dealt face-down."""
        return replace(self, face_down=True)

    def revealed(self) -> "Card":
        """Return this card turned face-up."""
        return replace(self, face_down=False)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh', '10D'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        suit_str = s[-1]
        if suit_str not in _SUIT_CODES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(Rank.from_symbol(s[:-1]), _SUIT_CODES[suit_str])


def standard_deck() -> list[Card]:
    """Return the 52 cards of a single deck in suit-major order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


@dataclass(frozen=True)
class Shoe:
    """
    A single-deck shoe for one round.

    The shoe is immutable: drawing returns the card together with a new,
    smaller shoe. The top of the shoe is the end of ``cards``.
    """

    cards: tuple[Card, ...] = ()

    def draw(self) -> tuple[Card, "Shoe"]:
        """Draw the top card, returning it with the remaining shoe."""
        if not self.cards:
            raise EmptyShoeError("Cannot draw from empty shoe")
        return self.cards[-1], Shoe(self.cards[:-1])

    def shuffled(self, rng: Random | None = None) -> "Shoe":
        """Return a new shoe holding the same cards in a fresh random order."""
        cards = list(self.cards)
        (rng or Random()).shuffle(cards)
        return Shoe(tuple(cards))

    def extract(self, ranks: Sequence[Rank]) -> tuple[tuple[Card, ...], "Shoe"]:
        """
        Pull the first available card of each requested rank.

        Cards are searched in draw order. Asking for the same rank twice
        takes two distinct cards of that rank.

        Args:
            ranks: Ranks to pull, in the order the cards should be returned

        Returns:
            The extracted cards and the shoe without them (order preserved)

        Raises:
            ValueError: if a requested rank is no longer in the shoe
        """
        remaining = list(reversed(self.cards))  # draw order
        extracted: list[Card] = []
        for rank in ranks:
            index = next((i for i, c in enumerate(remaining) if c.rank == rank), None)
            if index is None:
                raise ValueError(f"No {rank} left in shoe")
            extracted.append(remaining.pop(index))
        return tuple(extracted), Shoe(tuple(reversed(remaining)))

    def promote(self, rank: Rank, depth: int = 0) -> "Shoe":
        """
        Move the first card of ``rank`` so that it is drawn ``depth`` cards from now.

        A shoe without that rank is returned unchanged.
        """
        order = list(reversed(self.cards))
        index = next((i for i, c in enumerate(order) if c.rank == rank), None)
        if index is None:
            return self
        card = order.pop(index)
        order.insert(min(depth, len(order)), card)
        return Shoe(tuple(reversed(order)))

    @classmethod
    def stacked(cls, top_cards: Iterable[Card], rng: Random | None = None) -> "Shoe":
        """
        Build a full shoe whose first draws are ``top_cards`` in order.

        The rest of the deck is shuffled underneath them.
        """
        top = [Card(c.rank, c.suit) for c in top_cards]
        taken = set(top)
        if len(taken) != len(top):
            raise ValueError("Stacked cards must be unique")
        rest = [c for c in standard_deck() if c not in taken]
        (rng or Random()).shuffle(rest)
        return cls(tuple(rest) + tuple(reversed(top)))

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        """Iterate in draw order (top card first)."""
        return reversed(self.cards)


def create_shuffled_shoe(rng: Random | None = None) -> Shoe:
    """Build a fresh 52-card shoe in uniformly random order."""
    cards = standard_deck()
    (rng or Random()).shuffle(cards)  # Fisher-Yates
    return Shoe(tuple(cards))
