"""Blackjack round engine - 100% UI-agnostic."""

from engine.cards import Card, Shoe, Rank, Suit
from engine.hand import Hand
from engine.errors import RoundError, InvalidBetError, IllegalActionError, EmptyShoeError

__all__ = [
    "Card",
    "Shoe",
    "Rank",
    "Suit",
    "Hand",
    "RoundError",
    "InvalidBetError",
    "IllegalActionError",
    "EmptyShoeError",
]
