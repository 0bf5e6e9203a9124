"""Blackjack table rules for the trainer."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class PayoutRule(Enum):
    """What a natural blackjack pays at a given seat."""

    THREE_TO_TWO = "3:2"
    SIX_TO_FIVE = "6:5"

    def __str__(self) -> str:
        return self.value

    @property
    def multiplier(self) -> Decimal:
        """Return the blackjack payout as a multiple of the bet."""
        if self == PayoutRule.THREE_TO_TWO:
            return Decimal("1.5")
        return Decimal("1.2")


@dataclass(frozen=True)
class RuleSet:
    """
    Blackjack table rules configuration.

    The trainer deals a single fresh deck every round, pays insurance 2:1
    and lets the dealer peek for blackjack.
    """

    # Betting limits
    min_bet: int = 5
    max_bet: int = 500

    # Dealer rules
    dealer_hits_soft_17: bool = True  # H17 vs S17

    # Insurance / even money offered when the dealer shows an Ace
    insurance_allowed: bool = True

    # Late surrender on the first two cards
    surrender_allowed: bool = True

    # Fixed stake placed when a side bet is switched on
    side_bet_stake: int = 5

    # Fixed dealer tip a seat can toggle during betting
    tip_amount: int = 1

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.min_bet < 1:
            raise ValueError("min_bet must be at least 1")
        if self.max_bet < self.min_bet:
            raise ValueError("max_bet must not be below min_bet")
        if self.side_bet_stake < 1:
            raise ValueError("side_bet_stake must be at least 1")
        if self.tip_amount < 1:
            raise ValueError("tip_amount must be at least 1")

    @property
    def description(self) -> str:
        """Human-readable summary handed to the advisor collaborator."""
        soft_17 = "hits" if self.dealer_hits_soft_17 else "stands on"
        return f"Dealer {soft_17} soft 17. Payouts: BJ 3:2 | Win 1:1 | 6:5 available in practice"
