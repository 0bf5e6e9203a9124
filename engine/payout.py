"""Payout resolution: turns final outcomes into money."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Sequence

from engine.cards import Card
from engine.rules import PayoutRule
from engine.sidebets import SideBet, perfect_pairs, twenty_one_plus_three


class Outcome(Enum):
    """Terminal result of a seat's main bet."""

    WIN = "win"
    LOSS = "loss"
    PUSH = "push"
    BLACKJACK = "blackjack"
    SURRENDER = "surrender"
    EVEN_MONEY = "evenMoney"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SideBetOutcome:
    """A side bet settled at deal time."""

    kind: SideBet
    stake: int
    won: bool
    hand_name: str | None = None
    multiplier: int = 0

    @property
    def payout(self) -> Decimal:
        """Winnings paid on top of the returned stake (0 on a loss)."""
        return Decimal(self.stake * self.multiplier) if self.won else Decimal("0")

    @property
    def net(self) -> Decimal:
        """Net change to the player's bankroll."""
        return self.payout if self.won else Decimal(-self.stake)


def resolve_side_bet(kind: SideBet, stake: int, cards: Sequence[Card], dealer_up_card: Card) -> SideBetOutcome:
    """
    Settle one side bet against a seat's first two cards.

    Args:
        kind: Which wager
        stake: Amount wagered
        cards: The seat's two-card starting hand
        dealer_up_card: The dealer's face-up card (only used by 21+3)
    """
    if kind == SideBet.PERFECT_PAIRS:
        result = perfect_pairs(cards)
    else:
        result = twenty_one_plus_three(cards, dealer_up_card)

    if result is None:
        return SideBetOutcome(kind=kind, stake=stake, won=False)
    return SideBetOutcome(
        kind=kind,
        stake=stake,
        won=True,
        hand_name=result.name,
        multiplier=result.multiplier,
    )


def main_bet_delta(outcome: Outcome, bet: int, payout_rule: PayoutRule = PayoutRule.THREE_TO_TWO) -> Decimal:
    """
    Net bankroll change for a seat's main bet.

    Args:
        outcome: Final result of the hand
        bet: Bet on the hand (already doubled if the player doubled down)
        payout_rule: The seat's blackjack payout

    Returns:
        Positive for winnings, negative for losses, zero for a push
    """
    stake = Decimal(bet)
    if outcome in (Outcome.WIN, Outcome.EVEN_MONEY):
        return stake
    if outcome == Outcome.BLACKJACK:
        return stake * payout_rule.multiplier
    if outcome == Outcome.SURRENDER:
        return -stake / 2
    if outcome == Outcome.LOSS:
        return -stake
    return Decimal("0")  # Push


def insurance_stake(bet: int) -> Decimal:
    """Insurance costs half the original bet."""
    return Decimal(bet) / 2


def insurance_delta(bet: int, dealer_has_blackjack: bool) -> Decimal:
    """Insurance pays 2:1 against a dealer blackjack and is lost otherwise."""
    stake = insurance_stake(bet)
    return stake * 2 if dealer_has_blackjack else -stake


@dataclass(frozen=True)
class SeatResult:
    """Money movement for one seat at settlement."""

    seat_id: str
    outcome: Outcome
    main: Decimal
    insurance: Decimal = Decimal("0")
    side_bets: dict[SideBet, Decimal] = field(default_factory=dict)

    @property
    def total(self) -> Decimal:
        """Net change across main bet, insurance and side bets."""
        return self.main + self.insurance + sum(self.side_bets.values(), Decimal("0"))
