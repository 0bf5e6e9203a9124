"""Player seats and their derived capabilities."""

from dataclasses import dataclass, field

from engine.game.actions import ActionKind
from engine.hand import Hand
from engine.payout import Outcome, SideBetOutcome
from engine.rules import PayoutRule
from engine.sidebets import SideBet


@dataclass(frozen=True)
class SeatConfig:
    """How a seat is set up for a betting phase."""

    seat_number: int
    bet: int | None = None
    is_autonomous: bool = False
    payout_rule: PayoutRule = PayoutRule.THREE_TO_TWO
    side_bets: dict[SideBet, int] = field(default_factory=dict)
    tip: int = 0


def split_seat_id(origin_seat: int, generation: int) -> str:
    """Label for the ``generation``-th hand split off seat ``origin_seat``."""
    return f"{origin_seat}-split-{generation}"


@dataclass(frozen=True)
class PlayerSeat:
    """
    One hand at the table with its bet and status.

    A split produces a new seat that points back at its origin through
    ``origin_seat``; ``split_generation`` is 0 for the original seat.
    Capability flags are properties, recomputed from the hand and status
    on every read.
    """

    seat_id: str
    origin_seat: int
    split_generation: int = 0
    hand: Hand = field(default_factory=Hand)
    bet: int | None = None
    payout_rule: PayoutRule = PayoutRule.THREE_TO_TWO
    is_autonomous: bool = False
    surrender_allowed: bool = True
    side_bets: dict[SideBet, int] = field(default_factory=dict)
    side_bet_outcomes: dict[SideBet, SideBetOutcome] = field(default_factory=dict)
    tip: int = 0
    bet_error: str | None = None

    is_finished: bool = False
    insurance_pending: bool = False
    even_money_offered: bool = False
    has_insurance: bool = False
    has_taken_even_money: bool = False
    has_doubled: bool = False
    has_split: bool = False
    outcome: Outcome | None = None

    @classmethod
    def from_config(cls, seat_config: "SeatConfig", surrender_allowed: bool = True) -> "PlayerSeat":
        """Create an empty seat for a new betting phase."""
        return cls(
            seat_id=str(seat_config.seat_number),
            origin_seat=seat_config.seat_number,
            bet=seat_config.bet,
            payout_rule=seat_config.payout_rule,
            is_autonomous=seat_config.is_autonomous,
            surrender_allowed=surrender_allowed,
            side_bets=dict(seat_config.side_bets),
            tip=seat_config.tip,
        )

    @property
    def is_split_hand(self) -> bool:
        """Check if this hand was born of a split."""
        return self.split_generation > 0

    @property
    def value(self) -> int:
        """Return the hand total."""
        return self.hand.value

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted."""
        return self.hand.is_busted

    @property
    def has_blackjack(self) -> bool:
        """A natural on the original two cards; hands from a split never qualify."""
        return self.hand.is_blackjack and not self.is_split_hand and not self.has_split

    @property
    def is_untouched(self) -> bool:
        """Two dealt cards and no split involved."""
        return len(self.hand) == 2 and not self.is_split_hand and not self.has_split

    @property
    def _can_play(self) -> bool:
        """Open for regular play: dealt, not finished, no side decision pending."""
        return (
            len(self.hand) >= 2
            and not self.is_finished
            and not self.is_busted
            and not self.insurance_pending
            and not self.even_money_offered
        )

    @property
    def can_hit(self) -> bool:
        return self._can_play and self.value < 21

    @property
    def can_stand(self) -> bool:
        return self._can_play

    @property
    def can_double(self) -> bool:
        return self._can_play and self.is_untouched and not self.has_doubled

    @property
    def can_split(self) -> bool:
        return self._can_play and self.is_untouched and self.hand.is_pair

    @property
    def can_surrender(self) -> bool:
        return self._can_play and self.is_untouched and self.surrender_allowed

    @property
    def can_take_even_money(self) -> bool:
        return self.even_money_offered and not self.is_finished

    @property
    def can_decide_insurance(self) -> bool:
        return self.insurance_pending and not self.is_finished

    @property
    def legal_actions(self) -> tuple[ActionKind, ...]:
        """Actions the seat may take right now, in display order."""
        if self.can_take_even_money:
            return (ActionKind.ACCEPT_EVEN_MONEY, ActionKind.DECLINE_EVEN_MONEY)
        if self.can_decide_insurance:
            return (ActionKind.ACCEPT_INSURANCE, ActionKind.DECLINE_INSURANCE)

        flags = (
            (self.can_hit, ActionKind.HIT),
            (self.can_stand, ActionKind.STAND),
            (self.can_double, ActionKind.DOUBLE),
            (self.can_split, ActionKind.SPLIT),
            (self.can_surrender, ActionKind.SURRENDER),
        )
        return tuple(kind for allowed, kind in flags if allowed)

    @property
    def needs_dealer_total(self) -> bool:
        """Whether settling this seat still depends on the dealer's hand."""
        return not (
            self.is_busted
            or self.outcome == Outcome.SURRENDER
            or self.has_taken_even_money
        )
