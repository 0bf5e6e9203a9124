"""Table setup: seat configuration for a betting phase."""

from enum import Enum
from random import Random

from engine.game.seats import SeatConfig
from engine.rules import PayoutRule


class PayoutConfig(Enum):
    """Blackjack payout assignment for the whole table."""

    THREE_TO_TWO = "3:2"
    SIX_TO_FIVE = "6:5"
    MIXED = "mixed"

    def __str__(self) -> str:
        return self.value


# Share of seats paying 3:2 at a mixed table
MIXED_THREE_TO_TWO_SHARE = 0.7

# Range of bets placed for generated seats
GENERATED_BET_RANGE = (5, 50)


def payout_rule_for(config: PayoutConfig, rng: Random) -> PayoutRule:
    """Pick a seat's blackjack payout under the table's payout config."""
    if config == PayoutConfig.MIXED:
        if rng.random() < MIXED_THREE_TO_TWO_SHARE:
            return PayoutRule.THREE_TO_TWO
        return PayoutRule.SIX_TO_FIVE
    return PayoutRule(config.value)


def random_seat_configs(
    num_seats: int = 4,
    payout_config: PayoutConfig = PayoutConfig.THREE_TO_TWO,
    rng: Random | None = None,
) -> list[SeatConfig]:
    """
    Set up a practice table.

    At a table of two or more, one randomly chosen seat plays automatically.
    Every seat starts with a random bet so the trainee has payouts to work out.

    Args:
        num_seats: Seats at the table
        payout_config: How blackjack payouts are assigned
        rng: Random number generator for reproducible tables
    """
    if num_seats < 1:
        raise ValueError("A table needs at least one seat")
    rng = rng or Random()
    auto_seat = rng.randint(1, num_seats) if num_seats > 1 else None
    low, high = GENERATED_BET_RANGE

    return [
        SeatConfig(
            seat_number=number,
            bet=rng.randint(low, high),
            is_autonomous=number == auto_seat,
            payout_rule=payout_rule_for(payout_config, rng),
        )
        for number in range(1, num_seats + 1)
    ]
