"""Chip breakdown for payouts."""

from decimal import Decimal

# Denominations largest first; 0.5 covers 3:2 payouts on odd bets
CHIP_DENOMINATIONS: tuple[Decimal, ...] = (
    Decimal("500"),
    Decimal("100"),
    Decimal("25"),
    Decimal("5"),
    Decimal("1"),
    Decimal("0.5"),
)


def calculate_chips(amount: Decimal | int | float | str) -> dict[Decimal, int]:
    """
    Break an amount into the fewest chips, taking the largest denomination first.

    Anything smaller than the smallest chip is dropped.

    Returns:
        Count per denomination, only for denominations actually used
    """
    remaining = abs(Decimal(str(amount)))
    chips: dict[Decimal, int] = {}
    for denomination in CHIP_DENOMINATIONS:
        count = int(remaining // denomination)
        if count:
            chips[denomination] = count
            remaining -= denomination * count
    return chips
