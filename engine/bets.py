"""Bet parsing and table-limit checks."""

from decimal import Decimal, InvalidOperation

from engine.rules import RuleSet


def parse_bet(raw: object) -> tuple[int | None, str | None]:
    """
    Turn user input into a whole-dollar bet.

    Returns:
        (amount, error); amount is None when nothing usable was entered
    """
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        return None, "Bet is required."
    if isinstance(raw, bool):
        return None, "Must be a whole number."

    try:
        amount = Decimal(str(raw).strip())
    except InvalidOperation:
        return None, "Must be a whole number."
    if not amount.is_finite() or amount != amount.to_integral_value():
        return None, "Must be a whole number."
    return int(amount), None


def validate_bet(amount: int | None, rules: RuleSet) -> str | None:
    """
    Check a bet against the table limits.

    Returns:
        An error message, or None if the bet is acceptable
    """
    if amount is None:
        return "Bet is required."
    if amount < rules.min_bet:
        return f"Min bet is ${rules.min_bet}."
    if amount > rules.max_bet:
        return f"Max bet is ${rules.max_bet}."
    return None
