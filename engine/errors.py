"""Errors raised by round transitions."""


class RoundError(Exception):
    """Base class for every error the round engine raises."""


class InvalidBetError(RoundError):
    """One or more seats hold a missing or out-of-range bet at deal time."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"seat {seat_id}: {msg}" for seat_id, msg in self.errors.items())
        super().__init__(f"Please correct all bet errors before dealing ({detail})")


class IllegalActionError(RoundError):
    """The requested action is not permitted in the current round state."""

    def __init__(self, action: str, reason: str, seat_id: str | None = None) -> None:
        self.action = action
        self.reason = reason
        self.seat_id = seat_id
        target = f" for seat {seat_id}" if seat_id is not None else ""
        super().__init__(f"Cannot {action}{target}: {reason}")


class EmptyShoeError(RoundError):
    """The shoe ran out of cards mid-round; the round must be restarted."""
