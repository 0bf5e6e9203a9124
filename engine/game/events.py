"""Game events recorded by round transitions."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    """Types of game events."""

    # Round flow events
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Betting events
    BET_PLACED = auto()
    BET_REJECTED = auto()
    SIDE_BET_PLACED = auto()
    SIDE_BET_REMOVED = auto()
    SIDE_BET_RESOLVED = auto()
    TIP_PLACED = auto()
    TIP_REMOVED = auto()

    # Card events
    CARD_DEALT = auto()
    SHOE_CREATED = auto()

    # Player action events
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_SPLIT = auto()
    PLAYER_SURRENDER = auto()
    TURN_CHANGED = auto()

    # Insurance events
    INSURANCE_OFFERED = auto()
    INSURANCE_TAKEN = auto()
    INSURANCE_DECLINED = auto()
    EVEN_MONEY_TAKEN = auto()
    EVEN_MONEY_DECLINED = auto()

    # Dealer events
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()
    DEALER_BLACKJACK = auto()

    # Outcome events
    PLAYER_BLACKJACK = auto()
    PLAYER_BUSTS = auto()
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable game event.

    Events are the primary communication mechanism between the round engine
    and the presentation layer. Every transition appends the events it caused
    to ``RoundState.events``.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


def new_event(event_type: EventType, **data: Any) -> GameEvent:
    """
    Create a new event.

    Args:
        event_type: Type of event
        **data: Event data

    Returns:
        The created event
    """
    return GameEvent(event_type=event_type, data=data)
