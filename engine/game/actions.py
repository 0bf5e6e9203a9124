"""Player actions as a closed set of variants."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


class ActionKind(Enum):
    """Wire names of the trainee's actions."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"
    SURRENDER = "surrender"
    ACCEPT_INSURANCE = "acceptInsurance"
    DECLINE_INSURANCE = "declineInsurance"
    ACCEPT_EVEN_MONEY = "acceptEvenMoney"
    DECLINE_EVEN_MONEY = "declineEvenMoney"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Hit:
    kind: ClassVar[ActionKind] = ActionKind.HIT


@dataclass(frozen=True)
class Stand:
    kind: ClassVar[ActionKind] = ActionKind.STAND


@dataclass(frozen=True)
class Double:
    kind: ClassVar[ActionKind] = ActionKind.DOUBLE


@dataclass(frozen=True)
class Split:
    kind: ClassVar[ActionKind] = ActionKind.SPLIT


@dataclass(frozen=True)
class Surrender:
    kind: ClassVar[ActionKind] = ActionKind.SURRENDER


@dataclass(frozen=True)
class AcceptInsurance:
    kind: ClassVar[ActionKind] = ActionKind.ACCEPT_INSURANCE


@dataclass(frozen=True)
class DeclineInsurance:
    kind: ClassVar[ActionKind] = ActionKind.DECLINE_INSURANCE


@dataclass(frozen=True)
class AcceptEvenMoney:
    kind: ClassVar[ActionKind] = ActionKind.ACCEPT_EVEN_MONEY


@dataclass(frozen=True)
class DeclineEvenMoney:
    kind: ClassVar[ActionKind] = ActionKind.DECLINE_EVEN_MONEY


Action = Union[
    Hit,
    Stand,
    Double,
    Split,
    Surrender,
    AcceptInsurance,
    DeclineInsurance,
    AcceptEvenMoney,
    DeclineEvenMoney,
]

_BY_KIND: dict[ActionKind, type] = {
    cls.kind: cls
    for cls in (
        Hit,
        Stand,
        Double,
        Split,
        Surrender,
        AcceptInsurance,
        DeclineInsurance,
        AcceptEvenMoney,
        DeclineEvenMoney,
    )
}


def action_for(kind: ActionKind) -> Action:
    """Return the action variant for ``kind``."""
    return _BY_KIND[kind]()


def action_from_name(name: str) -> Action:
    """
    Parse a wire name such as 'hit' or 'acceptInsurance'.

    Raises:
        ValueError: for an unknown action name
    """
    try:
        kind = ActionKind(name)
    except ValueError:
        raise ValueError(f"Unknown action: {name}") from None
    return action_for(kind)
