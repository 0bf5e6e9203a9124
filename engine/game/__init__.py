"""Round state machine and transitions."""

from engine.game.actions import (
    Action,
    ActionKind,
    Hit,
    Stand,
    Double,
    Split,
    Surrender,
    AcceptInsurance,
    DeclineInsurance,
    AcceptEvenMoney,
    DeclineEvenMoney,
    action_from_name,
)
from engine.game.events import GameEvent, EventType
from engine.game.seats import PlayerSeat, SeatConfig
from engine.game.state import Phase
from engine.game.round import (
    RoundState,
    start_round,
    set_bet,
    toggle_side_bet,
    toggle_tip,
    deal,
    legal_actions,
    apply_action,
    advance_dealer,
    play_dealer,
    settle,
    next_round,
)

__all__ = [
    "Action",
    "ActionKind",
    "Hit",
    "Stand",
    "Double",
    "Split",
    "Surrender",
    "AcceptInsurance",
    "DeclineInsurance",
    "AcceptEvenMoney",
    "DeclineEvenMoney",
    "action_from_name",
    "GameEvent",
    "EventType",
    "PlayerSeat",
    "SeatConfig",
    "Phase",
    "RoundState",
    "start_round",
    "set_bet",
    "toggle_side_bet",
    "toggle_tip",
    "deal",
    "legal_actions",
    "apply_action",
    "advance_dealer",
    "play_dealer",
    "settle",
    "next_round",
]
