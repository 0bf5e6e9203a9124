"""Round phases and the legal moves between them."""

from enum import Enum, auto

from transitions import Machine, MachineError

from engine.errors import IllegalActionError


class Phase(Enum):
    """
    Round state machine states.

    Flow: BETTING → DEALING → PLAYER_TURNS → DEALER_TURN → SETTLEMENT → ROUND_COMPLETE
    """

    # Seats configured, bets being placed
    BETTING = auto()

    # Cards being dealt (only observable inside the deal transition)
    DEALING = auto()

    # Trainee seats act one at a time
    PLAYER_TURNS = auto()

    # Hole card reveal and dealer draws
    DEALER_TURN = auto()

    # Dealer finished, outcomes not yet computed
    SETTLEMENT = auto()

    # Outcomes recorded, ready for the next betting phase
    ROUND_COMPLETE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


STATES = [p.name.lower() for p in Phase]

TRANSITIONS = [
    {"trigger": "deal", "source": "betting", "dest": "dealing"},
    {"trigger": "open_turns", "source": "dealing", "dest": "player_turns"},
    {"trigger": "skip_turns", "source": "dealing", "dest": "dealer_turn"},
    {"trigger": "finish_turns", "source": "player_turns", "dest": "dealer_turn"},
    # Insurance decision exposed a dealer blackjack
    {"trigger": "dealer_blackjack", "source": "player_turns", "dest": "settlement"},
    {"trigger": "dealer_done", "source": "dealer_turn", "dest": "settlement"},
    {"trigger": "settle", "source": "settlement", "dest": "round_complete"},
    {"trigger": "new_round", "source": "round_complete", "dest": "betting"},
]


class _PhaseModel:
    """Throwaway model the machine drives for a single trigger."""


def advance_phase(phase: Phase, trigger: str) -> Phase:
    """
    Fire ``trigger`` from ``phase`` and return the resulting phase.

    Raises:
        IllegalActionError: if the trigger is not allowed from ``phase``
    """
    model = _PhaseModel()
    Machine(
        model=model,
        states=STATES,
        transitions=TRANSITIONS,
        initial=phase.name.lower(),
        auto_transitions=False,
        model_attribute="_machine_state",
    )
    try:
        model.trigger(trigger)  # type: ignore[attr-defined]
    except MachineError as exc:
        raise IllegalActionError(trigger.replace("_", " "), f"round is in {phase} phase") from exc
    return Phase[model._machine_state.upper()]  # type: ignore[attr-defined]


def require_phase(phase: Phase, expected: Phase, action: str) -> None:
    """Raise IllegalActionError unless the round is in ``expected``."""
    if phase != expected:
        raise IllegalActionError(action, f"round is in {phase} phase, not {expected}")
