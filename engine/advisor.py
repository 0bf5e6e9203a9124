"""
Advisor hand-off and grading.

The round engine never consults an advisor. The surrounding application
builds a snapshot of the acting seat, asks whatever advisor it has, and
grades the trainee's action against the recommendation afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from engine.cards import Card
from engine.game.actions import ActionKind
from engine.game.round import RoundState, legal_actions


class Decision(Enum):
    """What kind of choice the seat is facing."""

    PLAY = "play"
    INSURANCE = "insurance"
    EVEN_MONEY = "evenMoney"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AdvisorSnapshot:
    """Read-only view of one seat's decision point."""

    seat_id: str
    seat_hand: tuple[Card, ...]
    dealer_up_card: Card | None
    legal_actions: tuple[ActionKind, ...]
    decision: Decision
    rules: str = ""


@dataclass(frozen=True)
class Advice:
    """An advisor's recommendation."""

    recommended_action: ActionKind
    explanation: str


class Advisor(Protocol):
    """Anything that can recommend an action for a snapshot."""

    def advise(self, snapshot: AdvisorSnapshot) -> Advice: ...


@dataclass(frozen=True)
class Feedback:
    """Result of grading one trainee decision."""

    correct: bool
    message: str


def snapshot(state: RoundState, seat_id: str) -> AdvisorSnapshot:
    """
    Capture what an advisor needs to judge ``seat_id``'s next move.

    Raises:
        KeyError: if no seat has that id
    """
    seat = state.seat(seat_id)
    if seat.can_take_even_money:
        decision = Decision.EVEN_MONEY
    elif seat.can_decide_insurance:
        decision = Decision.INSURANCE
    else:
        decision = Decision.PLAY

    return AdvisorSnapshot(
        seat_id=seat_id,
        seat_hand=seat.hand.cards,
        dealer_up_card=state.dealer_up_card,
        legal_actions=legal_actions(state, seat_id),
        decision=decision,
        rules=state.rules.description,
    )


def grade(advice: Advice, action_taken: ActionKind) -> Feedback:
    """Compare the trainee's action with the advisor's pick."""
    if action_taken == advice.recommended_action:
        return Feedback(correct=True, message=f"Correct! {advice.explanation}")
    best = str(advice.recommended_action).upper()
    return Feedback(
        correct=False,
        message=f"Incorrect. The best move was {best}. {advice.explanation}",
    )


_SIDE_DECISIONS = frozenset(
    {
        ActionKind.ACCEPT_INSURANCE,
        ActionKind.DECLINE_INSURANCE,
        ActionKind.ACCEPT_EVEN_MONEY,
        ActionKind.DECLINE_EVEN_MONEY,
    }
)


@dataclass
class TrainingStats:
    """
    Running score of the trainee's decisions.

    Each hand is graded on its first playing decision only. Insurance and
    even-money choices are graded every time they come up.
    """

    correct: int = 0
    incorrect: int = 0
    evaluated: set[str] = field(default_factory=set)

    @property
    def total(self) -> int:
        return self.correct + self.incorrect

    @property
    def accuracy(self) -> float:
        """Fraction of graded decisions that were correct."""
        if self.total == 0:
            return 0.0
        return self.correct / self.total

    def should_grade(self, seat_id: str, action: ActionKind) -> bool:
        """Whether this decision still counts toward the score."""
        return action in _SIDE_DECISIONS or seat_id not in self.evaluated

    def record(self, seat_id: str, action: ActionKind, advice: Advice) -> Feedback | None:
        """
        Grade and count a decision.

        Returns:
            The feedback, or None if the hand was already graded
        """
        if not self.should_grade(seat_id, action):
            return None

        feedback = grade(advice, action)
        if feedback.correct:
            self.correct += 1
        else:
            self.incorrect += 1
        if action not in _SIDE_DECISIONS:
            self.evaluated.add(seat_id)
        return feedback

    def new_round(self) -> None:
        """Forget which hands were graded; scores carry over."""
        self.evaluated.clear()

    def reset(self) -> None:
        self.correct = 0
        self.incorrect = 0
        self.evaluated.clear()
