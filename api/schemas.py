"""Pydantic schemas for API requests and responses."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ActionName = Literal[
    "hit",
    "stand",
    "double",
    "split",
    "surrender",
    "acceptInsurance",
    "declineInsurance",
    "acceptEvenMoney",
    "declineEvenMoney",
]


# Round schemas
class NewRoundRequest(BaseModel):
    """Request to open a practice table."""

    level: int | None = Field(default=None, ge=1, le=6, description="Training level")
    payout_config: Literal["3:2", "6:5", "mixed"] | None = None
    num_seats: int | None = Field(default=None, ge=1, le=7)


class BetRequest(BaseModel):
    """Bet typed in for a seat; validated by the engine so errors stay on the seat."""

    seat_id: str
    amount: int | str | None = None


class SideBetRequest(BaseModel):
    """Toggle a fixed-stake side bet."""

    seat_id: str
    kind: Literal["21+3", "perfectPairs"]


class TipRequest(BaseModel):
    """Toggle the fixed dealer tip for a seat."""

    seat_id: str


class AdviceRequest(BaseModel):
    """What the advisor recommended for the decision being submitted."""

    recommended_action: ActionName
    explanation: str = ""


class ActionRequest(BaseModel):
    """Request for a trainee action."""

    seat_id: str
    action: ActionName
    advice: AdviceRequest | None = None


class CardResponse(BaseModel):
    """Card representation; face-down cards carry no rank or suit."""

    model_config = ConfigDict(from_attributes=True)

    rank: str | None
    suit: str | None
    value: int
    face_down: bool = False


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    value: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool


class SideBetOutcomeResponse(BaseModel):
    """A side bet settled at deal time."""

    kind: str
    stake: int
    won: bool
    hand_name: str | None
    payout: float


class SeatResponse(BaseModel):
    """One seat at the table."""

    seat_id: str
    origin_seat: int
    split_generation: int
    hand: HandResponse
    bet: int | None
    payout_rule: str
    is_autonomous: bool
    side_bets: dict[str, int]
    side_bet_outcomes: list[SideBetOutcomeResponse]
    tip: int
    bet_error: str | None
    is_finished: bool
    insurance_pending: bool
    even_money_offered: bool
    has_insurance: bool
    has_taken_even_money: bool
    has_doubled: bool
    has_split: bool
    outcome: str | None
    legal_actions: list[str]


class SeatResultResponse(BaseModel):
    """Money movement for one seat."""

    seat_id: str
    outcome: str
    main: float
    insurance: float
    side_bets: dict[str, float]
    total: float
    chips: dict[str, int]


class EventResponse(BaseModel):
    """A game event produced by the last request."""

    type: str
    data: dict[str, Any]


class FeedbackResponse(BaseModel):
    """Grading of the trainee's last decision."""

    correct: bool
    message: str


class TrainingStatsResponse(BaseModel):
    """Running score of graded decisions."""

    correct: int
    incorrect: int
    accuracy: float


class RoundStateResponse(BaseModel):
    """Current round state."""

    phase: str
    level: int
    level_title: str
    rules: str
    dealer: HandResponse
    dealer_up_card: CardResponse | None
    seats: list[SeatResponse]
    turn_seat_id: str | None
    insurance_offered: bool
    total_tips: int
    cards_remaining: int
    results: list[SeatResultResponse]
    events: list[EventResponse]
    stats: TrainingStatsResponse
    feedback: FeedbackResponse | None = None


class NewRoundResponse(BaseModel):
    """A freshly opened table and the session it lives in."""

    session_id: str
    state: RoundStateResponse


class AdvisorSnapshotResponse(BaseModel):
    """Read-only decision point handed to an advisor."""

    seat_id: str
    seat_hand: list[CardResponse]
    dealer_up_card: CardResponse | None
    legal_actions: list[str]
    decision: str
    rules: str
