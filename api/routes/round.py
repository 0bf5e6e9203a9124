"""Round API endpoints."""

import time
from collections import OrderedDict
from dataclasses import asdict, dataclass, field, replace
from decimal import Decimal
from random import Random
from typing import Annotated, Any, Callable

from fastapi import APIRouter, HTTPException, Header

from api.schemas import (
    ActionRequest,
    AdvisorSnapshotResponse,
    BetRequest,
    CardResponse,
    EventResponse,
    FeedbackResponse,
    HandResponse,
    NewRoundRequest,
    NewRoundResponse,
    RoundStateResponse,
    SeatResponse,
    SeatResultResponse,
    SideBetOutcomeResponse,
    SideBetRequest,
    TipRequest,
    TrainingStatsResponse,
)
from api.session import create_session, extract_session_id, get_session, update_session
from config import config
from engine.advisor import Advice, Feedback, TrainingStats, snapshot
from engine.cards import Card, Rank, Shoe, Suit
from engine.chips import calculate_chips
from engine.errors import RoundError
from engine.game import (
    ActionKind,
    PlayerSeat,
    RoundState,
    action_from_name,
    advance_dealer,
    apply_action,
    deal,
    legal_actions,
    next_round,
    set_bet,
    settle,
    start_round,
    toggle_side_bet,
    toggle_tip,
)
from engine.game.state import Phase
from engine.hand import Hand
from engine.payout import Outcome, SeatResult, SideBetOutcome
from engine.rules import PayoutRule, RuleSet
from engine.scenarios import TrainingLevel, rules_for_level, stage_scenario
from engine.sidebets import SideBet
from engine.table import PayoutConfig, random_seat_configs

router = APIRouter()

# Session data keys
SESSION_KEY_TABLE = "table"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


@dataclass
class TrainingTable:
    """A session's live round plus the training settings around it."""

    state: RoundState
    level: TrainingLevel
    payout_config: PayoutConfig
    num_seats: int
    stats: TrainingStats = field(default_factory=TrainingStats)


class TableCache:
    """
    Recently used tables, kept in front of the session store.

    Entries idle for longer than ``ttl`` seconds are dropped on lookup, and
    the least recently used table goes once more than ``max_tables`` are held.
    """

    def __init__(self, max_tables: int, ttl: int) -> None:
        self.max_tables = max_tables
        self.ttl = ttl
        self._tables: OrderedDict[str, tuple[TrainingTable, float]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._tables)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._tables

    def get(self, session_id: str) -> TrainingTable | None:
        entry = self._tables.get(session_id)
        if entry is None:
            return None
        table, last_used = entry
        if time.time() - last_used >= self.ttl:
            del self._tables[session_id]
            return None
        self.put(session_id, table)
        return table

    def put(self, session_id: str, table: TrainingTable) -> None:
        self._tables[session_id] = (table, time.time())
        self._tables.move_to_end(session_id)
        while len(self._tables) > self.max_tables:
            self._tables.popitem(last=False)

    def clear(self) -> None:
        self._tables.clear()


_tables = TableCache(max_tables=config.table_cache_size, ttl=config.session_ttl)


# --- persistence -------------------------------------------------------------


def _serialize_card(card: Card) -> dict[str, Any]:
    """Serialize a card to a dict."""
    return {"rank": card.rank.value, "suit": card.suit.value, "face_down": card.face_down}


def _deserialize_card(data: dict[str, Any]) -> Card:
    """Deserialize a card from a dict."""
    return Card(Rank(data["rank"]), Suit(data["suit"]), face_down=data.get("face_down", False))


def _serialize_side_bet_outcome(outcome: SideBetOutcome) -> dict[str, Any]:
    return {
        "stake": outcome.stake,
        "won": outcome.won,
        "hand_name": outcome.hand_name,
        "multiplier": outcome.multiplier,
    }


def _serialize_seat(seat: PlayerSeat) -> dict[str, Any]:
    """Serialize a seat to a dict."""
    return {
        "seat_id": seat.seat_id,
        "origin_seat": seat.origin_seat,
        "split_generation": seat.split_generation,
        "cards": [_serialize_card(c) for c in seat.hand],
        "bet": seat.bet,
        "payout_rule": seat.payout_rule.value,
        "is_autonomous": seat.is_autonomous,
        "surrender_allowed": seat.surrender_allowed,
        "side_bets": {kind.value: stake for kind, stake in seat.side_bets.items()},
        "side_bet_outcomes": {
            kind.value: _serialize_side_bet_outcome(o) for kind, o in seat.side_bet_outcomes.items()
        },
        "tip": seat.tip,
        "bet_error": seat.bet_error,
        "is_finished": seat.is_finished,
        "insurance_pending": seat.insurance_pending,
        "even_money_offered": seat.even_money_offered,
        "has_insurance": seat.has_insurance,
        "has_taken_even_money": seat.has_taken_even_money,
        "has_doubled": seat.has_doubled,
        "has_split": seat.has_split,
        "outcome": seat.outcome.value if seat.outcome else None,
    }


def _deserialize_seat(data: dict[str, Any]) -> PlayerSeat:
    """Deserialize a seat from a dict."""
    return PlayerSeat(
        seat_id=data["seat_id"],
        origin_seat=data["origin_seat"],
        split_generation=data["split_generation"],
        hand=Hand(tuple(_deserialize_card(c) for c in data["cards"])),
        bet=data["bet"],
        payout_rule=PayoutRule(data["payout_rule"]),
        is_autonomous=data["is_autonomous"],
        surrender_allowed=data["surrender_allowed"],
        side_bets={SideBet(kind): stake for kind, stake in data["side_bets"].items()},
        side_bet_outcomes={
            SideBet(kind): SideBetOutcome(kind=SideBet(kind), **o)
            for kind, o in data["side_bet_outcomes"].items()
        },
        tip=data["tip"],
        bet_error=data["bet_error"],
        is_finished=data["is_finished"],
        insurance_pending=data["insurance_pending"],
        even_money_offered=data["even_money_offered"],
        has_insurance=data["has_insurance"],
        has_taken_even_money=data["has_taken_even_money"],
        has_doubled=data["has_doubled"],
        has_split=data["has_split"],
        outcome=Outcome(data["outcome"]) if data["outcome"] else None,
    )


def _serialize_result(result: SeatResult) -> dict[str, Any]:
    return {
        "seat_id": result.seat_id,
        "outcome": result.outcome.value,
        "main": str(result.main),
        "insurance": str(result.insurance),
        "side_bets": {kind.value: str(net) for kind, net in result.side_bets.items()},
    }


def _deserialize_result(data: dict[str, Any]) -> SeatResult:
    return SeatResult(
        seat_id=data["seat_id"],
        outcome=Outcome(data["outcome"]),
        main=Decimal(data["main"]),
        insurance=Decimal(data["insurance"]),
        side_bets={SideBet(kind): Decimal(net) for kind, net in data["side_bets"].items()},
    )


def _serialize_round(state: RoundState) -> dict[str, Any]:
    """Serialize round state for session storage (events are not kept)."""
    return {
        "phase": state.phase.name,
        "rules": asdict(state.rules),
        "seats": [_serialize_seat(s) for s in state.seats],
        "dealer": [_serialize_card(c) for c in state.dealer],
        "shoe": [_serialize_card(c) for c in state.shoe.cards] if state.shoe is not None else None,
        "turn_seat_id": state.turn_seat_id,
        "insurance_offered": state.insurance_offered,
        "total_tips": state.total_tips,
        "results": [_serialize_result(r) for r in state.results],
    }


def _deserialize_round(data: dict[str, Any]) -> RoundState:
    """Restore round state from session data."""
    shoe_data = data["shoe"]
    return RoundState(
        phase=Phase[data["phase"]],
        rules=RuleSet(**data["rules"]),
        seats=tuple(_deserialize_seat(s) for s in data["seats"]),
        dealer=Hand(tuple(_deserialize_card(c) for c in data["dealer"])),
        shoe=Shoe(tuple(_deserialize_card(c) for c in shoe_data)) if shoe_data is not None else None,
        turn_seat_id=data["turn_seat_id"],
        insurance_offered=data["insurance_offered"],
        total_tips=data["total_tips"],
        results=tuple(_deserialize_result(r) for r in data["results"]),
    )


def _serialize_table(table: TrainingTable) -> dict[str, Any]:
    return {
        "round": _serialize_round(table.state),
        "level": int(table.level),
        "payout_config": table.payout_config.value,
        "num_seats": table.num_seats,
        "stats": {
            "correct": table.stats.correct,
            "incorrect": table.stats.incorrect,
            "evaluated": sorted(table.stats.evaluated),
        },
    }


def _deserialize_table(data: dict[str, Any]) -> TrainingTable:
    stats = data.get("stats", {})
    return TrainingTable(
        state=_deserialize_round(data["round"]),
        level=TrainingLevel(data["level"]),
        payout_config=PayoutConfig(data["payout_config"]),
        num_seats=data["num_seats"],
        stats=TrainingStats(
            correct=stats.get("correct", 0),
            incorrect=stats.get("incorrect", 0),
            evaluated=set(stats.get("evaluated", [])),
        ),
    )


def _verified_session(token: str) -> str:
    """Return the session id behind a client token, or answer 401."""
    session_id = extract_session_id(token)
    if session_id is None:
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    return session_id


async def _load_table(session_id: str) -> TrainingTable | None:
    """Load table from session store."""
    session_data = await get_session(session_id)
    if session_data and SESSION_KEY_TABLE in session_data:
        return _deserialize_table(session_data[SESSION_KEY_TABLE])
    return None


async def _save_table(session_id: str, table: TrainingTable) -> None:
    """Save table to session store."""
    session_data = await get_session(session_id) or {}
    session_data[SESSION_KEY_TABLE] = _serialize_table(table)
    session_data[SESSION_KEY_LAST_ACTIVITY] = int(time.time())
    session_data.setdefault(SESSION_KEY_CREATED_AT, int(time.time()))
    await update_session(session_id, session_data)
    _tables.put(session_id, table)


def _open_table(
    level: TrainingLevel,
    payout_config: PayoutConfig,
    num_seats: int,
    rng: Random | None = None,
) -> TrainingTable:
    """Seat a fresh table in its betting phase."""
    rules = rules_for_level(level, config.game.rules())
    seat_configs = random_seat_configs(num_seats, payout_config, rng)
    return TrainingTable(
        state=start_round(seat_configs, rules),
        level=level,
        payout_config=payout_config,
        num_seats=num_seats,
    )


async def _get_table(session_id: str) -> TrainingTable:
    """Get or create a table for the session."""
    table = _tables.get(session_id)
    if table is not None:
        return table

    table = await _load_table(session_id)
    if table is not None:
        _tables.put(session_id, table)
        return table

    table = _open_table(
        TrainingLevel(config.game.default_level),
        PayoutConfig(config.game.payout_config),
        config.game.num_seats,
    )
    await _save_table(session_id, table)
    return table


# --- responses ---------------------------------------------------------------


def _card_response(card: Card) -> CardResponse:
    if card.face_down:
        return CardResponse(rank=None, suit=None, value=0, face_down=True)
    return CardResponse(rank=str(card.rank), suit=str(card.suit), value=card.value)


def _hand_response(hand: Hand) -> HandResponse:
    """Convert a Hand to HandResponse."""
    return HandResponse(
        cards=[_card_response(c) for c in hand],
        value=hand.value,
        is_soft=hand.is_soft,
        is_blackjack=hand.is_blackjack and not hand.has_hidden_card,
        is_busted=hand.is_busted,
    )


def _seat_response(state: RoundState, seat: PlayerSeat) -> SeatResponse:
    return SeatResponse(
        seat_id=seat.seat_id,
        origin_seat=seat.origin_seat,
        split_generation=seat.split_generation,
        hand=_hand_response(seat.hand),
        bet=seat.bet,
        payout_rule=str(seat.payout_rule),
        is_autonomous=seat.is_autonomous,
        side_bets={str(kind): stake for kind, stake in seat.side_bets.items()},
        side_bet_outcomes=[
            SideBetOutcomeResponse(
                kind=str(o.kind),
                stake=o.stake,
                won=o.won,
                hand_name=o.hand_name,
                payout=float(o.payout),
            )
            for o in seat.side_bet_outcomes.values()
        ],
        tip=seat.tip,
        bet_error=seat.bet_error,
        is_finished=seat.is_finished,
        insurance_pending=seat.insurance_pending,
        even_money_offered=seat.even_money_offered,
        has_insurance=seat.has_insurance,
        has_taken_even_money=seat.has_taken_even_money,
        has_doubled=seat.has_doubled,
        has_split=seat.has_split,
        outcome=str(seat.outcome) if seat.outcome else None,
        legal_actions=[str(kind) for kind in legal_actions(state, seat.seat_id)],
    )


def _result_response(result: SeatResult) -> SeatResultResponse:
    paid = calculate_chips(result.total) if result.total > 0 else {}
    return SeatResultResponse(
        seat_id=result.seat_id,
        outcome=str(result.outcome),
        main=float(result.main),
        insurance=float(result.insurance),
        side_bets={str(kind): float(net) for kind, net in result.side_bets.items()},
        total=float(result.total),
        chips={str(denomination): count for denomination, count in paid.items()},
    )


def _round_response(table: TrainingTable, feedback: Feedback | None = None) -> RoundStateResponse:
    """Convert table state to response."""
    state = table.state
    up_card = state.dealer_up_card
    return RoundStateResponse(
        phase=state.phase.name,
        level=int(table.level),
        level_title=table.level.title,
        rules=state.rules.description,
        dealer=_hand_response(state.dealer),
        dealer_up_card=_card_response(up_card) if up_card is not None else None,
        seats=[_seat_response(state, s) for s in state.seats],
        turn_seat_id=state.turn_seat_id,
        insurance_offered=state.insurance_offered,
        total_tips=state.total_tips,
        cards_remaining=len(state.shoe) if state.shoe is not None else 0,
        results=[_result_response(r) for r in state.results],
        events=[EventResponse(type=e.event_type.name, data=e.data) for e in state.events],
        stats=TrainingStatsResponse(
            correct=table.stats.correct,
            incorrect=table.stats.incorrect,
            accuracy=table.stats.accuracy,
        ),
        feedback=FeedbackResponse(correct=feedback.correct, message=feedback.message) if feedback else None,
    )


def _run(transition: Callable[..., RoundState], state: RoundState, *args: Any) -> RoundState:
    """Apply an engine transition, reporting rule violations as 400s."""
    try:
        return transition(state, *args)
    except RoundError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


async def _commit(
    session_id: str,
    table: TrainingTable,
    state: RoundState,
    feedback: Feedback | None = None,
) -> RoundStateResponse:
    """Store the new state and report it with the events it produced."""
    table.state = state
    response = _round_response(table, feedback)
    table.state = replace(state, events=())
    await _save_table(session_id, table)
    return response


# --- endpoints ---------------------------------------------------------------


@router.post("/new")
async def new_round(
    request: NewRoundRequest | None = None,
    token: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> NewRoundResponse:
    """Open a new practice table, starting a session if the client has none."""
    request = request or NewRoundRequest()
    if token is None:
        token = await create_session()
    session_id = _verified_session(token)

    previous = _tables.get(session_id) or await _load_table(session_id)
    table = _open_table(
        TrainingLevel(request.level or config.game.default_level),
        PayoutConfig(request.payout_config or config.game.payout_config),
        request.num_seats or config.game.num_seats,
    )
    if previous is not None:
        table.stats = previous.stats

    state = await _commit(session_id, table, table.state)
    return NewRoundResponse(session_id=token, state=state)


@router.get("/state")
async def get_state(
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> RoundStateResponse:
    """Get current round state."""
    table = await _get_table(_verified_session(token))
    return _round_response(table)


@router.post("/bet")
async def place_bet(
    request: BetRequest,
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> RoundStateResponse:
    """Record a bet for a seat; bad input shows up as the seat's bet_error."""
    session_id = _verified_session(token)
    table = await _get_table(session_id)
    state = _run(set_bet, table.state, request.seat_id, request.amount)
    return await _commit(session_id, table, state)


@router.post("/side-bet")
async def side_bet(
    request: SideBetRequest,
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> RoundStateResponse:
    """Switch a side bet on or off."""
    session_id = _verified_session(token)
    table = await _get_table(session_id)
    state = _run(toggle_side_bet, table.state, request.seat_id, SideBet(request.kind))
    return await _commit(session_id, table, state)


@router.post("/tip")
async def tip_dealer(
    request: TipRequest,
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> RoundStateResponse:
    """Switch a seat's dealer tip on or off."""
    session_id = _verified_session(token)
    table = await _get_table(session_id)
    state = _run(toggle_tip, table.state, request.seat_id)
    return await _commit(session_id, table, state)


@router.post("/deal")
async def deal_round(
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> RoundStateResponse:
    """Stage the level's scenario and deal the opening cards."""
    session_id = _verified_session(token)
    table = await _get_table(session_id)
    state = _run(stage_scenario, table.state, table.level)
    state = _run(deal, state)
    table.stats.new_round()
    return await _commit(session_id, table, state)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> RoundStateResponse:
    """Execute a trainee action, grading it when advice is attached."""
    session_id = _verified_session(token)
    table = await _get_table(session_id)
    action = action_from_name(request.action)
    state = _run(apply_action, table.state, request.seat_id, action)

    feedback = None
    if request.advice is not None:
        advice = Advice(
            recommended_action=ActionKind(request.advice.recommended_action),
            explanation=request.advice.explanation,
        )
        feedback = table.stats.record(request.seat_id, action.kind, advice)

    return await _commit(session_id, table, state, feedback)


@router.post("/dealer")
async def dealer_step(
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> RoundStateResponse:
    """Play one step of the dealer's turn."""
    session_id = _verified_session(token)
    table = await _get_table(session_id)
    state = _run(advance_dealer, table.state)
    return await _commit(session_id, table, state)


@router.post("/settle")
async def settle_round(
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> RoundStateResponse:
    """Settle every seat."""
    session_id = _verified_session(token)
    table = await _get_table(session_id)
    state = _run(settle, table.state)
    return await _commit(session_id, table, state)


@router.post("/next")
async def next_hand(
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> RoundStateResponse:
    """Open the next betting phase with freshly seated players."""
    session_id = _verified_session(token)
    table = await _get_table(session_id)
    seat_configs = random_seat_configs(table.num_seats, table.payout_config)
    state = _run(next_round, table.state, seat_configs)
    return await _commit(session_id, table, state)


@router.get("/advisor/{seat_id}")
async def advisor_snapshot(
    seat_id: str,
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> AdvisorSnapshotResponse:
    """Get the read-only view an advisor needs for a seat's decision."""
    table = await _get_table(_verified_session(token))
    try:
        view = snapshot(table.state, seat_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"No seat {seat_id}") from None

    return AdvisorSnapshotResponse(
        seat_id=view.seat_id,
        seat_hand=[_card_response(c) for c in view.seat_hand],
        dealer_up_card=_card_response(view.dealer_up_card) if view.dealer_up_card else None,
        legal_actions=[str(kind) for kind in view.legal_actions],
        decision=str(view.decision),
        rules=view.rules,
    )
