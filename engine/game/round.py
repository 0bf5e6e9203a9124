"""
Round engine: pure transitions over an immutable round state.

Every public function takes a ``RoundState`` and returns a new one. Nothing
is stored between calls, so the caller owns the single live state and
threads it through each transition. A transition either applies completely
or raises without touching the input state.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from random import Random
from typing import Callable, Iterable, Sequence

from engine.bets import parse_bet, validate_bet
from engine.cards import Card, Rank, Shoe, create_shuffled_shoe
from engine.errors import IllegalActionError, InvalidBetError
from engine.game.actions import (
    AcceptEvenMoney,
    AcceptInsurance,
    Action,
    ActionKind,
    DeclineEvenMoney,
    DeclineInsurance,
    Double,
    Hit,
    Split,
    Stand,
    Surrender,
)
from engine.game.events import EventType, GameEvent, new_event
from engine.game.seats import PlayerSeat, SeatConfig, split_seat_id
from engine.game.state import Phase, advance_phase, require_phase
from engine.hand import Hand, compare_hands, is_blackjack
from engine.payout import (
    Outcome,
    SeatResult,
    insurance_delta,
    main_bet_delta,
    resolve_side_bet,
)
from engine.rules import RuleSet
from engine.sidebets import SideBet


@dataclass(frozen=True)
class RoundState:
    """
    Everything about one round at the table.

    This is the unit every transition consumes and produces, and the sole
    source of truth for rendering and for the advisor snapshot.
    """

    phase: Phase
    rules: RuleSet
    seats: tuple[PlayerSeat, ...]
    dealer: Hand = field(default_factory=Hand)
    shoe: Shoe | None = None
    turn_seat_id: str | None = None
    insurance_offered: bool = False
    total_tips: int = 0
    results: tuple[SeatResult, ...] = ()
    events: tuple[GameEvent, ...] = ()

    @property
    def is_player_turn(self) -> bool:
        """Check if some seat currently holds the turn."""
        return self.turn_seat_id is not None

    def seat(self, seat_id: str) -> PlayerSeat:
        """
        Look up a seat by id.

        Raises:
            KeyError: if no seat has that id
        """
        for seat in self.seats:
            if seat.seat_id == seat_id:
                return seat
        raise KeyError(seat_id)

    @property
    def current_seat(self) -> PlayerSeat | None:
        """Return the seat holding the turn, if any."""
        if self.turn_seat_id is None:
            return None
        return self.seat(self.turn_seat_id)

    @property
    def dealer_up_card(self) -> Card | None:
        """Return the dealer's face-up card."""
        return self.dealer.up_card

    @property
    def cards_in_play(self) -> int:
        """Cards in every hand plus the shoe; constant once dealing starts."""
        in_hands = sum(len(seat.hand) for seat in self.seats) + len(self.dealer)
        return in_hands + (len(self.shoe) if self.shoe is not None else 0)

    def result_for(self, seat_id: str) -> SeatResult | None:
        """Return the settlement result for a seat, once settled."""
        return next((r for r in self.results if r.seat_id == seat_id), None)


# --- helpers -----------------------------------------------------------------


def _replace_seat(seats: Sequence[PlayerSeat], updated: PlayerSeat) -> tuple[PlayerSeat, ...]:
    """Swap in ``updated`` for the seat with the same id."""
    return tuple(updated if s.seat_id == updated.seat_id else s for s in seats)


def _draw(shoe: Shoe | None) -> tuple[Card, Shoe]:
    """Draw from the round's shoe."""
    return (shoe or Shoe()).draw()


def _dealt(card: Card, target: str, value: int | None) -> GameEvent:
    return new_event(EventType.CARD_DEALT, card=str(card), hand=target, hand_value=value)


def _find_seat(state: RoundState, seat_id: str, action: str) -> PlayerSeat:
    try:
        return state.seat(seat_id)
    except KeyError:
        raise IllegalActionError(action, "no such seat", seat_id) from None


# --- betting phase -----------------------------------------------------------


def start_round(seat_configs: Iterable[SeatConfig], rules: RuleSet | None = None) -> RoundState:
    """
    Open a betting phase with one empty seat per config.

    Args:
        seat_configs: Seats in table order
        rules: Table rules (defaults if not provided)
    """
    rules = rules or RuleSet()
    seats = []
    for seat_config in seat_configs:
        seat = PlayerSeat.from_config(seat_config, surrender_allowed=rules.surrender_allowed)
        if not seat.is_autonomous and seat.bet is not None:
            seat = replace(seat, bet_error=validate_bet(seat.bet, rules))
        seats.append(seat)

    if len({s.seat_id for s in seats}) != len(seats):
        raise ValueError("Seat numbers must be unique")

    return RoundState(phase=Phase.BETTING, rules=rules, seats=tuple(seats))


def set_bet(state: RoundState, seat_id: str, raw: object) -> RoundState:
    """
    Record a bet typed in for a seat.

    Invalid input is kept on the seat as ``bet_error`` rather than raised,
    so the table can show the message next to the seat; ``deal`` refuses to
    start while any error remains.
    """
    require_phase(state.phase, Phase.BETTING, "change bet")
    seat = _find_seat(state, seat_id, "change bet")

    amount, error = parse_bet(raw)
    if error is None:
        error = validate_bet(amount, state.rules)

    seat = replace(seat, bet=amount, bet_error=error)
    if error:
        event = new_event(EventType.BET_REJECTED, seat_id=seat_id, message=error)
    else:
        event = new_event(EventType.BET_PLACED, seat_id=seat_id, amount=amount)

    return replace(state, seats=_replace_seat(state.seats, seat), events=state.events + (event,))


def toggle_side_bet(state: RoundState, seat_id: str, kind: SideBet) -> RoundState:
    """Switch a fixed-stake side bet on or off for a trainee seat."""
    require_phase(state.phase, Phase.BETTING, "change side bet")
    seat = _find_seat(state, seat_id, "change side bet")
    if seat.is_autonomous:
        raise IllegalActionError("change side bet", "seat plays automatically", seat_id)

    side_bets = dict(seat.side_bets)
    if side_bets.get(kind):
        del side_bets[kind]
        event = new_event(EventType.SIDE_BET_REMOVED, seat_id=seat_id, kind=str(kind))
    else:
        side_bets[kind] = state.rules.side_bet_stake
        event = new_event(
            EventType.SIDE_BET_PLACED,
            seat_id=seat_id,
            kind=str(kind),
            amount=state.rules.side_bet_stake,
        )

    seat = replace(seat, side_bets=side_bets)
    return replace(state, seats=_replace_seat(state.seats, seat), events=state.events + (event,))


def toggle_tip(state: RoundState, seat_id: str) -> RoundState:
    """Switch a trainee seat's fixed dealer tip on or off."""
    require_phase(state.phase, Phase.BETTING, "change tip")
    seat = _find_seat(state, seat_id, "change tip")
    if seat.is_autonomous:
        raise IllegalActionError("change tip", "seat plays automatically", seat_id)

    if seat.tip:
        seat = replace(seat, tip=0)
        event = new_event(EventType.TIP_REMOVED, seat_id=seat_id)
    else:
        seat = replace(seat, tip=state.rules.tip_amount)
        event = new_event(EventType.TIP_PLACED, seat_id=seat_id, amount=seat.tip)

    return replace(state, seats=_replace_seat(state.seats, seat), events=state.events + (event,))


def preset_hand(state: RoundState, seat_id: str, cards: Sequence[Card]) -> RoundState:
    """
    Give a seat its starting cards before the deal.

    The seat is skipped when the opening cards go round. Pair this with
    ``stage_shoe`` so the preset cards cannot turn up again.
    """
    require_phase(state.phase, Phase.BETTING, "preset hand")
    seat = _find_seat(state, seat_id, "preset hand")
    if len(cards) != 2:
        raise ValueError("A preset hand needs exactly two cards")

    seat = replace(seat, hand=Hand(tuple(cards)))
    return replace(state, seats=_replace_seat(state.seats, seat))


def stage_shoe(state: RoundState, shoe: Shoe) -> RoundState:
    """
    Set the shoe the next deal will use instead of a fresh one.

    Raises:
        ValueError: if the shoe repeats a card already preset in a hand
    """
    require_phase(state.phase, Phase.BETTING, "stage shoe")
    preset = {card for seat in state.seats for card in seat.hand}
    if preset & set(shoe.cards):
        raise ValueError("Shoe still holds a preset card")
    return replace(state, shoe=shoe)


def deal(state: RoundState, rng: Random | None = None, shoe: Shoe | None = None) -> RoundState:
    """
    Validate bets and deal the opening cards.

    Seats without a hand get two cards each, in table order, then the dealer
    gets an up-card and a face-down hole card. Side bets are settled straight
    away. Seats that have nothing to decide (autonomous seats, naturals with
    no even-money offer, everyone when a dealer blackjack is certain and no
    insurance is offered) are finished on the spot.

    Args:
        state: A round in the betting phase
        rng: Random source for the fresh shoe
        shoe: Use this shoe instead of a fresh or staged one

    Raises:
        InvalidBetError: if a trainee seat's bet is missing or out of range
        EmptyShoeError: if the shoe cannot cover the opening deal
    """
    require_phase(state.phase, Phase.BETTING, "deal")
    rules = state.rules

    errors: dict[str, str] = {}
    for seat in state.seats:
        if seat.is_autonomous:
            continue
        error = seat.bet_error or validate_bet(seat.bet, rules)
        if error:
            errors[seat.seat_id] = error
    if errors:
        raise InvalidBetError(errors)

    phase = advance_phase(state.phase, "deal")
    events: list[GameEvent] = []

    if shoe is None:
        shoe = state.shoe if state.shoe is not None else create_shuffled_shoe(rng)
    events.append(new_event(EventType.SHOE_CREATED, cards_remaining=len(shoe)))

    seats = list(state.seats)
    for i, seat in enumerate(seats):
        if len(seat.hand) > 0:
            continue
        hand = seat.hand
        for _ in range(2):
            card, shoe = shoe.draw()
            hand = hand.with_card(card)
            events.append(_dealt(card, seat.seat_id, hand.value))
        seats[i] = replace(seat, hand=hand)

    up_card, shoe = shoe.draw()
    hole_card, shoe = shoe.draw()
    dealer = Hand((up_card, hole_card.turned_down()))
    events.append(_dealt(up_card, "dealer", up_card.value))
    events.append(_dealt(dealer.cards[1], "dealer", None))

    # Side bets only look at the opening cards
    for i, seat in enumerate(seats):
        if seat.is_autonomous or not seat.side_bets:
            continue
        outcomes = {
            kind: resolve_side_bet(kind, stake, seat.hand.cards[:2], up_card)
            for kind, stake in seat.side_bets.items()
            if stake > 0
        }
        for outcome in outcomes.values():
            events.append(
                new_event(
                    EventType.SIDE_BET_RESOLVED,
                    seat_id=seat.seat_id,
                    kind=str(outcome.kind),
                    won=outcome.won,
                    hand_name=outcome.hand_name,
                    payout=float(outcome.payout),
                )
            )
        seats[i] = replace(seat, side_bet_outcomes=outcomes)

    insurance_offered = up_card.is_ace and rules.insurance_allowed
    dealer_has_blackjack = is_blackjack(dealer.cards)

    for i, seat in enumerate(seats):
        has_blackjack = seat.has_blackjack
        even_money = has_blackjack and insurance_offered and not seat.is_autonomous
        finished = (
            seat.is_autonomous
            or (has_blackjack and not even_money)
            or (dealer_has_blackjack and not insurance_offered and not even_money)
        )
        seats[i] = replace(
            seat,
            is_finished=finished,
            even_money_offered=even_money,
            insurance_pending=insurance_offered and not finished and not even_money,
        )
        if has_blackjack:
            events.append(new_event(EventType.PLAYER_BLACKJACK, seat_id=seat.seat_id))

    if insurance_offered:
        events.append(new_event(EventType.INSURANCE_OFFERED))

    first = next((s for s in seats if not s.is_autonomous and not s.is_finished), None)
    if first is not None:
        phase = advance_phase(phase, "open_turns")
        turn_seat_id = first.seat_id
    else:
        phase = advance_phase(phase, "skip_turns")
        turn_seat_id = None

    total_tips = sum(seat.tip for seat in seats)
    events.append(new_event(EventType.ROUND_STARTED, turn_seat_id=turn_seat_id, total_tips=total_tips))

    return replace(
        state,
        phase=phase,
        seats=tuple(seats),
        dealer=dealer,
        shoe=shoe,
        turn_seat_id=turn_seat_id,
        insurance_offered=insurance_offered,
        total_tips=total_tips,
        results=(),
        events=state.events + tuple(events),
    )


# --- player turns ------------------------------------------------------------


def legal_actions(state: RoundState, seat_id: str) -> tuple[ActionKind, ...]:
    """Actions ``seat_id`` may submit right now (empty unless it holds the turn)."""
    if state.phase != Phase.PLAYER_TURNS or state.turn_seat_id != seat_id:
        return ()
    return state.seat(seat_id).legal_actions


def apply_action(state: RoundState, seat_id: str, action: Action) -> RoundState:
    """
    Apply a trainee action and pass the turn on if the seat is done.

    Raises:
        IllegalActionError: if the round is not in player turns, the seat
            does not hold the turn, or the action is not currently allowed
        EmptyShoeError: if a card is needed and the shoe is exhausted
    """
    name = str(action.kind)
    require_phase(state.phase, Phase.PLAYER_TURNS, name)
    seat = _find_seat(state, seat_id, name)

    if seat.is_autonomous:
        raise IllegalActionError(name, "seat plays automatically", seat_id)
    if state.turn_seat_id != seat_id:
        raise IllegalActionError(name, f"it is seat {state.turn_seat_id}'s turn", seat_id)
    if action.kind not in seat.legal_actions:
        raise IllegalActionError(name, "action is not available for this hand", seat_id)

    handler = _HANDLERS[type(action)]
    return handler(state, seat)


def _hit(state: RoundState, seat: PlayerSeat) -> RoundState:
    card, shoe = _draw(state.shoe)
    hand = seat.hand.with_card(card)
    seat = replace(seat, hand=hand)
    events = [
        _dealt(card, seat.seat_id, hand.value),
        new_event(EventType.PLAYER_HIT, seat_id=seat.seat_id, hand_value=hand.value),
    ]
    if seat.is_busted:
        events.append(new_event(EventType.PLAYER_BUSTS, seat_id=seat.seat_id))
    if seat.is_busted or hand.value == 21:
        seat = replace(seat, is_finished=True)

    state = replace(
        state,
        seats=_replace_seat(state.seats, seat),
        shoe=shoe,
        events=state.events + tuple(events),
    )
    return _advance_turn(state, seat.seat_id)


def _stand(state: RoundState, seat: PlayerSeat) -> RoundState:
    seat = replace(seat, is_finished=True)
    event = new_event(EventType.PLAYER_STAND, seat_id=seat.seat_id, hand_value=seat.value)
    state = replace(state, seats=_replace_seat(state.seats, seat), events=state.events + (event,))
    return _advance_turn(state, seat.seat_id)


def _double(state: RoundState, seat: PlayerSeat) -> RoundState:
    card, shoe = _draw(state.shoe)
    hand = seat.hand.with_card(card)
    seat = replace(seat, hand=hand, bet=(seat.bet or 0) * 2, has_doubled=True, is_finished=True)
    events = [
        _dealt(card, seat.seat_id, hand.value),
        new_event(EventType.PLAYER_DOUBLE, seat_id=seat.seat_id, hand_value=hand.value, new_bet=seat.bet),
    ]
    if seat.is_busted:
        events.append(new_event(EventType.PLAYER_BUSTS, seat_id=seat.seat_id))

    state = replace(
        state,
        seats=_replace_seat(state.seats, seat),
        shoe=shoe,
        events=state.events + tuple(events),
    )
    return _advance_turn(state, seat.seat_id)


def _split(state: RoundState, seat: PlayerSeat) -> RoundState:
    first, second = seat.hand.cards
    generation = 1 + sum(
        1 for s in state.seats if s.origin_seat == seat.origin_seat and s.is_split_hand
    )

    card_one, shoe = _draw(state.shoe)
    card_two, shoe = _draw(shoe)

    origin = replace(seat, hand=Hand((first, card_one)), has_split=True)
    sibling = PlayerSeat(
        seat_id=split_seat_id(seat.origin_seat, generation),
        origin_seat=seat.origin_seat,
        split_generation=generation,
        hand=Hand((second, card_two)),
        bet=seat.bet,
        payout_rule=seat.payout_rule,
        surrender_allowed=seat.surrender_allowed,
    )

    # Split aces get one card each
    if first.rank == Rank.ACE:
        origin = replace(origin, is_finished=True)
        sibling = replace(sibling, is_finished=True)

    seats = list(state.seats)
    index = next(i for i, s in enumerate(seats) if s.seat_id == seat.seat_id)
    seats[index] = origin
    seats.insert(index + 1, sibling)

    events = (
        _dealt(card_one, origin.seat_id, origin.value),
        _dealt(card_two, sibling.seat_id, sibling.value),
        new_event(
            EventType.PLAYER_SPLIT,
            seat_id=origin.seat_id,
            new_seat_id=sibling.seat_id,
            hand1_value=origin.value,
            hand2_value=sibling.value,
        ),
    )
    state = replace(state, seats=tuple(seats), shoe=shoe, events=state.events + events)
    return _advance_turn(state, origin.seat_id)


def _surrender(state: RoundState, seat: PlayerSeat) -> RoundState:
    seat = replace(seat, is_finished=True, outcome=Outcome.SURRENDER)
    event = new_event(EventType.PLAYER_SURRENDER, seat_id=seat.seat_id)
    state = replace(state, seats=_replace_seat(state.seats, seat), events=state.events + (event,))
    return _advance_turn(state, seat.seat_id)


def _insurance_decision(accept: bool) -> Callable[[RoundState, PlayerSeat], RoundState]:
    def handler(state: RoundState, seat: PlayerSeat) -> RoundState:
        seat = replace(seat, has_insurance=accept, insurance_pending=False)
        event_type = EventType.INSURANCE_TAKEN if accept else EventType.INSURANCE_DECLINED
        events: list[GameEvent] = [new_event(event_type, seat_id=seat.seat_id)]
        seats = _replace_seat(state.seats, seat)

        if not is_blackjack(state.dealer.cards):
            # Dealer peeked and has nothing; the seat plays on
            return replace(state, seats=seats, events=state.events + tuple(events))

        dealer = state.dealer.revealed()
        events.append(new_event(EventType.DEALER_REVEALS, card=str(dealer.cards[1]), hand_value=dealer.value))
        events.append(new_event(EventType.DEALER_BLACKJACK))
        seats = tuple(replace(s, is_finished=True, insurance_pending=False) for s in seats)
        return replace(
            state,
            phase=advance_phase(state.phase, "dealer_blackjack"),
            seats=seats,
            dealer=dealer,
            turn_seat_id=None,
            events=state.events + tuple(events),
        )

    return handler


def _even_money_decision(accept: bool) -> Callable[[RoundState, PlayerSeat], RoundState]:
    def handler(state: RoundState, seat: PlayerSeat) -> RoundState:
        seat = replace(
            seat,
            has_taken_even_money=accept,
            is_finished=True,
            outcome=Outcome.EVEN_MONEY if accept else None,
        )
        event_type = EventType.EVEN_MONEY_TAKEN if accept else EventType.EVEN_MONEY_DECLINED
        event = new_event(event_type, seat_id=seat.seat_id)
        state = replace(state, seats=_replace_seat(state.seats, seat), events=state.events + (event,))
        return _advance_turn(state, seat.seat_id)

    return handler


_HANDLERS: dict[type, Callable[[RoundState, PlayerSeat], RoundState]] = {
    Hit: _hit,
    Stand: _stand,
    Double: _double,
    Split: _split,
    Surrender: _surrender,
    AcceptInsurance: _insurance_decision(True),
    DeclineInsurance: _insurance_decision(False),
    AcceptEvenMoney: _even_money_decision(True),
    DeclineEvenMoney: _even_money_decision(False),
}


def _advance_turn(state: RoundState, seat_id: str) -> RoundState:
    """
    Pass the turn on once the acting seat is finished.

    Split hands of the same seat are played out as a block before the turn
    moves to the next seat in table order. When nobody is left the turn is
    cleared and the dealer's turn begins.
    """
    seats = state.seats
    acting = state.seat(seat_id)
    if not acting.is_finished:
        return state

    playable = [s for s in seats if not s.is_autonomous and not s.is_finished]
    following = next((s for s in playable if s.origin_seat == acting.origin_seat), None)
    if following is None:
        index = next(i for i, s in enumerate(seats) if s.seat_id == seat_id)
        later = {s.seat_id for s in seats[index + 1:]}
        following = next((s for s in playable if s.seat_id in later), None)

    if following is not None:
        event = new_event(EventType.TURN_CHANGED, seat_id=following.seat_id)
        return replace(state, turn_seat_id=following.seat_id, events=state.events + (event,))

    event = new_event(EventType.TURN_CHANGED, seat_id=None)
    return replace(
        state,
        phase=advance_phase(state.phase, "finish_turns"),
        turn_seat_id=None,
        events=state.events + (event,),
    )


# --- dealer turn -------------------------------------------------------------


def dealer_should_draw(dealer: Hand, hits_soft_17: bool = True) -> bool:
    """Dealer draws below 17, and on soft 17 under H17 rules."""
    value, is_soft = dealer.details
    if value < 17:
        return True
    return value == 17 and is_soft and hits_soft_17


def advance_dealer(state: RoundState) -> RoundState:
    """
    Play one step of the dealer's turn.

    The first step turns the hole card over; each later step draws one card.
    After every step the stopping rule is checked and, once the dealer is
    done (or nobody needs a dealer total), the round moves to settlement.
    """
    require_phase(state.phase, Phase.DEALER_TURN, "play dealer")

    events: list[GameEvent] = []
    shoe = state.shoe
    if state.dealer.has_hidden_card:
        dealer = state.dealer.revealed()
        events.append(new_event(EventType.DEALER_REVEALS, card=str(dealer.cards[1]), hand_value=dealer.value))
    else:
        card, shoe = _draw(shoe)
        dealer = state.dealer.with_card(card)
        events.append(_dealt(card, "dealer", dealer.value))
        events.append(new_event(EventType.DEALER_HITS, hand_value=dealer.value))

    live = any(seat.needs_dealer_total for seat in state.seats)
    phase = state.phase
    if not live or not dealer_should_draw(dealer, state.rules.dealer_hits_soft_17):
        phase = advance_phase(phase, "dealer_done")
        if dealer.is_blackjack:
            events.append(new_event(EventType.DEALER_BLACKJACK))
        elif dealer.is_busted:
            events.append(new_event(EventType.DEALER_BUSTS, hand_value=dealer.value))
        else:
            events.append(new_event(EventType.DEALER_STANDS, hand_value=dealer.value))

    return replace(state, phase=phase, dealer=dealer, shoe=shoe, events=state.events + tuple(events))


def play_dealer(state: RoundState) -> RoundState:
    """Run dealer steps until the round reaches settlement."""
    while state.phase == Phase.DEALER_TURN:
        state = advance_dealer(state)
    return state


# --- settlement --------------------------------------------------------------


def _final_outcome(seat: PlayerSeat, dealer: Hand) -> Outcome:
    if seat.outcome is not None:
        return seat.outcome
    comparison = compare_hands(seat.hand, dealer, player_has_blackjack=seat.has_blackjack)
    if comparison > 0:
        return Outcome.BLACKJACK if seat.has_blackjack else Outcome.WIN
    if comparison < 0:
        return Outcome.LOSS
    return Outcome.PUSH


_OUTCOME_EVENTS = {
    Outcome.WIN: EventType.PLAYER_WINS,
    Outcome.BLACKJACK: EventType.PLAYER_WINS,
    Outcome.EVEN_MONEY: EventType.PLAYER_WINS,
    Outcome.LOSS: EventType.PLAYER_LOSES,
    Outcome.SURRENDER: EventType.PLAYER_LOSES,
    Outcome.PUSH: EventType.PUSH,
}


def settle(state: RoundState) -> RoundState:
    """
    Compute every seat's outcome and money movement.

    Outcomes fixed earlier (surrender, even money) are kept; every other
    seat is compared against the dealer's final hand.
    """
    phase = advance_phase(state.phase, "settle")
    dealer = state.dealer.revealed()
    dealer_has_blackjack = dealer.is_blackjack

    seats = []
    results = []
    events = []
    for seat in state.seats:
        outcome = _final_outcome(seat, dealer)
        bet = seat.bet or 0
        result = SeatResult(
            seat_id=seat.seat_id,
            outcome=outcome,
            main=main_bet_delta(outcome, bet, seat.payout_rule),
            insurance=insurance_delta(bet, dealer_has_blackjack) if seat.has_insurance else Decimal("0"),
            side_bets={kind: o.net for kind, o in seat.side_bet_outcomes.items()},
        )
        seats.append(replace(seat, outcome=outcome))
        results.append(result)
        events.append(
            new_event(
                _OUTCOME_EVENTS[outcome],
                seat_id=seat.seat_id,
                outcome=str(outcome),
                amount=float(result.main),
            )
        )

    total = sum((r.total for r in results), Decimal("0"))
    events.append(new_event(EventType.ROUND_ENDED, result=float(total)))

    return replace(
        state,
        phase=phase,
        seats=tuple(seats),
        dealer=dealer,
        results=tuple(results),
        events=state.events + tuple(events),
    )


def next_round(state: RoundState, seat_configs: Iterable[SeatConfig]) -> RoundState:
    """Discard the finished round and open a new betting phase at the same table."""
    advance_phase(state.phase, "new_round")
    return start_round(seat_configs, state.rules)
