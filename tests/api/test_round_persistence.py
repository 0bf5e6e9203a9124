"""Tests for round state persistence (serialization/deserialization)."""

import json
from dataclasses import replace
from decimal import Decimal

import pytest

from api.routes.round import (
    TrainingTable,
    _deserialize_card,
    _deserialize_round,
    _deserialize_table,
    _serialize_card,
    _serialize_round,
    _serialize_table,
)
from engine.advisor import TrainingStats
from engine.cards import Card, Rank, Shoe, Suit
from engine.game import Split, apply_action, deal, play_dealer, settle, start_round, toggle_tip
from engine.game.state import Phase
from engine.rules import PayoutRule, RuleSet
from engine.scenarios import TrainingLevel
from engine.table import PayoutConfig


def _roundtrip(state):
    """Push a state through JSON the way the session store does."""
    return _deserialize_round(json.loads(json.dumps(_serialize_round(state))))


class TestCardSerialization:
    """Tests for card serialization."""

    def test_serialize_card_roundtrip(self):
        """Test that a card can be serialized and deserialized."""
        card = Card(Rank.ACE, Suit.SPADES)
        restored = _deserialize_card(_serialize_card(card))

        assert restored.rank == card.rank
        assert restored.suit == card.suit
        assert not restored.face_down

    def test_face_down_flag_survives(self):
        """Test that a hidden hole card stays hidden after restore."""
        card = Card(Rank.KING, Suit.HEARTS).turned_down()
        assert _deserialize_card(_serialize_card(card)).face_down

    def test_serialized_form_is_plain_values(self):
        """Test that the stored form only holds JSON-friendly values."""
        data = _serialize_card(Card(Rank.TEN, Suit.DIAMONDS))
        assert data == {"rank": 10, "suit": Suit.DIAMONDS.value, "face_down": False}


class TestRoundSerialization:
    """Tests for whole-round serialization."""

    def test_betting_round_roundtrip(self, seat_configs):
        """Test restoring a round before the deal."""
        state = start_round(seat_configs(num_seats=3, autonomous=(2,)), RuleSet(min_bet=10))
        restored = _roundtrip(state)

        assert restored == state
        assert restored.shoe is None

    def test_dealt_round_roundtrip(self, dealt):
        """Test restoring a round mid-play, hole card and shoe included."""
        state = dealt("10H", "6S", "9C", "7D", num_seats=1)
        state = replace(state, events=())
        restored = _roundtrip(state)

        assert restored == state
        assert restored.phase == Phase.PLAYER_TURNS
        assert restored.dealer.cards[1].face_down
        assert restored.shoe.cards == state.shoe.cards

    def test_tips_survive_restore(self, seat_configs, rng, cards):
        """Test that seat tips and the dealt tip total are stored with the round."""
        state = toggle_tip(start_round(seat_configs(num_seats=2), RuleSet(tip_amount=3)), "2")
        assert _roundtrip(state).seat("2").tip == 3

        state = deal(state, shoe=Shoe.stacked(cards("10H", "6S", "9C", "8D", "9H", "7D"), rng))
        restored = _roundtrip(replace(state, events=()))

        assert restored.total_tips == 3
        assert restored.rules.tip_amount == 3
        assert restored == replace(state, events=())

    def test_events_are_not_stored(self, dealt):
        """Test that the event log is dropped from storage."""
        state = dealt("10H", "6S", "9C", "7D")
        assert state.events
        assert _roundtrip(state).events == ()

    def test_settled_round_keeps_money(self, dealt):
        """Test that settlement results survive with exact amounts."""
        state = dealt("AH", "KS", "9C", "7D", payout_rule=PayoutRule.SIX_TO_FIVE)
        state = settle(play_dealer(state))
        restored = _roundtrip(replace(state, events=()))

        assert restored.phase == Phase.ROUND_COMPLETE
        result = restored.result_for("1")
        assert result.main == Decimal("12")
        assert result.main == state.result_for("1").main

    def test_split_seats_roundtrip(self, dealt):
        """Test that split hands keep their identity."""
        state = apply_action(dealt("8H", "8S", "9C", "7D", "2H", "3C"), "1", Split())
        restored = _roundtrip(replace(state, events=()))

        assert [s.seat_id for s in restored.seats] == ["1", "1-split-1"]
        sibling = restored.seat("1-split-1")
        assert sibling.origin_seat == 1
        assert sibling.split_generation == 1
        assert restored.seat("1").has_split


class TestTableSerialization:
    """Tests for the training table wrapper."""

    @pytest.fixture
    def table(self, seat_configs):
        stats = TrainingStats(correct=3, incorrect=1, evaluated={"1", "2-split-1"})
        return TrainingTable(
            state=start_round(seat_configs(num_seats=2)),
            level=TrainingLevel.SPLITTING_PAIRS,
            payout_config=PayoutConfig.MIXED,
            num_seats=2,
            stats=stats,
        )

    def test_table_roundtrip(self, table):
        """Test that level, payout config and stats come back."""
        restored = _deserialize_table(json.loads(json.dumps(_serialize_table(table))))

        assert restored.level == TrainingLevel.SPLITTING_PAIRS
        assert restored.payout_config == PayoutConfig.MIXED
        assert restored.num_seats == 2
        assert restored.state == table.state
        assert restored.stats.correct == 3
        assert restored.stats.incorrect == 1
        assert restored.stats.evaluated == {"1", "2-split-1"}

    def test_missing_stats_start_fresh(self, table):
        """Test that tables stored without stats restore with zeros."""
        data = _serialize_table(table)
        del data["stats"]
        restored = _deserialize_table(data)

        assert restored.stats.total == 0
        assert restored.stats.evaluated == set()
