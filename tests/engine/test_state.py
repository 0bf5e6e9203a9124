"""Tests for round phases and actions."""

import pytest

from engine.errors import IllegalActionError
from engine.game import AcceptInsurance, ActionKind, Hit, action_from_name
from engine.game.state import Phase, advance_phase, require_phase


class TestPhases:
    """Tests for the phase graph."""

    @pytest.mark.parametrize(
        "phase,trigger,expected",
        [
            (Phase.BETTING, "deal", Phase.DEALING),
            (Phase.DEALING, "open_turns", Phase.PLAYER_TURNS),
            (Phase.DEALING, "skip_turns", Phase.DEALER_TURN),
            (Phase.PLAYER_TURNS, "finish_turns", Phase.DEALER_TURN),
            (Phase.PLAYER_TURNS, "dealer_blackjack", Phase.SETTLEMENT),
            (Phase.DEALER_TURN, "dealer_done", Phase.SETTLEMENT),
            (Phase.SETTLEMENT, "settle", Phase.ROUND_COMPLETE),
            (Phase.ROUND_COMPLETE, "new_round", Phase.BETTING),
        ],
    )
    def test_legal_moves(self, phase, trigger, expected):
        assert advance_phase(phase, trigger) == expected

    @pytest.mark.parametrize(
        "phase,trigger",
        [
            (Phase.BETTING, "settle"),
            (Phase.PLAYER_TURNS, "deal"),
            (Phase.DEALER_TURN, "new_round"),
            (Phase.ROUND_COMPLETE, "finish_turns"),
        ],
    )
    def test_illegal_moves(self, phase, trigger):
        with pytest.raises(IllegalActionError):
            advance_phase(phase, trigger)

    def test_require_phase(self):
        require_phase(Phase.BETTING, Phase.BETTING, "deal")
        with pytest.raises(IllegalActionError, match="Cannot hit"):
            require_phase(Phase.BETTING, Phase.PLAYER_TURNS, "hit")


class TestActions:
    """Tests for parsing wire action names."""

    def test_known_names(self):
        assert isinstance(action_from_name("hit"), Hit)
        assert isinstance(action_from_name("acceptInsurance"), AcceptInsurance)

    def test_every_kind_round_trips(self):
        for kind in ActionKind:
            assert action_from_name(str(kind)).kind is kind

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown action: fold"):
            action_from_name("fold")
