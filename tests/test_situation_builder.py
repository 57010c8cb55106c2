"""Tests for the situation_builder module."""

import pytest

from holdem_coach.core.table_snapshot import OpponentAction
from holdem_coach.interface.situation_builder import build_snapshot
from holdem_coach.utils.card import Card
from holdem_coach.utils.constants import (
    FacingType,
    OpponentActionType,
    Position,
    Street,
)


def _cards(s: str) -> list[Card]:
    return [Card.from_str(c) for c in s.split()]


class TestBuildSnapshot:
    """Tests for build_snapshot()."""

    def test_basic_preflop(self):
        snap = build_snapshot(
            hero_cards=_cards("Ah Ks"),
            position=Position.BTN,
            street=Street.PREFLOP,
            pot_bb=1.5,
        )
        assert snap.hero_hole == tuple(_cards("Ah Ks"))
        assert snap.hero_position == Position.BTN
        assert snap.street == Street.PREFLOP
        assert snap.pot == 1.5
        assert snap.board_cards == []
        assert snap.facing is None
        assert snap.villain_position == Position.BB
        assert snap.effective_stack == 100.0
        assert snap.outs is None

    def test_postflop_with_board(self):
        board = _cards("Jh 8d 3c")
        snap = build_snapshot(
            hero_cards=_cards("As Kd"),
            position=Position.CO,
            street=Street.FLOP,
            pot_bb=6.5,
            community_cards=board,
        )
        assert snap.board_cards == board
        assert snap.board.turn is None

    def test_river_board_split(self):
        board = _cards("Jh 8d 3c 2s Qh")
        snap = build_snapshot(
            _cards("As Kd"), Position.CO, Street.RIVER, 12.0, community_cards=board,
        )
        assert snap.board.turn == board[3]
        assert snap.board.river == board[4]

    def test_facing_bet(self):
        snap = build_snapshot(
            _cards("As Kd"), Position.CO, Street.FLOP, 6.0,
            community_cards=_cards("Jh 8d 3c"),
            facing_type=FacingType.RAISE, facing_bb=4.5,
        )
        assert snap.facing is not None
        assert snap.facing.type == FacingType.RAISE
        assert snap.facing_size == 4.5

    def test_facing_defaults_to_bet(self):
        snap = build_snapshot(
            _cards("As Kd"), Position.CO, Street.FLOP, 6.0,
            community_cards=_cards("Jh 8d 3c"), facing_bb=2.0,
        )
        assert snap.facing.type == FacingType.BET

    def test_zero_facing_means_no_bet(self):
        snap = build_snapshot(
            _cards("As Kd"), Position.CO, Street.FLOP, 6.0,
            community_cards=_cards("Jh 8d 3c"),
            facing_type=FacingType.BET, facing_bb=0.0,
        )
        assert snap.facing is None
        assert snap.facing_size == 0.0

    def test_opponent_actions_kept_in_order(self):
        actions = [
            OpponentAction("OppA", OpponentActionType.CHECK),
            OpponentAction("OppB", OpponentActionType.BET, 3.0),
            OpponentAction("OppC", OpponentActionType.RAISE, 9.0),
        ]
        snap = build_snapshot(
            _cards("As Kd"), Position.CO, Street.FLOP, 6.0,
            community_cards=_cards("Jh 8d 3c"),
            opponent_actions=actions,
        )
        assert [a.name for a in snap.opponent_actions] == ["OppA", "OppB", "OppC"]
        assert snap.opponent_aggression == 2

    def test_outs_attached_on_flop(self):
        snap = build_snapshot(
            _cards("Ah 5h"), Position.BTN, Street.FLOP, 6.0,
            community_cards=_cards("Kh 9h 2c"),
        )
        assert snap.outs is not None
        assert snap.outs.outs == 9

    def test_outs_can_be_skipped(self):
        snap = build_snapshot(
            _cards("Ah 5h"), Position.BTN, Street.FLOP, 6.0,
            community_cards=_cards("Kh 9h 2c"), attach_outs=False,
        )
        assert snap.outs is None

    def test_villain_and_stack(self):
        snap = build_snapshot(
            _cards("Ah 5h"), Position.BTN, Street.PREFLOP, 1.5,
            villain_position=Position.SB, stack_bb=40.0,
        )
        assert snap.villain_position == Position.SB
        assert snap.effective_stack == 40.0


class TestBuildSnapshotValidation:
    def test_wrong_hero_card_count(self):
        with pytest.raises(ValueError, match="exactly 2 hero cards"):
            build_snapshot(_cards("Ah"), Position.BTN, Street.PREFLOP, 1.5)

    def test_board_must_match_street(self):
        with pytest.raises(ValueError, match="needs 4 board cards"):
            build_snapshot(
                _cards("Ah Kd"), Position.BTN, Street.TURN, 6.0,
                community_cards=_cards("Jh 8d 3c"),
            )

    def test_preflop_rejects_board(self):
        with pytest.raises(ValueError):
            build_snapshot(
                _cards("Ah Kd"), Position.BTN, Street.PREFLOP, 1.5,
                community_cards=_cards("Jh 8d 3c"),
            )

    def test_duplicate_cards(self):
        with pytest.raises(ValueError, match="Duplicate"):
            build_snapshot(
                _cards("Ah Kd"), Position.BTN, Street.FLOP, 6.0,
                community_cards=_cards("Ah 8d 3c"),
            )

    def test_negative_pot(self):
        with pytest.raises(ValueError, match="negative"):
            build_snapshot(_cards("Ah Kd"), Position.BTN, Street.PREFLOP, -1.0)
