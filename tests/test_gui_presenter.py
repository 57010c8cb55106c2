"""Tests for CoachPresenter with a mock CoachView.

These tests verify the presenter logic without any Qt/PySide6 dependency
by mocking the view, the engine adapter and the profile store.
"""

from __future__ import annotations

import random
from unittest.mock import MagicMock

from holdem_coach.core.showdown import OpponentHand, resolve_showdown
from holdem_coach.core.table_snapshot import Board
from holdem_coach.gui.messages import CoachRequest, CoachResponse
from holdem_coach.gui.presenter import CoachPresenter
from holdem_coach.interface.profile_store import PlayerProfile
from holdem_coach.interface.scenario import PreferredHands, generate_training_spot
from holdem_coach.interface.situation_builder import build_snapshot
from holdem_coach.strategy.decision_engine import decide
from holdem_coach.utils.card import Card
from holdem_coach.utils.constants import (
    FacingType,
    OpponentActionType,
    PlayerAction,
    Position,
    Street,
)


def _cards(s: str) -> list[Card]:
    return [Card.from_str(c) for c in s.split()]


def _make_mock_view(**overrides):
    """Create a mock CoachView with sensible defaults."""
    view = MagicMock()
    view.get_hero_cards.return_value = overrides.get("hero_cards", ["Ah", "Ks"])
    view.get_board_cards.return_value = overrides.get("board_cards", [])
    view.get_pot_bb.return_value = overrides.get("pot_bb", 1.5)
    view.get_facing_bb.return_value = overrides.get("facing_bb", 0.0)
    view.get_facing_type.return_value = overrides.get("facing_type", "BET")
    view.get_street.return_value = overrides.get("street", "PREFLOP")
    view.get_position.return_value = overrides.get("position", "BTN")
    view.get_villain_position.return_value = overrides.get("villain_position", "BB")
    view.get_opponent_actions.return_value = overrides.get("opponent_actions", "")
    view.get_raise_size.return_value = overrides.get("raise_size", 0.0)
    view.get_drill_mode.return_value = overrides.get("drill_mode", "hands")
    return view


def _make_mock_engine():
    """Create a mock EngineAdapter."""
    engine = MagicMock()
    engine.coaching_started = MagicMock()
    engine.coaching_finished = MagicMock()
    engine.coaching_error = MagicMock()
    engine.coaching_started.connect = MagicMock()
    engine.coaching_finished.connect = MagicMock()
    engine.coaching_error.connect = MagicMock()
    return engine


def _make_mock_store(delta: int = 250, preferred: PreferredHands = PreferredHands.ANY):
    store = MagicMock()
    store.load.return_value = PlayerProfile(preferred_hands=preferred)
    store.record_decision.return_value = delta
    return store


def _sent_request(engine) -> CoachRequest:
    engine.request_coach.assert_called_once()
    return engine.request_coach.call_args[0][0]


class TestPresenterInit:
    def test_signals_connected(self):
        engine = _make_mock_engine()
        CoachPresenter(view=_make_mock_view(), engine=engine)
        engine.coaching_started.connect.assert_called_once()
        engine.coaching_finished.connect.assert_called_once()
        engine.coaching_error.connect.assert_called_once()


class TestPresenterActionChosen:
    """Tests for on_action_chosen()."""

    def test_dispatches_request(self):
        view = _make_mock_view()
        engine = _make_mock_engine()
        presenter = CoachPresenter(view=view, engine=engine)

        presenter.on_action_chosen("raise")

        request = _sent_request(engine)
        assert request.hero_action == PlayerAction.RAISE
        assert request.snapshot.hero_hole == tuple(_cards("Ah Ks"))
        assert request.snapshot.street == Street.PREFLOP
        assert request.declared_raise_size is None
        assert request.spot is None

    def test_raise_size_passed(self):
        view = _make_mock_view(raise_size=7.5)
        engine = _make_mock_engine()
        CoachPresenter(view=view, engine=engine).on_action_chosen("RAISE")
        assert _sent_request(engine).declared_raise_size == 7.5

    def test_raise_size_ignored_for_call(self):
        view = _make_mock_view(raise_size=7.5)
        engine = _make_mock_engine()
        CoachPresenter(view=view, engine=engine).on_action_chosen("call")
        assert _sent_request(engine).declared_raise_size is None

    def test_postflop_inputs(self):
        view = _make_mock_view(
            hero_cards=["As", "Ks"],
            board_cards=["Qs", "Js", "2h"],
            street="FLOP",
            pot_bb=6.0,
            facing_bb=4.0,
            opponent_actions="OppA bet 4, OppB fold",
        )
        engine = _make_mock_engine()
        CoachPresenter(view=view, engine=engine).on_action_chosen("call")

        snapshot = _sent_request(engine).snapshot
        assert snapshot.board_cards == _cards("Qs Js 2h")
        assert snapshot.facing.type == FacingType.BET
        assert snapshot.facing_size == 4.0
        assert [a.action for a in snapshot.opponent_actions] == [
            OpponentActionType.BET, OpponentActionType.FOLD,
        ]
        assert snapshot.outs is not None

    def test_missing_card_shows_error(self):
        view = _make_mock_view(hero_cards=["Ah", ""])
        engine = _make_mock_engine()
        CoachPresenter(view=view, engine=engine).on_action_chosen("call")

        view.show_error.assert_called_once_with("Please select both hero cards.")
        engine.request_coach.assert_not_called()

    def test_one_card_shows_error(self):
        view = _make_mock_view(hero_cards=["Ah"])
        engine = _make_mock_engine()
        CoachPresenter(view=view, engine=engine).on_action_chosen("call")
        view.show_error.assert_called_once()
        engine.request_coach.assert_not_called()

    def test_board_mismatch_shows_error(self):
        view = _make_mock_view(street="TURN", board_cards=["Qs", "Js", "2h"])
        engine = _make_mock_engine()
        CoachPresenter(view=view, engine=engine).on_action_chosen("call")
        view.show_error.assert_called_once()
        assert "board cards" in view.show_error.call_args[0][0]
        engine.request_coach.assert_not_called()

    def test_duplicate_cards_show_error(self):
        view = _make_mock_view(board_cards=["Ah", "Js", "2h"], street="FLOP")
        engine = _make_mock_engine()
        CoachPresenter(view=view, engine=engine).on_action_chosen("call")
        view.show_error.assert_called_once()
        engine.request_coach.assert_not_called()

    def test_unknown_action_shows_error(self):
        view = _make_mock_view()
        engine = _make_mock_engine()
        CoachPresenter(view=view, engine=engine).on_action_chosen("shove")
        view.show_error.assert_called_once()
        engine.request_coach.assert_not_called()


class TestPresenterDrill:
    def test_deal_shows_spot(self):
        view = _make_mock_view()
        engine = _make_mock_engine()
        presenter = CoachPresenter(view=view, engine=engine, rng=random.Random(3))

        presenter.on_deal_clicked()

        assert presenter.active_spot is not None
        view.clear_result.assert_called_once()
        view.show_spot.assert_called_once_with(presenter.active_spot.snapshot)

    def test_game_mode_deals_preflop(self):
        view = _make_mock_view(drill_mode="game")
        presenter = CoachPresenter(view=view, engine=_make_mock_engine(), rng=random.Random(3))
        presenter.on_deal_clicked()
        assert presenter.active_spot.snapshot.street == Street.PREFLOP

    def test_deal_records_hand(self):
        view = _make_mock_view()
        store = _make_mock_store()
        presenter = CoachPresenter(
            view=view, engine=_make_mock_engine(), store=store, rng=random.Random(3),
        )
        presenter.on_deal_clicked()
        store.record_hand.assert_called_once()
        view.show_profile.assert_called_once_with(store.record_hand.return_value, None)

    def test_action_on_spot_uses_spot(self):
        view = _make_mock_view()
        engine = _make_mock_engine()
        presenter = CoachPresenter(view=view, engine=engine, rng=random.Random(3))
        presenter.on_deal_clicked()
        spot = presenter.active_spot

        presenter.on_action_chosen("fold")

        request = _sent_request(engine)
        assert request.spot is spot
        assert request.snapshot is spot.snapshot
        view.get_hero_cards.assert_not_called()
        assert presenter.active_spot is None

    def test_edit_clears_spot(self):
        presenter = CoachPresenter(
            view=_make_mock_view(), engine=_make_mock_engine(), rng=random.Random(3),
        )
        presenter.on_deal_clicked()
        presenter.on_inputs_edited()
        assert presenter.active_spot is None


class TestPresenterProfile:
    def test_refresh_without_store_is_noop(self):
        view = _make_mock_view()
        presenter = CoachPresenter(view=view, engine=_make_mock_engine())
        presenter.refresh_profile()
        presenter.on_reset_profile()
        view.show_profile.assert_not_called()

    def test_refresh(self):
        view = _make_mock_view()
        store = _make_mock_store()
        CoachPresenter(view=view, engine=_make_mock_engine(), store=store).refresh_profile()
        view.show_profile.assert_called_once_with(store.load.return_value, None)

    def test_reset(self):
        view = _make_mock_view()
        store = _make_mock_store()
        CoachPresenter(view=view, engine=_make_mock_engine(), store=store).on_reset_profile()
        store.reset.assert_called_once()
        view.show_profile.assert_called_once_with(store.reset.return_value, None)


class TestPresenterCallbacks:
    """Tests for the engine signal callbacks."""

    def _response(self, with_showdown: bool, drill: bool = False) -> CoachResponse:
        snapshot = build_snapshot(
            _cards("Ah As"), Position.BTN, Street.PREFLOP, 1.5,
        )
        spot = generate_training_spot(random.Random(3)) if drill else None
        request = CoachRequest(snapshot=snapshot, hero_action=PlayerAction.RAISE, spot=spot)
        result = decide(snapshot, PlayerAction.RAISE)
        showdown = None
        if with_showdown:
            showdown = resolve_showdown(
                snapshot.hero_hole,
                [OpponentHand("OppA", (Card.from_str("Kh"), Card.from_str("Kd")))],
                Board.from_cards(_cards("2c 7s 9d Jh 3c")),
                hero_folded=False,
                hero_action=PlayerAction.RAISE,
            )
        return CoachResponse(request=request, result=result, showdown=showdown)

    def test_started_shows_coaching(self):
        view = _make_mock_view()
        presenter = CoachPresenter(view=view, engine=_make_mock_engine())
        presenter._on_coaching_started()
        view.show_coaching.assert_called_once()

    def test_finished_shows_result(self):
        view = _make_mock_view()
        presenter = CoachPresenter(view=view, engine=_make_mock_engine())
        response = self._response(with_showdown=False)

        presenter._on_coaching_finished(response)

        view.show_result.assert_called_once_with(response.result, "Ah As (AA)")
        view.show_showdown.assert_not_called()

    def test_finished_with_showdown_updates_rating(self):
        view = _make_mock_view()
        store = _make_mock_store(delta=480)
        presenter = CoachPresenter(view=view, engine=_make_mock_engine(), store=store)
        response = self._response(with_showdown=True, drill=True)

        presenter._on_coaching_finished(response)

        view.show_showdown.assert_called_once_with(response.showdown)
        view.show_spot.assert_not_called()
        store.record_decision.assert_called_once()
        assert store.record_decision.call_args[0][0] == response.result.score
        view.show_profile.assert_called_once_with(store.load.return_value, 480)

    def test_live_coaching_leaves_rating(self):
        store = _make_mock_store()
        presenter = CoachPresenter(view=_make_mock_view(), engine=_make_mock_engine(), store=store)
        presenter._on_coaching_finished(self._response(with_showdown=False))
        store.record_decision.assert_not_called()

    def test_error_shows_message(self):
        view = _make_mock_view()
        presenter = CoachPresenter(view=view, engine=_make_mock_engine())
        presenter._on_coaching_error("boom")
        view.show_error.assert_called_once_with("Coach error: boom")


class TestPresenterGameMode:
    """GAME drills carry one hand from preflop through the river."""

    def _dealt(self, engine, store=None):
        view = _make_mock_view(drill_mode="game")
        presenter = CoachPresenter(view=view, engine=engine, store=store, rng=random.Random(3))
        presenter.on_deal_clicked()
        return view, presenter

    def test_call_moves_to_flop(self):
        engine = _make_mock_engine()
        _, presenter = self._dealt(engine)
        preflop = presenter.active_spot

        presenter.on_action_chosen("call")

        request = _sent_request(engine)
        assert request.spot is preflop
        assert request.hand_over is False
        flop = presenter.active_spot
        assert flop.snapshot.street == Street.FLOP
        assert flop.snapshot.board == preflop.full_board.up_to(Street.FLOP)
        assert flop.opponent_hands == preflop.opponent_hands

    def test_fold_ends_hand(self):
        engine = _make_mock_engine()
        _, presenter = self._dealt(engine)

        presenter.on_action_chosen("fold")

        assert _sent_request(engine).hand_over is True
        assert presenter.active_spot is None

    def test_plays_every_street_then_ends(self):
        engine = _make_mock_engine()
        _, presenter = self._dealt(engine)

        streets = []
        while presenter.active_spot is not None:
            streets.append(presenter.active_spot.snapshot.street)
            presenter.on_action_chosen("call")

        assert streets == [Street.PREFLOP, Street.FLOP, Street.TURN, Street.RIVER]
        requests = [c[0][0] for c in engine.request_coach.call_args_list]
        assert [r.hand_over for r in requests] == [False, False, False, True]

    def test_hands_mode_ends_after_one_decision(self):
        engine = _make_mock_engine()
        presenter = CoachPresenter(
            view=_make_mock_view(drill_mode="hands"), engine=engine, rng=random.Random(3),
        )
        presenter.on_deal_clicked()
        presenter.on_action_chosen("call")
        assert _sent_request(engine).hand_over is True
        assert presenter.active_spot is None

    def test_finished_mid_hand_shows_next_street(self):
        engine = _make_mock_engine()
        store = _make_mock_store(delta=120)
        view, presenter = self._dealt(engine, store)
        presenter.on_action_chosen("call")
        request = _sent_request(engine)
        result = decide(request.snapshot, request.hero_action)

        presenter._on_coaching_finished(CoachResponse(request=request, result=result))

        view.show_showdown.assert_not_called()
        assert view.show_spot.call_args[0][0] is presenter.active_spot.snapshot
        store.record_decision.assert_called_once()
        view.show_profile.assert_called_with(store.load.return_value, 120)


class TestPresenterPreferredHands:
    def test_deal_uses_stored_preference(self):
        store = _make_mock_store(preferred=PreferredHands.FINAL)
        presenter = CoachPresenter(
            view=_make_mock_view(), engine=_make_mock_engine(), store=store,
            rng=random.Random(3),
        )
        for _ in range(5):
            presenter.on_deal_clicked()
            assert presenter.active_spot.snapshot.street == Street.RIVER

    def test_outs_preference(self):
        store = _make_mock_store(preferred=PreferredHands.OUTS)
        presenter = CoachPresenter(
            view=_make_mock_view(), engine=_make_mock_engine(), store=store,
            rng=random.Random(3),
        )
        for _ in range(5):
            presenter.on_deal_clicked()
            assert presenter.active_spot.snapshot.street in (Street.FLOP, Street.TURN)

    def test_change_saves_and_refreshes(self):
        view = _make_mock_view()
        store = _make_mock_store()
        presenter = CoachPresenter(view=view, engine=_make_mock_engine(), store=store)

        presenter.on_preferred_hands_changed("OUTS")

        store.set_preferred_hands.assert_called_once_with("OUTS")
        view.show_profile.assert_called_once_with(store.set_preferred_hands.return_value, None)

    def test_change_without_store_is_noop(self):
        view = _make_mock_view()
        CoachPresenter(view=view, engine=_make_mock_engine()).on_preferred_hands_changed("FINAL")
        view.show_profile.assert_not_called()
