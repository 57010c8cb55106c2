"""Framework-agnostic presenter for the coach GUI.

CoachPresenter mediates between the CoachView (UI) and the engine
(decision engine worker + profile store). It has NO Qt/PySide6 imports;
it depends only on the CoachView Protocol and engine types.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from holdem_coach.core.table_snapshot import TableSnapshot
from holdem_coach.gui.messages import CoachRequest, CoachResponse
from holdem_coach.interface.poker_coach import (
    _hand_display,
    _parse_action_history,
    _parse_cards,
)
from holdem_coach.interface.profile_store import ProfileStore
from holdem_coach.interface.scenario import (
    DrillMode,
    PreferredHands,
    TrainingSpot,
    advance_street,
    generate_training_spot,
)
from holdem_coach.interface.situation_builder import build_snapshot
from holdem_coach.utils.constants import FacingType, PlayerAction, Position, Street

if TYPE_CHECKING:
    from holdem_coach.gui.engine_adapter import EngineAdapter
    from holdem_coach.gui.view_protocol import CoachView


class CoachPresenter:
    """Coordinates view inputs, background coaching, drills and the profile.

    Framework-agnostic: depends only on the CoachView Protocol. Without a
    ProfileStore the presenter coaches and deals drills but keeps no rating.
    """

    def __init__(
        self,
        view: CoachView,
        engine: EngineAdapter,
        store: ProfileStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._view = view
        self._engine = engine
        self._store = store
        self._rng = rng or random.Random()
        self._spot: TrainingSpot | None = None
        self._mode = DrillMode.HANDS

        self._engine.coaching_started.connect(self._on_coaching_started)
        self._engine.coaching_finished.connect(self._on_coaching_finished)
        self._engine.coaching_error.connect(self._on_coaching_error)

    @property
    def active_spot(self) -> TrainingSpot | None:
        return self._spot

    def on_action_chosen(self, action: str) -> None:
        """Handle a FOLD / CALL / RAISE button click."""
        try:
            hero_action = PlayerAction(action.strip().upper())
            raise_size = None
            if hero_action == PlayerAction.RAISE:
                raise_size = self._view.get_raise_size() or None

            spot = self._spot
            snapshot = spot.snapshot if spot is not None else self._read_snapshot()
            if snapshot is None:
                return

            next_spot = None
            if spot is not None and self._mode == DrillMode.GAME:
                next_spot = advance_street(spot, hero_action, raise_size, self._rng)

            self._engine.request_coach(CoachRequest(
                snapshot=snapshot,
                hero_action=hero_action,
                declared_raise_size=raise_size,
                spot=spot,
                hand_over=next_spot is None,
            ))
            # One decision per street; a GAME hand moves on to the next one
            self._spot = next_spot

        except (ValueError, KeyError) as e:
            self._view.show_error(str(e))

    def on_deal_clicked(self) -> None:
        """Deal a random drill spot into the view."""
        try:
            self._mode = DrillMode(self._view.get_drill_mode().strip().lower())
        except ValueError:
            self._mode = DrillMode.HANDS
        preferred = PreferredHands.ANY
        if self._store is not None:
            preferred = self._store.load().preferred_hands
        self._spot = generate_training_spot(self._rng, self._mode, preferred)
        self._view.clear_result()
        self._view.show_spot(self._spot.snapshot)
        if self._store is not None:
            self._view.show_profile(self._store.record_hand(), None)

    def on_inputs_edited(self) -> None:
        """Manual edits turn a dealt drill spot back into live coaching."""
        self._spot = None

    def on_reset_profile(self) -> None:
        if self._store is not None:
            self._view.show_profile(self._store.reset(), None)

    def on_preferred_hands_changed(self, value: str) -> None:
        if self._store is not None:
            self._view.show_profile(self._store.set_preferred_hands(value), None)

    def refresh_profile(self) -> None:
        if self._store is not None:
            self._view.show_profile(self._store.load(), None)

    def _read_snapshot(self) -> TableSnapshot | None:
        """Build a snapshot from the view inputs, or show an error and return None."""
        hero_card_strs = self._view.get_hero_cards()
        if len(hero_card_strs) != 2 or not all(hero_card_strs):
            self._view.show_error("Please select both hero cards.")
            return None

        hero_cards = _parse_cards(" ".join(hero_card_strs))
        board_card_strs = self._view.get_board_cards()
        community_cards = _parse_cards(" ".join(board_card_strs)) if board_card_strs else []

        return build_snapshot(
            hero_cards=hero_cards,
            position=Position(self._view.get_position()),
            street=Street(self._view.get_street()),
            pot_bb=self._view.get_pot_bb(),
            community_cards=community_cards,
            facing_type=FacingType(self._view.get_facing_type()),
            facing_bb=self._view.get_facing_bb(),
            opponent_actions=_parse_action_history(self._view.get_opponent_actions()),
            villain_position=Position(self._view.get_villain_position()),
        )

    def _on_coaching_started(self) -> None:
        self._view.show_coaching()

    def _on_coaching_finished(self, response: CoachResponse) -> None:
        request = response.request
        result = response.result
        self._view.show_result(result, _hand_display(request.snapshot.hero_hole))

        # Every drill decision is rated; live coaching is not
        if request.spot is not None and self._store is not None:
            delta = self._store.record_decision(result.score, self._rng)
            self._view.show_profile(self._store.load(), delta)

        if response.showdown is not None:
            self._view.show_showdown(response.showdown)
        elif request.spot is not None and not request.hand_over and self._spot is not None:
            self._view.show_spot(self._spot.snapshot)

    def _on_coaching_error(self, message: str) -> None:
        self._view.show_error(f"Coach error: {message}")
