"""Main window assembling all panels, implementing the CoachView protocol."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QFrame,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)

from holdem_coach.core.showdown import ShowdownResult
from holdem_coach.core.table_snapshot import TableSnapshot
from holdem_coach.gui.widgets.coach_output import CoachOutputPanel
from holdem_coach.gui.widgets.input_panel import InputPanel
from holdem_coach.gui.widgets.profile_bar import ProfileBar
from holdem_coach.interface.profile_store import PlayerProfile
from holdem_coach.strategy.decision_engine import CoachResult


class MainWindow(QMainWindow):
    """Top-level window implementing the CoachView protocol.

    Layout:
      - InputPanel (top)
      - CoachOutputPanel (middle, stretches)
      - ProfileBar (bottom)
    """

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Hold'em Coach")
        self.setMinimumSize(760, 640)
        self.resize(860, 720)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(6)

        self._input_panel = InputPanel()
        layout.addWidget(self._input_panel)
        layout.addWidget(self._divider())

        self._output_panel = CoachOutputPanel()
        layout.addWidget(self._output_panel, stretch=1)
        layout.addWidget(self._divider())

        self._profile_bar = ProfileBar()
        layout.addWidget(self._profile_bar)

    @staticmethod
    def _divider() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.HLine)
        line.setStyleSheet("color: #e5e7eb;")
        return line

    # --- CoachView protocol implementation ---

    def get_hero_cards(self) -> list[str]:
        return self._input_panel.get_hero_cards()

    def get_board_cards(self) -> list[str]:
        return self._input_panel.get_board_cards()

    def get_pot_bb(self) -> float:
        return self._input_panel.get_pot_bb()

    def get_facing_bb(self) -> float:
        return self._input_panel.get_facing_bb()

    def get_facing_type(self) -> str:
        return self._input_panel.get_facing_type()

    def get_street(self) -> str:
        return self._input_panel.get_street()

    def get_position(self) -> str:
        return self._input_panel.get_position()

    def get_villain_position(self) -> str:
        return self._input_panel.get_villain_position()

    def get_opponent_actions(self) -> str:
        return self._input_panel.get_opponent_actions()

    def get_raise_size(self) -> float:
        return self._input_panel.get_raise_size()

    def get_drill_mode(self) -> str:
        return self._input_panel.get_drill_mode()

    def show_coaching(self) -> None:
        self._output_panel.show_coaching()

    def show_spot(self, snapshot: TableSnapshot) -> None:
        self._input_panel.load_snapshot(snapshot)

    def show_result(self, result: CoachResult, hero_cards_str: str) -> None:
        self._output_panel.show_result(result, hero_cards_str)

    def show_showdown(self, showdown: ShowdownResult) -> None:
        self._output_panel.show_showdown(showdown)

    def show_profile(self, profile: PlayerProfile, delta: int | None) -> None:
        self._profile_bar.show_profile(profile, delta)

    def show_error(self, message: str) -> None:
        self._output_panel.show_error(message)

    def clear_result(self) -> None:
        self._output_panel.clear()

    # --- Signal accessors for wiring ---

    @property
    def input_panel(self) -> InputPanel:
        return self._input_panel

    @property
    def profile_bar(self) -> ProfileBar:
        return self._profile_bar
