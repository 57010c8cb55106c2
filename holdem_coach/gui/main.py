"""Entry point for the coach GUI.

Usage:
    python -m holdem_coach.gui.main
"""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from holdem_coach.gui.engine_adapter import EngineAdapter
from holdem_coach.gui.main_window import MainWindow
from holdem_coach.gui.presenter import CoachPresenter
from holdem_coach.gui.styles import APP_STYLESHEET
from holdem_coach.interface.profile_store import ProfileStore
from holdem_coach.strategy.coach_config import load_coach_config


def main() -> None:
    app = QApplication(sys.argv)
    app.setApplicationName("Hold'em Coach")
    app.setStyleSheet(APP_STYLESHEET)

    window = MainWindow()
    adapter = EngineAdapter(load_coach_config())
    store = ProfileStore()
    presenter = CoachPresenter(view=window, engine=adapter, store=store)

    # Wire UI signals to presenter
    window.input_panel.action_chosen.connect(presenter.on_action_chosen)
    window.input_panel.deal_requested.connect(presenter.on_deal_clicked)
    window.input_panel.inputs_edited.connect(presenter.on_inputs_edited)
    window.profile_bar.reset_requested.connect(presenter.on_reset_profile)
    window.profile_bar.preferred_hands_changed.connect(presenter.on_preferred_hands_changed)
    presenter.refresh_profile()

    window.show()
    exit_code = app.exec()

    # Cleanup
    adapter.shutdown()
    store.close()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
