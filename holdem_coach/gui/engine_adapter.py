"""Background coaching using QThread + signals/slots.

CoachWorker runs the DecisionEngine (and the showdown once a drill hand
is over) on a background QThread so the UI stays responsive. EngineAdapter is
the main-thread interface that manages the worker lifecycle.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QThread, Signal

from holdem_coach.core.showdown import resolve_showdown
from holdem_coach.gui.messages import CoachRequest, CoachResponse
from holdem_coach.strategy.coach_config import CoachConfig
from holdem_coach.strategy.decision_engine import DecisionEngine
from holdem_coach.utils.constants import PlayerAction

logger = logging.getLogger("holdem_coach.gui")


class CoachWorker(QObject):
    """Runs coaching on a background thread.

    Communicate via signals only; never call methods directly
    from the main thread after moveToThread().
    """

    coach_requested = Signal(object)  # CoachRequest
    finished = Signal(object)  # CoachResponse
    error = Signal(str)

    def __init__(self, config: CoachConfig | None = None) -> None:
        super().__init__()
        self._engine = DecisionEngine(config)
        self.coach_requested.connect(self._do_coach)

    def _do_coach(self, request: CoachRequest) -> None:
        """Execute the request on the worker thread."""
        try:
            result = self._engine.decide(
                request.snapshot,
                request.hero_action,
                request.declared_raise_size,
            )
            showdown = None
            if request.spot is not None and request.hand_over:
                showdown = resolve_showdown(
                    request.snapshot.hero_hole,
                    request.spot.opponent_hands,
                    request.spot.full_board,
                    hero_folded=request.hero_action == PlayerAction.FOLD,
                    hero_action=request.hero_action,
                )
            self.finished.emit(CoachResponse(request, result, showdown))
        except Exception as e:
            logger.exception("Coaching failed")
            self.error.emit(str(e))


class EngineAdapter(QObject):
    """Main-thread adapter that manages the background coach worker.

    Usage:
        adapter = EngineAdapter()
        adapter.coaching_started.connect(on_start)
        adapter.coaching_finished.connect(on_result)
        adapter.coaching_error.connect(on_error)
        adapter.request_coach(request)
    """

    coaching_started = Signal()
    coaching_finished = Signal(object)  # CoachResponse
    coaching_error = Signal(str)

    def __init__(self, config: CoachConfig | None = None) -> None:
        super().__init__()
        self._thread = QThread()
        self._worker = CoachWorker(config)
        self._worker.moveToThread(self._thread)
        self._worker.finished.connect(self._on_finished)
        self._worker.error.connect(self._on_error)
        self._thread.start()

    def request_coach(self, request: CoachRequest) -> None:
        """Submit a coaching request to the background thread."""
        self.coaching_started.emit()
        self._worker.coach_requested.emit(request)

    def _on_finished(self, response: CoachResponse) -> None:
        self.coaching_finished.emit(response)

    def _on_error(self, message: str) -> None:
        self.coaching_error.emit(message)

    def shutdown(self) -> None:
        """Stop the worker thread."""
        self._thread.quit()
        self._thread.wait()
