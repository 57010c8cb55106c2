"""Request and response types passed between the presenter and the worker.

Kept free of Qt imports so the presenter can be tested without PySide6.
"""

from __future__ import annotations

from dataclasses import dataclass

from holdem_coach.core.showdown import ShowdownResult
from holdem_coach.core.table_snapshot import TableSnapshot
from holdem_coach.interface.scenario import TrainingSpot
from holdem_coach.strategy.decision_engine import CoachResult
from holdem_coach.utils.constants import PlayerAction


@dataclass
class CoachRequest:
    """All parameters needed to coach a single decision."""

    snapshot: TableSnapshot
    hero_action: PlayerAction
    declared_raise_size: float | None = None
    spot: TrainingSpot | None = None  # Set for drill spots
    hand_over: bool = True  # Drill spots only: resolve the showdown after this decision


@dataclass
class CoachResponse:
    """Result returned from the background worker."""

    request: CoachRequest
    result: CoachResult
    showdown: ShowdownResult | None = None
