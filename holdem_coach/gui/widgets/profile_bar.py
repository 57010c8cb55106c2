"""Profile bar: rating tier, progress to the next tier and counters.

Also holds the hands preference that HANDS drills deal from.
"""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QWidget,
)

from holdem_coach.interface.profile_store import PlayerProfile
from holdem_coach.interface.rating import tier_progress
from holdem_coach.interface.scenario import PreferredHands

_PREFERENCE_LABELS = {
    PreferredHands.ANY: "Mixed streets",
    PreferredHands.PREFLOP: "Preflop only",
    PreferredHands.OUTS: "Outs (flop/turn)",
    PreferredHands.FINAL: "Final (river)",
}


class ProfileBar(QWidget):
    """Bottom strip showing the player's tier and rating."""

    reset_requested = Signal()
    preferred_hands_changed = Signal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)

        self._tier_label = QLabel("Bronze")
        self._tier_label.setStyleSheet("font-weight: bold; font-size: 13px;")
        layout.addWidget(self._tier_label)

        self._progress = QProgressBar()
        self._progress.setRange(0, 100)
        self._progress.setTextVisible(True)
        layout.addWidget(self._progress, stretch=1)

        self._stats_label = QLabel("")
        self._stats_label.setStyleSheet("font-size: 12px; color: #374151;")
        layout.addWidget(self._stats_label)

        self._delta_label = QLabel("")
        self._delta_label.setStyleSheet("font-size: 12px; font-weight: bold;")
        layout.addWidget(self._delta_label)

        self._preference_combo = QComboBox()
        for pref, label in _PREFERENCE_LABELS.items():
            self._preference_combo.addItem(label, pref.value)
        self._preference_combo.setToolTip("Which streets Hands drills deal")
        self._preference_combo.activated.connect(self._on_preference_activated)
        layout.addWidget(self._preference_combo)

        reset_btn = QPushButton("Reset")
        reset_btn.clicked.connect(self.reset_requested.emit)
        layout.addWidget(reset_btn)

    def _on_preference_activated(self, index: int) -> None:
        self.preferred_hands_changed.emit(self._preference_combo.itemData(index))

    def show_profile(self, profile: PlayerProfile, delta: int | None) -> None:
        current, nxt, fraction = tier_progress(profile.rating)
        self._tier_label.setText(f"{current.name} ({profile.rating})")
        self._progress.setValue(int(fraction * 100))
        if nxt is current:
            self._progress.setFormat("Top tier")
        else:
            self._progress.setFormat(f"%p% to {nxt.name}")
        self._stats_label.setText(
            f"{profile.total_hands} hands | {profile.total_decisions} decisions | "
            f"{profile.correct_outs_count} outs right"
        )
        index = self._preference_combo.findData(str(profile.preferred_hands))
        if index >= 0:
            self._preference_combo.setCurrentIndex(index)
        if delta is None:
            self._delta_label.clear()
        else:
            color = "#16a34a" if delta >= 0 else "#dc2626"
            self._delta_label.setStyleSheet(f"font-size: 12px; font-weight: bold; color: {color};")
            self._delta_label.setText(f"{delta:+d}")
