"""Input panel widget for the coach GUI.

Hero and board card slots, pot and facing-bet inputs, street and
position dropdowns, the opponent action line, and the FOLD / CALL /
RAISE buttons that submit the hero's decision.
"""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QComboBox,
    QDoubleSpinBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from holdem_coach.core.table_snapshot import TableSnapshot
from holdem_coach.gui.widgets.card_picker import CardSlotButton, DeckGridDialog
from holdem_coach.utils.constants import FacingType, PlayerAction, Position, Street

_ACTION_STYLES = {
    PlayerAction.FOLD: ("#ef4444", "#dc2626"),
    PlayerAction.CALL: ("#3b82f6", "#2563eb"),
    PlayerAction.RAISE: ("#22c55e", "#16a34a"),
}


def _spin(value: float, minimum: float = 0.0) -> QDoubleSpinBox:
    spin = QDoubleSpinBox()
    spin.setRange(minimum, 9999.0)
    spin.setValue(value)
    spin.setSuffix(" bb")
    spin.setDecimals(1)
    return spin


class InputPanel(QWidget):
    """Top input section: cards, pot/bet, street, positions, actions."""

    action_chosen = Signal(str)  # PlayerAction value
    deal_requested = Signal()
    inputs_edited = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._hero_slots: list[CardSlotButton] = []
        self._board_slots: list[CardSlotButton] = []
        self._loading = False
        self._build_ui()

    def _build_ui(self) -> None:
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(8, 8, 8, 8)

        # --- Row 1: Cards ---
        cards_row = QHBoxLayout()

        hero_group = QGroupBox("Hero Cards")
        hero_layout = QHBoxLayout(hero_group)
        for _ in range(2):
            slot = self._make_slot()
            self._hero_slots.append(slot)
            hero_layout.addWidget(slot)
        cards_row.addWidget(hero_group)

        board_group = QGroupBox("Board")
        board_layout = QHBoxLayout(board_group)
        for _ in range(5):
            slot = self._make_slot()
            self._board_slots.append(slot)
            board_layout.addWidget(slot)
        cards_row.addWidget(board_group)

        main_layout.addLayout(cards_row)

        # --- Row 2: Pot, facing bet, street, positions ---
        table_row = QHBoxLayout()

        self._pot_spin = _spin(6.0)
        table_row.addWidget(QLabel("Pot:"))
        table_row.addWidget(self._pot_spin)

        self._facing_spin = _spin(0.0)
        table_row.addWidget(QLabel("Facing:"))
        table_row.addWidget(self._facing_spin)

        self._facing_combo = QComboBox()
        self._facing_combo.addItems([t.value for t in FacingType])
        table_row.addWidget(self._facing_combo)

        self._street_combo = QComboBox()
        self._street_combo.addItems([s.value for s in Street])
        table_row.addWidget(QLabel("Street:"))
        table_row.addWidget(self._street_combo)

        self._position_combo = QComboBox()
        self._position_combo.addItems([p.value for p in Position])
        self._position_combo.setCurrentText(Position.BTN.value)
        table_row.addWidget(QLabel("You:"))
        table_row.addWidget(self._position_combo)

        self._villain_combo = QComboBox()
        self._villain_combo.addItems([p.value for p in Position])
        self._villain_combo.setCurrentText(Position.BB.value)
        table_row.addWidget(QLabel("Villain:"))
        table_row.addWidget(self._villain_combo)

        main_layout.addLayout(table_row)

        # --- Row 3: Opponent actions ---
        actions_row = QHBoxLayout()
        actions_row.addWidget(QLabel("Opponents:"))
        self._actions_edit = QLineEdit()
        self._actions_edit.setPlaceholderText("e.g. OppA bet 4, OppB fold")
        actions_row.addWidget(self._actions_edit)
        main_layout.addLayout(actions_row)

        # --- Row 4: Drill controls and hero decision ---
        controls_row = QHBoxLayout()

        self._mode_combo = QComboBox()
        self._mode_combo.addItems(["Hands", "Game"])
        controls_row.addWidget(QLabel("Drill:"))
        controls_row.addWidget(self._mode_combo)

        deal_btn = QPushButton("DEAL")
        deal_btn.setFixedHeight(36)
        deal_btn.clicked.connect(self.deal_requested.emit)
        controls_row.addWidget(deal_btn)

        controls_row.addStretch()

        self._raise_spin = _spin(0.0)
        controls_row.addWidget(QLabel("Raise to:"))
        controls_row.addWidget(self._raise_spin)

        for action in PlayerAction:
            controls_row.addWidget(self._make_action_button(action))

        main_layout.addLayout(controls_row)

        for spin in (self._pot_spin, self._facing_spin):
            spin.valueChanged.connect(self._on_edited)
        for combo in (self._facing_combo, self._street_combo, self._position_combo, self._villain_combo):
            combo.currentIndexChanged.connect(self._on_edited)
        self._actions_edit.textEdited.connect(self._on_edited)

    def _make_slot(self) -> CardSlotButton:
        slot = CardSlotButton()
        slot.clicked.connect(lambda checked=False, s=slot: self._open_picker(s))
        slot.card_changed.connect(self._on_edited)
        return slot

    def _make_action_button(self, action: PlayerAction) -> QPushButton:
        bg, pressed = _ACTION_STYLES[action]
        btn = QPushButton(action.value)
        btn.setFixedHeight(36)
        btn.setMinimumWidth(80)
        btn.setStyleSheet(
            f"QPushButton {{ background: {bg}; color: white; font-weight: bold;"
            f" font-size: 14px; border-radius: 6px; padding: 0 16px; }}"
            f"QPushButton:pressed {{ background: {pressed}; }}"
        )
        btn.clicked.connect(lambda checked=False, a=action: self.action_chosen.emit(a.value))
        return btn

    def _on_edited(self, *args) -> None:
        if not self._loading:
            self.inputs_edited.emit()

    def _open_picker(self, slot: CardSlotButton) -> None:
        """Let the user choose a card for one slot, hiding cards held elsewhere."""
        taken = {
            s.card for s in self._hero_slots + self._board_slots
            if s is not slot and s.card is not None
        }
        dialog = DeckGridDialog(taken=taken, parent=self)
        dialog.card_selected.connect(lambda c: setattr(slot, "card", c))
        dialog.exec()

    def load_snapshot(self, snapshot: TableSnapshot) -> None:
        """Fill every input from a dealt spot without reporting edits."""
        self._loading = True
        try:
            for slot, card in zip(self._hero_slots, snapshot.hero_hole):
                slot.card = card
            board = snapshot.board_cards
            for idx, slot in enumerate(self._board_slots):
                slot.card = board[idx] if idx < len(board) else None
            self._pot_spin.setValue(snapshot.pot)
            self._facing_spin.setValue(snapshot.facing_size)
            if snapshot.facing is not None:
                self._facing_combo.setCurrentText(snapshot.facing.type.value)
            self._street_combo.setCurrentText(snapshot.street.value)
            self._position_combo.setCurrentText(snapshot.hero_position.value)
            self._villain_combo.setCurrentText(snapshot.villain_position.value)
            self._actions_edit.setText(", ".join(
                f"{a.name} {a.action.value.lower()}" + (f" {a.size:g}" if a.size else "")
                for a in snapshot.opponent_actions
            ))
            self._raise_spin.setValue(0.0)
        finally:
            self._loading = False

    # --- Public accessors for the presenter ---

    def get_hero_cards(self) -> list[str]:
        return [str(s.card) for s in self._hero_slots if s.card is not None]

    def get_board_cards(self) -> list[str]:
        return [str(s.card) for s in self._board_slots if s.card is not None]

    def get_pot_bb(self) -> float:
        return self._pot_spin.value()

    def get_facing_bb(self) -> float:
        return self._facing_spin.value()

    def get_facing_type(self) -> str:
        return self._facing_combo.currentText()

    def get_street(self) -> str:
        return self._street_combo.currentText()

    def get_position(self) -> str:
        return self._position_combo.currentText()

    def get_villain_position(self) -> str:
        return self._villain_combo.currentText()

    def get_opponent_actions(self) -> str:
        return self._actions_edit.text()

    def get_raise_size(self) -> float:
        return self._raise_spin.value()

    def get_drill_mode(self) -> str:
        return self._mode_combo.currentText()
