"""Card slots and the deck grid used to fill them.

A CardSlotButton holds one Card (or nothing). Clicking it opens a
DeckGridDialog showing the full deck by suit; cards held by other slots
are greyed out so a hand can never contain the same card twice.
"""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QDialog, QGridLayout, QPushButton, QWidget

from holdem_coach.utils.card import Card
from holdem_coach.utils.constants import Rank, Suit

SUIT_COLORS: dict[Suit, str] = {
    Suit.SPADES: "#111827",
    Suit.HEARTS: "#dc2626",
    Suit.DIAMONDS: "#2563eb",
    Suit.CLUBS: "#15803d",
}

_EMPTY_SLOT_STYLE = (
    "QPushButton { font-size: 16px; font-weight: bold; color: #9ca3af;"
    " border: 2px dashed #d1d5db; border-radius: 6px; background: #fafafa; }"
    "QPushButton:hover { border-color: #6b7280; background: #f0fdf4; }"
)


def card_style(card: Card, font_px: int, border: str) -> str:
    color = SUIT_COLORS[card.suit]
    return (
        f"QPushButton {{ color: {color}; font-weight: bold; font-size: {font_px}px;"
        f" border: {border} {color}; border-radius: 5px; background: #fff; }}"
        f"QPushButton:hover {{ background: #dcfce7; }}"
        f"QPushButton:disabled {{ color: #d1d5db; border-color: #e5e7eb;"
        f" background: #f3f4f6; }}"
    )


class DeckGridDialog(QDialog):
    """Modal grid of all 52 cards, one column per suit, aces on top.

    Emits card_selected(Card) and closes on a click.
    """

    card_selected = Signal(object)

    def __init__(self, taken: set[Card] | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Choose a card")
        self.setWindowFlags(self.windowFlags() & ~Qt.WindowContextHelpButtonHint)
        grid = QGridLayout(self)
        grid.setSpacing(2)

        taken = taken or set()
        for col, suit in enumerate(Suit):
            for row, rank in enumerate(reversed(Rank)):
                card = Card(rank=rank, suit=suit)
                btn = QPushButton(card.pretty())
                btn.setFixedSize(48, 36)
                btn.setStyleSheet(card_style(card, 13, "1px solid"))
                btn.setEnabled(card not in taken)
                btn.clicked.connect(lambda checked=False, c=card: self._choose(c))
                grid.addWidget(btn, row, col)

    def _choose(self, card: Card) -> None:
        self.card_selected.emit(card)
        self.accept()


class CardSlotButton(QPushButton):
    """One hero or board card. Right-click empties the slot."""

    card_changed = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._card: Card | None = None
        self.setFixedSize(56, 40)
        self.setCursor(Qt.PointingHandCursor)
        self._refresh()

    @property
    def card(self) -> Card | None:
        return self._card

    @card.setter
    def card(self, value: Card | None) -> None:
        if value == self._card:
            return
        self._card = value
        self._refresh()
        self.card_changed.emit()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.RightButton:
            self.card = None
            return
        super().mousePressEvent(event)

    def _refresh(self) -> None:
        if self._card is None:
            self.setText("?")
            self.setStyleSheet(_EMPTY_SLOT_STYLE)
        else:
            self.setText(self._card.pretty())
            self.setStyleSheet(card_style(self._card, 14, "2px solid"))
