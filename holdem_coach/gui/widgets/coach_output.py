"""Coach output panel: verdict banner, score bar, reasons and showdown.

The banner shows the verdict and recommended action, a custom-painted
bar shows the score, and the text area lists the coach's reasons.
"""

from __future__ import annotations

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QFont, QPainter
from PySide6.QtWidgets import (
    QLabel,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from holdem_coach.core.showdown import ShowdownResult
from holdem_coach.strategy.decision_engine import CoachResult, Verdict

# Verdict -> (background color, text color)
_VERDICT_COLORS = {
    Verdict.PERFECT: ("#15803d", "#fff"),
    Verdict.GREAT: ("#22c55e", "#fff"),
    Verdict.GOOD: ("#3b82f6", "#fff"),
    Verdict.NEUTRAL: ("#6b7280", "#fff"),
    Verdict.NOT_IDEAL: ("#f97316", "#fff"),
    Verdict.BAD: ("#ef4444", "#fff"),
}

_IDLE_TEXT = "Enter a spot or DEAL a drill, then choose your action"


def _banner_style(color: str, background: str) -> str:
    return (
        f"QLabel {{ font-size: 18px; font-weight: bold; color: {color};"
        f" background: {background}; border-radius: 8px; }}"
    )


class ScoreBar(QWidget):
    """Horizontal 0-100 bar comparing equity, pot odds and the score."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._rows: list[tuple[str, float, str]] = []  # (label, value 0-100, color)
        self.setMinimumHeight(0)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)

    def set_result(self, result: CoachResult) -> None:
        color = _VERDICT_COLORS[result.verdict][0]
        self._rows = [
            ("Score", float(result.score), color),
            ("Equity", result.equity, "#22c55e"),
            ("Pot odds", result.pot_odds, "#3b82f6"),
        ]
        self.update()

    def clear(self) -> None:
        self._rows = []
        self.update()

    def paintEvent(self, event) -> None:
        if not self._rows:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        row_h = 22
        margin_left = 80
        bar_max_w = self.width() - margin_left - 70
        y = 4

        label_font = QFont("Segoe UI", 10, QFont.Bold)
        detail_font = QFont("Segoe UI", 10)

        for label, value, color in self._rows:
            painter.setFont(label_font)
            painter.setPen(QColor("#1f2937"))
            painter.drawText(QRectF(4, y, margin_left - 8, row_h), Qt.AlignVCenter | Qt.AlignRight, label)

            bar_w = max(4, int(bar_max_w * value / 100))
            painter.setBrush(QColor(color))
            painter.setPen(Qt.NoPen)
            painter.drawRoundedRect(QRectF(margin_left, y + 2, bar_w, row_h - 4), 3, 3)

            painter.setFont(detail_font)
            painter.setPen(QColor("#374151"))
            painter.drawText(
                QRectF(margin_left + bar_w + 6, y, 64, row_h),
                Qt.AlignVCenter | Qt.AlignLeft,
                f"{value:.0f}" if label == "Score" else f"{value:.1f}%",
            )
            y += row_h + 2

        painter.end()
        self.setMinimumHeight(y + 4)


class CoachOutputPanel(QWidget):
    """Displays the coaching verdict, reasons and drill showdown."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)

        self._banner = QLabel()
        self._banner.setAlignment(Qt.AlignCenter)
        self._banner.setFixedHeight(44)
        layout.addWidget(self._banner)

        self._bars = ScoreBar()
        layout.addWidget(self._bars)

        self._analysis = QLabel()
        self._analysis.setWordWrap(True)
        self._analysis.setStyleSheet("QLabel { color: #374151; font-size: 12px; padding: 4px; }")
        layout.addWidget(self._analysis)

        self._showdown = QLabel()
        self._showdown.setWordWrap(True)
        self._showdown.setStyleSheet(
            "QLabel { color: #1f2937; font-size: 12px; padding: 6px;"
            " background: #f9fafb; border: 1px solid #e5e7eb; border-radius: 6px; }"
        )
        self._showdown.hide()
        layout.addWidget(self._showdown)

        layout.addStretch()
        self.clear()

    def show_coaching(self) -> None:
        self._banner.setText("Coaching...")
        self._banner.setStyleSheet(_banner_style("#f59e0b", "#fffbeb"))
        self._bars.clear()
        self._analysis.clear()
        self._showdown.hide()

    def show_result(self, result: CoachResult, hero_cards_str: str) -> None:
        best = result.recommended_action.value.upper()
        if result.raise_size is not None:
            best += f" to {result.raise_size:.1f} bb"
        bg, fg = _VERDICT_COLORS[result.verdict]
        self._banner.setText(f"{result.verdict.value.upper()} {result.score}/100 | Best: {best}")
        self._banner.setStyleSheet(_banner_style(fg, bg))
        self._bars.set_result(result)

        lines = [f"Hand: {hero_cards_str}", ""]
        lines.extend(f"• {reason}" for reason in result.reasons)
        lines.append("")
        lines.append(result.summary)
        lines.append(f"Concepts: {', '.join(result.concept_tags)}")
        self._analysis.setText("\n".join(lines))

    def show_showdown(self, showdown: ShowdownResult) -> None:
        winner_ids = {w.id for w in showdown.winners}
        lines = [f"Showdown on {showdown.final_board}"]
        for player in showdown.players:
            hole = " ".join(str(c) for c in player.hole)
            mark = "  ★" if player.id in winner_ids else ""
            lines.append(f"{player.name}: {hole} ({player.evaluation.label}){mark}")
        outcome = showdown.hero_would_result.value.upper()
        if showdown.hero_folded:
            names = ", ".join(w.name for w in showdown.active_winners)
            lines.append(f"You folded; {names} take the pot. You would have: {outcome}")
        else:
            lines.append(f"Result: {outcome}")
        self._showdown.setText("\n".join(lines))
        self._showdown.show()

    def show_error(self, message: str) -> None:
        self._banner.setText("Error")
        self._banner.setStyleSheet(_banner_style("#fff", "#ef4444"))
        self._bars.clear()
        self._analysis.setText(message)
        self._showdown.hide()

    def clear(self) -> None:
        self._banner.setText(_IDLE_TEXT)
        self._banner.setStyleSheet(_banner_style("#6b7280", "#f3f4f6"))
        self._bars.clear()
        self._analysis.clear()
        self._showdown.hide()
