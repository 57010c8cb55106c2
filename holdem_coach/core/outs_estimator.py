"""Outs and draw equity estimation for flop and turn spots.

Focuses on the clean, teachable outs: flush draws, open-ended and gutshot
straight draws, and the made-hand improvement outs (sets, trips, two pair).
Equity uses the rule of 4 and 2 rather than exact enumeration.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from holdem_coach.utils.card import Card
from holdem_coach.utils.constants import Rank, Street, Suit

FLUSH_DRAW_OUTS = 9
OPEN_ENDED_OUTS = 8
GUTSHOT_OUTS = 4
# Approximation: a combo draw shares roughly one completing card.
# Not an exact count of cards that complete both draws.
COMBO_OVERLAP = 1

FLUSH_DRAW = "Flush draw"
OPEN_ENDED_DRAW = "Open-ended straight draw"
GUTSHOT_DRAW = "Gutshot straight draw"
COMBO_DRAW = "Combo draw (flush + straight)"
SET_DRAW = "Set draw"
TRIPS_DRAW = "Trips draw"
TWO_PAIR_OUTS = "Two pair / full house outs"


@dataclass(frozen=True)
class OutsResult:
    """Outs count with rule-of-4-and-2 equity."""

    outs: int
    equity_pct: float
    draw_label: str


def _flush_draw_suit(cards: Sequence[Card]) -> Suit | None:
    counts = Counter(c.suit for c in cards)
    for suit, count in counts.items():
        if count == 4:
            return suit
    return None


def _straight_draw(cards: Sequence[Card]) -> tuple[int, str]:
    """Best straight draw as (outs, label); (0, '') when there is none."""
    values = {c.value for c in cards}
    if 14 in values:
        values.add(1)

    best_outs, best_label = 0, ""
    for start in range(1, 11):
        window = range(start, start + 5)
        missing = [v for v in window if v not in values]
        if len(missing) != 1:
            continue
        if missing[0] in (window[0], window[-1]):
            best_outs, best_label = OPEN_ENDED_OUTS, OPEN_ENDED_DRAW
        elif best_outs < OPEN_ENDED_OUTS:
            best_outs, best_label = GUTSHOT_OUTS, GUTSHOT_DRAW
    return best_outs, best_label


def _improvement_outs(hole: Sequence[Card], board: Sequence[Card]) -> tuple[int, str]:
    """Outs to improve a made hand when there is no flush or straight draw."""
    all_counts = Counter(c.rank for c in [*hole, *board])
    board_counts = Counter(c.rank for c in board)
    board_has_pair = any(n >= 2 for n in board_counts.values())
    hole_ranks: list[Rank] = list(dict.fromkeys(c.rank for c in hole))
    paired_with_board = any(board_counts[r] > 0 for r in hole_ranks)

    def remaining(rank: Rank) -> int:
        return max(0, 4 - all_counts[rank])

    set_outs = trips_outs = two_pair_outs = 0
    if hole[0].rank == hole[1].rank:
        set_outs = remaining(hole[0].rank)

    for rank in hole_ranks:
        left = remaining(rank)
        if left <= 0:
            continue
        if board_counts[rank] > 0:
            trips_outs += left
        elif board_has_pair or paired_with_board:
            two_pair_outs += left

    outs = set_outs + trips_outs + two_pair_outs
    if set_outs:
        return outs, SET_DRAW
    if trips_outs:
        return outs, TRIPS_DRAW
    return outs, TWO_PAIR_OUTS


def estimate_outs(
    hole: Sequence[Card],
    board: Sequence[Card],
    street: Street,
) -> OutsResult | None:
    """Count the hero's outs and the rule-of-4-and-2 equity.

    Returns None preflop, with fewer than 3 board cards, or when the hand
    has no outs worth coaching.
    """
    if street == Street.PREFLOP or len(board) < 3:
        return None

    cards = [*hole, *board]
    flush_outs = FLUSH_DRAW_OUTS if _flush_draw_suit(cards) is not None else 0
    straight_outs, straight_label = _straight_draw(cards)

    if flush_outs and straight_outs:
        outs = flush_outs + straight_outs - COMBO_OVERLAP
        label = COMBO_DRAW
    elif flush_outs:
        outs, label = flush_outs, FLUSH_DRAW
    elif straight_outs:
        outs, label = straight_outs, straight_label
    else:
        outs, label = _improvement_outs(hole, board)
        if outs <= 0:
            return None

    multiplier = 4 if street == Street.FLOP else 2
    equity = min(100, max(0, outs) * multiplier)
    return OutsResult(outs=max(0, outs), equity_pct=float(equity), draw_label=label)
