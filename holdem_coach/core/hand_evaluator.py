"""Texas Hold'em hand evaluation engine.

Ranks any 5-7 card set into a HandEvaluation whose tie-break vector
(category strength first, then discriminating ranks) gives a total order
over hand strengths, kickers included.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import total_ordering

from holdem_coach.utils.card import Card
from holdem_coach.utils.constants import HandCategory, Suit

_RANK_LABELS = {14: "A", 13: "K", 12: "Q", 11: "J"}


def rank_label(value: int) -> str:
    """Short label for a rank value: 14 -> 'A', 10 -> '10'."""
    return _RANK_LABELS.get(value, str(value))


@total_ordering
@dataclass(frozen=True)
class HandEvaluation:
    """Result of evaluating a hand.

    Ordering and equality follow the tie-break vector only, so two
    evaluations built from different suits can still chop.
    """

    category: HandCategory
    tiebreak: tuple[int, ...]
    label: str

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HandEvaluation):
            return NotImplemented
        return HandEvaluator.compare(self, other) < 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandEvaluation):
            return NotImplemented
        return HandEvaluator.compare(self, other) == 0

    def __hash__(self) -> int:
        values = list(self.tiebreak)
        while values and values[-1] == 0:
            values.pop()
        return hash(tuple(values))


@dataclass(frozen=True)
class _Shape:
    """Rank/suit breakdown shared by the category builders."""

    values_desc: list[int]
    flush_values: list[int]
    quads: list[int]
    trips: list[int]
    pairs: list[int]

    def kickers(self, *exclude: int) -> list[int]:
        return sorted({v for v in self.values_desc if v not in exclude}, reverse=True)


def straight_top(values: Sequence[int]) -> int | None:
    """Highest top card of a 5-long run, Ace also playing low.

    Returns 5 for the wheel (A-2-3-4-5), None when there is no straight.
    """
    unique = sorted(set(values), reverse=True)
    if unique and unique[0] == 14:
        unique.append(1)
    run = 1
    for i in range(1, len(unique)):
        if unique[i] == unique[i - 1] - 1:
            run += 1
            if run == 5:
                return unique[i] + 4
        else:
            run = 1
    return None


def _shape(cards: Sequence[Card]) -> _Shape:
    values_desc = sorted((c.value for c in cards), reverse=True)

    by_suit: dict[Suit, list[int]] = defaultdict(list)
    for c in cards:
        by_suit[c.suit].append(c.value)
    flush_values: list[int] = []
    for suit_values in by_suit.values():
        if len(suit_values) >= 5:
            flush_values = sorted(suit_values, reverse=True)
            break

    counts = Counter(values_desc)

    def with_count(n: int) -> list[int]:
        return sorted((v for v, c in counts.items() if c == n), reverse=True)

    return _Shape(
        values_desc=values_desc,
        flush_values=flush_values,
        quads=with_count(4),
        trips=with_count(3),
        pairs=with_count(2),
    )


# ---------------------------------------------------------------------------
# Category matchers: each returns the discriminating ranks or None
# ---------------------------------------------------------------------------


def _match_straight_flush(shape: _Shape) -> list[int] | None:
    if not shape.flush_values:
        return None
    top = straight_top(shape.flush_values)
    return [top] if top is not None else None


def _match_quads(shape: _Shape) -> list[int] | None:
    if not shape.quads:
        return None
    quad = shape.quads[0]
    return [quad, *shape.kickers(quad)[:1]]


def _match_full_house(shape: _Shape) -> list[int] | None:
    if not shape.trips:
        return None
    trip = shape.trips[0]
    if len(shape.trips) > 1:
        return [trip, shape.trips[1]]
    if shape.pairs:
        return [trip, shape.pairs[0]]
    return None


def _match_flush(shape: _Shape) -> list[int] | None:
    return shape.flush_values[:5] or None


def _match_straight(shape: _Shape) -> list[int] | None:
    top = straight_top(shape.values_desc)
    return [top] if top is not None else None


def _match_trips(shape: _Shape) -> list[int] | None:
    if not shape.trips:
        return None
    trip = shape.trips[0]
    return [trip, *shape.kickers(trip)[:2]]


def _match_two_pair(shape: _Shape) -> list[int] | None:
    if len(shape.pairs) < 2:
        return None
    high, low = shape.pairs[0], shape.pairs[1]
    return [high, low, *shape.kickers(high, low)[:1]]


def _match_one_pair(shape: _Shape) -> list[int] | None:
    if not shape.pairs:
        return None
    pair = shape.pairs[0]
    return [pair, *shape.kickers(pair)[:3]]


def _high_card(shape: _Shape) -> list[int]:
    return shape.kickers()[:5]


_Matcher = Callable[[_Shape], "list[int] | None"]
_Labeler = Callable[[list[int]], str]

# Strongest first. High card is the fallback in HandEvaluator.evaluate.
_MATCHERS: dict[HandCategory, _Matcher] = {
    HandCategory.STRAIGHT_FLUSH: _match_straight_flush,
    HandCategory.FOUR_OF_A_KIND: _match_quads,
    HandCategory.FULL_HOUSE: _match_full_house,
    HandCategory.FLUSH: _match_flush,
    HandCategory.STRAIGHT: _match_straight,
    HandCategory.THREE_OF_A_KIND: _match_trips,
    HandCategory.TWO_PAIR: _match_two_pair,
    HandCategory.ONE_PAIR: _match_one_pair,
}

_LABELS: dict[HandCategory, _Labeler] = {
    HandCategory.STRAIGHT_FLUSH: lambda r: f"{rank_label(r[0])}-high straight flush",
    HandCategory.FOUR_OF_A_KIND: lambda r: (
        f"Quad {rank_label(r[0])}s"
        + (f" with {rank_label(r[1])} kicker" if len(r) > 1 else "")
    ),
    HandCategory.FULL_HOUSE: lambda r: (
        f"Full house, {rank_label(r[0])}s full of {rank_label(r[1])}s"
    ),
    HandCategory.FLUSH: lambda r: f"{rank_label(r[0])}-high flush",
    HandCategory.STRAIGHT: lambda r: f"{rank_label(r[0])}-high straight",
    HandCategory.THREE_OF_A_KIND: lambda r: f"Trips {rank_label(r[0])}s",
    HandCategory.TWO_PAIR: lambda r: (
        f"Two pair, {rank_label(r[0])}s and {rank_label(r[1])}s"
    ),
    HandCategory.ONE_PAIR: lambda r: f"Pair of {rank_label(r[0])}s",
    HandCategory.HIGH_CARD: lambda r: f"{rank_label(r[0])}-high",
}


class HandEvaluator:
    """Evaluates hold'em hands into comparable HandEvaluations."""

    @staticmethod
    def evaluate(cards: Sequence[Card]) -> HandEvaluation:
        """Evaluate the best hand made from 5 to 7 cards.

        Card count is not checked; callers never pass fewer than 5.
        """
        shape = _shape(cards)
        for category, matcher in _MATCHERS.items():
            ranks = matcher(shape)
            if ranks is not None:
                return HandEvaluation(
                    category=category,
                    tiebreak=(int(category), *ranks),
                    label=_LABELS[category](ranks),
                )
        ranks = _high_card(shape)
        return HandEvaluation(
            category=HandCategory.HIGH_CARD,
            tiebreak=(int(HandCategory.HIGH_CARD), *ranks),
            label=_LABELS[HandCategory.HIGH_CARD](ranks),
        )

    @staticmethod
    def compare(a: HandEvaluation, b: HandEvaluation) -> int:
        """Compare two evaluations: negative if a < b, 0 on a chop, positive if a > b."""
        length = max(len(a.tiebreak), len(b.tiebreak))
        for i in range(length):
            av = a.tiebreak[i] if i < len(a.tiebreak) else 0
            bv = b.tiebreak[i] if i < len(b.tiebreak) else 0
            if av != bv:
                return av - bv
        return 0
