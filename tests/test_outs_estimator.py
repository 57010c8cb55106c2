"""Tests for the outs estimator."""

from holdem_coach.core.outs_estimator import (
    COMBO_DRAW,
    FLUSH_DRAW,
    GUTSHOT_DRAW,
    OPEN_ENDED_DRAW,
    SET_DRAW,
    TRIPS_DRAW,
    estimate_outs,
)
from holdem_coach.utils.card import Card
from holdem_coach.utils.constants import Street


def _cards(s: str) -> list[Card]:
    return [Card.from_str(c) for c in s.split()]


class TestDraws:
    def test_combo_draw(self) -> None:
        result = estimate_outs(_cards("As Ks"), _cards("Qs Js 2h"), Street.FLOP)
        assert result is not None
        assert result.outs == 16
        assert result.equity_pct == 64.0
        assert result.draw_label == COMBO_DRAW

    def test_flush_draw(self) -> None:
        result = estimate_outs(_cards("Ah 5h"), _cards("Kh 9h 2c"), Street.FLOP)
        assert result is not None
        assert result.outs == 9
        assert result.equity_pct == 36.0
        assert result.draw_label == FLUSH_DRAW

    def test_flush_draw_on_turn_uses_rule_of_two(self) -> None:
        result = estimate_outs(_cards("Ah 5h"), _cards("Kh 9h 2c 7s"), Street.TURN)
        assert result is not None
        assert result.outs == 9
        assert result.equity_pct == 18.0

    def test_open_ended(self) -> None:
        result = estimate_outs(_cards("9c 8d"), _cards("7h 6s 2c"), Street.FLOP)
        assert result is not None
        assert result.outs == 8
        assert result.equity_pct == 32.0
        assert result.draw_label == OPEN_ENDED_DRAW

    def test_gutshot(self) -> None:
        result = estimate_outs(_cards("9c 8d"), _cards("6h 5s Kc"), Street.FLOP)
        assert result is not None
        assert result.outs == 4
        assert result.draw_label == GUTSHOT_DRAW

    def test_ace_plays_low_for_wheel_draw(self) -> None:
        result = estimate_outs(_cards("Ad 2c"), _cards("3h 4s Kc"), Street.FLOP)
        assert result is not None
        assert result.draw_label == OPEN_ENDED_DRAW


class TestImprovementOuts:
    def test_set_draw(self) -> None:
        result = estimate_outs(_cards("7c 7d"), _cards("Kh 9s 2c"), Street.FLOP)
        assert result is not None
        assert result.outs == 2
        assert result.equity_pct == 8.0
        assert result.draw_label == SET_DRAW

    def test_trips_draw_with_kicker_outs(self) -> None:
        # Two kings left for trips, three aces for two pair
        result = estimate_outs(_cards("Ah Kd"), _cards("Kc 7s 2h"), Street.FLOP)
        assert result is not None
        assert result.outs == 5
        assert result.draw_label == TRIPS_DRAW

    def test_no_outs_returns_none(self) -> None:
        assert estimate_outs(_cards("Ah Qd"), _cards("9c 6s 2h"), Street.FLOP) is None


class TestGuards:
    def test_preflop_returns_none(self) -> None:
        assert estimate_outs(_cards("As Ks"), [], Street.PREFLOP) is None

    def test_short_board_returns_none(self) -> None:
        assert estimate_outs(_cards("As Ks"), _cards("Qs Js"), Street.FLOP) is None

    def test_equity_capped(self) -> None:
        result = estimate_outs(_cards("As Ks"), _cards("Qs Js 2h"), Street.FLOP)
        assert result is not None
        assert 0 <= result.equity_pct <= 100
