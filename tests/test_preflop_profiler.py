"""Tests for starting-hand profiling."""

import pytest

from holdem_coach.strategy.preflop_profiler import (
    PreflopTier,
    hand_notation,
    profile_preflop,
)
from holdem_coach.utils.card import Card


def _cards(s: str) -> list[Card]:
    return [Card.from_str(c) for c in s.split()]


class TestHandNotation:
    def test_pair(self):
        assert hand_notation(*_cards("Ah Ad")) == "AA"

    def test_suited_orders_high_first(self):
        assert hand_notation(*_cards("Ks As")) == "AKs"

    def test_offsuit(self):
        assert hand_notation(*_cards("9c Td")) == "T9o"


class TestPocketPairs:
    def test_aces(self):
        p = profile_preflop(_cards("Ah As"))
        assert p.tier == PreflopTier.PREMIUM
        assert p.strength == 95
        assert p.equity_hint == 82
        assert p.notation == "AA"

    def test_kings(self):
        p = profile_preflop(_cards("Kh Ks"))
        assert (p.tier, p.strength, p.equity_hint) == (PreflopTier.PREMIUM, 91, 79)

    def test_queens_high_pair(self):
        p = profile_preflop(_cards("Qh Qs"))
        assert (p.tier, p.strength, p.equity_hint) == (PreflopTier.STRONG, 82, 79)

    def test_sevens_medium_pair(self):
        p = profile_preflop(_cards("7h 7s"))
        assert (p.tier, p.strength, p.equity_hint) == (PreflopTier.STRONG, 66, 66)

    def test_deuces_small_pair(self):
        p = profile_preflop(_cards("2h 2s"))
        assert (p.tier, p.strength, p.equity_hint) == (PreflopTier.SPECULATIVE, 58, 50)


class TestUnpairedHands:
    @pytest.mark.parametrize("hand, tier, strength, equity", [
        ("As Ks", PreflopTier.PREMIUM, 82, 66),
        ("Ah Kd", PreflopTier.STRONG, 76, 63),
        ("Kh Jd", PreflopTier.SPECULATIVE, 67, 57),
        ("Ah Th", PreflopTier.STRONG, 68, 57),
        ("Ac 5c", PreflopTier.SPECULATIVE, 60, 55),
        ("Ad Tc", PreflopTier.SPECULATIVE, 62, 56),
        ("Th 9h", PreflopTier.SPECULATIVE, 62, 52),
        ("8d 6d", PreflopTier.SPECULATIVE, 58, 47),
        ("Js 8s", PreflopTier.SPECULATIVE, 58, 48),
        ("Qd 9c", PreflopTier.SPECULATIVE, 58, 52),
    ])
    def test_branches(self, hand, tier, strength, equity):
        p = profile_preflop(_cards(hand))
        assert p.tier == tier
        assert p.strength == strength
        assert p.equity_hint == equity

    def test_trash(self):
        p = profile_preflop(_cards("7h 2c"))
        assert p.tier == PreflopTier.TRASH
        assert p.strength == 24
        assert p.equity_hint == 36

    def test_card_order_irrelevant(self):
        assert profile_preflop(_cards("Ks As")) == profile_preflop(_cards("As Ks"))
