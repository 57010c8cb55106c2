"""Starting-hand classification for preflop coaching.

A fixed decision tree over the two hole cards. The first matching branch
sets the tier, a 0-100 strength score, an equity hint versus a random hand
and a label. Nothing here depends on the board or the table.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from holdem_coach.utils.card import Card
from holdem_coach.utils.constants import VALUE_RANKS


class PreflopTier(StrEnum):
    PREMIUM = "premium"
    STRONG = "strong"
    SPECULATIVE = "speculative"
    TRASH = "trash"


@dataclass(frozen=True)
class PreflopProfile:
    """Starting-hand profile for two hole cards."""

    tier: PreflopTier
    strength: int
    equity_hint: float
    label: str
    notation: str


def hand_notation(card1: Card, card2: Card) -> str:
    """Standard notation for two hole cards: 'AA', 'AKs', 'T9o'."""
    high, low = sorted((card1, card2), key=lambda c: c.value, reverse=True)
    if high.value == low.value:
        return f"{high.rank.value}{low.rank.value}"
    suffix = "s" if high.suit == low.suit else "o"
    return f"{high.rank.value}{low.rank.value}{suffix}"


def profile_preflop(hole: tuple[Card, Card] | list[Card]) -> PreflopProfile:
    """Classify two hole cards into a PreflopProfile."""
    card1, card2 = hole[0], hole[1]
    high = max(card1.value, card2.value)
    low = min(card1.value, card2.value)
    suited = card1.suit == card2.suit
    gap = high - low
    notation = hand_notation(card1, card2)

    def profile(tier: PreflopTier, strength: int, equity: float, label: str) -> PreflopProfile:
        return PreflopProfile(
            tier=tier,
            strength=max(0, min(100, strength)),
            equity_hint=float(max(0, min(100, equity))),
            label=label,
            notation=notation,
        )

    if gap == 0:
        name = VALUE_RANKS[high].value
        if high >= 13:
            aces = high == 14
            return profile(
                PreflopTier.PREMIUM,
                95 if aces else 91,
                82 if aces else 79,
                f"Premium pair ({name}{name})",
            )
        if high >= 10:
            return profile(
                PreflopTier.STRONG,
                76 + (high - 10) * 3,
                75 + (high - 10) * 2,
                f"High pocket pair ({name}{name})",
            )
        if high >= 7:
            return profile(
                PreflopTier.STRONG,
                66 + (high - 7) * 2,
                66 + (high - 7) * 3,
                f"Medium pocket pair ({name}{name})",
            )
        return profile(
            PreflopTier.SPECULATIVE,
            58 + (high - 2),
            50 + (high - 2) * 3,
            f"Small pocket pair ({name}{name}), set-mining hand",
        )

    broadway = low >= 11
    total = high + low

    if broadway and suited:
        strength = 70 + (total - 23) * 3
        tier = PreflopTier.PREMIUM if strength >= 80 else PreflopTier.STRONG
        return profile(tier, strength, 58 + (total - 23) * 2, f"Suited broadway ({notation})")

    if broadway:
        strength = 64 + (total - 23) * 3
        tier = PreflopTier.STRONG if strength >= 70 else PreflopTier.SPECULATIVE
        return profile(tier, strength, 55 + (total - 23) * 2, f"Offsuit broadway ({notation})")

    if suited and high == 14 and low >= 9:
        return profile(
            PreflopTier.STRONG,
            66 + (low - 9) * 2,
            56 + (low - 9),
            f"Suited ace with a good kicker ({notation})",
        )

    if suited and high == 14 and low >= 5:
        return profile(PreflopTier.SPECULATIVE, 60, 55, f"Suited wheel ace ({notation})")

    if high == 14 and low >= 10:
        return profile(PreflopTier.SPECULATIVE, 62, 56, f"Ace with a broadway kicker ({notation})")

    if suited and gap == 1 and high >= 9:
        return profile(
            PreflopTier.SPECULATIVE,
            60 + (high - 9) * 2,
            50 + (high - 9) * 2,
            f"Suited connector ({notation})",
        )

    if suited and gap <= 2 and high >= 8:
        return profile(PreflopTier.SPECULATIVE, 58, 47, f"Suited connector / one-gapper ({notation})")

    if suited and low >= 7 and gap <= 3:
        return profile(PreflopTier.SPECULATIVE, 58, 48, f"Suited playable ({notation})")

    if low >= 8 and high >= 12:
        return profile(PreflopTier.SPECULATIVE, 58, 52, f"Playable high cards ({notation})")

    return profile(
        PreflopTier.TRASH,
        15 + total,
        28 + high + low // 2,
        f"Weak starting hand ({notation})",
    )
