"""Rating progression: coach score -> rating delta, rating -> tier."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass


@dataclass(frozen=True)
class RatingTier:
    name: str
    min_rating: int
    max_rating: float  # inclusive; inf for the top tier


TIERS: tuple[RatingTier, ...] = (
    RatingTier("Bronze", 0, 1499),
    RatingTier("Silver", 1500, 3299),
    RatingTier("Gold", 3300, 5499),
    RatingTier("Diamond", 5500, 8099),
    RatingTier("Mythic", 8100, 11299),
    RatingTier("Legendary", 11300, 14999),
    RatingTier("Champion", 15000, math.inf),
)

# (minimum score, base delta), checked top down; bounds are inclusive
# except "> 95", which excludes 95 itself.
_GAIN_STEPS = (
    (90, 330),
    (75, 250),
    (55, 185),
)
_LOSS_STEPS = (
    (40, -50),
    (20, -70),
    (11, -90),
)
_FLOOR_LOSS = -150


def base_delta(score: float) -> int:
    """Unrandomized rating change for a coach score."""
    if score >= 100:
        return 500
    if score > 95:
        return 425
    for threshold, delta in (*_GAIN_STEPS, *_LOSS_STEPS):
        if score >= threshold:
            return delta
    return _FLOOR_LOSS


def random_gain(base: int, rng: random.Random) -> int:
    """Spread a positive base by +/-20% (at least 2 points), never below 1."""
    spread = max(2, round(base * 0.2))
    low = max(1, base - spread)
    return rng.randint(low, base + spread)


def rating_delta(score: float, rng: random.Random | None = None) -> int:
    """Rating change for a coach score.

    Gains are randomized around their base; losses are fixed.
    """
    base = base_delta(score)
    if base <= 0:
        return base
    return random_gain(base, rng or random.Random())


_LOSS_FACTORS = {
    "Bronze": 0.3,
    "Silver": 0.4,
    "Gold": 0.6,
    "Diamond": 0.8,
    "Mythic": 1.0,
    "Legendary": 1.3,
    "Champion": 1.5,
}


def loss_factor(tier: RatingTier | str) -> float:
    """Multiplier for rating losses; higher tiers lose more per mistake."""
    name = tier if isinstance(tier, str) else tier.name
    return _LOSS_FACTORS.get(name, 1.0)


def scale_loss(delta: int, tier: RatingTier | str) -> int:
    if delta >= 0:
        return delta
    return round(delta * loss_factor(tier))


# (max distance from the true count, base on first try, base on a retry)
_OUTS_STEPS = (
    (0, 240, 170),
    (1, 170, 108),
    (2, 108, 60),
    (3, 60, 30),
)


def outs_answer_delta(
    answer: int,
    correct: int,
    attempt: int,
    tier: RatingTier | str = "Mythic",
    rng: random.Random | None = None,
) -> int:
    """Rating change for an outs quiz answer.

    Close answers earn a randomized bonus that shrinks on the second
    attempt; answers more than 3 off cost rating, scaled by tier.
    """
    diff = abs(answer - correct)
    for max_diff, first, retry in _OUTS_STEPS:
        if diff <= max_diff:
            return random_gain(first if attempt <= 1 else retry, rng or random.Random())
    return scale_loss(-120 if attempt >= 2 else -60, tier)


def clamp_rating(rating: float) -> int:
    """Round and floor a rating at 0."""
    return max(0, round(rating))


def tier_for(rating: float) -> RatingTier:
    for tier in reversed(TIERS):
        if rating >= tier.min_rating:
            return tier
    return TIERS[0]


def tier_progress(rating: float) -> tuple[RatingTier, RatingTier, float]:
    """Current tier, next tier and the fraction of the way through the current one.

    The top tier reports itself as next with a fraction of 1.0.
    """
    current = tier_for(rating)
    idx = TIERS.index(current)
    if idx == len(TIERS) - 1:
        return current, current, 1.0
    span = (current.max_rating - current.min_rating) or 1
    fraction = max(0.0, min(1.0, (rating - current.min_rating) / span))
    return current, TIERS[idx + 1], fraction
