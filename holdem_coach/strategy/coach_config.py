"""Tunable constants for the decision engine.

Every additive scoring rule reads its numbers from CoachConfig so each
rule can be audited, overridden from JSON, and tested on its own.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from holdem_coach.utils.constants import HandCategory, Position

logger = logging.getLogger("holdem_coach.config")

DEFAULT_CONFIG_PATH = Path.home() / ".holdem_coach" / "coach_config.json"


def _frozen(d: dict) -> Mapping:
    return MappingProxyType(d)


@dataclass(frozen=True)
class CoachConfig:
    """Scoring and recommendation constants.

    Equities, pot odds and scores are on a 0-100 scale; sizes are in big
    blinds. Penalties are stored as positive magnitudes.

    Instances compare by value but are not hashable: the per-category and
    per-position tables are read-only mappings.
    """

    __hash__ = None  # type: ignore[assignment]

    # Equity model
    base_equity: Mapping[HandCategory, float] = field(default_factory=lambda: _frozen({
        HandCategory.HIGH_CARD: 25.0,
        HandCategory.ONE_PAIR: 52.0,
        HandCategory.TWO_PAIR: 70.0,
        HandCategory.THREE_OF_A_KIND: 80.0,
        HandCategory.STRAIGHT: 85.0,
        HandCategory.FLUSH: 88.0,
        HandCategory.FULL_HOUSE: 94.0,
        HandCategory.FOUR_OF_A_KIND: 98.0,
        HandCategory.STRAIGHT_FLUSH: 100.0,
    }))
    top_pair_equity_bonus: float = 12.0
    top_pair_equity_cap: float = 86.0
    second_pair_equity_bonus: float = 6.0
    middle_pair_equity_penalty: float = 4.0
    low_pair_equity_penalty: float = 10.0
    top_two_pair_equity_bonus: float = 6.0
    top_two_pair_equity_cap: float = 94.0
    flop_equity_discount: float = 6.0
    turn_equity_discount: float = 3.0

    # Baseline recommendation
    positional_bonus: Mapping[Position, float] = field(default_factory=lambda: _frozen({
        Position.BTN: 4.0,
        Position.CO: 4.0,
        Position.HJ: 2.0,
    }))
    raise_edge_threshold: float = 10.0
    raise_equity_threshold: float = 55.0
    call_edge_threshold: float = -5.0
    unopened_raise_threshold: float = 70.0
    facing_raise_multiplier: float = 2.2
    facing_raise_min: float = 4.0
    unopened_raise_pot_fraction: float = 0.55
    unopened_raise_min: float = 3.0

    # Preflop override
    preflop_raise_strength: int = 80
    preflop_strong_strength: int = 70
    preflop_call_strength: int = 58
    preflop_strong_edge_threshold: float = -8.0
    preflop_facing_raise_multiplier: float = 2.3
    preflop_facing_raise_min: float = 4.0
    preflop_open_pot_fraction: float = 0.65
    preflop_open_min: float = 3.0

    # Made-hand boost
    made_hand_boost: Mapping[HandCategory, float] = field(default_factory=lambda: _frozen({
        HandCategory.HIGH_CARD: 0.0,
        HandCategory.ONE_PAIR: 4.0,
        HandCategory.TWO_PAIR: 8.0,
        HandCategory.THREE_OF_A_KIND: 12.0,
        HandCategory.STRAIGHT: 15.0,
        HandCategory.FLUSH: 17.0,
        HandCategory.FULL_HOUSE: 20.0,
        HandCategory.FOUR_OF_A_KIND: 22.0,
        HandCategory.STRAIGHT_FLUSH: 24.0,
    }))
    big_two_pair_rank: int = 11
    big_two_pair_boost: float = 6.0
    top_pair_boost: float = 4.0
    second_pair_boost: float = 2.0

    # Vulnerability and texture
    middle_pair_vulnerability: float = 6.0
    low_pair_vulnerability: float = 8.0
    high_card_vulnerability: float = 10.0
    suited_board_penalty: float = 3.0
    connected_board_penalty: float = 3.0
    connected_rank_gap: int = 2
    flop_texture_penalty: float = 2.0
    turn_texture_penalty: float = 1.0

    # Discipline when facing a bet
    pot_odds_shortfall: float = 10.0
    pot_odds_shortfall_penalty: float = 12.0
    big_bet_pot_pct: float = 60.0
    big_bet_equity: float = 50.0
    big_bet_penalty: float = 6.0
    aggression_count: int = 2
    aggression_equity: float = 55.0
    aggression_penalty: float = 4.0

    # Alignment with the recommendation
    match_bonus: float = 14.0
    over_raise_penalty: float = 6.0
    under_raise_penalty: float = 5.0
    mismatch_penalty: float = 14.0

    # Score assembly
    score_base: float = 52.0
    score_bias: float = 10.0
    edge_weight: float = 0.35
    made_boost_weight: float = 0.45
    neutral_score: int = 60
    match_floor: int = 50
    trash_fold_floor: int = 72
    strong_raise_floor: int = 72
    premium_raise_floor: int = 82

    # Preflop tier bonuses
    premium_raise_bonus: float = 22.0
    strong_raise_bonus: float = 16.0
    trash_fold_bonus: float = 18.0
    strong_call_facing_bonus: float = 10.0
    speculative_call_bonus: float = 8.0

    max_reasons: int = 6


_MAPPING_FIELDS = {
    "base_equity": HandCategory,
    "made_hand_boost": HandCategory,
    "positional_bonus": Position,
}


def _coerce_mapping(name: str, raw: Any, default: Mapping) -> Mapping:
    """Merge a JSON object keyed by enum names into a default mapping."""
    if not isinstance(raw, dict):
        raise ValueError(f"{name} must be an object")
    key_type = _MAPPING_FIELDS[name]
    merged = dict(default)
    for key, value in raw.items():
        merged[key_type[key.upper()]] = float(value)
    return _frozen(merged)


def load_coach_config(config_path: Path | None = None) -> CoachConfig:
    """Load CoachConfig overrides from a JSON file.

    Default path: ~/.holdem_coach/coach_config.json

    Missing files give the defaults. Unreadable files, unknown keys and
    bad values are logged and skipped, so loading never fails.

    Expected JSON format:
        {
            "match_bonus": 12,
            "positional_bonus": {"BTN": 5, "CO": 3},
            "base_equity": {"ONE_PAIR": 50}
        }
    """
    path = config_path or DEFAULT_CONFIG_PATH
    config = CoachConfig()
    if not path.exists():
        return config

    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to read coach config at %s: %s", path, e)
        return config

    if not isinstance(data, dict):
        logger.warning("Coach config at %s is not a JSON object", path)
        return config

    known = {f.name: f for f in fields(CoachConfig)}
    overrides: dict[str, Any] = {}
    for key, raw in data.items():
        if key not in known:
            logger.warning("Unknown coach config key: %s", key)
            continue
        default = getattr(config, key)
        try:
            if key in _MAPPING_FIELDS:
                overrides[key] = _coerce_mapping(key, raw, default)
            elif isinstance(default, int):
                overrides[key] = int(raw)
            else:
                overrides[key] = float(raw)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Invalid value for coach config key %s: %s", key, e)

    if overrides:
        logger.info("Loaded %d coach config overrides from %s", len(overrides), path)
    return replace(config, **overrides)
