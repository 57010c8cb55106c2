"""Decision engine: recommends an action and scores the hero's choice.

Pipeline for one snapshot:
  TableSnapshot + hero action
    -> hand read (evaluator, preflop profile, outs) -> equity
    -> pot odds, edge -> baseline recommendation (preflop override)
    -> additive scoring rules (CoachConfig) -> score, verdict
    -> reasons, concept tags, summary

Stateless: identical inputs always give an identical CoachResult.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import StrEnum

from holdem_coach.core.hand_evaluator import HandEvaluation, HandEvaluator, rank_label
from holdem_coach.core.outs_estimator import OutsResult, estimate_outs
from holdem_coach.core.table_snapshot import TableSnapshot
from holdem_coach.strategy.coach_config import CoachConfig
from holdem_coach.strategy.preflop_profiler import (
    PreflopProfile,
    PreflopTier,
    profile_preflop,
)
from holdem_coach.utils.constants import (
    HandCategory,
    OpponentActionType,
    PlayerAction,
    Position,
    Street,
)

logger = logging.getLogger("holdem_coach.strategy")


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


class Recommendation(StrEnum):
    """Actions the coach can recommend."""

    FOLD = "fold"
    CALL = "call"
    RAISE = "raise"


class Verdict(StrEnum):
    PERFECT = "perfect"
    GREAT = "great"
    GOOD = "good"
    NEUTRAL = "neutral"
    NOT_IDEAL = "not-ideal"
    BAD = "bad"


class PairPosition(StrEnum):
    """Where a one-pair hand sits against the board."""

    TOP = "top pair / overpair"
    SECOND = "second pair"
    MIDDLE = "middle pair"
    LOW = "low pair"


@dataclass(frozen=True)
class CoachResult:
    """The coach's verdict on one decision."""

    score: int
    verdict: Verdict
    recommended_action: Recommendation
    raise_size: float | None
    reasons: tuple[str, ...]
    concept_tags: tuple[str, ...]
    summary: str
    equity: float = 0.0  # Hero's estimated equity, 0-100
    pot_odds: float = 0.0  # Required equity to call, 0-100


@dataclass(frozen=True)
class HandRead:
    """Everything the engine learned about the hero's hand."""

    equity: float
    evaluation: HandEvaluation | None = None
    pair_position: PairPosition | None = None
    top_two_pair: bool = False
    big_two_pair: bool = False
    profile: PreflopProfile | None = None
    outs: OutsResult | None = None
    texture_notes: tuple[str, ...] = field(default_factory=tuple)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def pot_odds_pct(pot: float, facing: float | None) -> float:
    """Equity needed to call, in percent: facing / (pot + facing) x 100."""
    if not facing or facing <= 0:
        return 0.0
    total = pot + facing
    if total <= 0:
        return 0.0
    return facing / total * 100


def clamp_score(value: float, neutral: int = 60) -> int:
    """Round into [0, 100]; non-finite values collapse to the neutral score."""
    if not math.isfinite(value):
        logger.warning("Non-finite score %r, using neutral %d", value, neutral)
        return neutral
    return max(0, min(100, round_half_up(value)))


def verdict_for(score: int) -> Verdict:
    """Verdict tier for a score; each bound is inclusive."""
    if score >= 95:
        return Verdict.PERFECT
    if score >= 80:
        return Verdict.GREAT
    if score >= 60:
        return Verdict.GOOD
    if score >= 50:
        return Verdict.NEUTRAL
    if score >= 30:
        return Verdict.NOT_IDEAL
    return Verdict.BAD


_ACTION_TO_RECOMMENDATION = {
    PlayerAction.FOLD: Recommendation.FOLD,
    PlayerAction.CALL: Recommendation.CALL,
    PlayerAction.RAISE: Recommendation.RAISE,
}

_SUMMARIES = {
    Verdict.PERFECT: "Textbook decision: the right action for the price and position.",
    Verdict.GREAT: "Strong line versus pot odds and position.",
    Verdict.GOOD: "Solid decision; small tweaks in sizing or line could add EV.",
    Verdict.NEUTRAL: "Playable decision, but a more profitable line was available.",
    Verdict.NOT_IDEAL: "This line gives up EV against the price offered.",
    Verdict.BAD: (
        "Line loses EV against the price offered; consider tighter folds "
        "or delayed aggression."
    ),
}


def _fmt(amount: float) -> str:
    return f"{amount:.1f}".rstrip("0").rstrip(".")


# ---------------------------------------------------------------------------
# Decision engine
# ---------------------------------------------------------------------------


class DecisionEngine:
    """Recommends an action for a TableSnapshot and scores the hero's choice.

    Usage:
        engine = DecisionEngine()
        result = engine.decide(snapshot, PlayerAction.CALL)
    """

    def __init__(self, config: CoachConfig | None = None) -> None:
        self._config = config or CoachConfig()

    @property
    def config(self) -> CoachConfig:
        return self._config

    def decide(
        self,
        snapshot: TableSnapshot,
        hero_action: PlayerAction,
        declared_raise_size: float | None = None,
    ) -> CoachResult:
        """Recommend an action and grade the hero's actual action.

        Args:
            snapshot: The table as the hero sees it.
            hero_action: What the hero did.
            declared_raise_size: Raise size in bb when the hero raised.

        Returns:
            A fresh CoachResult.
        """
        cfg = self._config
        facing = snapshot.facing_size
        is_facing = snapshot.facing is not None and facing > 0

        pot_odds = pot_odds_pct(snapshot.pot, facing if is_facing else None)
        read = self.read_hand(snapshot)
        equity = read.equity
        edge = equity - pot_odds
        positional = self.positional_bonus(snapshot.hero_position)

        if read.profile is not None:
            recommendation, raise_size = self._preflop_recommendation(
                read.profile, snapshot, edge, is_facing,
            )
        else:
            recommendation, raise_size = self._baseline_recommendation(
                snapshot, equity, edge, positional, is_facing,
            )

        made_boost = self._made_hand_boost(read)
        vulnerability = self._vulnerability_penalty(read)
        texture = self._texture_penalty(snapshot) if read.evaluation is not None else 0.0
        discipline = (
            self._discipline_penalty(snapshot, equity, pot_odds) if is_facing else 0.0
        )
        alignment = self._alignment(hero_action, recommendation)
        preflop_bonus = self._preflop_bonus(read.profile, hero_action, is_facing)

        raw = (
            cfg.score_base
            + cfg.edge_weight * edge
            + positional
            + discipline
            + cfg.made_boost_weight * made_boost
            - texture
            - vulnerability
            + alignment
            + cfg.score_bias
            + preflop_bonus
        )
        score = clamp_score(raw, cfg.neutral_score)
        score = self._apply_floors(score, read.profile, hero_action, recommendation)
        verdict = verdict_for(score)

        reasons = self._reasons(
            snapshot, read, pot_odds, equity, recommendation, raise_size,
            hero_action, declared_raise_size,
        )
        tags = self._concept_tags(read, edge, recommendation)

        logger.debug(
            "%s %s %s: equity=%.1f pot_odds=%.1f edge=%.1f -> %s (hero %s) score=%d",
            snapshot.street,
            snapshot.hero_position,
            " ".join(str(c) for c in snapshot.hero_hole),
            equity,
            pot_odds,
            edge,
            recommendation,
            hero_action,
            score,
        )

        return CoachResult(
            score=score,
            verdict=verdict,
            recommended_action=recommendation,
            raise_size=raise_size,
            reasons=tuple(reasons[: cfg.max_reasons]),
            concept_tags=tuple(tags),
            summary=_SUMMARIES[verdict],
            equity=round(equity, 2),
            pot_odds=round(pot_odds, 2),
        )

    # --- Equity ----------------------------------------------------------

    def read_hand(self, snapshot: TableSnapshot) -> HandRead:
        """Evaluate the hero's hand and estimate equity (0-100)."""
        cfg = self._config
        hole = snapshot.hero_hole
        board = snapshot.board_cards

        evaluation: HandEvaluation | None = None
        pair_position: PairPosition | None = None
        top_two = big_two = False
        candidates: list[float] = []

        if len(hole) + len(board) >= 5:
            evaluation = HandEvaluator.evaluate([*hole, *board])
            equity = cfg.base_equity[evaluation.category]
            board_desc = sorted({c.value for c in board}, reverse=True)
            hole_values = {c.value for c in hole}

            if evaluation.category == HandCategory.ONE_PAIR:
                pair_position = _pair_position(evaluation.tiebreak[1], board_desc, hole_values)
                if pair_position == PairPosition.TOP:
                    equity = min(cfg.top_pair_equity_cap, equity + cfg.top_pair_equity_bonus)
                elif pair_position == PairPosition.SECOND:
                    equity += cfg.second_pair_equity_bonus
                elif pair_position == PairPosition.MIDDLE:
                    equity -= cfg.middle_pair_equity_penalty
                else:
                    equity -= cfg.low_pair_equity_penalty

            elif evaluation.category == HandCategory.TWO_PAIR:
                high, low = evaluation.tiebreak[1], evaluation.tiebreak[2]
                hero_plays = high in hole_values or low in hole_values
                big_two = hero_plays and low >= cfg.big_two_pair_rank
                top_two = (
                    hero_plays
                    and len(board_desc) >= 2
                    and high >= board_desc[0]
                    and low >= board_desc[1]
                )
                if top_two:
                    equity = min(cfg.top_two_pair_equity_cap, equity + cfg.top_two_pair_equity_bonus)

            if snapshot.street == Street.FLOP:
                equity -= cfg.flop_equity_discount
            elif snapshot.street == Street.TURN:
                equity -= cfg.turn_equity_discount
            candidates.append(equity)

        profile: PreflopProfile | None = None
        if snapshot.street == Street.PREFLOP:
            profile = profile_preflop(hole)
            candidates.append(profile.equity_hint)

        # No cards to come on the river, so draws add nothing
        outs: OutsResult | None = None
        if snapshot.street != Street.RIVER:
            outs = snapshot.outs or estimate_outs(hole, board, snapshot.street)
        if outs is not None:
            candidates.append(outs.equity_pct)

        equity = max(candidates) if candidates else cfg.base_equity[HandCategory.HIGH_CARD]
        return HandRead(
            equity=max(0.0, min(100.0, equity)),
            evaluation=evaluation,
            pair_position=pair_position,
            top_two_pair=top_two,
            big_two_pair=big_two,
            profile=profile,
            outs=outs,
            texture_notes=tuple(_texture_notes(board)),
        )

    def positional_bonus(self, position: Position) -> float:
        return self._config.positional_bonus.get(position, 0.0)

    # --- Recommendation --------------------------------------------------

    def _baseline_recommendation(
        self,
        snapshot: TableSnapshot,
        equity: float,
        edge: float,
        positional: float,
        is_facing: bool,
    ) -> tuple[Recommendation, float | None]:
        cfg = self._config
        if is_facing:
            if edge > cfg.raise_edge_threshold and equity > cfg.raise_equity_threshold:
                size = max(snapshot.facing_size * cfg.facing_raise_multiplier, cfg.facing_raise_min)
                return Recommendation.RAISE, round(size, 2)
            if edge > cfg.call_edge_threshold:
                return Recommendation.CALL, None
            return Recommendation.FOLD, None

        actions = snapshot.opponent_actions
        all_checked = all(a.action == OpponentActionType.CHECK for a in actions)
        all_folded = all(a.action == OpponentActionType.FOLD for a in actions)
        if equity + positional > cfg.unopened_raise_threshold or all_checked or all_folded:
            size = max(cfg.unopened_raise_min, round_half_up(snapshot.pot * cfg.unopened_raise_pot_fraction))
            return Recommendation.RAISE, float(size)
        return Recommendation.CALL, None

    def _preflop_recommendation(
        self,
        profile: PreflopProfile,
        snapshot: TableSnapshot,
        edge: float,
        is_facing: bool,
    ) -> tuple[Recommendation, float | None]:
        cfg = self._config
        if is_facing:
            raise_size = round(
                max(snapshot.facing_size * cfg.preflop_facing_raise_multiplier, cfg.preflop_facing_raise_min),
                2,
            )
        else:
            raise_size = float(
                max(round_half_up(snapshot.pot * cfg.preflop_open_pot_fraction), cfg.preflop_open_min)
            )

        if profile.strength >= cfg.preflop_raise_strength:
            return Recommendation.RAISE, raise_size
        if profile.strength >= cfg.preflop_strong_strength:
            if not is_facing or edge > cfg.preflop_strong_edge_threshold:
                return Recommendation.RAISE, raise_size
            return Recommendation.CALL, None
        if profile.strength >= cfg.preflop_call_strength:
            return Recommendation.CALL, None
        return Recommendation.FOLD, None

    # --- Scoring rules ---------------------------------------------------

    def _made_hand_boost(self, read: HandRead) -> float:
        cfg = self._config
        if read.evaluation is None:
            return 0.0
        boost = cfg.made_hand_boost[read.evaluation.category]
        if read.big_two_pair:
            boost += cfg.big_two_pair_boost
        if read.pair_position == PairPosition.TOP:
            boost += cfg.top_pair_boost
        elif read.pair_position == PairPosition.SECOND:
            boost += cfg.second_pair_boost
        return boost

    def _vulnerability_penalty(self, read: HandRead) -> float:
        cfg = self._config
        if read.evaluation is None:
            return 0.0
        if read.evaluation.category == HandCategory.HIGH_CARD:
            return cfg.high_card_vulnerability
        if read.pair_position == PairPosition.MIDDLE:
            return cfg.middle_pair_vulnerability
        if read.pair_position == PairPosition.LOW:
            return cfg.low_pair_vulnerability
        return 0.0

    def _texture_penalty(self, snapshot: TableSnapshot) -> float:
        cfg = self._config
        board = snapshot.board_cards
        penalty = 0.0
        if _has_suit_pair(board):
            penalty += cfg.suited_board_penalty
        if _has_connected_ranks(board, cfg.connected_rank_gap, count_pairs=True):
            penalty += cfg.connected_board_penalty
        if snapshot.street == Street.FLOP:
            penalty += cfg.flop_texture_penalty
        elif snapshot.street == Street.TURN:
            penalty += cfg.turn_texture_penalty
        return penalty

    def _discipline_penalty(self, snapshot: TableSnapshot, equity: float, pot_odds: float) -> float:
        """Negative adjustment for continuing against a bad price."""
        cfg = self._config
        penalty = 0.0
        if equity < pot_odds - cfg.pot_odds_shortfall:
            penalty -= cfg.pot_odds_shortfall_penalty
        if facing_pct_of_pot(snapshot) > cfg.big_bet_pot_pct and equity < cfg.big_bet_equity:
            penalty -= cfg.big_bet_penalty
        if snapshot.opponent_aggression >= cfg.aggression_count and equity < cfg.aggression_equity:
            penalty -= cfg.aggression_penalty
        return penalty

    def _alignment(self, hero_action: PlayerAction, recommendation: Recommendation) -> float:
        cfg = self._config
        chosen = _ACTION_TO_RECOMMENDATION[hero_action]
        if chosen == recommendation:
            return cfg.match_bonus
        if chosen == Recommendation.RAISE and recommendation == Recommendation.CALL:
            return -cfg.over_raise_penalty
        if chosen == Recommendation.CALL and recommendation == Recommendation.RAISE:
            return -cfg.under_raise_penalty
        return -cfg.mismatch_penalty

    def _preflop_bonus(
        self,
        profile: PreflopProfile | None,
        hero_action: PlayerAction,
        is_facing: bool,
    ) -> float:
        """Reward actions that fit the starting-hand tier."""
        cfg = self._config
        if profile is None:
            return 0.0
        tier = profile.tier
        if tier == PreflopTier.TRASH and hero_action == PlayerAction.FOLD:
            return cfg.trash_fold_bonus
        if tier == PreflopTier.PREMIUM and hero_action == PlayerAction.RAISE:
            return cfg.premium_raise_bonus
        if tier == PreflopTier.STRONG and hero_action == PlayerAction.RAISE:
            return cfg.strong_raise_bonus
        if tier == PreflopTier.STRONG and hero_action == PlayerAction.CALL and is_facing:
            return cfg.strong_call_facing_bonus
        if tier == PreflopTier.SPECULATIVE and hero_action == PlayerAction.CALL:
            return cfg.speculative_call_bonus
        return 0.0

    def _apply_floors(
        self,
        score: int,
        profile: PreflopProfile | None,
        hero_action: PlayerAction,
        recommendation: Recommendation,
    ) -> int:
        cfg = self._config
        if _ACTION_TO_RECOMMENDATION[hero_action] == recommendation:
            score = max(score, cfg.match_floor)
        if profile is not None:
            if profile.tier == PreflopTier.TRASH and hero_action == PlayerAction.FOLD:
                score = max(score, cfg.trash_fold_floor)
            elif profile.tier == PreflopTier.STRONG and hero_action == PlayerAction.RAISE:
                score = max(score, cfg.strong_raise_floor)
            elif profile.tier == PreflopTier.PREMIUM and hero_action == PlayerAction.RAISE:
                score = max(score, cfg.premium_raise_floor)
        return min(score, 100)

    # --- Explanations ----------------------------------------------------

    def _reasons(
        self,
        snapshot: TableSnapshot,
        read: HandRead,
        pot_odds: float,
        equity: float,
        recommendation: Recommendation,
        raise_size: float | None,
        hero_action: PlayerAction,
        declared_raise_size: float | None,
    ) -> list[str]:
        hero = " ".join(str(c) for c in snapshot.hero_hole)
        board = str(snapshot.board)
        reasons: list[str] = []

        where = f" on {board}" if board else " preflop"
        reasons.append(
            f"Hand: {hero}{where}. Pot odds need ~{pot_odds:.1f}% equity; "
            f"estimated equity is ~{equity:.1f}%."
        )

        if read.evaluation is not None:
            note = f"Made hand: {read.evaluation.label}"
            if read.pair_position is not None:
                note += f" ({read.pair_position.value})"
            elif read.top_two_pair:
                note += " (top two pair)"
            note += "."
            if read.texture_notes:
                note += f" Board texture: {', '.join(read.texture_notes)}."
            reasons.append(note)

        if read.profile is not None:
            profile = read.profile
            plan = {
                Recommendation.RAISE: "play it aggressively",
                Recommendation.CALL: "continue cheaply and see a flop",
                Recommendation.FOLD: "let it go before the flop",
            }[recommendation]
            reasons.append(
                f"Preflop plan: {profile.label} is a {profile.tier.value} starting hand "
                f"(strength {profile.strength}, ~{profile.equity_hint:.0f}% vs a random hand); "
                f"{plan}."
            )

        if snapshot.facing is not None and snapshot.facing_size > 0:
            size = snapshot.facing_size
            reasons.append(
                f"Facing a {snapshot.facing.type.value.lower()} of {_fmt(size)} bb "
                f"(~{facing_pct_of_pot(snapshot):.0f}% pot); opponents made "
                f"{snapshot.opponent_aggression} bets/raises this street. "
                f"Pot odds: {_fmt(size)} / ({_fmt(snapshot.pot)} + {_fmt(size)}) = "
                f"{pot_odds:.1f}% equity needed to call."
            )

        if read.outs is not None:
            rule = "4" if snapshot.street == Street.FLOP else "2"
            reasons.append(
                f"Draws: {read.outs.outs} outs ({read.outs.draw_label}); "
                f"rule of {rule} gives ~{read.outs.equity_pct:.0f}% to improve."
            )

        if (
            hero_action == PlayerAction.RAISE
            and recommendation == Recommendation.RAISE
            and declared_raise_size
            and raise_size
        ):
            reasons.append(
                f"Sizing: you raised to {_fmt(declared_raise_size)} bb; "
                f"the suggested size is about {_fmt(raise_size)} bb."
            )

        if recommendation == Recommendation.RAISE:
            reasons.append(
                f"Raising to {_fmt(raise_size or 0)} bb with {hero} builds the pot when "
                f"ahead and denies equity to worse draws."
            )
        elif recommendation == Recommendation.CALL:
            reasons.append(
                f"Calling keeps weaker hands in; {hero} has ~{equity:.1f}% equity "
                f"against a {pot_odds:.1f}% price."
            )
        else:
            reasons.append(
                f"Folding is best: {hero} lacks the equity for this price and "
                f"the aggression shown."
            )
        return reasons

    def _concept_tags(
        self,
        read: HandRead,
        edge: float,
        recommendation: Recommendation,
    ) -> list[str]:
        tags = [
            "pot-odds+" if edge >= 0 else "pot-odds-",
            "draws" if read.outs is not None else "made-hand",
            {
                Recommendation.RAISE: "value/semibluff",
                Recommendation.CALL: "realize-equity",
                Recommendation.FOLD: "discipline",
            }[recommendation],
        ]
        if read.profile is not None:
            tags.append(
                "preflop-discipline"
                if read.profile.tier == PreflopTier.TRASH
                else "starting-hands"
            )
        return tags


# ---------------------------------------------------------------------------
# Board helpers
# ---------------------------------------------------------------------------


def facing_pct_of_pot(snapshot: TableSnapshot) -> float:
    """Facing bet as a percentage of the pot."""
    if snapshot.facing is None:
        return 0.0
    return snapshot.facing_size / max(1.0, snapshot.pot) * 100


def _pair_position(pair: int, board_desc: list[int], hole_values: set[int]) -> PairPosition:
    if pair not in hole_values:
        # The pair is on the board; the hero holds nothing of it.
        return PairPosition.LOW
    if not board_desc or pair >= board_desc[0]:
        return PairPosition.TOP
    if len(board_desc) >= 2 and pair >= board_desc[1]:
        return PairPosition.SECOND
    if len(board_desc) >= 3 and pair >= board_desc[2]:
        return PairPosition.MIDDLE
    return PairPosition.LOW


def _has_suit_pair(board) -> bool:
    suits = [c.suit for c in board]
    return any(suits.count(s) >= 2 for s in set(suits))


def _has_connected_ranks(board, gap: int, count_pairs: bool = False) -> bool:
    """True when two board ranks are at most gap apart.

    A paired rank only counts with count_pairs; the texture notes list it
    as "paired" instead.
    """
    if count_pairs:
        values = sorted(c.value for c in board)
    else:
        values = sorted({c.value for c in board})
    return any(b - a <= gap for a, b in zip(values, values[1:]))


def _texture_notes(board) -> list[str]:
    if len(board) < 3:
        return []
    notes: list[str] = []
    suits = [c.suit for c in board]
    max_suit = max(suits.count(s) for s in set(suits))
    if max_suit >= 3:
        notes.append("flush possible")
    elif max_suit == 2:
        notes.append("two-tone")
    if _has_connected_ranks(board, 2):
        notes.append("connected")
    values = [c.value for c in board]
    if len(set(values)) < len(values):
        notes.append("paired")
    if not notes:
        notes.append(f"dry, {rank_label(max(values))}-high")
    return notes


_DEFAULT_ENGINE = DecisionEngine()


def decide(
    snapshot: TableSnapshot,
    hero_action: PlayerAction,
    declared_raise_size: float | None = None,
    config: CoachConfig | None = None,
) -> CoachResult:
    """Module-level shortcut for DecisionEngine(config).decide(...)."""
    engine = _DEFAULT_ENGINE if config is None else DecisionEngine(config)
    return engine.decide(snapshot, hero_action, declared_raise_size)
