"""Multi-way showdown resolution with exact chop handling."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from holdem_coach.core.hand_evaluator import HandEvaluation, HandEvaluator
from holdem_coach.core.table_snapshot import Board
from holdem_coach.utils.card import Card
from holdem_coach.utils.constants import PlayerAction

HERO_ID = "hero"


class ShowdownOutcome(StrEnum):
    WIN = "win"
    LOSE = "lose"
    CHOP = "chop"


@dataclass(frozen=True)
class OpponentHand:
    name: str
    hole: tuple[Card, Card]


@dataclass(frozen=True)
class PlayerShowdown:
    """One player's hand at showdown."""

    id: str
    name: str
    is_hero: bool
    hole: tuple[Card, Card]
    evaluation: HandEvaluation


@dataclass(frozen=True)
class ShowdownResult:
    """Who wins with the hero in, and who wins the actual table."""

    final_board: Board
    players: tuple[PlayerShowdown, ...]
    winners: tuple[PlayerShowdown, ...]
    active_winners: tuple[PlayerShowdown, ...]
    hero_would_result: ShowdownOutcome
    hero_folded: bool
    hero_action: PlayerAction


def best_hands(players: Sequence[PlayerShowdown]) -> list[PlayerShowdown]:
    """Every player tied for the best evaluation, in seat order."""
    best: list[PlayerShowdown] = []
    for player in players:
        if not best:
            best = [player]
            continue
        cmp = HandEvaluator.compare(player.evaluation, best[0].evaluation)
        if cmp > 0:
            best = [player]
        elif cmp == 0:
            best.append(player)
    return best


def resolve_showdown(
    hero_hole: tuple[Card, Card],
    opponents: Sequence[OpponentHand],
    board: Board,
    hero_folded: bool,
    hero_action: PlayerAction,
) -> ShowdownResult:
    """Evaluate every hand on the completed board and pick the winners.

    The hero's hypothetical result ignores the fold, so a folded hero can
    still see that they would have won or chopped.
    """
    board_cards = board.cards
    players = [
        PlayerShowdown(
            id=HERO_ID,
            name="You",
            is_hero=True,
            hole=hero_hole,
            evaluation=HandEvaluator.evaluate([*hero_hole, *board_cards]),
        )
    ]
    for idx, opp in enumerate(opponents):
        name = opp.name or f"Opp {idx + 1}"
        players.append(
            PlayerShowdown(
                id=opp.name or f"opp-{idx}",
                name=name,
                is_hero=False,
                hole=opp.hole,
                evaluation=HandEvaluator.evaluate([*opp.hole, *board_cards]),
            )
        )

    winners = best_hands(players)
    if any(w.is_hero for w in winners):
        outcome = ShowdownOutcome.CHOP if len(winners) > 1 else ShowdownOutcome.WIN
    else:
        outcome = ShowdownOutcome.LOSE

    active = [p for p in players if not p.is_hero] if hero_folded else players
    active_winners = best_hands(active)

    return ShowdownResult(
        final_board=board,
        players=tuple(players),
        winners=tuple(winners),
        active_winners=tuple(active_winners),
        hero_would_result=outcome,
        hero_folded=hero_folded,
        hero_action=hero_action,
    )
