"""Pure function to build a TableSnapshot from input parameters.

Shared by the CLI coach and the GUI presenter. This module has no I/O,
it only validates inputs and constructs the snapshot.
"""

from __future__ import annotations

from holdem_coach.core.outs_estimator import estimate_outs
from holdem_coach.core.table_snapshot import (
    Board,
    FacingBet,
    OpponentAction,
    TableSnapshot,
)
from holdem_coach.utils.card import Card
from holdem_coach.utils.constants import FacingType, Position, Street

# Board size for each street
STREET_BOARD_SIZE = {
    Street.PREFLOP: 0,
    Street.FLOP: 3,
    Street.TURN: 4,
    Street.RIVER: 5,
}


def build_snapshot(
    hero_cards: list[Card],
    position: Position,
    street: Street,
    pot_bb: float,
    community_cards: list[Card] | None = None,
    facing_type: FacingType | None = None,
    facing_bb: float = 0.0,
    opponent_actions: list[OpponentAction] | None = None,
    villain_position: Position = Position.BB,
    stack_bb: float = 100.0,
    attach_outs: bool = True,
) -> TableSnapshot:
    """Build a TableSnapshot from validated input parameters.

    Args:
        hero_cards: Exactly 2 cards for the hero.
        position: Hero's table position.
        street: Current street.
        pot_bb: Pot size in big blinds before the hero acts.
        community_cards: Board cards (empty for preflop).
        facing_type: BET or RAISE when the hero faces one.
        facing_bb: Size of the bet to face in big blinds.
        opponent_actions: Opponent actions on this street, in order.
        villain_position: Main opponent's position.
        stack_bb: Effective stack in big blinds.
        attach_outs: Precompute the outs result for the snapshot.

    Returns:
        The TableSnapshot.

    Raises:
        ValueError: On a wrong card count, duplicate cards, a board that
            does not match the street, or a negative pot.
    """
    if len(hero_cards) != 2:
        raise ValueError(f"Need exactly 2 hero cards, got {len(hero_cards)}")

    community_cards = list(community_cards or [])
    expected = STREET_BOARD_SIZE[street]
    if len(community_cards) != expected:
        raise ValueError(
            f"{street.value.capitalize()} needs {expected} board cards, got {len(community_cards)}"
        )

    all_cards = [*hero_cards, *community_cards]
    if len(set(all_cards)) != len(all_cards):
        raise ValueError("Duplicate cards in hand and board")

    if pot_bb < 0:
        raise ValueError(f"Pot cannot be negative: {pot_bb}")

    facing = None
    if facing_bb > 0:
        facing = FacingBet(type=facing_type or FacingType.BET, size=facing_bb)

    hole = (hero_cards[0], hero_cards[1])
    outs = estimate_outs(hole, community_cards, street) if attach_outs else None

    return TableSnapshot(
        hero_hole=hole,
        board=Board.from_cards(community_cards),
        street=street,
        hero_position=position,
        pot=pot_bb,
        villain_position=villain_position,
        facing=facing,
        opponent_actions=tuple(opponent_actions or ()),
        effective_stack=stack_bb,
        outs=outs,
    )
