"""Random training spot generator for drills.

Deals the hero, three opponents and a full board from one shuffled deck,
then picks a street and a simple betting line. In GAME mode the hand
starts preflop and advance_street deals the later streets, letting the
opponents bet by hand strength. Every random choice goes through the
injected ``random.Random`` so a seeded generator reproduces the same spot.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import StrEnum

from holdem_coach.core.hand_evaluator import HandEvaluator
from holdem_coach.core.outs_estimator import estimate_outs
from holdem_coach.core.showdown import OpponentHand
from holdem_coach.core.table_snapshot import (
    Board,
    FacingBet,
    OpponentAction,
    TableSnapshot,
)
from holdem_coach.utils.card import Deck
from holdem_coach.utils.constants import (
    FacingType,
    HandCategory,
    OpponentActionType,
    PlayerAction,
    Position,
    Street,
)

logger = logging.getLogger("holdem_coach.interface.scenario")

OPPONENT_NAMES = ("OppA", "OppB", "OppC")

HERO_POSITIONS = (Position.BTN, Position.CO, Position.HJ, Position.UTG)
VILLAIN_POSITIONS = (Position.BB, Position.SB, Position.MP)

# Fraction of spots where one opponent puts in a bet or raise
BET_PROBABILITY = 0.7

# Bet size as a multiple of the pot, per street
BET_MULTIPLIERS = {
    Street.PREFLOP: (1.6, 2.2, 2.8, 3.5, 4.2),
    Street.FLOP: (0.25, 0.33, 0.5, 0.66, 0.9),
    Street.TURN: (0.4, 0.6, 0.8, 1.1),
    Street.RIVER: (0.4, 0.6, 0.8, 1.1),
}


class DrillMode(StrEnum):
    """HANDS deals single spots; GAME plays a hand from preflop to showdown."""

    HANDS = "hands"
    GAME = "game"


_POT_RANGE = {
    DrillMode.HANDS: (4.5, 9.5),
    DrillMode.GAME: (1.2, 5.0),
}


class PreferredHands(StrEnum):
    """Which streets HANDS mode deals, as stored in the player profile."""

    ANY = "ANY"
    PREFLOP = "PREFLOP"
    OUTS = "OUTS"  # one or two cards to come
    FINAL = "FINAL"  # river only

    @classmethod
    def normalize(cls, value: object) -> PreferredHands:
        """Parse a stored or typed preference; unknown values mean ANY."""
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return cls.ANY


PREFERRED_STREETS: dict[PreferredHands, tuple[Street, ...]] = {
    PreferredHands.ANY: tuple(Street),
    PreferredHands.PREFLOP: (Street.PREFLOP,),
    PreferredHands.OUTS: (Street.FLOP, Street.TURN),
    PreferredHands.FINAL: (Street.RIVER,),
}

# GAME mode, flop onward: chance the strongest opponent bets, before the
# strength bonus
STREET_BET_BIAS = {
    Street.FLOP: 0.5,
    Street.TURN: 0.55,
    Street.RIVER: 0.65,
}
STRENGTH_BET_BONUS = 0.04  # per hand category above high card
GAME_BET_MULTIPLIERS = {
    Street.FLOP: (0.3, 0.5, 0.75),
    Street.TURN: (0.35, 0.6, 0.9, 1.2),
    Street.RIVER: (0.35, 0.6, 0.9, 1.2),
}
CALLER_FOLD_PROBABILITY = 0.2

_NEXT_STREET = {
    Street.PREFLOP: Street.FLOP,
    Street.FLOP: Street.TURN,
    Street.TURN: Street.RIVER,
}


@dataclass(frozen=True)
class TrainingSpot:
    """A generated spot plus the hidden information for the showdown."""

    snapshot: TableSnapshot
    opponent_hands: tuple[OpponentHand, ...]
    full_board: Board


def pick_bet_size(pot_bb: float, street: Street, rng: random.Random) -> float:
    """Bet size in bb: the pot times a street multiplier, at least 1 bb."""
    raw = pot_bb * rng.choice(BET_MULTIPLIERS[street])
    return max(1.0, round(raw, 2))


def generate_training_spot(
    rng: random.Random | None = None,
    mode: DrillMode = DrillMode.HANDS,
    preferred: PreferredHands = PreferredHands.ANY,
) -> TrainingSpot:
    """Deal a random training spot.

    Args:
        rng: Random source; a fresh unseeded one when omitted.
        mode: HANDS for a single spot, GAME for the preflop start of a
            hand that advance_street carries on.
        preferred: Streets HANDS mode may deal; GAME ignores it.

    Returns:
        A TrainingSpot with the snapshot, opponent hole cards and the
        complete five-card board.
    """
    rng = rng or random.Random()
    deck = Deck(rng)

    hero = deck.deal(2)
    opponent_hands = tuple(
        OpponentHand(name=name, hole=tuple(deck.deal(2)))
        for name in OPPONENT_NAMES
    )
    full = deck.deal(5)
    full_board = Board.from_cards(full)

    streets = [Street.PREFLOP] if mode == DrillMode.GAME else list(PREFERRED_STREETS[preferred])
    street = rng.choice(streets)
    board = full_board.up_to(street)

    hero_position = rng.choice(HERO_POSITIONS)
    villain_position = rng.choice(VILLAIN_POSITIONS)

    low, high = _POT_RANGE[mode]
    pot = round(rng.uniform(low, high), 2)

    facing = None
    if rng.random() < BET_PROBABILITY:
        primary = rng.randrange(len(OPPONENT_NAMES))
        aggressive = OpponentActionType.RAISE if street == Street.PREFLOP else OpponentActionType.BET
        passive = OpponentActionType.FOLD if street == Street.PREFLOP else OpponentActionType.CHECK
        size = pick_bet_size(pot, street, rng)
        actions = []
        for idx, name in enumerate(OPPONENT_NAMES):
            if idx < primary:
                actions.append(OpponentAction(name=name, action=passive))
            elif idx == primary:
                actions.append(OpponentAction(name=name, action=aggressive, size=size))
            else:
                actions.append(OpponentAction(name=name, action=OpponentActionType.FOLD))
        facing_type = FacingType.RAISE if street == Street.PREFLOP else FacingType.BET
        facing = FacingBet(type=facing_type, size=size)
        pot = round(pot + size, 1)
    else:
        actions = [
            OpponentAction(name=name, action=OpponentActionType.CHECK)
            for name in OPPONENT_NAMES
        ]

    hole = (hero[0], hero[1])
    snapshot = TableSnapshot(
        hero_hole=hole,
        board=board,
        street=street,
        hero_position=hero_position,
        pot=pot,
        villain_position=villain_position,
        facing=facing,
        opponent_actions=tuple(actions),
        effective_stack=100.0,
        outs=estimate_outs(hole, board.cards, street),
    )
    return TrainingSpot(
        snapshot=snapshot,
        opponent_hands=opponent_hands,
        full_board=full_board,
    )


def opponent_actions_for_street(
    opponent_hands: tuple[OpponentHand, ...],
    board: Board,
    street: Street,
    pot_bb: float,
    rng: random.Random,
) -> tuple[tuple[OpponentAction, ...], FacingBet | None, float]:
    """Let the opponents act on a postflop street of a GAME hand.

    The opponent with the best made hand bets with probability
    STREET_BET_BIAS + 0.04 x its hand category. When it bets, opponents
    with two pair or better usually call; the rest fold one time in five
    and otherwise call. With no bet everyone checks.

    Returns:
        (actions, facing bet or None, pot after the opponents' chips).
    """
    strengths = [
        int(HandEvaluator.evaluate([*opp.hole, *board.cards]).category)
        for opp in opponent_hands
    ]
    strongest = max(strengths)
    primary = strengths.index(strongest)

    bet_chance = STREET_BET_BIAS[street] + strongest * STRENGTH_BET_BONUS
    if rng.random() >= bet_chance:
        checks = tuple(
            OpponentAction(name=opp.name, action=OpponentActionType.CHECK)
            for opp in opponent_hands
        )
        return checks, None, pot_bb

    size = max(1.0, round(pot_bb * rng.choice(GAME_BET_MULTIPLIERS[street]), 2))
    pot = round(pot_bb + size, 2)
    actions = []
    for idx, opp in enumerate(opponent_hands):
        if idx == primary:
            actions.append(OpponentAction(name=opp.name, action=OpponentActionType.BET, size=size))
            continue
        strong = strengths[idx] >= HandCategory.TWO_PAIR
        calls = (
            (strong and rng.random() > CALLER_FOLD_PROBABILITY)
            or rng.random() >= CALLER_FOLD_PROBABILITY
        )
        if not calls:
            actions.append(OpponentAction(name=opp.name, action=OpponentActionType.FOLD))
            continue
        actions.append(OpponentAction(name=opp.name, action=OpponentActionType.CALL, size=size))
        pot = round(pot + size, 2)

    return tuple(actions), FacingBet(type=FacingType.BET, size=size), pot


def advance_street(
    spot: TrainingSpot,
    hero_action: PlayerAction,
    raise_size: float | None = None,
    rng: random.Random | None = None,
) -> TrainingSpot | None:
    """Carry a GAME hand to the next street after the hero acts.

    Calling adds the facing bet to the pot; raising adds the raise size
    (at least the facing bet). The next street's board is revealed, the
    opponents act on it and the outs are recomputed.

    Returns:
        The next spot, or None when the hand is over because the hero
        folded or the river has been played. The caller then resolves
        the showdown.
    """
    snapshot = spot.snapshot
    if hero_action == PlayerAction.FOLD or snapshot.street == Street.RIVER:
        return None
    rng = rng or random.Random()

    facing = snapshot.facing_size
    pot = snapshot.pot
    if hero_action in (PlayerAction.CALL, PlayerAction.RAISE):
        pot += facing
    if hero_action == PlayerAction.RAISE:
        pot += max(0.0, (raise_size or 0.0) - facing)
    pot = round(pot, 2)

    street = _NEXT_STREET[snapshot.street]
    board = spot.full_board.up_to(street)
    actions, next_facing, pot = opponent_actions_for_street(
        spot.opponent_hands, board, street, pot, rng,
    )
    logger.debug(
        "GAME hand moves to %s: pot %.2f, facing %s",
        street, pot, next_facing.size if next_facing else "nothing",
    )

    next_snapshot = replace(
        snapshot,
        board=board,
        street=street,
        pot=pot,
        facing=next_facing,
        opponent_actions=actions,
        outs=estimate_outs(snapshot.hero_hole, board.cards, street),
    )
    return replace(spot, snapshot=next_snapshot)
