"""Table snapshot handed to the coach for a single decision."""

from __future__ import annotations

from dataclasses import dataclass

from holdem_coach.core.outs_estimator import OutsResult
from holdem_coach.utils.card import Card
from holdem_coach.utils.constants import (
    FacingType,
    OpponentActionType,
    Position,
    Street,
)


@dataclass(frozen=True)
class Board:
    """Community cards split by street. Unrevealed streets are None."""

    flop: tuple[Card, Card, Card] | None = None
    turn: Card | None = None
    river: Card | None = None

    @classmethod
    def from_cards(cls, cards: list[Card] | tuple[Card, ...]) -> Board:
        """Build a board from 0, 3, 4 or 5 cards in dealing order."""
        if len(cards) not in (0, 3, 4, 5):
            raise ValueError(f"Board must have 0, 3, 4 or 5 cards, got {len(cards)}")
        if not cards:
            return cls()
        return cls(
            flop=(cards[0], cards[1], cards[2]),
            turn=cards[3] if len(cards) > 3 else None,
            river=cards[4] if len(cards) > 4 else None,
        )

    @property
    def cards(self) -> list[Card]:
        cards: list[Card] = list(self.flop or ())
        if self.turn is not None:
            cards.append(self.turn)
        if self.river is not None:
            cards.append(self.river)
        return cards

    def up_to(self, street: Street) -> Board:
        """The board as visible on the given street."""
        if street == Street.PREFLOP:
            return Board()
        if street == Street.FLOP:
            return Board(flop=self.flop)
        if street == Street.TURN:
            return Board(flop=self.flop, turn=self.turn)
        return self

    def __str__(self) -> str:
        return " ".join(str(c) for c in self.cards)


@dataclass(frozen=True)
class FacingBet:
    """The bet or raise the hero must respond to (in big blinds)."""

    type: FacingType
    size: float


@dataclass(frozen=True)
class OpponentAction:
    """A single opponent action on the current street."""

    name: str
    action: OpponentActionType
    size: float | None = None

    @property
    def is_aggressive(self) -> bool:
        return self.action in (OpponentActionType.BET, OpponentActionType.RAISE)


@dataclass(frozen=True)
class TableSnapshot:
    """Everything the coach knows about the spot.

    Amounts are in big blinds. ``outs`` may carry a precomputed outs result;
    the engine computes one itself when it is absent.
    """

    hero_hole: tuple[Card, Card]
    board: Board
    street: Street
    hero_position: Position
    pot: float
    villain_position: Position = Position.BB
    facing: FacingBet | None = None
    opponent_actions: tuple[OpponentAction, ...] = ()
    effective_stack: float = 100.0
    outs: OutsResult | None = None

    @property
    def board_cards(self) -> list[Card]:
        return self.board.cards

    @property
    def facing_size(self) -> float:
        return self.facing.size if self.facing is not None else 0.0

    @property
    def opponent_aggression(self) -> int:
        """Number of bets and raises opponents made this street."""
        return sum(1 for a in self.opponent_actions if a.is_aggressive)
