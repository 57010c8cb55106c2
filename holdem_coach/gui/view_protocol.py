"""Abstract view interface for the coach GUI.

The CoachView Protocol defines the contract between the CoachPresenter
and any concrete UI framework. The presenter depends only on this
protocol, never on framework-specific imports.
"""

from __future__ import annotations

from typing import Protocol

from holdem_coach.core.showdown import ShowdownResult
from holdem_coach.core.table_snapshot import TableSnapshot
from holdem_coach.interface.profile_store import PlayerProfile
from holdem_coach.strategy.decision_engine import CoachResult


class CoachView(Protocol):
    """Interface that any GUI framework must implement."""

    # --- Input reading ---

    def get_hero_cards(self) -> list[str]:
        """Return hero's hole cards as 2-char strings, e.g. ['Ah', 'Ks']."""
        ...

    def get_board_cards(self) -> list[str]:
        """Return community cards as 2-char strings."""
        ...

    def get_pot_bb(self) -> float:
        """Return pot size in big blinds."""
        ...

    def get_facing_bb(self) -> float:
        """Return the bet to face in big blinds, 0 if none."""
        ...

    def get_facing_type(self) -> str:
        """Return 'BET' or 'RAISE'."""
        ...

    def get_street(self) -> str:
        """Return current street as uppercase string."""
        ...

    def get_position(self) -> str:
        """Return hero's position as uppercase string (BTN, CO, ...)."""
        ...

    def get_villain_position(self) -> str:
        """Return the main opponent's position as uppercase string."""
        ...

    def get_opponent_actions(self) -> str:
        """Return the opponent action line, e.g. 'OppA bet 4, OppB fold'."""
        ...

    def get_raise_size(self) -> float:
        """Return the hero's raise size in big blinds, 0 if unset."""
        ...

    def get_drill_mode(self) -> str:
        """Return 'hands' or 'game'."""
        ...

    # --- Output display ---

    def show_coaching(self) -> None:
        """Show a 'Coaching...' indicator."""
        ...

    def show_spot(self, snapshot: TableSnapshot) -> None:
        """Load a dealt drill spot into the inputs."""
        ...

    def show_result(self, result: CoachResult, hero_cards_str: str) -> None:
        """Display the coaching verdict."""
        ...

    def show_showdown(self, showdown: ShowdownResult) -> None:
        """Display the drill showdown."""
        ...

    def show_profile(self, profile: PlayerProfile, delta: int | None) -> None:
        """Update the profile bar; delta is the last rating change, if any."""
        ...

    def show_error(self, message: str) -> None:
        """Display an error message."""
        ...

    def clear_result(self) -> None:
        """Clear the coach output panel."""
        ...
