"""Interactive hold'em training coach.

CLI coach that scores a decision against pot odds, equity and position,
deals random drill spots or whole hands played to a showdown, and tracks
a rated profile.

Usage:
    python -m holdem_coach.interface.poker_coach

Example session:
    ==================================================
      HOLD'EM COACH
    ==================================================
      1. Live coaching
      2. Random drill
      3. Showdown calculator
      4. Profile
      5. Quit
    > 1

      Your hand (e.g. AhKs): AsKs
      Position (UTG/MP/HJ/CO/BTN/SB/BB) [BTN]: BTN
      Street (preflop/flop/turn/river) [preflop]: flop
      Board cards (e.g. Jh 8d 3c): Qs Js 2h
      Pot size (in bb) [6.0]: 6
      Bet to face (in bb, 0 if none) [0.0]: 4
      Opponent actions (e.g. 'OppA bet 4, OppB fold' or blank): OppA bet 4
      Your action (fold/call/raise) [call]: call

    ==================================================
      NEUTRAL: 51/100  (best: RAISE to 8.8 bb)
    ==================================================
      Hand:       As Ks (AKs)
      Board:      Qs Js 2h
      Equity:     64.0% | Pot odds: 40.0%
      ...
"""

from __future__ import annotations

import random

from holdem_coach.core.showdown import OpponentHand, ShowdownResult, resolve_showdown
from holdem_coach.core.table_snapshot import Board, OpponentAction, TableSnapshot
from holdem_coach.interface.profile_store import ProfileStore
from holdem_coach.interface.rating import tier_progress
from holdem_coach.interface.scenario import (
    DrillMode,
    PreferredHands,
    TrainingSpot,
    advance_street,
    generate_training_spot,
)
from holdem_coach.interface.situation_builder import build_snapshot
from holdem_coach.strategy.coach_config import load_coach_config
from holdem_coach.strategy.decision_engine import CoachResult, DecisionEngine
from holdem_coach.strategy.preflop_profiler import hand_notation
from holdem_coach.utils.card import Card, Deck
from holdem_coach.utils.constants import (
    FacingType,
    OpponentActionType,
    PlayerAction,
    Position,
    Street,
)


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _parse_cards(s: str) -> list[Card]:
    """Parse card string: 'AhKs' or 'Ah Ks' or 'Ah Ks Td' -> list[Card].

    Supports both concatenated (2-char groups) and space-separated formats.
    """
    s = s.strip()
    if not s:
        return []
    if " " in s:
        return [Card.from_str(c.strip()) for c in s.split() if c.strip()]
    if len(s) % 2 != 0:
        raise ValueError(f"Invalid card string: '{s}' (odd length)")
    return [Card.from_str(s[i:i+2]) for i in range(0, len(s), 2)]


def _parse_position(s: str) -> Position:
    """Parse position string, case-insensitive."""
    return Position(s.strip().upper())


def _parse_street(s: str) -> Street:
    """Parse street string, case-insensitive."""
    return Street(s.strip().upper())


def _parse_player_action(s: str) -> PlayerAction:
    """Parse the hero's action; 'check' counts as a call of nothing."""
    s = s.strip().upper()
    if s == "CHECK":
        return PlayerAction.CALL
    return PlayerAction(s)


def _parse_action_history(s: str) -> list[OpponentAction]:
    """Parse opponent actions on this street.

    Format: "OppA bet 4, OppB fold, OppC call 4"
    Each entry: "NAME ACTION [AMOUNT]"
    """
    s = s.strip()
    if not s:
        return []
    actions = []
    for part in s.split(","):
        tokens = part.strip().split()
        if len(tokens) < 2:
            continue
        action = OpponentActionType(tokens[1].strip().upper())
        size = float(tokens[2]) if len(tokens) >= 3 else None
        actions.append(OpponentAction(name=tokens[0], action=action, size=size))
    return actions


def _hand_display(cards: list[Card] | tuple[Card, ...]) -> str:
    """Display cards with notation: 'Ah Ks (AKs)'."""
    card_str = " ".join(str(c) for c in cards)
    if len(cards) == 2:
        return f"{card_str} ({hand_notation(cards[0], cards[1])})"
    return card_str


def _prompt(msg: str, default: str = "") -> str:
    """Print a prompt and read user input."""
    suffix = f" [{default}]" if default else ""
    try:
        val = input(f"  {msg}{suffix}: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return default
    return val if val else default


def _prompt_float(msg: str, default: float = 0.0) -> float:
    """Prompt for a float value."""
    val = _prompt(msg, str(default))
    try:
        return float(val)
    except ValueError:
        print(f"    Invalid number, using {default}")
        return default


def _prompt_int(msg: str, default: int = 0) -> int:
    """Prompt for an integer value."""
    val = _prompt(msg, str(default))
    try:
        return int(val)
    except ValueError:
        print(f"    Invalid number, using {default}")
        return default


def _prompt_hero_action(facing: bool) -> tuple[PlayerAction, float | None] | None:
    """Ask for the hero's action and, for a raise, its size."""
    default = "call" if facing else "raise"
    try:
        action = _parse_player_action(_prompt("Your action (fold/call/raise)", default))
    except ValueError:
        print("    Unknown action.")
        return None
    size = None
    if action == PlayerAction.RAISE:
        size = _prompt_float("Raise to (in bb)", 0.0) or None
    return action, size


# ---------------------------------------------------------------------------
# Build snapshot from user input
# ---------------------------------------------------------------------------


def _build_situation() -> TableSnapshot | None:
    """Interactively collect the spot. Returns None on abort."""
    print()

    hand_str = _prompt("Your hand (e.g. AhKs)")
    if not hand_str:
        print("    No hand provided, aborting.")
        return None

    try:
        hero_cards = _parse_cards(hand_str)
        position = _parse_position(_prompt("Position (UTG/MP/HJ/CO/BTN/SB/BB)", "BTN"))
        street = _parse_street(_prompt("Street (preflop/flop/turn/river)", "preflop"))
    except ValueError as e:
        print(f"    {e}")
        return None

    community_cards: list[Card] = []
    if street != Street.PREFLOP:
        try:
            community_cards = _parse_cards(_prompt("Board cards (e.g. Jh 8d 3c)"))
        except ValueError as e:
            print(f"    {e}")
            return None

    pot_bb = _prompt_float("Pot size (in bb)", 6.0)
    facing_bb = _prompt_float("Bet to face (in bb, 0 if none)", 0.0)

    history_str = _prompt("Opponent actions (e.g. 'OppA bet 4, OppB fold' or blank)")
    try:
        actions = _parse_action_history(history_str)
    except ValueError as e:
        print(f"    {e}")
        actions = []

    facing_type = FacingType.RAISE if street == Street.PREFLOP else FacingType.BET
    try:
        return build_snapshot(
            hero_cards=hero_cards,
            position=position,
            street=street,
            pot_bb=pot_bb,
            community_cards=community_cards,
            facing_type=facing_type,
            facing_bb=facing_bb,
            opponent_actions=actions,
        )
    except ValueError as e:
        print(f"    {e}")
        return None


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------


_DIVIDER = "\n" + "=" * 50


def _format_best(result: CoachResult) -> str:
    best = result.recommended_action.value.upper()
    if result.raise_size is not None:
        return f"{best} to {result.raise_size:.1f} bb"
    return best


def _print_coach_result(result: CoachResult, snapshot: TableSnapshot, hero_action: PlayerAction) -> None:
    """Print a formatted coaching verdict."""
    print(_DIVIDER)
    print(f"  {result.verdict.value.upper()}: {result.score}/100  (best: {_format_best(result)})")
    print("=" * 50)
    print(f"  Hand:       {_hand_display(snapshot.hero_hole)}")
    print(f"  Position:   {snapshot.hero_position}")
    print(f"  Street:     {snapshot.street}")
    if snapshot.board_cards:
        print(f"  Board:      {snapshot.board}")
    print(f"  Pot:        {snapshot.pot:.1f} bb")
    print(f"  Your play:  {hero_action.value}")
    print(f"  Equity:     {result.equity:.1f}% | Pot odds: {result.pot_odds:.1f}%")

    print()
    print("  -- Why? --")
    for reason in result.reasons:
        print(f"  - {reason}")

    print()
    print(f"  {result.summary}")
    print(f"  Concepts: {', '.join(result.concept_tags)}")
    print("=" * 50)
    print()


def _print_showdown(showdown: ShowdownResult) -> None:
    print()
    print("  -- Showdown --")
    print(f"  Board:      {showdown.final_board}")
    winner_ids = {w.id for w in showdown.winners}
    for player in showdown.players:
        mark = " *" if player.id in winner_ids else ""
        hole = " ".join(str(c) for c in player.hole)
        print(f"  {player.name:<8} {hole}  {player.evaluation.label}{mark}")
    if showdown.hero_folded:
        names = ", ".join(w.name for w in showdown.active_winners)
        print(f"  You folded; pot goes to {names}. You would have: {showdown.hero_would_result.value}.")
    else:
        print(f"  Result: {showdown.hero_would_result.value.upper()}")


# ---------------------------------------------------------------------------
# Mode 1: Live coaching
# ---------------------------------------------------------------------------


def _live_coaching(engine: DecisionEngine) -> None:
    """Score one spot entered by the user."""
    snapshot = _build_situation()
    if snapshot is None:
        return

    choice = _prompt_hero_action(snapshot.facing is not None)
    if choice is None:
        return
    hero_action, raise_size = choice

    result = engine.decide(snapshot, hero_action, raise_size)
    _print_coach_result(result, snapshot, hero_action)


# ---------------------------------------------------------------------------
# Mode 2: Random drill
# ---------------------------------------------------------------------------


def _describe_spot(snapshot: TableSnapshot) -> None:
    print(_DIVIDER)
    print(f"  {snapshot.street} | You: {snapshot.hero_position} vs {snapshot.villain_position}")
    print("=" * 50)
    print(f"  Hand:       {_hand_display(snapshot.hero_hole)}")
    if snapshot.board_cards:
        print(f"  Board:      {snapshot.board}")
    print(f"  Pot:        {snapshot.pot:.1f} bb | Stack: {snapshot.effective_stack:.0f} bb")
    for a in snapshot.opponent_actions:
        size = f" {a.size:.1f}" if a.size else ""
        print(f"  {a.name:<8} {a.action.value.lower()}{size}")
    if snapshot.facing is not None:
        print(f"  Facing a {snapshot.facing.type.value.lower()} of {snapshot.facing.size:.1f} bb")


def _outs_quiz(snapshot: TableSnapshot, store: ProfileStore, rng: random.Random) -> None:
    """Ask for the outs count, with one retry."""
    if snapshot.outs is None:
        return
    correct = snapshot.outs.outs
    for attempt in (1, 2):
        answer = _prompt_int("How many outs do you have?", 0)
        delta = store.record_outs_answer(answer, correct, attempt, rng)
        if answer == correct:
            print(f"    Correct! {snapshot.outs.draw_label} ({delta:+d} rating)")
            return
        gained = f" ({delta:+d} rating)" if delta > 0 else ""
        print(f"    Not quite{gained}.")
    print(f"    Answer: {correct} outs ({snapshot.outs.draw_label}), ~{snapshot.outs.equity_pct:.0f}% to improve.")


def _random_drill(engine: DecisionEngine, store: ProfileStore, rng: random.Random) -> None:
    """Deal a random spot and coach it.

    HANDS mode coaches one decision then shows the showdown. GAME mode
    starts preflop and coaches every street until the hero folds or the
    river is played.
    """
    mode_str = _prompt("Mode (hands/game)", "hands").lower()
    mode = DrillMode.GAME if mode_str.startswith("g") else DrillMode.HANDS

    spot: TrainingSpot | None = generate_training_spot(rng, mode, store.load().preferred_hands)
    store.record_hand()

    while spot is not None:
        snapshot = spot.snapshot
        _describe_spot(snapshot)
        _outs_quiz(snapshot, store, rng)

        choice = _prompt_hero_action(snapshot.facing is not None)
        if choice is None:
            return
        hero_action, raise_size = choice

        result = engine.decide(snapshot, hero_action, raise_size)
        _print_coach_result(result, snapshot, hero_action)
        delta = store.record_decision(result.score, rng)
        profile = store.load()
        print(f"  Rating: {profile.rating} ({delta:+d}) | {profile.tier}")

        last_spot = spot
        spot = advance_street(spot, hero_action, raise_size, rng) if mode == DrillMode.GAME else None

    showdown = resolve_showdown(
        last_spot.snapshot.hero_hole,
        last_spot.opponent_hands,
        last_spot.full_board,
        hero_folded=hero_action == PlayerAction.FOLD,
        hero_action=hero_action,
    )
    _print_showdown(showdown)
    print()


# ---------------------------------------------------------------------------
# Mode 3: Showdown calculator
# ---------------------------------------------------------------------------


def _showdown_calculator() -> None:
    """Resolve a showdown between hands entered by the user."""
    print()
    try:
        hero = _parse_cards(_prompt("Your hand (e.g. AhKs)"))
        if len(hero) != 2:
            print(f"    Need exactly 2 cards, got {len(hero)}")
            return
        opponents: list[OpponentHand] = []
        n = _prompt_int("Number of opponents", 1)
        for i in range(n):
            name = f"Opp{chr(ord('A') + i)}"
            cards = _parse_cards(_prompt(f"{name} hand"))
            if len(cards) != 2:
                print(f"    Need exactly 2 cards, got {len(cards)}")
                return
            opponents.append(OpponentHand(name=name, hole=(cards[0], cards[1])))

        known = [*hero, *(c for o in opponents for c in o.hole)]
        board_cards = _parse_cards(_prompt("Board (blank to deal randomly)"))
        if not board_cards:
            deck = Deck()
            deck.remove(known)
            board_cards = deck.deal(5)
        if len(board_cards) != 5:
            print(f"    Need 5 board cards, got {len(board_cards)}")
            return
        all_cards = [*known, *board_cards]
        if len(set(all_cards)) != len(all_cards):
            print("    Duplicate cards.")
            return
    except ValueError as e:
        print(f"    {e}")
        return

    showdown = resolve_showdown(
        (hero[0], hero[1]),
        opponents,
        Board.from_cards(board_cards),
        hero_folded=False,
        hero_action=PlayerAction.CALL,
    )
    _print_showdown(showdown)
    print()


# ---------------------------------------------------------------------------
# Mode 4: Profile
# ---------------------------------------------------------------------------


def _profile_view(store: ProfileStore) -> None:
    profile = store.load()
    current, nxt, fraction = tier_progress(profile.rating)
    print()
    print(f"  {profile.summary()}")
    if nxt is not current:
        print(f"  Progress:   {fraction:.0%} of {current.name}, next {nxt.name} at {nxt.min_rating}")
    print(f"  Hands:      {profile.preferred_hands} (HANDS drills)")
    recent = store.recent_decisions(5)
    if recent:
        print("  Recent:")
        for score, delta, created_at in recent:
            print(f"    {created_at}  score {score:>3}  {delta:+d}")
    options = "/".join(p.value.lower() for p in PreferredHands)
    pref = _prompt(f"Hands preference ({options}, blank to keep)")
    if pref:
        updated = store.set_preferred_hands(pref)
        print(f"    Hands preference: {updated.preferred_hands}")
    if _prompt("Reset profile? (y/N)", "n").lower().startswith("y"):
        store.reset()
        print("    Profile reset.")


# ---------------------------------------------------------------------------
# Main menu
# ---------------------------------------------------------------------------


def run() -> None:
    """Main entry point for the coach."""
    engine = DecisionEngine(load_coach_config())
    store = ProfileStore()
    rng = random.Random()

    print()
    print("=" * 50)
    print("  HOLD'EM COACH")
    print("=" * 50)

    try:
        while True:
            print()
            print("  1. Live coaching")
            print("  2. Random drill")
            print("  3. Showdown calculator")
            print("  4. Profile")
            print("  5. Quit")
            choice = _prompt(">", "5")

            if choice == "1":
                _live_coaching(engine)
            elif choice == "2":
                _random_drill(engine, store, rng)
            elif choice == "3":
                _showdown_calculator()
            elif choice == "4":
                _profile_view(store)
            elif choice == "5":
                print("  Good luck at the tables!")
                break
    finally:
        store.close()


if __name__ == "__main__":
    run()
