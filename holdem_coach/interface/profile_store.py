"""Persistent player profile for training drills.

Stores a single profile row plus a decision log in a SQLite database
(~/.holdem_coach/profile.db) with WAL mode. The in-memory PlayerProfile
is written through to the database on every update.
"""

from __future__ import annotations

import logging
import random
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from holdem_coach.interface.rating import (
    clamp_rating,
    outs_answer_delta,
    rating_delta,
    scale_loss,
    tier_for,
)
from holdem_coach.interface.scenario import PreferredHands

logger = logging.getLogger("holdem_coach.interface.profile")

_DATA_DIR = Path.home() / ".holdem_coach"
_DB_FILE = _DATA_DIR / "profile.db"

_PROFILE_ID = 1

_CREATE_PROFILE_TABLE = """\
CREATE TABLE IF NOT EXISTS profile (
    id                 INTEGER PRIMARY KEY CHECK (id = 1),
    rating             INTEGER NOT NULL DEFAULT 0,
    total_hands        INTEGER NOT NULL DEFAULT 0,
    total_decisions    INTEGER NOT NULL DEFAULT 0,
    correct_outs_count INTEGER NOT NULL DEFAULT 0,
    last_coach_score   INTEGER,
    last_played        TEXT NOT NULL,
    preferred_hands    TEXT NOT NULL DEFAULT 'ANY'
);
"""

_CREATE_DECISIONS_TABLE = """\
CREATE TABLE IF NOT EXISTS decisions (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    score      INTEGER NOT NULL,
    delta      INTEGER NOT NULL,
    rating     INTEGER NOT NULL,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""

# Profiles written before the hands preference existed lack the column
_ADD_PREFERRED_HANDS = (
    "ALTER TABLE profile ADD COLUMN preferred_hands TEXT NOT NULL DEFAULT 'ANY'"
)

_UPSERT_PROFILE = """\
INSERT INTO profile (
    id, rating, total_hands, total_decisions, correct_outs_count,
    last_coach_score, last_played, preferred_hands
) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT(id) DO UPDATE SET
    rating             = excluded.rating,
    total_hands        = excluded.total_hands,
    total_decisions    = excluded.total_decisions,
    correct_outs_count = excluded.correct_outs_count,
    last_coach_score   = excluded.last_coach_score,
    last_played        = excluded.last_played,
    preferred_hands    = excluded.preferred_hands;
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass
class PlayerProfile:
    """Rating and counters for the local player."""

    rating: int = 0
    total_hands: int = 0
    total_decisions: int = 0
    correct_outs_count: int = 0
    last_coach_score: int | None = None
    last_played: str = ""
    preferred_hands: PreferredHands = PreferredHands.ANY

    @property
    def tier(self) -> str:
        return tier_for(self.rating).name

    def summary(self) -> str:
        """One-line summary of the profile."""
        last = f" | Last score {self.last_coach_score}" if self.last_coach_score is not None else ""
        return (
            f"{self.tier} ({self.rating}) | {self.total_hands} hands | "
            f"{self.total_decisions} decisions | {self.correct_outs_count} outs right{last}"
        )


class ProfileStore:
    """Loads and updates the player profile.

    Every mutating call writes through to SQLite and returns the rating
    change it applied.
    """

    def __init__(self, db_path: Path | str | None = None) -> None:
        self._db_path = Path(db_path) if db_path else _DB_FILE
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._create_tables()
        self._profile = self._read()

    def _create_tables(self) -> None:
        self._conn.execute(_CREATE_PROFILE_TABLE)
        self._conn.execute(_CREATE_DECISIONS_TABLE)
        columns = {row[1] for row in self._conn.execute("PRAGMA table_info(profile)")}
        if "preferred_hands" not in columns:
            self._conn.execute(_ADD_PREFERRED_HANDS)
        self._conn.commit()

    def _read(self) -> PlayerProfile:
        row = self._conn.execute(
            "SELECT rating, total_hands, total_decisions, correct_outs_count, "
            "last_coach_score, last_played, preferred_hands FROM profile WHERE id = ?",
            (_PROFILE_ID,),
        ).fetchone()
        if row is None:
            profile = PlayerProfile(last_played=_now())
            self._save(profile)
            return profile
        return PlayerProfile(
            rating=clamp_rating(row[0]),
            total_hands=row[1],
            total_decisions=row[2],
            correct_outs_count=row[3],
            last_coach_score=row[4],
            last_played=row[5],
            preferred_hands=PreferredHands.normalize(row[6]),
        )

    def _save(self, profile: PlayerProfile) -> None:
        self._conn.execute(_UPSERT_PROFILE, (
            _PROFILE_ID, profile.rating, profile.total_hands,
            profile.total_decisions, profile.correct_outs_count,
            profile.last_coach_score, profile.last_played,
            str(profile.preferred_hands),
        ))
        self._conn.commit()

    def _apply(self, delta: int) -> int:
        """Apply a rating change, logging tier changes. Returns the applied delta."""
        p = self._profile
        before = p.tier
        new_rating = clamp_rating(p.rating + delta)
        applied = new_rating - p.rating
        p.rating = new_rating
        if p.tier != before:
            logger.info("Tier changed: %s -> %s (rating %d)", before, p.tier, p.rating)
        return applied

    def load(self) -> PlayerProfile:
        """Return the current profile."""
        return self._profile

    def record_hand(self) -> PlayerProfile:
        """Count a newly dealt hand."""
        self._profile.total_hands += 1
        self._profile.last_played = _now()
        self._save(self._profile)
        return self._profile

    def set_preferred_hands(self, value: PreferredHands | str) -> PlayerProfile:
        """Choose which streets HANDS drills deal; unknown values mean ANY."""
        self._profile.preferred_hands = PreferredHands.normalize(value)
        self._save(self._profile)
        logger.info("Preferred hands set to %s", self._profile.preferred_hands)
        return self._profile

    def record_decision(self, score: int, rng: random.Random | None = None) -> int:
        """Apply the rating change for a coach score.

        Losses are scaled by the current tier. Returns the applied delta.
        """
        delta = scale_loss(rating_delta(score, rng), self._profile.tier)
        applied = self._apply(delta)
        p = self._profile
        p.total_decisions += 1
        p.last_coach_score = score
        p.last_played = _now()
        self._save(p)
        self._conn.execute(
            "INSERT INTO decisions (score, delta, rating) VALUES (?, ?, ?)",
            (score, applied, p.rating),
        )
        self._conn.commit()
        logger.debug("Decision score %d -> delta %d, rating %d", score, applied, p.rating)
        return applied

    def record_outs_answer(
        self,
        answer: int,
        correct: int,
        attempt: int = 1,
        rng: random.Random | None = None,
    ) -> int:
        """Score an outs quiz answer.

        Only gains are applied to the rating; an exact answer also counts
        toward correct_outs_count. Returns the computed delta.
        """
        delta = outs_answer_delta(answer, correct, attempt, self._profile.tier, rng)
        if delta > 0:
            self._apply(delta)
            if answer == correct:
                self._profile.correct_outs_count += 1
            self._save(self._profile)
        return delta

    def recent_decisions(self, limit: int = 10) -> list[tuple[int, int, str]]:
        """Most recent decisions, newest first.

        Returns:
            List of (score, delta, created_at) tuples.
        """
        rows = self._conn.execute(
            "SELECT score, delta, created_at FROM decisions ORDER BY id DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [(row[0], row[1], row[2]) for row in rows]

    def reset(self) -> PlayerProfile:
        """Erase the profile and decision log."""
        self._conn.execute("DELETE FROM decisions")
        self._profile = PlayerProfile(last_played=_now())
        self._save(self._profile)
        logger.info("Profile reset")
        return self._profile

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None  # type: ignore[assignment]
