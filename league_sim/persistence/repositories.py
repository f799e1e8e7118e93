"""
Repository interfaces for league data.
No business logic, only read/write operations.
"""
from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Iterable

from league_sim.models import Match, Team

_MATCH_COLS = "id, home_team_id, away_team_id, week, home_score, away_score, played"


def _row_to_team(row: sqlite3.Row) -> Team:
    return Team(id=row["id"], name=row["name"], strength=row["strength"])


def _row_to_match(row: sqlite3.Row) -> Match:
    return Match(
        id=row["id"],
        home_team_id=row["home_team_id"],
        away_team_id=row["away_team_id"],
        week=row["week"],
        home_score=row["home_score"],
        away_score=row["away_score"],
        played=bool(row["played"]),
    )


# ---------- TeamRepository ----------


class TeamRepository:
    """CRUD for teams. Listing order is creation order."""

    def create(self, conn: sqlite3.Connection, name: str, strength: int) -> Team:
        tid = str(uuid.uuid4())
        now = datetime.now(timezone.utc).isoformat()
        position = conn.execute("SELECT COALESCE(MAX(position), 0) + 1 FROM teams").fetchone()[0]
        conn.execute(
            "INSERT INTO teams (id, name, strength, position, created_at) VALUES (?, ?, ?, ?, ?)",
            (tid, name, strength, position, now),
        )
        conn.commit()
        return Team(id=tid, name=name, strength=strength)

    def list_all(self, conn: sqlite3.Connection) -> list[Team]:
        rows = conn.execute("SELECT id, name, strength FROM teams ORDER BY position").fetchall()
        return [_row_to_team(r) for r in rows]

    def delete_all(self, conn: sqlite3.Connection) -> None:
        conn.execute("DELETE FROM teams")
        conn.commit()


# ---------- MatchRepository ----------


class MatchRepository:
    """CRUD for matches (fixtures and results)."""

    def create_many(self, conn: sqlite3.Connection, matches: Iterable[Match]) -> list[Match]:
        """Insert all matches in one transaction; assigns ids to matches without one."""
        now = datetime.now(timezone.utc).isoformat()
        created: list[Match] = []
        with conn:
            for m in matches:
                m.validate()
                if m.id is None:
                    m.id = str(uuid.uuid4())
                conn.execute(
                    f"INSERT INTO matches ({_MATCH_COLS}, created_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                    (m.id, m.home_team_id, m.away_team_id, m.week,
                     m.home_score, m.away_score, int(m.played), now),
                )
                created.append(m)
        return created

    def list_all(self, conn: sqlite3.Connection) -> list[Match]:
        rows = conn.execute(
            f"SELECT {_MATCH_COLS} FROM matches ORDER BY week, rowid"
        ).fetchall()
        return [_row_to_match(r) for r in rows]

    def list_unplayed(self, conn: sqlite3.Connection) -> list[Match]:
        rows = conn.execute(
            f"SELECT {_MATCH_COLS} FROM matches WHERE played = 0 ORDER BY week, rowid"
        ).fetchall()
        return [_row_to_match(r) for r in rows]

    def list_unplayed_by_week(self, conn: sqlite3.Connection, week: int) -> list[Match]:
        rows = conn.execute(
            f"SELECT {_MATCH_COLS} FROM matches WHERE played = 0 AND week = ? ORDER BY rowid",
            (week,),
        ).fetchall()
        return [_row_to_match(r) for r in rows]

    def count_remaining_for_team(self, conn: sqlite3.Connection, team_id: str) -> int:
        """Unplayed matches where team_id is home or away."""
        return conn.execute(
            """SELECT COUNT(*) FROM matches
               WHERE played = 0 AND (home_team_id = ? OR away_team_id = ?)""",
            (team_id, team_id),
        ).fetchone()[0]

    def find_next_unplayed_week(self, conn: sqlite3.Connection) -> int | None:
        return conn.execute("SELECT MIN(week) FROM matches WHERE played = 0").fetchone()[0]

    def save_results(self, conn: sqlite3.Connection, matches: Iterable[Match]) -> None:
        """Persist scores and played flag for simulated matches in one transaction."""
        with conn:
            for m in matches:
                m.validate()
                conn.execute(
                    "UPDATE matches SET home_score = ?, away_score = ?, played = ? WHERE id = ?",
                    (m.home_score, m.away_score, int(m.played), m.id),
                )

    def delete_all(self, conn: sqlite3.Connection) -> None:
        conn.execute("DELETE FROM matches")
        conn.commit()
