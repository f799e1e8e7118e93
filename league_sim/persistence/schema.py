"""
SQLite schema for league entities.
Migration-friendly: each table created with IF NOT EXISTS.
"""
from __future__ import annotations


def teams_schema() -> str:
    """Teams with a fixed strength (1-100). Replaced wholesale on league initialize."""
    return """
    CREATE TABLE IF NOT EXISTS teams (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        strength INTEGER NOT NULL CHECK (strength BETWEEN 1 AND 100),
        position INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL
    );
    """


def matches_schema() -> str:
    """Fixture within a week. Scores NULL until played; reset sets them back to NULL."""
    return """
    CREATE TABLE IF NOT EXISTS matches (
        id TEXT PRIMARY KEY,
        home_team_id TEXT NOT NULL,
        away_team_id TEXT NOT NULL,
        week INTEGER NOT NULL CHECK (week >= 1),
        home_score INTEGER CHECK (home_score IS NULL OR home_score >= 0),
        away_score INTEGER CHECK (away_score IS NULL OR away_score >= 0),
        played INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        CHECK (home_team_id <> away_team_id),
        FOREIGN KEY (home_team_id) REFERENCES teams(id),
        FOREIGN KEY (away_team_id) REFERENCES teams(id)
    );
    CREATE INDEX IF NOT EXISTS ix_matches_week ON matches(week);
    CREATE INDEX IF NOT EXISTS ix_matches_home ON matches(home_team_id);
    CREATE INDEX IF NOT EXISTS ix_matches_away ON matches(away_team_id);
    CREATE INDEX IF NOT EXISTS ix_matches_played ON matches(played);
    """


def all_schema_sql() -> str:
    """Combine all schema DDL for a single execution. Order: teams, matches."""
    return "\n".join([
        teams_schema(),
        matches_schema(),
    ])
