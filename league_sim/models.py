"""
Data models for the league simulator.
Domain objects only; no persistence or API logic.

Teams and matches are plain records passed into the core; standings rows and
predictions are derived views recomputed on demand and never stored.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Points awarded per result
POINTS_WIN = 3
POINTS_DRAW = 1
POINTS_LOSS = 0

STRENGTH_MIN = 1
STRENGTH_MAX = 100


class InvalidInputError(ValueError):
    """Malformed input to a core operation (odd team count, bad match, etc.)."""


# ---------- Team ----------
@dataclass
class Team:
    """
    A league competitor. strength drives the match simulator and the
    prediction heuristic; it does not change while a season is simulated.
    """
    id: str
    name: str
    strength: int

    def validate(self) -> None:
        if not STRENGTH_MIN <= self.strength <= STRENGTH_MAX:
            raise InvalidInputError(
                f"Team {self.id} strength must be {STRENGTH_MIN}-{STRENGTH_MAX} (got {self.strength})"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "strength": self.strength,
        }


# ---------- Match (fixture) ----------
@dataclass
class Match:
    """
    A fixture between two teams in a given week.
    Scores are None until played; both are set together when the simulator runs.
    """
    id: str | None
    home_team_id: str
    away_team_id: str
    week: int
    home_score: int | None = None
    away_score: int | None = None
    played: bool = False

    def validate(self) -> None:
        """Raise InvalidInputError if the record breaks a match invariant."""
        if self.home_team_id == self.away_team_id:
            raise InvalidInputError(f"Match {self.id}: home and away team must differ")
        if self.week < 1:
            raise InvalidInputError(f"Match {self.id}: week must be >= 1 (got {self.week})")
        scores = (self.home_score, self.away_score)
        if self.played:
            if None in scores:
                raise InvalidInputError(f"Match {self.id}: played match must have both scores")
            if self.home_score < 0 or self.away_score < 0:
                raise InvalidInputError(f"Match {self.id}: scores must be non-negative")
        elif scores != (None, None):
            raise InvalidInputError(f"Match {self.id}: unplayed match must not have scores")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "week": self.week,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "played": self.played,
        }


# ---------- StandingsRow (derived) ----------
@dataclass
class StandingsRow:
    """One line of the league table. Recomputed from the full match set."""
    team: Team
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0
    position: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def to_dict(self) -> dict[str, Any]:
        return {
            "team": self.team.to_dict(),
            "played": self.played,
            "wins": self.wins,
            "draws": self.draws,
            "losses": self.losses,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
            "goal_difference": self.goal_difference,
            "points": self.points,
            "position": self.position,
        }


# ---------- Prediction (derived) ----------
@dataclass
class Prediction:
    """Championship probability for one team, as an integer percentage."""
    team: Team
    probability: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "team": self.team.to_dict(),
            "probability": self.probability,
        }
