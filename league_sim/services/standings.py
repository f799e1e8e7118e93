"""
League table: per-team aggregates from played matches and the ranking order.
Pure functions over teams and matches; nothing is stored.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from league_sim.models import (
    POINTS_DRAW,
    POINTS_LOSS,
    POINTS_WIN,
    Match,
    StandingsRow,
    Team,
)


def _record_result(row: StandingsRow, scored: int, conceded: int) -> None:
    row.played += 1
    row.goals_for += scored
    row.goals_against += conceded
    if scored > conceded:
        row.wins += 1
        row.points += POINTS_WIN
    elif scored == conceded:
        row.draws += 1
        row.points += POINTS_DRAW
    else:
        row.losses += 1
        row.points += POINTS_LOSS


def compute_team_stats(team: Team, matches: Iterable[Match]) -> StandingsRow:
    """Aggregate one team's played matches. Unplayed matches are ignored."""
    row = StandingsRow(team=team)
    for m in matches:
        if not m.played:
            continue
        if m.home_team_id == team.id:
            _record_result(row, m.home_score, m.away_score)
        elif m.away_team_id == team.id:
            _record_result(row, m.away_score, m.home_score)
    return row


def ranking_key(row: StandingsRow) -> tuple[int, int, int, int]:
    """Sort key: points, goal difference, goals for, wins (all descending)."""
    return (-row.points, -row.goal_difference, -row.goals_for, -row.wins)


def build_table(teams: Sequence[Team], matches: Sequence[Match]) -> list[StandingsRow]:
    """
    Standings for all teams, ordered and with 1-based positions.
    Residual ties keep the input team order (sorted() is stable).
    """
    rows = [compute_team_stats(t, matches) for t in teams]
    rows = sorted(rows, key=ranking_key)
    for position, row in enumerate(rows, start=1):
        row.position = position
    return rows
