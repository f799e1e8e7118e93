"""
Championship prediction from the current table and remaining fixtures.

With no matches left the leader is champion (100%). Otherwise teams that
cannot catch the current points of some other team are eliminated (0%), and
survivors split 100% in proportion to a weighted score:

    4 * points + 2 * goal_difference + 1 * strength

Each probability is rounded independently (half up) and the set is not
renormalized, so the total can drift from 100 by up to survivors - 1.
"""
from __future__ import annotations

import math
from typing import Sequence

from league_sim.models import POINTS_WIN, InvalidInputError, Prediction, StandingsRow, Team

POINTS_WEIGHT = 4
GOAL_DIFFERENCE_WEIGHT = 2
STRENGTH_WEIGHT = 1


def weighted_score(row: StandingsRow, strength: int) -> int:
    return (
        row.points * POINTS_WEIGHT
        + row.goal_difference * GOAL_DIFFERENCE_WEIGHT
        + strength * STRENGTH_WEIGHT
    )


def _round_half_up(x: float) -> int:
    # round() is banker's rounding; 22.5 must give 23 here
    return int(math.floor(x + 0.5))


def is_eliminated(row: StandingsRow, table: Sequence[StandingsRow], remaining_matches: int) -> bool:
    """True if some other team already has more points than row can still reach."""
    max_possible = row.points + POINTS_WIN * remaining_matches
    return any(
        other.team.id != row.team.id and other.points > max_possible
        for other in table
    )


def predict_champion(
    teams: Sequence[Team],
    table: Sequence[StandingsRow],
    remaining_matches: int,
) -> list[Prediction]:
    """
    Probability (0-100) of each team finishing first, highest first.
    remaining_matches is the per-team count of unplayed matches; a balanced
    schedule gives every team the same count.
    """
    if remaining_matches < 0:
        raise InvalidInputError(f"remaining matches must be non-negative (got {remaining_matches})")
    if not teams:
        return []

    if remaining_matches == 0:
        if not table:
            return []
        champion_id = table[0].team.id
        predictions = [
            Prediction(team=t, probability=100 if t.id == champion_id else 0)
            for t in teams
        ]
        return sorted(predictions, key=lambda p: -p.probability)

    rows_by_team = {row.team.id: row for row in table}
    scores: dict[str, int] = {}
    for t in teams:
        row = rows_by_team.get(t.id) or StandingsRow(team=t)
        if is_eliminated(row, table, remaining_matches):
            continue
        # A negative heuristic cannot be a share of 100%
        scores[t.id] = max(0, weighted_score(row, t.strength))

    total = sum(scores.values())
    predictions = []
    for t in teams:
        probability = 0
        if total > 0 and t.id in scores:
            probability = _round_half_up(100 * scores[t.id] / total)
        predictions.append(Prediction(team=t, probability=probability))
    return sorted(predictions, key=lambda p: -p.probability)
