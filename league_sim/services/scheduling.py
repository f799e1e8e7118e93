"""
Deterministic double round-robin schedule generation for a league.

Round-robin is used so every team plays every other team exactly once per half;
each half is N-1 weeks and each team plays exactly one match per week. The
second half mirrors the first with home/away swapped, so a season is 2(N-1)
weeks and N(N-1) matches.

Uses the circle method: fix first slot, rotate the others each round. The
schedule is expressed in abstract slot indices; the fixture builders map slots
onto concrete teams. Same team list ordering yields the same fixtures.
"""
from __future__ import annotations

from typing import Sequence

from league_sim.models import InvalidInputError, Match, Team

Round = list[tuple[int, int]]


def generate_schedule(team_count: int) -> list[Round]:
    """
    Return N-1 rounds of N/2 (slot_a, slot_b) pairs for N = team_count.
    Every unordered pair of slots appears exactly once; each slot once per round.
    Raises InvalidInputError for an odd or negative team count.
    """
    if team_count < 0:
        raise InvalidInputError(f"team count must be non-negative (got {team_count})")
    if team_count % 2 == 1:
        raise InvalidInputError("team count must be even")
    if team_count == 0:
        return []
    n = team_count
    schedule: list[Round] = []
    # Round 0: pair (0, N-1), (1, N-2), ...
    # Then rotate so slot 0 stays: [0, N-1, 1, 2, ..., N-2]
    order = list(range(n))
    for _ in range(n - 1):
        schedule.append([(order[i], order[n - 1 - i]) for i in range(n // 2)])
        order = [order[0]] + [order[n - 1]] + order[1 : n - 1]
    return schedule


def _check_slots(schedule: Sequence[Round], teams: Sequence[Team]) -> None:
    if not schedule:
        return
    slot_count = 2 * len(schedule[0])
    if len(teams) != slot_count:
        raise InvalidInputError(
            f"Schedule has {slot_count} slots but {len(teams)} teams were given"
        )


def build_first_half_fixtures(
    schedule: Sequence[Round], teams: Sequence[Team], start_week: int = 1
) -> tuple[list[Match], int]:
    """
    First half: slot pair (a, b) in round r => teams[a] at home to teams[b]
    in week start_week + r. Returns (matches, next unused week).
    """
    _check_slots(schedule, teams)
    matches: list[Match] = []
    week = start_week
    for rnd in schedule:
        for a, b in rnd:
            matches.append(Match(id=None, home_team_id=teams[a].id, away_team_id=teams[b].id, week=week))
        week += 1
    return matches, week


def build_second_half_fixtures(
    schedule: Sequence[Round], teams: Sequence[Team], start_week: int
) -> tuple[list[Match], int]:
    """Second half: same pairs as the first half with home and away swapped."""
    _check_slots(schedule, teams)
    matches: list[Match] = []
    week = start_week
    for rnd in schedule:
        for a, b in rnd:
            matches.append(Match(id=None, home_team_id=teams[b].id, away_team_id=teams[a].id, week=week))
        week += 1
    return matches, week


def build_season_fixtures(teams: Sequence[Team], start_week: int = 1) -> list[Match]:
    """
    Full double round-robin for teams. All matches unplayed, scores None.
    Validates the team count before anything is built.
    """
    schedule = generate_schedule(len(teams))
    first, next_week = build_first_half_fixtures(schedule, teams, start_week)
    second, _ = build_second_half_fixtures(schedule, teams, next_week)
    return first + second
