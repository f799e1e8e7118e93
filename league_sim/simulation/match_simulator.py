"""
Match Simulator: uses team strengths + seeded RNG to produce a final score.

Expected goals per side are strength / U(25, 50), with a fixed multiplier on
the home side. Each side's goal count is a Poisson draw (Knuth's product of
uniforms), so stronger teams score and win more often without a hard outcome.
"""
from __future__ import annotations

import math
from typing import Iterable, Mapping

from league_sim.models import Match
from .rng import SeededRNG

HOME_ADVANTAGE = 1.2
# Divisor range for expected goals (inclusive)
STRENGTH_DIVISOR_RANGE = (25, 50)


class MatchSimulator:
    """
    Simulates unplayed matches in place. Played matches are left untouched,
    so simulating the same match twice records the first result only.
    Caller persists the returned matches.
    """

    def __init__(self, rng: SeededRNG, home_advantage: float = HOME_ADVANTAGE) -> None:
        self.rng = rng
        self.home_advantage = home_advantage

    def expected_goals(self, strength: int, is_home: bool) -> float:
        lo, hi = STRENGTH_DIVISOR_RANGE
        xg = strength / self.rng.randint(lo, hi)
        if is_home:
            xg *= self.home_advantage
        return xg

    def generate_goals(self, expected_goals: float) -> int:
        """Poisson-distributed goal count with mean expected_goals."""
        edge = math.exp(-expected_goals)
        probability = 1.0
        goals = 0
        while True:
            goals += 1
            probability *= self.rng.random()
            if probability <= edge:
                break
        return max(0, goals - 1)

    def simulate(self, match: Match, home_strength: int, away_strength: int) -> Match:
        """Fill scores and mark played. No-op if the match was already played."""
        if match.played:
            return match
        home_xg = self.expected_goals(home_strength, is_home=True)
        away_xg = self.expected_goals(away_strength, is_home=False)
        match.home_score = self.generate_goals(home_xg)
        match.away_score = self.generate_goals(away_xg)
        match.played = True
        return match

    def simulate_all(self, matches: Iterable[Match], strengths: Mapping[str, int]) -> list[Match]:
        """
        Simulate every unplayed match. strengths maps team_id -> strength.
        Returns only the matches that were simulated by this call.
        """
        simulated: list[Match] = []
        for m in matches:
            if m.played:
                continue
            simulated.append(
                self.simulate(m, strengths[m.home_team_id], strengths[m.away_team_id])
            )
        return simulated

    def simulate_week(
        self, matches: Iterable[Match], strengths: Mapping[str, int], week: int
    ) -> list[Match]:
        """Same as simulate_all, restricted to one week."""
        return self.simulate_all((m for m in matches if m.week == week), strengths)


def reset_matches(matches: Iterable[Match]) -> list[Match]:
    """Clear scores and played flag. Pure data operation, no randomness."""
    out: list[Match] = []
    for m in matches:
        m.home_score = None
        m.away_score = None
        m.played = False
        out.append(m)
    return out
