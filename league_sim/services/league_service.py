"""
League service: loads teams and matches, runs the core algorithms, persists results.
Initialize league: replace teams, generate fixtures. Simulate: all or next week.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any, Sequence

from league_sim import config
from league_sim.models import InvalidInputError, Match, Prediction, StandingsRow, Team
from league_sim.persistence.repositories import MatchRepository, TeamRepository
from league_sim.services.prediction import predict_champion
from league_sim.services.scheduling import build_season_fixtures
from league_sim.services.standings import build_table
from league_sim.simulation.match_simulator import MatchSimulator, reset_matches
from league_sim.simulation.rng import SeededRNG, shared_rng

logger = logging.getLogger(__name__)


class LeagueNotInitializedError(ValueError):
    """Operation needs teams but the league has none."""


class LeagueService:
    """
    Orchestrates persistence around the pure core.
    Persistence is delegated to repositories; randomness to the injected RNG.
    """

    def __init__(self, rng: SeededRNG | None = None, home_advantage: float | None = None) -> None:
        self.rng = rng or shared_rng()
        self._team_repo = TeamRepository()
        self._match_repo = MatchRepository()
        self._simulator = MatchSimulator(
            self.rng,
            home_advantage=config.HOME_ADVANTAGE if home_advantage is None else home_advantage,
        )

    # ---------- Setup ----------

    def initialize(
        self, conn: sqlite3.Connection, teams: Sequence[tuple[str, int]] | None = None
    ) -> list[Team]:
        """
        Delete existing matches and teams, create teams, generate fixtures.
        teams: (name, strength) pairs; default is the configured team names
        with strengths drawn from INITIAL_STRENGTH_MIN..INITIAL_STRENGTH_MAX.
        """
        if teams is None:
            teams = [
                (name, self.rng.randint(config.INITIAL_STRENGTH_MIN, config.INITIAL_STRENGTH_MAX))
                for name in config.DEFAULT_TEAM_NAMES
            ]
        if len(teams) < 2:
            raise InvalidInputError("Need at least 2 teams to initialize a league")
        candidates = [Team(id="", name=name, strength=strength) for name, strength in teams]
        for t in candidates:
            t.validate()
        # Fail on an odd team count before anything is deleted
        build_season_fixtures(candidates)

        self._match_repo.delete_all(conn)
        self._team_repo.delete_all(conn)
        created = [self._team_repo.create(conn, t.name, t.strength) for t in candidates]
        logger.info("Initialized league with %d teams", len(created))
        self.generate_fixtures(conn)
        return created

    def generate_fixtures(self, conn: sqlite3.Connection) -> list[Match]:
        """Replace all matches with a fresh double round-robin for the current teams."""
        teams = self._team_repo.list_all(conn)
        if not teams:
            raise LeagueNotInitializedError("League has no teams; initialize it first")
        fixtures = build_season_fixtures(teams)
        self._match_repo.delete_all(conn)
        created = self._match_repo.create_many(conn, fixtures)
        logger.info("Generated %d fixtures for %d teams", len(created), len(teams))
        return created

    # ---------- Simulation ----------

    def _strengths(self, conn: sqlite3.Connection) -> dict[str, int]:
        return {t.id: t.strength for t in self._team_repo.list_all(conn)}

    def simulate_all_matches(self, conn: sqlite3.Connection) -> list[Match]:
        """Simulate every unplayed match and persist the results."""
        matches = self._match_repo.list_unplayed(conn)
        simulated = self._simulator.simulate_all(matches, self._strengths(conn))
        self._match_repo.save_results(conn, simulated)
        logger.info("Simulated %d matches", len(simulated))
        return simulated

    def simulate_week(self, conn: sqlite3.Connection, week: int) -> list[Match]:
        """Simulate the unplayed matches of one week and persist the results."""
        matches = self._match_repo.list_unplayed_by_week(conn, week)
        simulated = self._simulator.simulate_week(matches, self._strengths(conn), week)
        self._match_repo.save_results(conn, simulated)
        logger.info("Simulated week %d (%d matches)", week, len(simulated))
        return simulated

    def simulate_next_week(self, conn: sqlite3.Connection) -> dict[str, Any]:
        """Simulate the earliest week that still has unplayed matches."""
        next_week = self._match_repo.find_next_unplayed_week(conn)
        if next_week is None:
            return {"success": False, "message": "No more weeks to simulate"}
        self.simulate_week(conn, next_week)
        return {"success": True, "week": next_week}

    def reset_matches(self, conn: sqlite3.Connection) -> None:
        """Clear every result; fixtures are kept."""
        matches = reset_matches(self._match_repo.list_all(conn))
        self._match_repo.save_results(conn, matches)
        logger.info("Reset %d matches", len(matches))

    # ---------- Views ----------

    def get_matches(self, conn: sqlite3.Connection) -> list[Match]:
        return self._match_repo.list_all(conn)

    def get_table(self, conn: sqlite3.Connection) -> list[StandingsRow]:
        return build_table(self._team_repo.list_all(conn), self._match_repo.list_all(conn))

    def _predictions(
        self, conn: sqlite3.Connection, teams: list[Team], table: list[StandingsRow]
    ) -> list[Prediction]:
        if not teams:
            return []
        # Balanced schedule: every team has the same number of matches left
        remaining = self._match_repo.count_remaining_for_team(conn, teams[0].id)
        return predict_champion(teams, table, remaining)

    def get_predictions(self, conn: sqlite3.Connection) -> list[Prediction]:
        teams = self._team_repo.list_all(conn)
        return self._predictions(conn, teams, build_table(teams, self._match_repo.list_all(conn)))

    def get_league_data(self, conn: sqlite3.Connection) -> dict[str, Any]:
        """Matches, table and predictions in one payload."""
        teams = self._team_repo.list_all(conn)
        matches = self._match_repo.list_all(conn)
        table = build_table(teams, matches)
        predictions = self._predictions(conn, teams, table)
        return {
            "teams": [t.to_dict() for t in teams],
            "matches": [m.to_dict() for m in matches],
            "table": [row.to_dict() for row in table],
            "predictions": [p.to_dict() for p in predictions],
        }
