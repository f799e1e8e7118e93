"""
Tests for the league service and repositories against a temporary SQLite DB.
"""
from __future__ import annotations

import pytest

from league_sim import config
from league_sim.models import InvalidInputError, Match
from league_sim.persistence.db import get_connection, init_db, set_db_path
from league_sim.persistence.repositories import MatchRepository, TeamRepository
from league_sim.services.league_service import LeagueNotInitializedError, LeagueService
from league_sim.simulation import rng as rng_module
from league_sim.simulation.rng import SeededRNG

FOUR_TEAMS = [("Liverpool", 80), ("Manchester City", 85), ("Chelsea", 70), ("Arsenal", 75)]


@pytest.fixture
def db_conn(tmp_path):
    """Temporary DB with the league schema."""
    db_path = tmp_path / "league_test.db"
    set_db_path(db_path)
    init_db(db_path=db_path)
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def league_service():
    return LeagueService(rng=SeededRNG(2024))


@pytest.fixture
def league(db_conn, league_service):
    league_service.initialize(db_conn, FOUR_TEAMS)
    return db_conn, league_service


# ---- Repositories ----


def test_team_repository_keeps_creation_order(db_conn):
    repo = TeamRepository()
    for name, strength in FOUR_TEAMS:
        repo.create(db_conn, name, strength)
    assert [t.name for t in repo.list_all(db_conn)] == [n for n, _ in FOUR_TEAMS]


def test_match_repository_roundtrip_and_save(db_conn):
    teams = TeamRepository()
    a = teams.create(db_conn, "A", 60)
    b = teams.create(db_conn, "B", 70)
    repo = MatchRepository()
    [m] = repo.create_many(db_conn, [Match(id=None, home_team_id=a.id, away_team_id=b.id, week=1)])
    assert m.id is not None
    assert repo.find_next_unplayed_week(db_conn) == 1
    m.home_score, m.away_score, m.played = 2, 1, True
    repo.save_results(db_conn, [m])
    [stored] = repo.list_all(db_conn)
    assert (stored.id, stored.home_score, stored.away_score, stored.played) == (m.id, 2, 1, True)
    assert repo.list_unplayed(db_conn) == []
    assert repo.find_next_unplayed_week(db_conn) is None


def test_match_repository_rejects_invalid_match(db_conn):
    with pytest.raises(InvalidInputError):
        MatchRepository().create_many(db_conn, [Match(id=None, home_team_id="x", away_team_id="x", week=1)])


# ---- Initialize & fixtures ----


def test_initialize_creates_teams_and_fixtures(league):
    conn, svc = league
    matches = svc.get_matches(conn)
    assert len(TeamRepository().list_all(conn)) == 4
    assert len(matches) == 12
    assert sorted({m.week for m in matches}) == [1, 2, 3, 4, 5, 6]
    assert all(not m.played for m in matches)


def test_initialize_default_teams(db_conn, league_service):
    created = league_service.initialize(db_conn)
    assert [t.name for t in created] == ["Liverpool", "Manchester City", "Chelsea", "Arsenal"]
    assert all(config.INITIAL_STRENGTH_MIN <= t.strength <= config.INITIAL_STRENGTH_MAX for t in created)


def test_initialize_replaces_previous_league(league):
    conn, svc = league
    svc.simulate_all_matches(conn)
    svc.initialize(conn, [("A", 60), ("B", 70)])
    assert [t.name for t in TeamRepository().list_all(conn)] == ["A", "B"]
    matches = svc.get_matches(conn)
    assert len(matches) == 2
    assert all(not m.played for m in matches)


def test_initialize_odd_teams_keeps_existing_league(league):
    conn, svc = league
    with pytest.raises(InvalidInputError):
        svc.initialize(conn, [("A", 60), ("B", 70), ("C", 80)])
    assert len(TeamRepository().list_all(conn)) == 4
    assert len(svc.get_matches(conn)) == 12


def test_initialize_rejects_out_of_range_strength(db_conn, league_service):
    with pytest.raises(InvalidInputError):
        league_service.initialize(db_conn, [("A", 0), ("B", 70)])


def test_generate_fixtures_full_replace(league):
    conn, svc = league
    svc.simulate_next_week(conn)
    svc.generate_fixtures(conn)
    matches = svc.get_matches(conn)
    assert len(matches) == 12
    assert all(not m.played for m in matches)


def test_generate_fixtures_without_teams_raises(db_conn, league_service):
    with pytest.raises(LeagueNotInitializedError):
        league_service.generate_fixtures(db_conn)


# ---- Simulation ----


def test_simulate_next_week_advances(league):
    conn, svc = league
    assert svc.simulate_next_week(conn) == {"success": True, "week": 1}
    assert svc.simulate_next_week(conn) == {"success": True, "week": 2}
    played = [m for m in svc.get_matches(conn) if m.played]
    assert sorted({m.week for m in played}) == [1, 2]
    assert len(played) == 4


def test_simulate_next_week_when_done(league):
    conn, svc = league
    svc.simulate_all_matches(conn)
    assert svc.simulate_next_week(conn) == {"success": False, "message": "No more weeks to simulate"}


def test_simulate_all_persists_and_is_idempotent(league):
    conn, svc = league
    simulated = svc.simulate_all_matches(conn)
    assert len(simulated) == 12
    before = [(m.id, m.home_score, m.away_score) for m in svc.get_matches(conn)]
    assert svc.simulate_all_matches(conn) == []
    assert [(m.id, m.home_score, m.away_score) for m in svc.get_matches(conn)] == before


def test_simulate_week_only_that_week(league):
    conn, svc = league
    svc.simulate_week(conn, 3)
    for m in svc.get_matches(conn):
        assert m.played == (m.week == 3)


def test_reset_matches_keeps_fixtures(league):
    conn, svc = league
    svc.simulate_all_matches(conn)
    ids = [m.id for m in svc.get_matches(conn)]
    svc.reset_matches(conn)
    matches = svc.get_matches(conn)
    assert [m.id for m in matches] == ids
    assert all(m.home_score is None and m.away_score is None and not m.played for m in matches)


def test_same_seed_same_season(db_conn):
    LeagueService(rng=SeededRNG(7)).initialize(db_conn, FOUR_TEAMS)
    LeagueService(rng=SeededRNG(11)).simulate_all_matches(db_conn)
    first = [(m.home_score, m.away_score) for m in MatchRepository().list_all(db_conn)]
    svc = LeagueService(rng=SeededRNG(11))
    svc.reset_matches(db_conn)
    svc.simulate_all_matches(db_conn)
    assert [(m.home_score, m.away_score) for m in MatchRepository().list_all(db_conn)] == first


def test_consecutive_weeks_draw_fresh_numbers_with_fixed_seed(db_conn, monkeypatch):
    monkeypatch.setattr(config, "SEED", 5)
    monkeypatch.setattr(rng_module, "_shared", None)
    LeagueService().initialize(db_conn, [(name, 70) for name, _ in FOUR_TEAMS])
    weekly_scores = []
    for _ in range(6):
        result = LeagueService().simulate_next_week(db_conn)
        played = MatchRepository().list_all(db_conn)
        weekly_scores.append(tuple(
            (m.home_score, m.away_score) for m in played if m.week == result["week"]
        ))
    assert len(set(weekly_scores)) > 1


def test_default_services_share_one_stream(monkeypatch):
    monkeypatch.setattr(rng_module, "_shared", None)
    assert LeagueService().rng is LeagueService().rng


def test_initial_strength_range_from_config(db_conn, league_service, monkeypatch):
    monkeypatch.setattr(config, "INITIAL_STRENGTH_MIN", 60)
    monkeypatch.setattr(config, "INITIAL_STRENGTH_MAX", 60)
    created = league_service.initialize(db_conn)
    assert [t.strength for t in created] == [60, 60, 60, 60]


# ---- Views ----


def test_table_and_predictions_before_any_match(league):
    conn, svc = league
    table = svc.get_table(conn)
    assert [row.position for row in table] == [1, 2, 3, 4]
    assert all(row.points == 0 for row in table)
    predictions = svc.get_predictions(conn)
    assert len(predictions) == 4
    # Points and GD are zero: shares follow strength 85/80/75/70 of 310
    assert [p.probability for p in predictions] == [27, 26, 24, 23]


def test_predictions_after_full_season(league):
    conn, svc = league
    svc.simulate_all_matches(conn)
    table = svc.get_table(conn)
    predictions = svc.get_predictions(conn)
    assert predictions[0].team.id == table[0].team.id
    assert predictions[0].probability == 100
    assert sum(p.probability for p in predictions) == 100


def test_table_points_consistent_with_results(league):
    conn, svc = league
    svc.simulate_all_matches(conn)
    table = svc.get_table(conn)
    assert all(row.played == 6 for row in table)
    assert sum(row.goals_for for row in table) == sum(row.goals_against for row in table)
    for row in table:
        assert row.points == 3 * row.wins + row.draws


def test_league_data_payload(league):
    conn, svc = league
    svc.simulate_next_week(conn)
    data = svc.get_league_data(conn)
    assert set(data) == {"teams", "matches", "table", "predictions"}
    assert len(data["matches"]) == 12
    assert len(data["table"]) == 4
    assert len(data["predictions"]) == 4


def test_league_data_empty_db(db_conn, league_service):
    data = league_service.get_league_data(db_conn)
    assert data == {"teams": [], "matches": [], "table": [], "predictions": []}
