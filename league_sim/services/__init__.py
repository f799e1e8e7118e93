"""
Service layer: scheduling, standings, predictions, league orchestration.
Only league_service touches persistence; the other modules are pure.
"""
from .scheduling import (
    generate_schedule,
    build_first_half_fixtures,
    build_second_half_fixtures,
    build_season_fixtures,
)
from .standings import build_table, compute_team_stats
from .prediction import predict_champion, weighted_score
from .league_service import LeagueService, LeagueNotInitializedError

__all__ = [
    "generate_schedule",
    "build_first_half_fixtures",
    "build_second_half_fixtures",
    "build_season_fixtures",
    "build_table",
    "compute_team_stats",
    "predict_champion",
    "weighted_score",
    "LeagueService",
    "LeagueNotInitializedError",
]
