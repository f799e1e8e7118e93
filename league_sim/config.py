"""
Configuration for the league simulator, read from the environment.
"""
from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Paths
DB_PATH = Path(os.environ.get("LEAGUE_DB_PATH", str(PROJECT_ROOT / "data" / "league.db")))

# App settings
APP_TITLE = "League Simulator API"
APP_VERSION = "0.1.0"
LOG_LEVEL = os.environ.get("LEAGUE_LOG_LEVEL", "INFO").upper()

# Simulation
HOME_ADVANTAGE = float(os.environ.get("LEAGUE_HOME_ADVANTAGE", "1.2"))
_seed = os.environ.get("LEAGUE_SEED", "").strip()
SEED: int | None = int(_seed) if _seed else None

# Initial strengths are drawn uniformly from this range on initialize
INITIAL_STRENGTH_MIN = int(os.environ.get("LEAGUE_STRENGTH_MIN", "50"))
INITIAL_STRENGTH_MAX = int(os.environ.get("LEAGUE_STRENGTH_MAX", "90"))

DEFAULT_TEAM_NAMES = [
    "Liverpool",
    "Manchester City",
    "Chelsea",
    "Arsenal",
]
