"""
Persistence layer for league data.
Read/write interfaces only; no business logic or simulation.
"""
from .db import get_connection, init_db, get_db_path, set_db_path
from .repositories import (
    TeamRepository,
    MatchRepository,
)

__all__ = [
    "get_connection",
    "init_db",
    "get_db_path",
    "set_db_path",
    "TeamRepository",
    "MatchRepository",
]
