"""
REST API for the league simulator.
Thin wrappers around LeagueService and persistence.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncGenerator, Generator

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from league_sim import config
from league_sim.models import STRENGTH_MAX, STRENGTH_MIN
from league_sim.persistence import get_connection, get_db_path, init_db
from league_sim.services.league_service import LeagueService
from league_sim.simulation.rng import shared_rng

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@contextmanager
def db_conn() -> Generator:
    """Yield a DB connection, ensure close on exit."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    init_db(db_path=get_db_path())
    logger.info("Database ready at %s", get_db_path())
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title=config.APP_TITLE,
    description="Double round-robin league: fixtures, simulated results, table and title odds",
    version=config.APP_VERSION,
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Request/Response models ----------


class TeamSpec(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    strength: int = Field(..., ge=STRENGTH_MIN, le=STRENGTH_MAX)


class InitializeLeagueRequest(BaseModel):
    teams: list[TeamSpec] | None = Field(
        None, description="Even number of teams; default is the configured four clubs with random strengths"
    )
    seed: int | None = Field(None, description="RNG seed for reproducible strengths and results")


class SimulateRequest(BaseModel):
    seed: int | None = Field(None, description="RNG seed for deterministic demo")


def _service(seed: int | None = None) -> LeagueService:
    """Service over the process-wide stream; a request seed restarts that stream."""
    rng = shared_rng()
    if seed is not None:
        rng.reseed(seed)
    return LeagueService(rng=rng)


# ---------- League endpoints ----------


@app.get("/league")
def get_league() -> dict[str, Any]:
    """Matches, table and championship predictions."""
    with db_conn() as conn:
        try:
            return _service().get_league_data(conn)
        except sqlite3.Error as e:
            logger.error("Loading league failed: %s", e)
            raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/league/initialize")
def initialize_league(req: InitializeLeagueRequest | None = None) -> dict[str, Any]:
    """Replace teams and fixtures with a fresh league."""
    teams = [(t.name, t.strength) for t in req.teams] if req and req.teams is not None else None
    with db_conn() as conn:
        try:
            created = _service(req.seed if req else None).initialize(conn, teams)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except sqlite3.Error as e:
            logger.error("League initialize failed: %s", e)
            raise HTTPException(status_code=500, detail=str(e)) from e
        return {"success": True, "teams": [t.to_dict() for t in created]}


@app.post("/league/simulate")
def simulate_all(req: SimulateRequest | None = None) -> dict[str, Any]:
    """Simulate all remaining matches."""
    with db_conn() as conn:
        try:
            simulated = _service(req.seed if req else None).simulate_all_matches(conn)
        except sqlite3.Error as e:
            logger.error("Simulate all failed: %s", e)
            raise HTTPException(status_code=500, detail=str(e)) from e
        return {"success": True, "simulated": len(simulated)}


@app.post("/league/simulate-next-week")
def simulate_next_week(req: SimulateRequest | None = None) -> dict[str, Any]:
    """Simulate the next unplayed week of matches."""
    with db_conn() as conn:
        try:
            return _service(req.seed if req else None).simulate_next_week(conn)
        except sqlite3.Error as e:
            logger.error("Simulate next week failed: %s", e)
            raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/league/reset")
def reset_league() -> dict[str, Any]:
    """Reset all match results; fixtures are kept."""
    with db_conn() as conn:
        try:
            _service().reset_matches(conn)
        except sqlite3.Error as e:
            logger.error("League reset failed: %s", e)
            raise HTTPException(status_code=500, detail=str(e)) from e
        return {"success": True}


# ---------- Run with: uvicorn league_sim.api:app --reload ----------
