#!/usr/bin/env python3
"""
Season slice: Initialize league → Simulate week by week → Print table and title odds.
Run from project root: python3 scripts/run_season.py [--seed N] [--db PATH]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from league_sim.persistence import get_connection, init_db, set_db_path
from league_sim.services.league_service import LeagueService
from league_sim.simulation.rng import SeededRNG


def _print_table(svc: LeagueService, conn) -> None:
    print(f"  {'Pos':>3}  {'Team':<18} {'P':>2} {'W':>2} {'D':>2} {'L':>2} {'GF':>3} {'GA':>3} {'GD':>4} {'Pts':>4}")
    for row in svc.get_table(conn):
        print(
            f"  {row.position:>3}  {row.team.name:<18} {row.played:>2} {row.wins:>2} {row.draws:>2} "
            f"{row.losses:>2} {row.goals_for:>3} {row.goals_against:>3} {row.goal_difference:>+4} {row.points:>4}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate a full league season")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    parser.add_argument("--db", type=Path, default=PROJECT_ROOT / "data" / "season_slice.db")
    args = parser.parse_args()

    set_db_path(args.db)
    init_db(db_path=args.db)
    conn = get_connection()
    try:
        svc = LeagueService(rng=SeededRNG(args.seed))
        teams = svc.initialize(conn)
        print("\n  Teams: " + ", ".join(f"{t.name} ({t.strength})" for t in teams))
        while True:
            result = svc.simulate_next_week(conn)
            if not result["success"]:
                break
            week = result["week"]
            print(f"\n  Week {week}")
            print("  " + "-" * 56)
            names = {t.id: t.name for t in teams}
            for m in svc.get_matches(conn):
                if m.week == week:
                    print(f"  {names[m.home_team_id]:>18} {m.home_score} - {m.away_score} {names[m.away_team_id]}")
            odds = ", ".join(f"{p.team.name} {p.probability}%" for p in svc.get_predictions(conn))
            print(f"  Title odds: {odds}")
        print()
        print("=" * 60)
        _print_table(svc, conn)
        print("=" * 60)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
