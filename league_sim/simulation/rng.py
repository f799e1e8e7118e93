"""
Random stream shared by every simulated match of a league.
One stream is created per process and carried across weeks, so consecutive
weeks draw fresh numbers; reseed() restarts it for a reproducible run.
"""
from __future__ import annotations

import random

from league_sim import config


class SeededRNG:
    """Long-lived random stream for the match simulator and initial strengths."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def reseed(self, seed: int | None) -> None:
        """Restart the stream from seed; None reseeds from system entropy."""
        self._rng.seed(seed)

    def random(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)


_shared: SeededRNG | None = None


def shared_rng() -> SeededRNG:
    """Process-wide stream, seeded from LEAGUE_SEED on first use."""
    global _shared
    if _shared is None:
        _shared = SeededRNG(config.SEED)
    return _shared
