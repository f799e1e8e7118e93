"""
Match outcome simulation: strength-biased Poisson scores from a seeded RNG.
"""
from .rng import SeededRNG, shared_rng
from .match_simulator import MatchSimulator, reset_matches, HOME_ADVANTAGE

__all__ = [
    "SeededRNG",
    "shared_rng",
    "MatchSimulator",
    "reset_matches",
    "HOME_ADVANTAGE",
]
