"""Candidate-job match scoring and ranking module."""

from .match_scorer import (
    MatchScorer,
    get_match_scorer,
    round_half_up,
)
from .ranking_service import CandidateRankingService, get_ranking_service

__all__ = [
    "MatchScorer",
    "get_match_scorer",
    "round_half_up",
    "CandidateRankingService",
    "get_ranking_service",
]
