"""Candidate ranking: heuristic pre-filter, AI re-rank, local fallback."""

from services.ranking.ai_ranker import GeminiRanker
from services.ranking.base import BaseRanker, ScoredCandidate, ats_readiness
from services.ranking.fallback_ranker import HeuristicRanker
from services.ranking.pipeline import rank_candidates

__all__ = [
    "BaseRanker",
    "GeminiRanker",
    "HeuristicRanker",
    "ScoredCandidate",
    "ats_readiness",
    "rank_candidates",
]
