"""Ranking pipeline: heuristic pre-filter plus optional AI re-rank.

Flow for one request:

    fetch pool (store, filters)
      -> heuristic pre-score every candidate
      -> stable sort desc, keep top ``prefilter_window`` (50)
      -> keep top ``topK``
      -> AI ranker (if configured)  --failure/missing entries-->  local fallback
      -> merge identity metadata, stable sort by final score
      -> pool summary

The request only fails on store errors; AI failures degrade to the fallback.
"""

import logging
from typing import Literal

from fastapi.concurrency import run_in_threadpool

from config import settings
from models.requests import RankRequest, RoleSpec
from models.responses import PoolSummary, RankedCandidate, RankResponse
from models.schemas.candidate import CandidateRecord
from services.candidate_store import CandidateStore
from services.errors import CandidateStoreError
from services.heuristic_matcher import build_parsed_text, match_candidate
from services.keywords import MatchPredicate, substring_match
from services.ranking.base import BaseRanker, ScoredCandidate
from services.ranking.fallback_ranker import HeuristicRanker
from services.redact import safe_log
from services.taxonomy import CareerTaxonomy, get_taxonomy

logger = logging.getLogger(__name__)

TOP_REASONS_ACROSS_POOL = [
    "Strong technical skills alignment",
    "Relevant project experience",
    "Good educational background",
]
TOP_GAPS_ACROSS_POOL = [
    "Limited industry experience",
    "Missing advanced certifications",
]


def prescore(
    pool: list[CandidateRecord],
    role: RoleSpec,
    taxonomy: CareerTaxonomy,
    match: MatchPredicate = substring_match,
) -> list[ScoredCandidate]:
    scored = []
    for record in pool:
        parsed_text = build_parsed_text(record)
        result = match_candidate(record, role, taxonomy, match, parsed_text=parsed_text)
        scored.append(ScoredCandidate(record=record, match=result, parsed_text=parsed_text))
    return scored


def prefilter(scored: list[ScoredCandidate], window: int) -> list[ScoredCandidate]:
    """Highest heuristic scores first; ties keep pool order (sorted is stable)."""
    ordered = sorted(scored, key=lambda s: s.heuristic_score, reverse=True)
    return ordered[: min(window, len(ordered))]


def _scoring_method(results: list[RankedCandidate]) -> Literal["ai", "heuristic", "mixed"]:
    sources = {r.source for r in results}
    if sources == {"ai"}:
        return "ai"
    if "ai" in sources:
        return "mixed"
    return "heuristic"


async def rank_candidates(
    request: RankRequest,
    store: CandidateStore,
    ai_ranker: BaseRanker | None = None,
    taxonomy: CareerTaxonomy | None = None,
    match: MatchPredicate = substring_match,
    prefilter_window: int | None = None,
) -> RankResponse:
    role = request.role
    taxonomy = taxonomy or get_taxonomy()
    fallback = HeuristicRanker(match)
    window = prefilter_window or settings.prefilter_window

    safe_log(logger, "[rank] query received", {
        "role": role.title,
        "mustCount": len(role.must_have_skills),
        "niceCount": len(role.nice_to_have_skills),
        "minYears": role.min_years,
        "topK": request.top_k,
        "filters": request.filters.model_dump(by_alias=True, exclude_none=True) if request.filters else None,
    })

    # --- Stage 1: Fetch ---
    try:
        pool = await run_in_threadpool(store.fetch_pool, request.filters)
    except CandidateStoreError:
        raise
    except Exception as e:
        raise CandidateStoreError(f"Candidate pool fetch failed: {type(e).__name__}") from e

    # --- Stage 2-4: Pre-score, pre-filter, top-K ---
    prefiltered = prefilter(prescore(pool, role, taxonomy, match), window)
    top = prefiltered[: min(request.top_k, len(prefiltered))]

    # --- Stage 5: AI re-rank (optional) ---
    ai_results: dict[str, RankedCandidate] = {}
    if top and ai_ranker is not None:
        try:
            for result in await ai_ranker.rank(top, role, taxonomy):
                ai_results.setdefault(result.candidate_id, result)
        except Exception as e:
            # Any AI failure degrades to the local fallback; never fails the request
            logger.warning("AI ranking unavailable (%s), using heuristic fallback", type(e).__name__)
        if len(ai_results) < len(top):
            logger.info("AI ranker covered %d of %d candidates", len(ai_results), len(top))

    # --- Stage 6: Fallback for anything the AI did not rank ---
    missing = [s for s in top if s.candidate_id not in ai_results]
    fallback_results = {r.candidate_id: r for r in await fallback.rank(missing, role, taxonomy)}

    # --- Stage 7: Merge in pre-filter order, then stable sort by final score ---
    merged = [ai_results.get(s.candidate_id) or fallback_results[s.candidate_id] for s in top]
    results = sorted(merged, key=lambda r: r.final_score, reverse=True)

    # --- Stage 8: Summary ---
    method = _scoring_method(results)
    summary = PoolSummary(
        role=role.title,
        total_candidates=len(pool),
        prefiltered=len(prefiltered),
        analyzed=len(results),
        scoring_method=method,
        degraded=bool(results) and method != "ai",
        top_reasons_across_pool=TOP_REASONS_ACROSS_POOL,
        top_gaps_across_pool=TOP_GAPS_ACROSS_POOL,
    )

    safe_log(logger, "[rank] query completed", {
        "role": role.title,
        "candidatesFound": len(pool),
        "resultsReturned": len(results),
        "scoringMethod": method,
    })
    return RankResponse(success=True, summary=summary, results=results)
