from fastapi import APIRouter, Depends, Request
from slowapi import Limiter

from api.dependencies import client_ip, get_ai_ranker, get_candidate_store, get_match_predicate, require_admin
from config import settings
from models.requests import RankRequest, ScoreRequest
from models.responses import RankResponse, ScoreResponse
from models.schemas.cv import StructuredCV
from services import cv_hygiene, gemini_client, rubric_scorer
from services.candidate_store import CandidateStore
from services.errors import EngineError, RankingError, ScoringError
from services.keywords import MatchPredicate
from services.ranking import BaseRanker, rank_candidates

router = APIRouter()
limiter = Limiter(key_func=client_ip)


@router.get("/health")
async def health(store: CandidateStore = Depends(get_candidate_store)):
    return {
        "status": "ok",
        "gemini_configured": gemini_client.is_configured(),
        "candidate_store": store.name,
    }


@router.post("/score", response_model=ScoreResponse)
@limiter.limit(settings.score_rate_limit)
async def score(
    request: Request,
    body: ScoreRequest,
    match: MatchPredicate = Depends(get_match_predicate),
):
    raw_cv = body.cv_payload()
    try:
        cv = StructuredCV.model_validate(raw_cv)
        result = rubric_scorer.score_cv(cv, match=match)
        improved = cv_hygiene.improve_cv(raw_cv)
    except Exception as e:
        raise ScoringError(f"{type(e).__name__} while scoring CV") from e

    return ScoreResponse(
        display_gpa=result.display_gpa,
        candidate_score=result.total,
        score_reasons=result.reasons,
        score_breakdown=result.category_breakdown,
        score_details=result.details,
        keywords_version=result.keywords_version,
        cv=improved,
    )


@router.post("/rank", response_model=RankResponse, dependencies=[Depends(require_admin)])
@limiter.limit(settings.rank_rate_limit)
async def rank(
    request: Request,
    body: RankRequest,
    store: CandidateStore = Depends(get_candidate_store),
    ai_ranker: BaseRanker | None = Depends(get_ai_ranker),
    match: MatchPredicate = Depends(get_match_predicate),
):
    try:
        return await rank_candidates(body, store, ai_ranker=ai_ranker, match=match)
    except EngineError:
        raise
    except Exception as e:
        raise RankingError(f"{type(e).__name__} while ranking candidates") from e
