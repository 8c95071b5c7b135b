from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.schemas.score_result import CategoryBreakdown

AtsReadiness = Literal["high", "medium", "low"]


class ScoreResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    display_gpa: str = Field("N/A", alias="displayGPA")
    candidate_score: int = 0
    score_reasons: list[str] = []
    score_breakdown: CategoryBreakdown = CategoryBreakdown()
    score_details: dict[str, dict[str, Any]] = {}
    keywords_version: str = ""
    cv: dict[str, Any] = {}


class RankedCandidate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    candidate_id: str
    full_name: str = "Unknown"
    email: str = ""
    field_of_study: str = ""
    area_of_interest: str = ""
    heuristic_score: int = 0
    final_score: int = 0
    matched_skills: list[str] = []
    reasons: list[str] = []  # exactly 3
    gaps: list[str] = []  # exactly 2
    ats_readiness: AtsReadiness = "low"
    source: Literal["ai", "heuristic"] = "heuristic"


class PoolSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    role: str
    total_candidates: int = 0
    prefiltered: int = 0
    analyzed: int = 0
    scoring_method: Literal["ai", "heuristic", "mixed"] = "heuristic"
    degraded: bool = False
    top_reasons_across_pool: list[str] = []
    top_gaps_across_pool: list[str] = []


class RankResponse(BaseModel):
    success: bool = True
    summary: PoolSummary
    results: list[RankedCandidate] = []

