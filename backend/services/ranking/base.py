"""Ranker contract shared by the AI ranker and the local fallback."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

from models.requests import RoleSpec
from models.responses import AtsReadiness, RankedCandidate
from models.schemas.candidate import CandidateRecord
from services.heuristic_matcher import MatchResult
from services.taxonomy import CareerTaxonomy

REASON_COUNT = 3
GAP_COUNT = 2


@dataclass(frozen=True)
class ScoredCandidate:
    """A pool member after the heuristic pre-score."""

    record: CandidateRecord
    match: MatchResult
    parsed_text: str

    @property
    def candidate_id(self) -> str:
        return self.record.candidate_id

    @property
    def heuristic_score(self) -> int:
        return self.match.score


def ats_readiness(score: int) -> AtsReadiness:
    """high > 75, medium 50-75 inclusive, low < 50."""
    if score > 75:
        return "high"
    if score >= 50:
        return "medium"
    return "low"


def build_ranked(
    scored: ScoredCandidate,
    final_score: int,
    matched_skills: list[str],
    reasons: list[str],
    gaps: list[str],
    source: Literal["ai", "heuristic"],
) -> RankedCandidate:
    """Attach local identity metadata to a ranking result."""
    final_score = max(0, min(100, final_score))
    record = scored.record
    return RankedCandidate(
        candidate_id=record.candidate_id,
        full_name=record.full_name or "Unknown",
        email=record.email,
        field_of_study=record.field_of_study,
        area_of_interest=record.area_of_interest,
        heuristic_score=scored.heuristic_score,
        final_score=final_score,
        matched_skills=matched_skills,
        reasons=reasons[:REASON_COUNT],
        gaps=gaps[:GAP_COUNT],
        ats_readiness=ats_readiness(final_score),
        source=source,
    )


class BaseRanker(ABC):
    """Turns pre-scored candidates into ranked results.

    Implementations may return fewer results than candidates given; the
    pipeline fills the rest from the local fallback.
    """

    ranker_name: str = ""

    @abstractmethod
    async def rank(
        self,
        candidates: list[ScoredCandidate],
        role: RoleSpec,
        taxonomy: CareerTaxonomy,
    ) -> list[RankedCandidate]:
        """Return one result per candidate it could rank."""
