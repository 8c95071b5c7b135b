"""Gemini-backed re-ranker for the top-K pre-filtered candidates.

One outbound call per ranking request. Only CV-derived data and the
candidate id leave the process: no name, email or phone.
"""

import logging
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from models.requests import RoleSpec
from models.responses import RankedCandidate
from services import gemini_client, prompt_builder
from services.errors import UpstreamAIError
from services.keywords import MatchPredicate, substring_match
from services.ranking.base import GAP_COUNT, REASON_COUNT, BaseRanker, ScoredCandidate, build_ranked
from services.taxonomy import CareerTaxonomy

logger = logging.getLogger(__name__)


class AIRankEntry(BaseModel):
    """One candidate as returned by the model; anything else is rejected."""

    model_config = ConfigDict(extra="ignore")

    candidate_id: str = Field(validation_alias=AliasChoices("candidateId", "studentId", "id"))
    score: float = Field(allow_inf_nan=False)
    matched_skills: list[str] = Field([], validation_alias=AliasChoices("matchedSkills", "matched_skills"))
    reasons: list[str] = Field(min_length=REASON_COUNT)
    gaps: list[str] = Field(min_length=GAP_COUNT)

    @field_validator("candidate_id", mode="before")
    @classmethod
    def _id(cls, v: Any) -> str:
        if not isinstance(v, (str, int)) or isinstance(v, bool):
            raise ValueError("candidateId must be a string or integer")
        return str(v)

    @field_validator("reasons", "gaps", mode="before")
    @classmethod
    def _non_empty(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            raise ValueError("expected a list of strings")
        return [s.strip() for s in v if isinstance(s, str) and s.strip()]


def candidate_payload(scored: ScoredCandidate) -> dict:
    """PII-stripped view of a candidate for the prompt."""
    record = scored.record
    cv = record.cv
    return {
        "candidateId": record.candidate_id,
        "fieldOfStudy": record.field_of_study,
        "areaOfInterest": record.area_of_interest,
        "suggestedVacancies": record.suggested_vacancies,
        "skills": cv.skills.model_dump(),
        "projects": [
            {"name": p.name, "description": p.description, "technologies": p.technologies}
            for p in cv.project_entries
        ],
        "experience": [
            {
                "position": e.position,
                "company": e.company,
                "duration": f"{e.start_date} - {e.end_date}" if e.start_date and e.end_date else "Not specified",
                "bullets": e.bullets,
            }
            for e in cv.experience_entries
        ],
        "education": [
            {
                "degree": ed.degree,
                "field": ed.field_of_study,
                "institution": ed.institution,
                "gpa": ed.gpa,
            }
            for ed in cv.education
        ],
        "languages": cv.all_languages,
        "initialScore": scored.heuristic_score,
    }


def _traceable_skills(
    claimed: list[str], role: RoleSpec, scored: ScoredCandidate, match: MatchPredicate
) -> list[str]:
    """Keep only role skills the candidate's own data actually contains."""
    role_skills = {s.lower(): s for s in [*role.must_have_skills, *role.nice_to_have_skills]}
    kept: list[str] = []
    for skill in claimed:
        canonical = role_skills.get(skill.strip().lower()) if isinstance(skill, str) else None
        if canonical and canonical not in kept and match(canonical, scored.parsed_text):
            kept.append(canonical)
    return kept


def parse_ai_results(
    data: dict,
    candidates: list[ScoredCandidate],
    role: RoleSpec,
    match: MatchPredicate = substring_match,
) -> list[RankedCandidate]:
    """Validate the model output and join it back to local candidates.

    Raises UpstreamAIError when the top-level shape is wrong. Individual
    malformed entries and unknown ids are dropped.
    """
    raw_results = data.get("results")
    if not isinstance(raw_results, list):
        raise UpstreamAIError("AI response has no 'results' list")

    by_id = {c.candidate_id: c for c in candidates}
    ranked: list[RankedCandidate] = []
    seen: set[str] = set()
    for raw in raw_results:
        try:
            entry = AIRankEntry.model_validate(raw)
        except ValidationError as e:
            logger.warning("Dropping malformed AI ranking entry: %d errors", e.error_count())
            continue
        scored = by_id.get(entry.candidate_id)
        if scored is None or entry.candidate_id in seen:
            continue
        seen.add(entry.candidate_id)
        ranked.append(
            build_ranked(
                scored,
                final_score=round(entry.score),
                matched_skills=_traceable_skills(entry.matched_skills, role, scored, match),
                reasons=entry.reasons,
                gaps=entry.gaps,
                source="ai",
            )
        )
    return ranked


class GeminiRanker(BaseRanker):
    ranker_name = "gemini"

    def __init__(self, match: MatchPredicate = substring_match, timeout: float | None = None) -> None:
        self.match = match
        self.timeout = timeout

    async def rank(
        self,
        candidates: list[ScoredCandidate],
        role: RoleSpec,
        taxonomy: CareerTaxonomy,
    ) -> list[RankedCandidate]:
        prompt = prompt_builder.build_ranking_prompt(
            role=role.model_dump(by_alias=True),
            taxonomy=taxonomy.as_mapping(),
            candidates=[candidate_payload(c) for c in candidates],
        )
        data = await gemini_client.generate_json(
            prompt,
            system_instruction=prompt_builder.RANKING_SYSTEM_PROMPT,
            timeout=self.timeout,
        )
        return parse_ai_results(data, candidates, role, self.match)
