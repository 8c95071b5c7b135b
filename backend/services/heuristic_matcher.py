"""Heuristic matcher: cheap, deterministic candidate-vs-role score (0-100).

Weighted factors, each capped:
    must-have skill coverage   40
    nice-to-have coverage      25
    field / area alignment     15
    experience sufficiency     10
    language match              5
    project relevance           5

Skill matching is plain case-insensitive containment through a pluggable
match predicate; no tokenization or stemming.
"""

from pydantic import BaseModel, ConfigDict

from models.requests import RoleSpec
from models.schemas.candidate import CandidateRecord
from services.keywords import MatchPredicate, contains_any, substring_match
from services.taxonomy import CareerTaxonomy

W_MUST = 40
W_NICE = 25
W_FIELD_EXACT = 15
W_FIELD_TAXONOMY = 10
W_EXPERIENCE_FULL = 10
W_EXPERIENCE_PARTIAL = 5
W_LANGUAGE = 5
W_PROJECT = 5


class MatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = 0
    matched_skills: list[str] = []
    matched_nice_skills: list[str] = []
    factors: dict[str, float] = {}


def candidate_field_of_study(candidate: CandidateRecord) -> str:
    if candidate.field_of_study:
        return candidate.field_of_study
    education = candidate.cv.education
    return education[0].field_of_study if education else ""


def build_parsed_text(candidate: CandidateRecord) -> str:
    """Flatten the candidate's searchable free text into one string."""
    cv = candidate.cv
    parts: list[str] = [
        candidate_field_of_study(candidate),
        candidate.area_of_interest,
        candidate.suggested_vacancies,
        " ".join(cv.skills.technical),
        " ".join(cv.skills.soft),
    ]
    for e in cv.experience_entries:
        parts.append(" ".join([e.position, e.company, *e.bullets]))
    for p in cv.project_entries:
        parts.append(f"{p.name} {p.description}")
    for ed in cv.education:
        parts.append(f"{ed.degree} {ed.field_of_study}")
    return " ".join(p.strip() for p in parts if p and p.strip())


def _skill_present(
    skill: str, technical: list[str], parsed_text: str, match: MatchPredicate
) -> bool:
    return any(match(skill, s) for s in technical) or match(skill, parsed_text)


def _coverage(
    skills: list[str], technical: list[str], parsed_text: str, match: MatchPredicate
) -> list[str]:
    return [s for s in skills if _skill_present(s, technical, parsed_text, match)]


def _title_keyword(title: str) -> str:
    words = title.strip().lower().split()
    return words[0] if words else ""


def match_candidate(
    candidate: CandidateRecord,
    role: RoleSpec,
    taxonomy: CareerTaxonomy,
    match: MatchPredicate = substring_match,
    parsed_text: str | None = None,
) -> MatchResult:
    cv = candidate.cv
    technical = cv.skills.technical
    if parsed_text is None:
        parsed_text = build_parsed_text(candidate)

    matched_must = _coverage(role.must_have_skills, technical, parsed_text, match)
    matched_nice = _coverage(role.nice_to_have_skills, technical, parsed_text, match)
    must_points = len(matched_must) / max(len(role.must_have_skills), 1) * W_MUST
    nice_points = len(matched_nice) / max(len(role.nice_to_have_skills), 1) * W_NICE

    field_points = 0
    keyword = _title_keyword(role.title)
    if keyword:
        if match(keyword, candidate.suggested_vacancies) or match(keyword, candidate.area_of_interest):
            field_points = W_FIELD_EXACT
        elif taxonomy.field_offers_vacancy(candidate_field_of_study(candidate), keyword):
            field_points = W_FIELD_TAXONOMY

    # Entry count stands in for years; no date arithmetic
    experience_count = len(cv.experience_entries)
    if experience_count >= role.min_years:
        experience_points = W_EXPERIENCE_FULL
    elif experience_count > 0:
        experience_points = W_EXPERIENCE_PARTIAL
    else:
        experience_points = 0

    language_points = 0
    if role.language and any(match(role.language, lang) for lang in cv.all_languages):
        language_points = W_LANGUAGE

    project_points = 0
    if any(
        contains_any(f"{p.name} {p.description}", role.must_have_skills, match)
        for p in cv.project_entries
    ):
        project_points = W_PROJECT

    factors = {
        "must_have": round(must_points, 2),
        "nice_to_have": round(nice_points, 2),
        "field_alignment": field_points,
        "experience": experience_points,
        "language": language_points,
        "project_relevance": project_points,
    }
    total = (
        must_points + nice_points + field_points + experience_points
        + language_points + project_points
    )
    return MatchResult(
        score=max(0, min(100, round(total))),
        matched_skills=matched_must,
        matched_nice_skills=matched_nice,
        factors=factors,
    )
