"""Local deterministic ranker used when the AI ranker is absent or fails.

Final score equals the heuristic score; reasons and gaps are built from the
candidate's own fields and the role, never from free-form prose.
"""

from models.requests import RoleSpec
from models.responses import RankedCandidate
from services.heuristic_matcher import candidate_field_of_study
from services.keywords import MatchPredicate, substring_match
from services.ranking.base import BaseRanker, ScoredCandidate, build_ranked
from services.taxonomy import CareerTaxonomy

MAX_LISTED_SKILLS = 3


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def _reasons(scored: ScoredCandidate, field_of_study: str) -> list[str]:
    cv = scored.record.cv
    projects = len(cv.project_entries)
    experiences = len(cv.experience_entries)
    return [
        f"{field_of_study} background" if field_of_study else "Field of study not specified",
        f"{_plural(projects, 'project', 'projects')} listed" if projects else "No projects listed",
        (
            f"{_plural(experiences, 'experience entry', 'experience entries')} listed"
            if experiences
            else "No experience entries listed"
        ),
    ]


def _gaps(scored: ScoredCandidate, role: RoleSpec) -> list[str]:
    experiences = len(scored.record.cv.experience_entries)
    if role.min_years > experiences:
        experience_gap = f"Needs {role.min_years:g}+ years experience"
    else:
        experience_gap = "Meets minimum experience threshold"

    missing_must = [s for s in role.must_have_skills if s not in scored.match.matched_skills]
    missing_nice = [s for s in role.nice_to_have_skills if s not in scored.match.matched_nice_skills]
    if missing_must:
        skill_gap = "Missing must-have: " + ", ".join(missing_must[:MAX_LISTED_SKILLS])
    elif missing_nice:
        skill_gap = "Missing nice-to-have: " + ", ".join(missing_nice[:MAX_LISTED_SKILLS])
    else:
        skill_gap = "No listed skill gaps"
    return [experience_gap, skill_gap]


class HeuristicRanker(BaseRanker):
    ranker_name = "heuristic"

    def __init__(self, match: MatchPredicate = substring_match) -> None:
        self.match = match

    def rank_one(self, scored: ScoredCandidate, role: RoleSpec) -> RankedCandidate:
        matched = [s for s in role.must_have_skills if self.match(s, scored.parsed_text)]
        return build_ranked(
            scored,
            final_score=scored.heuristic_score,
            matched_skills=matched,
            reasons=_reasons(scored, candidate_field_of_study(scored.record)),
            gaps=_gaps(scored, role),
            source="heuristic",
        )

    async def rank(
        self,
        candidates: list[ScoredCandidate],
        role: RoleSpec,
        taxonomy: CareerTaxonomy,
    ) -> list[RankedCandidate]:
        return [self.rank_one(c, role) for c in candidates]
