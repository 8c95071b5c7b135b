"""Tests for the rubric scorer."""

import copy

import pytest

from models.schemas.cv import StructuredCV
from models.schemas.score_result import CATEGORY_CAPS
from services.keywords import KeywordConfig, fuzzy_match, get_keyword_config
from services.rubric_scorer import (
    score_certs_awards,
    score_cv,
    score_education,
    score_experience,
    score_projects,
    score_skills,
)
from samples import STRONG_CV


def _cv(raw: dict) -> StructuredCV:
    return StructuredCV.model_validate(raw)


def _assert_bounded(result):
    assert 0 <= result.total <= 100
    breakdown = result.category_breakdown.model_dump()
    for category, cap in CATEGORY_CAPS.items():
        assert 0 <= breakdown[category] <= cap


class TestBounds:
    def test_empty_cv_scores_zero(self):
        result = score_cv(_cv({}))
        assert result.total == 0
        assert result.display_gpa == "N/A"
        _assert_bounded(result)

    def test_strong_cv_within_caps(self):
        _assert_bounded(score_cv(_cv(STRONG_CV)))

    def test_saturated_cv_hits_every_cap(self):
        raw = {
            "summary": "AWS Certified, hackathon winner, coding club lead",
            "experience": [
                {"bullets": [f"Led {i} Python and React releases" for i in range(1, 6)]}
                for _ in range(5)
            ],
            "projects": [
                {
                    "technologies": [f"tech{p}{t}" for t in range(4)],
                    "bullets": ["Reached 10k users"],
                    "url": "https://example.com",
                }
                for p in range(5)
            ],
            "skills": {
                "technical": [f"skill{i}" for i in range(15)] + ["AWS"],
                "languages": ["Python", "Go", "Rust", "Java", "C", "English"],
            },
            "education": [
                {"degree": "BSc", "fieldOfStudy": "CS", "gpa": 4.0, "description": "Dean's List, honors"}
            ],
        }
        result = score_cv(_cv(raw))
        breakdown = result.category_breakdown
        assert breakdown.experience == 35
        assert breakdown.projects == 25
        assert breakdown.skills == 20
        assert breakdown.education == 10
        assert breakdown.certs_awards == 10
        assert result.total == 100


class TestSparseAndMalformed:
    @pytest.mark.parametrize(
        "raw",
        [
            {"experience": None, "projects": "n/a", "skills": [], "education": {}},
            {"experienceProjects": [None, 3, {"type": "experience", "bullets": "not a list"}]},
            {"skills": {"technical": None, "languages": 7}},
            {"education": [{"gpa": {"value": 3}}], "summary": 42},
            {"experience": [{"bullets": [None, 12, "Shipped 3 features"]}]},
        ],
    )
    def test_never_raises(self, raw):
        _assert_bounded(score_cv(_cv(raw)))

    def test_missing_education_scores_zero(self):
        category = score_education(_cv({}), get_keyword_config())
        assert category.subtotal == 0
        assert category.details["gpa"] is None


class TestDeterminism:
    def test_identical_input_identical_output(self):
        first = score_cv(_cv(STRONG_CV))
        second = score_cv(_cv(STRONG_CV))
        assert first.model_dump_json() == second.model_dump_json()

    def test_scoring_does_not_mutate_input(self):
        raw = copy.deepcopy(STRONG_CV)
        cv = _cv(raw)
        score_cv(cv)
        assert raw == STRONG_CV
        assert score_cv(cv) == score_cv(cv)


class TestMonotonicity:
    def test_adding_quantified_bullet_never_lowers_experience(self):
        base = {"experience": [{"bullets": ["Maintained tools", "Fixed bugs"]}]}
        more = {"experience": [{"bullets": ["Maintained tools", "Fixed bugs", "Cut costs by 20%"]}]}
        keywords = get_keyword_config()
        assert (
            score_experience(_cv(more), keywords).subtotal
            >= score_experience(_cv(base), keywords).subtotal
        )

    def test_adding_entry_never_lowers_experience(self):
        one = {"experience": [{"bullets": ["Built 2 APIs"]}]}
        two = {"experience": [{"bullets": ["Built 2 APIs"]}, {"bullets": ["Built 3 APIs"]}]}
        keywords = get_keyword_config()
        assert score_experience(_cv(two), keywords).subtotal > score_experience(_cv(one), keywords).subtotal


class TestCategories:
    def test_experience_details(self):
        category = score_experience(_cv(STRONG_CV), get_keyword_config())
        assert category.details["entry_count"] == 3
        assert category.details["total_bullets"] == 6
        assert category.details["quantified_bullets"] == 6
        assert category.subtotal == pytest.approx(30)

    def test_projects_breadth_and_deployment(self):
        category = score_projects(_cv(STRONG_CV), get_keyword_config())
        assert category.details["project_count"] == 4
        assert category.details["tech_breadth"] == 8
        assert category.details["has_deployment"] is True
        assert category.subtotal == pytest.approx(23.4)

    def test_spoken_languages_not_counted_as_programming(self):
        cv = _cv({"skills": {"languages": ["English", "Arabic", "Python"]}})
        category = score_skills(cv, get_keyword_config())
        assert category.details["programming_language_count"] == 1

    def test_skill_cert_marker(self):
        cv = _cv({"skills": {"technical": ["AWS Solutions Architect"]}})
        assert score_skills(cv, get_keyword_config()).details["has_cert_marker"] is True

    def test_percentage_gpa_in_education(self):
        cv = _cv({"education": [{"degree": "BSc", "fieldOfStudy": "CS", "gpa": 92}]})
        category = score_education(cv, get_keyword_config())
        assert category.details["gpa"] == pytest.approx(3.68)
        assert category.subtotal == pytest.approx(3 + 2 + 3.68 / 4 * 5)

    def test_certs_awards_buckets(self):
        cv = _cv({"summary": "Hackathon winner", "skills": {"technical": ["PMP"]}})
        category = score_certs_awards(cv, get_keyword_config())
        assert category.details == {"has_cert": True, "has_award": True, "has_extracurricular": True}
        assert category.subtotal == 10

    def test_custom_keyword_config(self):
        keywords = KeywordConfig(version="test", leadership=("steered",))
        cv = _cv({"experience": [{"bullets": ["Steered the platform team"]}]})
        assert score_experience(cv, keywords).details["leadership_hits"] == 1
        assert score_cv(cv, keywords=keywords).keywords_version == "test"

    def test_fuzzy_predicate_tolerates_typos(self):
        cv = _cv({"experience": [{"bullets": ["Cordinated the data platform rollout"]}]})
        keywords = KeywordConfig(leadership=("coordinated",))
        assert score_experience(cv, keywords).details["leadership_hits"] == 0
        assert score_experience(cv, keywords, match=fuzzy_match).details["leadership_hits"] == 1


class TestEndToEnd:
    def test_strong_cv_lands_in_high_band(self):
        result = score_cv(_cv(STRONG_CV))
        assert result.total > 75
        assert any(r.startswith("+ Quantified impact") for r in result.reasons)
        assert "+ GPA 3.90" in result.reasons
        assert result.display_gpa == "3.90"

    def test_reasons_for_empty_cv_are_all_negative(self):
        reasons = score_cv(_cv({})).reasons
        assert reasons == [
            "- No quantified impact in experience bullets",
            "- No clear leadership indicators",
            "- Projects lack measurable outcomes",
            "- No technical skills listed",
            "- GPA not provided",
            "- No certifications listed",
        ]

    def test_breakdown_rounded_to_two_places(self):
        breakdown = score_cv(_cv(STRONG_CV)).category_breakdown
        assert breakdown.skills == 9.33
        assert breakdown.education == pytest.approx(9.88, abs=0.01)
