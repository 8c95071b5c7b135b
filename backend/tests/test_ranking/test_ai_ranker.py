"""Tests for the Gemini re-ranker; the Gemini call itself is always mocked."""

from unittest.mock import AsyncMock, patch

import pytest

from models.requests import RoleSpec
from samples import make_candidate
from services.errors import UpstreamAIError
from services.ranking import GeminiRanker
from services.ranking.ai_ranker import candidate_payload, parse_ai_results
from services.ranking.pipeline import prescore
from services.taxonomy import get_taxonomy

ROLE = RoleSpec.model_validate({
    "title": "Frontend Developer",
    "mustHaveSkills": ["React", "Node"],
    "niceToHaveSkills": ["Docker"],
})


@pytest.fixture
def scored():
    pool = [
        make_candidate("a", technical=["React", "Node"], phone="+1 555 010 9876"),
        make_candidate("b", technical=["React"]),
    ]
    return prescore(pool, ROLE, get_taxonomy())


def _entry(candidate_id, score=80, **overrides):
    entry = {
        "candidateId": candidate_id,
        "score": score,
        "matchedSkills": ["React"],
        "reasons": ["r1", "r2", "r3"],
        "gaps": ["g1", "g2"],
        "atsReadiness": "low",
    }
    entry.update(overrides)
    return entry


class TestCandidatePayload:
    def test_no_identity_fields(self, scored):
        payload = candidate_payload(scored[0])
        text = str(payload)
        assert payload["candidateId"] == "a"
        assert "Candidate a" not in text
        assert "candidatea@example.com" not in text
        assert "9876" not in text
        assert payload["initialScore"] == scored[0].heuristic_score


class TestParseAIResults:
    def test_valid_entries(self, scored):
        results = parse_ai_results({"results": [_entry("a", 88), _entry("b", 61)]}, scored, ROLE)
        assert [(r.candidate_id, r.final_score, r.source) for r in results] == [("a", 88, "ai"), ("b", 61, "ai")]
        assert results[0].full_name == "Candidate a"

    def test_ats_readiness_recomputed_locally(self, scored):
        results = parse_ai_results({"results": [_entry("a", 88, atsReadiness="low")]}, scored, ROLE)
        assert results[0].ats_readiness == "high"

    def test_score_clamped(self, scored):
        results = parse_ai_results({"results": [_entry("a", 140), _entry("b", -5)]}, scored, ROLE)
        assert [r.final_score for r in results] == [100, 0]

    def test_untraceable_skills_dropped(self, scored):
        entry = _entry("b", matchedSkills=["React", "Node", "Kotlin"])
        results = parse_ai_results({"results": [entry]}, scored, ROLE)
        assert results[0].matched_skills == ["React"]

    def test_heuristic_score_kept_alongside(self, scored):
        results = parse_ai_results({"results": [_entry("a", 10)]}, scored, ROLE)
        assert results[0].heuristic_score == scored[0].heuristic_score

    @pytest.mark.parametrize(
        "bad",
        [
            {"score": "high"},
            {"score": float("nan")},
            {"reasons": ["only one"]},
            {"gaps": ["", "  "]},
            {"reasons": "not a list"},
        ],
    )
    def test_malformed_entry_dropped(self, scored, bad):
        results = parse_ai_results({"results": [_entry("a", **bad), _entry("b")]}, scored, ROLE)
        assert [r.candidate_id for r in results] == ["b"]

    def test_unknown_and_duplicate_ids_dropped(self, scored):
        data = {"results": [_entry("zzz"), _entry("a", 70), _entry("a", 90), "garbage"]}
        results = parse_ai_results(data, scored, ROLE)
        assert [(r.candidate_id, r.final_score) for r in results] == [("a", 70)]

    def test_extra_reasons_truncated(self, scored):
        entry = _entry("a", reasons=["r1", "r2", "r3", "r4"], gaps=["g1", "g2", "g3"])
        result = parse_ai_results({"results": [entry]}, scored, ROLE)[0]
        assert result.reasons == ["r1", "r2", "r3"]
        assert result.gaps == ["g1", "g2"]

    @pytest.mark.parametrize("data", [{}, {"results": "nope"}, {"candidates": []}])
    def test_wrong_top_level_shape(self, scored, data):
        with pytest.raises(UpstreamAIError):
            parse_ai_results(data, scored, ROLE)


class TestGeminiRanker:
    @pytest.mark.asyncio
    async def test_rank_calls_gemini_once(self, scored):
        mock = AsyncMock(return_value={"results": [_entry("a", 90), _entry("b", 70)]})
        with patch("services.gemini_client.generate_json", mock):
            results = await GeminiRanker(timeout=1.0).rank(scored, ROLE, get_taxonomy())
        assert mock.await_count == 1
        prompt = mock.await_args.args[0]
        assert "Frontend Developer" in prompt
        assert "candidatea@example.com" not in prompt
        assert mock.await_args.kwargs["timeout"] == 1.0
        assert [r.candidate_id for r in results] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_upstream_error_propagates(self, scored):
        mock = AsyncMock(side_effect=UpstreamAIError("timed out"))
        with patch("services.gemini_client.generate_json", mock):
            with pytest.raises(UpstreamAIError):
                await GeminiRanker().rank(scored, ROLE, get_taxonomy())
