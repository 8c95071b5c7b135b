import copy

from services.cv_hygiene import improve_cv


def test_trims_and_drops_empty_bullets():
    cv = {
        "experienceProjects": [
            {"type": "experience", "bullets": ["  Built 3 APIs  ", "", "   ", None, "Led team"]},
            {"type": "project", "bullets": ["Shipped v2 "]},
        ],
        "experience": [{"bullets": [" Fixed bugs"]}],
    }
    out = improve_cv(cv)
    assert out["experienceProjects"][0]["bullets"] == ["Built 3 APIs", "Led team"]
    assert out["experienceProjects"][1]["bullets"] == ["Shipped v2"]
    assert out["experience"][0]["bullets"] == ["Fixed bugs"]


def test_dedupes_skills_preserving_order():
    cv = {"skills": {"technical": ["React", " Node ", "React", "", "Node"], "soft": ["Teamwork", "Teamwork"]}}
    out = improve_cv(cv)
    assert out["skills"]["technical"] == ["React", "Node"]
    assert out["skills"]["soft"] == ["Teamwork"]


def test_input_is_not_mutated():
    cv = {"skills": {"technical": ["React", "React"]}, "experience": [{"bullets": [" x "]}]}
    snapshot = copy.deepcopy(cv)
    improve_cv(cv)
    assert cv == snapshot


def test_adds_nothing_and_keeps_unknown_fields():
    cv = {"summary": "Hello", "customField": {"a": 1}, "skills": {"technical": ["Go"]}}
    out = improve_cv(cv)
    assert out == cv
    assert "experience" not in out


def test_malformed_sections_pass_through():
    cv = {"experience": "n/a", "skills": ["React"], "projects": [None, {"bullets": "text"}]}
    assert improve_cv(cv) == cv


def test_non_dict_input():
    assert improve_cv(None) == {}
