"""Rubric scorer: structured CV -> bounded 0-100 quality score with reasons.

Five independent categories, each capped:

    experience    35   entries, bullet density, quantified share, leadership, tech
    projects      25   count, technology breadth, quantified share, deployment link
    skills        20   technical breadth, programming languages, cert markers
    education     10   degree, field, GPA, honours (first entry only)
    certs_awards  10   certification / award / extracurricular markers

Pure and deterministic: identical input always yields an identical
ScoreResult. Sparse or malformed sub-structures score zero, they never raise.
"""

from models.schemas.cv import StructuredCV
from models.schemas.score_result import (
    CATEGORY_CAPS,
    CategoryBreakdown,
    CategoryScore,
    ScoreResult,
)
from services.gpa import format_gpa, normalize_gpa, pick_display_gpa
from services.keywords import (
    KeywordConfig,
    MatchPredicate,
    contains_any,
    get_keyword_config,
    substring_match,
)

STRONG_SKILL_BREADTH = 8


def _ratio(part: int, whole: int) -> float:
    return part / whole if whole > 0 else 0.0


def _capped(value: float, cap: int) -> float:
    return max(0.0, min(float(cap), value))


def score_experience(
    cv: StructuredCV, keywords: KeywordConfig, match: MatchPredicate = substring_match
) -> CategoryScore:
    entries = cv.experience_entries
    entry_count = min(len(entries), 3)

    total_bullets = 0
    quantified_bullets = 0
    leadership_hits = 0
    tech_hits = 0
    for entry in entries:
        total_bullets += len(entry.bullets)
        for bullet in entry.bullets:
            if keywords.is_quantified(bullet):
                quantified_bullets += 1
            if contains_any(bullet, keywords.leadership, match):
                leadership_hits += 1
            if contains_any(bullet, keywords.technology, match):
                tech_hits += 1
        if contains_any(entry.description, keywords.leadership, match):
            leadership_hits += 1
        if contains_any(entry.description, keywords.technology, match):
            tech_hits += 1

    subtotal = (
        entry_count / 3 * 10
        + min(total_bullets, 12) / 12 * 10
        + _ratio(quantified_bullets, total_bullets) * 10
        + min(leadership_hits, 3) / 3 * 3
        + min(tech_hits, 4) / 4 * 2
    )
    return CategoryScore(
        subtotal=_capped(subtotal, CATEGORY_CAPS["experience"]),
        details={
            "entry_count": len(entries),
            "total_bullets": total_bullets,
            "quantified_bullets": quantified_bullets,
            "leadership_hits": leadership_hits,
            "tech_hits": tech_hits,
        },
    )


def score_projects(cv: StructuredCV, keywords: KeywordConfig) -> CategoryScore:
    projects = cv.project_entries

    technologies: set[str] = set()
    total_bullets = 0
    quantified_bullets = 0
    has_deployment = False
    for project in projects:
        technologies.update(t.strip().lower() for t in project.technologies if t.strip())
        total_bullets += len(project.bullets)
        quantified_bullets += sum(1 for b in project.bullets if keywords.is_quantified(b))
        if keywords.is_deployment_url(project.url):
            has_deployment = True

    tech_breadth = len(technologies)
    subtotal = (
        min(len(projects), 4) / 4 * 6
        + min(tech_breadth, 10) / 10 * 8
        + _ratio(quantified_bullets, total_bullets) * 9
        + (2 if has_deployment else 0)
    )
    return CategoryScore(
        subtotal=_capped(subtotal, CATEGORY_CAPS["projects"]),
        details={
            "project_count": len(projects),
            "tech_breadth": tech_breadth,
            "total_bullets": total_bullets,
            "quantified_bullets": quantified_bullets,
            "has_deployment": has_deployment,
        },
    )


def score_skills(
    cv: StructuredCV, keywords: KeywordConfig, match: MatchPredicate = substring_match
) -> CategoryScore:
    technical = cv.skills.technical
    programming_languages = [
        lang for lang in cv.skills.languages
        if not contains_any(lang, keywords.natural_languages, match)
    ]
    has_cert_marker = any(
        contains_any(skill, keywords.skill_cert_markers, match) for skill in technical
    )

    subtotal = (
        min(len(technical), 12) / 12 * 14
        + min(len(programming_languages), 4) / 4 * 4
        + (2 if has_cert_marker else 0)
    )
    return CategoryScore(
        subtotal=_capped(subtotal, CATEGORY_CAPS["skills"]),
        details={
            "tech_count": len(technical),
            "programming_language_count": len(programming_languages),
            "has_cert_marker": has_cert_marker,
        },
    )


def score_education(
    cv: StructuredCV, keywords: KeywordConfig, match: MatchPredicate = substring_match
) -> CategoryScore:
    if not cv.education:
        return CategoryScore(details={"has_education": False, "gpa": None, "honors": False})

    entry = cv.education[0]
    gpa = normalize_gpa(entry.gpa)
    honors = contains_any(entry.description, keywords.honors_markers, match)

    subtotal = (
        (3 if entry.degree else 0)
        + (2 if entry.field_of_study else 0)
        + (gpa / 4 * 5 if gpa is not None else 0)
        + (1 if honors else 0)
    )
    return CategoryScore(
        subtotal=_capped(subtotal, CATEGORY_CAPS["education"]),
        details={
            "has_education": True,
            "has_degree": bool(entry.degree),
            "has_field": bool(entry.field_of_study),
            "gpa": gpa,
            "honors": honors,
        },
    )


def score_certs_awards(
    cv: StructuredCV, keywords: KeywordConfig, match: MatchPredicate = substring_match
) -> CategoryScore:
    text_bag = " ".join(
        [cv.summary]
        + [e.description for e in cv.education]
        + list(cv.skills.technical)
    )
    has_cert = contains_any(text_bag, keywords.cert_markers, match)
    has_award = contains_any(text_bag, keywords.award_markers, match)
    has_extracurricular = contains_any(text_bag, keywords.extracurricular_markers, match)

    subtotal = (5 if has_cert else 0) + (3 if has_award else 0) + (2 if has_extracurricular else 0)
    return CategoryScore(
        subtotal=_capped(subtotal, CATEGORY_CAPS["certs_awards"]),
        details={
            "has_cert": has_cert,
            "has_award": has_award,
            "has_extracurricular": has_extracurricular,
        },
    )


def build_reasons(
    experience: CategoryScore,
    projects: CategoryScore,
    skills: CategoryScore,
    education: CategoryScore,
    certs_awards: CategoryScore,
) -> list[str]:
    """Signed statements derived only from the category details."""
    reasons: list[str] = []

    quantified = experience.details["quantified_bullets"]
    if quantified > 0:
        reasons.append(f"+ Quantified impact in {quantified} experience bullet(s)")
    else:
        reasons.append("- No quantified impact in experience bullets")
    if experience.details["leadership_hits"] > 0:
        reasons.append("+ Leadership indicators present")
    else:
        reasons.append("- No clear leadership indicators")

    project_metrics = projects.details["quantified_bullets"]
    if project_metrics > 0:
        reasons.append(f"+ Project metrics present in {project_metrics} bullet(s)")
    else:
        reasons.append("- Projects lack measurable outcomes")
    if projects.details["tech_breadth"] > 0:
        reasons.append(
            f"+ Uses {projects.details['tech_breadth']} distinct technologies across projects"
        )

    tech_count = skills.details["tech_count"]
    if tech_count >= STRONG_SKILL_BREADTH:
        reasons.append("+ Strong breadth of technical skills")
    elif tech_count > 0:
        reasons.append(f"+ {tech_count} technical skills listed")
    else:
        reasons.append("- No technical skills listed")

    gpa = education.details.get("gpa")
    if gpa is not None:
        reasons.append(f"+ GPA {format_gpa(gpa)}")
    else:
        reasons.append("- GPA not provided")

    if certs_awards.details["has_cert"]:
        reasons.append("+ Relevant certification(s)")
    else:
        reasons.append("- No certifications listed")
    if certs_awards.details["has_award"]:
        reasons.append("+ Awards or honors")

    return reasons


def score_cv(
    cv: StructuredCV,
    keywords: KeywordConfig | None = None,
    match: MatchPredicate = substring_match,
) -> ScoreResult:
    """Score a structured CV against the rubric."""
    keywords = keywords or get_keyword_config()

    experience = score_experience(cv, keywords, match)
    projects = score_projects(cv, keywords)
    skills = score_skills(cv, keywords, match)
    education = score_education(cv, keywords, match)
    certs_awards = score_certs_awards(cv, keywords, match)

    raw_total = (
        experience.subtotal
        + projects.subtotal
        + skills.subtotal
        + education.subtotal
        + certs_awards.subtotal
    )
    total = max(0, min(100, round(raw_total)))

    return ScoreResult(
        total=total,
        category_breakdown=CategoryBreakdown(
            experience=round(experience.subtotal, 2),
            projects=round(projects.subtotal, 2),
            skills=round(skills.subtotal, 2),
            education=round(education.subtotal, 2),
            certs_awards=round(certs_awards.subtotal, 2),
        ),
        reasons=build_reasons(experience, projects, skills, education, certs_awards),
        display_gpa=pick_display_gpa(cv.education),
        details={
            "experience": experience.details,
            "projects": projects.details,
            "skills": skills.details,
            "education": education.details,
            "certs_awards": certs_awards.details,
        },
        keywords_version=keywords.version,
    )
