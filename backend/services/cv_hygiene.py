"""Non-fabricating clean-up of a raw CV payload.

Only trims and de-duplicates what the candidate wrote; nothing is added.
Unknown fields pass through untouched.
"""

import copy
from typing import Any

BULLET_SECTIONS = ("experienceProjects", "experience", "experienceEntries", "projects", "projectEntries")
SKILL_GROUPS = ("technical", "languages", "soft")


def _clean_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _clean_bullets(bullets: list) -> list[str]:
    cleaned = (_clean_text(b) for b in bullets)
    return [b for b in cleaned if b]


def _dedupe(values: list) -> list[str]:
    """Trim, drop empties, keep first occurrence order."""
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        text = _clean_text(value)
        if text and text not in seen:
            seen.add(text)
            out.append(text)
    return out


def improve_cv(cv: dict[str, Any]) -> dict[str, Any]:
    """Return a cleaned deep copy of ``cv``; the input is never mutated."""
    out = copy.deepcopy(cv) if isinstance(cv, dict) else {}

    for section in BULLET_SECTIONS:
        items = out.get(section)
        if not isinstance(items, list):
            continue
        for item in items:
            if isinstance(item, dict) and isinstance(item.get("bullets"), list):
                item["bullets"] = _clean_bullets(item["bullets"])

    skills = out.get("skills")
    if isinstance(skills, dict):
        for group in SKILL_GROUPS:
            if isinstance(skills.get(group), list):
                skills[group] = _dedupe(skills[group])

    return out
