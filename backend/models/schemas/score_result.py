"""Rubric scorer output."""

from typing import Any

from pydantic import BaseModel, ConfigDict

# Category caps sum to 100
CATEGORY_CAPS: dict[str, int] = {
    "experience": 35,
    "projects": 25,
    "skills": 20,
    "education": 10,
    "certs_awards": 10,
}


class CategoryScore(BaseModel):
    """Subtotal for one rubric category plus the signals it was derived from."""

    model_config = ConfigDict(frozen=True)

    subtotal: float = 0.0
    details: dict[str, Any] = {}


class CategoryBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    experience: float = 0.0
    projects: float = 0.0
    skills: float = 0.0
    education: float = 0.0
    certs_awards: float = 0.0


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int = 0  # 0-100
    category_breakdown: CategoryBreakdown = CategoryBreakdown()
    reasons: list[str] = []
    display_gpa: str = "N/A"
    details: dict[str, dict[str, Any]] = {}
    keywords_version: str = ""
