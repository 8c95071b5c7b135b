"""Pydantic contracts shared by the scorer, matcher and ranking pipeline."""

from models.schemas.candidate import CandidateRecord
from models.schemas.cv import (
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    SkillSet,
    StructuredCV,
)
from models.schemas.score_result import CategoryBreakdown, CategoryScore, ScoreResult

__all__ = [
    "CandidateRecord",
    "CategoryBreakdown",
    "CategoryScore",
    "EducationEntry",
    "ExperienceEntry",
    "ProjectEntry",
    "ScoreResult",
    "SkillSet",
    "StructuredCV",
]
