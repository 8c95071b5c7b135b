from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ScoreRequest(BaseModel):
    """Body of POST /score. ``form`` is the legacy name for ``cv``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    cv: dict[str, Any] | None = None
    form: dict[str, Any] | None = None
    target_role: str | None = Field(None, alias="targetRole")

    def cv_payload(self) -> dict[str, Any]:
        if self.cv is not None:
            return self.cv
        return self.form or {}


class RoleSpec(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    title: str = Field(..., min_length=1, max_length=200)
    must_have_skills: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("mustHaveSkills", "must"),
        serialization_alias="mustHaveSkills",
    )
    nice_to_have_skills: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("niceToHaveSkills", "nice"),
        serialization_alias="niceToHaveSkills",
    )
    min_years: float = Field(
        0,
        ge=0,
        validation_alias=AliasChoices("minYears", "min_years"),
        serialization_alias="minYears",
    )
    language: str | None = None
    location: str | None = None


class RankFilters(BaseModel):
    """Pool filters passed through to the candidate store."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    field_of_study: str | None = Field(None, alias="fieldOfStudy")
    area_of_interest: str | None = Field(None, alias="areaOfInterest")
    graduation_year: int | None = Field(None, alias="graduationYear")
    min_gpa: float | None = Field(None, alias="minGPA")
    language: Literal["en", "ar", "both"] | None = None


class RankRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    role: RoleSpec
    top_k: int = Field(10, ge=1, le=50, alias="topK")
    filters: RankFilters | None = None
