"""Structured CV record as supplied by the CV builder and the candidate store.

Parsing is deliberately lenient: a missing, null or wrongly typed
sub-structure becomes an empty collection or an empty string so that the
scorer and matcher never fail on a sparse CV.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def as_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def as_text_list(value: Any) -> list[str]:
    return [as_text(v) for v in as_list(value)]


def as_dict_list(value: Any) -> list[dict]:
    return [item for item in as_list(value) if isinstance(item, dict)]


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ExperienceEntry(_Lenient):
    company: str = ""
    position: str = ""
    description: str = ""
    bullets: list[str] = []
    start_date: str = Field("", alias="startDate")
    end_date: str = Field("", alias="endDate")
    current: bool = False

    @field_validator("company", "position", "description", "start_date", "end_date", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return as_text(v)

    @field_validator("bullets", mode="before")
    @classmethod
    def _bullets(cls, v: Any) -> list[str]:
        return as_text_list(v)

    @field_validator("current", mode="before")
    @classmethod
    def _current(cls, v: Any) -> bool:
        return v if isinstance(v, bool) else False


class ProjectEntry(_Lenient):
    name: str = ""
    description: str = ""
    technologies: list[str] = []
    url: str = ""
    bullets: list[str] = []

    @field_validator("name", "description", "url", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return as_text(v)

    @field_validator("technologies", "bullets", mode="before")
    @classmethod
    def _lists(cls, v: Any) -> list[str]:
        return as_text_list(v)


class SkillSet(_Lenient):
    technical: list[str] = []
    languages: list[str] = []
    soft: list[str] = []

    @field_validator("technical", "languages", "soft", mode="before")
    @classmethod
    def _lists(cls, v: Any) -> list[str]:
        return as_text_list(v)


class EducationEntry(_Lenient):
    degree: str = ""
    field_of_study: str = Field("", alias="fieldOfStudy")
    institution: str = ""
    gpa: Any = None  # raw value, unknown scale
    description: str = ""
    graduation_year: Any = Field(None, alias="graduationYear")
    end_date: str = Field("", alias="endDate")

    @field_validator("degree", "field_of_study", "institution", "description", "end_date", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return as_text(v)


class StructuredCV(_Lenient):
    experience: list[ExperienceEntry] = Field(
        [], validation_alias=AliasChoices("experienceEntries", "experience")
    )
    projects: list[ProjectEntry] = Field(
        [], validation_alias=AliasChoices("projectEntries", "projects")
    )
    # Builder format: one list, each item tagged with type "experience" or "project"
    experience_projects: list[dict] = Field([], alias="experienceProjects")
    skills: SkillSet = SkillSet()
    languages: list[str] = []
    education: list[EducationEntry] = []
    summary: str = ""

    @field_validator("experience", "projects", "experience_projects", "education", mode="before")
    @classmethod
    def _entries(cls, v: Any) -> list[dict]:
        return as_dict_list(v)

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, v: Any) -> dict:
        return v if isinstance(v, dict) else {}

    @field_validator("languages", mode="before")
    @classmethod
    def _languages(cls, v: Any) -> list[str]:
        return as_text_list(v)

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, v: Any) -> str:
        return as_text(v)

    @property
    def experience_entries(self) -> list[ExperienceEntry]:
        tagged = [
            ExperienceEntry.model_validate(item)
            for item in self.experience_projects
            if item.get("type") == "experience"
        ]
        return tagged + list(self.experience)

    @property
    def project_entries(self) -> list[ProjectEntry]:
        tagged = [
            ProjectEntry.model_validate(item)
            for item in self.experience_projects
            if item.get("type") == "project"
        ]
        return tagged + list(self.projects)

    @property
    def all_languages(self) -> list[str]:
        return list(self.skills.languages) + list(self.languages)
