"""Candidate record as held by the CV store."""

import json
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from models.schemas.cv import StructuredCV, as_text


class CandidateRecord(BaseModel):
    """Identity and contact metadata plus the structured CV.

    Identity fields stay local: only the CV-derived data and the id are ever
    sent to the AI ranking service.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    candidate_id: str = Field(validation_alias=AliasChoices("candidateId", "studentId", "id"))
    full_name: str = Field("", validation_alias=AliasChoices("fullName", "full_name", "name"))
    email: str = ""
    phone: str = ""
    field_of_study: str = Field("", validation_alias=AliasChoices("fieldOfStudy", "field_of_study"))
    area_of_interest: str = Field("", validation_alias=AliasChoices("areaOfInterest", "area_of_interest"))
    suggested_vacancies: str = Field(
        "", validation_alias=AliasChoices("suggestedVacancies", "suggested_vacancies")
    )
    cv: StructuredCV = Field(StructuredCV(), validation_alias=AliasChoices("cv", "cvData", "cv_data"))

    @field_validator("candidate_id", mode="before")
    @classmethod
    def _id(cls, v: Any) -> str:
        return str(v)

    @field_validator(
        "full_name", "email", "phone", "field_of_study", "area_of_interest",
        "suggested_vacancies", mode="before",
    )
    @classmethod
    def _text(cls, v: Any) -> str:
        return as_text(v)

    @field_validator("cv", mode="before")
    @classmethod
    def _cv(cls, v: Any) -> Any:
        # Stores may hand back the CV column as a JSON string
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except json.JSONDecodeError:
                return {}
        return v if isinstance(v, (dict, StructuredCV)) else {}
