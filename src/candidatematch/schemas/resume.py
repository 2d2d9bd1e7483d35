"""Structured resume data produced by the external extraction step."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ExperienceEntry(BaseModel):
    """Employment history entry."""

    title: str = ""
    company: str = ""
    duration: str = ""
    description: str | None = None
    technologies: list[str] | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )


class EducationEntry(BaseModel):
    """Education history entry."""

    degree: str = ""
    university: str = ""
    year: str = ""
    gpa: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )


class ParsedResume(BaseModel):
    """Candidate document as extracted from an uploaded resume.

    Field names accept both the snake_case form and the camelCase form used in
    the persisted ``parsedData`` blob; serialization with ``by_alias=True``
    reproduces the blob layout.
    Numbers found in text fields (``"year": 2019``) are kept as strings.
    """

    candidate_name: str = ""
    candidate_email: str = ""
    phone: str | None = None
    location: str | None = None
    summary: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    certifications: list[str] | None = None
    languages: list[str] | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    def to_blob(self) -> str:
        """Serialize into the JSON blob stored alongside a resume record."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
