"""Query-style options accepted by the filtering service."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .records import to_utc

SortField = Literal[
    "overall_score",
    "skills_score",
    "experience_score",
    "education_score",
    "created_at",
    "candidate_name",
]
SortDirection = Literal["asc", "desc"]


class FilterOptions(BaseModel):
    """Optional predicates applied to stored evaluations."""

    min_score: float | None = None
    max_score: float | None = None
    # Experience bounds are accepted but not translated into the store query.
    min_experience: float | None = None
    max_experience: float | None = None
    skills: list[str] = Field(default_factory=list)
    education: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    exclude_tags: list[str] = Field(default_factory=list)
    department: str | None = None
    location: str | None = None
    status: list[str] = Field(default_factory=list)
    date_from: datetime | None = None
    date_to: datetime | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    normalize_dates = field_validator("date_from", "date_to")(to_utc)


class SortOptions(BaseModel):
    field: SortField = "overall_score"
    direction: SortDirection = "desc"

    model_config = ConfigDict(extra="forbid")


class PaginationOptions(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    model_config = ConfigDict(extra="forbid")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
