from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class JobRequirements(BaseModel):
    """Job opening as seen by the matching engine."""

    id: str
    title: str
    description: str = ""
    requirements: str = ""
    department: str | None = None
    location: str | None = None
    salary_range: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
