"""Persisted evaluation records as returned by the record store."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pendulum
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .resume import ParsedResume

_RECORD_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def to_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""
    if value is None:
        return None
    return pendulum.instance(value, tz="UTC").in_timezone("UTC")


class TagRecord(BaseModel):
    id: str = ""
    name: str
    category: str | None = None
    color: str | None = None

    model_config = _RECORD_CONFIG


class ResumeTagLink(BaseModel):
    """Association row between a resume and a tag."""

    tag: TagRecord

    model_config = _RECORD_CONFIG


class JobSummary(BaseModel):
    id: str = ""
    title: str = ""
    department: str | None = None
    location: str | None = None

    model_config = _RECORD_CONFIG


class EvaluatorRef(BaseModel):
    id: str = ""
    name: str | None = None
    email: str | None = None

    model_config = _RECORD_CONFIG


class ResumeRecord(BaseModel):
    """Stored resume with its serialized ``parsed_data`` blob."""

    id: str = ""
    candidate_name: str = ""
    candidate_email: str = ""
    phone: str | None = None
    parsed_data: str = "{}"
    status: str | None = None
    resume_tags: list[ResumeTagLink] = Field(default_factory=list)

    model_config = _RECORD_CONFIG


class EvaluationRecord(BaseModel):
    """Stored evaluation joined to its job and resume."""

    id: str
    job_id: str | None = None
    resume_id: str | None = None
    overall_score: float
    skills_score: float = 0.0
    experience_score: float = 0.0
    education_score: float = 0.0
    cultural_fit_score: float | None = None
    explanation: str = ""
    recommendation: str = ""
    status: str = "COMPLETED"
    created_at: datetime
    job: JobSummary | None = None
    resume: ResumeRecord
    evaluated_by: EvaluatorRef | None = None

    model_config = _RECORD_CONFIG

    normalize_created_at = field_validator("created_at")(to_utc)

    @model_validator(mode="before")
    @classmethod
    def _fill_foreign_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        job = data.get("job")
        resume = data.get("resume")
        if not (data.get("job_id") or data.get("jobId")) and isinstance(job, dict) and job.get("id"):
            data["job_id"] = job["id"]
        if not (data.get("resume_id") or data.get("resumeId")) and isinstance(resume, dict) and resume.get("id"):
            data["resume_id"] = resume["id"]
        return data


class EnrichedResume(ResumeRecord):
    """Resume view with the blob decoded and tag links flattened."""

    parsed: ParsedResume | None = None
    tags: list[TagRecord] = Field(default_factory=list)


class EnrichedEvaluation(EvaluationRecord):
    resume: EnrichedResume
