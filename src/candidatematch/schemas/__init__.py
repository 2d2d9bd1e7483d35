"""Pydantic schema definitions shared by the matching engine and services."""

from __future__ import annotations

from .job import JobRequirements
from .query import FilterOptions, PaginationOptions, SortOptions
from .records import (
    EnrichedEvaluation,
    EnrichedResume,
    EvaluationRecord,
    EvaluatorRef,
    JobSummary,
    ResumeRecord,
    ResumeTagLink,
    TagRecord,
)
from .resume import EducationEntry, ExperienceEntry, ParsedResume

__all__ = [
    "ParsedResume",
    "ExperienceEntry",
    "EducationEntry",
    "JobRequirements",
    "FilterOptions",
    "SortOptions",
    "PaginationOptions",
    "EvaluationRecord",
    "EnrichedEvaluation",
    "EnrichedResume",
    "ResumeRecord",
    "ResumeTagLink",
    "TagRecord",
    "JobSummary",
    "EvaluatorRef",
]
