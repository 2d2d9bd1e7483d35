"""Services operating on stored evaluations."""

from .filtering import (
    CandidateFilteringService,
    DateRange,
    FilterCatalog,
    FilteredResult,
    FilterSummary,
    PaginationMeta,
    ScoreRange,
    SkillCount,
    TagCount,
    generate_summary,
)
from .query import build_order_by, build_where

__all__ = [
    "CandidateFilteringService",
    "FilteredResult",
    "FilterSummary",
    "FilterCatalog",
    "PaginationMeta",
    "SkillCount",
    "TagCount",
    "ScoreRange",
    "DateRange",
    "generate_summary",
    "build_where",
    "build_order_by",
]
