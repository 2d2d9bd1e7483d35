"""Matching engine and batch processor."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .batch import (
    BatchFilters,
    BatchSummary,
    CandidateFailure,
    RankedEvaluation,
    filter_candidates,
    process_candidates,
    summarize_batch,
)
from .matching import (
    DEFAULT_WEIGHTS,
    EvaluationResult,
    MatchingScore,
    ScoringWeights,
    evaluate_candidate,
)

__all__ = [
    "ScoringWeights",
    "DEFAULT_WEIGHTS",
    "MatchingScore",
    "EvaluationResult",
    "evaluate_candidate",
    "RankedEvaluation",
    "CandidateFailure",
    "BatchFilters",
    "BatchSummary",
    "process_candidates",
    "filter_candidates",
    "summarize_batch",
]
