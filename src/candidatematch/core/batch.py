"""Concurrent scoring, ranking and filtering of candidate sets."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Sequence

import structlog

from ..errors import BatchEvaluationError
from ..schemas import JobRequirements, ParsedResume
from ..stats import GOOD_THRESHOLD, ScoreDistribution, average_score, round_score, score_distribution
from .matching import EvaluationResult, ScoringWeights, evaluate_candidate

DEFAULT_MAX_CONCURRENCY = 8


@dataclass(frozen=True, slots=True)
class RankedEvaluation(EvaluationResult):
    """Evaluation tagged with the candidate's position in the submitted batch."""

    candidate_id: str = ""

    @classmethod
    def from_result(cls, candidate_id: str, result: EvaluationResult) -> "RankedEvaluation":
        values = {item.name: getattr(result, item.name) for item in fields(EvaluationResult)}
        return cls(candidate_id=candidate_id, **values)


@dataclass(frozen=True, slots=True)
class CandidateFailure:
    candidate_id: str
    candidate_name: str
    error: str


@dataclass(frozen=True, slots=True)
class BatchFilters:
    """Post-hoc filters; ``None`` or empty means the filter is not applied."""

    min_score: float | None = None
    max_score: float | None = None
    required_tags: tuple[str, ...] = ()
    exclude_tags: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "BatchFilters":
        if not values:
            return cls()

        def pick(snake: str, camel: str) -> Any:
            return values.get(snake, values.get(camel))

        return cls(
            min_score=pick("min_score", "minScore"),
            max_score=pick("max_score", "maxScore"),
            required_tags=tuple(pick("required_tags", "requiredTags") or ()),
            exclude_tags=tuple(pick("exclude_tags", "excludeTags") or ()),
        )

    def accepts(self, result: EvaluationResult) -> bool:
        overall = result.scores.overall
        if self.min_score is not None and overall < self.min_score:
            return False
        if self.max_score is not None and overall > self.max_score:
            return False
        if self.required_tags and not all(tag in result.tags for tag in self.required_tags):
            return False
        if self.exclude_tags and any(tag in result.tags for tag in self.exclude_tags):
            return False
        return True


@dataclass(slots=True)
class BatchSummary:
    total_candidates: int
    filtered_candidates: int
    average_score: float
    top_score: float
    recommended_count: int
    score_distribution: ScoreDistribution = field(default_factory=ScoreDistribution)


async def process_candidates(
    candidates: Sequence[ParsedResume],
    job: JobRequirements,
    weights: ScoringWeights | None = None,
    *,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> list[RankedEvaluation]:
    """Evaluate every candidate against ``job`` and rank by overall score.

    Evaluations run in worker threads, at most ``max_concurrency`` at a time,
    and are gathered back in submission order before the stable descending
    sort. Candidate ids are positional (``candidate_<index>``).

    If some evaluations raise, the remaining candidates are still ranked and a
    :class:`BatchEvaluationError` carrying both the failures and the ranked
    partial result is raised at the end.
    """
    logger = structlog.get_logger(__name__)
    semaphore = asyncio.Semaphore(max_concurrency)

    async def _evaluate(index: int, candidate: ParsedResume) -> RankedEvaluation:
        async with semaphore:
            result = await asyncio.to_thread(evaluate_candidate, candidate, job, weights)
        return RankedEvaluation.from_result(f"candidate_{index}", result)

    outcomes = await asyncio.gather(
        *(_evaluate(index, candidate) for index, candidate in enumerate(candidates)),
        return_exceptions=True,
    )

    ranked: list[RankedEvaluation] = []
    failures: list[CandidateFailure] = []
    for index, (candidate, outcome) in enumerate(zip(candidates, outcomes)):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            failure = CandidateFailure(
                candidate_id=f"candidate_{index}",
                candidate_name=candidate.candidate_name,
                error=str(outcome),
            )
            logger.warning(
                "batch.candidate_failed",
                job_id=job.id,
                candidate_id=failure.candidate_id,
                error=failure.error,
            )
            failures.append(failure)
            continue
        ranked.append(outcome)

    ranked.sort(key=lambda item: item.scores.overall, reverse=True)
    logger.info(
        "batch.completed",
        job_id=job.id,
        candidate_count=len(candidates),
        evaluated=len(ranked),
        failed=len(failures),
    )

    if failures:
        raise BatchEvaluationError(failures, ranked)
    return ranked


def filter_candidates(
    results: Sequence[RankedEvaluation],
    filters: BatchFilters | Mapping[str, Any] | None = None,
) -> list[RankedEvaluation]:
    if not isinstance(filters, BatchFilters):
        filters = BatchFilters.from_mapping(filters)
    return [result for result in results if filters.accepts(result)]


def summarize_batch(
    results: Sequence[EvaluationResult],
    filtered: Sequence[EvaluationResult] | None = None,
) -> BatchSummary:
    """Summarize a ranked batch; statistics describe ``filtered`` when given."""
    selected = list(results if filtered is None else filtered)
    scores = [item.scores.overall for item in selected]
    return BatchSummary(
        total_candidates=len(results),
        filtered_candidates=len(selected),
        average_score=average_score(scores),
        top_score=round_score(max(scores, default=0.0)),
        recommended_count=sum(1 for score in scores if score >= GOOD_THRESHOLD),
        score_distribution=score_distribution(scores),
    )
