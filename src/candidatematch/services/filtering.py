"""Filtering, sorting, pagination and summaries over stored evaluations."""

from __future__ import annotations

import asyncio
import math
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Awaitable, Literal, Sequence, TypeVar

import pendulum
import structlog
from pydantic import ValidationError

from ..adapters import EvaluationStore
from ..errors import FilteringError
from ..schemas import (
    EnrichedEvaluation,
    EnrichedResume,
    EvaluationRecord,
    FilterOptions,
    PaginationOptions,
    ParsedResume,
    SortOptions,
)
from ..stats import ScoreDistribution, average_score, round_score, score_distribution
from .query import EVALUATION_INCLUDE, FILTER_OPTIONS_INCLUDE, build_order_by, build_where

DEFAULT_TIMEOUT = 10.0
DEFAULT_SUMMARY_LIMIT = 10_000
TOP_N = 10

SummaryScope = Literal["page", "filtered"]

T = TypeVar("T")


@dataclass(slots=True)
class PaginationMeta:
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


@dataclass(slots=True)
class SkillCount:
    skill: str
    count: int


@dataclass(slots=True)
class TagCount:
    tag: str
    count: int


@dataclass(slots=True)
class FilterSummary:
    average_score: float = 0.0
    top_score: float = 0.0
    score_distribution: ScoreDistribution = field(default_factory=ScoreDistribution)
    common_skills: list[SkillCount] = field(default_factory=list)
    top_tags: list[TagCount] = field(default_factory=list)


@dataclass(slots=True)
class FilteredResult:
    evaluations: list[EnrichedEvaluation]
    pagination: PaginationMeta
    summary: FilterSummary


@dataclass(slots=True)
class ScoreRange:
    min: float = 0.0
    max: float = 1.0


@dataclass(slots=True)
class DateRange:
    min: datetime
    max: datetime


@dataclass(slots=True)
class FilterCatalog:
    """Values observed across stored evaluations, used to populate filter UIs."""

    departments: list[str]
    locations: list[str]
    skills: list[str]
    tags: list[str]
    score_range: ScoreRange
    date_range: DateRange


class CandidateFilteringService:
    """Query-style access to previously stored evaluations.

    Every store call is bounded by ``timeout`` seconds (``None`` disables the
    bound). Store failures and timeouts surface as a single
    :class:`FilteringError`. ``max_summary_records`` caps how many records a
    ``summary_scope="filtered"`` summary loads.
    """

    def __init__(
        self,
        store: EvaluationStore,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        max_summary_records: int | None = DEFAULT_SUMMARY_LIMIT,
    ) -> None:
        self._store = store
        self._timeout = timeout
        self._max_summary_records = max_summary_records or DEFAULT_SUMMARY_LIMIT
        self._logger = structlog.get_logger(__name__)

    async def filter_candidates(
        self,
        job_id: str | None = None,
        filters: FilterOptions | None = None,
        sort: SortOptions | None = None,
        pagination: PaginationOptions | None = None,
        *,
        summary_scope: SummaryScope = "page",
    ) -> FilteredResult:
        """Filter, sort and paginate stored evaluations.

        The summary describes the returned page unless ``summary_scope`` is
        ``"filtered"``. The filtered scope issues one extra query and aggregates
        the first ``max_summary_records`` matching records in sort order, so on
        larger result sets it describes that leading slice.
        """
        filters = filters or FilterOptions()
        sort = sort or SortOptions()
        pagination = pagination or PaginationOptions()

        where = build_where(job_id, filters)
        order_by = build_order_by(sort)

        try:
            records, total = await asyncio.gather(
                self._bounded(
                    self._store.find_many(
                        where,
                        include=EVALUATION_INCLUDE,
                        order_by=order_by,
                        skip=pagination.offset,
                        take=pagination.limit,
                    )
                ),
                self._bounded(self._store.count(where)),
            )
            summary_records: Sequence[EvaluationRecord] = records
            if summary_scope == "filtered":
                summary_records = await self._bounded(
                    self._store.find_many(
                        where,
                        include=EVALUATION_INCLUDE,
                        order_by=order_by,
                        take=self._max_summary_records,
                    )
                )
        except Exception as exc:  # noqa: BLE001
            self._logger.error("filtering.query_failed", operation="filter_candidates", job_id=job_id, error=repr(exc))
            raise FilteringError("Failed to filter candidates", operation="filter_candidates") from exc

        total_pages = math.ceil(total / pagination.limit)
        pagination_meta = PaginationMeta(
            total=total,
            page=pagination.page,
            limit=pagination.limit,
            total_pages=total_pages,
            has_next=pagination.page < total_pages,
            has_prev=pagination.page > 1,
        )

        evaluations = [self._enrich(record) for record in records]
        if summary_scope == "filtered":
            summary_sources = [(record, self._parse(record)) for record in summary_records]
        else:
            summary_sources = [(item, item.resume.parsed) for item in evaluations]

        return FilteredResult(
            evaluations=evaluations,
            pagination=pagination_meta,
            summary=generate_summary(summary_sources),
        )

    async def get_filter_options(self, job_id: str | None = None) -> FilterCatalog:
        where = {"job_id": job_id} if job_id else {}
        try:
            records = await self._bounded(self._store.find_many(where, include=FILTER_OPTIONS_INCLUDE))
        except Exception as exc:  # noqa: BLE001
            self._logger.error("filtering.query_failed", operation="get_filter_options", job_id=job_id, error=repr(exc))
            raise FilteringError("Failed to get filter options", operation="get_filter_options") from exc

        if not records:
            now = pendulum.now("UTC")
            return FilterCatalog(
                departments=[],
                locations=[],
                skills=[],
                tags=[],
                score_range=ScoreRange(),
                date_range=DateRange(min=now, max=now),
            )

        departments = {record.job.department for record in records if record.job and record.job.department}
        locations = {record.job.location for record in records if record.job and record.job.location}
        skills: set[str] = set()
        tags: set[str] = set()
        for record in records:
            parsed = self._parse(record)
            if parsed is not None:
                skills.update(skill.strip() for skill in parsed.skills)
            tags.update(link.tag.name for link in record.resume.resume_tags)

        scores = [record.overall_score for record in records]
        dates = [record.created_at for record in records]
        return FilterCatalog(
            departments=sorted(departments),
            locations=sorted(locations),
            skills=sorted(skills),
            tags=sorted(tags),
            score_range=ScoreRange(min=min(scores), max=max(scores)),
            date_range=DateRange(min=min(dates), max=max(dates)),
        )

    async def advanced_search(
        self,
        query: str,
        job_id: str | None = None,
        filters: FilterOptions | None = None,
        sort: SortOptions | None = None,
        pagination: PaginationOptions | None = None,
    ) -> FilteredResult:
        """Run :meth:`filter_candidates`, then keep page entries matching ``query``.

        A record matches when any whitespace-separated, lowercased term occurs
        in its candidate name, email or skills. ``total`` and ``total_pages``
        are recomputed from the matching entries of the returned page only;
        ``has_next``/``has_prev`` and the summary come from the base query.
        """
        pagination = pagination or PaginationOptions()
        terms = query.lower().split()

        try:
            result = await self.filter_candidates(job_id, filters, sort, pagination)
        except FilteringError as exc:
            raise FilteringError("Failed to perform advanced search", operation="advanced_search") from exc

        if not terms:
            return result

        matching = [item for item in result.evaluations if _matches_terms(item, terms)]
        filtered_total = len(matching)
        return replace(
            result,
            evaluations=matching,
            pagination=replace(
                result.pagination,
                total=filtered_total,
                total_pages=math.ceil(filtered_total / pagination.limit),
            ),
        )

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        if self._timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self._timeout)

    def _parse(self, record: EvaluationRecord) -> ParsedResume | None:
        try:
            return ParsedResume.model_validate_json(record.resume.parsed_data)
        except ValidationError as exc:
            self._logger.warning(
                "filtering.parsed_data_invalid",
                evaluation_id=record.id,
                resume_id=record.resume.id,
                error_count=exc.error_count(),
            )
            return None

    def _enrich(self, record: EvaluationRecord) -> EnrichedEvaluation:
        resume = EnrichedResume(
            **record.resume.model_dump(),
            parsed=self._parse(record),
            tags=[link.tag for link in record.resume.resume_tags],
        )
        return EnrichedEvaluation(**{**record.model_dump(), "resume": resume})


def generate_summary(
    sources: Sequence[tuple[EvaluationRecord, ParsedResume | None]],
) -> FilterSummary:
    """Aggregate scores, skills and tags over ``(record, parsed resume)`` pairs.

    Records whose parsed data could not be decoded still count toward the
    score statistics and tag frequencies.
    """
    if not sources:
        return FilterSummary()

    scores = [record.overall_score for record, _ in sources]

    skill_counts: Counter[str] = Counter()
    tag_counts: Counter[str] = Counter()
    for record, parsed in sources:
        if parsed is not None:
            skill_counts.update(skill.lower().strip() for skill in parsed.skills)
        tag_counts.update(link.tag.name for link in record.resume.resume_tags)

    return FilterSummary(
        average_score=average_score(scores),
        top_score=round_score(max(scores)),
        score_distribution=score_distribution(scores),
        common_skills=[SkillCount(skill=skill, count=count) for skill, count in skill_counts.most_common(TOP_N)],
        top_tags=[TagCount(tag=tag, count=count) for tag, count in tag_counts.most_common(TOP_N)],
    )


def _matches_terms(evaluation: EnrichedEvaluation, terms: Sequence[str]) -> bool:
    resume = evaluation.resume
    skills = " ".join(resume.parsed.skills) if resume.parsed else ""
    search_text = f"{resume.candidate_name} {resume.candidate_email} {skills}".lower()
    return any(term in search_text for term in terms)
