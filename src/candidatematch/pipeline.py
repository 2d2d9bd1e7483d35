"""File-driven ranking: load candidates and a job, rank, filter, persist."""

from __future__ import annotations

import asyncio
import json
from dataclasses import asdict, is_dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator

import pendulum
import structlog
from pydantic import BaseModel, ValidationError

from . import __version__
from .core import (
    BatchFilters,
    RankedEvaluation,
    ScoringWeights,
    filter_candidates,
    process_candidates,
    summarize_batch,
)
from .core.batch import DEFAULT_MAX_CONCURRENCY
from .errors import BatchEvaluationError, CandidateLoadError
from .schemas import JobRequirements, ParsedResume

_NOT_AN_OBJECT = frozenset({"model_type", "model_attributes_type", "dict_type"})


def _numbered_lines(path: Path) -> Iterator[tuple[int, str]]:
    with path.open("r", encoding="utf-8") as handle:
        for number, line in enumerate(handle, start=1):
            stripped = line.strip()
            if stripped:
                yield number, stripped


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    if first["type"] == "json_invalid":
        return f"invalid JSON ({first['msg']})"
    if first["type"] in _NOT_AN_OBJECT and not first["loc"]:
        return "expected a JSON object"
    return f"{exc.error_count()} validation error(s)"


class CandidateLoader:
    """Read one parsed resume per line of a JSON Lines file."""

    def load(self, path: Path) -> list[ParsedResume]:
        loaded: list[ParsedResume] = []
        rejected: list[str] = []
        for number, raw in _numbered_lines(path):
            try:
                loaded.append(ParsedResume.model_validate_json(raw))
            except ValidationError as exc:
                rejected.append(f"line {number}: {_describe(exc)}")
        if rejected:
            raise CandidateLoadError(rejected, loaded)
        return loaded


class JobLoader:
    def load(self, path: Path) -> JobRequirements:
        try:
            return JobRequirements.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as exc:
            raise ValueError(f"Invalid job document {path.name}: {_describe(exc)}") from exc


class OutputWriter:
    """Write the ranking report as indented JSON, creating parent folders."""

    def write(self, path: Path, report: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(report, ensure_ascii=False, indent=2, default=json_default),
            encoding="utf-8",
        )


class AuditLogger:
    """JSON Lines trail with one entry per ranked candidate."""

    def __init__(self, path: Path):
        self._path = path
        path.parent.mkdir(parents=True, exist_ok=True)

    def record(self, job: JobRequirements, rank: int, candidate: ParsedResume, result: RankedEvaluation) -> None:
        entry = {
            "recorded_at": pendulum.now(),
            "job_id": job.id,
            "candidate_id": result.candidate_id,
            "candidate_name": candidate.candidate_name,
            "rank": rank,
            "scores": asdict(result.scores),
            "recommendation": result.recommendation,
            "tags": result.tags,
        }
        with self._path.open("a", encoding="utf-8") as stream:
            stream.write(json.dumps(entry, ensure_ascii=False, default=json_default) + "\n")


class RankingPipeline:
    """Rank a candidate file against one job and write a report."""

    def __init__(
        self,
        *,
        weights: ScoringWeights | None = None,
        filters: BatchFilters | None = None,
        max_concurrency: int | None = None,
        candidate_loader: CandidateLoader | None = None,
        job_loader: JobLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._weights = weights or ScoringWeights()
        self._filters = filters or BatchFilters()
        self._max_concurrency = max_concurrency or DEFAULT_MAX_CONCURRENCY
        self._candidate_loader = candidate_loader or CandidateLoader()
        self._job_loader = job_loader or JobLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        candidates_path: Path,
        job_path: Path,
        output_path: Path,
        audit_logger: AuditLogger | None = None,
    ) -> list[dict]:
        """Rank, filter and write ``{metadata, summary, results}`` to ``output_path``.

        Invalid candidate lines and failed evaluations are reported in
        ``metadata.errors``; the remaining candidates are still ranked.
        """
        job = self._job_loader.load(job_path)
        problems: list[str] = []
        try:
            candidates = self._candidate_loader.load(candidates_path)
        except CandidateLoadError as exc:
            self._logger.warning("candidates.partial_load", job_id=job.id, rejected=exc.errors)
            problems.extend(exc.errors)
            candidates = exc.partial

        ranked = self.rank(candidates, job, errors=problems)
        shortlisted = filter_candidates(ranked, self._filters)
        by_id = {f"candidate_{index}": candidate for index, candidate in enumerate(candidates)}

        entries: list[dict] = []
        for rank, result in enumerate(shortlisted, start=1):
            candidate = by_id[result.candidate_id]
            entries.append(
                {
                    "rank": rank,
                    "candidate_name": candidate.candidate_name,
                    "candidate_email": candidate.candidate_email,
                    **asdict(result),
                }
            )
            if audit_logger is not None:
                audit_logger.record(job, rank, candidate, result)
            self._logger.info(
                "ranking.result",
                job_id=job.id,
                candidate_id=result.candidate_id,
                rank=rank,
                overall=result.scores.overall,
                tags=result.tags,
            )

        report = {
            "metadata": {
                "job_id": job.id,
                "job_title": job.title,
                "candidate_count": len(candidates),
                "errors": problems,
                "generated_at": pendulum.now(),
                "app_version": __version__,
            },
            "summary": asdict(summarize_batch(ranked, shortlisted)),
            "results": entries,
        }
        self._writer.write(output_path, report)
        return entries

    def rank(
        self,
        candidates: list[ParsedResume],
        job: JobRequirements,
        *,
        errors: list[str] | None = None,
    ) -> list[RankedEvaluation]:
        """Score ``candidates`` synchronously, keeping partial results on failure."""
        try:
            return asyncio.run(
                process_candidates(candidates, job, self._weights, max_concurrency=self._max_concurrency)
            )
        except BatchEvaluationError as exc:
            self._logger.warning(
                "batch.partial",
                job_id=job.id,
                failed=[failure.candidate_id for failure in exc.failures],
            )
            if errors is not None:
                errors.extend(f"{failure.candidate_id}: {failure.error}" for failure in exc.failures)
            return exc.partial


def json_default(value: Any) -> Any:
    """``json.dumps`` hook for datetimes, pydantic models and dataclasses."""
    if isinstance(value, datetime):
        return pendulum.instance(value).to_iso8601_string()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    raise TypeError(f"{type(value).__name__} values cannot be written as JSON")
