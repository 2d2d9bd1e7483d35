"""Typer CLI entrypoint for ranking and searching candidates."""

from __future__ import annotations

import asyncio
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, List, Optional

import typer
import yaml

from .adapters import InMemoryEvaluationStore
from .container import create_container
from .logging import configure_logging
from .pipeline import AuditLogger, json_default
from .schemas import FilterOptions, PaginationOptions, SortOptions
from .schemas.config import load_config

app = typer.Typer(help="Candidate ranking and evaluation search CLI.")


def _load_settings(config: Optional[Path]) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise typer.BadParameter("Config file must be a YAML object", param_name="config")
    return load_config(loaded).to_settings()


@app.command()
def rank(
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Parsed resumes JSONL path."),
    job: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Job requirements JSON path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Score and rank every candidate against one job."""
    settings = _load_settings(config)
    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None

    results = pipeline.run(
        candidates_path=candidates,
        job_path=job,
        output_path=output,
        audit_logger=audit_logger,
    )
    typer.echo(f"Ranked {len(results)} candidates. Results saved to {output}.")


@app.command()
def search(
    evaluations: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Stored evaluations JSON path."),
    query: str = typer.Option("", help="Free-text terms matched against name, email and skills."),
    job_id: Optional[str] = typer.Option(None, help="Restrict to one job."),
    min_score: Optional[float] = typer.Option(None, help="Minimum overall score."),
    max_score: Optional[float] = typer.Option(None, help="Maximum overall score."),
    tag: List[str] = typer.Option([], help="Require at least one of these tags."),
    exclude_tag: List[str] = typer.Option([], help="Exclude records carrying any of these tags."),
    status: List[str] = typer.Option([], help="Evaluation status to include."),
    department: Optional[str] = typer.Option(None, help="Job department (exact)."),
    location: Optional[str] = typer.Option(None, help="Job location (substring)."),
    skill: List[str] = typer.Option([], help="Skill searched in parsed resume data."),
    sort_field: str = typer.Option("overall_score", help="Sort field."),
    direction: str = typer.Option("desc", help="Sort direction (asc/desc)."),
    page: int = typer.Option(1, min=1, help="Page number."),
    limit: int = typer.Option(10, min=1, help="Page size."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Filter stored evaluations and print one page as JSON."""
    settings = _load_settings(config)
    configure_logging(log_level)

    try:
        store = InMemoryEvaluationStore.from_json(evaluations)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_name="evaluations") from exc

    filters = FilterOptions(
        min_score=min_score,
        max_score=max_score,
        tags=tag,
        exclude_tags=exclude_tag,
        status=status,
        department=department,
        location=location,
        skills=skill,
    )
    try:
        sort = SortOptions(field=sort_field, direction=direction)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_name="sort_field") from exc
    pagination = PaginationOptions(page=page, limit=limit)

    service = create_container(settings=settings, store=store).filtering_service()
    if query.strip():
        result = asyncio.run(service.advanced_search(query, job_id, filters, sort, pagination))
    else:
        result = asyncio.run(service.filter_candidates(job_id, filters, sort, pagination))

    typer.echo(json.dumps(asdict(result), ensure_ascii=False, indent=2, default=json_default))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
