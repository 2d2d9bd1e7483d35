"""Translation of filter/sort options into record store predicates."""

from __future__ import annotations

from typing import Any

from ..schemas import FilterOptions, SortOptions

# Joins requested from the store for filtering responses.
EVALUATION_INCLUDE: dict[str, Any] = {
    "job": {"select": ["id", "title", "department", "location"]},
    "resume": {
        "select": ["id", "candidate_name", "candidate_email", "phone", "parsed_data", "status"],
        "include": {"resume_tags": {"include": {"tag": True}}},
    },
    "evaluated_by": {"select": ["id", "name", "email"]},
}

FILTER_OPTIONS_INCLUDE: dict[str, Any] = {
    "job": {"select": ["department", "location"]},
    "resume": {
        "select": ["parsed_data"],
        "include": {"resume_tags": {"include": {"tag": True}}},
    },
}


def build_where(job_id: str | None, filters: FilterOptions) -> dict[str, Any]:
    where: dict[str, Any] = {}

    if job_id:
        where["job_id"] = job_id

    score_range = _range(filters.min_score, filters.max_score)
    if score_range:
        where["overall_score"] = score_range

    if filters.status:
        where["status"] = {"in": list(filters.status)}

    date_range = _range(filters.date_from, filters.date_to)
    if date_range:
        where["created_at"] = date_range

    job: dict[str, Any] = {}
    if filters.department:
        job["department"] = filters.department
    if filters.location:
        job["location"] = {"contains": filters.location, "mode": "insensitive"}
    if job:
        where["job"] = job

    resume: dict[str, Any] = {}
    if filters.skills:
        # Only the first skill is searched, as a substring of the raw blob.
        resume["parsed_data"] = {"contains": filters.skills[0]}
    tag_links: dict[str, Any] = {}
    if filters.tags:
        tag_links["some"] = {"tag": {"name": {"in": list(filters.tags)}}}
    if filters.exclude_tags:
        tag_links["none"] = {"tag": {"name": {"in": list(filters.exclude_tags)}}}
    if tag_links:
        resume["resume_tags"] = tag_links
    if resume:
        where["resume"] = resume

    return where


def build_order_by(sort: SortOptions) -> dict[str, Any]:
    if sort.field == "candidate_name":
        return {"resume": {"candidate_name": sort.direction}}
    return {sort.field: sort.direction}


def _range(lower: Any, upper: Any) -> dict[str, Any]:
    bounds: dict[str, Any] = {}
    if lower is not None:
        bounds["gte"] = lower
    if upper is not None:
        bounds["lte"] = upper
    return bounds
