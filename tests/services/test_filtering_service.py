from __future__ import annotations

import asyncio
import json
from datetime import datetime

import pytest

from candidatematch.adapters import InMemoryEvaluationStore
from candidatematch.errors import FilteringError
from candidatematch.schemas import FilterOptions, PaginationOptions, ParsedResume, SortOptions
from candidatematch.services import CandidateFilteringService
from candidatematch.stats import ScoreDistribution


class FailingStore:
    async def find_many(self, where, *, include=None, order_by=None, skip=0, take=None):
        raise RuntimeError("database unavailable")

    async def count(self, where):
        raise RuntimeError("database unavailable")


class SlowStore:
    async def find_many(self, where, *, include=None, order_by=None, skip=0, take=None):
        await asyncio.sleep(1)
        return []

    async def count(self, where):
        await asyncio.sleep(1)
        return 0


def run_filter(store, job_id=None, filters=None, sort=None, pagination=None, **kwargs):
    service = CandidateFilteringService(store)
    return asyncio.run(service.filter_candidates(job_id, filters, sort, pagination, **kwargs))


def ids(result) -> list[str]:
    return [evaluation.id for evaluation in result.evaluations]


def test_filter_candidates_summary_scenario(store):
    result = run_filter(store)

    assert ids(result) == ["eval1", "eval2", "eval3"]
    assert result.summary.average_score == pytest.approx(0.62)
    assert result.summary.top_score == pytest.approx(0.85)
    assert result.summary.score_distribution == ScoreDistribution(excellent=1, good=1, fair=0, poor=1)
    assert [item.skill for item in result.summary.common_skills][:3] == ["javascript", "react", "node.js"]
    assert len(result.summary.common_skills) == 10
    assert [item.tag for item in result.summary.top_tags] == ["Top Candidate", "Good Match", "Poor Fit", "Entry Level"]


def test_filter_candidates_enriches_records(store):
    result = run_filter(store)
    first = result.evaluations[0]

    assert first.job_id == "job1"
    assert first.resume_id == "resume1"
    assert first.resume.parsed is not None
    assert first.resume.parsed.skills == ["JavaScript", "React", "Node.js", "TypeScript"]
    assert [tag.name for tag in first.resume.tags] == ["Top Candidate"]
    assert first.evaluated_by is not None and first.evaluated_by.name == "Jane Smith"


@pytest.mark.parametrize(
    ("job_id", "filters", "expected"),
    [
        ("job1", FilterOptions(), ["eval1", "eval2"]),
        (None, FilterOptions(min_score=0.5), ["eval1", "eval2"]),
        (None, FilterOptions(max_score=0.65), ["eval2", "eval3"]),
        (None, FilterOptions(tags=["Top Candidate"]), ["eval1"]),
        (None, FilterOptions(exclude_tags=["Entry Level"]), ["eval1", "eval2"]),
        (None, FilterOptions(department="Engineering"), ["eval1", "eval2", "eval3"]),
        (None, FilterOptions(location="remote"), ["eval3"]),
        (None, FilterOptions(skills=["Python"]), ["eval2"]),
        (None, FilterOptions(status=["COMPLETED"]), ["eval1", "eval2", "eval3"]),
        (None, FilterOptions(status=["PENDING"]), []),
        (None, FilterOptions(date_from=datetime(2023, 1, 14)), ["eval1", "eval2"]),
        (None, FilterOptions(date_to=datetime(2023, 1, 15, 12)), ["eval1", "eval3"]),
    ],
)
def test_filter_candidates_applies_filters(store, job_id, filters, expected):
    result = run_filter(store, job_id, filters)

    assert ids(result) == expected
    assert result.pagination.total == len(expected)


def test_filter_candidates_no_matches_has_empty_summary(store):
    result = run_filter(store, filters=FilterOptions(min_score=0.99))

    assert result.evaluations == []
    assert result.pagination.total == 0
    assert result.pagination.total_pages == 0
    assert result.pagination.has_next is False
    assert result.summary.average_score == 0.0
    assert result.summary.common_skills == []


def test_filter_candidates_sorting(store):
    by_name = run_filter(store, sort=SortOptions(field="candidate_name", direction="asc"))
    by_date = run_filter(store, sort=SortOptions(field="created_at", direction="desc"))
    ascending = run_filter(store, sort=SortOptions(direction="asc"))

    assert ids(by_name) == ["eval3", "eval2", "eval1"]
    assert ids(by_date) == ["eval2", "eval1", "eval3"]
    assert ids(ascending) == ["eval3", "eval2", "eval1"]


def test_filter_candidates_pagination(store):
    first = run_filter(store, pagination=PaginationOptions(page=1, limit=2))
    second = run_filter(store, pagination=PaginationOptions(page=2, limit=2))

    assert ids(first) == ["eval1", "eval2"]
    assert first.pagination.total == 3
    assert first.pagination.total_pages == 2
    assert first.pagination.has_next is True
    assert first.pagination.has_prev is False

    assert ids(second) == ["eval3"]
    assert second.pagination.has_next is False
    assert second.pagination.has_prev is True


def test_summary_is_page_scoped_by_default(store):
    second = run_filter(store, pagination=PaginationOptions(page=2, limit=2))

    assert second.summary.average_score == pytest.approx(0.35)
    assert second.summary.top_score == pytest.approx(0.35)


def test_summary_can_cover_all_filtered_records(store):
    second = run_filter(store, pagination=PaginationOptions(page=2, limit=2), summary_scope="filtered")

    assert ids(second) == ["eval3"]
    assert second.summary.average_score == pytest.approx(0.62)
    assert second.summary.score_distribution == ScoreDistribution(excellent=1, good=1, fair=0, poor=1)


def test_invalid_parsed_data_is_recoverable(evaluation_payloads):
    broken = dict(evaluation_payloads[0])
    broken["id"] = "eval4"
    broken["overallScore"] = 0.5
    broken["resume"] = {
        "id": "resume4",
        "candidateName": "Broken Blob",
        "parsedData": "not-json",
        "resumeTags": [{"tag": {"name": "Flagged"}}],
    }
    store = InMemoryEvaluationStore([*evaluation_payloads, broken])

    result = run_filter(store)

    assert len(result.evaluations) == 4
    broken_view = next(item for item in result.evaluations if item.id == "eval4")
    assert broken_view.resume.parsed is None
    assert "Flagged" in [item.tag for item in result.summary.top_tags]
    assert len(result.summary.common_skills) == 10
    assert result.summary.average_score == pytest.approx(0.59)


def test_parsed_data_round_trip_feeds_summary():
    resume = ParsedResume(candidate_name="Ada", skills=["Rust", " Go ", "Python"])
    store = InMemoryEvaluationStore(
        [
            {
                "id": "eval-ada",
                "overallScore": 0.7,
                "createdAt": "2024-03-01T09:00:00",
                "resume": {"id": "resume-ada", "candidateName": "Ada", "parsedData": resume.to_blob()},
            }
        ]
    )

    result = run_filter(store)

    assert result.evaluations[0].resume.parsed == resume
    assert [item.skill for item in result.summary.common_skills] == ["rust", "go", "python"]


def test_store_failure_is_wrapped():
    with pytest.raises(FilteringError) as excinfo:
        run_filter(FailingStore())

    assert str(excinfo.value) == "Failed to filter candidates"
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert excinfo.value.to_dict()["operation"] == "filter_candidates"


def test_store_timeout_is_wrapped():
    service = CandidateFilteringService(SlowStore(), timeout=0.01)

    with pytest.raises(FilteringError) as excinfo:
        asyncio.run(service.filter_candidates())

    assert isinstance(excinfo.value.__cause__, asyncio.TimeoutError)


def test_parsed_data_blob_is_valid_json_with_camel_case_keys():
    resume = ParsedResume(candidate_name="Ada", candidate_email="ada@example.com")

    blob = json.loads(resume.to_blob())

    assert blob["candidateName"] == "Ada"
    assert blob["candidateEmail"] == "ada@example.com"
    assert "phone" not in blob


def test_numeric_education_fields_do_not_drop_skills(evaluation_payloads):
    payload = dict(evaluation_payloads[1])
    payload["resume"] = {
        **payload["resume"],
        "parsedData": (
            '{"skills": ["Python"], "education": '
            '[{"degree": "BS", "university": "U", "year": 2019, "gpa": 3.8}]}'
        ),
    }

    result = run_filter(InMemoryEvaluationStore([payload]))

    assert result.evaluations[0].resume.parsed is not None
    assert result.evaluations[0].resume.parsed.education[0].year == "2019"
    assert [item.skill for item in result.summary.common_skills] == ["python"]


def test_naive_date_filter_against_aware_records(evaluation_payloads):
    records = [
        dict(evaluation_payloads[0], createdAt="2023-01-15T10:00:00Z"),
        dict(evaluation_payloads[1], createdAt="2023-01-16T09:00:00+02:00"),
        evaluation_payloads[2],
    ]
    store = InMemoryEvaluationStore(records)

    after = run_filter(store, filters=FilterOptions(date_from=datetime(2023, 1, 14)))
    before = run_filter(store, filters=FilterOptions(date_to=datetime(2023, 1, 16, 8)))

    assert ids(after) == ["eval1", "eval2"]
    assert ids(before) == ["eval1", "eval2", "eval3"]


def test_filtered_summary_is_capped(store):
    service = CandidateFilteringService(store, max_summary_records=2)

    result = asyncio.run(
        service.filter_candidates(
            pagination=PaginationOptions(page=2, limit=2),
            summary_scope="filtered",
        )
    )

    assert ids(result) == ["eval3"]
    assert result.pagination.total == 3
    assert result.summary.average_score == pytest.approx(0.75)
    assert result.summary.top_score == pytest.approx(0.85)
