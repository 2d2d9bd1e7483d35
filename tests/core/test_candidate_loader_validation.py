from __future__ import annotations

import json
from pathlib import Path

import pytest

from candidatematch.pipeline import CandidateLoadError, CandidateLoader, JobLoader


def test_candidate_loader_raises_on_invalid_json(tmp_path: Path):
    loader = CandidateLoader()
    path = tmp_path / "candidates.jsonl"
    path.write_text('{"candidateName": "Jane"}\n{invalid}', encoding="utf-8")

    with pytest.raises(CandidateLoadError) as exc:
        loader.load(path)
    assert "invalid JSON" in str(exc.value)
    assert [candidate.candidate_name for candidate in exc.value.partial] == ["Jane"]


def test_candidate_loader_skips_invalid_and_reports(tmp_path: Path):
    loader = CandidateLoader()
    path = tmp_path / "candidates.jsonl"
    valid_payload = {
        "candidateName": "Jane Smith",
        "candidateEmail": "jane@example.com",
        "skills": ["Python"],
        "experience": [{"title": "Backend Developer", "company": "DataCorp", "duration": "3 years"}],
    }
    invalid_payload = {"candidateName": "Broken", "skills": "Python"}
    path.write_text(
        json.dumps(valid_payload, ensure_ascii=False)
        + "\n\n"
        + json.dumps(invalid_payload, ensure_ascii=False)
        + "\n"
        + json.dumps(["not", "an", "object"]),
        encoding="utf-8",
    )

    with pytest.raises(CandidateLoadError) as exc:
        loader.load(path)
    error = exc.value
    assert error.errors[0].startswith("line 3: 1 validation error")
    assert error.errors[1] == "line 4: expected a JSON object"
    assert len(error.partial) == 1
    assert error.partial[0].experience[0].duration == "3 years"


def test_candidate_loader_accepts_snake_case_keys(tmp_path: Path):
    path = tmp_path / "candidates.jsonl"
    path.write_text(json.dumps({"candidate_name": "Bob", "skills": ["Java"]}), encoding="utf-8")

    candidates = CandidateLoader().load(path)

    assert candidates[0].candidate_name == "Bob"


def test_job_loader_invalid_json(tmp_path: Path):
    job_loader = JobLoader()
    path = tmp_path / "job.json"
    path.write_text("{invalid", encoding="utf-8")

    with pytest.raises(ValueError):
        job_loader.load(path)


def test_job_loader_reads_camel_case(tmp_path: Path):
    path = tmp_path / "job.json"
    path.write_text(
        json.dumps({"id": "job-1", "title": "Developer", "salaryRange": "100k-120k"}),
        encoding="utf-8",
    )

    job = JobLoader().load(path)

    assert job.salary_range == "100k-120k"
    assert job.requirements == ""
