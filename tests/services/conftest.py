from __future__ import annotations

import json

import pytest

from candidatematch.adapters import InMemoryEvaluationStore


def build_evaluation(
    evaluation_id: str,
    *,
    job: dict,
    resume_id: str,
    name: str,
    email: str,
    skills: list[str],
    tags: list[str],
    overall: float,
    created_at: str,
) -> dict:
    return {
        "id": evaluation_id,
        "overallScore": overall,
        "skillsScore": overall,
        "experienceScore": overall,
        "educationScore": overall,
        "culturalFitScore": overall,
        "explanation": f"{name} evaluation",
        "recommendation": "Recommended",
        "status": "COMPLETED",
        "createdAt": created_at,
        "job": job,
        "resume": {
            "id": resume_id,
            "candidateName": name,
            "candidateEmail": email,
            "parsedData": json.dumps({"candidateName": name, "skills": skills}),
            "resumeTags": [
                {"tag": {"id": f"tag-{tag}", "name": tag, "category": "PERFORMANCE"}} for tag in tags
            ],
        },
        "evaluatedBy": {"id": "user1", "name": "Jane Smith", "email": "jane@company.com"},
    }


@pytest.fixture
def evaluation_payloads() -> list[dict]:
    backend_job = {"id": "job1", "title": "Software Engineer", "department": "Engineering", "location": "San Francisco"}
    frontend_job = {"id": "job2", "title": "Frontend Developer", "department": "Engineering", "location": "Remote"}
    return [
        build_evaluation(
            "eval1",
            job=backend_job,
            resume_id="resume1",
            name="John Doe",
            email="john@example.com",
            skills=["JavaScript", "React", "Node.js", "TypeScript"],
            tags=["Top Candidate"],
            overall=0.85,
            created_at="2023-01-15T10:00:00",
        ),
        build_evaluation(
            "eval2",
            job=backend_job,
            resume_id="resume2",
            name="Jane Wilson",
            email="jane.wilson@example.com",
            skills=["Python", "Django", "PostgreSQL"],
            tags=["Good Match"],
            overall=0.65,
            created_at="2023-01-16T10:00:00",
        ),
        build_evaluation(
            "eval3",
            job=frontend_job,
            resume_id="resume3",
            name="Bob Smith",
            email="bob@example.com",
            skills=["HTML", "CSS", "Basic JavaScript"],
            tags=["Poor Fit", "Entry Level"],
            overall=0.35,
            created_at="2023-01-10T10:00:00",
        ),
    ]


@pytest.fixture
def store(evaluation_payloads: list[dict]) -> InMemoryEvaluationStore:
    return InMemoryEvaluationStore(evaluation_payloads)
