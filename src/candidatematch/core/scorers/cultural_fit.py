"""Keyword-based cultural fit scoring."""

from __future__ import annotations

from ...schemas import ParsedResume

BASE_SCORE = 0.5
KEYWORD_WEIGHT = 0.5

CULTURAL_KEYWORDS: tuple[str, ...] = (
    "team",
    "collaboration",
    "leadership",
    "innovation",
    "creative",
    "problem-solving",
    "communication",
    "adaptable",
    "flexible",
    "fast-paced",
    "startup",
    "entrepreneurial",
    "remote",
    "agile",
)


def build_candidate_text(candidate: ParsedResume) -> str:
    parts = [candidate.summary or ""]
    parts.extend(entry.description or "" for entry in candidate.experience)
    return " ".join(parts).lower()


def score_cultural_fit(candidate: ParsedResume, job_description: str) -> float:
    candidate_text = build_candidate_text(candidate)
    job_text = job_description.lower()

    matches = sum(
        1
        for keyword in CULTURAL_KEYWORDS
        if keyword in candidate_text and keyword in job_text
    )
    score = BASE_SCORE + matches / len(CULTURAL_KEYWORDS) * KEYWORD_WEIGHT
    return min(score, 1.0)
