"""Education scoring."""

from __future__ import annotations

from typing import Sequence

from ...schemas import EducationEntry

NO_EDUCATION_SCORE = 0.3
BASE_SCORE = 0.3
DEGREE_WEIGHT = 0.4
FIELD_WEIGHT = 0.3
DEFAULT_REQUIRED_LEVEL = 1

# Highest level first; the first marker found wins.
DEGREE_LEVELS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (4, ("phd", "doctorate")),
    (3, ("master", "mba")),
    (2, ("bachelor",)),
    (1, ("associate",)),
)


def degree_level(degree: str) -> int | None:
    lower = degree.lower()
    for level, markers in DEGREE_LEVELS:
        if any(marker in lower for marker in markers):
            return level
    return None


def highest_degree_level(education: Sequence[EducationEntry]) -> int:
    return max((degree_level(entry.degree) or 0 for entry in education), default=0)


def required_degree_level(required_degree: str | None) -> int:
    if not required_degree:
        return DEFAULT_REQUIRED_LEVEL
    return degree_level(required_degree) or DEFAULT_REQUIRED_LEVEL


def _field_matches(entry: EducationEntry, fields: Sequence[str]) -> bool:
    degree = entry.degree.lower()
    university = entry.university.lower()
    return any(field.lower() in degree or field.lower() in university for field in fields)


def score_education(
    education: Sequence[EducationEntry],
    required_degree: str | None = None,
    preferred_fields: Sequence[str] | None = None,
) -> float:
    if not education:
        return NO_EDUCATION_SCORE

    candidate_level = highest_degree_level(education)
    required_level = required_degree_level(required_degree)

    score = BASE_SCORE
    score += min(1.0, candidate_level / required_level) * DEGREE_WEIGHT

    if preferred_fields:
        if any(_field_matches(entry, preferred_fields) for entry in education):
            score += FIELD_WEIGHT
    else:
        score += FIELD_WEIGHT

    return min(score, 1.0)
