"""Work experience scoring."""

from __future__ import annotations

import re
from typing import Sequence

from ...schemas import ExperienceEntry

NO_EXPERIENCE_SCORE = 0.2
BASE_SCORE = 0.5
YEARS_WEIGHT = 0.3
ROLES_WEIGHT = 0.2
DEFAULT_REFERENCE_YEARS = 5
UNPARSED_DURATION_YEARS = 1

_FIRST_INTEGER = re.compile(r"(\d+)")


def estimate_years(duration: str) -> int:
    """Take the first integer in a free-text duration, or one year if none."""
    match = _FIRST_INTEGER.search(duration or "")
    if match is None:
        return UNPARSED_DURATION_YEARS
    return int(match.group(1))


def estimate_total_years(experience: Sequence[ExperienceEntry]) -> int:
    return sum(estimate_years(entry.duration) for entry in experience)


def _title_matches(title: str, roles: Sequence[str]) -> bool:
    title_lower = title.lower()
    return any(
        role.lower() in title_lower or title_lower in role.lower()
        for role in roles
    )


def score_experience(
    experience: Sequence[ExperienceEntry],
    required_years: float | None = None,
    required_roles: Sequence[str] | None = None,
) -> float:
    if not experience:
        return NO_EXPERIENCE_SCORE

    total_years = estimate_total_years(experience)
    reference_years = required_years if required_years else DEFAULT_REFERENCE_YEARS

    score = BASE_SCORE
    score += min(1.0, total_years / reference_years) * YEARS_WEIGHT

    if required_roles:
        relevant = sum(1 for entry in experience if _title_matches(entry.title, required_roles))
        score += relevant / len(experience) * ROLES_WEIGHT
    else:
        score += ROLES_WEIGHT

    return min(score, 1.0)
