"""Skill overlap scoring."""

from __future__ import annotations

import re
from typing import Sequence

DEFAULT_SKILLS_SCORE = 0.8
PARTIAL_MATCH_CREDIT = 0.5

_TOKEN_SPLIT = re.compile(r"[\s\-_]+")


def normalize_skill(skill: str) -> str:
    return skill.lower().strip()


def skills_overlap(candidate_skill: str, required_skill: str) -> bool:
    """Bidirectional substring test on already-normalized skills."""
    return required_skill in candidate_skill or candidate_skill in required_skill


def tokens_overlap(candidate_skill: str, required_skill: str) -> bool:
    candidate_tokens = _TOKEN_SPLIT.split(candidate_skill)
    required_tokens = _TOKEN_SPLIT.split(required_skill)
    return any(
        skills_overlap(token, required_token)
        for token in candidate_tokens
        for required_token in required_tokens
    )


def score_skills(candidate_skills: Sequence[str], required_skills: Sequence[str]) -> float:
    """Score how well ``candidate_skills`` cover ``required_skills``.

    Each required skill earns a full point when it overlaps a candidate skill
    as a whole, or half a point when only a token of it does.
    """
    if not required_skills:
        return DEFAULT_SKILLS_SCORE

    candidates = [normalize_skill(skill) for skill in candidate_skills]
    required = [normalize_skill(skill) for skill in required_skills]

    full_matches = 0
    partial_matches = 0
    for required_skill in required:
        if any(skills_overlap(candidate, required_skill) for candidate in candidates):
            full_matches += 1
        elif any(tokens_overlap(candidate, required_skill) for candidate in candidates):
            partial_matches += 1

    total = full_matches + partial_matches * PARTIAL_MATCH_CREDIT
    return min(total / len(required), 1.0)


def find_missing_skills(candidate_skills: Sequence[str], required_skills: Sequence[str]) -> list[str]:
    """Return required skills that no candidate skill overlaps, in input order."""
    candidates = [skill.lower() for skill in candidate_skills]
    return [
        required
        for required in required_skills
        if not any(skills_overlap(candidate, required.lower()) for candidate in candidates)
    ]
