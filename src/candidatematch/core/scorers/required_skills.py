"""Required skill extraction from job text."""

from __future__ import annotations

import re

COMMON_SKILLS: tuple[str, ...] = (
    "javascript", "typescript", "python", "java", "c++", "c#", "php", "ruby",
    "react", "vue", "angular", "node.js", "express", "django", "flask",
    "sql", "mysql", "postgresql", "mongodb", "redis",
    "aws", "azure", "gcp", "docker", "kubernetes",
    "git", "github", "gitlab", "jira", "confluence",
    "html", "css", "sass", "scss", "tailwind",
    "rest", "api", "graphql", "microservices",
    "agile", "scrum", "kanban", "devops", "ci/cd",
)

MIN_TOKEN_LENGTH = 3

_REQUIREMENT_SPLIT = re.compile(r"[\s,.\-]+")
_NON_WORD = re.compile(r"[^A-Za-z0-9_]")


def extract_required_skills(description: str, requirements: str) -> list[str]:
    """Collect vocabulary hits from both texts plus every requirement token.

    Requirement tokens over-generate on purpose; substring scoring absorbs
    the noise. The result is deduplicated.
    """
    text = f"{description} {requirements}".lower()
    found = [skill for skill in COMMON_SKILLS if skill in text]

    for word in _REQUIREMENT_SPLIT.split(requirements):
        if len(word) < MIN_TOKEN_LENGTH:
            continue
        token = _NON_WORD.sub("", word)
        if token:
            found.append(token)

    return list(dict.fromkeys(found))
