"""Score rounding and distribution helpers shared by batch and filtering."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

EXCELLENT_THRESHOLD = 0.8
GOOD_THRESHOLD = 0.6
FAIR_THRESHOLD = 0.4


@dataclass(slots=True)
class ScoreDistribution:
    """Four-bucket histogram of overall scores."""

    excellent: int = 0
    good: int = 0
    fair: int = 0
    poor: int = 0


def round_score(value: float) -> float:
    """Round half-up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


def score_distribution(scores: Iterable[float]) -> ScoreDistribution:
    distribution = ScoreDistribution()
    for score in scores:
        if score >= EXCELLENT_THRESHOLD:
            distribution.excellent += 1
        elif score >= GOOD_THRESHOLD:
            distribution.good += 1
        elif score >= FAIR_THRESHOLD:
            distribution.fair += 1
        else:
            distribution.poor += 1
    return distribution


def average_score(scores: list[float]) -> float:
    if not scores:
        return 0.0
    return round_score(sum(scores) / len(scores))
