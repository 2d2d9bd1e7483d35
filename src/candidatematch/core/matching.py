"""Per-candidate, per-job evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..schemas import JobRequirements, ParsedResume
from ..stats import round_score
from .scorers import (
    extract_required_skills,
    find_missing_skills,
    score_cultural_fit,
    score_education,
    score_experience,
    score_skills,
)

STRONG_THRESHOLD = 0.7
MODERATE_THRESHOLD = 0.5
WEAK_THRESHOLD = 0.5

RECOMMENDATIONS: tuple[tuple[float, str], ...] = (
    (0.8, "Highly Recommended - Excellent candidate with strong alignment across all areas."),
    (0.6, "Recommended - Good candidate with minor gaps that can be addressed."),
    (0.4, "Consider with Caution - Moderate fit, requires careful evaluation of gaps."),
)
NOT_RECOMMENDED = "Not Recommended - Poor fit for current requirements."

OVERALL_TAGS: tuple[tuple[float, str], ...] = (
    (0.8, "Top Candidate"),
    (0.6, "Good Match"),
    (0.4, "Potential"),
)
POOR_FIT_TAG = "Poor Fit"


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    """Relative weight of each sub-score in the overall score."""

    skills: float = 0.4
    experience: float = 0.3
    education: float = 0.2
    cultural_fit: float = 0.1

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "ScoringWeights":
        if not values:
            return cls()
        defaults = cls()
        cultural_fit = values.get("cultural_fit", values.get("culturalFit", defaults.cultural_fit))
        return cls(
            skills=float(values.get("skills", defaults.skills)),
            experience=float(values.get("experience", defaults.experience)),
            education=float(values.get("education", defaults.education)),
            cultural_fit=float(cultural_fit),
        )


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True, slots=True)
class MatchingScore:
    overall: float
    skills: float
    experience: float
    education: float
    cultural_fit: float | None = None


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Scores plus the narrative produced for one candidate/job pair."""

    scores: MatchingScore
    explanation: str
    recommendation: str
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    missing_skills: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


def evaluate_candidate(
    candidate: ParsedResume,
    job: JobRequirements,
    weights: ScoringWeights | None = None,
) -> EvaluationResult:
    weights = weights or DEFAULT_WEIGHTS
    required_skills = extract_required_skills(job.description, job.requirements)

    skills = score_skills(candidate.skills, required_skills)
    experience = score_experience(candidate.experience)
    education = score_education(candidate.education)
    cultural_fit = score_cultural_fit(candidate, job.description)

    overall = (
        skills * weights.skills
        + experience * weights.experience
        + education * weights.education
        + cultural_fit * weights.cultural_fit
    )
    scores = MatchingScore(
        overall=round_score(overall),
        skills=round_score(skills),
        experience=round_score(experience),
        education=round_score(education),
        cultural_fit=round_score(cultural_fit),
    )

    return EvaluationResult(
        scores=scores,
        explanation=build_explanation(scores, candidate, job),
        recommendation=recommend(scores.overall),
        strengths=identify_strengths(scores, candidate),
        weaknesses=identify_weaknesses(scores),
        missing_skills=find_missing_skills(candidate.skills, required_skills),
        tags=generate_tags(scores, job),
    )


def build_explanation(scores: MatchingScore, candidate: ParsedResume, job: JobRequirements) -> str:
    parts = [
        f"{candidate.candidate_name} scored {scores.overall * 100:.0f}% overall "
        f"for the {job.title} position."
    ]

    if scores.skills > STRONG_THRESHOLD:
        parts.append("Strong technical skills alignment with job requirements.")
    elif scores.skills > MODERATE_THRESHOLD:
        parts.append("Moderate skills match with some gaps to address.")
    else:
        parts.append("Limited skills alignment - significant training may be required.")

    if scores.experience > STRONG_THRESHOLD:
        parts.append("Excellent relevant experience for this role.")
    elif scores.experience > MODERATE_THRESHOLD:
        parts.append("Good experience level with room for growth.")
    else:
        parts.append("Limited relevant experience - may be suitable for junior role.")

    if scores.education > STRONG_THRESHOLD:
        parts.append("Educational background strongly supports role requirements.")

    return " ".join(parts)


def recommend(overall: float) -> str:
    for threshold, text in RECOMMENDATIONS:
        if overall >= threshold:
            return text
    return NOT_RECOMMENDED


def identify_strengths(scores: MatchingScore, candidate: ParsedResume) -> list[str]:
    strengths: list[str] = []
    if scores.skills > STRONG_THRESHOLD:
        strengths.append("Strong technical skills")
    if scores.experience > STRONG_THRESHOLD:
        strengths.append("Relevant work experience")
    if scores.education > STRONG_THRESHOLD:
        strengths.append("Appropriate educational background")
    if scores.cultural_fit is not None and scores.cultural_fit > STRONG_THRESHOLD:
        strengths.append("Good cultural fit")
    if candidate.certifications:
        strengths.append("Professional certifications")
    if candidate.languages and len(candidate.languages) > 1:
        strengths.append("Multilingual abilities")
    return strengths


def identify_weaknesses(scores: MatchingScore) -> list[str]:
    weaknesses: list[str] = []
    if scores.skills < WEAK_THRESHOLD:
        weaknesses.append("Limited technical skills match")
    if scores.experience < WEAK_THRESHOLD:
        weaknesses.append("Insufficient relevant experience")
    if scores.education < WEAK_THRESHOLD:
        weaknesses.append("Educational background concerns")
    if scores.cultural_fit is not None and scores.cultural_fit < WEAK_THRESHOLD:
        weaknesses.append("Cultural fit concerns")
    return weaknesses


def generate_tags(scores: MatchingScore, job: JobRequirements) -> list[str]:
    tags = [next((tag for threshold, tag in OVERALL_TAGS if scores.overall >= threshold), POOR_FIT_TAG)]

    if scores.skills >= 0.8:
        tags.append("Skills Expert")
    elif scores.skills < 0.4:
        tags.append("Skills Gap")

    if scores.experience >= 0.8:
        tags.append("Experienced")
    elif scores.experience < 0.4:
        tags.append("Entry Level")

    if job.department:
        tags.append(job.department)

    return tags
