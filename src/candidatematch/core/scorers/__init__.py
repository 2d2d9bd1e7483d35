"""Sub-score functions used by the matching engine."""

from .cultural_fit import CULTURAL_KEYWORDS, score_cultural_fit
from .education import degree_level, score_education
from .experience import estimate_total_years, score_experience
from .required_skills import COMMON_SKILLS, extract_required_skills
from .skills import find_missing_skills, score_skills

__all__ = [
    "score_skills",
    "find_missing_skills",
    "score_experience",
    "estimate_total_years",
    "score_education",
    "degree_level",
    "score_cultural_fit",
    "extract_required_skills",
    "CULTURAL_KEYWORDS",
    "COMMON_SKILLS",
]
