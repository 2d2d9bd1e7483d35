from __future__ import annotations

import pytest

from candidatematch.core.scorers import find_missing_skills, score_skills


def test_score_skills_defaults_when_nothing_required():
    assert score_skills(["JavaScript", "React"], []) == 0.8
    assert score_skills([], []) == 0.8


def test_score_skills_exact_matches():
    score = score_skills(["JavaScript", "React", "Node.js"], ["JavaScript", "React", "Node.js"])

    assert score > 0.9


def test_score_skills_is_case_insensitive():
    score = score_skills(["javascript", "REACT", "Node.JS"], ["JavaScript", "React", "Node.js"])

    assert score == pytest.approx(1.0)


def test_score_skills_lower_for_partial_coverage():
    score = score_skills(["JavaScript", "Vue.js", "Python"], ["JavaScript", "React", "Node.js"])

    assert 0.2 < score < 0.7
    assert score == pytest.approx(1 / 3)


def test_score_skills_substring_counts_as_full_match():
    # "reactjs" contains "react"; "nodejs" and "node.js" share no token.
    score = score_skills(["ReactJS", "NodeJS"], ["React", "Node.js"])

    assert score == pytest.approx(0.5)


def test_score_skills_token_overlap_counts_half():
    score = score_skills(["machine learning"], ["deep-learning"])

    assert score == pytest.approx(0.5)


def test_score_skills_handles_special_characters_and_long_lists():
    assert score_skills(["C++", "C#", ".NET", "Node.js"], ["C++", "C#", ".NET"]) > 0.9
    long_list = [f"skill{i}" for i in range(100)]
    assert score_skills(long_list, ["skill1", "skill2", "skill3"]) > 0.9


def test_score_skills_zero_without_overlap():
    assert score_skills([], ["Terraform", "Kubernetes"]) == 0.0


def test_find_missing_skills_preserves_required_spelling():
    missing = find_missing_skills(["Python", "ReactJS"], ["React", "Docker", "python", "AWS"])

    assert missing == ["Docker", "AWS"]
