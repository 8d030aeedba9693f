"""
Skill Matching Service

PURPOSE:
Score how well a job fits a seeker (recommendations) and how well a
talent fits an employer's open roles (talent browsing).

HOW IT WORKS:
Both scores are plain skill-id overlap, expressed as a 0-100 integer.
- Job recommendation: overlap / max(|seeker skills|, |job skills|)
- Talent browsing:    overlap / |employer skills|
"""

import math
from typing import Iterable, List, Set


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def matching_skill_ids(a: Iterable[int], b: Iterable[int]) -> Set[int]:
    return set(a) & set(b)


def job_match_score(seeker_skill_ids: Iterable[int], job_skill_ids: Iterable[int]) -> int:
    """
    Score a job for a seeker.

    Returns 0 when the seeker has no skills.
    """
    seeker = set(seeker_skill_ids)
    job = set(job_skill_ids)
    if not seeker:
        return 0
    denominator = max(len(seeker), len(job))
    return _round_half_up(len(seeker & job) / denominator * 100)


def talent_match_score(talent_skill_ids: Iterable[int], employer_skill_ids: Iterable[int]) -> int:
    """Percentage of the employer's required skills the talent has."""
    employer = set(employer_skill_ids)
    if not employer:
        return 0
    return _round_half_up(len(set(talent_skill_ids) & employer) / len(employer) * 100)


def rank_by_score(items: List[dict], score_key: str = "matchScore", date_key: str = "createdAt") -> List[dict]:
    """Sort by score (highest first), then newest first."""
    return sorted(items, key=lambda item: (item[score_key], item[date_key]), reverse=True)
