"""Rank scored candidates and cut out the requested page."""
from typing import Sequence

from tvbingefriend_show_recommender.recommender.schemas import RecommendedShow, ScoredCandidate


def rank(scored: Sequence[ScoredCandidate], limit: int, offset: int = 0) -> list[RecommendedShow]:
    """
    Sort candidates by raw score and return one page of recommendations.

    The sort is stable, so equal scores keep the popularity order the
    candidates were fetched in.

    Args:
        scored: Scored candidates in candidate-pool order
        limit: Maximum number of results
        offset: Number of top results to skip

    Returns:
        List of RecommendedShow views, best first
    """
    ranked = sorted(scored, key=lambda candidate: candidate.raw_score, reverse=True)
    return [RecommendedShow.from_scored(candidate) for candidate in ranked[offset:offset + limit]]
