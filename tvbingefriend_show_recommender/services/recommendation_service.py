"""Service for seed-based TV show recommendations."""
import logging
from typing import Callable, List, Optional, Sequence

from sqlalchemy.orm import Session

from tvbingefriend_show_recommender.config import get_candidate_pool_size
from tvbingefriend_show_recommender.exceptions import InvalidInputError
from tvbingefriend_show_recommender.models.database import SessionLocal
from tvbingefriend_show_recommender.recommender import (
    CandidateSelector,
    RecommendedShow,
    ShowCatalog,
    SimilarityScorer,
    rank,
)
from tvbingefriend_show_recommender.repos import CatalogRepository

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_request(seed_ids, limit, offset) -> List[int]:
    """
    Check recommendation arguments before touching the catalog.

    Args:
        seed_ids: List or tuple of show IDs
        limit: Page size, must be positive
        offset: Number of results to skip, must not be negative

    Returns:
        Seed IDs as a list

    Raises:
        InvalidInputError: If any argument is malformed
    """
    if not isinstance(seed_ids, (list, tuple)):
        raise InvalidInputError("seed_ids must be a list of show IDs")
    if not all(_is_int(show_id) for show_id in seed_ids):
        raise InvalidInputError("seed_ids must contain only integers")
    if not _is_int(limit) or limit < 1:
        raise InvalidInputError("limit must be a positive integer")
    if not _is_int(offset) or offset < 0:
        raise InvalidInputError("offset must be a non-negative integer")
    return list(seed_ids)


class RecommendationService:
    """
    Service for seed-based TV show recommendations.
    Scores catalog shows against the user's seed shows on every request.
    """

    def __init__(
            self,
            session_factory: Optional[Callable[[], Session]] = None,
            scorer: Optional[SimilarityScorer] = None,
            candidate_pool_size: Optional[int] = None
    ):
        """
        Initialize the recommendation service.

        Args:
            session_factory: Callable returning a database session (default: SessionLocal)
            scorer: Similarity scorer (default: SimilarityScorer())
            candidate_pool_size: Maximum candidates scored per request (default from config)
        """
        self.session_factory = session_factory or SessionLocal
        self.candidate_pool_size = candidate_pool_size or get_candidate_pool_size()
        self.selector = CandidateSelector(pool_size=self.candidate_pool_size)
        self.scorer = scorer or SimilarityScorer()

        logger.info(f"Initialized RecommendationService (candidate pool: {self.candidate_pool_size})")

    def get_recommendations(
            self,
            seed_ids: Sequence[int],
            limit: int = 10,
            offset: int = 0
    ) -> List[RecommendedShow]:
        """
        Get recommendations for a set of seed shows.

        Args:
            seed_ids: IDs of shows the user likes
            limit: Number of recommendations
            offset: Number of top recommendations to skip

        Returns:
            List of RecommendedShow objects, best match first

        Raises:
            InvalidInputError: If the arguments are malformed
            CatalogUnavailableError: If the catalog cannot be queried
        """
        seed_ids = validate_request(seed_ids, limit, offset)
        if not seed_ids:
            return []

        db = self.session_factory()
        try:
            catalog = CatalogRepository(db)
            return self.recommend_from_catalog(catalog, seed_ids, limit, offset)
        finally:
            db.close()

    def recommend_from_catalog(
            self,
            catalog: ShowCatalog,
            seed_ids: Sequence[int],
            limit: int,
            offset: int
    ) -> List[RecommendedShow]:
        """Run selection, scoring and ranking against an open catalog."""
        seeds = catalog.fetch_shows_by_ids(seed_ids)
        if not seeds:
            logger.info(f"No catalog shows found for seeds {list(seed_ids)}")
            return []

        candidates = self.selector.select(catalog, seeds)
        if not candidates:
            logger.info(f"No candidate shows for seeds {list(seed_ids)}")
            return []

        genre_ids, person_ids = self.selector.derive_seed_sets(seeds)
        scored = self.scorer.score_all(candidates, seeds, genre_ids, person_ids)
        recommendations = rank(scored, limit=limit, offset=offset)

        logger.info(
            f"✓ Scored {len(scored)} candidates for {len(seeds)} seeds, "
            f"returning {len(recommendations)}"
        )
        return recommendations
