"""Select candidate shows that share genres or people with the seed shows."""
import logging
from typing import Iterable, Protocol, Sequence

from tvbingefriend_show_recommender.config import CANDIDATE_POOL_SIZE
from tvbingefriend_show_recommender.recommender.schemas import ShowSnapshot

logger = logging.getLogger(__name__)


class ShowCatalog(Protocol):
    """Read-only queries the recommender needs from the show catalog."""

    def fetch_shows_by_ids(self, show_ids: Iterable[int]) -> list[ShowSnapshot]:
        ...

    def fetch_candidates(
            self,
            exclude_ids: Iterable[int],
            genre_ids: Iterable[int],
            person_ids: Iterable[int],
            pool_size: int
    ) -> list[ShowSnapshot]:
        ...


class CandidateSelector:
    """Query the catalog for shows related to the seed shows."""

    def __init__(self, pool_size: int = CANDIDATE_POOL_SIZE):
        """
        Initialize candidate selector.

        Args:
            pool_size: Maximum number of candidates fetched per request
        """
        if pool_size < 1:
            raise ValueError("pool_size must be a positive integer")
        self.pool_size = pool_size

    @staticmethod
    def derive_seed_sets(seeds: Sequence[ShowSnapshot]) -> tuple[list[int], list[int]]:
        """
        Collect the genre ids and person ids of the seed shows.

        Args:
            seeds: Seed shows

        Returns:
            (genre_ids, person_ids) tuple, each deduplicated in first-seen order
        """
        genre_ids = dict.fromkeys(genre.id for seed in seeds for genre in seed.genres)
        person_ids = dict.fromkeys(role.person_id for seed in seeds for role in seed.people)
        return list(genre_ids), list(person_ids)

    def select(self, catalog: ShowCatalog, seeds: Sequence[ShowSnapshot]) -> list[ShowSnapshot]:
        """
        Fetch candidate shows for the given seeds.

        Args:
            catalog: Show catalog to query
            seeds: Seed shows

        Returns:
            Candidates ordered by descending popularity, at most pool_size of them
        """
        if not seeds:
            return []

        genre_ids, person_ids = self.derive_seed_sets(seeds)
        if not genre_ids and not person_ids:
            logger.info("Seed shows have no genres or people, skipping candidate query")
            return []

        candidates = catalog.fetch_candidates(
            exclude_ids=[seed.id for seed in seeds],
            genre_ids=genre_ids,
            person_ids=person_ids,
            pool_size=self.pool_size
        )

        logger.debug(
            f"Selected {len(candidates)} candidates from {len(genre_ids)} genres "
            f"and {len(person_ids)} people"
        )
        return candidates
