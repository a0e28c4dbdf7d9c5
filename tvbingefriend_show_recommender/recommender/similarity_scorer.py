"""Score candidate shows against a user's seed shows.

Nine additive criteria make up the score. Each contributes a bounded,
non-negative amount:

    genre         25   genre overlap relative to the larger genre set
    cast          25   shared cast/crew, 15 for one match up to 25
    release_year  10   share of seeds premiering within 3 years
    rating        10   closeness to the average seed rating
    type           8   matches the most common seed type
    language       8   matches the most common seed language
    popularity     5   closeness to the average seed weight
    runtime        5   closeness to the average seed runtime
    status         4   matches the most common seed status

The raw score is the sum of the unrounded values. The display score is the
raw score rounded and capped at 100.
"""
import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence

from tvbingefriend_show_recommender.recommender.schemas import (
    CRITERIA,
    PersonRole,
    ScoredCandidate,
    ShowSnapshot,
)

logger = logging.getLogger(__name__)

GENRE_WEIGHT = 25
CAST_WEIGHT = 25
CAST_BASE_SCORE = 10
CAST_PER_MATCH_SCORE = 5
RELEASE_YEAR_WEIGHT = 10
RELEASE_YEAR_WINDOW = 3
RATING_WEIGHT = 10
RATING_DIFF_PENALTY = 2
TYPE_WEIGHT = 8
LANGUAGE_WEIGHT = 8
POPULARITY_WEIGHT = 5
POPULARITY_DIFF_DIVISOR = 20
RUNTIME_WEIGHT = 5
RUNTIME_DIFF_DIVISOR = 10
STATUS_WEIGHT = 4
MAX_DISPLAY_SCORE = 100
MAX_NAMED_PEOPLE = 2


def round_half_up(value: float) -> int:
    """Round a non-negative score to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def _average(values: Iterable[Optional[float]]) -> Optional[float]:
    """Mean of the values that are not None (zeros included), None when there are none."""
    known = [value for value in values if value is not None]
    if not known:
        return None
    return sum(known) / len(known)


def dominant_value(values: Iterable[Optional[str]]) -> Optional[str]:
    """
    Most frequent value, ties going to the value seen first.

    Args:
        values: Attribute values in seed order

    Returns:
        Dominant value (may be None when missing values dominate)
    """
    counts: dict[Optional[str], int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1

    dominant = None
    best = 0
    for value, count in counts.items():
        if count > best:
            dominant, best = value, count
    return dominant


@dataclass(frozen=True)
class SeedProfile:
    """Aggregates over the seed shows, computed once per request."""

    genre_ids: frozenset[int]
    person_ids: frozenset[int]
    premiere_years: tuple[int, ...]
    average_rating: Optional[float]
    average_weight: Optional[float]
    average_runtime: Optional[float]
    dominant_type: Optional[str]
    dominant_language: Optional[str]
    dominant_status: Optional[str]

    @classmethod
    def from_seeds(
            cls,
            seeds: Sequence[ShowSnapshot],
            seed_genre_ids: Iterable[int],
            seed_person_ids: Iterable[int]
    ) -> "SeedProfile":
        return cls(
            genre_ids=frozenset(seed_genre_ids),
            person_ids=frozenset(seed_person_ids),
            premiere_years=tuple(
                seed.premiere_year for seed in seeds if seed.premiere_year is not None
            ),
            average_rating=_average(seed.rating for seed in seeds),
            average_weight=_average(seed.weight for seed in seeds),
            average_runtime=_average(seed.runtime for seed in seeds),
            dominant_type=dominant_value(seed.type for seed in seeds),
            dominant_language=dominant_value(seed.language for seed in seeds),
            dominant_status=dominant_value(seed.status for seed in seeds),
        )


# noinspection PyMethodMayBeStatic
class SimilarityScorer:
    """Compute explained similarity scores for candidate shows."""

    def score(
            self,
            candidate: ShowSnapshot,
            seeds: Sequence[ShowSnapshot],
            seed_genre_ids: Iterable[int],
            seed_person_ids: Iterable[int]
    ) -> ScoredCandidate:
        """
        Score one candidate against the seed shows.

        Args:
            candidate: Show being scored
            seeds: The user's seed shows
            seed_genre_ids: Union of the seed genre ids
            seed_person_ids: Union of the seed person ids

        Returns:
            ScoredCandidate with raw score, display score, reasons and criteria scores
        """
        profile = SeedProfile.from_seeds(seeds, seed_genre_ids, seed_person_ids)
        return self.score_with_profile(candidate, profile)

    def score_all(
            self,
            candidates: Sequence[ShowSnapshot],
            seeds: Sequence[ShowSnapshot],
            seed_genre_ids: Iterable[int],
            seed_person_ids: Iterable[int]
    ) -> list[ScoredCandidate]:
        """Score every candidate, keeping the candidate order."""
        profile = SeedProfile.from_seeds(seeds, seed_genre_ids, seed_person_ids)
        return [self.score_with_profile(candidate, profile) for candidate in candidates]

    def score_with_profile(self, candidate: ShowSnapshot, profile: SeedProfile) -> ScoredCandidate:
        """Score one candidate against precomputed seed aggregates."""
        reasons: list[str] = []
        values: dict[str, float] = {}

        for criterion in CRITERIA:
            value, reason = getattr(self, f"_score_{criterion}")(candidate, profile)
            values[criterion] = value
            if reason:
                reasons.append(reason)

        raw_score = sum(values.values())

        return ScoredCandidate(
            show=candidate,
            raw_score=raw_score,
            display_score=min(MAX_DISPLAY_SCORE, round_half_up(raw_score)),
            reasons=tuple(reasons),
            criteria_scores={criterion: round_half_up(value) for criterion, value in values.items()},
        )

    # ===== CRITERIA =====

    def _score_genre(self, candidate: ShowSnapshot, profile: SeedProfile) -> tuple[float, Optional[str]]:
        candidate_genres = candidate.genre_ids
        matches = len(candidate_genres & profile.genre_ids)
        if matches == 0:
            return 0.0, None

        score = matches / max(len(candidate_genres), len(profile.genre_ids)) * GENRE_WEIGHT
        noun = "genres" if matches > 1 else "genre"
        return score, f"Matches {matches} {noun} with your selections"

    def _score_cast(self, candidate: ShowSnapshot, profile: SeedProfile) -> tuple[float, Optional[str]]:
        if not candidate.people:
            logger.debug(f"Show ID {candidate.id} has no people")
            return 0.0, None

        matched = _matched_people(candidate.people, profile.person_ids)
        if not matched:
            return 0.0, None

        score = min(CAST_WEIGHT, len(matched) * CAST_PER_MATCH_SCORE + CAST_BASE_SCORE)

        # Leads first; sorted() keeps credit order within each group
        featured = sorted(matched, key=lambda role: not role.main_cast)[:MAX_NAMED_PEOPLE]
        names = [role.name for role in featured]
        noun = "actors" if len(names) > 1 else "actor"
        return float(score), f"Features {noun} {' and '.join(names)}"

    def _score_release_year(self, candidate: ShowSnapshot, profile: SeedProfile) -> tuple[float, Optional[str]]:
        year = candidate.premiere_year
        if year is None or not profile.premiere_years:
            return 0.0, None

        matches = sum(
            1 for seed_year in profile.premiere_years
            if abs(seed_year - year) <= RELEASE_YEAR_WINDOW
        )
        if matches == 0:
            return 0.0, None

        ratio = matches / len(profile.premiere_years)
        reason = "Released within 3 years of shows you like" if ratio >= 0.5 else None
        return ratio * RELEASE_YEAR_WEIGHT, reason

    def _score_rating(self, candidate: ShowSnapshot, profile: SeedProfile) -> tuple[float, Optional[str]]:
        if not candidate.rating or not profile.average_rating:
            return 0.0, None

        diff = abs(candidate.rating - profile.average_rating)
        reason = "Has a similar rating to shows you like" if diff < 1 else None
        return max(0.0, RATING_WEIGHT - diff * RATING_DIFF_PENALTY), reason

    def _score_type(self, candidate: ShowSnapshot, profile: SeedProfile) -> tuple[float, Optional[str]]:
        if _matches_dominant(candidate.type, profile.dominant_type):
            return float(TYPE_WEIGHT), "Matches the type of shows you prefer"
        return 0.0, None

    def _score_language(self, candidate: ShowSnapshot, profile: SeedProfile) -> tuple[float, Optional[str]]:
        if _matches_dominant(candidate.language, profile.dominant_language):
            return float(LANGUAGE_WEIGHT), "In your preferred language"
        return 0.0, None

    def _score_popularity(self, candidate: ShowSnapshot, profile: SeedProfile) -> tuple[float, Optional[str]]:
        if not candidate.weight or not profile.average_weight:
            return 0.0, None

        diff = abs(candidate.weight - profile.average_weight)
        return max(0.0, POPULARITY_WEIGHT - diff / POPULARITY_DIFF_DIVISOR), None

    def _score_runtime(self, candidate: ShowSnapshot, profile: SeedProfile) -> tuple[float, Optional[str]]:
        if not candidate.runtime or not profile.average_runtime:
            return 0.0, None

        diff = abs(candidate.runtime - profile.average_runtime)
        return max(0.0, RUNTIME_WEIGHT - diff / RUNTIME_DIFF_DIVISOR), None

    def _score_status(self, candidate: ShowSnapshot, profile: SeedProfile) -> tuple[float, Optional[str]]:
        if _matches_dominant(candidate.status, profile.dominant_status):
            return float(STATUS_WEIGHT), None
        return 0.0, None


def _matches_dominant(value: Optional[str], dominant: Optional[str]) -> bool:
    return bool(dominant) and value == dominant


def _matched_people(people: Sequence[PersonRole], person_ids: frozenset[int]) -> list[PersonRole]:
    """
    Credits of seed people on the candidate, one per person.

    A person credited more than once counts once, as main cast when any of
    the credits is.
    """
    matched: dict[int, PersonRole] = {}
    for role in people:
        if role.person_id not in person_ids:
            continue
        first = matched.get(role.person_id)
        if first is None:
            matched[role.person_id] = role
        elif role.main_cast and not first.main_cast:
            matched[role.person_id] = replace(first, main_cast=True)
    return list(matched.values())
