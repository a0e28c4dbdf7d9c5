"""Read-only show snapshots and recommendation result types."""
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Mapping, Optional

CRITERIA = (
    "genre",
    "cast",
    "release_year",
    "rating",
    "type",
    "language",
    "popularity",
    "runtime",
    "status",
)

CAST_LIST_SIZE = 10


@dataclass(frozen=True)
class GenreRef:
    """A genre attached to a show."""

    id: int
    name: str


@dataclass(frozen=True)
class PersonRole:
    """A person's credit on a show."""

    person_id: int
    name: str
    main_cast: bool = False
    character_name: Optional[str] = None
    role_type: str = "cast"
    image_medium: Optional[str] = None


@dataclass(frozen=True)
class ShowSnapshot:
    """
    Immutable copy of a catalog show with its genres and credits.

    Everything the scorer reads lives on the snapshot, so scoring never
    goes back to the database.
    """

    id: int
    name: str
    type: Optional[str] = None
    language: Optional[str] = None
    status: Optional[str] = None
    runtime: Optional[int] = None
    premiered: Optional[date] = None
    rating: Optional[float] = None
    weight: Optional[float] = None
    genres: tuple[GenreRef, ...] = ()
    people: tuple[PersonRole, ...] = ()
    details: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def genre_ids(self) -> frozenset[int]:
        return frozenset(genre.id for genre in self.genres)

    @property
    def person_ids(self) -> frozenset[int]:
        return frozenset(role.person_id for role in self.people)

    @property
    def premiere_year(self) -> Optional[int]:
        return self.premiered.year if self.premiered else None

    def to_dict(self) -> dict[str, Any]:
        """Full attribute set of the show, with genre names and top cast."""
        data = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "language": self.language,
            "status": self.status,
            "runtime": self.runtime,
            "premiered": self.premiered,
            "rating": self.rating,
            "weight": self.weight,
        }
        data.update(self.details)
        data["genres"] = list(dict.fromkeys(genre.name for genre in self.genres))
        data["cast"] = [
            {
                "name": role.name or "Unknown",
                "character": role.character_name or "",
                "image_medium": role.image_medium,
            }
            for role in self.people[:CAST_LIST_SIZE]
        ]
        return data


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate show scored against the seed shows of one request."""

    show: ShowSnapshot
    raw_score: float
    display_score: int
    reasons: tuple[str, ...]
    criteria_scores: Mapping[str, int]


@dataclass(frozen=True)
class RecommendedShow:
    """A recommended show plus the explanation of its ranking."""

    show: ShowSnapshot
    recommendation_reasons: tuple[str, ...]
    match_score: int
    criteria_scores: Mapping[str, int]

    @classmethod
    def from_scored(cls, scored: ScoredCandidate) -> "RecommendedShow":
        return cls(
            show=scored.show,
            recommendation_reasons=scored.reasons,
            match_score=scored.display_score,
            criteria_scores=scored.criteria_scores,
        )

    def to_dict(self) -> dict[str, Any]:
        data = self.show.to_dict()
        data["recommendation_reasons"] = list(self.recommendation_reasons)
        data["match_score"] = self.match_score
        data["criteria_scores"] = dict(self.criteria_scores)
        return data
