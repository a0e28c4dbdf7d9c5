"""Repository for reading the show catalog."""

import logging
from types import MappingProxyType
from typing import Iterable

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from tvbingefriend_show_recommender.exceptions import CatalogUnavailableError
from tvbingefriend_show_recommender.models import Genre, Person, Show, ShowPerson
from tvbingefriend_show_recommender.recommender.schemas import GenreRef, PersonRole, ShowSnapshot

logger = logging.getLogger(__name__)

SNAPSHOT_FIELDS = (
    "id",
    "name",
    "type",
    "language",
    "status",
    "runtime",
    "premiered",
    "rating",
    "weight",
)

DETAIL_FIELDS = tuple(
    column.name for column in Show.__table__.columns if column.name not in SNAPSHOT_FIELDS
)


def build_candidate_filters(genre_ids: Iterable[int], person_ids: Iterable[int]) -> list:
    """
    Build the "shares a genre or a person" predicates for candidate shows.

    Args:
        genre_ids: Genre ids a candidate may share (empty = no genre clause)
        person_ids: Person ids a candidate may share (empty = no person clause)

    Returns:
        List of clauses to be OR-ed together (empty when both sets are empty)
    """
    genre_ids = list(genre_ids)
    person_ids = list(person_ids)

    filters = []
    if genre_ids:
        filters.append(Show.genres.any(Genre.id.in_(genre_ids)))
    if person_ids:
        filters.append(Show.roles.any(ShowPerson.person_id.in_(person_ids)))
    return filters


def to_snapshot(show: Show) -> ShowSnapshot:
    """Copy a loaded Show and its genres and credits into a ShowSnapshot."""
    return ShowSnapshot(
        id=show.id,
        name=show.name,
        type=show.type,
        language=show.language,
        status=show.status,
        runtime=show.runtime,
        premiered=show.premiered,
        rating=show.rating,
        weight=show.weight,
        genres=tuple(GenreRef(id=genre.id, name=genre.name) for genre in show.genres),
        people=tuple(
            PersonRole(
                person_id=role.person_id,
                name=role.person.name,
                main_cast=bool(role.main_cast),
                character_name=role.character_name,
                role_type=role.type,
                image_medium=role.person.image_medium,
            )
            for role in show.roles
        ),
        details=MappingProxyType({field: getattr(show, field) for field in DETAIL_FIELDS}),
    )


class CatalogRepository:
    """
    Repository for reading the show catalog.

    Shows come back as ShowSnapshot objects with genres and credits already
    loaded, so callers never trigger further queries.
    """

    def __init__(self, db: Session):
        self.db = db

    def _shows_with_relations(self):
        return self.db.query(Show).options(
            selectinload(Show.genres),
            selectinload(Show.roles).joinedload(ShowPerson.person),
        )

    def fetch_shows_by_ids(self, show_ids: Iterable[int]) -> list[ShowSnapshot]:
        """
        Get shows by ID.

        Args:
            show_ids: Show IDs, in the order the results should follow

        Returns:
            ShowSnapshot list; unknown IDs are skipped
        """
        ids = list(dict.fromkeys(show_ids))
        if not ids:
            return []

        try:
            shows = self._shows_with_relations().filter(Show.id.in_(ids)).all()
            by_id = {show.id: to_snapshot(show) for show in shows}
        except SQLAlchemyError as e:
            raise CatalogUnavailableError(f"Failed to fetch shows {ids}") from e

        return [by_id[show_id] for show_id in ids if show_id in by_id]

    def fetch_candidates(
            self,
            exclude_ids: Iterable[int],
            genre_ids: Iterable[int],
            person_ids: Iterable[int],
            pool_size: int
    ) -> list[ShowSnapshot]:
        """
        Get shows sharing at least one genre or one person with the given sets.

        Args:
            exclude_ids: Show IDs never to return
            genre_ids: Genre IDs to match
            person_ids: Person IDs to match
            pool_size: Maximum number of shows to return

        Returns:
            ShowSnapshot list ordered by descending weight, then ID
        """
        filters = build_candidate_filters(genre_ids, person_ids)
        if not filters:
            return []

        exclude_ids = list(exclude_ids)

        try:
            query = self._shows_with_relations().filter(or_(*filters))
            if exclude_ids:
                query = query.filter(Show.id.not_in(exclude_ids))

            # Unweighted shows last, ID breaks ties
            query = (
                query
                .order_by(Show.weight.is_(None), Show.weight.desc(), Show.id)
                .limit(pool_size)
            )
            return [to_snapshot(show) for show in query.all()]
        except SQLAlchemyError as e:
            raise CatalogUnavailableError("Failed to fetch candidate shows") from e

    def store_show(self, show_data: dict) -> Show:
        """
        Store or update a show with its genres and credits.

        Args:
            show_data: Dict with show columns plus optional keys:
                - genres: list of genre names
                - people: list of dicts with person columns and the credit
                  keys main_cast, character_name and type

        Returns:
            Show object
        """
        show_data = dict(show_data)
        genre_names = show_data.pop("genres", None) or []
        people_data = show_data.pop("people", None) or []

        show = None
        if show_data.get("id") is not None:
            show = self.db.query(Show).filter(Show.id == show_data["id"]).first()

        if show:
            for key, value in show_data.items():
                setattr(show, key, value)
            show.roles.clear()
        else:
            show = Show(**show_data)
            self.db.add(show)

        show.genres = [self._get_or_create_genre(name) for name in dict.fromkeys(genre_names)]

        for person_data in people_data:
            person_data = dict(person_data)
            main_cast = bool(person_data.pop("main_cast", False))
            character_name = person_data.pop("character_name", None)
            role_type = person_data.pop("type", "cast")
            show.roles.append(
                ShowPerson(
                    person=self._get_or_create_person(person_data),
                    main_cast=main_cast,
                    character_name=character_name,
                    type=role_type,
                )
            )

        self.db.commit()
        self.db.refresh(show)

        return show

    def _get_or_create_genre(self, name: str) -> Genre:
        genre = self.db.query(Genre).filter(Genre.name == name).first()
        if genre is None:
            genre = Genre(name=name)
            self.db.add(genre)
            self.db.flush()
        return genre

    def _get_or_create_person(self, person_data: dict) -> Person:
        person = None
        if person_data.get("id") is not None:
            person = self.db.query(Person).filter(Person.id == person_data["id"]).first()
        if person is None:
            person = Person(**person_data)
            self.db.add(person)
            self.db.flush()
        return person

    def count_shows(self) -> int:
        """Count total catalog shows."""
        return self.db.query(Show).count()
