"""Unit tests for the show catalog models."""
from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from tvbingefriend_show_recommender.models import Genre, Person, Show, ShowPerson


class TestShow:
    """Tests for Show model."""

    def test_create_show(self, test_db_session):
        """Test creating a show with its columns."""
        # Arrange
        show = Show(
            id=1,
            name='Breaking Bad',
            type='Scripted',
            language='English',
            status='Ended',
            runtime=60,
            premiered=date(2008, 1, 20),
            rating=9.2,
            weight=98,
            schedule_days=['Sunday'],
            summary='<p>A chemist turns to crime.</p>',
        )

        # Act
        test_db_session.add(show)
        test_db_session.commit()

        # Assert
        stored = test_db_session.get(Show, 1)
        assert stored.name == 'Breaking Bad'
        assert stored.premiered == date(2008, 1, 20)
        assert stored.schedule_days == ['Sunday']
        assert stored.genres == []
        assert stored.roles == []

    def test_name_is_required(self, test_db_session):
        """Test that name cannot be null."""
        test_db_session.add(Show(id=1))

        with pytest.raises(IntegrityError):
            test_db_session.commit()

    def test_show_repr(self):
        """Test Show string representation."""
        assert repr(Show(id=1, name='Test Show')) == "<Show(id=1, name='Test Show')>"


class TestGenre:
    """Tests for Genre model."""

    def test_genres_are_ordered_by_id(self, test_db_session):
        """Test the genre relationship ordering."""
        # Arrange
        drama = Genre(id=1, name='Drama')
        crime = Genre(id=2, name='Crime')
        show = Show(id=1, name='Show', genres=[crime, drama])

        # Act
        test_db_session.add(show)
        test_db_session.commit()
        test_db_session.expire_all()

        # Assert
        stored = test_db_session.get(Show, 1)
        assert [genre.name for genre in stored.genres] == ['Drama', 'Crime']
        assert [s.id for s in test_db_session.get(Genre, 2).shows] == [1]

    def test_genre_name_is_unique(self, test_db_session):
        """Test that genre names are unique."""
        test_db_session.add_all([Genre(name='Drama'), Genre(name='Drama')])

        with pytest.raises(IntegrityError):
            test_db_session.commit()

    def test_genre_repr(self):
        """Test Genre string representation."""
        assert repr(Genre(id=3, name='Comedy')) == "<Genre(id=3, name='Comedy')>"


class TestShowPerson:
    """Tests for Person and ShowPerson models."""

    def test_credit_links_show_and_person(self, test_db_session):
        """Test creating a credit."""
        # Arrange
        person = Person(id=1, name='Bryan Cranston', image_medium='http://img/1.jpg')
        show = Show(id=1, name='Breaking Bad')
        show.roles.append(ShowPerson(person=person, character_name='Walter White', main_cast=True))

        # Act
        test_db_session.add(show)
        test_db_session.commit()

        # Assert
        role = test_db_session.query(ShowPerson).one()
        assert role.show_id == 1
        assert role.person_id == 1
        assert role.type == 'cast'
        assert role.main_cast is True
        assert person.roles == [role]

    def test_credit_defaults(self, test_db_session):
        """Test default credit type and main_cast flag."""
        show = Show(id=1, name='Show')
        show.roles.append(ShowPerson(person=Person(id=1, name='Someone')))
        test_db_session.add(show)
        test_db_session.commit()

        role = test_db_session.query(ShowPerson).one()
        assert role.type == 'cast'
        assert role.main_cast is False

    def test_removing_credit_deletes_row(self, test_db_session):
        """Test delete-orphan cascade on credits."""
        # Arrange
        show = Show(id=1, name='Show')
        show.roles.append(ShowPerson(person=Person(id=1, name='Someone')))
        test_db_session.add(show)
        test_db_session.commit()

        # Act
        show.roles.clear()
        test_db_session.commit()

        # Assert
        assert test_db_session.query(ShowPerson).count() == 0
        assert test_db_session.query(Person).count() == 1

    def test_credits_keep_insertion_order(self, test_db_session):
        """Test that credits come back in the order they were added."""
        show = Show(id=1, name='Show')
        for person_id, name in [(3, 'Third'), (1, 'First'), (2, 'Second')]:
            show.roles.append(ShowPerson(person=Person(id=person_id, name=name)))
        test_db_session.add(show)
        test_db_session.commit()
        test_db_session.expire_all()

        stored = test_db_session.get(Show, 1)
        assert [role.person.name for role in stored.roles] == ['Third', 'First', 'Second']

    def test_person_repr(self):
        """Test Person string representation."""
        assert repr(Person(id=1, name='Bryan Cranston')) == "<Person(id=1, name='Bryan Cranston')>"
