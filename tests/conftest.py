"""Shared test fixtures and configuration for pytest."""
import pytest
from datetime import date
from typing import Dict, List
from unittest.mock import Mock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tvbingefriend_show_recommender.models.base import Base
from tvbingefriend_show_recommender.recommender.schemas import GenreRef, PersonRole, ShowSnapshot


# ===== Database Fixtures =====

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session_factory(test_db_engine):
    """Session factory bound to the test engine."""
    return sessionmaker(bind=test_db_engine, autoflush=False)


@pytest.fixture(scope="function")
def test_db_session(test_session_factory):
    """Create a database session for testing."""
    session = test_session_factory()
    yield session
    session.close()


# ===== Sample Data Fixtures =====

@pytest.fixture
def sample_catalog_data() -> List[Dict]:
    """Catalog shows with genres and credits, in store_show format."""
    cranston = {"id": 1, "name": "Bryan Cranston"}
    paul = {"id": 2, "name": "Aaron Paul"}
    odenkirk = {"id": 3, "name": "Bob Odenkirk"}
    carell = {"id": 4, "name": "Steve Carell"}
    esposito = {"id": 5, "name": "Giancarlo Esposito"}

    return [
        {
            'id': 1,
            'name': 'Breaking Bad',
            'type': 'Scripted',
            'language': 'English',
            'status': 'Ended',
            'runtime': 60,
            'premiered': date(2008, 1, 20),
            'rating': 9.2,
            'weight': 98,
            'network': 'AMC',
            'genres': ['Drama', 'Crime', 'Thriller'],
            'people': [
                {**cranston, 'main_cast': True, 'character_name': 'Walter White'},
                {**paul, 'main_cast': True, 'character_name': 'Jesse Pinkman'},
                {**esposito, 'main_cast': False, 'character_name': 'Gus Fring'},
            ],
        },
        {
            'id': 2,
            'name': 'Better Call Saul',
            'type': 'Scripted',
            'language': 'English',
            'status': 'Ended',
            'runtime': 60,
            'premiered': date(2015, 2, 8),
            'rating': 8.7,
            'weight': 96,
            'network': 'AMC',
            'genres': ['Drama', 'Crime'],
            'people': [
                {**odenkirk, 'main_cast': True, 'character_name': 'Jimmy McGill'},
                {**esposito, 'main_cast': True, 'character_name': 'Gus Fring'},
            ],
        },
        {
            'id': 3,
            'name': 'The Office',
            'type': 'Scripted',
            'language': 'English',
            'status': 'Ended',
            'runtime': 30,
            'premiered': date(2005, 3, 24),
            'rating': 8.6,
            'weight': 97,
            'network': 'NBC',
            'genres': ['Comedy'],
            'people': [
                {**carell, 'main_cast': True, 'character_name': 'Michael Scott'},
            ],
        },
        {
            'id': 4,
            'name': 'Malcolm in the Middle',
            'type': 'Scripted',
            'language': 'English',
            'status': 'Ended',
            'runtime': 30,
            'premiered': date(2000, 1, 9),
            'rating': 7.9,
            'weight': 90,
            'network': 'FOX',
            'genres': ['Comedy'],
            'people': [
                {**cranston, 'main_cast': True, 'character_name': 'Hal'},
            ],
        },
        {
            'id': 5,
            'name': 'Westworld',
            'type': 'Scripted',
            'language': 'English',
            'status': 'Ended',
            'runtime': 60,
            'premiered': date(2016, 10, 2),
            'rating': 8.0,
            'weight': 95,
            'network': 'HBO',
            'genres': ['Drama', 'Science-Fiction', 'Thriller'],
            'people': [],
        },
        {
            'id': 6,
            'name': 'Planet Earth',
            'type': 'Documentary',
            'language': 'English',
            'status': 'Ended',
            'runtime': 50,
            'premiered': date(2006, 3, 5),
            'rating': 9.4,
            'weight': 85,
            'network': 'BBC One',
            'genres': ['Nature'],
            'people': [],
        },
    ]


@pytest.fixture
def sample_catalog(test_db_session, sample_catalog_data):
    """Store the sample catalog in the test database."""
    from tvbingefriend_show_recommender.repos import CatalogRepository
    repo = CatalogRepository(test_db_session)
    for show_data in sample_catalog_data:
        repo.store_show(show_data)
    return sample_catalog_data


@pytest.fixture
def make_show():
    """Factory for ShowSnapshot objects.

    genres is a list of (id, name) tuples, people a list of
    (person_id, name, main_cast) tuples.
    """
    def _make_show(show_id: int, name: str = None, genres=(), people=(), **kwargs) -> ShowSnapshot:
        return ShowSnapshot(
            id=show_id,
            name=name or f"Show {show_id}",
            genres=tuple(GenreRef(id=genre_id, name=genre_name) for genre_id, genre_name in genres),
            people=tuple(
                PersonRole(person_id=person_id, name=person_name, main_cast=main_cast)
                for person_id, person_name, main_cast in people
            ),
            **kwargs
        )
    return _make_show


# ===== Repository Fixtures =====

@pytest.fixture
def catalog_repository(test_db_session):
    """Create CatalogRepository with test database session."""
    from tvbingefriend_show_recommender.repos import CatalogRepository
    return CatalogRepository(test_db_session)


# ===== Mock Fixtures =====

@pytest.fixture
def mock_catalog():
    """Mock ShowCatalog."""
    mock = Mock()
    mock.fetch_shows_by_ids.return_value = []
    mock.fetch_candidates.return_value = []
    return mock


# ===== Azure Functions Fixtures =====

@pytest.fixture
def mock_http_request():
    """Mock Azure Functions HttpRequest."""
    mock_req = Mock()
    mock_req.route_params = {}
    mock_req.params = {}
    mock_req.get_json.return_value = {}
    return mock_req
