"""SQLAlchemy models"""

from tvbingefriend_show_recommender.models.base import Base
from tvbingefriend_show_recommender.models.show import Genre, Person, Show, ShowPerson, show_genre

__all__ = [
    "Base",
    "Genre",
    "Person",
    "Show",
    "ShowPerson",
    "show_genre",
]
