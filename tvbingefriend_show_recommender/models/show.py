"""Show catalog: shows, genres, people and the cast/crew credits linking them."""
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.mysql import JSON
from sqlalchemy.orm import relationship

from tvbingefriend_show_recommender.models.base import Base

show_genre = Table(
    "show_genre",
    Base.metadata,
    Column("show_id", Integer, ForeignKey("shows.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_show_genre_genre_id", "genre_id"),
)


class Show(Base):
    """A TV show in the catalog."""
    __tablename__ = "shows"

    id = Column(Integer, primary_key=True)
    on_source_id = Column(Integer, nullable=True, unique=True)
    name = Column(String(255), nullable=False)
    type = Column(String(50), nullable=True)
    language = Column(String(50), nullable=True)
    status = Column(String(50), nullable=True)
    runtime = Column(Integer, nullable=True)
    premiered = Column(Date, nullable=True)
    official_site = Column(String(255), nullable=True)
    schedule_time = Column(String(10), nullable=True)
    schedule_days = Column(JSON, nullable=True)
    rating = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)
    network = Column(String(100), nullable=True)
    network_country = Column(String(10), nullable=True)
    web_channel = Column(String(100), nullable=True)
    externals_imdb = Column(String(20), nullable=True)
    externals_thetvdb = Column(Integer, nullable=True)
    externals_tvrage = Column(Integer, nullable=True)
    image_medium = Column(String(255), nullable=True)
    image_original = Column(String(255), nullable=True)
    summary = Column(Text, nullable=True)
    on_source_updated = Column(DateTime, nullable=True)

    genres = relationship("Genre", secondary=show_genre, back_populates="shows", order_by="Genre.id")
    roles = relationship(
        "ShowPerson",
        back_populates="show",
        cascade="all, delete-orphan",
        order_by="ShowPerson.id",
    )

    __table_args__ = (
        Index("idx_shows_weight", "weight"),
        Index("idx_shows_name", "name"),
    )

    def __repr__(self):
        return f"<Show(id={self.id}, name='{self.name}')>"


class Genre(Base):
    """A genre label shared by many shows."""
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)

    shows = relationship("Show", secondary=show_genre, back_populates="genres")

    def __repr__(self):
        return f"<Genre(id={self.id}, name='{self.name}')>"


class Person(Base):
    """An actor or crew member."""
    __tablename__ = "people"

    id = Column(Integer, primary_key=True)
    on_source_id = Column(Integer, nullable=True, unique=True)
    name = Column(String(255), nullable=False)
    country = Column(String(10), nullable=True)
    birth_day = Column(Date, nullable=True)
    death_day = Column(Date, nullable=True)
    gender = Column(String(20), nullable=True)
    image_medium = Column(String(255), nullable=True)
    image_original = Column(String(255), nullable=True)
    on_source_updated = Column(DateTime, nullable=True)

    roles = relationship("ShowPerson", back_populates="person")

    def __repr__(self):
        return f"<Person(id={self.id}, name='{self.name}')>"


class ShowPerson(Base):
    """A person's credit on a show.

    Rows are ordered by id, which keeps the credit order of the source.
    """
    __tablename__ = "show_person"

    id = Column(Integer, primary_key=True, autoincrement=True)
    show_id = Column(Integer, ForeignKey("shows.id", ondelete="CASCADE"), nullable=False)
    person_id = Column(Integer, ForeignKey("people.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(50), nullable=False, default="cast")
    character_name = Column(String(255), nullable=True)
    main_cast = Column(Boolean, nullable=False, default=False)

    show = relationship("Show", back_populates="roles")
    person = relationship("Person", back_populates="roles")

    __table_args__ = (
        Index("idx_show_person_show_id", "show_id"),
        Index("idx_show_person_person_id", "person_id"),
    )

    def __repr__(self):
        return (
            f"<ShowPerson(show_id={self.show_id}, person_id={self.person_id}, "
            f"type='{self.type}', main_cast={self.main_cast})>"
        )
