import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime
from app.db import Base
from app.core.config import get_settings


def _utcnow():
    return datetime.now(timezone.utc)


class Movie(Base):
    __tablename__ = "movies"
    # Columns keep the camelCase names of the existing movies table
    __table_args__ = {"schema": get_settings().DB_SCHEMA} if get_settings().DB_SCHEMA else {}

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    imdb_id = Column("imdbId", String, nullable=False)
    title = Column(String(500), nullable=False)
    year = Column(Integer, nullable=False)
    rated = Column(String, nullable=True)
    released = Column(String, nullable=False)
    runtime = Column(String, nullable=True)
    genre = Column(String, nullable=True)
    director = Column(Text, nullable=True)
    writer = Column(Text, nullable=True)
    actors = Column(Text, nullable=True)
    plot = Column(Text, nullable=False)
    poster = Column(String(1000), nullable=False)
    imdb_rating = Column("imdbRating", Numeric(3, 1), nullable=True)
    box_office = Column("boxOffice", String, nullable=True)
    created_at = Column("createdAt", DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column("updatedAt", DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<Movie id={self.id} imdb_id={self.imdb_id} title={self.title!r}>"
