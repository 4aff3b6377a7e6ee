from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.repositories.base_repository import BaseRepository
from app.models.movie import Movie

class MovieRepository(BaseRepository[Movie]):
    """Movie repository with catalog-specific operations"""

    def __init__(self, db: Session):
        super().__init__(Movie, db)

    def get_page(self, offset: int, limit: int, title: Optional[str] = None) -> Tuple[int, List[Movie]]:
        """Count matching movies and return one page, newest first"""
        query = self.db.query(Movie)
        if title:
            query = query.filter(func.lower(Movie.title).contains(title.lower(), autoescape=True))

        count = query.count()
        rows = (
            query.order_by(Movie.created_at.desc(), Movie.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return count, rows

    def get_by_imdb_id(self, imdb_id: str) -> Optional[Movie]:
        """Get movie by IMDB id"""
        return self.filter_one_by(imdb_id=imdb_id)

    def imdb_id_exists(self, imdb_id: str) -> bool:
        """Check if a movie with the IMDB id is stored"""
        return self.get_by_imdb_id(imdb_id) is not None

    def update_by_id(self, movie_id: str, fields: Dict[str, Any]) -> Optional[Movie]:
        """Apply a partial update, None when no movie matched"""
        movie = self.get(movie_id)
        if not movie:
            return None
        if not fields:
            return movie
        return self.update(movie, fields)

    def delete_by_id(self, movie_id: str) -> bool:
        """Delete movie by id"""
        return self.delete(movie_id)
