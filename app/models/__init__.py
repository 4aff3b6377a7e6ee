from app.db import Base
from .movie import Movie

__all__ = ['Base', 'Movie']
