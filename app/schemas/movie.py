from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

# Field names follow the public JSON contract (camelCase); Python attributes stay snake_case.

class MovieBase(BaseModel):
    """Fields shared by movie payloads"""
    imdb_id: str = Field(..., alias="imdbId", min_length=1)
    title: str = Field(..., max_length=500)
    year: int
    rated: Optional[str] = None
    released: str
    runtime: Optional[str] = None
    genre: Optional[str] = None
    director: Optional[str] = None
    writer: Optional[str] = None
    actors: Optional[str] = None
    plot: str
    poster: str = Field(..., max_length=1000)
    imdb_rating: Optional[float] = Field(None, alias="imdbRating", ge=0, le=10)
    box_office: Optional[str] = Field(None, alias="boxOffice")

    class Config:
        populate_by_name = True

class MovieCreate(MovieBase):
    """Create movie from a full payload"""
    pass

class MovieUpdate(BaseModel):
    """Partial movie update; only fields sent by the client are applied"""
    imdb_id: Optional[str] = Field(None, alias="imdbId")
    title: Optional[str] = Field(None, max_length=500)
    year: Optional[int] = None
    rated: Optional[str] = None
    released: Optional[str] = None
    runtime: Optional[str] = None
    genre: Optional[str] = None
    director: Optional[str] = None
    writer: Optional[str] = None
    actors: Optional[str] = None
    plot: Optional[str] = None
    poster: Optional[str] = Field(None, max_length=1000)
    imdb_rating: Optional[float] = Field(None, alias="imdbRating", ge=0, le=10)
    box_office: Optional[str] = Field(None, alias="boxOffice")

    class Config:
        populate_by_name = True

class ImdbIdCreate(BaseModel):
    """Create movie by IMDB id"""
    # Optional here so a missing id is reported as a bad request by the service
    imdb_id: Optional[str] = Field(None, alias="imdbId", description="IMDB id, e.g. tt0111161")

    class Config:
        populate_by_name = True

class MovieResponse(MovieBase):
    """Movie response"""
    id: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True

class MovieListResponse(BaseModel):
    """One page of movies"""
    total_items: int = Field(..., alias="totalItems")
    total_pages: int = Field(..., alias="totalPages")
    current_page: int = Field(..., alias="currentPage")
    page_size: int = Field(..., alias="pageSize")
    movies: List[MovieResponse]

    class Config:
        populate_by_name = True
