from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import Optional

from app.core.auth import require_admin
from app.db import get_db
from app.services.movie_service import MovieService
from app.schemas.movie import (
    MovieCreate, MovieUpdate, ImdbIdCreate, MovieResponse, MovieListResponse
)

router = APIRouter(tags=["movies"])

def get_movie_service(db: Session = Depends(get_db)) -> MovieService:
    """Dependency to build the movie service for a request"""
    return MovieService(db)

# Read operations
@router.get("/getMovies", response_model=MovieListResponse)
def get_movies(
    # Kept as raw strings: junk values fall back to defaults instead of failing
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    size: Optional[str] = Query(None, description="Page size (default 10)"),
    title: Optional[str] = Query(None, description="Case-insensitive title filter"),
    movie_service: MovieService = Depends(get_movie_service)
):
    return movie_service.list_movies(page, size, title)

@router.get("/getMovies/{movie_id}", response_model=MovieResponse)
def get_movie(
    movie_id: str,
    movie_service: MovieService = Depends(get_movie_service)
):
    return movie_service.get_movie(movie_id)

# Admin write operations
@router.post(
    "/add",
    response_model=MovieResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def add_movie(
    movie_data: MovieCreate,
    movie_service: MovieService = Depends(get_movie_service)
):
    return movie_service.create_movie(movie_data)

@router.post(
    "/addByImdbId",
    response_model=MovieResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def add_movie_by_imdb_id(
    request_data: ImdbIdCreate,
    movie_service: MovieService = Depends(get_movie_service)
):
    return movie_service.create_movie_by_imdb_id(request_data.imdb_id)

@router.put(
    "/update/{movie_id}",
    response_model=MovieResponse,
    dependencies=[Depends(require_admin)],
)
def update_movie(
    movie_id: str,
    update_data: MovieUpdate,
    movie_service: MovieService = Depends(get_movie_service)
):
    return movie_service.update_movie(movie_id, update_data)

@router.delete(
    "/delete/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_admin)],
)
def delete_movie(
    movie_id: str,
    movie_service: MovieService = Depends(get_movie_service)
):
    movie_service.delete_movie(movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
