import logging
import math
import re
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from app.core.config import Settings, get_settings
from app.core.enums import MovieSource
from app.core.exceptions import (
    BadRequestException, ConfigurationException, MovieAlreadyExistsException,
    MovieNotFoundException, NotFoundException, ServiceUnavailableException
)
from app.core.interfaces import OmdbClientInterface, OmdbError
from app.core.metrics import CreationCounter, movies_created
from app.core.omdb_client import create_omdb_client
from app.models.movie import Movie
from app.repositories.movie_repository import MovieRepository
from app.schemas.movie import (
    MovieCreate, MovieUpdate, MovieResponse, MovieListResponse
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

IMDB_ID_PATTERN = re.compile(r"^tt\d+$")
NOT_AVAILABLE = "N/A"


def parse_positive_int(value: Any, default: int) -> int:
    """Leading integer of a query value ("2.5" -> 2), ``default`` for junk or non-positive input"""
    if value is None:
        return default
    match = re.match(r"\s*([+-]?\d+)", str(value))
    if not match:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


def parse_year(value: Optional[str]) -> int:
    """Leading integer of an OMDB year ("1994", "2005–2007"), 0 when there is none"""
    match = re.match(r"\s*(\d+)", value or "")
    return int(match.group(1)) if match else 0


def parse_rating(value: Optional[str]) -> float:
    """OMDB rating as float; "N/A" and unparsable values become 0"""
    if value is None or value == NOT_AVAILABLE:
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def map_omdb_movie(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map an OMDB payload onto Movie fields"""
    return {
        "title": data.get("Title"),
        "imdb_id": data.get("imdbID"),
        "year": parse_year(data.get("Year")),
        "rated": data.get("Rated"),
        "released": data.get("Released"),
        "runtime": data.get("Runtime"),
        "genre": data.get("Genre"),
        "director": data.get("Director"),
        "writer": data.get("Writer"),
        "actors": data.get("Actors"),
        "plot": data.get("Plot"),
        "poster": data.get("Poster"),
        "imdb_rating": parse_rating(data.get("imdbRating")),
        "box_office": data.get("BoxOffice") or NOT_AVAILABLE,
    }


class MovieService:
    """Service for movie catalog operations with OMDB integration"""

    def __init__(
        self,
        db: Session,
        omdb_client: Optional[OmdbClientInterface] = None,
        settings: Optional[Settings] = None,
        counter: Optional[CreationCounter] = None,
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.movie_repo = MovieRepository(db)
        self.omdb_client = omdb_client
        self.counter = counter or movies_created

    def list_movies(self, page: Any = None, size: Any = None, title: Optional[str] = None) -> MovieListResponse:
        """Get one page of movies, newest first, optionally filtered by title"""
        current_page = parse_positive_int(page, DEFAULT_PAGE)
        page_size = parse_positive_int(size, DEFAULT_PAGE_SIZE)
        title = title.strip() if title else None

        offset = (current_page - 1) * page_size
        count, rows = self.movie_repo.get_page(offset, page_size, title)

        return MovieListResponse(
            total_items=count,
            total_pages=math.ceil(count / page_size),
            current_page=current_page,
            page_size=page_size,
            movies=[MovieResponse.model_validate(movie) for movie in rows],
        )

    def get_movie(self, movie_id: str) -> Movie:
        """Get movie by id"""
        movie = self.movie_repo.get(movie_id)
        if not movie:
            raise MovieNotFoundException()
        return movie

    def create_movie(self, movie_data: MovieCreate) -> Movie:
        """Create movie from a full payload"""
        movie = self.movie_repo.create(movie_data.model_dump())
        self.counter.increment(MovieSource.DIRECT)
        logger.info(f"Movie created with ID: {movie.id} (source={MovieSource.DIRECT.value})")
        return movie

    def create_movie_by_imdb_id(self, imdb_id: Optional[str]) -> Movie:
        """Fetch a movie from OMDB and store it"""
        imdb_id = self.validate_imdb_id(imdb_id)
        self.ensure_not_stored(imdb_id)
        data = self.fetch_from_omdb(imdb_id)
        movie = self.movie_repo.create(map_omdb_movie(data))
        self.counter.increment(MovieSource.IMDB)
        logger.info(f"Movie created with ID: {movie.id} (source={MovieSource.IMDB.value}, imdbId={imdb_id})")
        return movie

    def validate_imdb_id(self, imdb_id: Optional[str]) -> str:
        imdb_id = (imdb_id or "").strip()
        if not imdb_id:
            logger.warning("imdbId is required")
            raise BadRequestException("imdbId is required")
        if not IMDB_ID_PATTERN.match(imdb_id):
            logger.warning(f"Malformed imdbId: {imdb_id!r}")
            raise BadRequestException("imdbId must be 'tt' followed by digits")
        return imdb_id

    def ensure_not_stored(self, imdb_id: str) -> None:
        if self.movie_repo.imdb_id_exists(imdb_id):
            raise MovieAlreadyExistsException()

    def fetch_from_omdb(self, imdb_id: str) -> Dict[str, Any]:
        """Look the id up on OMDB and return the raw payload"""
        if not self.settings.OMDB_API_KEY:
            logger.error("OMDB_API_KEY is not configured")
            raise ConfigurationException("OMDB API key is not configured")

        client = self.omdb_client or create_omdb_client(
            api_key=self.settings.OMDB_API_KEY,
            base_url=self.settings.OMDB_BASE_URL,
            timeout=self.settings.OMDB_TIMEOUT_SECONDS,
        )
        try:
            response = client.get_by_imdb_id(imdb_id)
        except OmdbError as e:
            logger.error(f"OMDB lookup for {imdb_id} failed: {e.message}")
            raise ServiceUnavailableException("Movie metadata service is unavailable")

        if not response.success:
            raise NotFoundException(f"OMDB Error: {response.error}")
        return response.data

    def update_movie(self, movie_id: str, update_data: MovieUpdate) -> Movie:
        """Apply a partial update to a movie"""
        fields = update_data.model_dump(exclude_unset=True)
        movie = self.movie_repo.update_by_id(movie_id, fields)
        if not movie:
            raise MovieNotFoundException()
        logger.info(f"Movie {movie_id} updated: {sorted(fields)}")
        return movie

    def delete_movie(self, movie_id: str) -> None:
        """Delete a movie"""
        if not self.movie_repo.delete_by_id(movie_id):
            raise MovieNotFoundException()
        logger.info(f"Movie {movie_id} deleted")
