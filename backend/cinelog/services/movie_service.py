import logging
import re
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from cinelog.repositories.movie_repository import MovieRepository
from cinelog.schemas.movie import MovieCreate, MovieUpdate
from cinelog.core.exceptions import MovieOperationException
from cinelog.models.movie import Movie

logger = logging.getLogger(__name__)

DEFAULT_SKIP = 0
DEFAULT_TAKE = 10
RECENT_MOVIES_LIMIT = 5

def _coerce_int(raw: Optional[str], default: int) -> int:
    """Parse a query value, falling back to default for non-numeric, zero or negative input"""
    if raw is None:
        return default
    text = str(raw).strip()
    if not re.fullmatch(r"[0-9]+", text):
        return default
    value = int(text)
    return value if value > 0 else default

def parse_movie_id(raw: Any) -> int:
    """Path ids must be plain positive integers"""
    text = str(raw).strip()
    if not re.fullmatch(r"[0-9]+", text):
        raise ValueError(f"Invalid movie id: {raw!r}")
    return int(text)

def coerce_pagination(skip: Optional[str], take: Optional[str]) -> Tuple[int, int]:
    """Turn raw skip/take query strings into offsets"""
    return _coerce_int(skip, DEFAULT_SKIP), _coerce_int(take, DEFAULT_TAKE)

class MovieService:
    """Service for the movie collection"""
    
    def __init__(self, db: Session):
        self.db = db
        self.movie_repository = MovieRepository(db)
    
    def create_movie(self, movie_data: MovieCreate) -> Movie:
        """Persist a new movie"""
        try:
            movie = self.movie_repository.create_movie(movie_data.model_dump())
            logger.info(f"Movie created with ID: {movie.id}")
            return movie
        except Exception as e:
            logger.error(f"Error creating movie: {str(e)}")
            self.db.rollback()
            raise MovieOperationException("Failed to create movie")
    
    def list_movies(self, skip: int = DEFAULT_SKIP, take: int = DEFAULT_TAKE) -> List[Movie]:
        """Page of movies, newest id first"""
        try:
            return self.movie_repository.list_newest_first(skip=skip, take=take)
        except Exception as e:
            logger.error(f"Error fetching movies: {str(e)}")
            raise MovieOperationException("Failed to fetch movies")
    
    def update_movie(self, movie_id: Any, movie_data: MovieUpdate) -> Movie:
        """Overwrite an existing movie"""
        try:
            movie = self.movie_repository.replace_movie(parse_movie_id(movie_id), movie_data.model_dump())
            logger.info(f"Movie {movie_id} updated")
            return movie
        except Exception as e:
            logger.error(f"Error updating movie {movie_id}: {str(e)}")
            self.db.rollback()
            raise MovieOperationException("Failed to update movie")
    
    def delete_movie(self, movie_id: Any) -> None:
        """Permanently remove a movie"""
        try:
            self.movie_repository.delete_movie(parse_movie_id(movie_id))
            logger.info(f"Movie {movie_id} deleted")
        except Exception as e:
            logger.error(f"Error deleting movie {movie_id}: {str(e)}")
            self.db.rollback()
            raise MovieOperationException("Failed to delete movie")
    
    def get_db_info(self) -> Dict[str, Any]:
        """Total count plus the most recently created movies"""
        try:
            return {
                "total_movies": self.movie_repository.count(),
                "recent_movies": self.movie_repository.recent(RECENT_MOVIES_LIMIT),
                "message": "Database connection successful",
            }
        except Exception as e:
            logger.error(f"Database info query failed: {str(e)}")
            raise MovieOperationException("Database connection failed")
