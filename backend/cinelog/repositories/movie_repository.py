from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from cinelog.repositories.base_repository import BaseRepository
from cinelog.models.movie import Movie
from cinelog.core.exceptions import MovieNotFoundException

# Writable columns; id and timestamps are always assigned by the database
WRITABLE_FIELDS = (
    "title", "type", "director", "budget",
    "location", "duration", "year_time", "image_url",
)

class MovieRepository(BaseRepository[Movie]):
    """Movie repository with collection-specific queries"""
    
    def __init__(self, db: Session):
        super().__init__(Movie, db)
    
    def list_newest_first(self, skip: int = 0, take: int = 10) -> List[Movie]:
        """Page through movies by descending id"""
        return self.get_all(skip=skip, limit=take, order_by=[Movie.id.desc()])
    
    def recent(self, limit: int = 5) -> List[Movie]:
        """Most recently created movies, ties broken by id"""
        return self.get_all(limit=limit, order_by=[Movie.created_at.desc(), Movie.id.desc()])
    
    def create_movie(self, fields: Dict[str, Any]) -> Movie:
        """Create a movie from writable fields only"""
        return self.create({k: v for k, v in fields.items() if k in WRITABLE_FIELDS})
    
    def replace_movie(self, movie_id: int, fields: Dict[str, Any]) -> Movie:
        """Overwrite every writable field of an existing movie"""
        movie = self.get(movie_id)
        if not movie:
            raise MovieNotFoundException(f"Movie with ID {movie_id} not found")
        
        return self.update(movie, {field: fields.get(field) for field in WRITABLE_FIELDS})
    
    def delete_movie(self, movie_id: int) -> None:
        """Hard delete a movie"""
        if not self.delete(movie_id):
            raise MovieNotFoundException(f"Movie with ID {movie_id} not found")
