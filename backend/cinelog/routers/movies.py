from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from cinelog.db import get_db
from cinelog.services.movie_service import MovieService, coerce_pagination
from cinelog.schemas.movie import MovieCreate, MovieUpdate, MovieResponse, MessageResponse

router = APIRouter(prefix="/movies", tags=["movies"])

@router.post("", response_model=MovieResponse)
def create_movie(movie_data: MovieCreate, db: Session = Depends(get_db)):
    """Add a movie to the collection"""
    movie_service = MovieService(db)
    return movie_service.create_movie(movie_data)

@router.get("", response_model=List[MovieResponse])
def list_movies(
    skip: Optional[str] = Query(None, description="Rows to skip, default 0"),
    take: Optional[str] = Query(None, description="Page size, default 10"),
    db: Session = Depends(get_db)
):
    """List movies, newest first"""
    offset, limit = coerce_pagination(skip, take)
    movie_service = MovieService(db)
    return movie_service.list_movies(skip=offset, take=limit)

@router.put("/{movie_id}", response_model=MovieResponse)
def update_movie(movie_id: str, movie_data: MovieUpdate, db: Session = Depends(get_db)):
    movie_service = MovieService(db)
    return movie_service.update_movie(movie_id, movie_data)

@router.delete("/{movie_id}", response_model=MessageResponse)
def delete_movie(movie_id: str, db: Session = Depends(get_db)):
    movie_service = MovieService(db)
    movie_service.delete_movie(movie_id)
    return {"message": "Movie deleted"}
