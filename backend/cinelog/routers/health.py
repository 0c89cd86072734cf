from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cinelog.db import get_db
from cinelog.services.movie_service import MovieService
from cinelog.schemas.movie import DBInfoResponse

router = APIRouter(tags=["health"])

@router.get("/db-info", response_model=DBInfoResponse)
def get_db_info(db: Session = Depends(get_db)):
    """Connectivity diagnostic: movie count and the five newest movies"""
    movie_service = MovieService(db)
    return movie_service.get_db_info()
