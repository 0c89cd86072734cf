from cinelog.db import Base
from .movie import Movie

__all__ = ['Base', 'Movie']
