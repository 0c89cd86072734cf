from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from cinelog.db import Base

class Movie(Base):
    __tablename__ = "movies"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    type = Column(String, nullable=False)
    director = Column(String, nullable=False)
    budget = Column(String, nullable=False)
    location = Column(String, nullable=False)
    duration = Column(String, nullable=False)
    year_time = Column(String, nullable=False)
    image_url = Column(String, nullable=True)  # hosted poster, set only from /upload results
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
