from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime
from urllib.parse import urlparse

# Required text fields and the label used in validation messages
MOVIE_FIELD_LABELS = {
    "title": "Title",
    "type": "Type",
    "director": "Director",
    "budget": "Budget",
    "location": "Location",
    "duration": "Duration",
    "year_time": "Year/Time",
}

def required_message(field: str) -> str:
    return f"{MOVIE_FIELD_LABELS[field]} is required"

class CamelModel(BaseModel):
    """Serializes snake_case attributes as camelCase JSON"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class MovieBase(CamelModel):
    title: str
    type: str
    director: str
    budget: str
    location: str
    duration: str
    year_time: str
    image_url: Optional[str] = None

class MovieWrite(MovieBase):
    """Validated movie field bag used by create and update"""

    @field_validator(*MOVIE_FIELD_LABELS.keys())
    @classmethod
    def not_blank(cls, value: str, info):
        if not value.strip():
            raise ValueError(required_message(info.field_name))
        return value

    @field_validator("image_url")
    @classmethod
    def hosted_url(cls, value: Optional[str]):
        if value is None:
            return value
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Image URL must be an absolute http(s) URL")
        return value

class MovieCreate(MovieWrite):
    """Create movie"""
    pass

class MovieUpdate(MovieWrite):
    """Full overwrite of a movie; omitted imageUrl clears the poster"""
    pass

class MovieResponse(MovieBase):
    """Movie response"""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class DBInfoResponse(CamelModel):
    """Database diagnostic response"""
    total_movies: int
    recent_movies: List[MovieResponse]
    message: str

class UploadResponse(CamelModel):
    image_url: str

class MessageResponse(BaseModel):
    message: str = Field(..., description="Human readable result")
