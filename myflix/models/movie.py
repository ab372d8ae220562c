# myflix/models/movie.py
from typing import Optional
from uuid import uuid4

from sqlmodel import SQLModel, Field


def new_object_id() -> str:
    # 24 hex chars, same width as the ids the catalog was exported with
    return uuid4().hex[:24]


class Movie(SQLModel, table=True):
    __tablename__ = "movies"

    id: str = Field(default_factory=new_object_id, primary_key=True, max_length=24)
    title: str = Field(index=True, nullable=False, unique=True)
    description: Optional[str] = None

    genre_name: str = Field(index=True, nullable=False)
    genre_description: Optional[str] = None

    director_name: str = Field(index=True, nullable=False)
    director_bio: Optional[str] = None
    director_birth: Optional[str] = None
    director_death: Optional[str] = None

    image_path: Optional[str] = None
    featured: bool = Field(default=False, nullable=False)
