# myflix/models/user.py
from typing import Optional, List
from datetime import date, datetime, timezone

from sqlmodel import SQLModel, Field, Relationship

from myflix.models.movie import new_object_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FavoriteMovie(SQLModel, table=True):
    __tablename__ = "favorite_movies"

    # composite key: a movie is in a user's favorites at most once
    user_id: str = Field(foreign_key="users.id", primary_key=True)
    movie_id: str = Field(foreign_key="movies.id", primary_key=True)
    added_at: datetime = Field(default_factory=utcnow, nullable=False)

    user: Optional["User"] = Relationship(back_populates="favorites")


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=new_object_id, primary_key=True, max_length=24)
    username: str = Field(index=True, nullable=False, unique=True)
    hashed_password: str = Field(nullable=False)
    email: str = Field(nullable=False)
    birthday: Optional[date] = None
    created_at: datetime = Field(default_factory=utcnow)

    favorites: List[FavoriteMovie] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "FavoriteMovie.added_at",
        },
    )

    @property
    def favorite_movie_ids(self) -> List[str]:
        return [fav.movie_id for fav in self.favorites]
