from typing import List

from sqlmodel import Session

from myflix.core.errors import NotFoundError
from myflix.models.movie import Movie
from myflix.repositories import movie_repo
from myflix.schemas.movie import DirectorRead, GenreRead, director_of, genre_of


def list_movies(db: Session) -> List[Movie]:
    return movie_repo.list_movies(db)


def get_movie_by_title(db: Session, title: str) -> Movie:
    movie = movie_repo.get_movie_by_title(db, title)
    if movie is None:
        raise NotFoundError(f"Movie {title} was not found.")
    return movie


def get_genre(db: Session, genre_name: str) -> GenreRead:
    movie = movie_repo.get_movie_by_genre(db, genre_name)
    if movie is None:
        raise NotFoundError(f"Genre {genre_name} was not found.")
    return genre_of(movie)


def get_director(db: Session, director_name: str) -> DirectorRead:
    movie = movie_repo.get_movie_by_director(db, director_name)
    if movie is None:
        raise NotFoundError(f"Director {director_name} was not found.")
    return director_of(movie)
