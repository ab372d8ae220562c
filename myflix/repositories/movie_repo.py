from typing import List, Optional
from sqlmodel import Session, select
from myflix.models.movie import Movie

def list_movies(db: Session) -> List[Movie]:
    stmt = select(Movie).order_by(Movie.title)
    return db.exec(stmt).all()

def get_movie(db: Session, movie_id: str) -> Optional[Movie]:
    return db.get(Movie, movie_id)

def get_movie_by_title(db: Session, title: str) -> Optional[Movie]:
    stmt = select(Movie).where(Movie.title == title)
    return db.exec(stmt).first()

def get_movie_by_genre(db: Session, genre_name: str) -> Optional[Movie]:
    stmt = select(Movie).where(Movie.genre_name == genre_name)
    return db.exec(stmt).first()

def get_movie_by_director(db: Session, director_name: str) -> Optional[Movie]:
    stmt = select(Movie).where(Movie.director_name == director_name)
    return db.exec(stmt).first()

def save_movie(db: Session, movie: Movie) -> Movie:
    db.add(movie)
    db.commit()
    db.refresh(movie)
    return movie
