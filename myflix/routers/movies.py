# myflix/routers/movies.py
from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlmodel import Session

from myflix.core.security import get_current_user
from myflix.database import get_db
from myflix.schemas.movie import DirectorRead, GenreRead, MovieRead
from myflix.services import catalog_service

router = APIRouter(
    prefix="/movies",
    tags=["movies"],
    dependencies=[Depends(get_current_user)],
)


@router.get(
    "",
    response_model=List[MovieRead],
    status_code=status.HTTP_200_OK,
    summary="List every movie in the catalog",
)
def list_movies(db: Session = Depends(get_db)):
    return [MovieRead.from_movie(m) for m in catalog_service.list_movies(db)]


@router.get(
    "/genre/{genreName}",
    response_model=GenreRead,
    status_code=status.HTTP_200_OK,
)
def get_genre(
    genre_name: str = Path(..., alias="genreName"),
    db: Session = Depends(get_db),
):
    """
    Genre name and description, taken from the first movie filed under it.
    """
    return catalog_service.get_genre(db, genre_name)


@router.get(
    "/directors/{directorName}",
    response_model=DirectorRead,
    status_code=status.HTTP_200_OK,
)
def get_director(
    director_name: str = Path(..., alias="directorName"),
    db: Session = Depends(get_db),
):
    return catalog_service.get_director(db, director_name)


@router.get(
    "/{Title}",
    response_model=MovieRead,
    status_code=status.HTTP_200_OK,
)
def get_movie(
    title: str = Path(..., alias="Title", description="Exact movie title"),
    db: Session = Depends(get_db),
):
    return MovieRead.from_movie(catalog_service.get_movie_by_title(db, title))
