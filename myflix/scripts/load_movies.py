# myflix/scripts/load_movies.py
"""
Load the movie catalog from a JSON export.

    python -m myflix.scripts.load_movies movies.json [--replace]

The file holds an array of movies in the API's own shape
(Title, Description, Genre{Name, Description}, Director{Name, Bio, Birth, Death},
ImagePath, Featured). Mongo-style ids ({"$oid": ...}) are accepted.
Movies are matched on Title; existing ones are left alone unless --replace.
"""
import argparse
import json
import logging
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal
from sqlmodel import Session

from myflix.core.config import get_settings
from myflix.core.log import configure_logging
from myflix.database import init_db, make_engine
from myflix.models.movie import Movie
from myflix.repositories.movie_repo import get_movie_by_title, save_movie
from myflix.schemas.movie import DirectorRead, GenreRead

logger = logging.getLogger(__name__)


class MovieImport(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    title: str
    description: Optional[str] = None
    genre: GenreRead
    director: DirectorRead
    image_path: Optional[str] = None
    featured: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def unwrap_oid(cls, value):
        if isinstance(value, dict):
            return value.get("$oid")
        return value

    def apply_to(self, movie: Movie) -> Movie:
        movie.title = self.title
        movie.description = self.description
        movie.genre_name = self.genre.name
        movie.genre_description = self.genre.description
        movie.director_name = self.director.name
        movie.director_bio = self.director.bio
        movie.director_birth = self.director.birth
        movie.director_death = self.director.death
        movie.image_path = self.image_path
        movie.featured = self.featured
        return movie


def load_movies(db: Session, records: Iterable[dict], replace: bool = False) -> int:
    """
    Insert (or with replace=True, overwrite) each record. Returns how many
    movies were written.
    """
    written = 0
    for record in records:
        item = MovieImport.model_validate(record)
        movie = get_movie_by_title(db, item.title)
        if movie is not None and not replace:
            logger.info("Skipping existing movie %s", item.title)
            continue
        if movie is None:
            movie = Movie(id=item.id) if item.id else Movie()
        save_movie(db, item.apply_to(movie))
        written += 1
    return written


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Load movies into the myFlix catalog.")
    parser.add_argument("path", help="JSON file holding an array of movies")
    parser.add_argument(
        "--replace",
        action="store_true",
        help="Overwrite movies whose title is already in the catalog.",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    with open(args.path, encoding="utf-8") as fh:
        records = json.load(fh)

    engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    init_db(engine)
    try:
        with Session(engine) as db:
            written = load_movies(db, records, replace=args.replace)
    finally:
        engine.dispose()
    logger.info("Loaded %d movies from %s", written, args.path)


if __name__ == "__main__":
    main()
