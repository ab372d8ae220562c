# myflix/schemas/movie.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

from myflix.models.movie import Movie


class CatalogSchema(BaseModel):
    # wire format uses the PascalCase keys of the original catalog export
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


class GenreRead(CatalogSchema):
    name: str
    description: Optional[str] = None


class DirectorRead(CatalogSchema):
    name: str
    bio: Optional[str] = None
    birth: Optional[str] = None
    death: Optional[str] = None


class MovieRead(CatalogSchema):
    id: str = Field(alias="_id")
    title: str
    description: Optional[str] = None
    genre: GenreRead
    director: DirectorRead
    image_path: Optional[str] = None
    featured: bool = False

    @classmethod
    def from_movie(cls, movie: Movie) -> "MovieRead":
        return cls(
            id=movie.id,
            title=movie.title,
            description=movie.description,
            genre=genre_of(movie),
            director=director_of(movie),
            image_path=movie.image_path,
            featured=movie.featured,
        )


def genre_of(movie: Movie) -> GenreRead:
    return GenreRead(name=movie.genre_name, description=movie.genre_description)


def director_of(movie: Movie) -> DirectorRead:
    return DirectorRead(
        name=movie.director_name,
        bio=movie.director_bio,
        birth=movie.director_birth,
        death=movie.director_death,
    )
