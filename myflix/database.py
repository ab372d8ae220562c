# myflix/database.py
from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session


def make_engine(database_url: str, echo: bool = False) -> Engine:
    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # an in-memory database only lives as long as its one connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def init_db(engine: Engine) -> None:
    """
    Create all tables that are defined via SQLModel subclasses.
    """
    # register the table models before create_all
    import myflix.models.movie  # noqa: F401
    import myflix.models.user  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_db(request: Request):
    with Session(request.app.state.engine) as session:
        yield session
