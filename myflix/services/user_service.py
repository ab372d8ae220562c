import logging
from functools import lru_cache

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from myflix.core.errors import ConflictError, NotFoundError
from myflix.core.security import hash_password, verify_password
from myflix.models.user import User
from myflix.repositories.movie_repo import get_movie
from myflix.repositories.user_repo import (
    add_favorite as repo_add_favorite,
    delete_user as repo_delete_user,
    get_user_by_username,
    remove_favorite as repo_remove_favorite,
    save_user,
)
from myflix.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def _save_unique(db: Session, user: User, username: str) -> User:
    try:
        return save_user(db, user)
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"{username} already exists.")


def register_user(db: Session, user_in: UserCreate) -> User:
    user = User(
        username=user_in.username,
        hashed_password=hash_password(user_in.password),
        email=user_in.email,
        birthday=user_in.birthday,
    )
    user = _save_unique(db, user, user_in.username)
    logger.info("Registered user %s", user.username)
    return user


@lru_cache
def _dummy_hash() -> str:
    return hash_password("myflix-unknown-user")


def authenticate_user(db: Session, username: str, password: str) -> User:
    user = get_user_by_username(db, username)
    # an unknown username still pays for one bcrypt comparison
    hashed = user.hashed_password if user else _dummy_hash()
    if not verify_password(password, hashed) or user is None:
        logger.warning("Failed login for %s", username)
        # same answer for unknown user and wrong password
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def update_user(db: Session, user: User, user_in: UserUpdate) -> User:
    changes = user_in.model_dump(exclude_unset=True, exclude_none=True)
    if "username" in changes:
        user.username = changes["username"]
    if "password" in changes:
        user.hashed_password = hash_password(changes["password"])
    if "email" in changes:
        user.email = changes["email"]
    if "birthday" in changes:
        user.birthday = changes["birthday"]
    return _save_unique(db, user, user.username)


def add_favorite(db: Session, user: User, movie_id: str) -> User:
    if get_movie(db, movie_id) is None:
        raise NotFoundError(f"Movie {movie_id} was not found.")
    return repo_add_favorite(db, user, movie_id)


def remove_favorite(db: Session, user: User, movie_id: str) -> User:
    return repo_remove_favorite(db, user, movie_id)


def delete_account(db: Session, username: str) -> None:
    user = get_user_by_username(db, username)
    if user is None:
        raise NotFoundError(f"{username} was not found.")
    repo_delete_user(db, user)
    logger.info("Deleted user %s", username)
