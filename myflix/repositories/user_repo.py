from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
from myflix.models.user import FavoriteMovie, User

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    stmt = select(User).where(User.username == username)
    return db.exec(stmt).first()

def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)

def save_user(db: Session, user: User) -> User:
    """
    Insert or update `user`. The unique index on username makes a concurrent
    duplicate username fail here with IntegrityError; the caller rolls back.
    """
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

def get_favorite(db: Session, user_id: str, movie_id: str) -> Optional[FavoriteMovie]:
    return db.get(FavoriteMovie, (user_id, movie_id))

def add_favorite(db: Session, user: User, movie_id: str) -> User:
    db.add(FavoriteMovie(user_id=user.id, movie_id=movie_id))
    try:
        db.commit()
    except IntegrityError:
        # already a favorite; the composite key keeps the list a set
        db.rollback()
    db.refresh(user)
    return user

def remove_favorite(db: Session, user: User, movie_id: str) -> User:
    favorite = get_favorite(db, user.id, movie_id)
    if favorite is not None:
        db.delete(favorite)
        db.commit()
    db.refresh(user)
    return user

def delete_user(db: Session, user: User) -> None:
    db.delete(user)
    db.commit()
