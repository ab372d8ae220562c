from fastapi import APIRouter, Depends, Path, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from sqlmodel import Session

from myflix.core.security import require_matching_user
from myflix.database import get_db
from myflix.models.user import User
from myflix.schemas.user import UserCreate, UserRead, UserUpdate
from myflix.services import user_service


router = APIRouter(prefix="/users", tags=["users"])

def checked_registration(user_in: UserCreate) -> UserCreate:
    errors = user_in.rule_violations()
    if errors:
        raise RequestValidationError(errors)
    return user_in

def checked_update(user_in: UserUpdate) -> UserUpdate:
    errors = user_in.rule_violations()
    if errors:
        raise RequestValidationError(errors)
    return user_in

@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    user_in: UserCreate = Depends(checked_registration),
    db: Session = Depends(get_db),
):
    """
    Register a new user.
    - Validates username/password/email rules (422 lists every violation)
    - Rejects a taken username with 400
    - Hashes the password; the hash is never returned
    """
    return UserRead.from_user(user_service.register_user(db, user_in))

@router.get(
    "/{Username}",
    response_model=UserRead,
    status_code=status.HTTP_200_OK,
)
def read_user(current_user: User = Depends(require_matching_user)):
    return UserRead.from_user(current_user)

@router.put(
    "/{Username}",
    response_model=UserRead,
    status_code=status.HTTP_200_OK,
)
def update_user(
    current_user: User = Depends(require_matching_user),
    user_in: UserUpdate = Depends(checked_update),
    db: Session = Depends(get_db),
):
    """
    Update the caller's own profile. Only fields present in the body change;
    the password is re-hashed only when a new one is sent.
    """
    return UserRead.from_user(user_service.update_user(db, current_user, user_in))

@router.post(
    "/{Username}/movies/{MovieID}",
    response_model=UserRead,
    status_code=status.HTTP_200_OK,
)
def add_favorite(
    movie_id: str = Path(..., alias="MovieID"),
    current_user: User = Depends(require_matching_user),
    db: Session = Depends(get_db),
):
    """
    Add a movie to the caller's favorites. Adding it again is a no-op.
    """
    return UserRead.from_user(user_service.add_favorite(db, current_user, movie_id))

@router.delete(
    "/{Username}/movies/{MovieID}",
    response_model=UserRead,
    status_code=status.HTTP_200_OK,
)
def remove_favorite(
    movie_id: str = Path(..., alias="MovieID"),
    current_user: User = Depends(require_matching_user),
    db: Session = Depends(get_db),
):
    return UserRead.from_user(user_service.remove_favorite(db, current_user, movie_id))

@router.delete(
    "/{Username}",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
)
def delete_user(
    current_user: User = Depends(require_matching_user),
    db: Session = Depends(get_db),
):
    username = current_user.username
    user_service.delete_account(db, username)
    return f"{username} was deleted."
