# myflix/core/security.py
import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from fastapi import Depends, HTTPException, Path, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from myflix.core.config import Settings
from myflix.core.errors import PermissionDeniedError
from myflix.database import get_db
from myflix.models.user import User
from myflix.repositories.user_repo import get_user

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/login")


# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed_password.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def create_access_token(user: User, settings: Settings) -> str:
    """
    Sign a session token for `user`.

    The subject is the username; `_id` carries the user id that
    get_current_user resolves on every request.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user.username,
        "_id": user.id,
        "Username": user.username,
        "Email": user.email,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> dict:
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        options={"require": ["sub", "exp"]},
    )


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings_dep),
    db: Session = Depends(get_db),
) -> User:
    credentials_error = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token, settings)
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise credentials_error
    except jwt.PyJWTError as exc:
        logger.info("Rejected invalid token: %s", exc)
        raise credentials_error

    user_id = payload.get("_id")
    user = get_user(db, user_id) if isinstance(user_id, str) else None
    if user is None:
        raise credentials_error
    return user


def require_matching_user(
    username: str = Path(..., alias="Username"),
    current_user: User = Depends(get_current_user),
) -> User:
    """
    Only let a caller act on the account named in the path.
    """
    if current_user.username != username:
        logger.warning(
            "User %s denied access to /users/%s", current_user.username, username
        )
        raise PermissionDeniedError()
    return current_user
