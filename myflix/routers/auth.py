# myflix/routers/auth.py
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlmodel import Session

from myflix.core.config import Settings
from myflix.core.security import create_access_token, get_settings_dep
from myflix.database import get_db
from myflix.schemas.user import LoginRequest, LoginResponse, UserRead
from myflix.services.user_service import authenticate_user

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: Optional[LoginRequest] = Body(None),
    username: Optional[str] = Query(None, alias="Username"),
    password: Optional[str] = Query(None, alias="Password"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    # credentials may come as a JSON body or as query parameters
    if credentials is not None:
        username, password = credentials.username, credentials.password
    if not username or not password:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = authenticate_user(db, username, password)
    token = create_access_token(user, settings)
    return {"user": UserRead.from_user(user), "token": token}
