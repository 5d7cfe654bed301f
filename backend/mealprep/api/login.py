from fastapi import APIRouter, Depends, Response
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from typing import Any

from mealprep.database import get_db
from mealprep.crud import user as crud_user
from mealprep.exceptions import AuthRequired
from mealprep.models.user import User
from mealprep.schemas.envelope import ok
from mealprep.schemas.user import UserLogin
from mealprep.utils.utils import verify_password, create_access_token, ACCESS_TOKEN_EXPIRE_MINUTES

router = APIRouter(tags=["login"])


def set_session_cookie(response: Response, access_token: str):
    response.set_cookie(
        key="access_token",
        value=access_token,
        httponly=True,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        expires=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
        secure=False  # Set to True in production (HTTPS)
    )


def _authenticate(db: Session, email: str, password: str) -> User:
    user = crud_user.get_user_by_email(db, email=email)
    if not user or not verify_password(password, user.password):
        raise AuthRequired("Incorrect email or password")
    return user


def _session_for(response: Response, user: User) -> dict:
    access_token = create_access_token(data={"sub": user.email})
    set_session_cookie(response, access_token)
    return ok({"access_token": access_token, "token_type": "bearer", "user_id": user.id})


@router.post("/login", response_model=Any)
def login_for_access_token(
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    OAuth2 compatible token login, get an access token for future requests.
    """
    user = _authenticate(db, form_data.username, form_data.password)
    return _session_for(response, user)


@router.post("/login/json", response_model=Any)
def login_json(
    response: Response,
    login_data: UserLogin,
    db: Session = Depends(get_db)
):
    """
    JSON-based login for API clients that prefer JSON body over Form Data.
    """
    user = _authenticate(db, login_data.email, login_data.password)
    return _session_for(response, user)


@router.post("/login/logout")
def logout(response: Response):
    """
    Logout the user by clearing the access_token cookie.
    """
    response.delete_cookie("access_token")
    return ok({"message": "Logged out successfully"})
