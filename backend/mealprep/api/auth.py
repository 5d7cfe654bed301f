from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from mealprep.crud import user as crud_user
from mealprep.database import get_db
from mealprep.exceptions import AuthRequired
from mealprep.models.user import User
from mealprep.utils.utils import decode_access_token

# Browser clients send the cookie set at login; API clients may use a bearer header
cookie_scheme = APIKeyCookie(name="access_token", auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthContext:
    """Who is calling. Injected per request; anonymous when user is None."""
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[int]:
        return self.user.id if self.user else None


def _user_from_token(db: Session, token: str) -> Optional[User]:
    try:
        payload = decode_access_token(token)
    except JWTError:
        # Expired or tampered token: treat as anonymous
        return None
    email = payload.get("sub")
    if email is None:
        return None
    return crud_user.get_user_by_email(db, email=email)


def get_auth_context(
    cookie_token: Optional[str] = Depends(cookie_scheme),
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> AuthContext:
    token = cookie_token or (bearer.credentials if bearer else None)
    if not token:
        return AuthContext()
    return AuthContext(user=_user_from_token(db, token))


def get_current_user(auth: AuthContext = Depends(get_auth_context)) -> User:
    if not auth.is_authenticated:
        raise AuthRequired("Session expired. Please re-login.")
    return auth.user
