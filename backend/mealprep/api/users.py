from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from mealprep.api.auth import get_current_user
from mealprep.api.login import set_session_cookie
from mealprep.crud import user as crud_user
from mealprep.database import get_db
from mealprep.exceptions import ValidationError
from mealprep.models.user import User
from mealprep.schemas.envelope import ok
from mealprep.schemas.user import UserCreate, UserResponse, UserSignupResponse
from mealprep.utils.utils import create_access_token

router = APIRouter(prefix="/users", tags=["users"])


# POST - Signup (Create new user + Login)
@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    response: Response,
    user: UserCreate,
    db: Session = Depends(get_db)
):
    # Check if email already exists
    if crud_user.get_user_by_email(db, email=user.email):
        raise ValidationError("Email already registered")

    new_user = crud_user.create_user(db=db, user=user)

    access_token = create_access_token(data={"sub": new_user.email})
    set_session_cookie(response, access_token)

    return ok(UserSignupResponse(
        user=UserResponse.model_validate(new_user),
        access_token=access_token,
        token_type="bearer"
    ))


# GET - Get current user
@router.get("/me")
def read_me(current_user: User = Depends(get_current_user)):
    return ok(UserResponse.model_validate(current_user))


# DELETE - Delete current user (profile and plans go with it)
@router.delete("/me")
def delete_me(
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    crud_user.delete_user(db, user_id=current_user.id)
    response.delete_cookie("access_token")
    return ok({"message": "User deleted successfully"})
