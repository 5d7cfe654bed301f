from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mealprep.api.auth import get_current_user
from mealprep.crud import dietary_profile as crud_profile
from mealprep.database import get_db
from mealprep.models.user import User
from mealprep.schemas.dietary_profile import DietaryProfileRequest, DietaryProfileResponse
from mealprep.schemas.envelope import ok

router = APIRouter(prefix="/api/prep-plan", tags=["prep-plan"])


# GET - Saved preferences of the current user (null when none yet)
@router.get("")
def read_my_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    db_profile = crud_profile.get_profile_by_user_id(db, user_id=current_user.id)
    if db_profile is None:
        return ok(None)
    return ok(DietaryProfileResponse.model_validate(db_profile))


# POST - Create or overwrite the current user's preferences
@router.post("")
def save_my_profile(
    profile: DietaryProfileRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    db_profile = crud_profile.save_profile(db, current_user.id, profile)
    return ok(DietaryProfileResponse.model_validate(db_profile))


# DELETE - Remove the current user's preferences
@router.delete("")
def delete_my_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    deleted = crud_profile.delete_profile_by_user_id(db, user_id=current_user.id)
    return ok({"deleted": deleted})
