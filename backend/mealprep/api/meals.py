from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mealprep.api.auth import get_current_user
from mealprep.api.swap_meal import get_owned_meal
from mealprep.crud import meal_plan as crud_meal_plan
from mealprep.database import get_db
from mealprep.exceptions import NotFoundError, ValidationError
from mealprep.models.user import User
from mealprep.schemas.envelope import ok
from mealprep.schemas.meal_plan import MealOut
from mealprep.services import swap_service

router = APIRouter(prefix="/api/meals", tags=["Meals"])


@router.get("")
def list_meals(
    meal_plan_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not meal_plan_id:
        raise ValidationError("meal_plan_id is required")
    if crud_meal_plan.get_meal_plan_for_user(db, meal_plan_id, current_user.id) is None:
        raise NotFoundError("Meal plan not found")

    meals = swap_service.get_meals_by_plan_id(db, meal_plan_id)
    return ok([MealOut.model_validate(meal) for meal in meals])


@router.get("/{meal_id}")
def get_meal(
    meal_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return ok(MealOut.model_validate(get_owned_meal(db, meal_id, current_user)))
