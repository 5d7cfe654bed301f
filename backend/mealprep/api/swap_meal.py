import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mealprep.api.auth import get_current_user
from mealprep.crud import meal_plan as crud_meal_plan
from mealprep.database import get_db
from mealprep.exceptions import NotFoundError
from mealprep.models.meal import Meal
from mealprep.models.user import User
from mealprep.schemas.envelope import ok
from mealprep.schemas.meal_plan import MealOut
from mealprep.schemas.swap import ApplySwapRequest, SlotTargets, SwapMealRequest, SwapOptionsResponse
from mealprep.services import generation_service, nutrition_service, swap_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/swap-meal", tags=["Swap Meal"])


def get_owned_meal(db: Session, meal_id: str, user: User) -> Meal:
    """A meal in someone else's plan reads as missing."""
    db_meal = swap_service.get_meal_by_id(db, meal_id)
    if db_meal is None or crud_meal_plan.get_meal_plan_for_user(db, db_meal.meal_plan_id, user.id) is None:
        raise NotFoundError("Meal not found")
    return db_meal


@router.post("")
def generate_swap_options(request: SwapMealRequest):
    """Three alternatives for one slot, sized to that slot's share of the day."""
    targets = nutrition_service.compute_slot_targets(
        request.meal_type, request.daily_calories, request.dietary_goals
    )
    options = generation_service.generate_swap_options(request)
    return ok(SwapOptionsResponse(mealOptions=options, target=SlotTargets(**targets)))


@router.post("/apply")
def apply_swap(
    request: ApplySwapRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if crud_meal_plan.get_meal_plan_for_user(db, request.meal_plan_id, current_user.id) is None:
        raise NotFoundError("Meal plan not found")

    db_meal = swap_service.swap_meal(db, request.meal_id, request.meal_plan_id, request.meal)
    return ok(MealOut.model_validate(db_meal))


@router.post("/{meal_id}/revert")
def revert_swap(
    meal_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    get_owned_meal(db, meal_id, current_user)
    db_meal = swap_service.revert_swap(db, meal_id)
    return ok(MealOut.model_validate(db_meal))
