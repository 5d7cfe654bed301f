from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mealprep.api.auth import get_current_user
from mealprep.crud import grocery as crud_grocery
from mealprep.crud import meal_plan as crud_meal_plan
from mealprep.database import get_db
from mealprep.exceptions import NotFoundError, ValidationError
from mealprep.models.user import User
from mealprep.schemas.envelope import ok
from mealprep.schemas.grocery import GroceryAddRequest, GroceryBudgetResponse, GroceryToggleRequest
from mealprep.schemas.meal_plan import GroceryItemOut
from mealprep.services import swap_service

router = APIRouter(prefix="/api/grocery", tags=["Grocery"])


def _require_plan(db: Session, meal_plan_id: Optional[str], user: User) -> str:
    if not meal_plan_id:
        raise ValidationError("meal_plan_id is required")
    if crud_meal_plan.get_meal_plan_for_user(db, meal_plan_id, user.id) is None:
        raise NotFoundError("Meal plan not found")
    return meal_plan_id


# GET - Grocery list of a plan, grouped by category order
@router.get("")
def get_grocery_list(
    meal_plan_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    _require_plan(db, meal_plan_id, current_user)
    items = crud_grocery.get_grocery_list(db, meal_plan_id)
    return ok([GroceryItemOut.model_validate(item) for item in items])


# POST - Add ingredients for one meal
@router.post("")
def add_grocery_items(
    request: GroceryAddRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    _require_plan(db, request.meal_plan_id, current_user)
    db_meal = swap_service.get_meal_by_id(db, request.meal_id)
    if db_meal is None or db_meal.meal_plan_id != request.meal_plan_id:
        raise NotFoundError("Meal not found")

    items = crud_grocery.create_grocery_items(
        db, request.meal_plan_id, [item.model_dump() for item in request.items], meal_id=request.meal_id
    )
    return ok([GroceryItemOut.model_validate(item) for item in items])


# PATCH - Toggle is_bought (server writes the negation of current_status)
@router.patch("")
def toggle_grocery_item(
    request: GroceryToggleRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if crud_grocery.get_grocery_item_for_user(db, request.grocery_id, current_user.id) is None:
        raise NotFoundError("Grocery item not found")

    db_item = crud_grocery.toggle_bought(db, request.grocery_id, request.current_status)
    return ok(GroceryItemOut.model_validate(db_item))


# DELETE - Remove one grocery item
@router.delete("")
def delete_grocery_item(
    id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not id:
        raise ValidationError("id is required")
    if crud_grocery.get_grocery_item_for_user(db, id, current_user.id) is None:
        raise NotFoundError("Grocery item not found")

    crud_grocery.delete_grocery_item(db, id)
    return ok({"deleted": id})


@router.get("/budget")
def get_weekly_budget(
    meal_plan_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    _require_plan(db, meal_plan_id, current_user)
    total = crud_grocery.get_weekly_budget(db, meal_plan_id)
    items = len(crud_grocery.get_grocery_list(db, meal_plan_id))
    return ok(GroceryBudgetResponse(meal_plan_id=meal_plan_id, total=total, items=items))
