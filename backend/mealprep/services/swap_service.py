import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from mealprep.crud import grocery as crud_grocery
from mealprep.crud import meal as crud_meal
from mealprep.crud.base import persistence_errors
from mealprep.exceptions import NotFoundError, PersistenceError
from mealprep.models.meal import Meal
from mealprep.schemas.swap import GroceryItemInput, MealOption

logger = logging.getLogger(__name__)

"""
Swap Service
------------
Replaces one stored meal with a chosen option and keeps the plan's grocery
list in step with it. Option generation lives in generation_service.
"""


def _meal_content(option: MealOption) -> dict:
    return {
        "recipe_name": option.recipe_name,
        "description": option.description,
        "image_url": option.image_url,
        "calories": option.calories,
        "protein": option.protein,
        "carbs": option.carbs,
        "fat": option.fats,
    }


@persistence_errors
def swap_meal(
    db: Session,
    meal_id: str,
    meal_plan_id: str,
    new_meal: MealOption,
    new_grocery_items: Optional[List[GroceryItemInput]] = None
) -> Meal:
    """
    1. Overwrite the meal's content columns and flag it swapped.
    2. Delete the grocery rows linked to this meal (by meal id only).
    3. Insert the option's grocery items linked to this meal.
    One commit for all three steps. Plan header totals are left alone.
    """
    db_meal = crud_meal.get_meal(db, meal_id)
    if db_meal is None or db_meal.meal_plan_id != meal_plan_id:
        raise NotFoundError(f"Meal {meal_id} not found in plan {meal_plan_id}")

    items = new_grocery_items if new_grocery_items is not None else new_meal.grocery_items
    try:
        crud_meal.update_meal_content(db, meal_id, _meal_content(new_meal), is_swapped=True, commit=False)
        removed = crud_grocery.delete_grocery_by_meal_id(db, meal_id, commit=False)
        if items:
            crud_grocery.create_grocery_items(
                db, meal_plan_id, [item.model_dump() for item in items], meal_id=meal_id, commit=False
            )
        db.commit()
    except PersistenceError:
        db.rollback()
        raise
    db.refresh(db_meal)
    logger.info(f"Swapped meal {meal_id} -> '{db_meal.recipe_name}' "
                f"({removed} grocery rows replaced by {len(items or [])})")
    return db_meal


def revert_swap(db: Session, meal_id: str) -> Meal:
    """Clears the swapped flag. Content and groceries stay as they are."""
    db_meal = crud_meal.set_swapped(db, meal_id, False)
    if db_meal is None:
        raise NotFoundError(f"Meal {meal_id} not found")
    return db_meal


def get_meals_by_plan_id(db: Session, meal_plan_id: str) -> List[Meal]:
    return crud_meal.get_meals_by_plan_id(db, meal_plan_id)


def get_meal_by_id(db: Session, meal_id: str) -> Optional[Meal]:
    return crud_meal.get_meal(db, meal_id)
