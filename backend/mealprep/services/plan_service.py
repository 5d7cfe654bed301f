import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from mealprep.crud import dietary_profile as crud_profile
from mealprep.crud import grocery as crud_grocery
from mealprep.crud import meal as crud_meal
from mealprep.crud import meal_plan as crud_meal_plan
from mealprep.crud.base import persistence_errors
from mealprep.exceptions import PersistenceError
from mealprep.models.meal_plan import MealPlan
from mealprep.schemas.dietary_profile import MealPlanPreferences
from mealprep.schemas.meal_plan import (
    DraftPlan, FullMealPlan, GroceryItemOut, MealLocal, MealOut,
    MealPlanHeader, PersistedPlan, WeeklyPlanDraft,
)
from mealprep.services import nutrition_service
from mealprep.services import plan_view

logger = logging.getLogger(__name__)

"""
Plan Assembly Service
---------------------
Turns a generated WeeklyPlanDraft into rows, writes header + meals +
groceries in one transaction and reads a full plan back for display.
"""

# View slot -> DB meal_type
SLOT_TO_MEAL_TYPE = {
    "breakfast": "Breakfast",
    "lunch": "Lunch",
    "dinner": "Dinner",
    "snacks": "Snack",
}


def _meal_row(day: int, meal_type: str, meal: MealLocal) -> dict:
    return {
        "day": day,
        "meal_type": meal_type,
        "recipe_name": meal.recipe_name,
        "description": meal.description,
        "image_url": meal.image_url,
        "calories": meal.calories,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fat": meal.fats,
        "is_swapped": False,
    }


def build_plan_rows(draft: WeeklyPlanDraft, start_date: date = None) -> Tuple[dict, List[dict], List[dict]]:
    """
    Flattens a draft into (header, meal rows, grocery rows).
    Grocery rows keep the generated recipe name under "temp_recipe_name";
    create_full_plan uses it as the join key to the inserted meals.
    """
    meals = []
    for day in draft.days:
        for slot in ("breakfast", "lunch", "dinner"):
            meal = getattr(day.meals, slot)
            if meal is not None:
                meals.append(_meal_row(day.day, SLOT_TO_MEAL_TYPE[slot], meal))
        for snack in day.meals.snacks:
            meals.append(_meal_row(day.day, "Snack", snack))

    groceries = [
        {
            "ingredient_name": item.ingredient_name,
            "quantity": item.quantity,
            "category": item.category,
            "estimated_price": item.estimated_price,
            "temp_recipe_name": item.recipe_name,
        }
        for item in draft.grocery_list
    ]

    header = {"start_date": start_date or date.today()}
    header.update(nutrition_service.weekly_totals_from_meals(meals))
    return header, meals, groceries


@persistence_errors
def create_full_plan(db: Session, user_id: int, header: dict, meals: List[dict], groceries: List[dict]) -> str:
    """
    1. Insert the plan header.
    2. Insert the meals stamped with the new plan id.
    3. Join each grocery row to the inserted meal whose recipe_name equals
       its temp_recipe_name exactly. No match -> meal_id None, is_unassigned.
    4. Commit once and return the plan id.
    Any failure rolls the whole plan back.
    """
    try:
        plan_id = _insert_plan_rows(db, user_id, header, meals, groceries)
        db.commit()
    except PersistenceError:
        db.rollback()
        raise
    return plan_id


def _insert_plan_rows(db: Session, user_id: int, header: dict, meals: List[dict], groceries: List[dict]) -> str:
    plan = crud_meal_plan.create_meal_plan(db, user_id, header.get("start_date") or date.today(), header, commit=False)
    db_meals = crud_meal.create_meals(db, plan.id, meals, commit=False)

    meal_ids_by_name: Dict[str, str] = {}
    for db_meal in db_meals:
        if db_meal.recipe_name:
            # First meal wins when the model repeated a name
            meal_ids_by_name.setdefault(db_meal.recipe_name, db_meal.id)

    grocery_rows = []
    unassigned = 0
    for grocery in groceries:
        join_key = grocery.get("temp_recipe_name")
        meal_id = meal_ids_by_name.get(join_key) if join_key else None
        if meal_id is None:
            unassigned += 1
        grocery_rows.append({
            "ingredient_name": grocery["ingredient_name"],
            "quantity": grocery.get("quantity"),
            "category": grocery.get("category"),
            "estimated_price": grocery.get("estimated_price"),
            "meal_id": meal_id,
            "is_unassigned": meal_id is None,
        })
    crud_grocery.create_grocery_items(db, plan.id, grocery_rows, commit=False)

    logger.info(f"Inserted plan {plan.id}: {len(db_meals)} meals, {len(grocery_rows)} groceries "
                f"({unassigned} unassigned)")
    return plan.id


def _full_plan(db: Session, plan: Optional[MealPlan]) -> Optional[FullMealPlan]:
    if plan is None:
        return None
    meals = crud_meal.get_meals_by_plan_id(db, plan.id)
    groceries = crud_grocery.get_grocery_list(db, plan.id)
    return FullMealPlan(
        plan=MealPlanHeader.model_validate(plan),
        meals=[MealOut.model_validate(m) for m in meals],
        groceries=[GroceryItemOut.model_validate(g) for g in groceries],
    )


def get_full_meal_plan(db: Session, plan_id: str, user_id: int = None) -> Optional[FullMealPlan]:
    """Header, meals (day ascending) and groceries (category ascending); None if missing."""
    if user_id is None:
        plan = crud_meal_plan.get_meal_plan(db, plan_id)
    else:
        plan = crud_meal_plan.get_meal_plan_for_user(db, plan_id, user_id)
    return _full_plan(db, plan)


def get_latest_meal_plan_by_user_id(db: Session, user_id: int) -> Optional[MealPlan]:
    return crud_meal_plan.get_latest_meal_plan_by_user_id(db, user_id)


def get_all_meal_plans_by_user_id(db: Session, user_id: int) -> List[MealPlan]:
    return crud_meal_plan.get_all_meal_plans_by_user_id(db, user_id)


def get_latest_full_meal_plan(db: Session, user_id: int) -> Optional[FullMealPlan]:
    return _full_plan(db, crud_meal_plan.get_latest_meal_plan_by_user_id(db, user_id))


def recompute_plan_totals(db: Session, plan_id: str) -> Optional[MealPlan]:
    """Explicit refresh of the weekly header totals from the current meals."""
    meals = crud_meal.get_meals_by_plan_id(db, plan_id)
    return crud_meal_plan.update_meal_plan_totals(
        db, plan_id, nutrition_service.weekly_totals_from_meals(meals)
    )


def delete_meal_plan(db: Session, plan_id: str) -> bool:
    return crud_meal_plan.delete_meal_plan(db, plan_id)


def save_generated_plan(db: Session, user_id: int, prefs: MealPlanPreferences, draft: WeeklyPlanDraft):
    """
    Stores the preferences and the generated plan for a signed-in user.
    A storage failure does not lose the generated plan: it comes back as a
    draft with saved_to_db False and the error message. If only the read-back
    fails, the saved plan id is returned with the generated days.
    """
    try:
        crud_profile.save_profile(db, user_id, prefs)
        header, meals, groceries = build_plan_rows(draft)
        plan_id = create_full_plan(db, user_id, header, meals, groceries)
    except PersistenceError as e:
        logger.error(f"Error saving generated plan for user {user_id}: {e.message}")
        return DraftPlan(plan=draft, save_error=e.message)

    # The plan is committed at this point; a failed read-back still reports it as saved
    try:
        full_plan = get_full_meal_plan(db, plan_id)
    except PersistenceError as e:
        logger.error(f"Error reading back meal plan {plan_id}: {e.message}")
        full_plan = None
    if full_plan is None:
        return PersistedPlan(plan_id=plan_id, plan=draft)
    return PersistedPlan(plan_id=plan_id, plan=plan_view.to_plan_data(full_plan))
