from typing import List, Optional
from sqlalchemy import case
from sqlalchemy.orm import Session
from mealprep.crud.base import persistence_errors, finish
from mealprep.models.meal import MEAL_TYPES, Meal

# Content columns a swap may overwrite. id / plan / day / slot never change.
CONTENT_FIELDS = ("recipe_name", "description", "image_url", "calories", "protein", "carbs", "fat")

_slot_order = case(
    {meal_type: i for i, meal_type in enumerate(MEAL_TYPES)},
    value=Meal.meal_type,
    else_=len(MEAL_TYPES)
)


@persistence_errors
def create_meals(db: Session, meal_plan_id: str, meals: List[dict], commit: bool = True) -> List[Meal]:
    """Bulk insert meal rows stamped with the plan id, ids returned in input order."""
    db_meals = [Meal(meal_plan_id=meal_plan_id, **meal) for meal in meals]
    db.add_all(db_meals)
    finish(db, commit, *db_meals)
    return db_meals


@persistence_errors
def get_meal(db: Session, meal_id: str) -> Optional[Meal]:
    return db.query(Meal).filter(Meal.id == meal_id).first()


@persistence_errors
def get_meals_by_plan_id(db: Session, meal_plan_id: str) -> List[Meal]:
    """Meals of a plan, days ascending, then Breakfast, Lunch, Dinner, Snack."""
    return db.query(Meal).filter(
        Meal.meal_plan_id == meal_plan_id
    ).order_by(Meal.day.asc(), _slot_order).all()


@persistence_errors
def update_meal_content(db: Session, meal_id: str, content: dict, is_swapped: bool = None, commit: bool = True) -> Optional[Meal]:
    db_meal = db.query(Meal).filter(Meal.id == meal_id).first()
    if not db_meal:
        return None

    for key in CONTENT_FIELDS:
        if key in content and content[key] is not None:
            setattr(db_meal, key, content[key])
    if is_swapped is not None:
        db_meal.is_swapped = is_swapped

    finish(db, commit, db_meal)
    return db_meal


@persistence_errors
def set_swapped(db: Session, meal_id: str, is_swapped: bool, commit: bool = True) -> Optional[Meal]:
    db_meal = db.query(Meal).filter(Meal.id == meal_id).first()
    if not db_meal:
        return None
    db_meal.is_swapped = is_swapped
    finish(db, commit, db_meal)
    return db_meal
