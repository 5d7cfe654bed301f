from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session
from mealprep.crud.base import persistence_errors, finish
from mealprep.models.meal_plan import MealPlan

"""
Meal Plan CRUD
--------------
Pure Database Access Object for meal plan headers.
Assembly of a full plan (header + meals + groceries) lives in
mealprep.services.plan_service.
"""

TOTAL_FIELDS = (
    "total_weekly_calories",
    "total_weekly_protein",
    "total_weekly_carbs",
    "total_weekly_fat",
)


@persistence_errors
def create_meal_plan(db: Session, user_id: int, start_date: date, totals: dict, commit: bool = True) -> MealPlan:
    db_plan = MealPlan(
        user_id=user_id,
        start_date=start_date,
        **{field: float(totals.get(field, 0) or 0) for field in TOTAL_FIELDS}
    )
    db.add(db_plan)
    finish(db, commit, db_plan)
    return db_plan


@persistence_errors
def get_meal_plan(db: Session, plan_id: str) -> Optional[MealPlan]:
    return db.query(MealPlan).filter(MealPlan.id == plan_id).first()


@persistence_errors
def get_meal_plan_for_user(db: Session, plan_id: str, user_id: int) -> Optional[MealPlan]:
    """Plan lookup scoped to its owner; a foreign plan reads as missing."""
    return db.query(MealPlan).filter(
        MealPlan.id == plan_id,
        MealPlan.user_id == user_id
    ).first()


@persistence_errors
def get_latest_meal_plan_by_user_id(db: Session, user_id: int) -> Optional[MealPlan]:
    return db.query(MealPlan).filter(
        MealPlan.user_id == user_id
    ).order_by(MealPlan.created_at.desc()).first()


@persistence_errors
def get_all_meal_plans_by_user_id(db: Session, user_id: int) -> List[MealPlan]:
    return db.query(MealPlan).filter(
        MealPlan.user_id == user_id
    ).order_by(MealPlan.created_at.desc()).all()


@persistence_errors
def update_meal_plan_totals(db: Session, plan_id: str, totals: dict, commit: bool = True) -> Optional[MealPlan]:
    db_plan = db.query(MealPlan).filter(MealPlan.id == plan_id).first()
    if not db_plan:
        return None

    for field in TOTAL_FIELDS:
        if field in totals:
            setattr(db_plan, field, float(totals[field] or 0))

    finish(db, commit, db_plan)
    return db_plan


@persistence_errors
def delete_meal_plan(db: Session, plan_id: str) -> bool:
    """Delete a plan; meals and grocery items go with it (ORM cascade)."""
    db_plan = db.query(MealPlan).filter(MealPlan.id == plan_id).first()
    if not db_plan:
        return False
    db.delete(db_plan)
    db.commit()
    return True
