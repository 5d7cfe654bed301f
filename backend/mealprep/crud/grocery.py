from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from mealprep.crud.base import persistence_errors, finish
from mealprep.models.grocery_item import GroceryItem
from mealprep.models.meal_plan import MealPlan


@persistence_errors
def create_grocery_items(db: Session, meal_plan_id: str, items: List[dict], meal_id: str = None, commit: bool = True) -> List[GroceryItem]:
    """
    Bulk insert grocery rows for a plan. A per-item "meal_id" wins over the
    meal_id argument, which is used when every item belongs to one meal.
    """
    db_items = []
    for item in items:
        item_meal_id = item.get("meal_id", meal_id)
        db_items.append(GroceryItem(
            meal_plan_id=meal_plan_id,
            meal_id=item_meal_id,
            ingredient_name=item["ingredient_name"],
            quantity=item.get("quantity") or "",
            category=item.get("category") or "Other",
            estimated_price=float(item.get("estimated_price") or 0),
            is_bought=False,
            is_unassigned=bool(item.get("is_unassigned", False)),
        ))
    db.add_all(db_items)
    finish(db, commit, *db_items)
    return db_items


@persistence_errors
def get_grocery_item_for_user(db: Session, grocery_id: str, user_id: int) -> Optional[GroceryItem]:
    return db.query(GroceryItem).join(MealPlan).filter(
        GroceryItem.id == grocery_id,
        MealPlan.user_id == user_id
    ).first()


@persistence_errors
def get_grocery_list(db: Session, meal_plan_id: str) -> List[GroceryItem]:
    return db.query(GroceryItem).filter(
        GroceryItem.meal_plan_id == meal_plan_id
    ).order_by(GroceryItem.category.asc(), GroceryItem.ingredient_name.asc()).all()


@persistence_errors
def get_grocery_by_meal_id(db: Session, meal_id: str) -> List[GroceryItem]:
    return db.query(GroceryItem).filter(
        GroceryItem.meal_id == meal_id
    ).order_by(GroceryItem.category.asc()).all()


@persistence_errors
def toggle_bought(db: Session, grocery_id: str, current_status: bool) -> Optional[GroceryItem]:
    """Writes the negation of the status the client last saw."""
    db_item = db.query(GroceryItem).filter(GroceryItem.id == grocery_id).first()
    if not db_item:
        return None
    db_item.is_bought = not current_status
    db.commit()
    db.refresh(db_item)
    return db_item


@persistence_errors
def delete_grocery_item(db: Session, grocery_id: str) -> bool:
    db_item = db.query(GroceryItem).filter(GroceryItem.id == grocery_id).first()
    if not db_item:
        return False
    db.delete(db_item)
    db.commit()
    return True


@persistence_errors
def delete_grocery_by_meal_id(db: Session, meal_id: str, commit: bool = True) -> int:
    """Only rows linked to this meal go; other meals' items are untouched."""
    items = db.query(GroceryItem).filter(GroceryItem.meal_id == meal_id).all()
    for item in items:
        db.delete(item)
    finish(db, commit)
    return len(items)


@persistence_errors
def get_weekly_budget(db: Session, meal_plan_id: str) -> float:
    total = db.query(func.coalesce(func.sum(GroceryItem.estimated_price), 0.0)).filter(
        GroceryItem.meal_plan_id == meal_plan_id
    ).scalar()
    return float(total or 0)
