from collections import OrderedDict
from typing import Any, Dict, List

from mealprep.schemas.meal_plan import (
    DayMeals, DayPlan, FullMealPlan, GroceryEntry, MealLocal, MealOut,
    MealPlanData, PersistedPlan,
)
from mealprep.services import nutrition_service

"""
Plan View
---------
One display shape for both plan sources: a freshly generated draft and a
plan read back from the database map to the same MealPlanData.
"""

# DB meal_type -> view slot
MEAL_TYPE_TO_SLOT = {
    "Breakfast": "breakfast",
    "Lunch": "lunch",
    "Dinner": "dinner",
    "Snack": "snacks",
}


def _meal_local(meal: MealOut) -> MealLocal:
    return MealLocal(
        id=meal.id,
        recipe_name=meal.recipe_name,
        description=meal.description,
        image_url=meal.image_url,
        calories=meal.calories,
        protein=meal.protein,
        carbs=meal.carbs,
        fats=meal.fat,
        is_swapped=meal.is_swapped,
    )


def to_plan_data(full_plan: FullMealPlan) -> MealPlanData:
    """Groups stored meal rows into days and maps the stored groceries."""
    days: Dict[int, DayMeals] = OrderedDict()
    recipe_by_meal_id = {}
    for meal in full_plan.meals:
        recipe_by_meal_id[meal.id] = meal.recipe_name
        day_meals = days.setdefault(meal.day, DayMeals())
        slot = MEAL_TYPE_TO_SLOT.get(meal.meal_type)
        if slot == "snacks":
            day_meals.snacks.append(_meal_local(meal))
        elif slot is not None:
            setattr(day_meals, slot, _meal_local(meal))

    day_plans = [DayPlan(day=day, meals=meals) for day, meals in sorted(days.items())]
    nutrition_service.recompute_totals(day_plans)

    grocery_list = [
        GroceryEntry(
            id=item.id,
            ingredient_name=item.ingredient_name,
            quantity=item.quantity,
            category=item.category,
            estimated_price=item.estimated_price,
            is_bought=item.is_bought,
            recipe_name=recipe_by_meal_id.get(item.meal_id),
            meal_plan_id=item.meal_plan_id,
            meal_id=item.meal_id,
            is_unassigned=item.is_unassigned,
        )
        for item in full_plan.groceries
    ]
    return MealPlanData(days=day_plans, grocery_list=grocery_list)


def to_plan_source(full_plan: FullMealPlan) -> PersistedPlan:
    return PersistedPlan(plan_id=full_plan.plan.id, plan=to_plan_data(full_plan))


def grocery_summary(items: List[GroceryEntry]) -> Dict[str, Any]:
    """Items grouped by category (sorted), with counts and the estimated total."""
    categories: Dict[str, List[GroceryEntry]] = {}
    for item in items:
        categories.setdefault(item.category or "Other", []).append(item)

    return {
        "categories": OrderedDict(sorted(categories.items())),
        "total_items": len(items),
        "bought_items": sum(1 for item in items if item.is_bought),
        "estimated_total": sum(item.estimated_price for item in items),
    }
