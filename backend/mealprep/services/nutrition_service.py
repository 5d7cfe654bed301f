import logging
from typing import Any, Dict, Iterable, List, Optional

from mealprep.schemas.meal_plan import DayPlan, MealLocal, NutrientTotals, WeeklySummary, coerce_number

logger = logging.getLogger(__name__)

"""
Nutrition Service
-----------------
Pure calorie / macro arithmetic for meal plans.
Does not touch the database or the LLM.
"""

# Share of the daily calories per slot
MEAL_CALORIE_SHARES = {
    "breakfast": 0.25,
    "lunch": 0.35,
    "dinner": 0.30,
    "snacks": 0.10,
}

# Share of calories per macro, by goal
MACRO_RATIOS = {
    "Weight Loss": {"protein": 0.30, "carbs": 0.40, "fat": 0.30},
    "Muscle Gain": {"protein": 0.30, "carbs": 0.40, "fat": 0.30},
    "Maintenance": {"protein": 0.25, "carbs": 0.45, "fat": 0.30},
}

KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}

SWAP_TOLERANCE = 0.15

MACRO_KEYS = ("calories", "protein", "carbs", "fats")


def get_macro_ratios(goal: str) -> Dict[str, float]:
    return MACRO_RATIOS.get(goal, MACRO_RATIOS["Maintenance"])


def compute_slot_targets(meal_type: str, daily_calories: int, goal: str) -> Dict[str, Any]:
    """
    Calorie and macro envelope for a single slot.

    Example:
        lunch, 2200 kcal, Maintenance -> 770 kcal, 48g protein, 87g carbs, 26g fat
    """
    if meal_type not in MEAL_CALORIE_SHARES:
        raise ValueError(f"Unknown meal slot '{meal_type}'")

    meal_calories = daily_calories * MEAL_CALORIE_SHARES[meal_type]
    ratios = get_macro_ratios(goal)

    return {
        "meal_type": meal_type,
        "calories": round(meal_calories),
        "protein": round(meal_calories * ratios["protein"] / KCAL_PER_GRAM["protein"]),
        "carbs": round(meal_calories * ratios["carbs"] / KCAL_PER_GRAM["carbs"]),
        "fat": round(meal_calories * ratios["fat"] / KCAL_PER_GRAM["fat"]),
    }


def slot_calorie_budget(daily_calories: int) -> Dict[str, int]:
    return {slot: round(daily_calories * share) for slot, share in MEAL_CALORIE_SHARES.items()}


def _macros_of(meal: Any) -> Dict[str, float]:
    """Reads the four macros off a MealLocal or a plain dict; missing -> 0."""
    if meal is None:
        return {key: 0.0 for key in MACRO_KEYS}
    if isinstance(meal, MealLocal):
        return {key: getattr(meal, key) for key in MACRO_KEYS}
    return {
        "calories": coerce_number(meal.get("calories")),
        "protein": coerce_number(meal.get("protein", meal.get("protein_g"))),
        "carbs": coerce_number(meal.get("carbs", meal.get("carbs_g"))),
        "fats": coerce_number(meal.get("fats", meal.get("fat", meal.get("fats_g")))),
    }


def sum_macros(meals: Iterable[Any]) -> Dict[str, float]:
    totals = {key: 0.0 for key in MACRO_KEYS}
    for meal in meals:
        for key, value in _macros_of(meal).items():
            totals[key] += value
    return totals


def compute_day_totals(day: DayPlan) -> NutrientTotals:
    """
    Breakfast + lunch + dinner + (sum of snacks). Idempotent: only reads
    the leaf meals, never the previous totals.
    """
    snack_totals = sum_macros(day.meals.snacks)
    main_totals = sum_macros([day.meals.breakfast, day.meals.lunch, day.meals.dinner])
    return NutrientTotals(**{key: main_totals[key] + snack_totals[key] for key in MACRO_KEYS})


def recompute_totals(days: List[DayPlan]) -> List[DayPlan]:
    for day in days:
        day.totals = compute_day_totals(day)
    return days


def weekly_summary(days: List[DayPlan]) -> WeeklySummary:
    """Weekly totals, rounded per-day averages and macro calorie split."""
    if not days:
        zero = NutrientTotals()
        return WeeklySummary(days=0, totals=zero, averages=zero,
                             macro_percentages={"protein": 0, "carbs": 0, "fats": 0})

    totals = {key: sum(getattr(compute_day_totals(day), key) for day in days) for key in MACRO_KEYS}
    averages = {key: round(value / len(days)) for key, value in totals.items()}

    macro_kcal = averages["protein"] * 4 + averages["carbs"] * 4 + averages["fats"] * 9
    if macro_kcal > 0:
        percentages = {
            "protein": round(averages["protein"] * 4 / macro_kcal * 100),
            "carbs": round(averages["carbs"] * 4 / macro_kcal * 100),
            "fats": round(averages["fats"] * 9 / macro_kcal * 100),
        }
    else:
        percentages = {"protein": 0, "carbs": 0, "fats": 0}

    return WeeklySummary(
        days=len(days),
        totals=NutrientTotals(**totals),
        averages=NutrientTotals(**averages),
        macro_percentages=percentages,
    )


def weekly_totals_from_meals(meals: Iterable[Any]) -> Dict[str, float]:
    """Header totals for a plan, straight from its meal rows (DB uses 'fat')."""
    totals = sum_macros(
        meal if isinstance(meal, (dict, MealLocal)) else {
            "calories": meal.calories, "protein": meal.protein,
            "carbs": meal.carbs, "fat": meal.fat
        }
        for meal in meals
    )
    return {
        "total_weekly_calories": totals["calories"],
        "total_weekly_protein": totals["protein"],
        "total_weekly_carbs": totals["carbs"],
        "total_weekly_fat": totals["fats"],
    }


def is_within_tolerance(value: float, target: float, tolerance: float = SWAP_TOLERANCE) -> Optional[bool]:
    if not target:
        return None
    return abs(value - target) / target <= tolerance
