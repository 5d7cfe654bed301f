import logging
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from mealprep.exceptions import GenerationError
from mealprep.schemas.dietary_profile import MealPlanPreferences
from mealprep.schemas.meal_plan import WeeklyPlanDraft
from mealprep.schemas.swap import MealOption, SwapMealRequest
from mealprep.services import llm_service
from mealprep.services import nutrition_service
from mealprep.utils.llm_prompts.meal_plan_prompts import (
    MEAL_PLAN_SYSTEM_PROMPT,
    MEAL_PLAN_USER_PROMPT,
    MEAL_PLAN_CUISINE_BLOCK,
    SWAP_MEAL_SYSTEM_PROMPT,
    SWAP_MEAL_USER_PROMPT,
    SWAP_MEAL_CUISINE_BLOCK,
)

logger = logging.getLogger(__name__)

"""
Generation Client
-----------------
1. Builds the natural-language request from the user's preferences.
2. Calls the hosted model in JSON mode (llm_service).
3. Validates the reply into typed payloads.
Never touches the database.
"""

PLAN_DAYS = 7
SWAP_OPTION_COUNT = 3


def _list_or(values: Optional[List[str]], fallback: str) -> str:
    return ", ".join(values) if values else fallback


def build_meal_plan_prompt(prefs: MealPlanPreferences) -> str:
    ratios = nutrition_service.get_macro_ratios(prefs.dietary_goals)
    budget = nutrition_service.slot_calorie_budget(prefs.calories_target)
    cuisines = prefs.cuisine_preferences or []

    return MEAL_PLAN_USER_PROMPT.format(
        goal=prefs.dietary_goals,
        calories=prefs.calories_target,
        diet_type=prefs.diet_type or "Standard",
        allergies=_list_or(prefs.allergies, "None"),
        cuisines_label=_list_or(cuisines, "No preference"),
        cuisine_block=MEAL_PLAN_CUISINE_BLOCK.format(cuisines=", ".join(cuisines)) if cuisines else "",
        dislikes=_list_or(prefs.dislikes, "None"),
        breakfast_pct=round(nutrition_service.MEAL_CALORIE_SHARES["breakfast"] * 100),
        lunch_pct=round(nutrition_service.MEAL_CALORIE_SHARES["lunch"] * 100),
        dinner_pct=round(nutrition_service.MEAL_CALORIE_SHARES["dinner"] * 100),
        snacks_pct=round(nutrition_service.MEAL_CALORIE_SHARES["snacks"] * 100),
        breakfast_kcal=budget["breakfast"],
        lunch_kcal=budget["lunch"],
        dinner_kcal=budget["dinner"],
        snacks_kcal=budget["snacks"],
        protein_pct=round(ratios["protein"] * 100),
        carbs_pct=round(ratios["carbs"] * 100),
        fat_pct=round(ratios["fat"] * 100),
    )


def build_swap_prompt(request: SwapMealRequest, targets: dict) -> str:
    cuisines = request.cuisine_preferences or []
    cuisine_block = ""
    if cuisines:
        cuisine_block = SWAP_MEAL_CUISINE_BLOCK.format(meal_type=request.meal_type, cuisines=", ".join(cuisines))

    return SWAP_MEAL_USER_PROMPT.format(
        meal_type=request.meal_type,
        preference=request.preference,
        goal=request.dietary_goals,
        daily_calories=request.daily_calories,
        target_calories=targets["calories"],
        target_protein=targets["protein"],
        target_carbs=targets["carbs"],
        target_fat=targets["fat"],
        diet_type=request.diet_type or "Standard",
        allergies=_list_or(request.allergies, "None"),
        cuisines_label=_list_or(cuisines, "No preference"),
        cuisine_block=cuisine_block,
        dislikes=_list_or(request.dislikes, "None"),
        tolerance_pct=round(nutrition_service.SWAP_TOLERANCE * 100),
    )


def parse_meal_plan(raw: dict) -> WeeklyPlanDraft:
    """
    Validates a raw model reply into a WeeklyPlanDraft with exactly 7 days
    (sorted by day number) and totals recomputed from the slot macros.
    """
    try:
        draft = WeeklyPlanDraft.model_validate(raw)
    except PydanticValidationError as e:
        raise GenerationError("Model reply does not match the meal plan shape", details=str(e)) from e

    day_numbers = sorted(day.day for day in draft.days)
    if day_numbers != list(range(1, PLAN_DAYS + 1)):
        raise GenerationError(
            f"Model returned {len(draft.days)} days, expected days 1-{PLAN_DAYS}",
            details=f"days: {day_numbers}"
        )

    draft.days.sort(key=lambda d: d.day)
    nutrition_service.recompute_totals(draft.days)
    return draft


def parse_swap_options(raw: dict) -> List[MealOption]:
    options_raw = raw.get("mealOptions") or raw.get("meal_options")
    if not isinstance(options_raw, list):
        raise GenerationError("Model reply has no mealOptions list")

    try:
        options = [MealOption.model_validate(option) for option in options_raw]
    except PydanticValidationError as e:
        raise GenerationError("Model reply does not match the meal option shape", details=str(e)) from e

    if len(options) < SWAP_OPTION_COUNT:
        raise GenerationError(f"Model returned {len(options)} meal options, expected {SWAP_OPTION_COUNT}")
    if len(options) > SWAP_OPTION_COUNT:
        logger.info(f"Dropping {len(options) - SWAP_OPTION_COUNT} extra meal options")
    return options[:SWAP_OPTION_COUNT]


def generate_plan(prefs: MealPlanPreferences) -> WeeklyPlanDraft:
    logger.info(f"Generating 7-day plan: {prefs.dietary_goals}, {prefs.calories_target} kcal")
    raw = llm_service.call_llm_json(
        MEAL_PLAN_SYSTEM_PROMPT,
        build_meal_plan_prompt(prefs),
        temperature=0.1,
    )
    draft = parse_meal_plan(raw)
    logger.info(f"Plan generated: {len(draft.days)} days, {len(draft.grocery_list)} grocery items")
    return draft


def generate_swap_options(request: SwapMealRequest) -> List[MealOption]:
    targets = nutrition_service.compute_slot_targets(
        request.meal_type, request.daily_calories, request.dietary_goals
    )
    logger.info(f"Generating swap options for {request.meal_type}: target {targets['calories']} kcal")

    raw = llm_service.call_llm_json(
        SWAP_MEAL_SYSTEM_PROMPT,
        build_swap_prompt(request, targets),
        temperature=0.2,
    )
    options = parse_swap_options(raw)

    for option in options:
        if nutrition_service.is_within_tolerance(option.calories, targets["calories"]) is False:
            logger.warning(f"Option '{option.recipe_name}' ({option.calories} kcal) is outside "
                           f"±{round(nutrition_service.SWAP_TOLERANCE * 100)}% of {targets['calories']} kcal")
    return options
