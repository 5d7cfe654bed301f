import re
from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from datetime import date, datetime


def coerce_number(value: Any) -> float:
    """
    Normalises a macro value coming from the model or the browser.
    None / "" -> 0, "25g" -> 25.0, "1,200 kcal" -> 1200.0
    """
    if value is None or value == "":
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    match = re.search(r'-?\d+(?:\.\d+)?', str(value).replace(",", ""))
    return float(match.group(0)) if match else 0.0


def coerce_price(value: Any) -> float:
    """
    Prices are whole currency units, so "." and "," between digit groups are
    thousands separators: "Rp 15.000" -> 15000.0, "1,250,000" -> 1250000.0.
    A lone decimal part ("12.5") is kept.
    """
    if value is None or value == "" or isinstance(value, (int, float)):
        return max(coerce_number(value), 0.0)
    match = re.search(r'\d[\d.,]*', str(value))
    if not match:
        return 0.0
    token = match.group(0).rstrip(".,")
    if re.fullmatch(r'\d{1,3}(?:[.,]\d{3})+', token):
        return float(re.sub(r'[.,]', '', token))
    return coerce_number(token)


class MacroFields(BaseModel):
    calories: float = 0.0
    protein: float = Field(0.0, validation_alias=AliasChoices("protein", "protein_g"))
    carbs: float = Field(0.0, validation_alias=AliasChoices("carbs", "carbs_g"))
    fats: float = Field(0.0, validation_alias=AliasChoices("fats", "fat", "fats_g"))

    @field_validator("calories", "protein", "carbs", "fats", mode="before")
    @classmethod
    def _numeric(cls, v):
        return coerce_number(v)


class NutrientTotals(MacroFields):
    pass


class MealLocal(MacroFields):
    id: Optional[str] = None
    recipe_name: str = ""
    description: str = ""
    image_url: str = ""
    is_swapped: Optional[bool] = None

    @field_validator("recipe_name", "description", "image_url", mode="before")
    @classmethod
    def _text(cls, v):
        return v or ""


class DayMeals(BaseModel):
    breakfast: Optional[MealLocal] = None
    lunch: Optional[MealLocal] = None
    dinner: Optional[MealLocal] = None
    snacks: List[MealLocal] = Field(default_factory=list)

    @field_validator("snacks", mode="before")
    @classmethod
    def _snacks_list(cls, v):
        # Models occasionally return a single snack object instead of a list
        if v is None:
            return []
        if isinstance(v, dict):
            return [v]
        return v


class DayPlan(BaseModel):
    day: int = Field(..., ge=1, le=7)
    meals: DayMeals = Field(default_factory=DayMeals)
    totals: NutrientTotals = Field(default_factory=NutrientTotals)


class GroceryEntry(BaseModel):
    """
    One grocery line as the browser sees it. Generated entries carry
    `recipe_name` as the join key back to the meal that needs them;
    persisted entries carry their row ids instead.
    """
    id: Optional[str] = None
    ingredient_name: str
    quantity: str = ""
    category: str = "Other"
    estimated_price: float = 0.0
    is_bought: bool = False
    recipe_name: Optional[str] = None
    meal_plan_id: Optional[str] = None
    meal_id: Optional[str] = None
    is_unassigned: Optional[bool] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v):
        return "" if v is None else str(v)

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, v):
        return v or "Other"

    @field_validator("estimated_price", mode="before")
    @classmethod
    def _price(cls, v):
        return coerce_price(v)

    @field_validator("is_bought", mode="before")
    @classmethod
    def _bought(cls, v):
        return bool(v)


class MealPlanData(BaseModel):
    days: List[DayPlan]
    grocery_list: List[GroceryEntry] = Field(default_factory=list)

    @field_validator("grocery_list", mode="before")
    @classmethod
    def _grocery_list(cls, v):
        return v or []


class WeeklyPlanDraft(MealPlanData):
    """Parsed generation output, not yet persisted."""
    pass


# --- Persisted rows ---

class MealPlanHeader(BaseModel):
    id: str
    user_id: int
    start_date: date
    total_weekly_calories: float
    total_weekly_protein: float
    total_weekly_carbs: float
    total_weekly_fat: float
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MealOut(BaseModel):
    id: str
    meal_plan_id: str
    day: int
    meal_type: str
    recipe_name: str
    description: str
    image_url: str
    calories: float
    protein: float
    carbs: float
    fat: float
    is_swapped: bool

    class Config:
        from_attributes = True


class GroceryItemOut(BaseModel):
    id: str
    meal_plan_id: str
    meal_id: Optional[str] = None
    ingredient_name: str
    quantity: str
    category: str
    estimated_price: float
    is_bought: bool
    is_unassigned: bool

    class Config:
        from_attributes = True


class FullMealPlan(BaseModel):
    plan: MealPlanHeader
    meals: List[MealOut]
    groceries: List[GroceryItemOut]


# --- Plan source (tagged union) ---

class PersistedPlan(BaseModel):
    source: Literal["persisted"] = "persisted"
    plan_id: str
    plan: MealPlanData
    saved_to_db: bool = True


class DraftPlan(BaseModel):
    source: Literal["draft"] = "draft"
    plan: MealPlanData
    saved_to_db: bool = False
    save_error: Optional[str] = None


PlanSource = Annotated[Union[PersistedPlan, DraftPlan], Field(discriminator="source")]


class WeeklySummary(BaseModel):
    days: int
    totals: NutrientTotals
    averages: NutrientTotals
    macro_percentages: Dict[str, int]
