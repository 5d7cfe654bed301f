from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional

from mealprep.schemas.dietary_profile import DietaryGoal
from mealprep.schemas.meal_plan import MacroFields, coerce_price

MealSlot = Literal["breakfast", "lunch", "dinner", "snacks"]


class GroceryItemInput(BaseModel):
    ingredient_name: str = Field(..., min_length=1)
    quantity: str = ""
    category: str = "Other"
    estimated_price: float = 0.0

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


class MealOption(MacroFields):
    recipe_name: str = Field(..., min_length=1)
    description: str = ""
    image_url: str = ""
    grocery_items: List[GroceryItemInput] = Field(default_factory=list)

    @field_validator("description", "image_url", mode="before")
    @classmethod
    def _text(cls, v):
        return v or ""

    @field_validator("grocery_items", mode="before")
    @classmethod
    def _items(cls, v):
        return v or []


class SlotTargets(BaseModel):
    meal_type: MealSlot
    calories: int
    protein: int
    carbs: int
    fat: int


class SwapMealRequest(BaseModel):
    """Wire names follow the browser client (camelCase for the swap context)."""
    model_config = ConfigDict(populate_by_name=True)

    preference: str = Field(..., min_length=1)
    meal_type: MealSlot = Field(..., alias="mealType")
    dietary_goals: DietaryGoal
    daily_calories: int = Field(..., gt=0, alias="dailyCalories")
    diet_type: Optional[str] = None
    allergies: Optional[List[str]] = None
    cuisine_preferences: Optional[List[str]] = None
    dislikes: Optional[List[str]] = None


class SwapOptionsResponse(BaseModel):
    mealOptions: List[MealOption]
    target: SlotTargets


class ApplySwapRequest(BaseModel):
    meal_id: str
    meal_plan_id: str
    meal: MealOption
