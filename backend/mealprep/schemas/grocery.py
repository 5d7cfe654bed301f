from pydantic import BaseModel, Field
from typing import List

from mealprep.schemas.swap import GroceryItemInput


class GroceryToggleRequest(BaseModel):
    grocery_id: str = Field(..., min_length=1)
    current_status: bool


class GroceryAddRequest(BaseModel):
    meal_plan_id: str
    meal_id: str
    items: List[GroceryItemInput] = Field(..., min_length=1)


class GroceryBudgetResponse(BaseModel):
    meal_plan_id: str
    total: float
    items: int
