# mealprep/schemas/dietary_profile.py
from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime

DietaryGoal = Literal["Weight Loss", "Muscle Gain", "Maintenance"]


class MealPlanPreferences(BaseModel):
    """Preference form shared by plan generation and the saved profile."""
    dietary_goals: DietaryGoal
    calories_target: int = Field(..., gt=0, description="Daily calorie target in kcal")
    diet_type: Optional[str] = None
    allergies: Optional[List[str]] = None
    cuisine_preferences: Optional[List[str]] = None
    dislikes: Optional[List[str]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "dietary_goals": "Weight Loss",
                "calories_target": 1800,
                "diet_type": "Standard",
                "allergies": [],
                "cuisine_preferences": ["Indonesian"],
                "dislikes": []
            }
        }


class DietaryProfileRequest(MealPlanPreferences):
    pass


class DietaryProfileResponse(BaseModel):
    id: int
    user_id: int
    dietary_goals: str
    diet_type: Optional[str]
    calories_target: int
    allergies: List[str]
    cuisine_preferences: List[str]
    dislikes: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
