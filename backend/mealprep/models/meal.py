import uuid
from sqlalchemy import Column, Integer, String, Text, Float, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from mealprep.database import Base

# DB spelling of the meal slots
MEAL_TYPES = ("Breakfast", "Lunch", "Dinner", "Snack")


class Meal(Base):
    __tablename__ = "meals"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    meal_plan_id = Column(
        String(36),
        ForeignKey("meal_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    day = Column(Integer, nullable=False)            # 1..7
    meal_type = Column(String(20), nullable=False)   # Breakfast | Lunch | Dinner | Snack

    recipe_name = Column(String(255), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    image_url = Column(Text, nullable=False, default="")

    calories = Column(Float, nullable=False, default=0.0)
    protein = Column(Float, nullable=False, default=0.0)
    carbs = Column(Float, nullable=False, default=0.0)
    fat = Column(Float, nullable=False, default=0.0)

    is_swapped = Column(Boolean, nullable=False, default=False)

    meal_plan = relationship("MealPlan", back_populates="meals")
