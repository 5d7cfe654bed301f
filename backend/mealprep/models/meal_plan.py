import uuid
from datetime import datetime, date
from sqlalchemy import (
    Column, Integer, String, Float, Date, ForeignKey, DateTime
)
from sqlalchemy.orm import relationship
from mealprep.database import Base


class MealPlan(Base):
    __tablename__ = "meal_plans"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    start_date = Column(Date, nullable=False, default=date.today)

    # Weekly aggregates, summed from the meals when the plan is created.
    # Only an explicit recompute refreshes them afterwards.
    total_weekly_calories = Column(Float, nullable=False, default=0.0)
    total_weekly_protein = Column(Float, nullable=False, default=0.0)
    total_weekly_carbs = Column(Float, nullable=False, default=0.0)
    total_weekly_fat = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    user = relationship("User", back_populates="meal_plans")
    meals = relationship(
        "Meal",
        back_populates="meal_plan",
        cascade="all, delete-orphan",
        order_by="Meal.day"
    )
    grocery_items = relationship(
        "GroceryItem",
        back_populates="meal_plan",
        cascade="all, delete-orphan"
    )
