import uuid
from sqlalchemy import Column, String, Float, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from mealprep.database import Base


class GroceryItem(Base):
    __tablename__ = "grocery_lists"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    meal_plan_id = Column(
        String(36),
        ForeignKey("meal_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    # Non-owning link to the meal that introduced the item, used to scope
    # deletion when that meal is swapped.
    meal_id = Column(
        String(36),
        ForeignKey("meals.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    ingredient_name = Column(String(255), nullable=False)
    quantity = Column(String(100), nullable=False, default="")   # unit embedded, e.g. "200gr"
    category = Column(String(100), nullable=False, default="Other")
    estimated_price = Column(Float, nullable=False, default=0.0)

    is_bought = Column(Boolean, nullable=False, default=False)
    # Generated recipe name matched no meal of the plan
    is_unassigned = Column(Boolean, nullable=False, default=False)

    meal_plan = relationship("MealPlan", back_populates="grocery_items")
