from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mealprep.database import Base
import mealprep.models  # registers every table on Base.metadata

# One shared in-memory SQLite DB for the whole test session
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables():
    Base.metadata.create_all(bind=engine)


def drop_tables():
    Base.metadata.drop_all(bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def raw_meal(name, calories, protein, carbs, fats):
    return {
        "recipe_name": name,
        "description": f"{name} description",
        "calories": calories,
        "protein": protein,
        "carbs": carbs,
        "fats": fats,
        "image_url": "https://images.example.com/meal.jpg",
    }


def raw_plan(days=7, extra_grocery=None):
    """A model reply shaped like the meal plan prompt asks for."""
    plan_days = []
    for day in range(1, days + 1):
        plan_days.append({
            "day": day,
            "meals": {
                "breakfast": raw_meal(f"Day {day} Oat Porridge", 450, 30, 50, 14),
                "lunch": raw_meal(f"Day {day} Chicken Rice Bowl", 630, 45, 70, 20),
                "dinner": raw_meal(f"Day {day} Baked Salmon", 540, 40, 45, 22),
                "snacks": [raw_meal(f"Day {day} Greek Yogurt", 180, 15, 12, 6)],
            },
            # Deliberately wrong; totals are recomputed from the meals
            "totals": {"calories": 1, "protein": 1, "carbs": 1, "fats": 1},
        })

    grocery_list = [
        {"ingredient_name": "Rolled oats", "quantity": "500gr", "category": "Pantry",
         "estimated_price": 25000, "recipe_name": "Day 1 Oat Porridge"},
        {"ingredient_name": "Chicken breast", "quantity": "1 kg", "category": "Protein",
         "estimated_price": 60000, "recipe_name": "Day 1 Chicken Rice Bowl"},
        {"ingredient_name": "Salmon fillet", "quantity": "400gr", "category": "Protein",
         "estimated_price": 120000, "recipe_name": "Day 2 Baked Salmon"},
    ]
    if extra_grocery:
        grocery_list.extend(extra_grocery)
    return {"days": plan_days, "grocery_list": grocery_list}


def raw_swap_options(count=3):
    return {
        "mealOptions": [
            dict(
                raw_meal(f"Option {i} Tofu Stir Fry", 760, 48, 85, 26),
                grocery_items=[
                    {"ingredient_name": f"Tofu {i}", "quantity": "300gr", "category": "Protein",
                     "estimated_price": 15000},
                    {"ingredient_name": "Bok choy", "quantity": "2 pcs", "category": "Produce",
                     "estimated_price": 8000},
                ],
            )
            for i in range(1, count + 1)
        ]
    }


PREFERENCES = {
    "dietary_goals": "Maintenance",
    "calories_target": 2200,
    "diet_type": "Standard",
    "allergies": ["peanut"],
    "cuisine_preferences": ["Indonesian"],
    "dislikes": [],
}
