# Import all models here
from mealprep.models.user import User
from mealprep.models.dietary_profile import DietaryProfile
from mealprep.models.meal_plan import MealPlan
from mealprep.models.meal import Meal
from mealprep.models.grocery_item import GroceryItem
