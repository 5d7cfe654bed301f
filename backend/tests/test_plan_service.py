import unittest
from datetime import date, datetime, timedelta
from unittest.mock import patch

from helpers import PREFERENCES, TestingSessionLocal, create_tables, drop_tables, raw_plan
from mealprep.crud import dietary_profile as crud_profile
from mealprep.crud import grocery as crud_grocery
from mealprep.exceptions import PersistenceError
from mealprep.models.dietary_profile import DietaryProfile
from mealprep.models.grocery_item import GroceryItem
from mealprep.models.meal import Meal
from mealprep.models.meal_plan import MealPlan
from mealprep.models.user import User
from mealprep.schemas.dietary_profile import MealPlanPreferences
from mealprep.schemas.meal_plan import DraftPlan, PersistedPlan
from mealprep.services import generation_service, plan_service, plan_view


class PlanServiceTestCase(unittest.TestCase):
    def setUp(self):
        create_tables()
        self.db = TestingSessionLocal()
        self.user = User(name="Dina", email="dina@example.com", password="x")
        self.db.add(self.user)
        self.db.commit()
        self.db.refresh(self.user)

    def tearDown(self):
        self.db.close()
        drop_tables()

    def _draft(self, **kwargs):
        return generation_service.parse_meal_plan(raw_plan(**kwargs))

    def _create(self, draft=None):
        header, meals, groceries = plan_service.build_plan_rows(draft or self._draft())
        return plan_service.create_full_plan(self.db, self.user.id, header, meals, groceries)


class TestBuildPlanRows(PlanServiceTestCase):
    def test_rows_and_weekly_totals(self):
        header, meals, groceries = plan_service.build_plan_rows(self._draft(), start_date=date(2026, 10, 19))

        self.assertEqual(len(meals), 28)
        self.assertEqual(header["start_date"], date(2026, 10, 19))
        self.assertEqual(header["total_weekly_calories"], 7 * (450 + 630 + 540 + 180))
        self.assertEqual(header["total_weekly_fat"], 7 * (14 + 20 + 22 + 6))
        self.assertEqual(meals[0]["meal_type"], "Breakfast")
        self.assertEqual(meals[3]["meal_type"], "Snack")
        self.assertFalse(meals[0]["is_swapped"])
        self.assertEqual(groceries[0]["temp_recipe_name"], "Day 1 Oat Porridge")


class TestCreateFullPlan(PlanServiceTestCase):
    def test_create_then_read_back(self):
        plan_id = self._create()
        full_plan = plan_service.get_full_meal_plan(self.db, plan_id)

        self.assertEqual(len(full_plan.meals), 28)
        self.assertEqual(len(full_plan.groceries), 3)
        self.assertEqual([m.day for m in full_plan.meals], sorted(m.day for m in full_plan.meals))
        self.assertEqual([m.meal_type for m in full_plan.meals[:4]], ["Breakfast", "Lunch", "Dinner", "Snack"])
        # Grocery list ordered by category
        self.assertEqual([g.category for g in full_plan.groceries], ["Pantry", "Protein", "Protein"])

    def test_groceries_join_to_meals_by_recipe_name(self):
        plan_id = self._create()
        full_plan = plan_service.get_full_meal_plan(self.db, plan_id)
        meal_names = {m.id: m.recipe_name for m in full_plan.meals}

        oats = next(g for g in full_plan.groceries if g.ingredient_name == "Rolled oats")
        self.assertEqual(meal_names[oats.meal_id], "Day 1 Oat Porridge")
        self.assertFalse(oats.is_unassigned)

    def test_unmatched_grocery_is_unassigned(self):
        extra = [{"ingredient_name": "Saffron", "quantity": "1 g", "category": "Spices",
                  "estimated_price": 50000, "recipe_name": "Paella Valenciana"},
                 {"ingredient_name": "Salt", "quantity": "1 pack", "category": "Pantry"}]
        plan_id = self._create(self._draft(extra_grocery=extra))

        items = {g.ingredient_name: g for g in crud_grocery.get_grocery_list(self.db, plan_id)}
        self.assertIsNone(items["Saffron"].meal_id)
        self.assertTrue(items["Saffron"].is_unassigned)
        self.assertTrue(items["Salt"].is_unassigned)

    def test_failure_leaves_no_partial_plan(self):
        header, meals, groceries = plan_service.build_plan_rows(self._draft())
        # NOT NULL violation on the last step
        groceries.append({"ingredient_name": None, "temp_recipe_name": "Day 1 Oat Porridge"})

        with self.assertRaises(PersistenceError):
            plan_service.create_full_plan(self.db, self.user.id, header, meals, groceries)

        self.assertEqual(self.db.query(MealPlan).count(), 0)
        self.assertEqual(self.db.query(Meal).count(), 0)
        self.assertEqual(self.db.query(GroceryItem).count(), 0)

    def test_missing_plan_reads_as_none(self):
        self.assertIsNone(plan_service.get_full_meal_plan(self.db, "does-not-exist"))

    def test_foreign_plan_reads_as_none(self):
        plan_id = self._create()
        self.assertIsNone(plan_service.get_full_meal_plan(self.db, plan_id, user_id=self.user.id + 1))


class TestPlanLifecycle(PlanServiceTestCase):
    def test_latest_and_history(self):
        older = self._create()
        newer = self._create()
        plan = self.db.query(MealPlan).filter(MealPlan.id == older).one()
        plan.created_at = datetime.utcnow() - timedelta(days=1)
        self.db.commit()

        latest = plan_service.get_latest_meal_plan_by_user_id(self.db, self.user.id)
        self.assertEqual(latest.id, newer)
        history = plan_service.get_all_meal_plans_by_user_id(self.db, self.user.id)
        self.assertEqual([p.id for p in history], [newer, older])

    def test_delete_cascades(self):
        plan_id = self._create()
        self.assertTrue(plan_service.delete_meal_plan(self.db, plan_id))

        self.assertEqual(self.db.query(Meal).filter(Meal.meal_plan_id == plan_id).count(), 0)
        self.assertEqual(self.db.query(GroceryItem).filter(GroceryItem.meal_plan_id == plan_id).count(), 0)
        self.assertFalse(plan_service.delete_meal_plan(self.db, plan_id))

    def test_recompute_totals(self):
        plan_id = self._create()
        meal = self.db.query(Meal).filter(Meal.meal_plan_id == plan_id, Meal.meal_type == "Breakfast").first()
        meal.calories += 100
        self.db.commit()

        plan = plan_service.recompute_plan_totals(self.db, plan_id)
        self.assertEqual(plan.total_weekly_calories, 7 * 1800 + 100)


class TestPlanView(PlanServiceTestCase):
    def test_persisted_plan_matches_draft_shape(self):
        draft = self._draft()
        plan_id = self._create(draft)
        view = plan_view.to_plan_data(plan_service.get_full_meal_plan(self.db, plan_id))

        self.assertEqual(len(view.days), 7)
        day_one = view.days[0]
        self.assertEqual(day_one.meals.lunch.recipe_name, "Day 1 Chicken Rice Bowl")
        self.assertEqual(len(day_one.meals.snacks), 1)
        self.assertEqual(day_one.totals.model_dump(), draft.days[0].totals.model_dump())
        self.assertIsNotNone(day_one.meals.lunch.id)

        oats = next(g for g in view.grocery_list if g.ingredient_name == "Rolled oats")
        self.assertEqual(oats.recipe_name, "Day 1 Oat Porridge")

    def test_grocery_summary(self):
        plan_id = self._create()
        view = plan_view.to_plan_data(plan_service.get_full_meal_plan(self.db, plan_id))
        view.grocery_list[0].is_bought = True

        summary = plan_view.grocery_summary(view.grocery_list)
        self.assertEqual(list(summary["categories"]), ["Pantry", "Protein"])
        self.assertEqual(summary["total_items"], 3)
        self.assertEqual(summary["bought_items"], 1)
        self.assertEqual(summary["estimated_total"], 205000)


class TestSaveGeneratedPlan(PlanServiceTestCase):
    def test_saves_profile_and_plan(self):
        prefs = MealPlanPreferences(**PREFERENCES)
        result = plan_service.save_generated_plan(self.db, self.user.id, prefs, self._draft())

        self.assertIsInstance(result, PersistedPlan)
        self.assertTrue(result.saved_to_db)
        self.assertEqual(len(result.plan.days), 7)
        profile = crud_profile.get_profile_by_user_id(self.db, self.user.id)
        self.assertEqual(profile.calories_target, 2200)
        self.assertEqual(profile.cuisine_preferences, ["Indonesian"])

    def test_profile_is_upserted(self):
        prefs = MealPlanPreferences(**PREFERENCES)
        plan_service.save_generated_plan(self.db, self.user.id, prefs, self._draft())
        prefs = MealPlanPreferences(**dict(PREFERENCES, calories_target=1900, allergies=None))
        plan_service.save_generated_plan(self.db, self.user.id, prefs, self._draft())

        profiles = self.db.query(DietaryProfile).filter(DietaryProfile.user_id == self.user.id).all()
        self.assertEqual(len(profiles), 1)
        self.assertEqual(profiles[0].calories_target, 1900)
        self.assertEqual(profiles[0].allergies, [])

    @patch("mealprep.services.plan_service.create_full_plan")
    def test_storage_failure_returns_draft(self, mock_create):
        mock_create.side_effect = PersistenceError("relation \"meals\" does not exist")
        draft = self._draft()
        result = plan_service.save_generated_plan(self.db, self.user.id, MealPlanPreferences(**PREFERENCES), draft)

        self.assertIsInstance(result, DraftPlan)
        self.assertFalse(result.saved_to_db)
        self.assertEqual(result.save_error, "relation \"meals\" does not exist")
        self.assertEqual(len(result.plan.days), 7)

    @patch("mealprep.services.plan_service.get_full_meal_plan")
    def test_read_back_failure_keeps_saved_plan(self, mock_read):
        mock_read.side_effect = PersistenceError("server closed the connection")
        result = plan_service.save_generated_plan(self.db, self.user.id, MealPlanPreferences(**PREFERENCES),
                                                  self._draft())

        self.assertIsInstance(result, PersistedPlan)
        self.assertTrue(result.saved_to_db)
        self.assertEqual(len(result.plan.days), 7)
        self.assertEqual(self.db.query(MealPlan).filter(MealPlan.id == result.plan_id).count(), 1)


if __name__ == "__main__":
    unittest.main()
