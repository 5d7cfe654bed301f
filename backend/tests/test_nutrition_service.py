import unittest

from mealprep.schemas.meal_plan import DayPlan
from mealprep.services import nutrition_service


class TestSlotTargets(unittest.TestCase):
    def test_lunch_maintenance_2200(self):
        targets = nutrition_service.compute_slot_targets("lunch", 2200, "Maintenance")
        self.assertEqual(targets["calories"], 770)
        self.assertEqual(targets["protein"], 48)
        self.assertEqual(targets["carbs"], 87)
        self.assertEqual(targets["fat"], 26)

    def test_breakfast_weight_loss_1800(self):
        # 450 kcal at 30/40/30
        targets = nutrition_service.compute_slot_targets("breakfast", 1800, "Weight Loss")
        self.assertEqual(targets["calories"], 450)
        self.assertEqual(targets["protein"], 34)
        self.assertEqual(targets["carbs"], 45)
        self.assertEqual(targets["fat"], 15)

    def test_snacks_share_is_ten_percent(self):
        targets = nutrition_service.compute_slot_targets("snacks", 3000, "Muscle Gain")
        self.assertEqual(targets["calories"], 300)

    def test_unknown_slot_raises(self):
        with self.assertRaises(ValueError):
            nutrition_service.compute_slot_targets("brunch", 2000, "Maintenance")

    def test_unknown_goal_uses_maintenance_ratios(self):
        self.assertEqual(nutrition_service.get_macro_ratios("Bulk"), nutrition_service.MACRO_RATIOS["Maintenance"])

    def test_slot_budget_covers_the_day(self):
        budget = nutrition_service.slot_calorie_budget(2000)
        self.assertEqual(budget, {"breakfast": 500, "lunch": 700, "dinner": 600, "snacks": 200})


class TestDayTotals(unittest.TestCase):
    def _day(self):
        return DayPlan.model_validate({
            "day": 1,
            "meals": {
                "breakfast": {"recipe_name": "Toast", "calories": 300, "protein": "12g", "carbs": 40, "fats": 8},
                "lunch": {"recipe_name": "Soup", "calories": "500 kcal", "protein": 20, "carbs": 60, "fat": 15},
                # Missing macros count as zero
                "dinner": {"recipe_name": "Mystery stew"},
                "snacks": [
                    {"recipe_name": "Apple", "calories": 95, "carbs": 25},
                    {"recipe_name": "Almonds", "calories": 160, "protein": 6, "fats": 14},
                ],
            },
        })

    def test_sums_main_meals_and_snacks(self):
        totals = nutrition_service.compute_day_totals(self._day())
        self.assertEqual(totals.calories, 1055)
        self.assertEqual(totals.protein, 38)
        self.assertEqual(totals.carbs, 125)
        self.assertEqual(totals.fats, 37)

    def test_recompute_is_idempotent(self):
        day = self._day()
        nutrition_service.recompute_totals([day])
        first = day.totals.model_dump()
        nutrition_service.recompute_totals([day])
        self.assertEqual(day.totals.model_dump(), first)

    def test_empty_day_is_zero(self):
        totals = nutrition_service.compute_day_totals(DayPlan(day=3))
        self.assertEqual(totals.calories, 0)
        self.assertEqual(totals.fats, 0)


class TestWeeklySummary(unittest.TestCase):
    def test_averages_and_macro_split(self):
        days = [
            DayPlan.model_validate({"day": d, "meals": {
                "lunch": {"recipe_name": "Bowl", "calories": 2000, "protein": 100, "carbs": 250, "fats": 60},
            }})
            for d in range(1, 8)
        ]
        summary = nutrition_service.weekly_summary(days)
        self.assertEqual(summary.days, 7)
        self.assertEqual(summary.totals.calories, 14000)
        self.assertEqual(summary.averages.protein, 100)
        # 400 + 1000 + 540 = 1940 kcal from macros
        self.assertEqual(summary.macro_percentages, {"protein": 21, "carbs": 52, "fats": 28})

    def test_no_days(self):
        summary = nutrition_service.weekly_summary([])
        self.assertEqual(summary.days, 0)
        self.assertEqual(summary.macro_percentages["protein"], 0)


class TestHelpers(unittest.TestCase):
    def test_weekly_totals_from_meal_rows(self):
        totals = nutrition_service.weekly_totals_from_meals([
            {"calories": 500, "protein": 30, "carbs": 50, "fat": 20},
            {"calories": 300, "protein": 10, "carbs": 40, "fat": 5},
        ])
        self.assertEqual(totals["total_weekly_calories"], 800)
        self.assertEqual(totals["total_weekly_fat"], 25)

    def test_tolerance(self):
        self.assertTrue(nutrition_service.is_within_tolerance(860, 770))
        self.assertFalse(nutrition_service.is_within_tolerance(900, 770))
        self.assertIsNone(nutrition_service.is_within_tolerance(500, 0))


if __name__ == "__main__":
    unittest.main()
