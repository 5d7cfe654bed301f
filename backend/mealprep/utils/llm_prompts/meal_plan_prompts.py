MEAL_PLAN_SYSTEM_PROMPT = """You are a professional nutritionist and meal prep planner.
You design realistic weekly meal plans and grocery lists that hit calorie and macro targets.
Respond ONLY with valid JSON. Do not include any explanatory text outside the JSON."""

MEAL_PLAN_CUISINE_BLOCK = """

🔴 CRITICAL CUISINE REQUIREMENT:
You MUST generate meals that are AUTHENTICALLY from the "{cuisines}" cuisine(s).
- Use traditional cooking methods, local ingredients, and authentic recipe names.
- ❌ DO NOT suggest generic Western dishes ("Pan-Seared ...", "Grilled Chicken Breast", "Caesar Salad") unless that cuisine was requested."""

MEAL_PLAN_USER_PROMPT = """Generate a 7-day meal plan with the following parameters:
Goal: {goal}
Daily Calories: {calories} kcal
Diet Type: {diet_type}
Allergies: {allergies}
Cuisine Preference: {cuisines_label}{cuisine_block}
Foods to Avoid: {dislikes}

For each day provide:
- Breakfast (~{breakfast_pct}% of daily calories, ~{breakfast_kcal} kcal)
- Lunch (~{lunch_pct}% of daily calories, ~{lunch_kcal} kcal)
- Dinner (~{dinner_pct}% of daily calories, ~{dinner_kcal} kcal)
- Snacks (~{snacks_pct}% of daily calories, ~{snacks_kcal} kcal, one or more items)

Each meal should include:
- recipe_name (appealing, specific, MUST match the cuisine preference)
- description (short)
- calories (kcal), protein, carbs, fats (grams)
- image_url: string (https URL) of a publicly accessible photo representing the recipe (e.g. Unsplash or Pexels). Do NOT return data URIs.

Requirements:
- No meal repetition within 7 days (every recipe_name is unique across the week)
- Balanced macros for the goal "{goal}": {protein_pct}% protein, {carbs_pct}% carbs, {fat_pct}% fat
- Realistic meals (not overly complicated)
- STRICTLY follow the specified cuisine preference
- Avoid listed allergens & dislikes

Also produce a consolidated grocery list for the 7-day plan. Each grocery item object must include:
- ingredient_name: string
- quantity: string with the unit embedded (e.g. "200gr", "2 pcs", "1 bottle", "250ml")
- category: string, e.g. "Produce", "Dairy", "Protein", "Pantry"
- estimated_price: number, estimated price of the item in whole currency units (e.g. 15000)
- recipe_name: string, the EXACT recipe_name of the meal this ingredient is bought for (copy it verbatim)

Return strictly as valid JSON with a top-level object in this exact shape:
{{
  "days": [
    {{
      "day": 1,
      "meals": {{
        "breakfast": {{"recipe_name": string, "description": string, "calories": number, "protein": number, "carbs": number, "fats": number, "image_url": string}},
        "lunch": {{...same fields...}},
        "dinner": {{...same fields...}},
        "snacks": [{{...same fields...}}]
      }},
      "totals": {{"calories": number, "protein": number, "carbs": number, "fats": number}}
    }}
  ],
  "grocery_list": [
    {{"ingredient_name": string, "quantity": string, "category": string, "estimated_price": number, "recipe_name": string}}
  ]
}}
The "days" array MUST contain exactly 7 entries, day 1 to day 7."""

SWAP_MEAL_SYSTEM_PROMPT = """You are a professional nutritionist helping a user replace one meal of their weekly plan.
Respond ONLY with valid JSON. Do not include any explanatory text outside the JSON."""

SWAP_MEAL_CUISINE_BLOCK = """

🔴 ABSOLUTE CUISINE REQUIREMENT (NON-NEGOTIABLE):
You MUST generate ONLY {meal_type} meals that are 100% AUTHENTICALLY from "{cuisines}" cuisine.
- Traditional cooking techniques and authentic ingredients only.
- 🚫 No fusion dishes and no Western plating for a non-Western cuisine."""

SWAP_MEAL_USER_PROMPT = """Generate 3 alternative {meal_type} meal options based on the user's preference.

User's Request/Preference: "{preference}"

Meal Plan Context:
Goal: {goal}
Daily Calories: {daily_calories} kcal
Target {meal_type} Calories: {target_calories} kcal
Target Macros: Protein {target_protein}g, Carbs {target_carbs}g, Fats {target_fat}g
Diet Type: {diet_type}
Allergies: {allergies}
Cuisine Preference: {cuisines_label}{cuisine_block}
Foods to Avoid: {dislikes}

For each meal option, provide:
- recipe_name (appealing, specific, authentic to the cuisine preference)
- description (short, 1-2 sentences)
- calories (kcal), protein, carbs, fats (grams)
- image_url: string (https URL) of a publicly accessible photo representing the recipe. Do NOT return data URIs.
- grocery_items: array of ingredient objects needed for this meal, each with:
  - ingredient_name: string
  - quantity: string (e.g. "200gr", "2 pcs", "1 cup")
  - category: string (e.g. "Produce", "Dairy", "Protein", "Pantry")
  - estimated_price: number (whole currency units, e.g. 15000)

Requirements:
- PRIORITY #1: STRICTLY match the specified cuisine preference
- PRIORITY #2: Match the user's preference/request
- Each option within ±{tolerance_pct}% of the target calories and macros
- The 3 options must all be different
- Realistic and easy to prepare with locally available ingredients
- Avoid listed allergens & dislikes

Return strictly as valid JSON with a top-level object in this exact shape:
{{
  "mealOptions": [
    {{
      "recipe_name": string,
      "description": string,
      "calories": number,
      "protein": number,
      "carbs": number,
      "fats": number,
      "image_url": string,
      "grocery_items": [
        {{"ingredient_name": string, "quantity": string, "category": string, "estimated_price": number}}
      ]
    }}
  ]
}}
The "mealOptions" array MUST contain exactly 3 entries."""
