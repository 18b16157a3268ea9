"""Nutrition estimates from a built-in per-100g table."""

from dataclasses import dataclass, fields
from typing import Optional, Self

from lib.amount_parser import parse_amount
from lib.models import Ingredient, Recipe
from lib.recipe_scaling import parse_yield
from lib.unit_converter import normalize_unit


@dataclass
class NutritionInfo:
    """Nutrition values. Grams except calories (kcal) and sodium (mg)."""
    calories: float = 0
    protein: float = 0
    carbohydrates: float = 0
    fat: float = 0
    fiber: float = 0
    sugar: float = 0
    sodium: float = 0

    def __add__(self, other: Self) -> Self:
        return NutritionInfo(**{
            f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)
        })

    def __mul__(self, multiplier: int | float) -> Self:
        return NutritionInfo(**{
            f.name: getattr(self, f.name) * multiplier for f in fields(self)
        })

    def rounded(self) -> Self:
        """Calories and sodium to whole numbers, the rest to one decimal."""
        return NutritionInfo(
            calories=round(self.calories),
            protein=round(self.protein, 1),
            carbohydrates=round(self.carbohydrates, 1),
            fat=round(self.fat, 1),
            fiber=round(self.fiber, 1),
            sugar=round(self.sugar, 1),
            sodium=round(self.sodium),
        )

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, d: dict) -> Self:
        return cls(**{f.name: d.get(f.name, 0) for f in fields(cls)})

    @classmethod
    def empty(cls) -> Self:
        return cls()


@dataclass
class IngredientNutrition:
    ingredient: str
    nutrition: NutritionInfo
    confidence: str  # "high" | "medium" | "low"


@dataclass
class NutritionPerServing:
    nutrition: NutritionInfo
    servings: int


@dataclass
class DetailedNutrition:
    per_serving: NutritionPerServing
    total: NutritionInfo
    breakdown: list[IngredientNutrition]
    coverage_percent: int


def _n(calories, protein, carbs, fat, fiber, sugar, sodium):
    return NutritionInfo(calories, protein, carbs, fat, fiber, sugar, sodium)


# Per 100g
NUTRITION_DB = {
    # Proteins
    "chicken breast": _n(165, 31, 0, 3.6, 0, 0, 74),
    "chicken": _n(239, 27, 0, 14, 0, 0, 82),
    "ground beef": _n(332, 14, 0, 30, 0, 0, 76),
    "beef": _n(250, 26, 0, 15, 0, 0, 72),
    "pork": _n(242, 27, 0, 14, 0, 0, 62),
    "salmon": _n(208, 20, 0, 13, 0, 0, 59),
    "shrimp": _n(99, 24, 0.2, 0.3, 0, 0, 111),
    "tofu": _n(76, 8, 1.9, 4.8, 0.3, 0.6, 7),
    "egg": _n(155, 13, 1.1, 11, 0, 1.1, 124),
    "eggs": _n(155, 13, 1.1, 11, 0, 1.1, 124),

    # Dairy
    "butter": _n(717, 0.9, 0.1, 81, 0, 0.1, 11),
    "milk": _n(42, 3.4, 5, 1, 0, 5, 44),
    "heavy cream": _n(340, 2.1, 2.8, 36, 0, 2.9, 27),
    "cream": _n(340, 2.1, 2.8, 36, 0, 2.9, 27),
    "parmesan": _n(431, 38, 4.1, 29, 0, 0.9, 1529),
    "cheese": _n(402, 25, 1.3, 33, 0, 0.5, 621),
    "yogurt": _n(59, 10, 3.6, 0.7, 0, 3.2, 36),
    "sour cream": _n(198, 2.4, 4.6, 19, 0, 3.4, 80),

    # Grains
    "flour": _n(364, 10, 76, 1, 2.7, 0.3, 2),
    "bread": _n(265, 9, 49, 3.2, 2.7, 5, 491),
    "rice": _n(130, 2.7, 28, 0.3, 0.4, 0, 1),
    "pasta": _n(131, 5, 25, 1.1, 1.8, 0.6, 1),
    "spaghetti": _n(131, 5, 25, 1.1, 1.8, 0.6, 1),
    "oats": _n(389, 17, 66, 7, 11, 1, 2),

    # Vegetables
    "onion": _n(40, 1.1, 9.3, 0.1, 1.7, 4.2, 4),
    "garlic": _n(149, 6.4, 33, 0.5, 2.1, 1, 17),
    "tomato": _n(18, 0.9, 3.9, 0.2, 1.2, 2.6, 5),
    "potato": _n(77, 2, 17, 0.1, 2.2, 0.8, 6),
    "carrot": _n(41, 0.9, 10, 0.2, 2.8, 4.7, 69),
    "celery": _n(16, 0.7, 3, 0.2, 1.6, 1.3, 80),
    "broccoli": _n(34, 2.8, 7, 0.4, 2.6, 1.7, 33),
    "spinach": _n(23, 2.9, 3.6, 0.4, 2.2, 0.4, 79),
    "mushroom": _n(22, 3.1, 3.3, 0.3, 1, 2, 5),
    "bell pepper": _n(31, 1, 6, 0.3, 2.1, 4.2, 4),

    # Fruits
    "apple": _n(52, 0.3, 14, 0.2, 2.4, 10, 1),
    "banana": _n(89, 1.1, 23, 0.3, 2.6, 12, 1),
    "lemon": _n(29, 1.1, 9, 0.3, 2.8, 2.5, 2),
    "lime": _n(30, 0.7, 11, 0.2, 2.8, 1.7, 2),

    # Fats & oils
    "olive oil": _n(884, 0, 0, 100, 0, 0, 2),
    "vegetable oil": _n(884, 0, 0, 100, 0, 0, 0),
    "oil": _n(884, 0, 0, 100, 0, 0, 0),

    # Sweeteners
    "brown sugar": _n(380, 0, 98, 0, 0, 97, 28),
    "sugar": _n(387, 0, 100, 0, 0, 100, 1),
    "honey": _n(304, 0.3, 82, 0, 0.2, 82, 4),
    "maple syrup": _n(260, 0, 67, 0.1, 0, 60, 12),

    # Seasonings
    "salt": _n(0, 0, 0, 0, 0, 0, 38758),
    "black pepper": _n(251, 10, 64, 3.3, 25, 0.6, 20),
    "soy sauce": _n(53, 8.1, 4.9, 0, 0.8, 0.4, 5493),

    # Nuts
    "almonds": _n(579, 21, 22, 50, 12, 4.4, 1),
    "walnuts": _n(654, 15, 14, 65, 6.7, 2.6, 2),
    "peanuts": _n(567, 26, 16, 49, 8.5, 4, 18),

    # Canned / processed
    "chicken broth": _n(5, 1, 0.3, 0, 0, 0.3, 343),
    "broth": _n(5, 1, 0.3, 0, 0, 0.3, 343),
    "stock": _n(5, 1, 0.3, 0, 0, 0.3, 343),
    "tomato sauce": _n(29, 1.3, 6.5, 0.2, 1.5, 4.8, 577),
    "canned tomatoes": _n(32, 1.6, 7.3, 0.3, 2.4, 4.7, 220),
}

# Approximate grams per canonical unit (volumes assume water density)
GRAMS_PER_UNIT = {
    "cup": 240,
    "tablespoon": 15,
    "teaspoon": 5,
    "fl oz": 30,
    "ml": 1,
    "l": 1000,
    "oz": 28.35,
    "lb": 453.6,
    "g": 1,
    "kg": 1000,
    "piece": 100,
    "clove": 3,
    "slice": 30,
    "stalk": 40,
    "small": 100,
    "medium": 150,
    "large": 200,
}

DEFAULT_GRAMS = 100

DAILY_VALUES = NutritionInfo(
    calories=2000,
    protein=50,
    carbohydrates=275,
    fat=78,
    fiber=28,
    sugar=50,
    sodium=2300,
)


def convert_to_grams(amount: float, unit: str) -> float:
    """Rough weight of an amount; unknown units count as 100g each."""
    return amount * GRAMS_PER_UNIT.get(normalize_unit(unit), DEFAULT_GRAMS)


def find_nutrition_entry(name: str) -> Optional[tuple[NutritionInfo, str]]:
    """Find the table entry for an ingredient name.

    Returns:
        (entry, confidence) where confidence is "high" for an exact match,
        "medium" for a substring match and "low" for a single-word match.
        None if nothing matches.
    """
    lower = " ".join(name.lower().split())
    if not lower:
        return None

    if lower in NUTRITION_DB:
        return NUTRITION_DB[lower], "high"

    for key, entry in NUTRITION_DB.items():
        if key in lower or lower in key:
            return entry, "medium"

    for word in lower.split():
        if len(word) < 3:
            continue
        for key, entry in NUTRITION_DB.items():
            if word in key:
                return entry, "low"

    return None


def calculate_ingredient_nutrition(ingredient: Ingredient) -> Optional[IngredientNutrition]:
    """Estimate nutrition for one ingredient, None if it isn't in the table."""
    match = find_nutrition_entry(ingredient.item)
    if not match:
        return None

    entry, confidence = match
    grams = convert_to_grams(parse_amount(ingredient.amount), ingredient.unit)
    return IngredientNutrition(
        ingredient=ingredient.item,
        nutrition=(entry * (grams / 100)).rounded(),
        confidence=confidence,
    )


def _servings(recipe: Recipe) -> int:
    return max(int(parse_yield(recipe.yields).value), 1)


def get_detailed_nutrition(recipe: Recipe) -> DetailedNutrition:
    """Per-serving and total nutrition with a per-ingredient breakdown.

    coverage_percent is the share of ingredients found in the table.
    """
    breakdown = []
    total = NutritionInfo.empty()

    for ingredient in recipe.ingredients:
        result = calculate_ingredient_nutrition(ingredient)
        if result:
            breakdown.append(result)
            total = total + result.nutrition

    servings = _servings(recipe)
    coverage = round(len(breakdown) / len(recipe.ingredients) * 100) if recipe.ingredients else 0

    return DetailedNutrition(
        per_serving=NutritionPerServing(
            nutrition=(total * (1 / servings)).rounded(),
            servings=servings,
        ),
        total=total.rounded(),
        breakdown=breakdown,
        coverage_percent=coverage,
    )


def calculate_recipe_nutrition(recipe: Recipe) -> NutritionPerServing:
    """Nutrition per serving for a whole recipe."""
    return get_detailed_nutrition(recipe).per_serving


def get_daily_value_percent(nutrition: NutritionInfo) -> dict:
    """Percent of a 2000 kcal reference diet for each nutrient."""
    return {
        f.name: round(getattr(nutrition, f.name) / getattr(DAILY_VALUES, f.name) * 100)
        for f in fields(nutrition)
    }
