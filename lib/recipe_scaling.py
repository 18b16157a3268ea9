"""Recipe scaling - recalculates ingredient amounts for a new yield.

Amounts scale linearly. Ingredients known to misbehave when scaled
(leavening, eggs) get an advisory warning but keep the linear number;
fixed aromatics (bay leaves etc.) keep their original amount.
"""

import math
import re

from lib.amount_parser import parse_amount, format_amount, format_number
from lib.models import Ingredient, ParsedYield, Recipe, ScaledIngredient, ScaledRecipe

# Checked first; these keep their original amount
FIXED_ITEMS = [
    "bay leaf",
    "bay leaves",
    "cinnamon stick",
    "vanilla bean",
]

# Substring keyword -> warning
LEAVENING_NOTES = {
    "yeast": "Yeast scaling is non-linear - start with less and adjust",
    "baking powder": "Baking powder scales non-linearly - reduce slightly when scaling up",
    "baking soda": "Baking soda scales non-linearly - reduce slightly when scaling up",
}

EGG_PATTERN = re.compile(r"\beggs?\b")
EGG_NOTE = "Eggs scale non-linearly - consider adjusting by feel"

FIXED_NOTE = "This item typically doesn't need scaling"

LARGE_SCALE_THRESHOLD = 3
REDUCTION_THRESHOLD = 0.34

LARGE_SCALE_NOTE = (
    "Large scale-up: make sure your pans and oven can hold the bigger batch, "
    "and expect longer cook times"
)
REDUCTION_NOTE = (
    "Significant reduction: some techniques (yeast breads, whipped egg foams) "
    "need a minimum batch size to work"
)

# (multiplier, label) for the serving-size selector
SCALING_PRESETS = [
    (0.5, "Half"),
    (1, "Original"),
    (1.5, "1.5×"),
    (2, "Double"),
    (3, "Triple"),
]


def parse_yield(yield_str: str) -> ParsedYield:
    """Split a yield string like "4 servings" into value and unit.

    Returns:
        ParsedYield. The unit defaults to "servings" when only a number is
        given; without a leading number the yield is 1 "batch".
    """
    text = (yield_str or "").strip()
    match = re.match(r'^(\d+(?:\.\d+)?)\s*(.*)$', text)
    if match:
        return ParsedYield(
            value=float(match.group(1)),
            unit=match.group(2).strip() or "servings",
            original=yield_str,
        )
    return ParsedYield(value=1.0, unit="batch", original=yield_str)


def classify_ingredient(ingredient: Ingredient) -> str:
    """Scaling class of an ingredient: "fixed", "leavening", "eggs" or "linear"."""
    name = ingredient.item.lower()
    if any(fixed in name for fixed in FIXED_ITEMS):
        return "fixed"
    if any(keyword in name for keyword in LEAVENING_NOTES):
        return "leavening"
    if EGG_PATTERN.search(name):
        return "eggs"
    return "linear"


def _scaling_warning(ingredient: Ingredient, scaling_class: str) -> str | None:
    if scaling_class == "fixed":
        return FIXED_NOTE
    if scaling_class == "eggs":
        return EGG_NOTE
    if scaling_class == "leavening":
        name = ingredient.item.lower()
        for keyword, note in LEAVENING_NOTES.items():
            if keyword in name:
                return note
    return None


def scale_ingredient(ingredient: Ingredient, scale_factor: float) -> ScaledIngredient:
    """Scale one ingredient.

    Args:
        ingredient: Source ingredient
        scale_factor: Multiplier for the amount (2 doubles, 0.5 halves)

    Returns:
        ScaledIngredient with the display amount and an optional warning.
        Leavening and eggs are still scaled linearly; the warning is advice.
        A non-finite factor leaves the amount as written.
    """
    scaling_class = classify_ingredient(ingredient)

    scaled_amount = ingredient.amount
    if scaling_class != "fixed" and scale_factor != 1 and math.isfinite(scale_factor):
        value = parse_amount(ingredient.amount) * scale_factor
        if math.isfinite(value):
            scaled_amount = format_amount(value)

    return ScaledIngredient(
        ingredient=ingredient,
        original_amount=ingredient.amount,
        scaled_amount=scaled_amount,
        scaling_warning=_scaling_warning(ingredient, scaling_class),
    )


def scale_recipe(recipe: Recipe, target_yield: float) -> ScaledRecipe:
    """Scale every ingredient of a recipe to a new yield value.

    Args:
        recipe: Source recipe
        target_yield: New yield value in the recipe's own yield unit
            (e.g. 8 for "8 servings" when the recipe makes "4 servings")
            A non-finite target keeps the current yield.

    Returns:
        ScaledRecipe with ingredients in the original order and
        recipe-level notes for very large or very small scale factors.
    """
    current = parse_yield(recipe.yields)
    base = current.value or 1.0
    if not math.isfinite(target_yield):
        target_yield = base
    scale_factor = target_yield / base

    scaled = tuple(scale_ingredient(ing, scale_factor) for ing in recipe.ingredients)

    notes = []
    if scale_factor >= LARGE_SCALE_THRESHOLD:
        notes.append(LARGE_SCALE_NOTE)
    elif scale_factor <= REDUCTION_THRESHOLD:
        notes.append(REDUCTION_NOTE)

    return ScaledRecipe(
        recipe=recipe,
        scale_factor=scale_factor,
        original_yield=recipe.yields,
        yields=f"{format_number(target_yield)} {current.unit}",
        scaled_ingredients=scaled,
        scaling_notes=tuple(notes),
    )


def get_scaling_presets(recipe: Recipe) -> list[dict]:
    """Common serving-size choices for a recipe.

    Returns:
        List of {"value": float, "label": str}, e.g. for "4 servings":
        Half (2 servings), Original (4 servings), 1.5× (6 servings),
        Double (8 servings), Triple (12 servings).
    """
    current = parse_yield(recipe.yields)
    presets = []
    for multiplier, name in SCALING_PRESETS:
        value = current.value * multiplier
        presets.append({
            "value": value,
            "label": f"{name} ({format_number(value)} {current.unit})",
        })
    return presets
