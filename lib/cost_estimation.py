"""Recipe cost estimates from a table of typical grocery prices.

Prices are per unit (per lb, per cup, per clove ...). Ingredient amounts
are converted to the price unit where the units allow it, otherwise the
amount is priced as-is.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from lib.amount_parser import parse_amount
from lib.models import Recipe
from lib.recipe_scaling import parse_yield
from lib.unit_converter import normalize_unit, get_unit_family, can_convert, convert_amount


@dataclass(frozen=True)
class PriceEntry:
    ingredient_name: str
    price_per_unit: float
    unit: str
    store: Optional[str] = None


@dataclass
class IngredientCost:
    name: str
    amount: float
    unit: str
    unit_price: float
    total_cost: float
    percent_of_total: float = 0.0


@dataclass
class RecipeCost:
    total_cost: float
    cost_per_serving: float
    servings: int
    ingredients: list[IngredientCost] = field(default_factory=list)
    unknown_ingredients: list[str] = field(default_factory=list)
    confidence: str = "low"


DEFAULT_PRICES = [
    # Proteins
    ("chicken breast", 4.99, "lb"),
    ("chicken", 3.99, "lb"),
    ("ground beef", 5.99, "lb"),
    ("beef", 7.99, "lb"),
    ("pork", 4.49, "lb"),
    ("salmon", 12.99, "lb"),
    ("shrimp", 9.99, "lb"),
    ("tofu", 2.49, "block"),
    ("eggs", 0.25, ""),
    ("egg", 0.25, ""),
    # Dairy
    ("milk", 4.29, "gallon"),
    ("butter", 4.99, "lb"),
    ("heavy cream", 5.49, "pint"),
    ("sour cream", 2.99, "container"),
    ("cheese", 4.99, "lb"),
    ("parmesan", 8.99, "lb"),
    # Grains & baking
    ("flour", 0.50, "cup"),
    ("sugar", 0.40, "cup"),
    ("brown sugar", 0.45, "cup"),
    ("rice", 0.30, "cup"),
    ("pasta", 1.49, "lb"),
    ("spaghetti", 1.49, "lb"),
    ("bread", 0.25, "slice"),
    ("oats", 0.20, "cup"),
    # Produce
    ("onion", 0.75, ""),
    ("garlic", 0.10, "clove"),
    ("tomato", 0.50, ""),
    ("potato", 0.40, ""),
    ("carrot", 0.25, ""),
    ("celery", 0.20, "stalk"),
    ("broccoli", 2.49, "bunch"),
    ("spinach", 3.99, "bunch"),
    ("bell pepper", 1.29, ""),
    ("mushroom", 3.49, "lb"),
    ("lemon", 0.50, ""),
    ("lime", 0.35, ""),
    # Pantry
    ("olive oil", 0.30, "tablespoon"),
    ("vegetable oil", 0.10, "tablespoon"),
    ("soy sauce", 0.15, "tablespoon"),
    ("chicken broth", 0.75, "cup"),
    ("honey", 0.40, "tablespoon"),
    ("salt", 0.01, "teaspoon"),
    ("black pepper", 0.05, "teaspoon"),
]


def default_price_table() -> dict[str, PriceEntry]:
    """Built-in prices keyed by lowercased ingredient name."""
    return {
        name: PriceEntry(ingredient_name=name, price_per_unit=price, unit=unit)
        for name, price, unit in DEFAULT_PRICES
    }


def load_prices(path: Path) -> dict[str, PriceEntry]:
    """Default prices overlaid with entries from a JSON file.

    The file holds a list of {"name", "price", "unit", "store"} objects.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't a list of price objects
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Price file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid price file {path}: {e}") from e

    if not isinstance(data, list):
        raise ValueError(f"Price file must contain a list: {path}")

    prices = default_price_table()
    for entry in data:
        try:
            name = str(entry["name"]).lower().strip()
            prices[name] = PriceEntry(
                ingredient_name=name,
                price_per_unit=float(entry["price"]),
                unit=str(entry.get("unit", "")),
                store=entry.get("store"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid price entry {entry!r}: {e}") from e
    return prices


def _confidence(known: int, unknown: int) -> str:
    if known + unknown == 0:
        return "low"
    ratio = known / (known + unknown)
    if ratio >= 0.9:
        return "high"
    if ratio >= 0.7:
        return "medium"
    return "low"


def to_price_unit(amount: float, unit: str, price_unit: str) -> float:
    """Express an amount in the unit its price is quoted in.

    Volume and weight are bridged at water density (1 ml = 1 g). Anything
    else is priced as-is.
    """
    if normalize_unit(unit) == normalize_unit(price_unit):
        return amount
    if can_convert(unit, price_unit):
        return convert_amount(amount, unit, price_unit)

    families = (get_unit_family(unit), get_unit_family(price_unit))
    if families == ('volume', 'weight'):
        return convert_amount(convert_amount(amount, unit, "ml"), "g", price_unit)
    if families == ('weight', 'volume'):
        return convert_amount(convert_amount(amount, unit, "g"), "ml", price_unit)
    return amount


def calculate_recipe_cost(recipe: Recipe, prices: dict[str, PriceEntry] | None = None) -> RecipeCost:
    """Estimate what a recipe costs to make.

    Args:
        recipe: Recipe to price
        prices: Price table from default_price_table() or load_prices()

    Returns:
        RecipeCost with ingredients sorted most expensive first.
    """
    if prices is None:
        prices = default_price_table()

    costs = []
    unknown = []
    total = 0.0

    for ingredient in recipe.ingredients:
        entry = prices.get(ingredient.key)
        if entry is None:
            unknown.append(ingredient.item)
            continue

        amount = parse_amount(ingredient.amount)
        cost = to_price_unit(amount, ingredient.unit, entry.unit) * entry.price_per_unit
        total += cost
        costs.append(IngredientCost(
            name=ingredient.item,
            amount=amount,
            unit=ingredient.unit,
            unit_price=entry.price_per_unit,
            total_cost=cost,
        ))

    for c in costs:
        c.percent_of_total = (c.total_cost / total * 100) if total > 0 else 0.0
    costs.sort(key=lambda c: c.total_cost, reverse=True)

    servings = max(int(parse_yield(recipe.yields).value), 1)

    return RecipeCost(
        total_cost=total,
        cost_per_serving=total / servings,
        servings=servings,
        ingredients=costs,
        unknown_ingredients=unknown,
        confidence=_confidence(len(costs), len(unknown)),
    )


def compare_recipe_costs(recipes: list[Recipe], prices: dict[str, PriceEntry] | None = None) -> list[dict]:
    """Recipes sorted cheapest per serving first."""
    comparisons = []
    for recipe in recipes:
        cost = calculate_recipe_cost(recipe, prices)
        comparisons.append({
            "recipe_name": recipe.name,
            "cost_per_serving": cost.cost_per_serving,
            "servings": cost.servings,
            "total_cost": cost.total_cost,
        })
    comparisons.sort(key=lambda c: c["cost_per_serving"])
    return comparisons


def format_currency(amount: float) -> str:
    return f"${amount:,.2f}"
