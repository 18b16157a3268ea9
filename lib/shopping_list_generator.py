"""Shopping list generation from a recipe's ingredients.

Ingredients are sorted into grocery-store sections by keyword. The
category table is scanned in order and the first match wins, so an
ingredient matching several sections (e.g. "bell pepper" vs "pepper")
lands in the earliest one.
"""

from typing import Iterable

from lib.models import Ingredient, Recipe

# Order matters: first matching category wins
CATEGORY_KEYWORDS = [
    ("Produce", [
        "onion", "garlic", "tomato", "lettuce", "pepper", "carrot", "celery",
        "potato", "mushroom", "herb", "basil", "cilantro", "parsley", "lemon",
        "lime", "avocado", "spinach", "kale", "broccoli", "cucumber", "zucchini",
        "ginger",
    ]),
    ("Proteins", [
        "chicken", "beef", "pork", "fish", "salmon", "shrimp", "turkey", "lamb",
        "tofu", "tempeh", "sausage", "bacon", "steak", "ground",
    ]),
    ("Dairy", [
        "milk", "cream", "cheese", "butter", "yogurt", "egg", "sour cream",
        "parmesan", "mozzarella", "cheddar", "ricotta",
    ]),
    ("Pantry", [
        "flour", "sugar", "salt", "oil", "vinegar", "soy sauce", "pasta", "rice",
        "bread", "stock", "broth", "canned", "tomato paste", "honey", "maple",
        "vanilla", "baking",
    ]),
    ("Spices", [
        "pepper", "cumin", "paprika", "cinnamon", "oregano", "thyme", "rosemary",
        "chili", "cayenne", "nutmeg", "turmeric", "coriander", "bay leaf", "clove",
    ]),
]

FALLBACK_CATEGORY = "Other"

CATEGORY_ORDER = [name for name, _ in CATEGORY_KEYWORDS] + [FALLBACK_CATEGORY]


def categorize_ingredient(ingredient: Ingredient) -> str:
    """Return the shopping category for an ingredient.

    Matches keywords against the item name plus its prep note.
    Unmatched ingredients go to "Other".
    """
    text = f"{ingredient.item} {ingredient.prep or ''}".lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(kw in text for kw in keywords):
            return category
    return FALLBACK_CATEGORY


def generate_shopping_list(
    ingredients: Iterable[Ingredient],
    checked_items: Iterable[str] | None = None,
) -> list[tuple[str, list[Ingredient]]]:
    """Group ingredients by shopping category.

    Args:
        ingredients: Ingredients to shop for
        checked_items: Item names already on hand; these are left out

    Returns:
        List of (category, ingredients) in the fixed category order.
        Empty categories are omitted. Within a category required items
        come before optional ones, otherwise recipe order is kept.
    """
    checked = {" ".join(name.lower().split()) for name in checked_items or []}

    grouped = {category: [] for category in CATEGORY_ORDER}
    for ing in ingredients:
        if ing.key in checked:
            continue
        grouped[categorize_ingredient(ing)].append(ing)

    result = []
    for category in CATEGORY_ORDER:
        items = grouped[category]
        if not items:
            continue
        items.sort(key=lambda ing: ing.optional)
        result.append((category, items))
    return result


def format_list_item(ingredient: Ingredient) -> str:
    """Format one ingredient as "2 cups flour, sifted"."""
    parts = [p for p in (ingredient.amount, ingredient.unit, ingredient.item) if p]
    line = " ".join(parts)
    if ingredient.prep:
        line += f", {ingredient.prep}"
    if ingredient.optional:
        line += " (optional)"
    return line


def format_shopping_list(recipe: Recipe, checked_items: Iterable[str] | None = None) -> str:
    """Render a recipe's shopping list as checkbox plain text.

    Example:
        Shopping List: Test Pasta (4 servings)

        PRODUCE
        [ ] 3 cloves Garlic, minced

        PANTRY
        [ ] 1 lb Pasta
    """
    lines = [f"Shopping List: {recipe.name} ({recipe.yields})", ""]

    for category, items in generate_shopping_list(recipe.ingredients, checked_items):
        lines.append(category.upper())
        for ing in items:
            lines.append(f"[ ] {format_list_item(ing)}")
        lines.append("")

    return "\n".join(lines).rstrip()
