"""Offline ingredient substitution lookup.

Used directly for "I don't have this" help and as the fallback when the
Chef Ollama server can't be reached.
"""

from dataclasses import dataclass, field
from typing import Optional

from lib.models import Ingredient


@dataclass(frozen=True)
class Substitution:
    substitute: str
    ratio: str
    notes: str
    dietary_tags: tuple[str, ...] = ()


@dataclass
class SubstitutionResult:
    original: Ingredient
    category: str
    substitutes: list[Substitution] = field(default_factory=list)
    # Alternatives listed on the recipe itself
    recipe_substitutes: list[str] = field(default_factory=list)


def _sub(substitute, ratio, notes, *tags):
    return Substitution(substitute, ratio, notes, tuple(tags))


SUBSTITUTIONS = {
    # Dairy
    "butter": ("Dairy", [
        _sub("coconut oil", "1:1", "Works well for baking, adds slight coconut flavor", "vegan", "dairy-free"),
        _sub("olive oil", "3/4 cup per 1 cup butter", "Best for savory dishes", "vegan", "dairy-free"),
        _sub("applesauce", "1/2 cup per 1 cup butter", "For baking, reduces fat content", "vegan", "dairy-free", "low-sugar"),
        _sub("Greek yogurt", "1/2 cup per 1 cup butter", "For baking, adds moisture", "vegetarian"),
        _sub("margarine", "1:1", "Check label for dairy content", "dairy-free"),
    ]),
    "milk": ("Dairy", [
        _sub("oat milk", "1:1", "Creamy, great for baking", "vegan", "dairy-free", "nut-free"),
        _sub("almond milk", "1:1", "Lighter, slight nutty flavor", "vegan", "dairy-free"),
        _sub("soy milk", "1:1", "Protein-rich, neutral flavor", "vegan", "dairy-free", "nut-free"),
        _sub("water + butter", "1 cup water + 1 tbsp butter", "In a pinch for cooking"),
    ]),
    "heavy cream": ("Dairy", [
        _sub("coconut cream", "1:1", "Great for whipping, coconut flavor", "vegan", "dairy-free"),
        _sub("milk + butter", "3/4 cup milk + 1/4 cup melted butter", "Not for whipping"),
        _sub("evaporated milk", "1:1", "Lighter option"),
    ]),
    "sour cream": ("Dairy", [
        _sub("Greek yogurt", "1:1", "Tangier, higher protein", "vegetarian"),
        _sub("coconut cream + lemon", "1 cup + 1 tbsp lemon juice", "Let sit 5 min", "vegan", "dairy-free"),
    ]),
    "buttermilk": ("Dairy", [
        _sub("milk + lemon juice", "1 cup milk + 1 tbsp lemon juice", "Let sit 5-10 minutes"),
        _sub("milk + vinegar", "1 cup milk + 1 tbsp white vinegar", "Let sit 5-10 minutes"),
        _sub("oat milk + lemon", "1 cup + 1 tbsp lemon juice", "Vegan option, let sit 5 min", "vegan", "dairy-free"),
    ]),
    "cheese": ("Dairy", [
        _sub("nutritional yeast", "2-3 tbsp per 1/4 cup cheese", "Adds cheesy, nutty flavor", "vegan", "dairy-free"),
        _sub("cashew cheese", "1:1", "Many store-bought options", "vegan", "dairy-free"),
    ]),

    # Eggs
    "egg": ("Eggs", [
        _sub("flax egg", "1 tbsp ground flax + 3 tbsp water per egg", "Let sit 5 minutes, works in baking", "vegan", "egg-free"),
        _sub("chia egg", "1 tbsp chia + 3 tbsp water per egg", "Let sit 5 minutes", "vegan", "egg-free"),
        _sub("mashed banana", "1/4 cup per egg", "Adds sweetness and moisture", "vegan", "egg-free"),
        _sub("aquafaba", "3 tbsp per egg", "Chickpea liquid, great for meringue", "vegan", "egg-free"),
    ]),

    # Baking
    "all-purpose flour": ("Baking", [
        _sub("whole wheat flour", "3/4 cup per 1 cup", "Denser result, nuttier flavor"),
        _sub("gluten-free flour blend", "1:1", "Look for a blend with xanthan gum", "gluten-free"),
        _sub("almond flour", "1:1 plus extra egg", "Moister, denser crumb", "gluten-free", "keto"),
    ]),
    "sugar": ("Baking", [
        _sub("honey", "3/4 cup per 1 cup sugar", "Reduce other liquids by 1/4 cup"),
        _sub("maple syrup", "3/4 cup per 1 cup sugar", "Reduce other liquids by 3 tbsp", "vegan"),
        _sub("coconut sugar", "1:1", "Caramel notes", "vegan"),
    ]),
    "brown sugar": ("Baking", [
        _sub("white sugar + molasses", "1 cup sugar + 1 tbsp molasses", "Mix well", "vegan"),
        _sub("coconut sugar", "1:1", "Slightly less moist", "vegan"),
    ]),
    "baking powder": ("Baking", [
        _sub("baking soda + cream of tartar", "1/4 tsp soda + 1/2 tsp cream of tartar per 1 tsp", "Use right away"),
    ]),
    "baking soda": ("Baking", [
        _sub("baking powder", "3 tsp per 1 tsp soda", "Reduce salt in the recipe"),
    ]),

    # Oils & acids
    "vegetable oil": ("Oils", [
        _sub("canola oil", "1:1", "Neutral flavor", "vegan"),
        _sub("melted butter", "1:1", "Richer flavor", "vegetarian"),
        _sub("applesauce", "1:1", "For baking only", "vegan", "low-sugar"),
    ]),
    "lemon juice": ("Acids", [
        _sub("lime juice", "1:1", "Slightly different citrus note", "vegan"),
        _sub("white wine vinegar", "1/2 the amount", "Sharper, use less", "vegan"),
    ]),
    "white wine": ("Acids", [
        _sub("chicken broth + vinegar", "1 cup broth + 1 tbsp vinegar", "For deglazing"),
        _sub("white grape juice + vinegar", "1 cup juice + 1 tbsp vinegar", "Non-alcoholic", "vegan"),
    ]),

    # Sauces & seasonings
    "soy sauce": ("Sauces", [
        _sub("tamari", "1:1", "Usually gluten-free", "gluten-free", "vegan"),
        _sub("coconut aminos", "1:1", "Less salty, slightly sweet", "gluten-free", "soy-free", "low-sodium"),
    ]),
    "garlic": ("Aromatics", [
        _sub("garlic powder", "1/8 tsp per clove", "Add with other dry spices", "vegan"),
        _sub("shallot", "1 small shallot per 2 cloves", "Milder flavor", "vegan"),
    ]),
    "onion": ("Aromatics", [
        _sub("onion powder", "1 tbsp per medium onion", "No texture, flavor only", "vegan"),
        _sub("shallots", "3 shallots per medium onion", "Milder and sweeter", "vegan"),
        _sub("leeks", "1 leek per onion", "Use white and light green parts", "vegan"),
    ]),
    "fresh herbs": ("Aromatics", [
        _sub("dried herbs", "1 tsp dried per 1 tbsp fresh", "Add earlier in cooking", "vegan"),
    ]),

    # Proteins
    "chicken broth": ("Broths", [
        _sub("vegetable broth", "1:1", "Lighter flavor", "vegan", "vegetarian"),
        _sub("water + bouillon", "1 cup water + 1 cube", "Check sodium content"),
    ]),
    "ground beef": ("Proteins", [
        _sub("ground turkey", "1:1", "Leaner, add a little oil"),
        _sub("lentils", "1 cup cooked per 1/2 lb", "Great in sauces and tacos", "vegan", "vegetarian"),
        _sub("crumbled tempeh", "1:1", "Nutty flavor", "vegan", "vegetarian"),
    ]),
}


def _result(ingredient: Ingredient, category: str, subs: list[Substitution]) -> SubstitutionResult:
    return SubstitutionResult(
        original=ingredient,
        category=category,
        substitutes=list(subs),
        recipe_substitutes=list(ingredient.substitutes),
    )


def find_substitutions(ingredient: Ingredient) -> Optional[SubstitutionResult]:
    """Look up substitutes for an ingredient.

    Tries an exact name match first, then a substring match in either
    direction ("unsalted butter" finds "butter"). Longer keys are tried
    first so "light brown sugar" finds "brown sugar", not "sugar".

    Returns:
        SubstitutionResult, or None when nothing is known. An ingredient
        that only carries its own recipe-listed substitutes still gets a
        result with category "Recipe".
    """
    name = ingredient.key

    if name in SUBSTITUTIONS:
        category, subs = SUBSTITUTIONS[name]
        return _result(ingredient, category, subs)

    for key in sorted(SUBSTITUTIONS, key=len, reverse=True):
        if key in name or (name and name in key):
            category, subs = SUBSTITUTIONS[key]
            return _result(ingredient, category, subs)

    if ingredient.substitutes:
        return _result(ingredient, "Recipe", [])

    return None


def filter_by_dietary(substitutes: list[Substitution], tags: list[str]) -> list[Substitution]:
    """Keep substitutes carrying every requested dietary tag."""
    if not tags:
        return list(substitutes)
    return [s for s in substitutes if all(tag in s.dietary_tags for tag in tags)]


def get_all_substitution_categories() -> list[str]:
    return sorted({category for category, _ in SUBSTITUTIONS.values()})


def get_substitutions_by_category(category: str) -> dict[str, list[Substitution]]:
    return {
        key: list(subs)
        for key, (cat, subs) in SUBSTITUTIONS.items()
        if cat == category
    }
