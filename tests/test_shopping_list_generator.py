"""Tests for shopping list generator."""

from lib.models import Ingredient, Recipe
from lib.shopping_list_generator import (
    categorize_ingredient,
    generate_shopping_list,
    format_list_item,
    format_shopping_list,
    CATEGORY_ORDER,
)


def make_recipe(items):
    return Recipe(
        name="Test Dinner",
        yields="4 servings",
        ingredients=[Ingredient(item=item, amount="1") for item in items],
    )


def test_categorize_known_items():
    """Keywords map ingredients to store sections."""
    assert categorize_ingredient(Ingredient(item="yellow onion")) == "Produce"
    assert categorize_ingredient(Ingredient(item="chicken breast")) == "Proteins"
    assert categorize_ingredient(Ingredient(item="whole milk")) == "Dairy"
    assert categorize_ingredient(Ingredient(item="all-purpose flour")) == "Pantry"
    assert categorize_ingredient(Ingredient(item="cumin")) == "Spices"


def test_categorize_first_match_wins():
    """An item matching two sections lands in the earlier one."""
    # "pepper" is both a Produce and a Spices keyword
    assert categorize_ingredient(Ingredient(item="black pepper")) == "Produce"


def test_categorize_uses_prep():
    """Prep text counts toward matching."""
    ing = Ingredient(item="mixed greens", prep="with lemon")
    assert categorize_ingredient(ing) == "Produce"


def test_categorize_unknown_is_other():
    """Unmatched items fall back to Other."""
    assert categorize_ingredient(Ingredient(item="dragon fruit")) == "Other"


def test_generate_groups_in_fixed_order():
    """Groups follow the category order regardless of recipe order."""
    ingredients = make_recipe(["cumin", "flour", "milk", "chicken breast", "onion"]).ingredients
    groups = generate_shopping_list(ingredients)
    assert [category for category, _ in groups] == ["Produce", "Proteins", "Dairy", "Pantry", "Spices"]


def test_generate_omits_empty_categories():
    """Only sections with items appear."""
    groups = generate_shopping_list(make_recipe(["onion", "dragon fruit"]).ingredients)
    assert [category for category, _ in groups] == ["Produce", "Other"]


def test_generate_optional_items_last():
    """Required items come before optional ones within a section."""
    ingredients = [
        Ingredient(item="parsley", optional=True),
        Ingredient(item="onion"),
        Ingredient(item="garlic"),
    ]
    groups = dict(generate_shopping_list(ingredients))
    assert [i.item for i in groups["Produce"]] == ["onion", "garlic", "parsley"]


def test_generate_skips_checked_items():
    """Checked items are left out, matched case-insensitively."""
    groups = dict(generate_shopping_list(make_recipe(["onion", "milk"]).ingredients, ["  ONION "]))
    assert "Produce" not in groups
    assert "Dairy" in groups


def test_category_order_ends_with_other():
    assert CATEGORY_ORDER[-1] == "Other"


def test_format_list_item_full():
    ing = Ingredient(item="flour", amount="2", unit="cups", prep="sifted")
    assert format_list_item(ing) == "2 cups flour, sifted"


def test_format_list_item_no_unit():
    assert format_list_item(Ingredient(item="eggs", amount="3")) == "3 eggs"


def test_format_list_item_optional():
    ing = Ingredient(item="parmesan", amount="1/4", unit="cup", optional=True)
    assert format_list_item(ing) == "1/4 cup parmesan (optional)"


def test_format_shopping_list_sections_in_order():
    """Rendered text has each header before its item, in order."""
    text = format_shopping_list(make_recipe(["onion", "chicken breast", "milk", "flour", "cumin"]))
    lines = text.split("\n")

    assert lines[0] == "Shopping List: Test Dinner (4 servings)"
    headers = ["PRODUCE", "PROTEINS", "DAIRY", "PANTRY", "SPICES"]
    items = ["onion", "chicken breast", "milk", "flour", "cumin"]
    positions = [lines.index(h) for h in headers]
    assert positions == sorted(positions)
    for header, item in zip(headers, items):
        assert lines[lines.index(header) + 1] == f"[ ] 1 {item}"
    assert "OTHER" not in text


def test_format_shopping_list_other_section():
    text = format_shopping_list(make_recipe(["dragon fruit"]))
    assert "OTHER\n[ ] 1 dragon fruit" in text


def test_format_shopping_list_no_trailing_blank():
    text = format_shopping_list(make_recipe(["onion"]))
    assert not text.endswith("\n")


def test_format_shopping_list_all_checked():
    """Only the header remains when everything is on hand."""
    text = format_shopping_list(make_recipe(["onion"]), ["onion"])
    assert text == "Shopping List: Test Dinner (4 servings)"
