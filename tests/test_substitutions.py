"""Tests for offline substitution lookup"""

from lib.models import Ingredient
from lib.substitutions import (
    find_substitutions,
    filter_by_dietary,
    get_all_substitution_categories,
    get_substitutions_by_category,
)


class TestFindSubstitutions:
    def test_exact_match(self):
        result = find_substitutions(Ingredient(item="butter"))
        assert result is not None
        assert result.category == "Dairy"
        assert any(s.substitute == "coconut oil" for s in result.substitutes)

    def test_case_insensitive(self):
        assert find_substitutions(Ingredient(item="Heavy Cream")).category == "Dairy"

    def test_substring_match(self):
        result = find_substitutions(Ingredient(item="unsalted butter"))
        assert result.category == "Dairy"

    def test_longer_key_preferred(self):
        result = find_substitutions(Ingredient(item="light brown sugar"))
        assert result.substitutes[0].substitute == "white sugar + molasses"

    def test_plural_eggs(self):
        assert find_substitutions(Ingredient(item="eggs")).category == "Eggs"

    def test_recipe_substitutes_included(self):
        ing = Ingredient(item="butter", substitutes=("ghee",))
        assert find_substitutions(ing).recipe_substitutes == ["ghee"]

    def test_recipe_substitutes_only(self):
        """Unknown items with recipe-listed alternatives still get a result"""
        ing = Ingredient(item="gochujang", substitutes=("sriracha + miso",))
        result = find_substitutions(ing)
        assert result.category == "Recipe"
        assert result.substitutes == []
        assert result.recipe_substitutes == ["sriracha + miso"]

    def test_unknown_returns_none(self):
        assert find_substitutions(Ingredient(item="saffron")) is None


class TestFilterByDietary:
    def test_no_tags_keeps_all(self):
        subs = find_substitutions(Ingredient(item="milk")).substitutes
        assert filter_by_dietary(subs, []) == subs

    def test_requires_every_tag(self):
        subs = find_substitutions(Ingredient(item="milk")).substitutes
        result = filter_by_dietary(subs, ["vegan", "nut-free"])
        assert [s.substitute for s in result] == ["oat milk", "soy milk"]

    def test_nothing_matches(self):
        subs = find_substitutions(Ingredient(item="baking soda")).substitutes
        assert filter_by_dietary(subs, ["keto"]) == []


def test_categories_sorted_and_unique():
    categories = get_all_substitution_categories()
    assert categories == sorted(set(categories))
    assert "Dairy" in categories
    assert "Eggs" in categories


def test_substitutions_by_category():
    aromatics = get_substitutions_by_category("Aromatics")
    assert set(aromatics) == {"garlic", "onion", "fresh herbs"}
    assert get_substitutions_by_category("Nope") == {}
