"""Tests for shopping list template."""

from lib.models import Ingredient
from templates.shopping_list_template import generate_shopping_list_markdown, generate_filename


GROUPS = [
    ("Produce", [Ingredient(item="garlic", amount="3", unit="cloves", prep="minced")]),
    ("Pantry", [Ingredient(item="spaghetti", amount="1", unit="lb")]),
]


def test_generates_markdown_with_header():
    """Template includes title in header."""
    result = generate_shopping_list_markdown("Test Pasta (4 servings)", GROUPS)
    assert result.startswith("# Shopping List: Test Pasta (4 servings)")


def test_generates_section_headings():
    """Each category becomes a second-level heading."""
    result = generate_shopping_list_markdown("Test Pasta", GROUPS)
    assert "## Produce" in result
    assert "## Pantry" in result
    assert result.index("## Produce") < result.index("## Pantry")


def test_generates_checklist_items():
    """Template creates checkbox items."""
    result = generate_shopping_list_markdown("Test Pasta", GROUPS)
    assert "- [ ] 3 cloves garlic, minced" in result
    assert "- [ ] 1 lb spaghetti" in result


def test_lists_sources():
    """Combined lists name their recipes."""
    result = generate_shopping_list_markdown("Dinner", GROUPS, sources=["Pasta", "Soup"])
    assert "Generated from Pasta, Soup" in result


def test_no_sources_line_by_default():
    result = generate_shopping_list_markdown("Test Pasta", GROUPS)
    assert "Generated from" not in result


def test_empty_groups():
    """Nothing left to buy."""
    result = generate_shopping_list_markdown("Test Pasta", [])
    assert "All items checked off!" in result


def test_generate_filename():
    """Filename is slugged from the title."""
    assert generate_filename("Test Pasta") == "shopping-list-test-pasta.md"
    assert generate_filename("Mom's Chili!") == "shopping-list-mom-s-chili.md"
    assert generate_filename("!!!") == "shopping-list-untitled.md"
