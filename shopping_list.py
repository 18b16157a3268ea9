#!/usr/bin/env python3
"""Generate a shopping list from one or more recipes.

A single recipe gives its own grouped checklist. Several recipes are
combined first, adding up like ingredients across recipes.

Usage:
    python shopping_list.py pasta.json                      # Plain-text checklist
    python shopping_list.py pasta.json soup.json            # Combined list
    python shopping_list.py pasta.json --servings 8         # Scale before listing
    python shopping_list.py pasta.json --checked salt "olive oil"
    python shopping_list.py pasta.json --markdown --output list.md
"""

import argparse
import math
import sys
from pathlib import Path

from lib.ingredient_aggregator import aggregate_ingredients
from lib.recipe_loader import load_recipe
from lib.recipe_scaling import scale_recipe
from lib.shopping_list_generator import format_shopping_list, generate_shopping_list
from lib.models import Recipe
from templates.shopping_list_template import generate_filename, generate_shopping_list_markdown


def load_recipes(paths: list[Path]) -> list[Recipe]:
    """Load every recipe file, exiting on the first bad one."""
    recipes = []
    for path in paths:
        try:
            recipes.append(load_recipe(path))
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    return recipes


def combine_recipes(recipes: list[Recipe]) -> Recipe:
    """Merge several recipes into one pseudo-recipe with aggregated ingredients."""
    all_ingredients = []
    for recipe in recipes:
        all_ingredients.extend(recipe.ingredients)

    return Recipe(
        name=", ".join(r.name for r in recipes),
        yields=f"{len(recipes)} recipes",
        ingredients=aggregate_ingredients(all_ingredients),
    )


def main():
    parser = argparse.ArgumentParser(description="Generate a shopping list from recipes")
    parser.add_argument('recipes', type=Path, nargs='+', help='Recipe JSON file(s)')
    parser.add_argument('--servings', type=float, help='Scale a single recipe to this yield first')
    parser.add_argument('--checked', nargs='*', default=[], help='Items already on hand')
    parser.add_argument('--markdown', action='store_true', help='Markdown checklist instead of plain text')
    parser.add_argument('--output', type=Path, help='Output to file (a directory gets a generated filename)')
    args = parser.parse_args()

    recipes = load_recipes(args.recipes)

    if args.servings is not None:
        if len(recipes) > 1:
            print("Error: --servings only works with a single recipe", file=sys.stderr)
            sys.exit(1)
        if not math.isfinite(args.servings) or args.servings <= 0:
            print("Error: --servings must be greater than zero", file=sys.stderr)
            sys.exit(1)
        recipes = [scale_recipe(recipes[0], args.servings).as_recipe()]

    if len(recipes) == 1:
        recipe = recipes[0]
    else:
        recipe = combine_recipes(recipes)
        print(f"Combined {len(recipes)} recipes into {len(recipe.ingredients)} items", file=sys.stderr)

    if args.markdown:
        groups = generate_shopping_list(recipe.ingredients, args.checked)
        sources = [r.name for r in recipes] if len(recipes) > 1 else None
        output = generate_shopping_list_markdown(f"{recipe.name} ({recipe.yields})", groups, sources)
    else:
        output = format_shopping_list(recipe, args.checked)

    if args.output:
        target = args.output
        if target.is_dir():
            target = target / generate_filename(recipe.name)
        target.write_text(output, encoding='utf-8')
        print(f"Saved to {target}")
        return

    print(output)


if __name__ == "__main__":
    main()
