#!/usr/bin/env python3
"""Estimate nutrition and cost for recipes.

Usage:
    python recipe_stats.py recipe.json                  # Nutrition + cost
    python recipe_stats.py recipe.json --prices my_prices.json
    python recipe_stats.py a.json b.json --compare      # Cheapest per serving first
"""

import argparse
import sys
from pathlib import Path

from lib.cost_estimation import calculate_recipe_cost, compare_recipe_costs, default_price_table, format_currency, load_prices
from lib.nutrition import get_daily_value_percent, get_detailed_nutrition
from lib.recipe_loader import load_recipe


def print_nutrition(recipe):
    details = get_detailed_nutrition(recipe)
    per_serving = details.per_serving.nutrition
    daily = get_daily_value_percent(per_serving)

    print(f"Nutrition per serving ({details.per_serving.servings} servings, "
          f"{details.coverage_percent}% of ingredients matched):")
    print(f"  Calories:      {per_serving.calories:g} kcal ({daily['calories']}% DV)")
    print(f"  Protein:       {per_serving.protein:g} g ({daily['protein']}% DV)")
    print(f"  Carbohydrates: {per_serving.carbohydrates:g} g ({daily['carbohydrates']}% DV)")
    print(f"  Fat:           {per_serving.fat:g} g ({daily['fat']}% DV)")
    print(f"  Fiber:         {per_serving.fiber:g} g ({daily['fiber']}% DV)")
    print(f"  Sugar:         {per_serving.sugar:g} g ({daily['sugar']}% DV)")
    print(f"  Sodium:        {per_serving.sodium:g} mg ({daily['sodium']}% DV)")


def print_cost(recipe, prices):
    cost = calculate_recipe_cost(recipe, prices)
    print(f"Estimated cost: {format_currency(cost.total_cost)} total, "
          f"{format_currency(cost.cost_per_serving)} per serving ({cost.confidence} confidence)")
    for item in cost.ingredients[:5]:
        print(f"  {item.name}: {format_currency(item.total_cost)} ({item.percent_of_total:.0f}%)")
    if cost.unknown_ingredients:
        print(f"  No price for: {', '.join(cost.unknown_ingredients)}")


def main():
    parser = argparse.ArgumentParser(description="Estimate recipe nutrition and cost")
    parser.add_argument('recipes', type=Path, nargs='+', help='Recipe JSON file(s)')
    parser.add_argument('--prices', type=Path, help='JSON file with price overrides')
    parser.add_argument('--compare', action='store_true', help='Compare cost per serving across recipes')
    args = parser.parse_args()

    try:
        prices = load_prices(args.prices) if args.prices else default_price_table()
        recipes = [load_recipe(path) for path in args.recipes]
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.compare:
        for row in compare_recipe_costs(recipes, prices):
            print(f"  {format_currency(row['cost_per_serving'])}/serving  {row['recipe_name']}")
        return

    for recipe in recipes:
        print(f"== {recipe.name} ({recipe.yields})")
        print_nutrition(recipe)
        print_cost(recipe, prices)
        print()


if __name__ == "__main__":
    main()
