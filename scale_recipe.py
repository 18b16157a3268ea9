#!/usr/bin/env python3
"""Scale a recipe to a new yield.

Usage:
    python scale_recipe.py recipe.json --presets           # Show serving presets
    python scale_recipe.py recipe.json --servings 8        # Scale to 8 of the yield unit
    python scale_recipe.py recipe.json --factor 1.5        # Scale by a multiplier
    python scale_recipe.py recipe.json --servings 8 --format markdown --output out.md
    python scale_recipe.py recipe.json --factor 2 --format json --output exports/
"""

import argparse
import math
import sys
from pathlib import Path

from lib.recipe_loader import load_recipe
from lib.recipe_scaling import get_scaling_presets, parse_yield, scale_recipe
from templates.recipe_template import EXPORT_FORMATS, export_recipe, generate_filename


def format_scaled_recipe(scaled) -> str:
    """Human-readable summary of a ScaledRecipe."""
    lines = [
        f"{scaled.recipe.name}: {scaled.original_yield} -> {scaled.yields} "
        f"(x{scaled.scale_factor:g})",
        "",
    ]
    for ing in scaled.scaled_ingredients:
        parts = [p for p in (ing.scaled_amount, ing.unit, ing.item) if p]
        line = f"  - {' '.join(parts)}"
        if ing.prep:
            line += f", {ing.prep}"
        if ing.scaled_amount != ing.original_amount:
            line += f"  (was {ing.original_amount or '-'})"
        lines.append(line)
        if ing.scaling_warning:
            lines.append(f"      ! {ing.scaling_warning}")

    if scaled.scaling_notes:
        lines.append("")
        lines.append("Notes:")
        lines.extend(f"  * {note}" for note in scaled.scaling_notes)

    return '\n'.join(lines)


def main():
    parser = argparse.ArgumentParser(description="Scale a recipe to a new yield")
    parser.add_argument('recipe', type=Path, help='Recipe JSON file')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--servings', type=float, help='Target yield value (in the recipe\'s yield unit)')
    group.add_argument('--factor', type=float, help='Scale factor (e.g., 2 to double)')
    group.add_argument('--presets', action='store_true', help='List common scaling presets')
    parser.add_argument('--format', choices=EXPORT_FORMATS, help='Export the scaled recipe in this format')
    parser.add_argument('--output', type=Path, help='Write output to file instead of stdout')
    args = parser.parse_args()

    try:
        recipe = load_recipe(args.recipe)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.presets:
        for preset in get_scaling_presets(recipe):
            print(f"  {preset['label']}")
        return

    if args.servings is not None:
        target = args.servings
    elif args.factor is not None:
        target = (parse_yield(recipe.yields).value or 1) * args.factor
    else:
        target = parse_yield(recipe.yields).value

    if not math.isfinite(target) or target <= 0:
        print("Error: Target yield must be greater than zero", file=sys.stderr)
        sys.exit(1)

    scaled = scale_recipe(recipe, target)

    if args.format:
        output = export_recipe(scaled.as_recipe(), args.format)
    else:
        output = format_scaled_recipe(scaled)

    if args.output:
        path = args.output
        if path.is_dir():
            path = path / generate_filename(scaled.recipe.name, args.format or "text")
        path.write_text(output, encoding='utf-8')
        print(f"Saved to {path}")
        return

    print(output)


if __name__ == "__main__":
    main()
