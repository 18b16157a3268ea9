"""Ingredient aggregation for multi-recipe grocery lists.

Combines like ingredients across recipes, handling unit conversion
within unit families (volume, weight). Count and unknown units are
only summed with the same unit.
"""

from typing import Iterable

from lib.amount_parser import parse_amount, format_amount
from lib.models import Ingredient
from lib.unit_converter import normalize_unit, get_unit_family, convert_amount


def choose_output_unit(units: list[str]) -> str:
    """Pick the most common unit in a group (first seen wins ties)."""
    counts = {}
    for u in units:
        counts[u] = counts.get(u, 0) + 1
    return max(counts, key=counts.get)


def _merge(items: list[Ingredient], unit: str, total: float) -> Ingredient:
    first = items[0]
    return Ingredient(
        item=first.item,
        amount=format_amount(total),
        unit=unit,
        prep=first.prep,
        optional=all(i.optional for i in items),
        substitutes=first.substitutes,
    )


def sum_unit_family(items: list[Ingredient]) -> Ingredient:
    """Sum convertible ingredients into the group's most common unit."""
    if len(items) == 1:
        return items[0]

    output_unit = choose_output_unit([normalize_unit(i.unit) for i in items])
    total = 0.0
    for ing in items:
        total += convert_amount(parse_amount(ing.amount), ing.unit, output_unit)

    # Keep the spelling the recipe used for the chosen unit
    display_unit = next(i.unit for i in items if normalize_unit(i.unit) == output_unit)
    return _merge(items, display_unit, total)


def combine_ingredient_group(items: list[Ingredient]) -> list[Ingredient]:
    """Combine ingredients that share an item name."""
    if not items:
        return []

    by_family = {'volume': [], 'weight': []}
    by_unit = {}

    for ing in items:
        family = get_unit_family(ing.unit)
        if family in by_family:
            by_family[family].append(ing)
        else:
            by_unit.setdefault(normalize_unit(ing.unit), []).append(ing)

    results = []
    for group in by_family.values():
        if group:
            results.append(sum_unit_family(group))

    for unit_group in by_unit.values():
        if len(unit_group) == 1:
            results.append(unit_group[0])
        else:
            total = sum(parse_amount(i.amount) for i in unit_group)
            results.append(_merge(unit_group, unit_group[0].unit, total))

    return results


def aggregate_ingredients(all_ingredients: Iterable[Ingredient]) -> list[Ingredient]:
    """Combine like ingredients across recipes, sorted by item name."""
    groups = {}
    for ing in all_ingredients:
        groups.setdefault(ing.key, []).append(ing)

    results = []
    for items in groups.values():
        results.extend(combine_ingredient_group(items))

    results.sort(key=lambda ing: ing.key)
    return results


def format_ingredient(ing: Ingredient) -> str:
    """Format an ingredient as a display string ("2 cups flour")."""
    parts = [p for p in (ing.amount, ing.unit, ing.item) if p]
    return ' '.join(parts)
