"""Unit normalization and conversion.

Two conversion families are supported, volume and weight. Each converts
through a base unit (ml, g) using a single factor table, so converting
there and back lands on the starting value.
"""

# Unit normalization map
UNIT_ALIASES = {
    # Volume
    "tablespoon": "tablespoon", "tablespoons": "tablespoon", "tbsp": "tablespoon",
    "tbsps": "tablespoon", "tbs": "tablespoon", "tbl": "tablespoon",
    "T": "tablespoon",  # Capital T = tablespoon (common convention)
    "teaspoon": "teaspoon", "teaspoons": "teaspoon", "tsp": "teaspoon", "tsps": "teaspoon",
    "t": "teaspoon",    # Lowercase t = teaspoon
    "cup": "cup", "cups": "cup", "c": "cup",
    "milliliter": "ml", "milliliters": "ml", "millilitre": "ml", "millilitres": "ml", "ml": "ml",
    "liter": "l", "liters": "l", "litre": "l", "litres": "l", "l": "l",
    "fl oz": "fl oz", "fluid ounce": "fl oz", "fluid ounces": "fl oz", "fl. oz": "fl oz",
    "pint": "pint", "pints": "pint", "pt": "pint",
    "quart": "quart", "quarts": "quart", "qt": "quart",
    "gallon": "gallon", "gallons": "gallon", "gal": "gallon",
    # Weight
    "gram": "g", "grams": "g", "g": "g", "gr": "g",
    "kilogram": "kg", "kilograms": "kg", "kg": "kg", "kgs": "kg",
    "ounce": "oz", "ounces": "oz", "oz": "oz",
    "pound": "lb", "pounds": "lb", "lb": "lb", "lbs": "lb",
    # Count
    "clove": "clove", "cloves": "clove",
    "head": "head", "heads": "head",
    "bunch": "bunch", "bunches": "bunch",
    "sprig": "sprig", "sprigs": "sprig",
    "slice": "slice", "slices": "slice",
    "piece": "piece", "pieces": "piece",
    "can": "can", "cans": "can",
    "package": "package", "packages": "package", "pkg": "package",
    "stalk": "stalk", "stalks": "stalk",
    "whole": "whole",
}

# Millilitres per unit
VOLUME_TO_ML = {
    "ml": 1.0,
    "l": 1000.0,
    "teaspoon": 4.92892,
    "tablespoon": 14.7868,
    "fl oz": 29.5735,
    "cup": 236.588,
    "pint": 473.176,
    "quart": 946.353,
    "gallon": 3785.41,
}

# Grams per unit
WEIGHT_TO_G = {
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.3495,
    "lb": 453.592,
}

COUNT_UNITS = {
    "clove", "head", "bunch", "sprig", "slice", "piece",
    "can", "package", "stalk", "whole",
}


def normalize_unit(unit: str) -> str:
    """Normalize a unit string to its canonical key.

    Args:
        unit: A unit string (e.g., "tablespoons", "Cup", "lbs")

    Returns:
        Canonical unit key (e.g., "tablespoon", "cup", "lb").
        Unknown units pass through lowercased.
        Empty string returns empty string.

    Note: T/t are case-sensitive (T=tablespoon, t=teaspoon), so we check
    the original case before falling back to lowercase lookup.
    """
    if not unit:
        return ""
    unit = unit.strip()
    if unit in UNIT_ALIASES:
        return UNIT_ALIASES[unit]
    lowered = unit.lower().rstrip('.')
    return UNIT_ALIASES.get(lowered, lowered)


def get_unit_family(unit: str) -> str:
    """Determine which unit family a unit belongs to.

    Returns:
        One of "volume", "weight", "count", "other"
    """
    canonical = normalize_unit(unit)
    if not canonical:
        return 'other'
    if canonical in VOLUME_TO_ML:
        return 'volume'
    if canonical in WEIGHT_TO_G:
        return 'weight'
    if canonical in COUNT_UNITS:
        return 'count'
    return 'other'


def _factor_table(family: str) -> dict:
    if family == 'volume':
        return VOLUME_TO_ML
    if family == 'weight':
        return WEIGHT_TO_G
    return {}


def can_convert(from_unit: str, to_unit: str) -> bool:
    """True when both units are in the same volume or weight family."""
    family = get_unit_family(from_unit)
    if family not in ('volume', 'weight'):
        return False
    return get_unit_family(to_unit) == family


def convert_amount(amount: float, from_unit: str, to_unit: str) -> float:
    """Convert an amount between two compatible units.

    Args:
        amount: Numeric amount in from_unit
        from_unit: Source unit (any alias)
        to_unit: Target unit (any alias)

    Returns:
        Amount expressed in to_unit. Incompatible or unknown units return
        the amount unchanged.
    """
    if not can_convert(from_unit, to_unit):
        return amount

    table = _factor_table(get_unit_family(from_unit))
    base = amount * table[normalize_unit(from_unit)]
    return base / table[normalize_unit(to_unit)]
