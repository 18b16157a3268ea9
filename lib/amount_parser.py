"""Amount parsing and formatting for ingredient quantities.

Anything that can't be read as a number counts as one unit, so "a pinch"
or "to taste" still scale to something sensible.
"""

import math
import re
from fractions import Fraction

# Unicode vulgar fractions seen in pasted recipes
UNICODE_FRACTIONS = {
    "½": 0.5,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 0.25,
    "¾": 0.75,
    "⅕": 0.2,
    "⅖": 0.4,
    "⅗": 0.6,
    "⅘": 0.8,
    "⅙": 1 / 6,
    "⅚": 5 / 6,
    "⅛": 0.125,
    "⅜": 0.375,
    "⅝": 0.625,
    "⅞": 0.875,
}

# Kitchen fractions used for display, checked against the fractional part
DISPLAY_FRACTIONS = [
    (0.125, "1/8"),
    (0.25, "1/4"),
    (1 / 3, "1/3"),
    (0.375, "3/8"),
    (0.5, "1/2"),
    (0.625, "5/8"),
    (2 / 3, "2/3"),
    (0.75, "3/4"),
    (0.875, "7/8"),
]

FRACTION_TOLERANCE = 0.05


def _parse_token(token: str) -> float:
    """Value of a single whitespace-separated token, 0 if unreadable.

    Only the first two parts of a slashed token count ("1/2/3" -> 0.5).
    """
    numerator, slash, rest = token.partition("/")
    try:
        value = Fraction(numerator)
        if slash:
            value /= Fraction(rest.split("/")[0])
        return float(value)
    except (ValueError, ZeroDivisionError, OverflowError):
        return 0.0


def parse_amount(text: str) -> float:
    """Parse a free-text amount into a number.

    Handles whole numbers ("2"), decimals ("1.5"), fractions ("1/2"),
    mixed numbers ("2 1/4") and unicode fractions ("1½").

    Args:
        text: Amount string as entered in the recipe

    Returns:
        Sum of every readable token. Empty or unreadable input returns 1.
    """
    if not text:
        return 1.0

    value = 0.0
    remaining = str(text).strip()

    for symbol, fraction in UNICODE_FRACTIONS.items():
        if symbol not in remaining:
            continue
        match = re.search(rf"(\d+)?\s*{symbol}", remaining)
        if match:
            whole = int(match.group(1)) if match.group(1) else 0
            value += whole + fraction
            remaining = remaining.replace(match.group(0), " ", 1)

    for token in remaining.split():
        value += _parse_token(token)

    return value or 1.0


def format_number(value: float) -> str:
    """Format a plain number without trailing zeros (8.0 -> "8", 1.50 -> "1.5")."""
    if not math.isfinite(value):
        return str(value)
    if value == int(value):
        return str(int(value))
    return f"{value:.2f}".rstrip('0').rstrip('.')


def format_amount(value: float) -> str:
    """Format a scaled amount for display, preferring kitchen fractions.

    Examples:
        2.0 -> "2"
        0.5 -> "1/2"
        1.75 -> "1 3/4"
        0.93 -> "0.93"
        -1.5 -> "-1 1/2"
    """
    if value == 0:
        return "0"
    if not math.isfinite(value):
        return str(value)
    if value < 0:
        return "-" + format_amount(-value)

    whole = math.floor(value)
    decimal = value - whole

    closest = ""
    min_diff = FRACTION_TOLERANCE
    for target, display in DISPLAY_FRACTIONS:
        diff = abs(decimal - target)
        if diff < min_diff:
            min_diff = diff
            closest = display

    if closest and whole == 0:
        return closest
    if closest:
        return f"{whole} {closest}"
    if value == int(value):
        return str(int(value))

    precision = 2 if value < 1 else 1
    return f"{value:.{precision}f}".rstrip('0').rstrip('.')
