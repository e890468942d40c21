"""Fraction resolution and quantity rendering."""

import math
import re
from decimal import ROUND_DOWN, Decimal, InvalidOperation

from groceryengine.config import get_settings

# =============================================================================
# Fraction Tables
# =============================================================================

# Unicode vulgar fractions -> decimal value
FRACTION_GLYPHS: dict[str, float] = {
    "⅛": 1 / 8,
    "¼": 1 / 4,
    "⅜": 3 / 8,
    "½": 1 / 2,
    "⅝": 5 / 8,
    "¾": 3 / 4,
    "⅞": 7 / 8,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "⅙": 1 / 6,
    "⅚": 5 / 6,
    "⅕": 1 / 5,
    "⅖": 2 / 5,
    "⅗": 3 / 5,
    "⅘": 4 / 5,
}

assert all(len(glyph) == 1 and 0 < value < 1 for glyph, value in FRACTION_GLYPHS.items())

# U+2044 FRACTION SLASH is used by some recipe sites instead of "/"
_FRACTION_SLASH = "⁄"

_HYPHEN_MIXED = re.compile(r"^(\d+)-(\d+/\d+)$")
_RANGE = re.compile(r"^(\S+?)\s*(?:-|–|\bto\b)\s*(\S+)$", re.IGNORECASE)


def glyph_class(glyphs: dict[str, float] = FRACTION_GLYPHS) -> str:
    """Regex character class matching any glyph in the table."""
    return "[" + "".join(re.escape(g) for g in glyphs) + "]"


# =============================================================================
# Resolving
# =============================================================================


def _resolve_simple(token: str, glyphs: dict[str, float]) -> float:
    """Resolve a single glyph, ASCII fraction, integer or decimal."""
    if token in glyphs:
        return glyphs[token]

    # Compact forms like "1½"
    if len(token) > 1 and token[-1] in glyphs and token[:-1].isdecimal():
        return int(token[:-1]) + glyphs[token[-1]]

    if "/" in token:
        numerator, _, denominator = token.partition("/")
        try:
            num = int(numerator)
            denom = int(denominator)
        except ValueError:
            return 0.0
        if denom == 0 or num < 0 or denom < 0:
            return 0.0
        return num / denom

    try:
        value = float(token)
    except ValueError:
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def resolve_fraction(token: str | None, glyphs: dict[str, float] = FRACTION_GLYPHS) -> float:
    """
    Resolve a quantity token to its decimal value.

    Handles formats like:
    - "3", "1.5"
    - "½", "1½"
    - "1/2", "1 1/2", "1-1/2"
    - "2-3", "2 to 3" (range, returns average)

    Unparseable input resolves to 0.0; callers treat zero as "no numeric
    quantity found".
    """
    if not token:
        return 0.0

    text = " ".join(token.replace(_FRACTION_SLASH, "/").split())
    if not text:
        return 0.0

    hyphen_mixed = _HYPHEN_MIXED.match(text)
    if hyphen_mixed:
        return int(hyphen_mixed.group(1)) + _resolve_simple(hyphen_mixed.group(2), glyphs)

    parts = text.split(" ")
    if len(parts) == 2 and parts[0].isdecimal():
        fractional = _resolve_simple(parts[1], glyphs)
        if fractional <= 0:
            return 0.0
        return int(parts[0]) + fractional

    range_match = _RANGE.match(text)
    if range_match:
        low = resolve_fraction(range_match.group(1), glyphs)
        high = resolve_fraction(range_match.group(2), glyphs)
        if low <= 0 or high <= 0:
            return 0.0
        return (low + high) / 2

    if len(parts) != 1:
        return 0.0

    return _resolve_simple(text, glyphs)


# =============================================================================
# Rendering
# =============================================================================


def _truncate_decimal(value: float) -> str:
    try:
        truncated = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_DOWN)
    except InvalidOperation:
        return str(value)
    if truncated == 0:
        # Too small for two places; keep two significant digits instead of "0"
        return format(value, ".2g")
    return format(truncated, "f").rstrip("0").rstrip(".")


def render_quantity(
    value: float,
    epsilon: float | None = None,
    glyphs: dict[str, float] = FRACTION_GLYPHS,
) -> str:
    """
    Render a numeric quantity as a human-readable string.

    Whole numbers render as integers, values close to a known fraction
    render with its glyph ("1½", "¾"), anything else as a decimal truncated
    to two places.
    """
    if not math.isfinite(value):
        return str(value)

    if epsilon is None:
        epsilon = get_settings().fraction_epsilon

    # Drop float noise first, 0.7 * 3 is 2.0999999999999996
    value = round(value, 9)

    if math.isclose(value, round(value), abs_tol=1e-9):
        return str(int(round(value)))

    whole = math.floor(value)
    remainder = value - whole

    glyph, glyph_value = min(glyphs.items(), key=lambda item: abs(remainder - item[1]))
    if abs(remainder - glyph_value) <= epsilon:
        return f"{whole}{glyph}" if whole >= 1 else glyph

    return _truncate_decimal(value)
