"""Unit normalization to a canonical unit vocabulary."""

import re
from enum import Enum


class CanonicalUnit(str, Enum):
    """Canonical unit codes. Unitless ingredients carry no unit at all."""

    CUP = "cup"
    TBSP = "tbsp"
    TSP = "tsp"
    OZ = "oz"
    LB = "lb"
    G = "g"
    MG = "mg"
    KG = "kg"
    L = "L"
    ML = "mL"
    PIECE = "piece"
    PACKAGE = "package"
    CAN = "can"
    CLOVE = "clove"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Unit Synonym Table
# =============================================================================

# Lowercase synonym -> canonical unit
UNIT_SYNONYMS: dict[str, CanonicalUnit] = {
    # Volume
    "cup": CanonicalUnit.CUP,
    "cups": CanonicalUnit.CUP,
    "c": CanonicalUnit.CUP,
    "c.": CanonicalUnit.CUP,
    "tbsp": CanonicalUnit.TBSP,
    "tbsp.": CanonicalUnit.TBSP,
    "tbsps": CanonicalUnit.TBSP,
    "tbs": CanonicalUnit.TBSP,
    "tbs.": CanonicalUnit.TBSP,
    "tbl": CanonicalUnit.TBSP,
    "tbl.": CanonicalUnit.TBSP,
    "tablespoon": CanonicalUnit.TBSP,
    "tablespoons": CanonicalUnit.TBSP,
    "tsp": CanonicalUnit.TSP,
    "tsp.": CanonicalUnit.TSP,
    "tsps": CanonicalUnit.TSP,
    "teaspoon": CanonicalUnit.TSP,
    "teaspoons": CanonicalUnit.TSP,
    "l": CanonicalUnit.L,
    "l.": CanonicalUnit.L,
    "liter": CanonicalUnit.L,
    "liters": CanonicalUnit.L,
    "litre": CanonicalUnit.L,
    "litres": CanonicalUnit.L,
    "ml": CanonicalUnit.ML,
    "ml.": CanonicalUnit.ML,
    "milliliter": CanonicalUnit.ML,
    "milliliters": CanonicalUnit.ML,
    "millilitre": CanonicalUnit.ML,
    "millilitres": CanonicalUnit.ML,
    # Weight
    "oz": CanonicalUnit.OZ,
    "oz.": CanonicalUnit.OZ,
    "ounce": CanonicalUnit.OZ,
    "ounces": CanonicalUnit.OZ,
    "fl oz": CanonicalUnit.OZ,
    "fl. oz.": CanonicalUnit.OZ,
    "fluid ounce": CanonicalUnit.OZ,
    "fluid ounces": CanonicalUnit.OZ,
    "lb": CanonicalUnit.LB,
    "lb.": CanonicalUnit.LB,
    "lbs": CanonicalUnit.LB,
    "lbs.": CanonicalUnit.LB,
    "pound": CanonicalUnit.LB,
    "pounds": CanonicalUnit.LB,
    "g": CanonicalUnit.G,
    "g.": CanonicalUnit.G,
    "gr": CanonicalUnit.G,
    "gram": CanonicalUnit.G,
    "grams": CanonicalUnit.G,
    "gramme": CanonicalUnit.G,
    "grammes": CanonicalUnit.G,
    "mg": CanonicalUnit.MG,
    "milligram": CanonicalUnit.MG,
    "milligrams": CanonicalUnit.MG,
    "kg": CanonicalUnit.KG,
    "kgs": CanonicalUnit.KG,
    "kilo": CanonicalUnit.KG,
    "kilos": CanonicalUnit.KG,
    "kilogram": CanonicalUnit.KG,
    "kilograms": CanonicalUnit.KG,
    # Count
    "piece": CanonicalUnit.PIECE,
    "pieces": CanonicalUnit.PIECE,
    "pc": CanonicalUnit.PIECE,
    "pcs": CanonicalUnit.PIECE,
    "package": CanonicalUnit.PACKAGE,
    "packages": CanonicalUnit.PACKAGE,
    "pkg": CanonicalUnit.PACKAGE,
    "pkgs": CanonicalUnit.PACKAGE,
    "pack": CanonicalUnit.PACKAGE,
    "packs": CanonicalUnit.PACKAGE,
    "packet": CanonicalUnit.PACKAGE,
    "packets": CanonicalUnit.PACKAGE,
    "can": CanonicalUnit.CAN,
    "cans": CanonicalUnit.CAN,
    "tin": CanonicalUnit.CAN,
    "tins": CanonicalUnit.CAN,
    "clove": CanonicalUnit.CLOVE,
    "cloves": CanonicalUnit.CLOVE,
}

assert all(key == key.lower().strip() for key in UNIT_SYNONYMS)
assert all(unit.value.lower() in UNIT_SYNONYMS for unit in CanonicalUnit)


# =============================================================================
# Lookup Functions
# =============================================================================


def normalize_unit(
    unit: str | CanonicalUnit | None,
    synonyms: dict[str, CanonicalUnit] = UNIT_SYNONYMS,
) -> CanonicalUnit | None:
    """
    Map a unit string to its canonical unit.

    Lookup is case-insensitive and tolerant of inner whitespace
    ("Fl  Oz" -> oz). Returns None for empty or unknown units.
    """
    if unit is None:
        return None
    if isinstance(unit, CanonicalUnit):
        return unit

    key = " ".join(unit.lower().split())
    if not key:
        return None
    return synonyms.get(key)


def units_compatible(
    unit1: str | CanonicalUnit | None,
    unit2: str | CanonicalUnit | None,
    synonyms: dict[str, CanonicalUnit] = UNIT_SYNONYMS,
) -> bool:
    """
    Check if two units belong to the same compatibility class.

    Units are compatible when both resolve to the same canonical unit, or
    when both are absent. No numeric conversion is implied: cup and mL are
    never compatible.
    """
    return normalize_unit(unit1, synonyms) == normalize_unit(unit2, synonyms)


def unit_pattern(synonyms: dict[str, CanonicalUnit] = UNIT_SYNONYMS) -> str:
    """
    Build a regex alternation matching any unit synonym.

    Longer synonyms come first so "tbsp." wins over "tbsp" and "fl oz" over
    "fl". Inner spaces match any whitespace run.
    """
    keys = sorted(synonyms, key=len, reverse=True)
    return "|".join(r"\s+".join(re.escape(word) for word in key.split()) for key in keys)
