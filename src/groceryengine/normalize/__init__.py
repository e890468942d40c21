"""Normalize quantities, units and ingredient names into common forms."""

from groceryengine.normalize.fractions import (
    FRACTION_GLYPHS,
    render_quantity,
    resolve_fraction,
)
from groceryengine.normalize.names import (
    NameRules,
    clean_display_name,
    clean_line,
    normalize_name,
    split_note,
)
from groceryengine.normalize.units import (
    UNIT_SYNONYMS,
    CanonicalUnit,
    normalize_unit,
    units_compatible,
)

__all__ = [
    "FRACTION_GLYPHS",
    "UNIT_SYNONYMS",
    "CanonicalUnit",
    "NameRules",
    "clean_display_name",
    "clean_line",
    "normalize_name",
    "normalize_unit",
    "render_quantity",
    "resolve_fraction",
    "split_note",
    "units_compatible",
]
