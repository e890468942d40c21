"""Ingredient parsing, scaling and grocery list consolidation."""

from groceryengine.matching import is_similar, similarity
from groceryengine.normalize.units import CanonicalUnit
from groceryengine.parse.quantity import parse_ingredient, parse_ingredients
from groceryengine.plan.scaling import ScaledRecipe, scale_ingredient, scale_recipe
from groceryengine.plan.shopping_list import consolidate, format_ingredient
from groceryengine.schemas import ConsolidatedItem, ParsedIngredient

__version__ = "0.1.0"

__all__ = [
    "CanonicalUnit",
    "ConsolidatedItem",
    "ParsedIngredient",
    "ScaledRecipe",
    "consolidate",
    "format_ingredient",
    "is_similar",
    "parse_ingredient",
    "parse_ingredients",
    "scale_ingredient",
    "scale_recipe",
    "similarity",
]
