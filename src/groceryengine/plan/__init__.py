"""Recipe scaling and grocery list consolidation."""

from groceryengine.plan.scaling import ScaledRecipe, scale_ingredient, scale_recipe
from groceryengine.plan.shopping_list import (
    ConsolidationBucket,
    consolidate,
    format_ingredient,
)

__all__ = [
    "ConsolidationBucket",
    "ScaledRecipe",
    "consolidate",
    "format_ingredient",
    "scale_ingredient",
    "scale_recipe",
]
