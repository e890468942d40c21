"""Scaling ingredient quantities to a new serving count."""

import math
from collections.abc import Sequence
from typing import TypeVar

from pydantic import BaseModel, Field

from groceryengine.logging_config import get_logger
from groceryengine.normalize.fractions import render_quantity
from groceryengine.parse.quantity import parse_ingredient
from groceryengine.schemas import IngredientBase, ParsedIngredient

logger = get_logger(__name__)

IngredientT = TypeVar("IngredientT", bound=IngredientBase)


class ScaledRecipe(BaseModel):
    """A recipe's ingredients scaled to a target serving count."""

    original_servings: float
    target_servings: float
    scale_factor: float
    ingredients: list[ParsedIngredient] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def scale_ingredient(
    ingredient: IngredientT,
    multiplier: float,
    round_to_nearest: float | None = None,
) -> IngredientT:
    """
    Scale an ingredient's quantity by a multiplier.

    Args:
        ingredient: The ingredient to scale. It is never modified.
        multiplier: Positive scale factor (target / original servings).
        round_to_nearest: Optional step to round the scaled value to, e.g. 0.25.

    Returns:
        A new ingredient carrying both the scaled numeric value and its
        rendered display string. Ingredients without a numeric quantity are
        returned as an unchanged copy.
    """
    if ingredient.quantity_numeric is None or multiplier == 1:
        return ingredient.model_copy()

    if not math.isfinite(multiplier) or multiplier <= 0:
        logger.warning(
            f"Ignoring invalid scale multiplier {multiplier} for {ingredient.item_name!r}"
        )
        return ingredient.model_copy()

    scaled = ingredient.quantity_numeric * multiplier
    if round_to_nearest and math.isfinite(round_to_nearest) and round_to_nearest > 0:
        steps = scaled / round_to_nearest
        if math.isfinite(steps):
            scaled = max(round_to_nearest, round(steps) * round_to_nearest)

    if not math.isfinite(scaled) or scaled <= 0:
        logger.warning(
            f"Scaled quantity {ingredient.quantity_numeric} x {multiplier} for "
            f"{ingredient.item_name!r} is out of range, keeping it unscaled"
        )
        return ingredient.model_copy()

    return ingredient.model_copy(
        update={"quantity": render_quantity(scaled), "quantity_numeric": scaled}
    )


def scale_recipe(
    ingredients: Sequence[ParsedIngredient | str],
    original_servings: float,
    target_servings: float,
    round_to_nearest: float | None = None,
    recipe_id: str | None = None,
) -> ScaledRecipe:
    """
    Scale every ingredient of a recipe from one serving count to another.

    Raw ingredient lines are parsed first. Ingredients without a numeric
    quantity are kept as-is and reported in the warnings list.
    """
    parsed: list[ParsedIngredient] = []
    for ingredient in ingredients:
        if isinstance(ingredient, str):
            result = parse_ingredient(ingredient, recipe_id)
            if result is not None:
                parsed.append(result)
        else:
            parsed.append(ingredient)

    warnings: list[str] = []
    valid_servings = all(
        math.isfinite(s) and s > 0 for s in (original_servings, target_servings)
    )
    if not valid_servings:
        warnings.append(
            f"Invalid serving counts ({original_servings} -> {target_servings}), "
            "recipe left unscaled"
        )
        logger.warning(warnings[-1])
        scale_factor = 1.0
    else:
        scale_factor = target_servings / original_servings

    scaled: list[ParsedIngredient] = []
    for ingredient in parsed:
        if not ingredient.has_quantity:
            label = ingredient.original_text or ingredient.item_name
            warnings.append(f"Could not scale ingredient: {label}")
        scaled.append(scale_ingredient(ingredient, scale_factor, round_to_nearest))

    logger.debug(
        f"Scaled {len(scaled)} ingredients by {scale_factor:.2f} "
        f"({original_servings} -> {target_servings} servings)"
    )

    return ScaledRecipe(
        original_servings=original_servings,
        target_servings=target_servings,
        scale_factor=scale_factor,
        ingredients=scaled,
        warnings=warnings,
    )
