"""API routes for parsing, scaling and consolidating ingredients."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from groceryengine.logging_config import LoggingContext, get_logger
from groceryengine.parse.quantity import parse_ingredients
from groceryengine.plan.scaling import ScaledRecipe, scale_ingredient, scale_recipe
from groceryengine.plan.shopping_list import consolidate, format_ingredient
from groceryengine.schemas import ConsolidatedItem, ParsedIngredient

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class ParseRequest(BaseModel):
    """Raw ingredient lines from one recipe."""

    lines: list[str]
    recipe_id: str | None = None


class ScaleRequest(BaseModel):
    """Parsed ingredients and a scale multiplier."""

    ingredients: list[ParsedIngredient]
    multiplier: float = Field(gt=0)


class ScaleRecipeRequest(BaseModel):
    """Raw recipe lines and serving counts."""

    lines: list[str]
    original_servings: float = Field(gt=0)
    target_servings: float = Field(gt=0)
    round_to_nearest: float | None = Field(None, gt=0, description="e.g. 0.25 for quarters")
    recipe_id: str | None = None


class ConsolidateRequest(BaseModel):
    """Parsed ingredients from one or more recipes."""

    ingredients: list[ParsedIngredient]


class ConsolidateResponse(BaseModel):
    """Consolidated grocery list with display lines."""

    items: list[ConsolidatedItem]
    display: list[str]


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/parse", response_model=list[ParsedIngredient])
async def parse_lines(request: ParseRequest) -> list[ParsedIngredient]:
    """Parse ingredient lines, skipping blank ones."""
    with LoggingContext(recipe_id=request.recipe_id):
        return parse_ingredients(request.lines, request.recipe_id)


@router.post("/scale", response_model=list[ParsedIngredient])
async def scale(request: ScaleRequest) -> list[ParsedIngredient]:
    """Scale parsed ingredients by a multiplier."""
    return [scale_ingredient(ing, request.multiplier) for ing in request.ingredients]


@router.post("/scale-recipe", response_model=ScaledRecipe)
async def scale_recipe_lines(request: ScaleRecipeRequest) -> ScaledRecipe:
    """Parse and scale a recipe to a new serving count."""
    with LoggingContext(recipe_id=request.recipe_id):
        return scale_recipe(
            request.lines,
            request.original_servings,
            request.target_servings,
            round_to_nearest=request.round_to_nearest,
            recipe_id=request.recipe_id,
        )


@router.post("/consolidate", response_model=ConsolidateResponse)
async def consolidate_ingredients(request: ConsolidateRequest) -> ConsolidateResponse:
    """Merge equivalent ingredients into a grocery list."""
    items = consolidate(request.ingredients)
    logger.info(f"Consolidated {len(request.ingredients)} ingredients into {len(items)} items")
    return ConsolidateResponse(
        items=items,
        display=[format_ingredient(item) for item in items],
    )
