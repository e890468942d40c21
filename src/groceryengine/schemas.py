"""Ingredient records produced and consumed by the engine."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from groceryengine.normalize.fractions import render_quantity
from groceryengine.normalize.units import CanonicalUnit, normalize_unit


class IngredientBase(BaseModel):
    """Fields shared by parsed and consolidated ingredients."""

    model_config = ConfigDict(frozen=True)

    item_name: str
    quantity: str = ""
    quantity_numeric: float | None = None
    unit: CanonicalUnit | None = None
    original_text: str = ""
    note: str | None = Field(None, description="Parenthetical aside or preparation clause")

    @model_validator(mode="before")
    @classmethod
    def fill_quantity(cls, data: Any) -> Any:
        """Render the display quantity when only the numeric value was given."""
        if isinstance(data, dict) and not data.get("quantity"):
            numeric = data.get("quantity_numeric")
            if isinstance(numeric, (int, float)) and math.isfinite(numeric) and numeric > 0:
                data = {**data, "quantity": render_quantity(float(numeric))}
        return data

    @field_validator("unit", mode="before")
    @classmethod
    def canonical_unit(cls, value: Any) -> Any:
        """Map unit synonyms to canonical codes; unknown strings are rejected."""
        if value is None or isinstance(value, CanonicalUnit):
            return value
        if isinstance(value, str):
            if not value.strip():
                return None
            unit = normalize_unit(value)
            if unit is None:
                raise ValueError(f"Unknown unit: {value!r}")
            return unit
        return value

    @field_validator("quantity_numeric")
    @classmethod
    def positive_quantity(cls, value: float | None) -> float | None:
        """Zero, negative and non-finite amounts mean "no numeric quantity"."""
        if value is None or not math.isfinite(value) or value <= 0:
            return None
        return value

    @property
    def has_quantity(self) -> bool:
        """Check if a numeric quantity was recovered."""
        return self.quantity_numeric is not None


class ParsedIngredient(IngredientBase):
    """A single ingredient line split into quantity, unit and item."""

    recipe_id: str | None = None


class ConsolidatedItem(IngredientBase):
    """A grocery list entry merged from one or more parsed ingredients."""

    normalized_name: str
    recipe_ids: list[str] = Field(default_factory=list)
    merged_count: int = 1
    unsummed_quantities: list[str] = Field(
        default_factory=list,
        description="Quantities of merged duplicates that could not be summed",
    )
    sources: list[ParsedIngredient] = Field(default_factory=list)

    @computed_field
    @property
    def recipe_id(self) -> str | None:
        """Provenance joined into a single string."""
        return ", ".join(self.recipe_ids) or None
