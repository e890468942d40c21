"""Grocery list consolidation across recipes."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from groceryengine.config import get_settings
from groceryengine.logging_config import get_logger
from groceryengine.matching import is_similar
from groceryengine.normalize.fractions import render_quantity
from groceryengine.normalize.names import normalize_name
from groceryengine.normalize.units import CanonicalUnit, normalize_unit, units_compatible
from groceryengine.schemas import ConsolidatedItem, IngredientBase, ParsedIngredient

logger = get_logger(__name__)

# Appended to an entry's name when duplicates could not be summed
NON_SUMMABLE_SUFFIX = " (multiple recipes)"


@dataclass
class ConsolidationBucket:
    """An in-progress grocery list entry accumulating merged ingredients."""

    item_name: str
    normalized_name: str
    quantity: str
    quantity_numeric: float | None
    unit: CanonicalUnit | None
    original_text: str
    note: str | None
    recipe_ids: list[str] = field(default_factory=list)
    unsummed_quantities: list[str] = field(default_factory=list)
    sources: list[ParsedIngredient] = field(default_factory=list)
    flagged: bool = False

    @classmethod
    def start(cls, ingredient: ParsedIngredient, normalized_name: str) -> "ConsolidationBucket":
        """Open a bucket with its first ingredient."""
        return cls(
            item_name=ingredient.item_name,
            normalized_name=normalized_name,
            quantity=ingredient.quantity,
            quantity_numeric=ingredient.quantity_numeric,
            unit=normalize_unit(ingredient.unit),
            original_text=ingredient.original_text,
            note=ingredient.note,
            recipe_ids=[ingredient.recipe_id] if ingredient.recipe_id else [],
            sources=[ingredient],
        )

    def accepts(
        self,
        normalized_name: str,
        unit: CanonicalUnit | None,
        threshold: float | None = None,
    ) -> bool:
        """Check if an ingredient with this key and unit belongs here."""
        return units_compatible(self.unit, unit) and is_similar(
            self.normalized_name, normalized_name, threshold
        )

    def merge(self, ingredient: ParsedIngredient) -> None:
        """Fold another ingredient into this bucket."""
        self.sources.append(ingredient)
        if ingredient.recipe_id and ingredient.recipe_id not in self.recipe_ids:
            self.recipe_ids.append(ingredient.recipe_id)

        if self.quantity_numeric is not None and ingredient.quantity_numeric is not None:
            total = self.quantity_numeric + ingredient.quantity_numeric
            if math.isfinite(total):
                self.quantity_numeric = total
                self.quantity = render_quantity(total)
                return

        if not self.flagged:
            self.item_name += NON_SUMMABLE_SUFFIX
            self.flagged = True
        if ingredient.quantity:
            self.unsummed_quantities.append(
                format_ingredient(ingredient, include_unit=True, include_item=False)
            )

    def freeze(self) -> ConsolidatedItem:
        """Snapshot the bucket as an immutable grocery list entry."""
        return ConsolidatedItem(
            item_name=self.item_name,
            normalized_name=self.normalized_name,
            quantity=self.quantity,
            quantity_numeric=self.quantity_numeric,
            unit=self.unit,
            original_text=self.original_text,
            note=self.note,
            recipe_ids=list(self.recipe_ids),
            merged_count=len(self.sources),
            unsummed_quantities=list(self.unsummed_quantities),
            sources=list(self.sources),
        )


def consolidate(
    ingredients: Iterable[ParsedIngredient | None],
    threshold: float | None = None,
    max_items: int | None = None,
) -> list[ConsolidatedItem]:
    """
    Merge equivalent ingredients from one or more recipes.

    Each ingredient joins the first existing entry whose normalized name is
    equal or similar and whose unit is compatible. Quantities are summed when
    both sides are numeric; otherwise the entry is flagged and the extra
    quantity is kept in ``unsummed_quantities``. The result is deterministic
    and follows input order.

    Args:
        ingredients: Parsed ingredients; None entries (blank lines) are skipped.
        threshold: Similarity threshold; defaults to the configured value.
        max_items: Inputs beyond this count are appended without merging.

    Returns:
        Consolidated grocery list entries.
    """
    settings = get_settings()
    if max_items is None:
        max_items = settings.max_consolidation_items

    buckets: list[ConsolidationBucket] = []
    seen = 0
    passed_through = 0

    for ingredient in ingredients:
        if ingredient is None:
            continue
        seen += 1

        normalized = normalize_name(ingredient.item_name) or ingredient.item_name.lower().strip()

        if seen > max_items:
            passed_through += 1
            buckets.append(ConsolidationBucket.start(ingredient, normalized))
            continue

        unit = normalize_unit(ingredient.unit)
        bucket = next((b for b in buckets if b.accepts(normalized, unit, threshold)), None)
        if bucket is None:
            buckets.append(ConsolidationBucket.start(ingredient, normalized))
        else:
            bucket.merge(ingredient)

    if passed_through:
        logger.warning(
            f"Consolidation limited to {max_items} ingredients, "
            f"{passed_through} appended without merging"
        )

    logger.debug(f"Consolidated {seen} ingredients into {len(buckets)} entries")
    return [bucket.freeze() for bucket in buckets]


def format_ingredient(
    ingredient: IngredientBase,
    include_unit: bool = True,
    include_item: bool = True,
) -> str:
    """
    Render an ingredient as "<quantity> <unit> <item>", omitting empty parts.

    Examples:
        "1½ cup flour", "3 eggs", "salt to taste"
    """
    parts = [ingredient.quantity]
    if include_unit and ingredient.unit is not None:
        parts.append(ingredient.unit.value)
    if include_item:
        parts.append(ingredient.item_name)
    return " ".join(part for part in parts if part)
