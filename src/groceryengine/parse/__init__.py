"""Parse free-text ingredient lines."""

from groceryengine.parse.quantity import (
    DEFAULT_STRATEGIES,
    IngredientParser,
    ParserVocabulary,
    QuantityMatch,
    parse_ingredient,
    parse_ingredients,
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "IngredientParser",
    "ParserVocabulary",
    "QuantityMatch",
    "parse_ingredient",
    "parse_ingredients",
]
