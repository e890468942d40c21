"""Quantity parsing of free-text ingredient lines."""

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from groceryengine.logging_config import get_logger
from groceryengine.normalize.fractions import FRACTION_GLYPHS, glyph_class, resolve_fraction
from groceryengine.normalize.names import DEFAULT_NAME_RULES, NameRules, clean_line, split_note
from groceryengine.normalize.units import UNIT_SYNONYMS, CanonicalUnit, normalize_unit, unit_pattern
from groceryengine.schemas import ParsedIngredient

logger = get_logger(__name__)


# =============================================================================
# Vocabulary and Matches
# =============================================================================


@dataclass(frozen=True)
class ParserVocabulary:
    """Lookup tables the extraction strategies match against."""

    unit_synonyms: dict[str, CanonicalUnit] = field(default_factory=lambda: UNIT_SYNONYMS)
    fraction_glyphs: dict[str, float] = field(default_factory=lambda: FRACTION_GLYPHS)

    @property
    def units(self) -> str:
        return unit_pattern(self.unit_synonyms)

    @property
    def glyphs(self) -> str:
        return glyph_class(self.fraction_glyphs)

    def tail(self) -> str:
        """Optional unit word followed by the rest of the line."""
        return (
            rf"(?:\s*(?P<unit>{self.units})(?=[\s,(]|$))?"
            r"\s*(?P<rest>.*)$"
        )


@dataclass(frozen=True)
class QuantityMatch:
    """Result of one extraction strategy."""

    quantity: str
    unit: str | None
    rest: str
    strategy: str


Strategy = Callable[[str, ParserVocabulary], QuantityMatch | None]


def _match(pattern: str, text: str, strategy: str) -> QuantityMatch | None:
    match = re.match(pattern, text, re.IGNORECASE)
    if not match:
        return None
    quantity = re.sub(r"\s*/\s*", "/", " ".join(match.group("quantity").split()))
    return QuantityMatch(
        quantity=quantity,
        unit=match.group("unit"),
        rest=match.group("rest").strip(),
        strategy=strategy,
    )


# =============================================================================
# Extraction Strategies (tried in order)
# =============================================================================


def _number(vocab: ParserVocabulary) -> str:
    """One quantity: glyph, compact glyph, ASCII fraction or decimal."""
    return rf"(?:\d*{vocab.glyphs}|\d+\s*/\s*\d+|\d+(?:\.\d+)?|\.\d+)"


_RANGE_JOINER = r"\s*(?:-|–|to)\s*"


def match_mixed_number(text: str, vocab: ParserVocabulary) -> QuantityMatch | None:
    """'1 1/2 cups flour', '2 ½ tbsp sugar', '1 .5 l milk'."""
    quantity = rf"(?P<quantity>\d+\s+(?:\d+\s*/\s*\d+|{vocab.glyphs}|\.\d+))(?![\d/])"
    return _match(quantity + vocab.tail(), text, "mixed_number")


def match_compact_fraction(text: str, vocab: ParserVocabulary) -> QuantityMatch | None:
    """'1½ cups flour', '½ tsp salt', '1-1/2 cups milk', '½-1 cup milk'."""
    glyph_range = rf"\d*{vocab.glyphs}(?:{_RANGE_JOINER}{_number(vocab)})?"
    quantity = rf"(?P<quantity>{glyph_range}|\d+-\d+/\d+)(?![\d/])"
    return _match(quantity + vocab.tail(), text, "compact_fraction")


def match_plain_quantity(text: str, vocab: ParserVocabulary) -> QuantityMatch | None:
    """'2 cups flour', '1.5 kg potatoes', '1/2 tsp salt', '2-3 cloves garlic'."""
    number = r"(?:\d+\s*/\s*\d+|\d+(?:\.\d+)?|\.\d+)"
    quantity = rf"(?P<quantity>{number}(?:{_RANGE_JOINER}{number})?)(?![\d/.])"
    return _match(quantity + vocab.tail(), text, "plain_quantity")


def match_trailing_quantity(text: str, vocab: ParserVocabulary) -> QuantityMatch | None:
    """'flour 2 cups', 'eggs 3', 'butter ½ cup'."""
    mixed = rf"\d+\s+(?:\d+\s*/\s*\d+|{vocab.glyphs})"
    pattern = (
        rf"(?P<rest>.*?[^\d\s/.])\s+"
        rf"(?P<quantity>(?:{mixed}|{_number(vocab)})(?:{_RANGE_JOINER}{_number(vocab)})?)"
        rf"(?:\s*(?P<unit>{vocab.units}))?\s*$"
    )
    return _match(pattern, text, "trailing_quantity")


def match_whole_line(text: str, vocab: ParserVocabulary) -> QuantityMatch | None:
    """Fallback: no quantity, no unit, the whole line is the item."""
    return QuantityMatch(quantity="", unit=None, rest=text.strip(), strategy="whole_line")


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    match_mixed_number,
    match_compact_fraction,
    match_plain_quantity,
    match_trailing_quantity,
    match_whole_line,
)


# =============================================================================
# Parser
# =============================================================================


class IngredientParser:
    """
    Parses ingredient lines into ParsedIngredient records.

    Strategies are tried in order; the first one returning a match wins.
    The parser holds only immutable configuration and is safe to share
    between threads.
    """

    def __init__(
        self,
        strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
        vocabulary: ParserVocabulary | None = None,
        name_rules: NameRules = DEFAULT_NAME_RULES,
    ):
        self.strategies = tuple(strategies)
        self.vocabulary = vocabulary or ParserVocabulary()
        self.name_rules = name_rules

    def match(self, text: str) -> QuantityMatch:
        """Run the strategy chain over a cleaned line."""
        for strategy in self.strategies:
            result = strategy(text, self.vocabulary)
            if result is not None:
                return result
        return match_whole_line(text, self.vocabulary)

    def parse(self, text: str | None, recipe_id: str | None = None) -> ParsedIngredient | None:
        """
        Parse a single ingredient line.

        Args:
            text: Raw ingredient line.
            recipe_id: Optional recipe the line belongs to.

        Returns:
            ParsedIngredient, or None for blank lines. Never raises.
        """
        if text is None or not text.strip():
            return None

        try:
            return self._parse(text, recipe_id)
        except Exception as e:
            logger.warning(f"Failed to parse ingredient {text!r}, keeping it as plain text: {e}")
            return self._fallback(text, recipe_id)

    def _parse(self, text: str, recipe_id: str | None) -> ParsedIngredient | None:
        cleaned = clean_line(text.replace("⁄", "/"))
        if not cleaned:
            return None

        match = self.match(cleaned)
        item_name, note = split_note(match.rest, self.name_rules)

        if not match.quantity:
            return ParsedIngredient(
                item_name=item_name or cleaned,
                original_text=text,
                recipe_id=recipe_id,
                note=note,
            )

        numeric = resolve_fraction(match.quantity, self.vocabulary.fraction_glyphs)
        if numeric <= 0 or not item_name:
            logger.debug(
                f"Strategy {match.strategy} matched {cleaned!r} without a usable "
                f"quantity or item, keeping it as plain text"
            )
            return self._fallback(text, recipe_id)

        return ParsedIngredient(
            item_name=item_name,
            quantity=match.quantity,
            quantity_numeric=numeric,
            unit=normalize_unit(match.unit, self.vocabulary.unit_synonyms),
            original_text=text,
            recipe_id=recipe_id,
            note=note,
        )

    @staticmethod
    def _fallback(text: str, recipe_id: str | None) -> ParsedIngredient:
        return ParsedIngredient(item_name=text.strip(), original_text=text, recipe_id=recipe_id)


# =============================================================================
# Module-level API
# =============================================================================

_default_parser = IngredientParser()


def parse_ingredient(text: str | None, recipe_id: str | None = None) -> ParsedIngredient | None:
    """Parse one ingredient line with the default vocabulary."""
    return _default_parser.parse(text, recipe_id)


def parse_ingredients(
    lines: Iterable[str],
    recipe_id: str | None = None,
) -> list[ParsedIngredient]:
    """Parse many lines, skipping blank ones."""
    parsed = [_default_parser.parse(line, recipe_id) for line in lines]
    results = [p for p in parsed if p is not None]
    logger.debug(f"Parsed {len(results)} ingredients from {len(parsed)} lines")
    return results
