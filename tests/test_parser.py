"""Tests for ingredient line parsing."""

import pytest

from groceryengine.normalize.units import UNIT_SYNONYMS, CanonicalUnit
from groceryengine.parse.quantity import (
    DEFAULT_STRATEGIES,
    IngredientParser,
    ParserVocabulary,
    match_compact_fraction,
    match_mixed_number,
    match_plain_quantity,
    match_trailing_quantity,
    match_whole_line,
    parse_ingredient,
    parse_ingredients,
)

# =============================================================================
# Strategy Tests
# =============================================================================


class TestStrategies:
    """Tests for each extraction strategy in isolation."""

    def test_default_order(self):
        """Test the strategy chain order."""
        assert DEFAULT_STRATEGIES == (
            match_mixed_number,
            match_compact_fraction,
            match_plain_quantity,
            match_trailing_quantity,
            match_whole_line,
        )

    def test_mixed_number(self, vocab):
        """Test mixed numbers with a unit."""
        match = match_mixed_number("1 1/2 cups flour", vocab)
        assert match.quantity == "1 1/2"
        assert match.unit == "cups"
        assert match.rest == "flour"

    def test_mixed_number_with_glyph(self, vocab):
        """Test a whole number followed by a glyph."""
        match = match_mixed_number("2 ½ tbsp sugar", vocab)
        assert match.quantity == "2 ½"
        assert match.unit == "tbsp"

    def test_mixed_number_rejects_plain(self, vocab):
        """Test plain quantities are left to later strategies."""
        assert match_mixed_number("2 cups flour", vocab) is None
        assert match_mixed_number("1 10 oz can tomatoes", vocab) is None

    def test_compact_fraction(self, vocab):
        """Test glyphs glued to numbers and hyphenated mixed numbers."""
        assert match_compact_fraction("1½ cups sugar", vocab).quantity == "1½"
        assert match_compact_fraction("½ tsp salt", vocab).quantity == "½"
        assert match_compact_fraction("1-1/2 cups milk", vocab).quantity == "1-1/2"
        assert match_compact_fraction("2-3 cloves garlic", vocab) is None

    def test_compact_fraction_range(self, vocab):
        """Test ranges whose lower bound is a glyph."""
        match = match_compact_fraction("½-1 cup milk", vocab)
        assert match.quantity == "½-1"
        assert match.unit == "cup"
        assert match.rest == "milk"
        assert match_compact_fraction("1½ to 2 cups flour", vocab).quantity == "1½ to 2"
        assert match_compact_fraction("½ tomato", vocab).rest == "tomato"

    def test_plain_quantity(self, vocab):
        """Test integers, decimals, fractions and ranges."""
        assert match_plain_quantity("2 cups flour", vocab).quantity == "2"
        assert match_plain_quantity("1.5 kg potatoes", vocab).quantity == "1.5"
        assert match_plain_quantity("3 / 4 cup sugar", vocab).quantity == "3/4"
        assert match_plain_quantity("2-3 cloves garlic", vocab).quantity == "2-3"
        assert match_plain_quantity("salt", vocab) is None

    def test_plain_quantity_without_unit(self, vocab):
        """Test unit-like prefixes of item words are not units."""
        match = match_plain_quantity("2 garlic cloves", vocab)
        assert match.unit is None
        assert match.rest == "garlic cloves"

    def test_compact_unit(self, vocab):
        """Test a unit glued to the number."""
        match = match_plain_quantity("500g chicken breast", vocab)
        assert match.quantity == "500"
        assert match.unit == "g"
        assert match.rest == "chicken breast"

    def test_trailing_quantity(self, vocab):
        """Test quantities written after the item."""
        match = match_trailing_quantity("flour 2 cups", vocab)
        assert match.quantity == "2"
        assert match.unit == "cups"
        assert match.rest == "flour"

        match = match_trailing_quantity("Eggs 3", vocab)
        assert match.quantity == "3"
        assert match.unit is None
        assert match.rest == "Eggs"

        assert match_trailing_quantity("sugar 1 1/2 cups", vocab).quantity == "1 1/2"
        assert match_trailing_quantity("butter ½ cup", vocab).quantity == "½"

    def test_trailing_quantity_needs_number_at_end(self, vocab):
        """Test lines without a final quantity are left alone."""
        assert match_trailing_quantity("salt to taste", vocab) is None
        assert match_trailing_quantity("pasta sauce 1 jar", vocab) is None
        assert match_trailing_quantity("vitamin B12", vocab) is None

    def test_whole_line(self, vocab):
        """Test the fallback strategy."""
        match = match_whole_line("salt to taste", vocab)
        assert match.quantity == ""
        assert match.unit is None
        assert match.rest == "salt to taste"


# =============================================================================
# Parser Tests
# =============================================================================


class TestParseIngredient:
    """Tests for parse_ingredient function."""

    def test_blank_lines(self):
        """Test blank input yields no record."""
        assert parse_ingredient("") is None
        assert parse_ingredient("   ") is None
        assert parse_ingredient(None) is None
        assert parse_ingredient("<br>") is None

    def test_mixed_number_with_unit(self):
        """Test '1 1/2 cups flour'."""
        result = parse_ingredient("1 1/2 cups flour")
        assert result.quantity == "1 1/2"
        assert result.quantity_numeric == 1.5
        assert result.unit == "cup"
        assert "flour" in result.item_name

    def test_glyphs(self):
        """Test unicode fractions."""
        result = parse_ingredient("1½ cups sugar")
        assert result.quantity_numeric == 1.5
        assert result.unit == CanonicalUnit.CUP

        result = parse_ingredient("½ tsp salt")
        assert result.quantity_numeric == 0.5
        assert result.unit == CanonicalUnit.TSP
        assert result.item_name == "salt"

    def test_no_unit(self):
        """Test counted items without a unit."""
        result = parse_ingredient("2 large eggs")
        assert result.quantity_numeric == 2.0
        assert result.unit is None
        assert result.item_name == "large eggs"

    def test_abbreviated_units(self):
        """Test abbreviations with periods."""
        result = parse_ingredient("2 c. milk")
        assert result.unit == CanonicalUnit.CUP
        assert result.item_name == "milk"

        result = parse_ingredient("12 oz. bacon")
        assert result.unit == CanonicalUnit.OZ
        assert result.item_name == "bacon"

        result = parse_ingredient("3 Tablespoons olive oil")
        assert result.unit == CanonicalUnit.TBSP

    def test_prep_note(self):
        """Test trailing prep clauses move to the note."""
        result = parse_ingredient("3 cloves garlic, minced")
        assert result.unit == CanonicalUnit.CLOVE
        assert result.item_name == "garlic"
        assert result.note == "minced"

    def test_parenthetical_note(self):
        """Test parenthetical asides move to the note."""
        result = parse_ingredient("1 can (14 oz) diced tomatoes")
        assert result.quantity_numeric == 1.0
        assert result.unit == CanonicalUnit.CAN
        assert result.item_name == "diced tomatoes"
        assert result.note == "14 oz"

    def test_range(self):
        """Test ranges average their bounds."""
        result = parse_ingredient("2-3 cloves garlic")
        assert result.quantity == "2-3"
        assert result.quantity_numeric == 2.5

    @pytest.mark.parametrize(
        ("line", "quantity", "numeric", "unit", "item"),
        [
            ("½-1 cup milk", "½-1", 0.75, CanonicalUnit.CUP, "milk"),
            ("1½-2 cups flour", "1½-2", 1.75, CanonicalUnit.CUP, "flour"),
            ("¼ to ½ tsp salt", "¼ to ½", 0.375, CanonicalUnit.TSP, "salt"),
        ],
    )
    def test_glyph_ranges(self, line, quantity, numeric, unit, item):
        """Test ranges starting with a fraction glyph."""
        result = parse_ingredient(line)
        assert result.quantity == quantity
        assert result.quantity_numeric == pytest.approx(numeric)
        assert result.unit == unit
        assert result.item_name == item

    def test_trailing_quantity(self):
        """Test item-first lines recover their quantity and unit."""
        result = parse_ingredient("Flour 2 cups", recipe_id="r1")
        assert result.item_name == "Flour"
        assert result.quantity == "2"
        assert result.quantity_numeric == 2.0
        assert result.unit == CanonicalUnit.CUP
        assert result.recipe_id == "r1"

        result = parse_ingredient("diced tomatoes 14 oz")
        assert result.item_name == "diced tomatoes"
        assert result.unit == CanonicalUnit.OZ

    def test_fraction_slash(self):
        """Test the unicode fraction slash."""
        result = parse_ingredient("1⁄2 cup milk")
        assert result.quantity_numeric == 0.5

    def test_no_quantity(self):
        """Test lines without a quantity."""
        result = parse_ingredient("salt to taste")
        assert result.quantity == ""
        assert result.quantity_numeric is None
        assert result.unit is None
        assert result.item_name == "salt to taste"

    def test_no_quantity_with_note(self):
        """Test unquantified lines still get display cleanup."""
        result = parse_ingredient("butter (for the pan)")
        assert result.item_name == "butter"
        assert result.note == "for the pan"
        assert result.quantity_numeric is None

    def test_original_text_preserved(self):
        """Test the raw line is kept verbatim."""
        raw = "  - 2 cups Flour  "
        result = parse_ingredient(raw, recipe_id="r1")
        assert result.original_text == raw
        assert result.item_name == "Flour"
        assert result.recipe_id == "r1"

    def test_zero_quantity_falls_back(self):
        """Test unusable quantities degrade to plain text."""
        result = parse_ingredient("1/0 cup sugar")
        assert result.item_name == "1/0 cup sugar"
        assert result.quantity == ""
        assert result.quantity_numeric is None
        assert result.unit is None

    def test_quantity_without_item_falls_back(self):
        """Test lines with nothing after the unit keep their text."""
        result = parse_ingredient("2 cups")
        assert result.item_name == "2 cups"
        assert result.quantity_numeric is None


class TestIngredientParser:
    """Tests for parser configuration."""

    def test_strategy_errors_are_contained(self):
        """Test a failing strategy yields the fallback record."""

        def broken(text, vocab):
            raise RuntimeError("boom")

        parser = IngredientParser(strategies=[broken])
        result = parser.parse(" 2 cups flour ", recipe_id="r1")
        assert result.item_name == "2 cups flour"
        assert result.quantity == ""
        assert result.unit is None
        assert result.original_text == " 2 cups flour "
        assert result.recipe_id == "r1"

    def test_reordered_strategies(self):
        """Test strategies can be reordered."""
        parser = IngredientParser(strategies=[match_whole_line, match_plain_quantity])
        result = parser.parse("2 cups flour")
        assert result.item_name == "2 cups flour"
        assert result.quantity_numeric is None

    def test_empty_chain_uses_whole_line(self):
        """Test an empty strategy list still produces a record."""
        result = IngredientParser(strategies=[]).parse("2 cups flour")
        assert result.item_name == "2 cups flour"

    def test_match_reports_strategy(self, parser):
        """Test the winning strategy is reported."""
        assert parser.match("1 1/2 cups flour").strategy == "mixed_number"
        assert parser.match("1½ cups flour").strategy == "compact_fraction"
        assert parser.match("2 cups flour").strategy == "plain_quantity"
        assert parser.match("flour 2 cups").strategy == "trailing_quantity"
        assert parser.match("salt").strategy == "whole_line"

    def test_injected_vocabulary(self):
        """Test extra unit synonyms."""
        vocab = ParserVocabulary(unit_synonyms={**UNIT_SYNONYMS, "handful": CanonicalUnit.PIECE})
        result = IngredientParser(vocabulary=vocab).parse("2 handful spinach")
        assert result.unit == CanonicalUnit.PIECE
        assert result.item_name == "spinach"

    def test_default_vocabulary_leaves_unknown_units_in_name(self, parser):
        """Test unknown unit words stay in the item name."""
        result = parser.parse("2 handful spinach")
        assert result.unit is None
        assert result.item_name == "handful spinach"


class TestParseIngredients:
    """Tests for batch parsing."""

    def test_blank_lines_skipped(self, pancake_lines):
        """Test blank lines are dropped and order kept."""
        results = parse_ingredients(pancake_lines, recipe_id="pancakes")
        assert [r.item_name for r in results] == [
            "flour",
            "large eggs",
            "salt",
            "milk",
            "butter",
        ]
        assert all(r.recipe_id == "pancakes" for r in results)

    @pytest.mark.parametrize("line", ["2 cups flour", "salt", "1/0 cup", "(((", "½"])
    def test_never_raises(self, line):
        """Test odd lines always produce a record."""
        assert parse_ingredient(line) is not None
