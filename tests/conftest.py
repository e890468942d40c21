"""Pytest configuration and shared fixtures."""

import pytest

from groceryengine.config import get_settings
from groceryengine.parse.quantity import IngredientParser, ParserVocabulary
from groceryengine.schemas import ParsedIngredient

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "api: marks tests that exercise the HTTP surface")


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def vocab():
    """Default parser vocabulary."""
    return ParserVocabulary()


@pytest.fixture
def parser():
    """Parser with the default strategy chain."""
    return IngredientParser()


@pytest.fixture
def fresh_settings():
    """Clear the cached settings before and after a test that changes env vars."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def pancake_lines():
    """Sample ingredient lines from a pancake recipe."""
    return [
        "1 1/2 cups flour",
        "2 large eggs",
        "½ tsp salt",
        "",
        "1 1/4 cups milk",
        "butter (for the pan)",
    ]


@pytest.fixture
def bread_lines():
    """Sample ingredient lines from a bread recipe."""
    return [
        "3 cups Flour (sifted)",
        "1 tsp salt",
        "1 package yeast",
        "1 cup warm water",
    ]


@pytest.fixture
def sugar_cup():
    """Half a cup of sugar."""
    return ParsedIngredient(item_name="sugar", quantity_numeric=0.5, unit="cup")
