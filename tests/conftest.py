"""
Shared fixtures for the platter test suite.

Randomness in the core is limited to picking pre-written lines, so every
test that cares about the exact line passes a seeded rng.
"""

import random

import pytest

from platter.classifier import classify_ingredients, summarize_ingredients

CHAOS_13 = [
    "brie", "cheddar", "salami", "prosciutto", "crackers", "grapes", "almonds",
    "olives", "figs", "honey", "pretzels", "baguette", "walnuts",
]
CHAOS_16 = CHAOS_13 + ["blueberries", "celery", "gouda"]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(0)


@pytest.fixture
def classic_board() -> list[str]:
    return ["brie", "crackers", "grapes"]


@pytest.fixture
def chaos_13() -> list[str]:
    return list(CHAOS_13)


@pytest.fixture
def chaos_16() -> list[str]:
    return list(CHAOS_16)


@pytest.fixture
def summarize():
    """Build an IngredientSummary from raw ingredient names."""

    def _summarize(*names: str):
        return summarize_ingredients(classify_ingredients(list(names)))

    return _summarize
