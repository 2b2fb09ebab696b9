"""Shared fixtures for the recipe analysis tests."""

import logging

import pytest
import structlog

from recipe_nutrition.logging_config import PACKAGE_LOGGER
from recipe_nutrition.models import IngredientRecord
from recipe_nutrition.recipe_analyzer import RecipeAnalyzer
from recipe_nutrition.reference_data import ReferenceData


@pytest.fixture(scope="session")
def packaged_data() -> ReferenceData:
    """Reference data shipped with the package."""
    return ReferenceData.load()


@pytest.fixture
def flour_record() -> IngredientRecord:
    return IngredientRecord(
        name="flour",
        aliases=("all-purpose flour",),
        nutrients_per_100g={"calories": 350, "protein": 10, "carbs": 75, "fat": 1, "sodium": 2},
    )


@pytest.fixture
def small_data(flour_record) -> ReferenceData:
    """Minimal in-memory reference data."""
    return ReferenceData(
        ingredients=(
            flour_record,
            IngredientRecord(name="brown sugar", nutrients_per_100g={"calories": 380, "sugars": 97}),
            IngredientRecord(name="sugar", nutrients_per_100g={"calories": 387, "sugars": 99.8}),
            IngredientRecord(name="chili pepper", aliases=("jalapeno", "chili"),
                             nutrients_per_100g={"calories": 40}),
        ),
        taste_table={"chili": ("spicy",), "cucumber": ("cooling",)},
        allergen_keywords={"wheat": ("flour",), "milk": ("milk",)},
        diet_exclusions={"vegan": ("milk",), "gluten_free": ("flour",)},
        cuisine_keywords={},
    )


@pytest.fixture
def analyzer(packaged_data) -> RecipeAnalyzer:
    """Local-only analyzer over the packaged reference data."""
    return RecipeAnalyzer(packaged_data)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging calls made by a test."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    structlog.reset_defaults()
