"""Tests for unit conversion and nutrition aggregation."""

import pytest

from recipe_nutrition.models import IngredientRecord, ParsedIngredientLine, TRACKED_NUTRIENTS
from recipe_nutrition.nutritional_analyzer import NutritionAggregator, round_half_up
from recipe_nutrition.unit_converter import DensityUnitConverter, UnitConverter


class RecordingConverter(UnitConverter):
    """Converter that records its calls and returns a fixed weight."""

    def __init__(self, grams: float = 100.0):
        self.grams = grams
        self.calls = []

    def to_grams(self, quantity, unit, item_hint=""):
        self.calls.append((quantity, unit, item_hint))
        return self.grams


# ═══════════════════════════════════════════════════════════
# UNIT CONVERSION
# ═══════════════════════════════════════════════════════════


def test_weight_units():
    converter = DensityUnitConverter()

    assert converter.to_grams(250, "g") == 250
    assert converter.to_grams(1.5, "kg") == 1500
    assert converter.to_grams(1, "lb") == pytest.approx(453.592)
    assert converter.to_grams(2, "oz") == pytest.approx(56.699)


def test_volume_units_use_ingredient_density():
    converter = DensityUnitConverter()

    assert converter.to_grams(2, "cup", "flour") == pytest.approx(2 * 236.59 * 0.53)
    assert converter.to_grams(1, "tbsp", "olive oil") == pytest.approx(14.79 * 0.91)
    assert converter.to_grams(1, "cup", "whole milk") == pytest.approx(236.59 * 1.03)
    assert converter.to_grams(1, "tsp", "paprika") == pytest.approx(4.93 * 0.8)
    assert converter.to_grams(1, "cup", "water") == pytest.approx(236.59 * 0.8)


def test_plural_units():
    converter = DensityUnitConverter()

    assert converter.to_grams(2, "cups", "rice") == converter.to_grams(2, "cup", "rice")


def test_unknown_or_missing_unit_is_grams():
    converter = DensityUnitConverter()

    assert converter.to_grams(5, "", "egg") == 5
    assert converter.to_grams(3, "pinch", "salt") == 3


def test_zero_quantity():
    converter = DensityUnitConverter()

    assert converter.to_grams(0, "cup", "flour") == 0
    assert converter.to_grams(0, "", "") == 0


# ═══════════════════════════════════════════════════════════
# AGGREGATION
# ═══════════════════════════════════════════════════════════


def test_round_half_up():
    assert round_half_up(0.25) == 0.3
    assert round_half_up(1.75) == 1.8
    assert round_half_up(233.3333) == 233.3
    assert round_half_up(0.0) == 0.0


def test_per_serving_totals(flour_record):
    aggregator = NutritionAggregator(DensityUnitConverter())
    lines = [(ParsedIngredientLine(quantity=200, unit="g", item="flour"), flour_record)]

    nutrition = aggregator.aggregate(lines, servings=3)

    assert list(nutrition) == list(TRACKED_NUTRIENTS)
    assert nutrition["calories"] == 233.3
    assert nutrition["protein"] == 6.7
    assert nutrition["carbs"] == 50.0
    assert nutrition["fat"] == 0.7
    assert nutrition["sodium"] == 1.3
    assert nutrition["vitaminD"] == 0.0


def test_unmatched_lines_contribute_nothing(flour_record):
    aggregator = NutritionAggregator(DensityUnitConverter())
    lines = [
        (ParsedIngredientLine(quantity=100, unit="g", item="flour"), flour_record),
        (ParsedIngredientLine(quantity=500, unit="g", item="saffron"), None),
    ]

    assert aggregator.aggregate(lines, servings=1)["calories"] == 350.0


def test_missing_quantity_and_unit_defaults(flour_record):
    converter = RecordingConverter(grams=0.0)
    aggregator = NutritionAggregator(converter)

    aggregator.aggregate([(ParsedIngredientLine(item="flour"), flour_record)], servings=1)

    assert converter.calls == [(0, "g", "flour")]


@pytest.mark.parametrize("servings", [0, -2, None])
def test_servings_below_one_count_as_one(flour_record, servings):
    aggregator = NutritionAggregator(RecordingConverter(grams=100.0))
    lines = [(ParsedIngredientLine(quantity=1, unit="g", item="flour"), flour_record)]

    assert aggregator.aggregate(lines, servings)["calories"] == 350.0


@pytest.mark.parametrize("servings", [1, 2, 3, 4, 6, 7])
def test_per_serving_matches_rounded_total(flour_record, servings):
    aggregator = NutritionAggregator(DensityUnitConverter())
    lines = [
        (ParsedIngredientLine(quantity=1.5, unit="cup", item="flour"), flour_record),
        (ParsedIngredientLine(quantity=3, unit="tbsp", item="flour"), flour_record),
    ]

    totals = aggregator.totals(lines)
    nutrition = aggregator.aggregate(lines, servings)

    for nutrient in TRACKED_NUTRIENTS:
        assert nutrition[nutrient] == round_half_up(totals[nutrient] / servings)


def test_negative_reference_values_are_clamped():
    record = IngredientRecord(name="odd", nutrients_per_100g={"calories": -50})
    aggregator = NutritionAggregator(RecordingConverter(grams=100.0))

    nutrition = aggregator.aggregate([(ParsedIngredientLine(quantity=1, item="odd"), record)], 1)

    assert nutrition["calories"] == 0.0
